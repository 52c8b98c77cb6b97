"""
Knucklebones.

Rules engine and computer opponent for the Knucklebones dice game.
"""

__version__ = "0.1.0"
