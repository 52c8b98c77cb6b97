"""
Knucklebones - Dice Sources

Random number sources for die rolls, coin flips and the easy opponent's
column pick.

SecureDiceSource reads the operating system CSPRNG through ``secrets`` and
maps bytes onto 1-6 with rejection sampling: 256 is not a multiple of 6,
so bytes 252-255 are discarded and redrawn. If the secure source is
unavailable it switches to a ``random.Random`` generator, which is still
uniform over the faces.
"""

import logging
import random
import secrets
from typing import Protocol, Sequence, TypeVar

from knucklebones.engine.base import DIE_FACES

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Largest multiple of 6 that fits in one byte
_BYTE_LIMIT = 256 - (256 % DIE_FACES)


class DiceSource(Protocol):
    """Anything that can roll a die, flip a coin and pick uniformly."""

    def roll_die(self) -> int: ...

    def flip_coin(self) -> bool: ...

    def choice(self, options: Sequence[T]) -> T: ...


def byte_to_face(byte: int) -> int | None:
    """
    Map one random byte onto a die face.

    Returns:
        A face 1-6, or None when the byte falls in the biased tail and must
        be redrawn
    """
    if byte >= _BYTE_LIMIT:
        return None
    return byte % DIE_FACES + 1


class SecureDiceSource:
    """
    Cryptographically strong dice with a uniform fallback.

    Args:
        fallback: Generator used when the OS source fails (defaults to a
            fresh random.Random)
    """

    def __init__(self, fallback: random.Random | None = None) -> None:
        self._fallback = fallback or random.Random()
        self._secure_available = True

    @property
    def is_secure(self) -> bool:
        """False once the source has fallen back to the weaker generator."""
        return self._secure_available

    def _read_byte(self) -> int | None:
        """One byte from the OS source, or None when it is unavailable."""
        if not self._secure_available:
            return None
        try:
            return secrets.token_bytes(1)[0]
        except (NotImplementedError, OSError):
            logger.warning(
                "Secure random source unavailable, falling back to random.Random",
                exc_info=True,
            )
            self._secure_available = False
            return None

    def roll_die(self) -> int:
        """Roll a D6."""
        while True:
            byte = self._read_byte()
            if byte is None:
                return self._fallback.randint(1, DIE_FACES)
            face = byte_to_face(byte)
            if face is not None:
                return face

    def flip_coin(self) -> bool:
        """Fair coin flip from the low bit of one byte."""
        byte = self._read_byte()
        if byte is None:
            return bool(self._fallback.getrandbits(1))
        return bool(byte & 1)

    def choice(self, options: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence."""
        if not options:
            raise ValueError("Cannot choose from an empty sequence")
        if self._secure_available:
            try:
                return options[secrets.randbelow(len(options))]
            except (NotImplementedError, OSError):
                logger.warning(
                    "Secure random source unavailable, falling back to random.Random",
                    exc_info=True,
                )
                self._secure_available = False
        return self._fallback.choice(options)


class SeededDiceSource:
    """
    Deterministic dice for simulations and reproducible games.

    Args:
        seed: Optional seed; None seeds from system entropy
    """

    def __init__(self, seed: int | None = None) -> None:
        self._random = random.Random(seed)

    def roll_die(self) -> int:
        """Roll a D6."""
        return self._random.randint(1, DIE_FACES)

    def flip_coin(self) -> bool:
        return bool(self._random.getrandbits(1))

    def choice(self, options: Sequence[T]) -> T:
        return self._random.choice(options)

    def set_seed(self, seed: int) -> None:
        """Reseed for reproducible results."""
        self._random.seed(seed)
