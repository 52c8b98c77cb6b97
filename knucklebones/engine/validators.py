"""
Knucklebones - Input Validation Utilities

Provides validation functions for grid and engine inputs. All validators
either return validated data or raise descriptive ValueError exceptions.
"""

from typing import Any, Sequence

from knucklebones.engine.base import DIE_FACES, GRID_COLUMNS, GRID_ROWS, Difficulty


def validate_die_value(value: int) -> int:
    """
    Validate a single die face.

    Args:
        value: Face value to validate

    Returns:
        Validated value

    Raises:
        ValueError: If value is not an integer between 1 and 6
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValueError(f"Die value must be an integer, got {type(value).__name__}.")
    if not (1 <= value <= DIE_FACES):
        raise ValueError(f"Die value must be 1-{DIE_FACES}, got {value}.")
    return value


def validate_column_index(column_index: int) -> int:
    """
    Validate a column index.

    Raises:
        ValueError: If index is outside 0-2
    """
    if not isinstance(column_index, int) or isinstance(column_index, bool):
        raise ValueError(
            f"Column index must be an integer, got {type(column_index).__name__}."
        )
    if not (0 <= column_index < GRID_COLUMNS):
        raise ValueError(f"Column index must be 0-{GRID_COLUMNS - 1}, got {column_index}.")
    return column_index


def is_valid_column_index(column_index: Any) -> bool:
    """Non-raising variant used by the engine's command guards."""
    try:
        validate_column_index(column_index)
    except ValueError:
        return False
    return True


def validate_column_slots(slots: Sequence[int | None], column_index: int = 0) -> list[int | None]:
    """
    Validate and normalize one column of a grid.

    Accepts either compact value lists ([4, 6]) or padded slot lists
    ([4, 6, None]). Values must be packed toward index 0, with no gap
    before a filled slot.

    Args:
        slots: Values or slots for the column
        column_index: Index used in error messages

    Returns:
        A list of exactly 3 slots, padded with None

    Raises:
        ValueError: If the column is too long, has gaps or holds invalid faces
    """
    slots = list(slots)
    if len(slots) > GRID_ROWS:
        raise ValueError(f"Column {column_index} has {len(slots)} slots (max {GRID_ROWS}).")

    seen_empty = False
    for slot in slots:
        if slot is None:
            seen_empty = True
            continue
        if seen_empty:
            raise ValueError(f"Column {column_index} has a die above an empty slot.")
        try:
            validate_die_value(slot)
        except ValueError as exc:
            raise ValueError(f"Invalid die value {slot!r} in column {column_index}.") from exc

    return slots + [None] * (GRID_ROWS - len(slots))


def validate_difficulty(level: Difficulty | str) -> Difficulty:
    """
    Coerce a difficulty given as an enum member or its string value.

    Raises:
        ValueError: If the level is not a known difficulty
    """
    if isinstance(level, Difficulty):
        return level
    if isinstance(level, str):
        try:
            return Difficulty(level.lower())
        except ValueError:
            pass
    valid = ", ".join(d.value for d in Difficulty)
    raise ValueError(f"Difficulty must be one of {valid}, got {level!r}.")
