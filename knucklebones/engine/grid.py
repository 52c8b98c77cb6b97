"""
Knucklebones - Grid

One side's 3×3 placement area. Each column is a list of three slots that
fill from index 0 upward; a slot is either None or a die face 1-6.

Placing a die fills the first empty slot. Removing matching dice compacts
whatever is left back toward index 0, so the remaining dice do not keep
their original slot positions.
"""

from typing import Iterator, Sequence

from knucklebones.engine.base import GRID_COLUMNS, GRID_ROWS
from knucklebones.engine.validators import (
    validate_column_index,
    validate_column_slots,
    validate_die_value,
)

Column = tuple[int | None, ...]


class Grid:
    """
    Mutable 3×3 grid owned by one side.

    Every operation touches this grid only; the cross-grid "destroy"
    effect is applied by the turn engine calling remove_matching on the
    other side's grid.

    Example:
        Grid.from_columns([[4, 6], [1], [4, 4, 2]]) holds:
        Column 0: [4, 6, None]
        Column 1: [1, None, None]
        Column 2: [4, 4, 2]
    """

    __slots__ = ("_columns",)

    def __init__(self) -> None:
        self._columns: list[list[int | None]] = [
            [None] * GRID_ROWS for _ in range(GRID_COLUMNS)
        ]

    @classmethod
    def empty(cls) -> "Grid":
        """Create an empty grid."""
        return cls()

    @classmethod
    def from_columns(cls, columns: Sequence[Sequence[int | None]]) -> "Grid":
        """
        Build a grid from three column sequences.

        Raises:
            ValueError: If the layout is not 3 columns of valid, packed dice
        """
        if len(columns) != GRID_COLUMNS:
            raise ValueError(f"Grid must have exactly {GRID_COLUMNS} columns")
        grid = cls()
        grid._columns = [
            validate_column_slots(col, column_index=i) for i, col in enumerate(columns)
        ]
        return grid

    @classmethod
    def from_dict(cls, data: dict) -> "Grid":
        """Create a Grid from its dictionary format."""
        cols = data.get("columns", [[], [], []])
        return cls.from_columns(cols)

    def to_dict(self) -> dict:
        """Convert to dictionary format (filled values only, bottom-up)."""
        return {"columns": [list(self.values(i)) for i in range(GRID_COLUMNS)]}

    def copy(self) -> "Grid":
        """Independent copy of this grid."""
        grid = Grid()
        grid._columns = [list(col) for col in self._columns]
        return grid

    # -- Queries ---------------------------------------------------------

    @property
    def columns(self) -> tuple[Column, ...]:
        """All columns as tuples of slots."""
        return tuple(tuple(col) for col in self._columns)

    def column(self, column_index: int) -> Column:
        """Slots of a single column, index 0 first."""
        return tuple(self._columns[validate_column_index(column_index)])

    def values(self, column_index: int) -> tuple[int, ...]:
        """Filled values of a column, in slot order."""
        return tuple(v for v in self.column(column_index) if v is not None)

    def filled_count(self, column_index: int) -> int:
        """Number of dice in a column."""
        return len(self.values(column_index))

    def count(self, column_index: int, value: int) -> int:
        """How many dice in a column show the given face."""
        return self.column(column_index).count(value)

    def is_column_available(self, column_index: int) -> bool:
        """True if the column has at least one empty slot."""
        return None in self.column(column_index)

    def available_columns(self) -> list[int]:
        """Indices of columns with room, ascending."""
        return [i for i in range(GRID_COLUMNS) if self.is_column_available(i)]

    def is_full(self) -> bool:
        """True if every slot in every column holds a die."""
        return all(None not in col for col in self._columns)

    def is_empty(self) -> bool:
        return all(slot is None for col in self._columns for slot in col)

    def dice_count(self) -> int:
        """Total number of dice on the grid."""
        return sum(self.filled_count(i) for i in range(GRID_COLUMNS))

    # -- Mutations -------------------------------------------------------

    def place(self, column_index: int, value: int) -> bool:
        """
        Put a die in the first empty slot of a column.

        Args:
            column_index: Column to place in (0-2)
            value: Die face (1-6)

        Returns:
            True if placed, False if the column was already full

        Raises:
            ValueError: If the column index or die value is invalid
        """
        validate_die_value(value)
        col = self._columns[validate_column_index(column_index)]
        for slot_index, slot in enumerate(col):
            if slot is None:
                col[slot_index] = value
                return True
        return False

    def remove_matching(self, column_index: int, value: int) -> int:
        """
        Remove every die in a column that shows the given face.

        Remaining dice are compacted toward index 0.

        Returns:
            Number of dice removed
        """
        validate_die_value(value)
        col = self._columns[validate_column_index(column_index)]
        kept = [v for v in col if v is not None and v != value]
        removed = sum(1 for v in col if v == value)
        self._columns[column_index] = kept + [None] * (GRID_ROWS - len(kept))
        return removed

    def clear(self) -> None:
        """Empty every slot."""
        for col in self._columns:
            col[:] = [None] * GRID_ROWS

    # -- Dunder ----------------------------------------------------------

    def __iter__(self) -> Iterator[Column]:
        return iter(self.columns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self._columns == other._columns

    def __repr__(self) -> str:
        return f"Grid({[list(c) for c in self._columns]!r})"
