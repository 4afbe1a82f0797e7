"""Grid host interface and an in-memory workbook.

The conversions only talk to a spreadsheet through ``GridHost``: read a
rectangular block of cell values, write one value into one cell. ``Workbook``
implements it in memory and can be loaded from Excel or CSV files with pandas.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple, Union
import re
import logging

import pandas as pd

from .utils.errors import EmptyInputError, InvalidReferenceError

log = logging.getLogger(__name__)

_A1_PATTERN = re.compile(r"^\$?([A-Za-z]{1,3})\$?([1-9][0-9]*)$")


class GridHost(Protocol):
    def read_grid(self, handle: Any) -> List[List[Any]]:
        ...

    def write_cell(self, row: int, col: int, value: Any) -> None:
        ...


def column_index(letters: str) -> int:
    """Convert column letters to a 0-based index ("A" -> 0, "AA" -> 26)."""
    index = 0
    for letter in letters.upper():
        index = index * 26 + (ord(letter) - ord("A") + 1)
    return index - 1


def column_letters(index: int) -> str:
    """Convert a 0-based column index to letters (0 -> "A")."""
    letters = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


@dataclass(frozen=True)
class CellRange:
    """Inclusive, 0-based block of cells."""
    row_first: int
    col_first: int
    row_last: Optional[int] = None
    col_last: Optional[int] = None

    def __post_init__(self):
        if self.row_last is None:
            object.__setattr__(self, "row_last", self.row_first)
        if self.col_last is None:
            object.__setattr__(self, "col_last", self.col_first)
        if min(self.row_first, self.col_first) < 0:
            raise InvalidReferenceError()
        if self.row_last < self.row_first or self.col_last < self.col_first:
            raise InvalidReferenceError()

    @classmethod
    def from_a1(cls, reference: str) -> "CellRange":
        """Parse "C3" or "B2:D4" style references."""
        corners = []
        for part in str(reference).strip().split(":"):
            match = _A1_PATTERN.match(part)
            if not match:
                raise InvalidReferenceError(f"Invalid range reference: {reference!r}.")
            corners.append((int(match.group(2)) - 1, column_index(match.group(1))))

        if len(corners) == 1:
            (row, col), = corners
            return cls(row, col)
        if len(corners) == 2:
            (row_a, col_a), (row_b, col_b) = corners
            return cls(min(row_a, row_b), min(col_a, col_b), max(row_a, row_b), max(col_a, col_b))
        raise InvalidReferenceError(f"Invalid range reference: {reference!r}.")

    @property
    def rows(self) -> int:
        return self.row_last - self.row_first + 1

    @property
    def columns(self) -> int:
        return self.col_last - self.col_first + 1

    @property
    def is_single_cell(self) -> bool:
        return self.rows == 1 and self.columns == 1

    def to_a1(self) -> str:
        first = f"{column_letters(self.col_first)}{self.row_first + 1}"
        if self.is_single_cell:
            return first
        return f"{first}:{column_letters(self.col_last)}{self.row_last + 1}"


class Workbook:
    """Sparse in-memory sheet implementing ``GridHost``."""

    def __init__(self, cells: Optional[Dict[Tuple[int, int], Any]] = None):
        self.cells: Dict[Tuple[int, int], Any] = dict(cells or {})
        self.writes: List[Tuple[int, int, Any]] = []

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Any]], origin_row: int = 0, origin_col: int = 0) -> "Workbook":
        workbook = cls()
        for r, row in enumerate(rows):
            for c, value in enumerate(row):
                workbook.cells[(origin_row + r, origin_col + c)] = value
        return workbook

    @classmethod
    def from_dataframe(cls, df: pd.DataFrame) -> "Workbook":
        """Load a frame read with ``header=None``; NaN cells stay empty."""
        rows = df.astype(object).where(df.notna(), None).values.tolist()
        return cls.from_rows(rows)

    @classmethod
    def from_file(cls, path: Union[str, Path], sheet_name: Optional[str] = None) -> "Workbook":
        path = Path(path)
        try:
            if path.suffix.lower() == ".csv":
                df = pd.read_csv(path, header=None, dtype=object, keep_default_na=False, na_values=[""])
            else:
                df = pd.read_excel(path, sheet_name=sheet_name or 0, header=None)
        except Exception as e:
            raise ValueError(f"Failed to read spreadsheet: {str(e)}") from e

        log.info("Loaded %s with shape %s", path.name, df.shape)
        return cls.from_dataframe(df)

    def read_grid(self, handle: Any) -> List[List[Any]]:
        if not isinstance(handle, CellRange):
            raise InvalidReferenceError()
        return [
            [self.cells.get((row, col)) for col in range(handle.col_first, handle.col_last + 1)]
            for row in range(handle.row_first, handle.row_last + 1)
        ]

    def write_cell(self, row: int, col: int, value: Any) -> None:
        self.cells[(row, col)] = value
        self.writes.append((row, col, value))

    def used_range(self) -> CellRange:
        populated = [key for key, value in self.cells.items() if value is not None]
        if not populated:
            raise EmptyInputError()
        rows = [row for row, _ in populated]
        cols = [col for _, col in populated]
        return CellRange(min(rows), min(cols), max(rows), max(cols))

    def to_rows(self, cell_range: Optional[CellRange] = None) -> List[List[Any]]:
        return self.read_grid(cell_range or self.used_range())
