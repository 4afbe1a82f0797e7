from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any, Iterator, List, Optional, Sequence, Tuple
import numbers
import xml.etree.ElementTree as ET
import logging

import pandas as pd

from ..config import config
from .errors import (
    EmptyInputError,
    InconsistentSchemaError,
    InvalidHeaderError,
    MalformedXmlError,
    NoRecordsFoundError,
    WrongCellTypeError,
)

log = logging.getLogger(__name__)

Grid = Sequence[Sequence[Any]]
CellWrite = Tuple[int, int, str]

# '&' must stay first so the entities inserted below are not escaped again
_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)


def is_null_cell(value: Any) -> bool:
    """Return True for empty cells: None, NaN and NaT."""
    if value is None:
        return True
    if isinstance(value, str) or not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


def to_cell_text(value: Any) -> str:
    """Convert a cell value to the text placed inside an XML element.

    Rules:
    - empty cells (None, NaN, NaT) become ""
    - booleans become "True" / "False"
    - integers become their decimal digits
    - floats with an integral value drop the fraction (30.0 -> "30"),
      other floats use the shortest round-trip form ("2.5")
    - Decimal values use fixed-point notation
    - dates and datetimes use ISO-8601
    - everything else uses str()

    The output never depends on the process locale.
    """
    if is_null_cell(value):
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, Decimal):
        return format(value, "f")
    if isinstance(value, numbers.Integral):
        return str(int(value))
    if isinstance(value, numbers.Real):
        number = float(value)
        if number.is_integer():
            return str(int(number))
        return repr(number)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def escape_xml(value: Optional[str]) -> Optional[str]:
    """Escape the five XML special characters.

    None and "" are returned unchanged.
    """
    if not value:
        return value

    for char, entity in _XML_ESCAPES:
        value = value.replace(char, entity)
    return value


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` prefix ElementTree puts on qualified tags."""
    return tag.rsplit("}", 1)[-1]


@dataclass
class TableWriteResult:
    """Summary of an XML to table conversion."""
    headers: List[str]
    records: int
    writes: List[CellWrite] = field(default_factory=list)

    @property
    def columns(self) -> int:
        return len(self.headers)


class TableXMLConverter:
    def __init__(self, record_tag: Optional[str] = None):
        self.record_tag = record_tag or config.RECORD_TAG

    # Grid -> XML

    def _check_grid(self, grid: Optional[Grid]) -> Tuple[int, int]:
        if grid is None or len(grid) == 0 or len(grid[0]) == 0:
            raise EmptyInputError()
        return len(grid), len(grid[0])

    def extract_headers(self, grid: Grid) -> List[str]:
        """Read the header row, failing on the first blank header cell."""
        _, num_cols = self._check_grid(grid)

        headers = []
        for col in range(num_cols):
            text = to_cell_text(grid[0][col])
            if is_null_cell(grid[0][col]) or not text.strip():
                raise InvalidHeaderError(col + 1)
            headers.append(text)
        return headers

    def serialize_rows(self, headers: Sequence[str], grid: Grid, inner_tag: str) -> Iterator[str]:
        """Yield one record block per data row, fields in header order."""
        for row in grid[1:]:
            lines = [f"<{inner_tag}>"]
            for col, header in enumerate(headers):
                text = escape_xml(to_cell_text(row[col]))
                lines.append(f"<{header}>{text}</{header}>")
            lines.append(f"</{inner_tag}>")
            yield "\n".join(lines) + "\n"

    def grid_to_xml(self, outer_tag: str, inner_tag: str, grid: Optional[Grid]) -> str:
        """Convert a grid whose first row holds the column headers to XML.

        Tag names are used as given. Nothing is returned unless every header
        is valid.
        """
        self._check_grid(grid)
        headers = self.extract_headers(grid)
        body = "".join(self.serialize_rows(headers, grid, inner_tag))
        log.debug("Serialized %d rows with columns %s", len(grid) - 1, headers)
        return f"<{outer_tag}>\n{body}</{outer_tag}>\n"

    # XML -> Grid

    def read_xml_text(self, cell_value: Any) -> str:
        if is_null_cell(cell_value):
            raise EmptyInputError("Cell is empty or contains only whitespace.")
        if not isinstance(cell_value, str):
            raise WrongCellTypeError()
        if not cell_value.strip():
            raise EmptyInputError("Cell is empty or contains only whitespace.")
        return cell_value

    def parse_xml(self, text: str) -> ET.Element:
        try:
            return ET.fromstring(text)
        except ET.ParseError as e:
            raise MalformedXmlError(detail=str(e)) from e

    def collect_records(self, root: ET.Element) -> List[ET.Element]:
        """Collect every record element at any depth and check they share a shape."""
        records = list(root.iter(self.record_tag))
        if not records:
            raise NoRecordsFoundError(self.record_tag)

        expected_columns = len(records[0])
        for index, record in enumerate(records, start=1):
            if len(record) != expected_columns:
                raise InconsistentSchemaError(index, expected_columns, len(record))
        return records

    def plan_table_writes(self,
        records: Sequence[ET.Element],
        origin_row: int,
        origin_col: int
    ) -> List[CellWrite]:
        """Lay out the header row and one row per record starting at the origin."""
        writes = []
        for col, element in enumerate(records[0], start=origin_col):
            writes.append((origin_row, col, local_name(element.tag)))

        for row, record in enumerate(records, start=origin_row + 1):
            for col, element in enumerate(record, start=origin_col):
                writes.append((row, col, "".join(element.itertext())))
        return writes

    def xml_to_table(self,
        cell_value: Any,
        host,
        origin_row: Optional[int] = None,
        origin_col: Optional[int] = None
    ) -> TableWriteResult:
        """Write the records of an XML document into ``host`` as a table.

        All validation happens before the first cell is written.
        """
        if origin_row is None:
            origin_row = config.TABLE_ORIGIN_ROW
        if origin_col is None:
            origin_col = config.TABLE_ORIGIN_COL

        root = self.parse_xml(self.read_xml_text(cell_value))
        records = self.collect_records(root)
        writes = self.plan_table_writes(records, origin_row, origin_col)

        for row, col, value in writes:
            host.write_cell(row, col, value)

        headers = [local_name(element.tag) for element in records[0]]
        return TableWriteResult(headers=headers, records=len(records), writes=writes)

# Create singleton instance
converter = TableXMLConverter()
