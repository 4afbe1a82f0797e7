"""Spreadsheet-facing conversion functions.

These are the entry points a spreadsheet add-in registers. They always return
a string: the result on success, or ``"Error: <message>"`` on failure.
"""

from typing import Any, Optional
import time
import logging

from .host import GridHost
from .utils.audit import audit_logger
from .utils.converter import converter
from .utils.errors import ConversionError, InvalidReferenceError, WrongCellTypeError

log = logging.getLogger(__name__)

TABLE_WRITTEN_MESSAGE = "XML data written to table."


def _elapsed_ms(start_time: float) -> float:
    return (time.time() - start_time) * 1000


def _error_result(action: str, error: Exception, start_time: float) -> str:
    if isinstance(error, ConversionError):
        audit_logger.log_conversion_event(
            user_id="host",
            action=action,
            conversion_time=_elapsed_ms(start_time),
            status="error",
            details={"error_code": error.error_code, "error": error.message}
        )
    else:
        log.exception("Unexpected failure in %s", action)
        audit_logger.log_error(user_id="host", action=action, error=error)
    return f"Error: {error}"


def convert_to_xml(outer_tag: str, inner_tag: str, range_ref: Any, host: GridHost) -> str:
    """Convert the referenced range to XML, using its first row as headers."""
    start_time = time.time()
    try:
        grid = host.read_grid(range_ref)
        xml_text = converter.grid_to_xml(outer_tag, inner_tag, grid)
    except Exception as e:
        return _error_result("convert_to_xml", e, start_time)

    audit_logger.log_conversion_event(
        user_id="host",
        action="convert_to_xml",
        conversion_time=_elapsed_ms(start_time),
        details={
            "rows_processed": len(grid) - 1,
            "columns": len(grid[0]),
            "outer_tag": outer_tag,
            "inner_tag": inner_tag
        }
    )
    return xml_text


def convert_xml_to_table(
    cell_ref: Any,
    host: GridHost,
    origin_row: Optional[int] = None,
    origin_col: Optional[int] = None
) -> str:
    """Write the ``Item`` records of the XML held in ``cell_ref`` into the sheet."""
    start_time = time.time()
    try:
        try:
            grid = host.read_grid(cell_ref)
        except InvalidReferenceError:
            raise InvalidReferenceError("Invalid cell reference.") from None

        # A multi-cell block is not a single string value
        if len(grid) != 1 or len(grid[0]) != 1:
            raise WrongCellTypeError()

        result = converter.xml_to_table(grid[0][0], host, origin_row, origin_col)
    except Exception as e:
        return _error_result("convert_xml_to_table", e, start_time)

    audit_logger.log_conversion_event(
        user_id="host",
        action="convert_xml_to_table",
        conversion_time=_elapsed_ms(start_time),
        details={
            "records": result.records,
            "columns": result.headers
        }
    )
    return TABLE_WRITTEN_MESSAGE


FUNCTIONS = {
    "ConvertToXml": {
        "function": convert_to_xml,
        "description": "Converts a range to XML",
    },
    "ConvertXmlToTable": {
        "function": convert_xml_to_table,
        "description": "Converts XML in a cell to an Excel table",
    },
}
