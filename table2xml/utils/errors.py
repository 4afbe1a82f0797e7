"""Conversion error taxonomy.

Every failure of a conversion is raised as a ``ConversionError`` subclass.
The ``error_code`` tag identifies the kind of failure; the message is the
human readable text shown after ``"Error: "`` at the host boundary.
"""

from typing import Optional


class ConversionError(Exception):
    error_code = "CONVERSION_ERROR"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidReferenceError(ConversionError):
    """The handle is not a usable range or cell."""

    error_code = "INVALID_REFERENCE"

    def __init__(self, message: str = "Invalid range provided."):
        super().__init__(message)


class EmptyInputError(ConversionError):
    """The grid has no rows or columns, or the cell text is blank."""

    error_code = "EMPTY_INPUT"

    def __init__(self, message: str = "Provided range is empty."):
        super().__init__(message)


class InvalidHeaderError(ConversionError):
    error_code = "INVALID_HEADER"

    def __init__(self, column: int):
        super().__init__(f"Header in column {column} is empty or invalid.")
        self.column = column


class MalformedXmlError(ConversionError):
    error_code = "MALFORMED_XML"

    def __init__(self, message: str = "Cell does not contain valid XML.", detail: Optional[str] = None):
        super().__init__(message)
        self.detail = detail


class NoRecordsFoundError(ConversionError):
    error_code = "NO_RECORDS"

    def __init__(self, record_tag: str = "Item"):
        super().__init__(f"No '{record_tag}' elements found in XML.")
        self.record_tag = record_tag


class InconsistentSchemaError(ConversionError):
    error_code = "INCONSISTENT_SCHEMA"

    def __init__(self, record: int, expected: int, actual: int):
        super().__init__(
            f"Inconsistent column count in XML rows. "
            f"Record {record} has {actual} columns, expected {expected}."
        )
        self.record = record
        self.expected = expected
        self.actual = actual


class WrongCellTypeError(ConversionError):
    error_code = "WRONG_CELL_TYPE"

    def __init__(self, message: str = "Cell does not contain a string value."):
        super().__init__(message)
