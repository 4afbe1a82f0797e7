"""Table to XML Converter Package.

This package converts a rectangular block of spreadsheet cells into a flat XML
document and writes a flat XML document of ``Item`` records back into cells.
It includes:
- Grid to XML conversion with header validation and XML escaping
- XML to grid conversion with record schema consistency checks
- A host-neutral grid interface with an in-memory workbook
- Structured audit logging
- A RESTful API over both conversions
"""

__version__ = "1.0.0"
__author__ = "Table2XML Team"
__license__ = "MIT"
