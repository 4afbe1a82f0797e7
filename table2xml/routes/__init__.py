"""Routes Package.

This package contains FastAPI route handlers for the table/XML converter service.
It includes endpoints for:
- Grid to XML conversion
- XML to table conversion
- Spreadsheet upload conversion
- Health checks
"""
