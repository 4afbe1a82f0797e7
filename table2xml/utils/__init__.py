"""Utils Package.

This package contains utility modules for:
- Grid to XML and XML to grid conversion
- The conversion error taxonomy
- Structured audit logging
"""
