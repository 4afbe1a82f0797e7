"""Middleware Package.

This package contains FastAPI middleware components for:
- Request audit logging
- Request size limits
- Security response headers
"""
