"""
FastAPI application for the participants backend.

This package contains the REST API for admin sessions, spreadsheet uploads
and participant queries, plus the front-end page routes.
"""

__version__ = "1.0.0"
