"""
Service layer for the participants backend.

This package contains framework-agnostic business logic (sessions, upload
storage, spreadsheet queries) shared by the API and the CLI.
"""

__version__ = "1.0.0"
