from __future__ import annotations
from typing import Any, Dict, Optional


class CatalogImportError(Exception):
    """Base exception for catalog import failures."""


class CsvStructureError(CatalogImportError):
    """The file lacks a header row plus at least one data row."""


class RowRejected(CatalogImportError):
    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(reason)


class CatalogApiError(CatalogImportError):
    """Bulk-creation endpoint answered with a non-success status."""

    def __init__(self, message: str, status_code: int = 0, payload: Optional[Dict[str, Any]] = None):
        self.message = message
        self.status_code = status_code
        self.payload = payload or {}
        super().__init__(message)
