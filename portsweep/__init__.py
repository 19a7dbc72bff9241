"""Concurrent TCP connect scanner for a single host."""

from .models import (
    CatalogEntry,
    PortOutcome,
    PortStatus,
    ScanReport,
    ScanRequest,
    ScanState,
    Target,
)
from .scanner import scan

__all__ = [
    "CatalogEntry",
    "PortOutcome",
    "PortStatus",
    "ScanReport",
    "ScanRequest",
    "ScanState",
    "Target",
    "scan",
]
