from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import List, Sequence, Union

from .models import CatalogEntry

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "tcp.json"
UNKNOWN_SERVICE = "unknown"


def _parse_record(record) -> CatalogEntry:
    if not isinstance(record, dict):
        raise ValueError(f"not an object: {record!r}")
    port = record["port"]
    service = record["service"]
    # JSON numbers may come back as floats ("port": 80.0)
    if isinstance(port, bool) or not isinstance(port, (int, float)):
        raise ValueError(f"bad port: {port!r}")
    if isinstance(port, float) and (not math.isfinite(port) or not port.is_integer()):
        raise ValueError(f"bad port: {port!r}")
    if not isinstance(service, str):
        raise ValueError(f"bad service: {service!r}")
    return CatalogEntry(port=int(port), service=service)


def load_catalog(path: Union[str, Path] = DEFAULT_CATALOG_PATH) -> List[CatalogEntry]:
    """
    Reads a JSON array of {"port": n, "service": "name"} records.
    A missing or malformed file is logged and yields an empty catalog;
    the scan still runs, every open port just classifies as "unknown".
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Could not load service catalog %s: %s", path, e)
        return []

    if not isinstance(payload, list):
        logger.warning("Service catalog %s is not a JSON array, ignoring it", path)
        return []

    catalog: List[CatalogEntry] = []
    for record in payload:
        try:
            catalog.append(_parse_record(record))
        except (KeyError, TypeError, ValueError) as e:
            logger.debug("Skipping catalog record %r: %s", record, e)

    logger.debug("Loaded %d catalog entries from %s", len(catalog), path)
    return catalog


def classify(port: int, catalog: Sequence[CatalogEntry]) -> str:
    # First match wins; catalog is neither sorted nor de-duped
    for entry in catalog:
        if entry.port == port:
            return entry.service
    return UNKNOWN_SERVICE
