from __future__ import annotations
from enum import Enum
from typing import Sequence


class CsvFormat(str, Enum):
    BLM_PRODUCT_SEARCH = "blm_product_search"
    FASHION_TILE = "fashion_tile"
    LEGACY = "legacy"


def _field(fields: Sequence[str], idx: int) -> str:
    return fields[idx] if idx < len(fields) else ""


def is_blm_product_search(header: Sequence[str]) -> bool:
    if len(header) < 9:
        return False
    return (
        "Blm-product-search" in _field(header, 0)
        or "Title" in _field(header, 4)
        or "Price" in _field(header, 8)
    )


def is_fashion_tile(header: Sequence[str]) -> bool:
    if len(header) < 6:
        return False
    return (
        "Tile-image" in _field(header, 0)
        or "Product-tile" in _field(header, 1)
        or "Product-tile" in _field(header, 2)
        or "Description" in _field(header, 5)
    )


def detect_format(header: Sequence[str]) -> CsvFormat:
    """Classify a vendor export from its header row; first match wins."""
    if is_blm_product_search(header):
        return CsvFormat.BLM_PRODUCT_SEARCH
    if is_fashion_tile(header):
        return CsvFormat.FASHION_TILE
    return CsvFormat.LEGACY
