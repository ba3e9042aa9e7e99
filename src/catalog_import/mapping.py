from __future__ import annotations
from typing import Optional, Sequence, Tuple

from .formats import CsvFormat
from .models import PartialDraft
from .normalize import (
    category_from_url,
    clean_price,
    parse_js_int,
    sku_from_tile_url,
    sku_from_url_slug,
    strip_leading_dollar,
)


# Checked in order per header; the first substring hit decides the field.
LEGACY_FIELD_RULES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("name",), "name"),
    (("price",), "price"),
    (("description",), "description"),
    (("image", "url"), "image_url"),
    (("category",), "category"),
    (("sku",), "sku"),
    (("stock",), "stock"),
)


def _at(fields: Sequence[str], idx: int) -> str:
    return fields[idx] if idx < len(fields) else ""


def _opt(value: str) -> Optional[str]:
    return value if value else None


def legacy_field_for(header: str) -> Optional[str]:
    h = (header or "").lower()
    for needles, target in LEGACY_FIELD_RULES:
        if any(n in h for n in needles):
            return target
    return None


def map_blm_product_search(fields: Sequence[str], infer_category: bool = False) -> PartialDraft:
    product_url = _at(fields, 2)
    badge = _at(fields, 5)
    sustainability = _at(fields, 7)

    notes = []
    if badge:
        notes.append(f"Badge: {badge}")
    if sustainability:
        notes.append(f"Sustainability: {sustainability}")

    price = strip_leading_dollar(_at(fields, 8)).replace(",", "").strip()
    return PartialDraft(
        name=_at(fields, 4),
        price=price,
        description=". ".join(notes) or None,
        image_url=_opt(_at(fields, 0) or _at(fields, 1)),
        category=category_from_url(product_url) if infer_category else None,
        sku=_opt(_at(fields, 3) or sku_from_url_slug(product_url)),
        stock=0,
    )


def map_fashion_tile(fields: Sequence[str], infer_category: bool = False) -> PartialDraft:
    product_url = _at(fields, 1)
    raw_price = _at(fields, 4) or _at(fields, 3).replace("$", "")
    return PartialDraft(
        name=_at(fields, 2),
        price=clean_price(raw_price),
        description=_opt(_at(fields, 5)),
        image_url=_opt(_at(fields, 0)),
        category=category_from_url(product_url) if infer_category else None,
        sku=sku_from_tile_url(product_url),
        stock=0,
    )


def map_legacy(header: Sequence[str], fields: Sequence[str]) -> PartialDraft:
    draft = PartialDraft()
    for idx, name in enumerate(header):
        value = _at(fields, idx)
        if not value:
            continue
        target = legacy_field_for(name)
        if target is None:
            draft.extra[name] = value
        elif target == "price":
            draft.price = clean_price(value)
        elif target == "stock":
            draft.stock = parse_js_int(value, 0)
        else:
            setattr(draft, target, value)
    return draft


def map_row(
    fmt: CsvFormat,
    fields: Sequence[str],
    header: Optional[Sequence[str]] = None,
    infer_category: bool = False,
) -> PartialDraft:
    if fmt is CsvFormat.BLM_PRODUCT_SEARCH:
        return map_blm_product_search(fields, infer_category=infer_category)
    if fmt is CsvFormat.FASHION_TILE:
        return map_fashion_tile(fields, infer_category=infer_category)
    if fmt is CsvFormat.LEGACY:
        return map_legacy(header or [], fields)
    raise ValueError(f"Unsupported CSV format: {fmt!r}")
