from __future__ import annotations
import math

from .errors import RowRejected
from .models import PartialDraft, ProductDraft
from .normalize import parse_js_float


def validate_draft(draft: PartialDraft) -> ProductDraft:
    """Promote a mapped row to a ProductDraft or raise RowRejected.

    The price string is kept as cleaned by the mapper, not reformatted.
    """
    name = (draft.name or "").strip()
    if not name:
        raise RowRejected("name is required")

    price = (draft.price or "").strip()
    if not price:
        raise RowRejected("price is required")
    value = parse_js_float(price)
    if value is None or math.isinf(value) or value < 0:
        raise RowRejected(f"price must be a valid non-negative number (got {draft.price!r})")

    return ProductDraft(
        name=draft.name or "",
        price=draft.price or "",
        description=draft.description,
        image_url=draft.image_url,
        category=draft.category,
        sku=draft.sku,
        stock=draft.stock if draft.stock is not None else 0,
        extra=dict(draft.extra),
    )
