from __future__ import annotations
import math
import re
import unicodedata
from typing import Optional
from urllib.parse import urlsplit


_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
_INT_PREFIX = re.compile(r"^[+-]?\d+", re.ASCII)
_INFINITY_PREFIX = re.compile(r"^([+-]?)Infinity")
_SKU_BEFORE_HTML = re.compile(r"(\d+[A-Z]+)\.html", re.ASCII)


def strip_leading_dollar(text: str) -> str:
    if not text:
        return ""
    return re.sub(r"^\$", "", text)


def clean_price(text: str) -> str:
    """Drop currency symbols and thousands separators: '$1,299.00' -> '1299.00'."""
    if not text:
        return ""
    return text.replace("$", "").replace(",", "").strip()


def parse_js_float(text: str) -> Optional[float]:
    """Leading-number parse in the manner of JavaScript's parseFloat.

    Returns None where parseFloat would give NaN.
    """
    s = (text or "").lstrip()
    inf = _INFINITY_PREFIX.match(s)
    if inf:
        return -math.inf if inf.group(1) == "-" else math.inf
    m = _FLOAT_PREFIX.match(s)
    if not m:
        return None
    return float(m.group(0))


def parse_js_int(text: str, default: int = 0) -> int:
    m = _INT_PREFIX.match((text or "").lstrip())
    if not m:
        return default
    return int(m.group(0))


def url_path(url: str) -> str:
    if not url:
        return ""
    return urlsplit(url).path if "://" in url else url.split("?", 1)[0].split("#", 1)[0]


def url_path_segments(url: str) -> list[str]:
    return [seg for seg in url_path(url).split("/") if seg]


def sku_from_url_slug(url: str) -> str:
    """'https://x.com/products/foo/ABC123.html' -> 'ABC123'."""
    # A trailing slash leaves an empty last segment and so no SKU
    last = url_path(url).rsplit("/", 1)[-1]
    if last.endswith(".html"):
        last = last[: -len(".html")]
    return last


def sku_from_tile_url(url: str) -> Optional[str]:
    """Pull the digits+uppercase code that sits right before '.html'."""
    m = _SKU_BEFORE_HTML.search(url or "")
    return m.group(1) if m else None


def category_from_url(url: str) -> Optional[str]:
    """Humanize the parent path segment: '/products/mens-shirts/X.html' -> 'Mens Shirts'."""
    segs = url_path_segments(url)
    if len(segs) < 2:
        return None
    s = unicodedata.normalize("NFKD", segs[-2])
    s = s.encode("ascii", "ignore").decode("ascii")
    s = re.sub(r"[^a-zA-Z0-9]+", " ", s).strip()
    return s.title() or None
