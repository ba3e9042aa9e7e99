from __future__ import annotations
import json
import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Optional

import requests

from .errors import CatalogApiError
from .models import BulkCreateResult, ProductDraft


log = logging.getLogger(__name__)

DEFAULT_BULK_PATH = "/api/products/bulk"
MAX_ATTEMPTS = 5


@dataclass
class CatalogConfig:
    base_url: str
    token: str = ""
    bulk_path: str = DEFAULT_BULK_PATH
    # None means wait for the endpoint indefinitely
    timeout: Optional[float] = None

    @property
    def bulk_url(self) -> str:
        path = self.bulk_path if self.bulk_path.startswith("/") else f"/{self.bulk_path}"
        return f"{self.base_url.rstrip('/')}{path}"


def build_session(cfg: CatalogConfig) -> requests.Session:
    s = requests.Session()
    s.headers.update(
        {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": "catalog-csv-import/1.0",
        }
    )
    if cfg.token:
        s.headers["Authorization"] = f"Bearer {cfg.token}"
    return s


def _retry_after(value: Optional[str], backoff: float) -> float:
    """Seconds to wait from a Retry-After header (delay-seconds or HTTP-date)."""
    if not value:
        return backoff
    try:
        return max(float(value), 0.0)
    except ValueError:
        pass
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        return backoff
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max((when - datetime.now(timezone.utc)).total_seconds(), 0.0)


def _rest_post(session: requests.Session, url: str, payload: Dict, timeout: Optional[float] = None) -> requests.Response:
    backoff = 1.0
    for attempt in range(1, MAX_ATTEMPTS + 1):
        resp = session.post(url, data=json.dumps(payload), timeout=timeout)
        if resp.status_code != 429:
            return resp
        if attempt == MAX_ATTEMPTS:
            break
        retry_after = _retry_after(resp.headers.get("Retry-After"), backoff)
        log.warning("Rate limited by %s; retrying in %.1fs", url, retry_after)
        time.sleep(retry_after)
        backoff = min(backoff * 2, 10.0)
    raise CatalogApiError("Rate limited", status_code=429)


def _json_body(resp: requests.Response) -> Dict:
    try:
        data = resp.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}


def _count(data: Dict[str, Any], key: str, status_code: int) -> int:
    value = data.get(key) or 0
    try:
        return int(value)
    except (TypeError, ValueError):
        raise CatalogApiError(f"Malformed response: {key}={value!r}", status_code=status_code, payload=data)


def _error_detail(data: Dict) -> str:
    if isinstance(data, dict) and data.get("error"):
        return str(data["error"])
    return "Unknown error"


def bulk_create_products(session: requests.Session, cfg: CatalogConfig, drafts: List[ProductDraft]) -> BulkCreateResult:
    """POST the batch as ``{"products": [...]}``.

    Any 2xx (207 Multi-Status included) counts as an answer; other statuses
    raise CatalogApiError carrying the body's ``error`` text.
    """
    payload = {"products": [d.to_payload() for d in drafts]}
    log.info("Submitting %d products to %s", len(drafts), cfg.bulk_url)
    resp = _rest_post(session, cfg.bulk_url, payload, timeout=cfg.timeout)
    data = _json_body(resp)
    if not 200 <= resp.status_code < 300:
        raise CatalogApiError(_error_detail(data), status_code=resp.status_code, payload=data)
    errors = data.get("errors") or []
    return BulkCreateResult(
        created=_count(data, "created", resp.status_code),
        failed=_count(data, "failed", resp.status_code),
        errors=[e for e in (errors if isinstance(errors, list) else []) if isinstance(e, dict)],
        status_code=resp.status_code,
        message=str(data.get("message") or ""),
    )


def make_submitter(cfg: CatalogConfig, session: Optional[requests.Session] = None):
    """Bind a config (and optionally a session) into a callable for importer.import_csv."""
    sess = session or build_session(cfg)

    def submit(drafts: List[ProductDraft]) -> BulkCreateResult:
        return bulk_create_products(sess, cfg, drafts)

    return submit
