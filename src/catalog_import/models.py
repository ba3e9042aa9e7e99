from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .formats import CsvFormat


@dataclass
class PartialDraft:
    """Mapper output: any attribute may still be missing."""

    name: Optional[str] = None
    price: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    sku: Optional[str] = None
    stock: Optional[int] = None
    extra: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProductDraft:
    name: str
    price: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    sku: Optional[str] = None
    stock: int = 0
    extra: Dict[str, str] = field(default_factory=dict)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the bulk-creation endpoint; unset fields are omitted."""
        out: Dict[str, Any] = {"name": self.name, "price": self.price}
        for key, val in (
            ("description", self.description),
            ("imageUrl", self.image_url),
            ("category", self.category),
            ("sku", self.sku),
        ):
            if val is not None:
                out[key] = val
        out["stock"] = self.stock
        for key, val in self.extra.items():
            out.setdefault(key, val)
        return out


@dataclass(frozen=True)
class SkippedRow:
    line_number: int
    reason: str


@dataclass
class ImportResult:
    drafts: List[ProductDraft]
    total_rows: int
    skipped_rows: int
    format: CsvFormat = CsvFormat.LEGACY
    skipped: List[SkippedRow] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "format": self.format.value,
            "totalRows": self.total_rows,
            "skippedRows": self.skipped_rows,
            "drafts": [d.to_payload() for d in self.drafts],
            "skipped": [{"line": s.line_number, "reason": s.reason} for s in self.skipped],
        }


@dataclass
class BulkCreateResult:
    created: int = 0
    failed: int = 0
    errors: List[Dict[str, Any]] = field(default_factory=list)
    status_code: int = 0
    message: str = ""

    @property
    def partial(self) -> bool:
        return self.status_code == 207 or self.failed > 0

    def error_messages(self) -> List[str]:
        return [str(e.get("error") or "") for e in self.errors if e.get("error")]


@dataclass
class ImportSummary:
    ok: bool
    message: str
    warning: str = ""
    result: Optional[ImportResult] = None
    bulk: Optional[BulkCreateResult] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"ok": self.ok, "message": self.message}
        if self.warning:
            out["warning"] = self.warning
        if self.result is not None:
            out["totalRows"] = self.result.total_rows
            out["skippedRows"] = self.result.skipped_rows
            out["format"] = self.result.format.value
        if self.bulk is not None:
            out["created"] = self.bulk.created
            out["failed"] = self.bulk.failed
            out["errors"] = self.bulk.errors
        return out
