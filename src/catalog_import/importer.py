"""Drive a whole CSV file through tokenize -> detect -> map -> validate.

``parse_products`` is the local, network-free phase. ``import_csv`` wraps it
with the hand-off to the bulk-creation endpoint and turns every outcome into an
``ImportSummary`` the operator can read.
"""
from __future__ import annotations
import logging
from typing import Callable, List

import requests

from .errors import CatalogApiError, CsvStructureError, RowRejected
from .formats import detect_format
from .mapping import map_row
from .models import BulkCreateResult, ImportResult, ImportSummary, ProductDraft, SkippedRow
from .tokenizer import has_unterminated_quote, tokenize_line
from .validate import validate_draft


log = logging.getLogger(__name__)

STRUCTURE_MESSAGE = "CSV file must contain at least a header row and one data row."
NO_PRODUCTS_MESSAGE = "No valid products found in CSV file."

Submitter = Callable[[List[ProductDraft]], BulkCreateResult]


def split_lines(raw_text: str) -> List[str]:
    return [line for line in (raw_text or "").split("\n") if line.strip()]


def parse_products(raw_text: str, infer_category: bool = False) -> ImportResult:
    lines = split_lines(raw_text)
    if len(lines) < 2:
        raise CsvStructureError(STRUCTURE_MESSAGE)

    header = tokenize_line(lines[0])
    fmt = detect_format(header)
    log.info("Detected CSV format %s (%d header fields)", fmt.value, len(header))

    drafts: List[ProductDraft] = []
    skipped: List[SkippedRow] = []
    for line_number, line in enumerate(lines[1:], start=2):
        if has_unterminated_quote(line):
            log.debug("Line %d has an unterminated quote; parsing to end of line", line_number)
        fields = tokenize_line(line)
        partial = map_row(fmt, fields, header=header, infer_category=infer_category)
        try:
            drafts.append(validate_draft(partial))
        except RowRejected as e:
            log.debug("Skipping line %d: %s", line_number, e.reason)
            skipped.append(SkippedRow(line_number=line_number, reason=e.reason))

    total = len(lines) - 1
    log.info("Parsed %d rows: %d valid, %d skipped", total, len(drafts), len(skipped))
    return ImportResult(
        drafts=drafts,
        total_rows=total,
        skipped_rows=len(skipped),
        format=fmt,
        skipped=skipped,
    )


def success_message(bulk: BulkCreateResult) -> str:
    msg = f"Successfully uploaded {bulk.created} products."
    if bulk.failed > 0:
        msg += f" {bulk.failed} failed."
    return msg


def partial_warning(bulk: BulkCreateResult) -> str:
    if not bulk.partial:
        return ""
    details = bulk.error_messages()
    warning = f"{bulk.failed} product(s) could not be created."
    if details:
        warning += " " + "; ".join(details)
    return warning


def import_csv(raw_text: str, submit: Submitter, infer_category: bool = False) -> ImportSummary:
    """Parse ``raw_text`` and hand the accepted drafts to ``submit``.

    Nothing is submitted when the file is structurally invalid or yields no
    valid rows. Endpoint and transport failures come back as a failed summary
    rather than an exception.
    """
    try:
        result = parse_products(raw_text, infer_category=infer_category)
    except CsvStructureError as e:
        return ImportSummary(ok=False, message=str(e))
    return submit_products(result, submit)


def submit_products(result: ImportResult, submit: Submitter) -> ImportSummary:
    """Hand an already parsed file to ``submit`` and summarize the outcome."""
    if not result.drafts:
        return ImportSummary(ok=False, message=NO_PRODUCTS_MESSAGE, result=result)

    try:
        bulk = submit(result.drafts)
    except CatalogApiError as e:
        log.warning("Bulk create rejected (%s): %s", e.status_code, e.message)
        return ImportSummary(ok=False, message=f"Upload failed: {e.message}", result=result)
    except requests.RequestException as e:
        log.warning("Bulk create request failed: %s", e)
        return ImportSummary(ok=False, message=f"Upload error: {e}", result=result)

    return ImportSummary(
        ok=True,
        message=success_message(bulk),
        warning=partial_warning(bulk),
        result=result,
        bulk=bulk,
    )
