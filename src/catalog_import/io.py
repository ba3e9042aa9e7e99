from __future__ import annotations
import csv
import json
from pathlib import Path
from typing import List

from .models import ProductDraft


TEMPLATE_HEADERS = [
    "Tile-image src",
    "Product-tile href",
    "Product-tile",
    "Price",
    "Price-value",
    "Description",
]

TEMPLATE_CSV = (
    ",".join(TEMPLATE_HEADERS)
    + "\n"
    + "https://example.com/images/oxford-shirt.jpg,"
    + "https://example.com/products/shirts/1316169WYM.html,"
    + "Classic Oxford Shirt,$49.99,49.99,Soft cotton oxford shirt with button-down collar"
    + "\n"
)

DRAFT_HEADERS = ["name", "price", "description", "imageUrl", "category", "sku", "stock"]


def decode_upload(data: bytes) -> str:
    """Uploaded bytes as text; a UTF-8 BOM is dropped."""
    return data.decode("utf-8-sig", errors="replace")


def read_csv_text(input_path: Path) -> str:
    with input_path.open("r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def write_template(output_path: Path) -> None:
    output_path.write_text(TEMPLATE_CSV, encoding="utf-8")


def write_drafts_csv(output_path: Path, drafts: List[ProductDraft]) -> None:
    extra_keys: List[str] = []
    for d in drafts:
        for k in d.extra:
            if k not in DRAFT_HEADERS and k not in extra_keys:
                extra_keys.append(k)
    fieldnames = DRAFT_HEADERS + extra_keys
    with output_path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames, restval="")
        writer.writeheader()
        for d in drafts:
            writer.writerow(d.to_payload())


def write_drafts_json(output_path: Path, drafts: List[ProductDraft]) -> None:
    output_path.write_text(json.dumps({"products": [d.to_payload() for d in drafts]}, indent=2), encoding="utf-8")


def write_drafts(output_path: Path, drafts: List[ProductDraft]) -> None:
    if output_path.suffix.lower() == ".json":
        write_drafts_json(output_path, drafts)
    else:
        write_drafts_csv(output_path, drafts)
