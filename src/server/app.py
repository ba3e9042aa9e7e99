from __future__ import annotations
import logging
import os
import threading
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, File, Form, HTTPException, Request, UploadFile
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from catalog_import import catalog_client as cc
from catalog_import.errors import CsvStructureError
from catalog_import.importer import import_csv, parse_products
from catalog_import.io import TEMPLATE_CSV, decode_upload
from catalog_import.models import ImportSummary
from . import settings as app_settings


log = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parents[2]
DATA_DIR = Path(os.getenv("CATALOG_IMPORT_DATA_DIR") or ROOT / "data")
TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

app = FastAPI(title="Catalog CSV Import API", version="0.1.0")
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
app_settings.init_settings(DATA_DIR / "settings.json")

# One import at a time; a running import cannot be cancelled.
IMPORT_LOCK = threading.Lock()


class SkippedRowOut(BaseModel):
    line: int
    reason: str


class PreviewResponse(BaseModel):
    format: str
    totalRows: int
    skippedRows: int
    drafts: List[Dict]
    skipped: List[SkippedRowOut] = []


class ImportResponse(BaseModel):
    ok: bool
    message: str
    warning: Optional[str] = None
    format: Optional[str] = None
    totalRows: Optional[int] = None
    skippedRows: Optional[int] = None
    created: Optional[int] = None
    failed: Optional[int] = None
    errors: List[Dict] = []


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


def _read_csv_upload(file: UploadFile) -> str:
    name = (file.filename or "").lower()
    if not name.endswith(".csv"):
        raise HTTPException(400, "Only .csv files are supported")
    return decode_upload(file.file.read())


def _infer_category(flag: Optional[bool]) -> bool:
    if flag is not None:
        return flag
    return bool(app_settings.get_settings().get("infer_category"))


def _run_import(text: str, infer_category: bool) -> ImportSummary:
    cfg = app_settings.catalog_config()
    if not cfg.base_url:
        raise HTTPException(500, "Catalog endpoint missing. Set it in Settings or as CATALOG_BASE_URL.")
    if not IMPORT_LOCK.acquire(blocking=False):
        raise HTTPException(409, "An import is already in progress")
    try:
        return import_csv(text, cc.make_submitter(cfg), infer_category=infer_category)
    finally:
        IMPORT_LOCK.release()


@app.get("/template.csv")
def download_template() -> Response:
    return Response(
        content=TEMPLATE_CSV,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=product_template.csv"},
    )


@app.post("/imports/preview", response_model=PreviewResponse)
def preview_import(file: UploadFile = File(...), infer_category: Optional[bool] = Form(None)):
    text = _read_csv_upload(file)
    try:
        result = parse_products(text, infer_category=_infer_category(infer_category))
    except CsvStructureError as e:
        raise HTTPException(400, str(e))
    return result.to_dict()


@app.post("/imports", response_model=ImportResponse)
def create_import(file: UploadFile = File(...), infer_category: Optional[bool] = Form(None)):
    text = _read_csv_upload(file)
    summary = _run_import(text, _infer_category(infer_category))
    log.info("Import of %s finished: %s", file.filename, summary.message)
    return summary.to_dict()


# --- Minimal HTML UI ---
@app.get("/", response_class=HTMLResponse)
def ui_home(request: Request):
    return templates.TemplateResponse(request, "index.html", {"busy": IMPORT_LOCK.locked()})


@app.post("/ui/imports", response_class=HTMLResponse)
def ui_create_import(request: Request, file: UploadFile = File(...)):
    try:
        text = _read_csv_upload(file)
        summary = _run_import(text, _infer_category(None))
    except HTTPException as e:
        summary = ImportSummary(ok=False, message=str(e.detail))
    return templates.TemplateResponse(request, "result.html", {"summary": summary})


@app.get("/ui/settings", response_class=HTMLResponse)
def ui_get_settings(request: Request):
    s = app_settings.get_settings()
    return templates.TemplateResponse(request, "settings.html", {"s": s})


@app.post("/ui/settings")
def ui_save_settings(
    catalog_base_url: str = Form(""),
    catalog_token: str = Form(""),
    bulk_path: str = Form(cc.DEFAULT_BULK_PATH),
    request_timeout: float = Form(0),
    infer_category: str = Form("false"),
):
    cur = app_settings.get_settings()
    cur.update({
        "catalog_base_url": catalog_base_url.strip(),
        "catalog_token": catalog_token.strip(),
        "bulk_path": bulk_path.strip() or cc.DEFAULT_BULK_PATH,
        "request_timeout": max(request_timeout, 0),
        "infer_category": (infer_category == "true"),
    })
    app_settings.save_settings(cur)
    return RedirectResponse(url="/ui/settings", status_code=302)
