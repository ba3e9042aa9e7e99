#!/usr/bin/env python3
import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from catalog_import.catalog_client import DEFAULT_BULK_PATH, CatalogConfig, make_submitter
from catalog_import.errors import CsvStructureError
from catalog_import.importer import import_csv, parse_products, submit_products
from catalog_import.io import read_csv_text, write_drafts, write_template


def load_env(dotenv_path: Optional[str]) -> None:
    if not dotenv_path:
        default_env = Path.cwd() / ".env"
        if default_env.exists():
            load_dotenv(default_env)
        return
    p = Path(dotenv_path)
    if p.exists():
        load_dotenv(p)


def fail(msg: str) -> None:
    print(f"Error: {msg}", file=sys.stderr)
    sys.exit(1)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Import a product CSV into the catalog via the bulk-create endpoint.")
    parser.add_argument("--input", help="Path to the product CSV")
    parser.add_argument("--output", default="", help="Write accepted drafts to this .csv or .json file")
    parser.add_argument("--dry-run", action="store_true", help="Parse and validate only; do not submit")
    parser.add_argument("--template", default="", help="Write the CSV template to this path and exit")
    parser.add_argument("--base-url", default=None, help="Catalog base URL (env CATALOG_BASE_URL)")
    parser.add_argument("--token", default=None, help="API token (env CATALOG_TOKEN)")
    parser.add_argument("--bulk-path", default=None, help=f"Bulk create path (env CATALOG_BULK_PATH, default {DEFAULT_BULK_PATH})")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds; 0 waits indefinitely (env CATALOG_TIMEOUT)")
    parser.add_argument("--infer-category", action="store_true", help="Derive category from the product URL for vendor exports")
    parser.add_argument("--env-file", default="", help="Path to a .env file")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug")
    return parser


def get_config(args: argparse.Namespace) -> CatalogConfig:
    base_url = args.base_url or os.getenv("CATALOG_BASE_URL", "")
    if not base_url:
        fail("Missing required config: --base-url or CATALOG_BASE_URL")
    timeout = args.timeout if args.timeout is not None else float(os.getenv("CATALOG_TIMEOUT", "0") or 0)
    return CatalogConfig(
        base_url=base_url.strip(),
        token=(args.token or os.getenv("CATALOG_TOKEN", "")).strip(),
        bulk_path=(args.bulk_path or os.getenv("CATALOG_BULK_PATH", "") or DEFAULT_BULK_PATH).strip(),
        timeout=timeout if timeout > 0 else None,
    )


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    load_env(args.env_file)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
    log = logging.getLogger(__name__)

    if args.template:
        write_template(Path(args.template))
        print(f"Wrote template to {args.template}")
        return 0
    if not args.input:
        fail("--input is required")

    input_path = Path(args.input)
    if not input_path.exists():
        fail(f"Input file not found: {input_path}")
    text = read_csv_text(input_path)

    if args.dry_run or args.output:
        try:
            result = parse_products(text, infer_category=args.infer_category)
        except CsvStructureError as e:
            fail(str(e))
        for s in result.skipped:
            log.info("Skipped line %d: %s", s.line_number, s.reason)
        print(f"Format: {result.format.value}. Rows: {result.total_rows}, valid: {len(result.drafts)}, skipped: {result.skipped_rows}")
        if args.output:
            write_drafts(Path(args.output), result.drafts)
            print(f"Wrote {len(result.drafts)} drafts to {args.output}")
        if args.dry_run:
            return 0 if result.drafts else 1

    cfg = get_config(args)
    if args.output:
        summary = submit_products(result, make_submitter(cfg))
    else:
        summary = import_csv(text, make_submitter(cfg), infer_category=args.infer_category)
    if summary.result is not None and not args.output:
        for s in summary.result.skipped:
            log.info("Skipped line %d: %s", s.line_number, s.reason)
    if not summary.ok:
        fail(summary.message)
    print(summary.message)
    if summary.warning:
        print(f"Warning: {summary.warning}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    try:
        raise SystemExit(main())
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
