"""
Catalog CSV import library.

Turns vendor product exports into validated product drafts and submits them to
a bulk-creation endpoint.

Public API:
- tokenizer.tokenize_line
- formats.CsvFormat, formats.detect_format
- mapping.map_row
- validate.validate_draft
- importer.parse_products, importer.import_csv
- catalog_client.CatalogConfig, catalog_client.bulk_create_products
- io.TEMPLATE_CSV, io.read_csv_text, io.write_drafts
"""

from . import tokenizer, formats, mapping, validate, importer, catalog_client, io  # re-export modules

__all__ = [
    "tokenizer",
    "formats",
    "mapping",
    "validate",
    "importer",
    "catalog_client",
    "io",
]
