"""
Shared test fixtures.
"""

import sys
from pathlib import Path

# Make the src/ layout importable without installation
SRC = Path(__file__).resolve().parents[1] / "src"
sys.path.insert(0, str(SRC))

import pytest


BLM_HEADER = (
    "Blm-product-search src,Blm-product-search src 2,Product href,Product slug,"
    "Title,Badge,Swatch,Sustainability,Price,Compare"
)

BLM_ROW = [
    "img1.jpg",
    "",
    "https://x.com/products/foo/ABC123.html",
    "foo-slug",
    "Cool Shirt",
    "New",
    "",
    "Eco",
    "$49.99",
    "",
]


@pytest.fixture
def blm_row():
    return list(BLM_ROW)


@pytest.fixture
def blm_csv():
    return "\n".join([
        BLM_HEADER,
        ",".join(BLM_ROW),
        'hero.jpg,,https://x.com/products/knits/SWT900.html,,"Wool Sweater, Oat",,,,"$1,250.00",',
        "bad.jpg,,https://x.com/products/foo/BAD1.html,,No Price,,,,,",
    ]) + "\n"


@pytest.fixture
def fashion_tile_csv():
    return (
        "Tile-image src,Product-tile href,Product-tile,Price,Price-value,Description\n"
        "a.jpg,https://shop.test/products/dresses/1316169WYM.html,Linen Dress,$89.50,89.50,Breezy linen\n"
        'b.jpg,https://shop.test/products/tops/plain-tee.html,Plain Tee,"$1,200.00",,Soft\n'
    )
