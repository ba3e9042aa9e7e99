"""Tests for the bulk-creation endpoint client."""

import json
from unittest.mock import MagicMock

import pytest

from catalog_import import catalog_client as cc
from catalog_import.errors import CatalogApiError
from catalog_import.models import ProductDraft


def make_response(status_code, body=None, headers=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.headers = headers or {}
    if isinstance(body, Exception):
        resp.json.side_effect = body
    else:
        resp.json.return_value = body
    return resp


@pytest.fixture
def cfg():
    return cc.CatalogConfig(base_url="https://shop.test/", token="secret")


@pytest.fixture
def drafts():
    return [
        ProductDraft(name="Cool Shirt", price="49.99", image_url="img1.jpg", sku="foo-slug"),
        ProductDraft(name="Mug", price="5"),
    ]


class TestCatalogConfig:

    def test_bulk_url(self):
        assert cc.CatalogConfig(base_url="https://shop.test/").bulk_url == "https://shop.test/api/products/bulk"
        assert cc.CatalogConfig(base_url="https://shop.test", bulk_path="v2/bulk").bulk_url == "https://shop.test/v2/bulk"

    def test_session_headers(self, cfg):
        s = cc.build_session(cfg)
        assert s.headers["Authorization"] == "Bearer secret"
        assert s.headers["Content-Type"] == "application/json"
        assert "Authorization" not in cc.build_session(cc.CatalogConfig(base_url="https://shop.test")).headers


class TestBulkCreate:

    def test_posts_products_payload(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(201, {"created": 2, "failed": 0, "message": "Bulk upload successful"})

        result = cc.bulk_create_products(session, cfg, drafts)

        url = session.post.call_args[0][0]
        kwargs = session.post.call_args[1]
        assert url == "https://shop.test/api/products/bulk"
        assert kwargs["timeout"] is None
        assert json.loads(kwargs["data"]) == {
            "products": [
                {"name": "Cool Shirt", "price": "49.99", "imageUrl": "img1.jpg", "sku": "foo-slug", "stock": 0},
                {"name": "Mug", "price": "5", "stock": 0},
            ]
        }
        assert result.created == 2
        assert result.partial is False
        assert result.message == "Bulk upload successful"

    def test_multi_status_is_partial_success(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(207, {
            "created": 1,
            "failed": 1,
            "errors": [{"index": 1, "error": "Product at index 1: price is required"}],
        })
        result = cc.bulk_create_products(session, cfg, drafts)
        assert result.partial is True
        assert result.error_messages() == ["Product at index 1: price is required"]

    def test_error_status_raises_with_body_message(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(400, {"error": "Products array cannot be empty", "code": "EMPTY_PRODUCTS_ARRAY"})
        with pytest.raises(CatalogApiError) as exc:
            cc.bulk_create_products(session, cfg, drafts)
        assert exc.value.message == "Products array cannot be empty"
        assert exc.value.status_code == 400
        assert exc.value.payload["code"] == "EMPTY_PRODUCTS_ARRAY"

    def test_error_status_without_json(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(502, ValueError("no json"))
        with pytest.raises(CatalogApiError, match="Unknown error"):
            cc.bulk_create_products(session, cfg, drafts)

    def test_retries_rate_limit(self, cfg, drafts, monkeypatch):
        sleeps = []
        monkeypatch.setattr(cc.time, "sleep", sleeps.append)
        session = MagicMock()
        session.post.side_effect = [
            make_response(429, headers={"Retry-After": "2"}),
            make_response(201, {"created": 2, "failed": 0}),
        ]
        result = cc.bulk_create_products(session, cfg, drafts)
        assert result.created == 2
        assert sleeps == [2.0]
        assert session.post.call_count == 2

    def test_submitter_uses_given_session(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(201, {"created": 2, "failed": 0})
        submit = cc.make_submitter(cfg, session=session)
        assert submit(drafts).created == 2
        session.post.assert_called_once()


class TestRateLimit:

    def test_retry_after_http_date(self, cfg, drafts, monkeypatch):
        sleeps = []
        monkeypatch.setattr(cc.time, "sleep", sleeps.append)
        session = MagicMock()
        session.post.side_effect = [
            make_response(429, headers={"Retry-After": "Wed, 21 Oct 2015 07:28:00 GMT"}),
            make_response(201, {"created": 2, "failed": 0}),
        ]
        result = cc.bulk_create_products(session, cfg, drafts)
        assert result.created == 2
        # a date in the past means retry immediately
        assert sleeps == [0.0]

    def test_unparseable_retry_after_uses_backoff(self, cfg, drafts, monkeypatch):
        sleeps = []
        monkeypatch.setattr(cc.time, "sleep", sleeps.append)
        session = MagicMock()
        session.post.side_effect = [
            make_response(429, headers={"Retry-After": "soon"}),
            make_response(429),
            make_response(201, {"created": 2, "failed": 0}),
        ]
        cc.bulk_create_products(session, cfg, drafts)
        assert sleeps == [1.0, 2.0]

    def test_gives_up_after_max_attempts(self, cfg, drafts, monkeypatch):
        monkeypatch.setattr(cc.time, "sleep", lambda s: None)
        session = MagicMock()
        session.post.side_effect = [make_response(429, headers={"Retry-After": "0"}) for _ in range(cc.MAX_ATTEMPTS)]
        with pytest.raises(CatalogApiError) as exc:
            cc.bulk_create_products(session, cfg, drafts)
        assert exc.value.status_code == 429
        assert exc.value.message == "Rate limited"
        assert session.post.call_count == cc.MAX_ATTEMPTS


class TestMalformedBody:

    def test_non_numeric_count_raises_api_error(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(200, {"created": "n/a"})
        with pytest.raises(CatalogApiError, match="Malformed response"):
            cc.bulk_create_products(session, cfg, drafts)

    def test_non_list_errors_are_ignored(self, cfg, drafts):
        session = MagicMock()
        session.post.return_value = make_response(207, {"created": "1", "failed": 1, "errors": "oops"})
        result = cc.bulk_create_products(session, cfg, drafts)
        assert result.created == 1
        assert result.errors == []
