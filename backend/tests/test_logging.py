"""Tests for structured log output and request id propagation."""
import json
import logging

from roxinho_shop.api.middleware.request_id import request_id_var, resolve_request_id
from roxinho_shop.core.logging import JSONFormatter


def _record(msg="Scraping Amazon page %s", args=("https://www.amazon.com.br/dp/B07W5JKHFZ",), **extra):
    record = logging.LogRecord(
        "roxinho_shop.integrations.marketplaces.amazon", logging.INFO, __file__, 1, msg, args, None,
    )
    record.__dict__.update(extra)
    return record


class TestJSONFormatter:
    def test_basic_fields(self):
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["level"] == "INFO"
        assert entry["logger"] == "roxinho_shop.integrations.marketplaces.amazon"
        assert entry["message"] == "Scraping Amazon page https://www.amazon.com.br/dp/B07W5JKHFZ"
        assert "request_id" not in entry

    def test_includes_request_id(self):
        token = request_id_var.set("req-123")
        try:
            entry = json.loads(JSONFormatter().format(_record()))
        finally:
            request_id_var.reset(token)
        assert entry["request_id"] == "req-123"

    def test_masks_credentials_in_extra(self):
        entry = json.loads(JSONFormatter().format(
            _record(authorization="Bearer abc", duration_ms=12)
        ))
        assert entry["extra"] == {"authorization": "********", "duration_ms": 12}

    def test_non_ascii_kept(self):
        entry = JSONFormatter().format(_record("Produto %s", ("Teclado Mecânico",)))
        assert "Mecânico" in entry


class TestResolveRequestId:
    def test_reuses_valid_client_id(self):
        assert resolve_request_id("abc-123_x.y") == "abc-123_x.y"

    def test_replaces_malformed_id(self):
        generated = resolve_request_id("bad id with spaces\n")
        assert generated != "bad id with spaces\n"
        assert len(generated) == 32

    def test_generates_when_missing(self):
        assert resolve_request_id(None) != resolve_request_id(None)
