"""Security header presets."""

from __future__ import annotations

import pytest

from codeshield.middleware.security_headers import _load_presets, reset_presets_cache


@pytest.fixture(autouse=True)
def _fresh_presets():
    reset_presets_cache()
    yield
    reset_presets_cache()


class TestPresets:
    def test_presets_loaded(self):
        presets = _load_presets()
        assert {"strict", "balanced"} <= set(presets)

    @pytest.mark.parametrize("preset", ["strict", "balanced"])
    def test_no_preset_allows_scripts(self, preset):
        csp = _load_presets()[preset]["content-security-policy"]
        assert "script-src 'none'" in csp or "default-src 'none'" in csp
        assert "unsafe-inline" not in csp


class TestMiddleware:
    def test_balanced_headers_on_json(self, client):
        resp = client.get("/api/v1/state")
        assert resp.headers["x-frame-options"] == "SAMEORIGIN"
        assert resp.headers["referrer-policy"] == "strict-origin-when-cross-origin"
        assert "server" not in resp.headers

    def test_strict_preset(self, client, monkeypatch):
        monkeypatch.setenv("CODESHIELD_HEADER_PRESET", "strict")
        import codeshield.config.loader as loader
        loader._settings = None

        resp = client.get("/health")

        assert resp.headers["x-frame-options"] == "DENY"
        assert resp.headers["referrer-policy"] == "no-referrer"
