"""
Product Catalog Backend: Configuration Tests
============================================
"""

import pytest
from pydantic import ValidationError

from app.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for var in ("PORT", "NAME", "UPLOAD_MODE", "REQUIRE_PRODUCT_FIELDS"):
            monkeypatch.delenv(var, raising=False)

        s = Settings(_env_file=None)

        assert s.port == 3000
        assert s.name == "World"
        assert s.upload_mode == "multipart"
        assert s.accepts_uploads is True
        assert s.require_product_fields is False

    def test_reads_port_and_name_from_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("NAME", "Bangkok")

        s = Settings(_env_file=None)

        assert s.port == 8080
        assert s.name == "Bangkok"

    def test_url_only_mode(self):
        s = Settings(upload_mode="url_only")
        assert s.accepts_uploads is False

    def test_unknown_upload_mode_rejected(self):
        with pytest.raises(ValidationError):
            Settings(upload_mode="s3")

    def test_upload_url_prefix_normalized(self):
        assert Settings(upload_url_prefix="media/").upload_url_prefix == "/media"

    def test_log_level_normalized(self):
        assert Settings(log_level="debug").log_level == "DEBUG"

    def test_invalid_log_level_rejected(self):
        with pytest.raises(ValidationError):
            Settings(log_level="LOUD")

    def test_cors_origins_list(self):
        s = Settings(cors_origins="http://a.test, http://b.test")
        assert s.cors_origins_list == ["http://a.test", "http://b.test"]
