"""Tests for environment-driven settings."""

from __future__ import annotations

from content_eval.config import Settings


class TestSettings:
    def test_defaults(self, monkeypatch) -> None:
        for name in (
            "LINK_CHECK_TIMEOUT",
            "LINK_CHECK_BATCH_SIZE",
            "TREAT_RESTRICTED_AS_WORKING",
            "MAX_UPLOAD_BYTES",
            "OPENAI_CHAT_MODEL",
            "OPENAI_TEMPERATURE",
            "LOG_LEVEL",
        ):
            monkeypatch.delenv(name, raising=False)
        s = Settings()
        assert s.link_check_timeout == 5.0
        assert s.link_check_batch_size == 5
        assert s.treat_restricted_as_working is True
        assert s.max_upload_bytes == 10 * 1024 * 1024
        assert s.openai_chat_model == "gpt-4o"
        assert s.openai_temperature == 0.7
        assert s.log_level == "INFO"

    def test_env_overrides(self, monkeypatch) -> None:
        monkeypatch.setenv("LINK_CHECK_BATCH_SIZE", "3")
        monkeypatch.setenv("TREAT_RESTRICTED_AS_WORKING", "no")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("OPENAI_BASE_URL", "http://localhost:8080/v1")
        s = Settings()
        assert s.link_check_batch_size == 3
        assert s.treat_restricted_as_working is False
        assert s.log_level == "DEBUG"
        assert s.openai_base_url == "http://localhost:8080/v1"

    def test_bool_spellings(self, monkeypatch) -> None:
        for value in ("1", "true", "YES", " on "):
            monkeypatch.setenv("TREAT_RESTRICTED_AS_WORKING", value)
            assert Settings().treat_restricted_as_working is True
