"""Unit tests for settings loading."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from pydantic import ValidationError

from vcontext.config import Settings

if TYPE_CHECKING:
    from pathlib import Path


class TestDefaults:
    def test_defaults(self) -> None:
        settings = Settings()
        assert settings.server.transport == "stdio"
        assert settings.cache.ttl_seconds == 300
        assert settings.search.max_results == 10
        assert settings.corpus.v_ui_path is None


class TestEnvironment:
    def test_nested_env_override(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("VCONTEXT__CORPUS__V_REPO_PATH", str(tmp_path))
        monkeypatch.setenv("VCONTEXT__CACHE__TTL_SECONDS", "60")
        monkeypatch.setenv("VCONTEXT__SEARCH__MAX_RESULTS", "25")
        settings = Settings()
        assert settings.corpus.v_repo_path == str(tmp_path)
        assert settings.cache.ttl_seconds == 60
        assert settings.search.max_results == 25

    def test_invalid_max_results_rejected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VCONTEXT__SEARCH__MAX_RESULTS", "0")
        with pytest.raises(ValidationError):
            Settings()

    def test_constructor_args_beat_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("VCONTEXT__CACHE__TTL_SECONDS", "60")
        assert Settings(cache={"ttl_seconds": 5}).cache.ttl_seconds == 5

    def test_bare_v_repo_path_is_honoured(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("V_REPO_PATH", str(tmp_path))
        settings = Settings()
        assert settings.corpus.v_repo_path == str(tmp_path)
        assert settings.corpus.v_ui_path is None

    def test_prefixed_repo_path_beats_bare_variable(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path
    ) -> None:
        monkeypatch.setenv("V_REPO_PATH", "/somewhere/else")
        monkeypatch.setenv("VCONTEXT__CORPUS__V_REPO_PATH", str(tmp_path))
        assert Settings().corpus.v_repo_path == str(tmp_path)
