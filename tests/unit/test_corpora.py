"""Unit tests for vcontext.corpora."""

from __future__ import annotations

import shutil
from typing import TYPE_CHECKING

import pytest

from vcontext.corpora import CorpusResolver
from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import CorpusId

if TYPE_CHECKING:
    from pathlib import Path


class TestAvailability:
    def test_all_present(self, v_repo: Path, v_ui_repo: Path) -> None:
        flags = CorpusResolver(v_repo, v_ui_repo).flags
        assert flags.docs is True
        assert flags.examples is True
        assert flags.stdlib is True
        assert flags.ui_examples is True

    def test_ui_not_configured(self, v_repo: Path) -> None:
        assert CorpusResolver(v_repo).flags.ui_examples is False

    def test_missing_repo_is_not_an_error(self, tmp_path: Path) -> None:
        flags = CorpusResolver(tmp_path / "nowhere").flags
        assert flags.model_dump() == {
            "docs": False,
            "examples": False,
            "stdlib": False,
            "ui_examples": False,
        }

    def test_trailing_separator_accepted(self, v_repo: Path) -> None:
        flags = CorpusResolver(f"{v_repo}/").flags
        assert flags.examples is True

    def test_flags_are_frozen_after_construction(self, v_repo: Path) -> None:
        resolver = CorpusResolver(v_repo)
        shutil.rmtree(v_repo / "examples")
        assert resolver.flags.examples is True
        with pytest.raises(ValueError):
            resolver.flags.examples = False  # type: ignore[misc]


class TestGet:
    def test_layout(self, v_repo: Path) -> None:
        resolver = CorpusResolver(v_repo)
        docs = resolver.get(CorpusId.DOCS)
        assert docs.root == v_repo / "doc"
        assert docs.extension == ".md"
        stdlib = resolver.get("stdlib")
        assert stdlib.root == v_repo / "vlib"
        assert stdlib.fallback_description == "module"

    def test_unknown_corpus_is_invalid_input(self, v_repo: Path) -> None:
        with pytest.raises(VContextError) as exc_info:
            CorpusResolver(v_repo).get("videos")
        assert exc_info.value.code == ErrorCode.INVALID_INPUT

    def test_unconfigured_ui_corpus_not_found(self, v_repo: Path) -> None:
        with pytest.raises(VContextError) as exc_info:
            CorpusResolver(v_repo).get(CorpusId.UI_EXAMPLES)
        assert exc_info.value.code == ErrorCode.CORPUS_NOT_FOUND

    def test_require_rechecks_disk(self, v_repo: Path) -> None:
        resolver = CorpusResolver(v_repo)
        shutil.rmtree(v_repo / "examples")
        with pytest.raises(VContextError) as exc_info:
            resolver.require(CorpusId.EXAMPLES)
        assert exc_info.value.code == ErrorCode.CORPUS_NOT_FOUND
