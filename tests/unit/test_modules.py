"""Unit tests for vcontext.modules."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from vcontext.errors import ErrorCode, VContextError
from vcontext.modules import describe_module, list_modules

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


class TestDescribeModule:
    def test_readme_and_files(self, v_repo: Path) -> None:
        info = describe_module(v_repo / "vlib", "os")
        assert info.name == "os"
        assert info.readme == "## Description\n\n`os` provides OS access.\n"
        assert [(f.name, f.path) for f in info.files] == [("os.v", "os/os.v")]
        assert info.files[0].size_bytes == (v_repo / "vlib" / "os" / "os.v").stat().st_size

    def test_non_recursive(self, v_repo: Path) -> None:
        info = describe_module(v_repo / "vlib", "net")
        assert [f.name for f in info.files] == ["net.v"]
        assert info.readme is None

    def test_dotted_name(self, v_repo: Path) -> None:
        info = describe_module(v_repo / "vlib", "net.http")
        assert [f.path for f in info.files] == ["net/http/http.v"]

    def test_plain_readme_name(self, v_repo: Path) -> None:
        (v_repo / "vlib" / "net" / "README").write_text("net module", encoding="utf-8")
        assert describe_module(v_repo / "vlib", "net").readme == "net module"

    def test_missing_module_suggests(self, v_repo: Path) -> None:
        with pytest.raises(VContextError) as exc_info:
            describe_module(v_repo / "vlib", "oss")
        assert exc_info.value.code == ErrorCode.MODULE_NOT_FOUND
        assert exc_info.value.suggestion.startswith("Did you mean: os?")

    def test_file_is_not_a_module(self, v_repo: Path) -> None:
        with pytest.raises(VContextError) as exc_info:
            describe_module(v_repo / "vlib", "os/os.v")
        assert exc_info.value.code == ErrorCode.MODULE_NOT_FOUND

    def test_parent_segments_cannot_escape(self, v_repo: Path) -> None:
        # Dots are module separators, so "../doc" addresses vlib/doc.
        with pytest.raises(VContextError) as exc_info:
            describe_module(v_repo / "vlib", "../doc")
        assert exc_info.value.code == ErrorCode.MODULE_NOT_FOUND

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(VContextError) as exc_info:
            describe_module(tmp_path / "vlib", "os")
        assert exc_info.value.code == ErrorCode.CORPUS_NOT_FOUND


class TestListModules:
    def test_sorted_directories_only(self, v_repo: Path) -> None:
        (v_repo / "vlib" / ".hidden").mkdir()
        (v_repo / "vlib" / "v.mod").write_text("", encoding="utf-8")
        assert list_modules(v_repo / "vlib") == ["net", "os"]

    def test_directory_that_cannot_be_stat_is_left_out(
        self, v_repo: Path, deny_stat: Callable[[str], None]
    ) -> None:
        deny_stat("net")
        assert list_modules(v_repo / "vlib") == ["os"]
