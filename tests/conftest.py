"""Shared test fixtures for the vcontext test suite."""

from __future__ import annotations

import errno
import pathlib
from typing import TYPE_CHECKING

import pytest

from vcontext.cache import TTLCache
from vcontext.config import Settings
from vcontext.corpora import CorpusResolver
from vcontext.state import AppState

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

DOCS_MD = """\
# V Documentation

## Introduction

V is a statically typed compiled programming language.
It is designed for building maintainable software.

## Structs

Structs group related fields together.

```v
# not a heading
struct Point {
    x int
    y int
}
```

### Struct methods

Methods are functions with a receiver.

## Modules

Every file in the root of a folder is part of the same module.
"""

HELLO_WORLD_V = """\
// Hello world example
fn main() {
\tprintln('hello world')
}
"""

FIBONACCI_V = """\
// Prints the first Fibonacci numbers
import os

fn fib(n int) int {
\tif n <= 1 {
\t\treturn n
\t}
\treturn fib(n - 1) + fib(n - 2)
}
"""

RECTANGLES_V = """\
module main

import gg

fn main() {
\tmut context := gg.new_context()
}
"""


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture()
def v_repo(tmp_path: Path) -> Path:
    """A miniature V checkout: doc/, examples/ and vlib/."""
    repo = tmp_path / "v"
    _write(repo / "doc" / "docs.md", DOCS_MD)
    _write(repo / "doc" / "upcoming.md", "# Upcoming\n\nFeatures that are not released yet.\n")
    _write(repo / "examples" / "hello_world.v", HELLO_WORLD_V)
    _write(repo / "examples" / "fibonacci.v", FIBONACCI_V)
    _write(repo / "examples" / "gg" / "rectangles.v", RECTANGLES_V)
    _write(repo / "vlib" / "os" / "os.v", "module os\n\npub fn getenv(key string) string\n")
    _write(repo / "vlib" / "os" / "README.md", "## Description\n\n`os` provides OS access.\n")
    _write(repo / "vlib" / "net" / "net.v", "module net\n")
    _write(repo / "vlib" / "net" / "http" / "http.v", "module http\n\npub fn get(url string)\n")
    return repo


@pytest.fixture()
def v_ui_repo(tmp_path: Path) -> Path:
    repo = tmp_path / "ui"
    _write(repo / "examples" / "button.v", "import ui\n\nfn main() {\n\tui.button(text: 'Ok')\n}\n")
    return repo


@pytest.fixture()
def settings(v_repo: Path, v_ui_repo: Path) -> Settings:
    return Settings(corpus={"v_repo_path": str(v_repo), "v_ui_path": str(v_ui_repo)})


@pytest.fixture()
def app_state(settings: Settings) -> AppState:
    """AppState wired against the fixture repositories."""
    corpora = CorpusResolver(settings.corpus.v_repo_path, settings.corpus.v_ui_path)
    return AppState(
        settings=settings,
        corpora=corpora,
        cache=TTLCache(settings.cache.ttl_seconds),
    )


@pytest.fixture()
def deny_stat(monkeypatch: pytest.MonkeyPatch) -> Callable[[str], None]:
    """Make ``Path.is_dir`` raise EACCES for entries with the given name."""
    real_is_dir = pathlib.Path.is_dir

    def _deny(blocked: str) -> None:
        def is_dir(self: pathlib.Path, *args: object, **kwargs: object) -> bool:
            if self.name == blocked:
                raise PermissionError(errno.EACCES, "Permission denied", str(self))
            return real_is_dir(self, *args, **kwargs)

        monkeypatch.setattr(pathlib.Path, "is_dir", is_dir)

    return _deny
