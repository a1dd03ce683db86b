"""Standard-library module introspection.

Unlike listings, module description is non-recursive: only the direct
children of the module directory are reported, in filesystem order.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import ModuleFile, ModuleInfo
from vcontext.reader import read_text
from vcontext.suggest import format_suggestion, suggest_names
from vcontext.walker import is_directory, is_regular_file, relative_path

if TYPE_CHECKING:
    from pathlib import Path

log = structlog.get_logger()

README_NAMES = ("README.md", "README")


def _require_root(root: Path) -> None:
    if not is_directory(root):
        raise VContextError(
            code=ErrorCode.CORPUS_NOT_FOUND,
            message=f"Standard library not found at {root}.",
            suggestion="Check that VCONTEXT__CORPUS__V_REPO_PATH points at a V checkout.",
        )


def list_modules(root: Path) -> list[str]:
    """Return the names of top-level modules (direct sub-directories), sorted."""
    _require_root(root)
    try:
        children = list(root.iterdir())
    except OSError:
        log.debug("stdlib_root_unreadable", path=str(root), exc_info=True)
        return []
    return sorted(
        child.name
        for child in children
        if not child.name.startswith(".") and is_directory(child)
    )


def describe_module(root: Path, module_name: str, extension: str = ".v") -> ModuleInfo:
    """Return the README and direct source files of ``module_name``.

    Dotted names address nested modules: ``net.http`` → ``<root>/net/http``.
    """
    _require_root(root)

    parts = [part for part in re.split(r"[./]", module_name) if part]
    module_dir = root.joinpath(*parts)
    if not module_dir.resolve().is_relative_to(root.resolve()):
        raise VContextError(
            code=ErrorCode.INVALID_INPUT,
            message=f"Invalid module name: {module_name!r}",
            suggestion="Use a module name such as 'os' or 'net.http'.",
        )

    if not parts or not is_directory(module_dir):
        suggestions = suggest_names(module_name, list_modules(root))
        raise VContextError(
            code=ErrorCode.MODULE_NOT_FOUND,
            message=f"Module '{module_name}' not found in the standard library.",
            suggestion=format_suggestion(
                "Call list_v_stdlib_modules to see the available modules.", suggestions
            ),
        )

    readme: str | None = None
    for readme_name in README_NAMES:
        readme_path = module_dir / readme_name
        if not is_regular_file(readme_path):
            continue
        try:
            readme = read_text(readme_path)
        except VContextError as exc:
            log.debug("module_readme_unreadable", module=module_name, code=exc.code)
        break

    try:
        children = list(module_dir.iterdir())
    except OSError:
        log.debug("module_directory_unreadable", module=module_name, exc_info=True)
        children = []

    files: list[ModuleFile] = []
    for child in children:
        if not child.name.endswith(extension):
            continue
        try:
            if not child.is_file():
                continue
            size_bytes = child.stat().st_size
        except OSError:
            log.debug("module_file_unreadable", path=str(child), exc_info=True)
            continue
        files.append(
            ModuleFile(name=child.name, path=relative_path(child, root), size_bytes=size_bytes)
        )

    return ModuleInfo(name=module_name, readme=readme, files=files)
