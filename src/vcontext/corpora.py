"""Corpus root resolution.

The resolver is built once at startup from the configured repository paths.
It records whether each corpus root exists as immutable AvailabilityFlags;
absence is data, never an error at construction time.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType

import structlog

from vcontext.errors import ErrorCode, VContextError
from vcontext.models.corpus import AvailabilityFlags, Corpus, CorpusId

log = structlog.get_logger()

# corpus id → (sub-path under its repository, extension, listing fallback)
_LAYOUT: dict[CorpusId, tuple[str, str, str]] = {
    CorpusId.DOCS: ("doc", ".md", "documentation"),
    CorpusId.EXAMPLES: ("examples", ".v", "example"),
    CorpusId.STDLIB: ("vlib", ".v", "module"),
    CorpusId.UI_EXAMPLES: ("examples", ".v", "example"),
}


def _probe(root: Path) -> bool:
    try:
        return root.is_dir()
    except OSError:
        return False


class CorpusResolver:
    """Maps corpus ids to their root paths and availability."""

    def __init__(self, v_repo_path: str | Path, v_ui_path: str | Path | None = None) -> None:
        self.v_repo_path = Path(v_repo_path).expanduser()
        self.v_ui_path = Path(v_ui_path).expanduser() if v_ui_path else None

        corpora: dict[CorpusId, Corpus] = {}
        for corpus_id, (sub_path, extension, fallback) in _LAYOUT.items():
            if corpus_id is CorpusId.UI_EXAMPLES:
                if self.v_ui_path is None:
                    continue
                root = self.v_ui_path / sub_path
            else:
                root = self.v_repo_path / sub_path
            corpora[corpus_id] = Corpus(
                id=corpus_id,
                root=root,
                extension=extension,
                fallback_description=fallback,
                available=_probe(root),
            )

        self._corpora = MappingProxyType(corpora)
        self.flags = AvailabilityFlags(
            **{corpus_id.value: corpus.available for corpus_id, corpus in corpora.items()}
        )
        log.info("corpora_resolved", **self.flags.model_dump())

    def get(self, corpus_id: CorpusId | str) -> Corpus:
        """Return the corpus for ``corpus_id`` without touching the filesystem."""
        try:
            key = CorpusId(corpus_id)
        except ValueError as exc:
            raise VContextError(
                code=ErrorCode.INVALID_INPUT,
                message=f"Unknown corpus: {corpus_id!r}",
                suggestion=f"Use one of: {', '.join(c.value for c in CorpusId)}.",
            ) from exc

        corpus = self._corpora.get(key)
        if corpus is None:
            raise VContextError(
                code=ErrorCode.CORPUS_NOT_FOUND,
                message=f"Corpus '{key}' is not configured.",
                suggestion="Set VCONTEXT__CORPUS__V_UI_PATH to a V UI checkout.",
            )
        return corpus

    def require(self, corpus_id: CorpusId | str) -> Corpus:
        """Return the corpus, re-checking that its root still exists on disk."""
        corpus = self.get(corpus_id)
        if not _probe(corpus.root):
            raise VContextError(
                code=ErrorCode.CORPUS_NOT_FOUND,
                message=f"Corpus '{corpus.id}' not found at {corpus.root}.",
                suggestion="Check that VCONTEXT__CORPUS__V_REPO_PATH points at a V checkout.",
            )
        return corpus
