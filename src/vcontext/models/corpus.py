from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class CorpusId(StrEnum):
    DOCS = "docs"
    EXAMPLES = "examples"
    STDLIB = "stdlib"
    UI_EXAMPLES = "ui_examples"


@dataclass(frozen=True)
class Corpus:
    """A named, read-only collection of files under a root path."""

    id: CorpusId
    root: Path
    extension: str  # Recognised file extension, including the dot
    fallback_description: str  # Used by listings when no usable line exists
    available: bool


class AvailabilityFlags(BaseModel):
    """Per-corpus presence computed once at startup."""

    model_config = ConfigDict(frozen=True)

    docs: bool = False
    examples: bool = False
    stdlib: bool = False
    ui_examples: bool = False


class SearchResult(BaseModel):
    """Single matching line returned by a search."""

    line: int  # 1-based
    content: str
    context: str | None = None  # Only populated by the documentation search
    file: str  # POSIX path relative to the corpus root
    score: float
    pattern: str


class ListingEntry(BaseModel):
    name: str  # Filename without extension
    path: str
    description: str


class ModuleFile(BaseModel):
    name: str
    path: str  # Relative to the stdlib root
    size_bytes: int


class ModuleInfo(BaseModel):
    name: str
    readme: str | None = None
    files: list[ModuleFile] = []


class Item(BaseModel):
    """Full text of a single corpus file."""

    name: str
    path: str
    content: str


class DocSection(BaseModel):
    """Heading-delimited block of a Markdown documentation page."""

    title: str
    level: int  # 1-4
    line: int  # 1-based line of the heading
    content: str
