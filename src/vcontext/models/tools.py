from __future__ import annotations

import re

from pydantic import BaseModel, field_validator

from vcontext.models.corpus import (
    AvailabilityFlags,
    CorpusId,
    ListingEntry,
    SearchResult,
)

MAX_QUERY_LENGTH = 500

_NAME_RE = re.compile(r"^[A-Za-z0-9_][A-Za-z0-9_./-]*$")


def _check_name(v: str, what: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError(f"{what} must not be empty")
    if len(v) > MAX_QUERY_LENGTH:
        raise ValueError(f"{what} must be at most {MAX_QUERY_LENGTH} characters")
    if not _NAME_RE.match(v) or ".." in v.split("/"):
        raise ValueError(f"Invalid {what}: {v!r}")
    return v


class SearchInput(BaseModel):
    corpus: CorpusId
    query: str

    @field_validator("query")
    @classmethod
    def validate_query(cls, v: str) -> str:
        # The minimum length is enforced by the search engine itself.
        v = v.strip()
        if len(v) > MAX_QUERY_LENGTH:
            raise ValueError(f"query must be at most {MAX_QUERY_LENGTH} characters")
        return v


class SearchOutput(BaseModel):
    corpus: CorpusId
    query: str
    results: list[SearchResult]


class ListInput(BaseModel):
    corpus: CorpusId


class ListOutput(BaseModel):
    corpus: CorpusId
    items: list[ListingEntry]


class GetItemInput(BaseModel):
    corpus: CorpusId
    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v, "name")


class DescribeModuleInput(BaseModel):
    module_name: str

    @field_validator("module_name")
    @classmethod
    def validate_module_name(cls, v: str) -> str:
        return _check_name(v, "module_name")


class ListModulesOutput(BaseModel):
    modules: list[str]


class DocSectionInput(BaseModel):
    topic: str = ""

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, v: str) -> str:
        v = v.strip()
        if len(v) > MAX_QUERY_LENGTH:
            raise ValueError(f"topic must be at most {MAX_QUERY_LENGTH} characters")
        return v


class DocHeadingsOutput(BaseModel):
    path: str
    headings: str  # "<line>: <heading line>" per line


class CacheClearOutput(BaseModel):
    removed: int


class CacheStatsOutput(BaseModel):
    entry_count: int
    ttl_seconds: int


class ConfigOutput(BaseModel):
    v_repo_path: str
    v_ui_path: str | None
    availability: AvailabilityFlags
    ttl_seconds: int
    max_results: int
