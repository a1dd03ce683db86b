from __future__ import annotations

from vcontext.models.cache import CacheEntry
from vcontext.models.corpus import (
    AvailabilityFlags,
    Corpus,
    CorpusId,
    DocSection,
    Item,
    ListingEntry,
    ModuleFile,
    ModuleInfo,
    SearchResult,
)
from vcontext.models.tools import (
    CacheClearOutput,
    CacheStatsOutput,
    ConfigOutput,
    DescribeModuleInput,
    DocHeadingsOutput,
    DocSectionInput,
    GetItemInput,
    ListInput,
    ListModulesOutput,
    ListOutput,
    SearchInput,
    SearchOutput,
)

__all__ = [
    # cache
    "CacheEntry",
    # corpus
    "AvailabilityFlags",
    "Corpus",
    "CorpusId",
    "DocSection",
    "Item",
    "ListingEntry",
    "ModuleFile",
    "ModuleInfo",
    "SearchResult",
    # tools
    "CacheClearOutput",
    "CacheStatsOutput",
    "ConfigOutput",
    "DescribeModuleInput",
    "DocHeadingsOutput",
    "DocSectionInput",
    "GetItemInput",
    "ListInput",
    "ListModulesOutput",
    "ListOutput",
    "SearchInput",
    "SearchOutput",
]
