"""Configuration loading.

Settings are loaded in priority order (highest first):
  1. Environment variables  (VCONTEXT__CORPUS__V_REPO_PATH=/opt/v)
  2. vcontext.yaml          (searched in cwd, then platform config dir)
  3. V_REPO_PATH            (the bare variable older launch scripts set)
  4. Hardcoded defaults

The config file is optional; all fields have sensible defaults.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Literal

import platformdirs
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


def _find_config_file() -> str | None:
    """Return the path of the first vcontext.yaml found, or None."""
    candidates = [
        Path("vcontext.yaml"),
        Path(platformdirs.user_config_dir("vcontext")) / "vcontext.yaml",
    ]
    for path in candidates:
        if path.exists():
            return str(path)
    return None


class ServerSettings(BaseModel):
    transport: Literal["stdio", "http"] = "stdio"
    host: str = "127.0.0.1"
    port: int = 8080


class CorpusSettings(BaseModel):
    # Checkout of the V repository: doc/, examples/ and vlib/ live under it.
    v_repo_path: str = "."
    # Optional checkout of the V UI library; only its examples/ folder is served.
    v_ui_path: str | None = None


class CacheSettings(BaseModel):
    ttl_seconds: int = Field(default=300, ge=0)
    sweep_interval_seconds: int = Field(default=600, gt=0)


class SearchSettings(BaseModel):
    max_results: int = Field(default=10, ge=1)


class LoggingSettings(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    format: Literal["json", "text"] = "json"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        # Double-underscore separates nesting: VCONTEXT__CACHE__TTL_SECONDS=60
        env_prefix="VCONTEXT__",
        env_nested_delimiter="__",
        yaml_file=_find_config_file(),
        yaml_file_encoding="utf-8",
    )

    server: ServerSettings = ServerSettings()
    corpus: CorpusSettings = CorpusSettings()
    cache: CacheSettings = CacheSettings()
    search: SearchSettings = SearchSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
        **kwargs: Any,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,  # Constructor args (highest priority)
            env_settings,  # Environment variables
            YamlConfigSettingsSource(settings_cls),  # YAML file
            # dotenv and file secrets intentionally excluded
        )

    @model_validator(mode="before")
    @classmethod
    def _apply_bare_repo_path(cls, data: Any) -> Any:
        repo_path = os.environ.get("V_REPO_PATH")
        if not repo_path or not isinstance(data, dict):
            return data
        corpus = data.get("corpus")
        if corpus is None:
            corpus = {}
        if not isinstance(corpus, dict) or "v_repo_path" in corpus:
            return data
        return {**data, "corpus": {**corpus, "v_repo_path": repo_path}}
