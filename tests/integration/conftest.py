"""Integration test fixtures.

The fully wired AppState and fixture repositories come from tests/conftest.py;
this module adds the environment for subprocess-based MCP wire tests.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def subprocess_env(v_repo: Path, v_ui_repo: Path) -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Forces stdio transport and points the server at the fixture repositories,
    overriding any local vcontext.yaml.
    """
    env = os.environ.copy()
    env["VCONTEXT__SERVER__TRANSPORT"] = "stdio"
    env["VCONTEXT__CORPUS__V_REPO_PATH"] = str(v_repo)
    env["VCONTEXT__CORPUS__V_UI_PATH"] = str(v_ui_repo)
    env["VCONTEXT__LOGGING__LEVEL"] = "WARNING"
    return env
