from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Keep `import browser_tools` and `import tests...` working when running `pytest` from the repo root.
_REPO_ROOT = Path(__file__).resolve().parents[1]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))

from browser_tools.runtime.dependencies import build_runtime_deps  # noqa: E402
from tests.utils import make_png, make_settings  # noqa: E402


@pytest.fixture
def settings(tmp_path: Path):
    return make_settings(tmp_path)


@pytest.fixture
def deps(settings):
    return build_runtime_deps(settings)


@pytest.fixture
def png() -> bytes:
    return make_png()
