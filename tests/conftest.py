import os
import sys

import pytest

# Ensure repository root importable early
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from delver import create_app  # noqa: E402
from delver.routes.dungeon_api import clear_cache  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    app = create_app({"TESTING": True})
    return app


@pytest.fixture()
def client(test_app):
    return test_app.test_client()


@pytest.fixture(autouse=True)
def _clear_dungeon_cache():
    """Cached dungeons must not leak between tests that tweak app config."""
    clear_cache()
    yield
    clear_cache()


@pytest.fixture(autouse=True)
def _no_metrics_override(monkeypatch):
    monkeypatch.delenv("DELVER_ENABLE_GENERATION_METRICS", raising=False)
