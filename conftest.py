"""Pytest configuration shared by the cache sweeper tests."""

# pylint: disable=wrong-import-position

import os
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

import pytest

GITHUB_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN", "GITHUB_REPOSITORY", "GITHUB_API_URL", "GITHUB_STEP_SUMMARY")


@pytest.fixture(autouse=True)
def isolated_github_env(tmp_path, monkeypatch):
    """Keep tests away from the developer's real token, repository and ~/.env.

    Points CACHE_SWEEP_ENV_FILE at an empty temporary .env so load_dotenv never
    reads the home directory.
    """
    for name in GITHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    monkeypatch.setenv("CACHE_SWEEP_ENV_FILE", str(env_file))
    yield str(env_file)
    # load_dotenv writes straight to os.environ; monkeypatch restores originals afterwards
    for name in GITHUB_ENV_VARS:
        os.environ.pop(name, None)
