"""Shared pytest fixtures for buildstamp tests."""

import logging

import pytest

BUILD_ENV_VARS = ["CI", "BUILD_NUMBER", "COMMIT_ID", "BUILDSTAMP_LOG_LEVEL"]


@pytest.fixture(autouse=True)
def clean_build_env(monkeypatch):
    """Run every test as a local build, even when the suite itself runs on CI."""
    for name in BUILD_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def reset_log_level():
    """Undo log level changes made by CLI flags."""
    yield
    logging.getLogger("buildstamp").setLevel(logging.INFO)


@pytest.fixture
def ci_env():
    """Environment of a CI build with full metadata."""
    return {"CI": "true", "BUILD_NUMBER": "42", "COMMIT_ID": "abcdef1234567"}


@pytest.fixture
def project_dir(tmp_path):
    """A project directory with a minimal pyproject.toml."""
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "flux"\nversion = "2.3.0"\n\n'
        '[tool.buildstamp]\nsubprojects = ["flux-x88"]\n'
    )
    return tmp_path


def lifecycle_messages(caplog, message):
    """Return captured buildstamp records whose message equals ``message``."""
    return [
        r for r in caplog.records
        if r.name.startswith("buildstamp") and r.getMessage() == message
    ]
