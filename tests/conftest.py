"""Shared test fixtures for gram tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from gram.contracts.config import GramConfig
from gram.contracts.settings import SettingsRecord

SETTINGS_TOML = """\
description = "This is a test repository"

[settings]
merge.allow-squash = false
merge.allow-merge-commit = true
branches.default = "main"
"""


@pytest.fixture
def desired_record() -> SettingsRecord:
    """A record as the loader would build it from ``SETTINGS_TOML``."""
    return SettingsRecord(
        description="This is a test repository",
        settings={
            "merge.allow-squash": False,
            "merge.allow-merge-commit": True,
            "branches.default": "main",
        },
    )


@pytest.fixture
def settings_file(tmp_path: Path) -> Path:
    path = tmp_path / "settings.toml"
    path.write_text(SETTINGS_TOML, encoding="utf-8")
    return path


@pytest.fixture
def token_config() -> GramConfig:
    return GramConfig(auth="token", token="tok_123", max_retries=0)
