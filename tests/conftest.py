"""Shared pytest fixtures for iconfont-updater tests."""

from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from iconfont_updater.models import UpdaterConfig
from iconfont_updater.reporter import Reporter


class RecordingReporter(Reporter):
    """Collects every notification as a (level, message) pair."""

    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def info(self, message: str) -> None:
        self.messages.append(("info", message))

    def success(self, message: str) -> None:
        self.messages.append(("success", message))

    def warning(self, message: str) -> None:
        self.messages.append(("warning", message))

    def error(self, message: str) -> None:
        self.messages.append(("error", message))

    def debug(self, message: str) -> None:
        self.messages.append(("debug", message))

    def levels(self) -> List[str]:
        return [level for level, _ in self.messages]


class StaticFetcher:
    """Fetcher stand-in returning fixed content or raising a fixed error."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[str] = []

    async def fetch(self, url: str) -> str:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.content


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def static_fetcher():
    return StaticFetcher


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    return tmp_path / "static" / "iconfont.css"


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    return tmp_path / "backup"


@pytest.fixture
def make_config(output_path: Path, backup_dir: Path):
    """Build an UpdaterConfig pointing at the temp output and backup paths."""

    def _make(**overrides) -> UpdaterConfig:
        data = {
            "url": "https://at.alicdn.com/t/c/font_1474617_sprzss0xlhj.css",
            "output": str(output_path),
            "backupDir": str(backup_dir),
        }
        data.update(overrides)
        return UpdaterConfig.from_dict(data)

    return _make
