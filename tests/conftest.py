"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import Callable, List

import pytest

from vcguard.backends import BackendRegistry, PredicateRegistry, VCBackend
from vcguard.config import ConfigLoader, GuardConfig
from vcguard.session import EditorSession


class RecordingConfirm:
    """Confirmation callback that records prompts and replays answers."""

    def __init__(self, *answers: bool):
        self.answers = list(answers)
        self.messages: List[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[..., Path]:
    """Factory creating a repository directory with a backend marker."""

    def _make_repo(name: str, marker: str = ".git") -> Path:
        root = tmp_path / name
        (root / marker).mkdir(parents=True)
        return root

    return _make_repo


@pytest.fixture
def backends() -> BackendRegistry:
    """git, hg and svn backends in that priority order."""
    return BackendRegistry([
        VCBackend(name="git", marker=".git"),
        VCBackend(name="hg", marker=".hg"),
        VCBackend(name="svn", marker=".svn"),
    ])


@pytest.fixture
def predicates() -> PredicateRegistry:
    """Empty predicate registry."""
    return PredicateRegistry()


@pytest.fixture
def session() -> EditorSession:
    """Empty editing session."""
    return EditorSession()


@pytest.fixture
def guard_config() -> GuardConfig:
    """Configuration with a notes rule before a catch-all rule."""
    return ConfigLoader.from_dict({
        "backends": [
            {"name": "git", "checks": {
                "changes": {"command": "git status --porcelain --untracked-files=no"},
                "untracked": {"command": "git ls-files --others --exclude-standard"},
                "unpushed": {"command": "git log --branches --not --remotes --oneline"},
            }},
            {"name": "hg", "checks": {"changes": {"command": "hg status -mard"}}},
        ],
        "rules": [
            {"pattern": "notes$", "checks": ["untracked"]},
            {"pattern": ".", "checks": ["changes", "unpushed"]},
        ],
    }).config


@pytest.fixture
def recording_confirm() -> Callable[..., RecordingConfirm]:
    """Factory for confirmation callbacks answering in order."""
    return RecordingConfirm
