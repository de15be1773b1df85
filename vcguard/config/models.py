"""
Pydantic models for configuration validation.

These models define the schema for backends, status commands, check
rules and session files.
"""

import re
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from ..backends import MARKERS, BackendRegistry, CommandPredicate, PredicateRegistry, VCBackend


class CommandMode(str, Enum):
    """How a command's result is turned into a boolean."""
    OUTPUT = "output"
    STATUS = "status"
    SUCCESS = "success"


BUILTIN_CHECKS: Dict[str, str] = {
    "changes": "uncommitted changes",
    "untracked": "untracked files",
    "unpushed": "unpushed commits",
    "dirty": "a dirty working tree",
}


def validate_check_list(value: Any, known: Optional[List[str]] = None) -> bool:
    """
    Check that a value is a usable list of check names.

    Used before trusting a file-local check list: it must be a list or
    tuple of strings, each naming a known check.

    Args:
        value: Candidate check list
        known: Known check names (built-in checks if omitted)

    Returns:
        True if the value can be used as a check list
    """
    if not isinstance(value, (list, tuple)):
        return False
    names = set(known) if known is not None else set(BUILTIN_CHECKS)
    return all(isinstance(item, str) and item in names for item in value)


# ============================================================
# Checks and Commands
# ============================================================

class CheckDefinition(BaseModel):
    """A named status check and the wording used in prompts."""

    name: str = Field(..., description="Check name used in rules")
    human_name: str = Field(..., description="Phrase used in confirmation prompts")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not re.match(r"^[A-Za-z][\w-]*$", v):
            raise ValueError(f"Invalid check name: {v!r}")
        return v


class CommandSpec(BaseModel):
    """A shell command evaluating one check."""

    command: Union[str, List[str]] = Field(..., description="Command line or argument list")
    mode: CommandMode = Field(default=CommandMode.OUTPUT, description="Result interpretation")
    timeout: float = Field(default=10.0, description="Timeout in seconds")
    ok_status: List[int] = Field(default_factory=lambda: [0], description="Exit statuses accepted in output mode")

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: Union[str, List[str]]) -> Union[str, List[str]]:
        if isinstance(v, str) and not v.strip():
            raise ValueError("Command must not be empty")
        if isinstance(v, list) and not v:
            raise ValueError("Command must not be empty")
        return v

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    def to_predicate(self) -> CommandPredicate:
        """Build the predicate running this command."""
        return CommandPredicate(
            self.command, mode=self.mode.value, timeout=self.timeout, ok_status=self.ok_status
        )


# ============================================================
# Backends and Rules
# ============================================================

class BackendConfig(BaseModel):
    """Configuration for one version-control backend."""

    name: str = Field(..., description="Backend name (git, hg, svn, ...)")
    marker: Optional[str] = Field(None, description="Entry marking a repository root")
    checks: Dict[str, CommandSpec] = Field(default_factory=dict, description="Check commands")
    auto_commit: Optional[CommandSpec] = Field(None, description="Auto-commit detection command")

    @model_validator(mode="after")
    def set_marker(self):
        """Default the marker from the backend name."""
        if self.marker is None:
            self.marker = MARKERS.get(self.name.lower())
        if not self.marker:
            raise ValueError(f"Backend '{self.name}' needs a marker")
        return self


class CheckRule(BaseModel):
    """Checks applied to repositories whose root matches a pattern."""

    pattern: str = Field(..., description="Regular expression searched in the repository root")
    checks: List[str] = Field(default_factory=list, description="Ordered check names")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid pattern {v!r}: {e}")
        return v

    def matches(self, root: Union[str, Path]) -> bool:
        """Check whether the rule applies to a repository root."""
        return re.search(self.pattern, str(root)) is not None


def first_matching_rule(rules: Sequence[CheckRule], root: Union[str, Path]) -> Optional[CheckRule]:
    """Get the first rule in evaluation order matching a repository root."""
    for rule in rules:
        if rule.matches(root):
            return rule
    return None


# ============================================================
# Main Configuration
# ============================================================

class GuardConfig(BaseModel):
    """
    Complete vcguard configuration.

    Backends are listed in priority order and rules in evaluation
    order; for both, the first match wins.
    """

    checks: List[CheckDefinition] = Field(default_factory=list, description="Extra check definitions")
    backends: List[BackendConfig] = Field(default_factory=list, description="Backends in priority order")
    rules: List[CheckRule] = Field(default_factory=list, description="Check rules, first match wins")

    @model_validator(mode="after")
    def validate_references(self):
        """Ensure backend names are unique and every check name is known."""
        seen = set()
        for backend in self.backends:
            if backend.name in seen:
                raise ValueError(f"Duplicate backend: {backend.name}")
            seen.add(backend.name)

        known = set(self.check_definitions())
        for backend in self.backends:
            unknown = [c for c in backend.checks if c not in known]
            if unknown:
                raise ValueError(f"Backend '{backend.name}' defines unknown checks: {', '.join(unknown)}")
        for rule in self.rules:
            unknown = [c for c in rule.checks if c not in known]
            if unknown:
                raise ValueError(f"Rule '{rule.pattern}' uses unknown checks: {', '.join(unknown)}")
        return self

    def check_definitions(self) -> Dict[str, str]:
        """Map every known check name to its human name."""
        definitions = dict(BUILTIN_CHECKS)
        for check in self.checks:
            definitions[check.name] = check.human_name
        return definitions

    @property
    def known_checks(self) -> List[str]:
        """All known check names."""
        return list(self.check_definitions())

    def backend_registry(self) -> BackendRegistry:
        """Build the backend registry in configured priority order."""
        return BackendRegistry(VCBackend(name=b.name, marker=b.marker) for b in self.backends)

    def predicate_registry(self) -> PredicateRegistry:
        """Build the predicate registry from the configured commands."""
        registry = PredicateRegistry()
        for backend in self.backends:
            for check, spec in backend.checks.items():
                registry.register(backend.name, check, spec.to_predicate())
            if backend.auto_commit is not None:
                registry.register_auto_commit(backend.name, backend.auto_commit.to_predicate())
        return registry


# ============================================================
# Session Files
# ============================================================

class OpenFileEntry(BaseModel):
    """An open file listed in a session file."""

    path: Optional[str] = Field(None, description="Backing file, omitted for non-file contexts")
    checks: Optional[Any] = Field(None, description="File-local check list, validated when resolving")
    name: str = Field(default="", description="Display name")


class SessionFile(BaseModel):
    """Open files of an editing session, in enumeration order."""

    open_files: List[OpenFileEntry] = Field(default_factory=list)
