"""
Repository Resolver

Maps open files to the repositories that own them. Each repository is
reported once, with its backend and the checks that apply to it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .backends import BackendRegistry
from .config.models import CheckRule, GuardConfig, first_matching_rule, validate_check_list
from .session import OpenFile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RepositoryDescriptor:
    """A repository found in the session, with the checks to run on it."""
    root: Path
    backend: str
    checks: Tuple[str, ...] = ()
    source: str = ""  # Name of the open file that introduced the repository


class RepositoryResolver:
    """
    Resolves open files to unique repository descriptors.

    Check lists are chosen per repository:
    1. A valid file-local check list on the first file seen for the repository
    2. Otherwise the checks of the first rule matching the repository root
    3. Otherwise no checks
    """

    def __init__(
        self,
        backends: BackendRegistry,
        rules: Sequence[CheckRule] = (),
        known_checks: Optional[Sequence[str]] = None,
    ):
        """
        Initialize the resolver.

        Args:
            backends: Backends in priority order
            rules: Check rules in evaluation order
            known_checks: Check names accepted in file-local lists
        """
        self.backends = backends
        self.rules = list(rules)
        self.known_checks = list(known_checks) if known_checks is not None else None

    @classmethod
    def from_config(cls, config: GuardConfig) -> "RepositoryResolver":
        """Create a resolver from a configuration."""
        return cls(
            backends=config.backend_registry(),
            rules=config.rules,
            known_checks=config.known_checks,
        )

    def resolve(self, open_files: Iterable[OpenFile]) -> List[RepositoryDescriptor]:
        """
        Resolve open files to repositories.

        Files without a backing path and files no backend claims are
        skipped. When several files belong to the same repository, the
        first one in enumeration order decides its checks.

        Args:
            open_files: Open file contexts in host enumeration order

        Returns:
            Repository descriptors in first-seen order
        """
        descriptors: Dict[Path, RepositoryDescriptor] = {}

        for context in open_files:
            if context.path is None:
                continue

            claim = self.backends.responsible(context.path)
            if claim is None:
                logger.debug("No backend claims %s", context.path)
                continue
            backend, root = claim

            if root in descriptors:
                existing = descriptors[root]
                local = self._local_checks(context)
                if local is not None and tuple(local) != existing.checks:
                    logger.debug(
                        "Ignoring checks of %s for %s; %s came first",
                        context.name, root, existing.source,
                    )
                continue

            descriptors[root] = RepositoryDescriptor(
                root=root,
                backend=backend.name,
                checks=tuple(self.checks_for(context, root)),
                source=context.name,
            )

        return list(descriptors.values())

    def checks_for(self, context: OpenFile, root: Path) -> List[str]:
        """Determine the checks for a repository first seen through a file."""
        local = self._local_checks(context)
        if local is not None:
            return local

        rule = first_matching_rule(self.rules, root)
        if rule is None:
            return []
        logger.debug("Rule %r applies to %s", rule.pattern, root)
        return list(rule.checks)

    def _local_checks(self, context: OpenFile) -> Optional[List[str]]:
        """Get a file's local check list if present and valid."""
        if context.local_checks is None:
            return None
        if not validate_check_list(context.local_checks, self.known_checks):
            logger.warning(
                "Ignoring invalid local checks on %s: %r", context.name, context.local_checks
            )
            return None
        return list(context.local_checks)
