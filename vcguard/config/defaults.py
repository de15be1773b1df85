"""
Default configuration values and templates.

Provides a starting configuration with status commands for the common
version-control tools.
"""

from typing import Any, Dict, List


def get_default_backends() -> List[Dict[str, Any]]:
    """Get default backend definitions in priority order."""
    return [
        {
            "name": "git",
            "marker": ".git",
            "checks": {
                "changes": {"command": "git status --porcelain --untracked-files=no"},
                "untracked": {"command": "git ls-files --others --exclude-standard"},
                "unpushed": {"command": "git log --branches --not --remotes --oneline"},
                "dirty": {"command": "git status --porcelain"},
            },
            # Set with: git config vcguard.autocommit true
            "auto_commit": {
                "command": ["sh", "-c", "test \"$(git config --bool --get vcguard.autocommit)\" = true"],
                "mode": "success",
            },
        },
        {
            "name": "hg",
            "marker": ".hg",
            "checks": {
                "changes": {"command": "hg status --modified --added --removed --deleted"},
                "untracked": {"command": "hg status --unknown"},
                # Exits 1 when there is nothing outgoing
                "unpushed": {
                    "command": "hg outgoing --quiet --template '{node|short}\\n'",
                    "ok_status": [0, 1],
                    "timeout": 30,
                },
                "dirty": {"command": "hg status"},
            },
        },
        {
            "name": "svn",
            "marker": ".svn",
            "checks": {
                "changes": {"command": "svn status --quiet"},
                "untracked": {
                    "command": ["sh", "-c", "out=$(svn status) || exit 2; printf '%s\\n' \"$out\" | grep '^?'"],
                    "ok_status": [0, 1],
                },
                # Commits go straight to the server
                "unpushed": {"command": "true", "mode": "status"},
                "dirty": {"command": "svn status"},
            },
        },
    ]


def get_default_rules() -> List[Dict[str, Any]]:
    """Get default check rules."""
    return [
        {
            "pattern": ".",
            "checks": ["changes", "untracked", "unpushed"],
        },
    ]


def get_default_config() -> Dict[str, Any]:
    """Get the complete default configuration."""
    return {
        "checks": [],
        "backends": get_default_backends(),
        "rules": get_default_rules(),
    }
