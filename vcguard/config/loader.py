"""
Configuration loader for YAML files.

Handles loading and validation of the guard configuration and of
session files listing open files.
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from .defaults import get_default_config
from .models import GuardConfig, SessionFile
from ..errors import VCGuardError
from ..session import EditorSession, OpenFile

CONFIG_ENV_VAR = "VCGUARD_CONFIG"
DEFAULT_CONFIG_FILES = ["vcguard.yaml", "vcguard.yml"]


class ConfigError(VCGuardError):
    """Configuration loading or validation error."""
    pass


class ConfigLoader:
    """
    Loads and validates vcguard configuration from YAML files.

    Lookup order when no path is given: the VCGUARD_CONFIG environment
    variable, then vcguard.yaml / vcguard.yml in the current directory,
    then the built-in defaults.
    """

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """
        Initialize the config loader.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[GuardConfig] = None

    def load(self) -> "ConfigLoader":
        """
        Load the configuration.

        Returns:
            Self for method chaining
        """
        path = self.config_path or self.find_config_file()

        if path is None:
            self._config = self._parse_config(get_default_config())
            return self

        if not path.is_file():
            raise ConfigError(f"Configuration file does not exist: {path}")

        self.config_path = path
        self._config = self._parse_config(self._read_yaml(path))
        return self

    @staticmethod
    def find_config_file(cwd: Optional[Path] = None) -> Optional[Path]:
        """Locate a configuration file from the environment or the working directory."""
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            return Path(env_path).expanduser()

        cwd = cwd or Path.cwd()
        for filename in DEFAULT_CONFIG_FILES:
            candidate = cwd / filename
            if candidate.is_file():
                return candidate
        return None

    def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a YAML file."""
        try:
            with open(file_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {file_path}: {e}")
        except IOError as e:
            raise ConfigError(f"Cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping at the top of {file_path}")
        return data

    def _parse_config(self, data: Dict[str, Any]) -> GuardConfig:
        """Parse the guard configuration."""
        try:
            return GuardConfig(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}")

    @property
    def config(self) -> GuardConfig:
        """Get the loaded configuration."""
        if self._config is None:
            raise ConfigError("Configuration has not been loaded")
        return self._config

    def load_session(self, session_path: Union[str, Path]) -> EditorSession:
        """
        Load an editing session from a YAML session file.

        File-local check lists are carried as-is; they are validated when
        repositories are resolved.

        Args:
            session_path: Path to the session file

        Returns:
            EditorSession with the listed open files
        """
        session_path = Path(session_path)
        if not session_path.is_file():
            raise ConfigError(f"Session file does not exist: {session_path}")

        data = self._read_yaml(session_path)
        try:
            session_file = SessionFile(**data)
        except ValidationError as e:
            raise ConfigError(f"Invalid session file: {e}")

        base = session_path.parent
        session = EditorSession()
        for entry in session_file.open_files:
            path = None
            if entry.path:
                path = Path(entry.path).expanduser()
                if not path.is_absolute():
                    path = base / path
            session.open_files.append(OpenFile(path=path, local_checks=entry.checks, name=entry.name))
        return session

    def save(self, output_path: Union[str, Path]) -> None:
        """
        Save the current configuration to a YAML file.

        Args:
            output_path: File to write
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w") as f:
            yaml.dump(
                self.config.model_dump(mode="json", exclude_none=True),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConfigLoader":
        """
        Create a ConfigLoader from a dictionary.

        Useful for programmatic configuration.
        """
        loader = cls()
        loader._config = loader._parse_config(data)
        return loader


def session_from_paths(paths: List[Union[str, Path]]) -> EditorSession:
    """Build a session whose open files are the given paths, without overrides."""
    session = EditorSession()
    for path in paths:
        session.open(path)
    return session
