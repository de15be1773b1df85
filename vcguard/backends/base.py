"""Version-control backend base class."""

import logging
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


class VCBackend:
    """
    A version-control backend that can claim files.

    A backend is responsible for a path when one of the path's parent
    directories contains its marker entry (``.git``, ``.hg``, ...). The
    closest such directory is the repository root.
    """

    name: str = "base"
    marker: str = ""

    def __init__(self, name: Optional[str] = None, marker: Optional[str] = None):
        if name is not None:
            self.name = name
        if marker is not None:
            self.marker = marker
        if not self.marker:
            raise ValueError(f"Backend '{self.name}' has no marker entry")

    def responsible(self, path: Path) -> Optional[Path]:
        """
        Find the repository root owning a path.

        Args:
            path: File or directory to look up

        Returns:
            The repository root, or None if this backend does not manage
            the path
        """
        path = Path(path)
        start = path if path.is_dir() else path.parent
        for directory in (start, *start.parents):
            if (directory / self.marker).exists():
                return directory
        return None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, marker={self.marker!r})"
