"""Client-local storage of the logged-in viewer."""

import logging
from pathlib import Path

from pydantic import ValidationError

from conduit.errors import StorageError
from conduit.session import Viewer

logger = logging.getLogger(__name__)


class ViewerStore:
    """Keeps one serialized Viewer in a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def load(self) -> Viewer | None:
        """Load the stored viewer.

        Returns:
            Viewer if a valid one is stored, None otherwise
        """
        if not self.path.exists():
            return None
        try:
            return Viewer.model_validate_json(self.path.read_text())
        except (OSError, UnicodeDecodeError, ValidationError) as e:
            # Corrupted file - start as guest
            logger.warning(f"Ignoring unreadable viewer file {self.path}: {e}")
            return None

    def store(self, viewer: Viewer) -> None:
        """Persist the viewer, replacing any previous one."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(viewer.model_dump_json(indent=2))
        except OSError as e:
            raise StorageError(f"Could not store viewer at {self.path}: {e}") from e
        logger.debug(f"Stored viewer {viewer.username}")

    def delete(self) -> None:
        """Remove the stored viewer. Missing files are fine."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError(f"Could not delete viewer at {self.path}: {e}") from e
        logger.debug("Deleted stored viewer")
