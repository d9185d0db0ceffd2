"""
JSON file store for the task document.

Reads and writes the whole {tasks, nextId} document at a fixed path.
Reads never fail: a missing, unreadable or corrupt file is served as the
empty document. Writes do fail loudly with StorageWriteError.

There is no locking and no atomic rename. Each save fully replaces the
file, so two writers racing on the same path lose one of the updates.
"""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from .models import TaskDocument

logger = logging.getLogger(__name__)


class StorageWriteError(Exception):
    """Raised when the task document cannot be written to disk."""

    pass


class JsonTaskStore:
    """
    Load/save primitive for a single JSON task document.

    Example:
        >>> store = JsonTaskStore(Path("data/tasks.json"))
        >>> doc = store.load()          # empty document on first run
        >>> store.save(doc)
    """

    def __init__(self, path: Path | str):
        """
        Initialize the store.

        Args:
            path: Location of the JSON document (need not exist yet)
        """
        self.path = Path(path)

    def load(self) -> TaskDocument:
        """
        Read and parse the backing file.

        Returns:
            The stored document, or an empty document if the file is
            missing or cannot be read, decoded or validated
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug("No task file at %s, starting empty", self.path)
            return TaskDocument()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read %s, starting empty: %s", self.path, e)
            return TaskDocument()

        try:
            data = json.loads(raw)
            return TaskDocument.model_validate(data)
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning("Invalid task file %s, starting empty: %s", self.path, e)
            return TaskDocument()

    def save(self, doc: TaskDocument) -> None:
        """
        Serialize ``doc`` and overwrite the backing file.

        Output is pretty-printed with 2-space indentation and a trailing
        newline; keys keep model order so diffs stay readable.

        Args:
            doc: Complete document to persist

        Raises:
            StorageWriteError: If the directory or file cannot be written
        """
        payload = json.dumps(doc.to_json_dict(), indent=2, ensure_ascii=False) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", self.path, e)
            raise StorageWriteError(f"Failed to write {self.path}: {e}") from e
