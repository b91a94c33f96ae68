"""Local durable storage for the client.

`LocalStorage` is a small string key/value store kept in one JSON file, the
desktop counterpart of a browser's localStorage. Saved stories are kept under
SAVED_STORIES_KEY as a JSON-encoded list, in insertion order.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import TypeAdapter

from schemas import SavedStory

logger = logging.getLogger(__name__)

SAVED_STORIES_KEY = "aiStories"

_saved_stories_adapter = TypeAdapter(List[SavedStory])


class LocalStorage:
    """String key/value store backed by a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not hold a key/value object")
        return data

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except (OSError, ValueError) as e:
            logger.warning(f"Discarding unreadable local storage at {self.path}: {e}")
            data = {}
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        tmp_path.replace(self.path)


def load_saved_stories(storage: LocalStorage) -> List[SavedStory]:
    """Read the saved list. Unreadable data counts as no saved stories yet."""
    try:
        raw = storage.get_item(SAVED_STORIES_KEY)
        if not raw:
            return []
        return _saved_stories_adapter.validate_json(raw)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load stories from local storage: {e}")
        return []


def write_saved_stories(storage: LocalStorage, stories: List[SavedStory]) -> None:
    """Rewrite the whole saved list."""
    storage.set_item(
        SAVED_STORIES_KEY,
        _saved_stories_adapter.dump_json(list(stories)).decode("utf-8"),
    )
