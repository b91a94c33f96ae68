import logging
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Callable, Optional

import app_state
from app_state import AppState
from errors import StoryServiceError, TransportError
from relay_client import RelayClient
from storage import LocalStorage, load_saved_stories, write_saved_stories

logger = logging.getLogger(__name__)

CONNECTIVITY_ERROR = "Could not reach the story server. Ensure backend is running."
SAVED_NOTICE = "Story saved successfully!"
NOTHING_TO_SAVE_NOTICE = "No story to save!"


class StoryClient:
    """Owns the client's AppState and performs the I/O behind each action."""

    def __init__(
        self,
        relay: RelayClient,
        storage: LocalStorage,
        clock: Callable[[], datetime] = datetime.now,
        on_change: Optional[Callable[[AppState], None]] = None,
    ):
        self.relay = relay
        self.storage = storage
        self.clock = clock
        self.on_change = on_change
        self.state = app_state.initial_state(load_saved_stories(storage))

    def _set(self, state: AppState) -> None:
        self.state = state
        if self.on_change:
            self.on_change(state)

    @contextmanager
    def _loading(self, begin):
        """Apply `begin` (which raises the loading flag) and always lower it on exit."""
        self._set(begin(self.state))
        try:
            yield
        except TransportError as e:
            logger.error(f"Relay unreachable: {e}")
            self._set(app_state.generation_failed(self.state, CONNECTIVITY_ERROR))
        except StoryServiceError as e:
            logger.error(f"Relay call failed: {e.message}")
            self._set(app_state.generation_failed(self.state, e.message))
        finally:
            self._set(app_state.finish_loading(self.state))

    def update_fields(self, **fields) -> None:
        """Edit form inputs (prompt, main_character, setting, conflict, length, tone)."""
        self._set(replace(self.state, **fields))

    def submit_generation(self) -> bool:
        """Generate a story from the current inputs. Returns False when not allowed."""
        if not app_state.can_generate(self.state):
            return False
        request = app_state.to_request(self.state)
        with self._loading(app_state.begin_generation):
            result = self.relay.generate_story(request)
            self._set(app_state.generation_succeeded(self.state, result))
        return True

    def request_random_prompt(self) -> bool:
        if self.state.is_loading:
            return False
        with self._loading(app_state.begin_random_prompt):
            prompt = self.relay.generate_random_prompt()
            self._set(app_state.random_prompt_received(self.state, prompt))
        return True

    def persist_current_story(self) -> str:
        """Save the displayed story. Returns the notice to show the user."""
        if not self.state.has_result:
            return NOTHING_TO_SAVE_NOTICE
        saved = app_state.new_saved_story(self.state, self.clock())
        updated = app_state.add_saved_story(self.state, saved)
        write_saved_stories(self.storage, updated.saved_stories)
        self._set(updated)
        return SAVED_NOTICE

    def load_saved_story(self, story_id: int) -> None:
        self._set(app_state.load_saved_story(self.state, story_id))

    def delete_saved_story(self, story_id: int) -> None:
        updated = app_state.remove_saved_story(self.state, story_id)
        write_saved_stories(self.storage, updated.saved_stories)
        self._set(updated)

    def reset_all(self) -> None:
        self._set(app_state.reset_all(self.state))

    def clipboard_text(self) -> str:
        return app_state.clipboard_text(self.state)
