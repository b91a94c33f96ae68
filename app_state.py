"""
Client state and the pure transitions applied to it.

Every function takes an AppState and returns a new one; nothing here performs
I/O. StoryClient (story_client.py) wires these to the relay and to storage.
"""
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional, Tuple

from schemas import SavedStory, StoryLength, StoryRequest, StoryResult, StoryTone

UNTITLED = "Untitled Story"
NO_CONTENT = "No story content generated."


@dataclass(frozen=True)
class AppState:
    # Form inputs
    prompt: str = ""
    main_character: str = ""
    setting: str = ""
    conflict: str = ""
    length: StoryLength = StoryLength.MEDIUM
    tone: StoryTone = StoryTone.NEUTRAL

    # Transient UI state
    is_loading: bool = False
    error: str = ""
    story_title: str = ""
    story: str = ""

    saved_stories: Tuple[SavedStory, ...] = field(default_factory=tuple)

    @property
    def has_result(self) -> bool:
        return bool(self.story and self.story_title)


def initial_state(saved_stories=()) -> AppState:
    return AppState(saved_stories=tuple(saved_stories))


def can_generate(state: AppState) -> bool:
    """At least one narrative field filled in and nothing in flight."""
    if state.is_loading:
        return False
    return any(
        value.strip()
        for value in (state.prompt, state.main_character, state.setting, state.conflict)
    )


def to_request(state: AppState) -> StoryRequest:
    return StoryRequest(
        prompt=state.prompt,
        main_character=state.main_character,
        setting=state.setting,
        conflict=state.conflict,
        length=state.length,
        tone=state.tone,
    )


def _clear_inputs(state: AppState) -> AppState:
    return replace(state, prompt="", main_character="", setting="", conflict="")


def _clear_result(state: AppState) -> AppState:
    return replace(state, story_title="", story="", error="")


def begin_generation(state: AppState) -> AppState:
    return replace(_clear_result(state), is_loading=True)


def generation_succeeded(state: AppState, result: StoryResult) -> AppState:
    return replace(
        state,
        story_title=result.title or UNTITLED,
        story=result.story or NO_CONTENT,
    )


def generation_failed(state: AppState, message: str) -> AppState:
    return replace(state, error=f"Error: {message}")


def begin_random_prompt(state: AppState) -> AppState:
    return replace(_clear_result(_clear_inputs(state)), is_loading=True)


def random_prompt_received(state: AppState, prompt: str) -> AppState:
    return replace(state, prompt=prompt)


def finish_loading(state: AppState) -> AppState:
    return replace(state, is_loading=False)


def new_saved_story(state: AppState, now: datetime) -> SavedStory:
    """Build a SavedStory for the current result, stamped with `now`."""
    story_id = int(now.timestamp() * 1000)
    # ids must stay unique even for saves within the same millisecond
    taken = {s.id for s in state.saved_stories}
    while story_id in taken:
        story_id += 1
    return SavedStory(
        id=story_id,
        title=state.story_title,
        content=state.story,
        date=f"{now.month}/{now.day}/{now.year}, {now.hour % 12 or 12}:{now:%M:%S %p}",
    )


def add_saved_story(state: AppState, story: SavedStory) -> AppState:
    return replace(state, saved_stories=state.saved_stories + (story,))


def find_saved_story(state: AppState, story_id: int) -> Optional[SavedStory]:
    return next((s for s in state.saved_stories if s.id == story_id), None)


def load_saved_story(state: AppState, story_id: int) -> AppState:
    saved = find_saved_story(state, story_id)
    if saved is None:
        raise KeyError(story_id)
    return replace(_clear_inputs(state), story_title=saved.title, story=saved.content)


def remove_saved_story(state: AppState, story_id: int) -> AppState:
    return replace(
        state,
        saved_stories=tuple(s for s in state.saved_stories if s.id != story_id),
    )


def reset_all(state: AppState) -> AppState:
    """Back to initial values; the saved list is left alone."""
    return initial_state(state.saved_stories)


def clipboard_text(state: AppState) -> str:
    if not state.story:
        return ""
    return f"{state.story_title}\n\n{state.story}"
