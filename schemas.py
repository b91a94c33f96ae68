from enum import Enum
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class StoryLength(str, Enum):
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class StoryTone(str, Enum):
    NEUTRAL = "neutral"
    MYSTERIOUS = "mysterious"
    HUMOROUS = "humorous"
    DRAMATIC = "dramatic"
    FANTASY = "fantasy"
    SCI_FI = "sci-fi"
    HORROR = "horror"
    ROMANTIC = "romantic"


class StoryRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    prompt: Optional[str] = ""
    main_character: Optional[str] = Field("", alias="mainCharacter")
    setting: Optional[str] = ""
    conflict: Optional[str] = ""
    # Older clients send storyLength / storyTone
    length: StoryLength = Field(
        StoryLength.MEDIUM, validation_alias=AliasChoices("length", "storyLength")
    )
    tone: StoryTone = Field(
        StoryTone.NEUTRAL, validation_alias=AliasChoices("tone", "storyTone")
    )

    def has_narrative(self) -> bool:
        """True when at least one narrative field is non-blank."""
        return any(
            (value or "").strip()
            for value in (self.prompt, self.main_character, self.setting, self.conflict)
        )

    def to_payload(self) -> dict:
        return {
            "prompt": self.prompt or "",
            "mainCharacter": self.main_character or "",
            "setting": self.setting or "",
            "conflict": self.conflict or "",
            "length": self.length.value,
            "tone": self.tone.value,
        }


class StoryResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    story: str


class RandomPrompt(BaseModel):
    prompt: str


class ErrorResponse(BaseModel):
    error: str


class SavedStory(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    title: str
    content: str
    date: str
