"""Prompt text sent to the generation model."""

from schemas import StoryRequest

RANDOM_PROMPT_INSTRUCTION = (
    "Generate a unique and creative story prompt, focusing on a main character, "
    "a unique setting, and an interesting conflict. Provide the response as a "
    "simple string, suitable for a text input field."
)

JSON_INSTRUCTION = (
    ' Provide the response as a JSON object with two fields: "title" (string) '
    'and "story" (string).'
)

# (request attribute, clause template), in the order they appear in the prompt
NARRATIVE_CLAUSES = (
    ("prompt", ' The core idea is: "{}".'),
    ("main_character", ' The main character is: "{}".'),
    ("setting", ' The setting is: "{}".'),
    ("conflict", ' The central conflict is: "{}".'),
)

STORY_RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "story": {"type": "string"},
    },
    "required": ["title", "story"],
    "additionalProperties": False,
}


def build_story_prompt(request: StoryRequest) -> str:
    text = f"Generate a {request.length.value} creative story with a {request.tone.value} tone."
    for attr, clause in NARRATIVE_CLAUSES:
        value = getattr(request, attr)
        if value and value.strip():
            text += clause.format(value)
    return text + JSON_INSTRUCTION
