"""Tests for story prompt construction."""

import pytest

from prompts import build_story_prompt
from schemas import StoryRequest


class TestBuildStoryPrompt:
    def test_core_idea_only(self):
        request = StoryRequest(prompt="A lone astronaut", length="short", tone="mysterious")

        assert build_story_prompt(request) == (
            'Generate a short creative story with a mysterious tone. '
            'The core idea is: "A lone astronaut". '
            'Provide the response as a JSON object with two fields: '
            '"title" (string) and "story" (string).'
        )

    def test_defaults_to_medium_neutral(self):
        request = StoryRequest(setting="a lighthouse")

        assert build_story_prompt(request).startswith(
            "Generate a medium creative story with a neutral tone."
        )

    def test_clauses_follow_fixed_order(self):
        request = StoryRequest(
            conflict="a storm",
            setting="a lighthouse",
            main_character="Ada",
            prompt="lost letters",
            tone="dramatic",
        )
        text = build_story_prompt(request)

        positions = [
            text.index('The core idea is: "lost letters".'),
            text.index('The main character is: "Ada".'),
            text.index('The setting is: "a lighthouse".'),
            text.index('The central conflict is: "a storm".'),
        ]
        assert positions == sorted(positions)

    @pytest.mark.parametrize(
        "fields, present",
        [
            ({"prompt": "x"}, {"The core idea"}),
            ({"main_character": "x", "conflict": "y"}, {"The main character", "The central conflict"}),
            ({"setting": "x", "prompt": "   "}, {"The setting"}),
        ],
    )
    def test_one_clause_per_non_blank_field(self, fields, present):
        text = build_story_prompt(StoryRequest(**fields))

        for clause in ("The core idea", "The main character", "The setting", "The central conflict"):
            assert text.count(clause) == (1 if clause in present else 0)

    def test_wire_aliases_accepted(self):
        request = StoryRequest.model_validate(
            {"mainCharacter": "Ada", "storyLength": "long", "storyTone": "sci-fi"}
        )

        assert build_story_prompt(request).startswith(
            'Generate a long creative story with a sci-fi tone. The main character is: "Ada".'
        )
