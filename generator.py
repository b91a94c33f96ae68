import logging
from typing import Optional

import openai
from openai import OpenAI
from pydantic import ValidationError

from config import Settings
from errors import ConfigurationError, EmptyResultError, TransportError, UpstreamError
from prompts import RANDOM_PROMPT_INSTRUCTION, STORY_RESPONSE_SCHEMA, build_story_prompt
from schemas import StoryRequest, StoryResult

logger = logging.getLogger(__name__)

STORY_FALLBACK_ERROR = "Failed to fetch story from AI."
PROMPT_FALLBACK_ERROR = "Failed to fetch random prompt from AI."


def clean_json_string(text: str) -> str:
    start = text.find('{')
    end = text.rfind('}')
    if start != -1 and end != -1:
        return text[start:end+1]
    return text


def upstream_message(exc: openai.APIStatusError, fallback: str) -> str:
    """Pull the human-readable message out of an upstream error body."""
    body = exc.body
    # Gemini sometimes wraps the error object in a one-element list
    if isinstance(body, list) and body:
        body = body[0]
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        if isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
    return fallback


class StoryGenerator:
    """Sends single-turn prompts to the upstream model."""

    def __init__(self, settings: Settings, client: Optional[OpenAI] = None):
        if not settings.gemini_api_key:
            raise ConfigurationError("Server configuration error: API key missing.")
        self.model = settings.gemini_model
        self.client = client or OpenAI(
            base_url=settings.gemini_base_url,
            api_key=settings.gemini_api_key,
            max_retries=0,
        )

    def _complete(self, prompt: str, fallback_error: str, **kwargs) -> Optional[str]:
        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                **kwargs,
            )
        except openai.APIStatusError as e:
            logger.error(
                f"Upstream API error: {e}",
                extra={"status_code": e.status_code, "error_type": type(e).__name__},
            )
            raise UpstreamError(upstream_message(e, fallback_error), e.status_code) from e
        except openai.APIConnectionError as e:
            logger.error(f"Could not reach upstream API: {e}", extra={"error_type": type(e).__name__})
            raise TransportError(f"Server error: {e}") from e
        except openai.APIError as e:
            logger.error(f"Upstream API call failed: {e}", extra={"error_type": type(e).__name__})
            raise TransportError(f"Server error: {e}") from e

        if not completion.choices:
            return None
        return completion.choices[0].message.content

    def generate_story(self, request: StoryRequest) -> StoryResult:
        prompt = build_story_prompt(request)
        logger.debug(f"Story prompt: {prompt}")

        raw_content = self._complete(
            prompt,
            STORY_FALLBACK_ERROR,
            response_format={
                "type": "json_schema",
                "json_schema": {"name": "story", "schema": STORY_RESPONSE_SCHEMA, "strict": True},
            },
        )
        if not raw_content or not raw_content.strip():
            raise EmptyResultError("No story generated by AI.")

        try:
            return StoryResult.model_validate_json(clean_json_string(raw_content))
        except ValidationError as e:
            logger.error(f"Upstream returned an unusable story: {e}")
            raise EmptyResultError("No story generated by AI.") from e

    def generate_random_prompt(self) -> str:
        raw_content = self._complete(RANDOM_PROMPT_INSTRUCTION, PROMPT_FALLBACK_ERROR)
        if not raw_content or not raw_content.strip():
            raise EmptyResultError("No random prompt generated by AI.")
        return raw_content.strip()
