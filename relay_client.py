import logging

import requests
from pydantic import ValidationError

from errors import EmptyResultError, TransportError, UpstreamError
from schemas import StoryRequest, StoryResult

logger = logging.getLogger(__name__)


class RelayClient:
    """Talks to the relay's HTTP endpoints."""

    def __init__(self, base_url: str, session: requests.Session = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def _post(self, path: str, fallback_error: str, payload: dict = None) -> dict:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(url, json=payload)
        except requests.RequestException as e:
            logger.error(f"Could not reach relay at {url}: {e}")
            raise TransportError(str(e)) from e

        if not response.ok:
            try:
                message = response.json().get("error") or fallback_error
            except (ValueError, AttributeError):
                message = fallback_error
            raise UpstreamError(message, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Relay at {url} answered with a non-JSON body: {e}")
            raise EmptyResultError(fallback_error) from e
        if not isinstance(data, dict):
            logger.error(f"Relay at {url} answered with {type(data).__name__}, expected an object")
            raise EmptyResultError(fallback_error)
        return data

    def generate_story(self, request: StoryRequest) -> StoryResult:
        fallback_error = "Failed to fetch story from backend."
        data = self._post("/generate-story", fallback_error, payload=request.to_payload())
        try:
            return StoryResult(title=data.get("title") or "", story=data.get("story") or "")
        except ValidationError as e:
            logger.error(f"Relay returned an unusable story: {e}")
            raise EmptyResultError(fallback_error) from e

    def generate_random_prompt(self) -> str:
        fallback_error = "Failed to generate random prompt from backend."
        data = self._post("/generate-random-prompt", fallback_error)
        prompt = data.get("prompt") or ""
        if not isinstance(prompt, str):
            raise EmptyResultError(fallback_error)
        return prompt
