"""Game-over commentary from Gemini."""

from __future__ import annotations

import os
from typing import Any

from google import genai

DEFAULT_MODEL = "gemini-2.5-flash"

NO_KEY_MESSAGE = "Great game! (Add API Key for AI roasting)"
EMPTY_MESSAGE = "Game Over. Try again!"
ERROR_MESSAGE = "Connection lost... but your skills remain questionable."

PROMPT_TEMPLATE = """
You are a sarcastic, retro arcade machine personality from the 1980s.
The player just lost a game of Snake.
Their Score: {score}.
Their High Score: {high_score}.

Generate a short, witty, slightly roasting or encouraging one-sentence comment (max 20 words) based on their performance.
If the score is low (< 5), roast them hard.
If the score is high (> 20), praise them but keep it cool.
Don't use quotes.
"""


def build_prompt(score: int, high_score: int) -> str:
    return PROMPT_TEMPLATE.format(score=score, high_score=high_score)


class CommentaryService:
    """Generates a one-line remark about a finished run.

    ``generate`` never raises: a missing key, a network failure or an
    empty response all resolve to a fixed fallback line.
    """

    def __init__(self, client: Any = None, model: str = DEFAULT_MODEL):
        self._client = client
        self.model = model

    @classmethod
    def from_env(cls, model: str = DEFAULT_MODEL) -> CommentaryService:
        """Build a service from GEMINI_API_KEY (or API_KEY), if set."""
        api_key = os.environ.get("GEMINI_API_KEY") or os.environ.get("API_KEY")
        if not api_key:
            return cls(client=None, model=model)
        return cls(client=genai.Client(api_key=api_key), model=model)

    @property
    def enabled(self) -> bool:
        return self._client is not None

    async def generate(self, score: int, high_score: int) -> str:
        if self._client is None:
            return NO_KEY_MESSAGE

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=build_prompt(score, high_score),
            )
            text = str(getattr(response, "text", "") or "").strip()
        except Exception as e:
            print(f"Error generating commentary: {e}")
            return ERROR_MESSAGE

        return text or EMPTY_MESSAGE
