"""Mini README: Completion clients used by the financial advisor.

Structure:
    * CompletionClient - the narrow async interface the advisor depends on.
    * LiteLLMCompletionClient - provider-agnostic implementation via litellm.
    * strip_code_fences - tolerate models that wrap JSON in markdown fences.

Tests substitute any object with an async ``complete_json`` method, so the
core never needs network access.
"""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Protocol

import litellm

from ..configuration import FundTrackSettings, get_settings
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

litellm.drop_params = True


class CompletionClient(Protocol):
    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.1,
        max_tokens: int = 1000,
    ) -> Any:
        ...


def strip_code_fences(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```json"):
        cleaned = cleaned[7:]
    if cleaned.startswith("```"):
        cleaned = cleaned[3:]
    if cleaned.endswith("```"):
        cleaned = cleaned[:-3]
    return cleaned.strip()


class LiteLLMCompletionClient:
    """Send chat completions through litellm and decode JSON replies."""

    def __init__(self, settings: Optional[FundTrackSettings] = None) -> None:
        self.settings = settings or get_settings()
        self.model = self.settings.ai_model
        LOGGER.debug("AI completion client configured for model %s", self.model)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.1,
        max_tokens: int = 1000,
        json_mode: bool = False,
    ) -> str:
        kwargs: Dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
            "max_tokens": max_tokens,
            "timeout": self.settings.ai_timeout_seconds,
        }
        if self.settings.ai_api_key:
            kwargs["api_key"] = self.settings.ai_api_key
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = await litellm.acompletion(**kwargs)
        except Exception as error:
            LOGGER.error("AI completion error: %s", error)
            raise
        return response.choices[0].message.content or ""

    async def complete_json(
        self,
        system_prompt: str,
        user_prompt: str,
        *,
        temperature: float = 0.1,
        max_tokens: int = 1000,
    ) -> Any:
        response = await self.complete(
            system_prompt,
            user_prompt,
            temperature=temperature,
            max_tokens=max_tokens,
            json_mode=True,
        )
        return json.loads(strip_code_fences(response))
