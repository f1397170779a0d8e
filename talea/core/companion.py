"""AI travel companion backed by an OpenAI-compatible chat endpoint."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional

import httpx

from talea.core.errors import CompanionError, InvalidQuestionError
from talea.schemas import Tale

DEFAULT_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
DEFAULT_TIMEOUT = float(os.getenv("LLM_TIMEOUT", "60"))

SYSTEM_PROMPT = (
    "You are Talea, a friendly travel companion. Suggest experiences, "
    "practical tips and itinerary ideas in a few short paragraphs."
)

_LOGGER = logging.getLogger(__name__)


def _describe(tales: Iterable[Tale]) -> str:
    lines = []
    for tale in tales:
        details = ", ".join(part for part in (tale.type.value, tale.location) if part)
        lines.append(f"- {tale.title} ({details})")
    return "\n".join(lines)


@dataclass
class TravelCompanion:
    """Small wrapper around the chat completions API."""

    model: str = DEFAULT_MODEL
    timeout: Optional[float] = DEFAULT_TIMEOUT
    api_key: Optional[str] = os.getenv("OPENAI_API_KEY")
    base_url: str = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")

    def _post(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        try:
            response = httpx.post(
                f"{self.base_url.rstrip('/')}/chat/completions",
                json=dict(payload),
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise CompanionError(f"Companion request failed: {exc}") from exc

    @staticmethod
    def extract_content(response: Mapping[str, Any]) -> str:
        choices = response.get("choices") if isinstance(response, Mapping) else None
        if not isinstance(choices, list) or not choices:
            raise CompanionError("Companion response did not contain any choices")
        first = choices[0]
        if not isinstance(first, Mapping):
            raise CompanionError("Companion response contained a malformed choice")
        message = first.get("message") or {}
        content = message.get("content") if isinstance(message, Mapping) else None
        if not isinstance(content, str) or not content.strip():
            raise CompanionError("Companion response did not contain content")
        return content.strip()

    def ask(self, question: str, *, saved: Iterable[Tale] = ()) -> str:
        """Answer ``question``, using the traveller's saved tales as context."""

        cleaned = question.strip()
        if not cleaned:
            raise InvalidQuestionError("Ask the companion a question first.")
        if not self.api_key:
            raise CompanionError("OPENAI_API_KEY environment variable is not set")

        messages: List[Dict[str, str]] = [{"role": "system", "content": SYSTEM_PROMPT}]
        context = _describe(saved)
        if context:
            messages.append({"role": "system", "content": f"The traveller has saved:\n{context}"})
        messages.append({"role": "user", "content": cleaned})

        _LOGGER.debug("Calling companion model %s", self.model)
        response = self._post({"model": self.model, "messages": messages})
        return self.extract_content(response)


__all__ = ["TravelCompanion"]
