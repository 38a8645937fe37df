# services/ai/groq_client.py
from __future__ import annotations
import logging
from typing import Dict, List, Optional

import httpx

from core.exceptions import AIServiceError, APIKeyMissingError, InvalidResponseError
from core.interfaces import TextGenerator

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama-3.1-8b-instant"


class GroqChatClient(TextGenerator):
    """Minimal async client for Groq's OpenAI-compatible chat completions."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 15.0,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings_obj=None) -> "GroqChatClient":
        from config import get_settings

        s = settings_obj or get_settings()
        return cls(
            api_key=s.GROQ_API_KEY,
            model=s.GROQ_MODEL,
            base_url=s.GROQ_BASE_URL,
            timeout=s.HTTP_TIMEOUT_S,
        )

    async def complete(
        self, messages: List[Dict[str, str]], json_mode: bool = False
    ) -> str:
        if not self.api_key:
            raise APIKeyMissingError("GROQ_API_KEY is not set.")

        payload: Dict[str, object] = {"model": self.model, "messages": messages}
        if json_mode:
            payload["response_format"] = {"type": "json_object"}

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/chat/completions"

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.post(url, headers=headers, json=payload)
                resp.raise_for_status()
                data = resp.json()
        except httpx.HTTPStatusError as e:
            # include provider body text for easier debugging
            raise AIServiceError(f"Groq HTTP error {e.response.status_code}: {e.response.text}")
        except httpx.HTTPError as e:
            raise AIServiceError(f"Groq request failed: {e}")
        except ValueError as e:
            raise InvalidResponseError(f"Groq returned non-JSON body: {e}")

        content = _first_content(data)
        if not content:
            raise InvalidResponseError("Groq returned an empty response.")
        return content


def _first_content(data: dict) -> Optional[str]:
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices:
        return None
    message = choices[0].get("message") or {}
    return message.get("content")
