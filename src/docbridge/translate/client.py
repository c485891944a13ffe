from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import httpx

from ..core.errors import TranslationError
from ..core.logging import log
from ..core.models import DocType
from .prompts import build_translation_prompt

if TYPE_CHECKING:
    from ..core.config import Settings


class Translator(Protocol):
    """Anything that turns text into translated text or raises TranslationError."""

    def translate(self, text: str, doc_type: DocType) -> str: ...


class ClaudeTranslator:
    """Translator backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str,
        api_url: str = "https://api.anthropic.com/v1/messages",
        model: str = "claude-3-5-sonnet-20240620",
        max_tokens: int = 8192,
        api_version: str = "2023-06-01",
        language: str = "Japanese",
        timeout: float = 300.0,
        client: httpx.Client | None = None,
    ):
        if not api_key:
            raise ValueError("api_key is required")
        self.api_url = api_url
        self.model = model
        self.max_tokens = max_tokens
        self.language = language
        self._client = client or httpx.Client(timeout=timeout)
        self._headers = {
            "x-api-key": api_key,
            "anthropic-version": api_version,
            "content-type": "application/json",
        }

    @classmethod
    def from_settings(cls, settings: Settings, client: httpx.Client | None = None) -> ClaudeTranslator:
        return cls(
            api_key=settings.CLAUDE_API_KEY or "",
            api_url=settings.CLAUDE_API_URL,
            model=settings.CLAUDE_MODEL,
            max_tokens=settings.CLAUDE_MAX_TOKENS,
            api_version=settings.CLAUDE_API_VERSION,
            language=settings.TRANSLATION_TARGET_LANGUAGE,
            timeout=settings.CLAUDE_TIMEOUT_SECONDS,
            client=client,
        )

    def __enter__(self) -> ClaudeTranslator:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def build_payload(self, text: str, doc_type: DocType) -> dict[str, Any]:
        return {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [
                {
                    "role": "user",
                    "content": build_translation_prompt(text, doc_type, self.language),
                }
            ],
        }

    def translate(self, text: str, doc_type: DocType) -> str:
        """Translate text in a single request.

        Raises:
            TranslationError: transport failure, non-2xx status, or a reply
                without text content.
        """
        try:
            response = self._client.post(
                self.api_url,
                headers=self._headers,
                json=self.build_payload(text, doc_type),
            )
        except httpx.HTTPError as e:
            log.error("claude.request.failed", error=str(e), url=self.api_url)
            raise TranslationError(f"Claude API request failed: {e}") from e

        if not response.is_success:
            log.error(
                "claude.api.error",
                status=response.status_code,
                body=response.text[:500],
            )
            raise TranslationError(f"Claude API error: HTTP {response.status_code}")

        return _extract_text(response)


def _extract_text(response: httpx.Response) -> str:
    try:
        data = response.json()
        translated = data["content"][0]["text"]
    except (ValueError, KeyError, IndexError, TypeError) as e:
        log.error("claude.response.malformed", error=str(e), body=response.text[:500])
        raise TranslationError("Claude API response missing text content") from e

    if not isinstance(translated, str) or not translated:
        log.error("claude.response.empty")
        raise TranslationError("Claude API returned empty text")
    return translated
