"""Statement Summarizer - optional AI summary appended to new statements.

Invariants:
    - Disabled unless settings.use_ai_summary is true; disabled means no API call
    - The client is closed by aclose() once the request that built it ends
    - Never raises: summarizer failures are logged and the text is kept as submitted
    - The combined text never exceeds STATEMENT_TEXT_MAX_LENGTH; otherwise the
      summary is dropped
"""

import logging
from typing import Protocol

from speechkarma.config import Settings
from speechkarma.core.domain_types import STATEMENT_TEXT_MAX_LENGTH
from speechkarma.core.errors import SummaryAPIError
from speechkarma.infrastructure.anthropic_client import AnthropicSummaryClient

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a political analyst. Create very concise, objective summaries of "
    "political statements. Keep summaries to 1-2 sentences maximum. Focus on "
    "the key message or claim. Reply with the summary only."
)
SUMMARY_SEPARATOR = "\n\n---\n\n📝 AI Summary: "


class CompletionClient(Protocol):
    async def complete(self, *, system: str, prompt: str) -> str: ...

    async def aclose(self) -> None: ...


def append_summary(statement_text: str, summary: str) -> str:
    return f"{statement_text}{SUMMARY_SEPARATOR}{summary}"


class StatementSummarizer:
    def __init__(self, client: CompletionClient | None, enabled: bool):
        self._client = client
        self.enabled = enabled and client is not None

    @classmethod
    def from_settings(cls, settings: Settings) -> "StatementSummarizer":
        if not settings.use_ai_summary:
            return cls(None, enabled=False)
        client = AnthropicSummaryClient(
            api_key=settings.anthropic_api_key,
            model=settings.summary_model,
            max_tokens=settings.summary_max_tokens,
            timeout_seconds=settings.summary_timeout_seconds,
        )
        return cls(client, enabled=True)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()

    async def summarize(self, statement_text: str) -> str | None:
        if not self.enabled:
            return None
        try:
            return await self._client.complete(
                system=SUMMARY_SYSTEM_PROMPT,
                prompt=(
                    "Summarize this political statement concisely:\n\n"
                    f'"{statement_text}"'
                ),
            )
        except SummaryAPIError as e:
            logger.warning(f"AI summary generation failed: {e.message}")
            return None

    async def enrich(self, statement_text: str) -> str:
        """Return the text to store: with the summary appended when one fits."""
        summary = await self.summarize(statement_text)
        if not summary:
            return statement_text
        combined = append_summary(statement_text, summary)
        if len(combined) > STATEMENT_TEXT_MAX_LENGTH:
            logger.info("AI summary dropped: combined text exceeds length limit")
            return statement_text
        return combined
