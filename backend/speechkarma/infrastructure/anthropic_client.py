"""Anthropic Summary Client - wraps AsyncAnthropic with timeouts and error mapping.

Invariants:
    - Exactly one API attempt per call (SDK retries disabled)
    - All SDK failures mapped to SummaryAPIError (core/errors.py)
    - Returns the concatenated text blocks of the response, stripped

Design Decisions:
    - Wrapper over raw client: isolates SDK error types from the service layer
"""

import logging

import anthropic
from anthropic import (
    APIError,
    APIConnectionError,
    APITimeoutError,
    RateLimitError,
)

from speechkarma.core.errors import SummaryAPIError

logger = logging.getLogger(__name__)


class AnthropicSummaryClient:
    """Single-shot text completion used for statement summaries."""

    def __init__(
        self,
        api_key: str,
        model: str,
        max_tokens: int = 150,
        timeout_seconds: int = 30,
    ):
        self.client = anthropic.AsyncAnthropic(
            api_key=api_key,
            timeout=timeout_seconds,
            max_retries=0,
        )
        self.model = model
        self.max_tokens = max_tokens

    async def aclose(self) -> None:
        """Release the SDK client's HTTP connection pool."""
        await self.client.close()

    async def complete(self, *, system: str, prompt: str) -> str:
        """Send one user prompt, return the model's text."""
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=0.3,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        except RateLimitError as e:
            raise SummaryAPIError(str(e), "rate_limit")
        except APITimeoutError:
            raise SummaryAPIError("API timeout", "timeout")
        except APIConnectionError as e:
            raise SummaryAPIError(str(e), "connection_error")
        except APIError as e:
            raise SummaryAPIError(str(e), "client_error")

        self._log_success(response)
        text = "".join(
            block.text for block in response.content
            if getattr(block, "type", None) == "text"
        ).strip()
        if not text:
            raise SummaryAPIError("Response contained no text", "empty_response")
        return text

    def _log_success(self, response) -> None:
        usage = response.usage
        logger.info(
            "Anthropic API success",
            extra={
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )
