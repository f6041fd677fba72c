"""
Claude API Client

Single-turn prompts against the Anthropic Messages API. Calls never
raise on API failure; they return a CompletionResponse with
success=False so candidate generation can degrade to an empty list.
"""

import os
import asyncio
import logging
from typing import Any, Dict, Optional
from dataclasses import dataclass

import anthropic

logger = logging.getLogger(__name__)

# USD per million tokens (input, output)
MODEL_PRICING = {
    "claude-sonnet-4-20250514": (3.0, 15.0),
    "claude-3-5-haiku-20241022": (0.8, 4.0),
}
DEFAULT_PRICING = (3.0, 15.0)

# Errors worth another attempt; everything else (bad request, auth) fails fast
RETRYABLE_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


@dataclass
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    def add(self, other: "TokenUsage"):
        self.input_tokens += other.input_tokens
        self.output_tokens += other.output_tokens

    def cost(self, model: str) -> float:
        input_rate, output_rate = MODEL_PRICING.get(model, DEFAULT_PRICING)
        return (self.input_tokens * input_rate + self.output_tokens * output_rate) / 1_000_000


@dataclass
class CompletionResponse:
    """Text returned by one completion, or the reason there is none."""
    content: str
    usage: TokenUsage
    model: str
    stop_reason: str
    success: bool = True
    error: Optional[str] = None
    retryable: bool = True

    @classmethod
    def failure(
        cls,
        model: str,
        error: str,
        stop_reason: str = "error",
        retryable: bool = True,
    ) -> "CompletionResponse":
        return cls(
            content="",
            usage=TokenUsage(),
            model=model,
            stop_reason=stop_reason,
            success=False,
            error=error,
            retryable=retryable,
        )


class ClaudeClient:
    """
    Async Claude client with cumulative token accounting.

    The API key comes from the argument or ANTHROPIC_API_KEY; a missing
    key is a configuration error and raises ValueError. Each request is
    bounded by `timeout` seconds.
    """

    DEFAULT_MODEL = "claude-sonnet-4-20250514"
    MAX_TOKENS = 2000
    TEMPERATURE = 0.3
    REQUEST_TIMEOUT = 20.0

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        retry_base_delay: float = 1.0,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.api_key = api_key or os.getenv("ANTHROPIC_API_KEY")
        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY not provided")

        self.model = model or self.DEFAULT_MODEL
        self.retry_base_delay = retry_base_delay
        # Retries happen in complete_with_retry, not inside the SDK
        self.async_client = anthropic.AsyncAnthropic(
            api_key=self.api_key,
            timeout=timeout,
            max_retries=0,
        )

        self.total_usage = TokenUsage()
        self.call_count = 0

    @classmethod
    def from_settings(cls) -> "ClaudeClient":
        """Client configured from ANTHROPIC_API_KEY and CLAUDE_MODEL settings."""
        from src.utils.config import get_settings

        settings = get_settings()
        return cls(
            api_key=settings.ANTHROPIC_API_KEY,
            model=settings.CLAUDE_MODEL,
            timeout=settings.CLAUDE_TIMEOUT,
        )

    async def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = MAX_TOKENS,
        temperature: float = TEMPERATURE,
    ) -> CompletionResponse:
        """Send one user message and return the concatenated text blocks."""
        request: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        try:
            message = await self.async_client.messages.create(**request)
        except anthropic.APIError as e:
            retryable = isinstance(e, RETRYABLE_ERRORS)
            logger.error(f"Claude API error ({'retryable' if retryable else 'fatal'}): {e}")
            return CompletionResponse.failure(self.model, str(e), retryable=retryable)

        usage = TokenUsage(
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
        self.total_usage.add(usage)
        self.call_count += 1

        logger.info(
            f"Claude call #{self.call_count}: {usage.input_tokens} in, "
            f"{usage.output_tokens} out, ${usage.cost(self.model):.4f}"
        )

        return CompletionResponse(
            content="".join(getattr(block, "text", "") for block in message.content),
            usage=usage,
            model=self.model,
            stop_reason=message.stop_reason,
        )

    async def complete_with_retry(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_retries: int = 3,
        **kwargs,
    ) -> CompletionResponse:
        """
        Call complete() up to `max_retries` times.

        Waits retry_base_delay * 2**attempt between attempts. A failure
        marked non-retryable is returned immediately.
        """
        response = None
        for attempt in range(max_retries):
            response = await self.complete(prompt, system, **kwargs)
            if response.success or not response.retryable:
                return response

            if attempt < max_retries - 1:
                delay = self.retry_base_delay * (2 ** attempt)
                logger.warning(
                    f"Claude call failed ({attempt + 1}/{max_retries}), "
                    f"next try in {delay}s: {response.error}"
                )
                await asyncio.sleep(delay)

        last_error = response.error if response else None
        return CompletionResponse.failure(
            self.model,
            f"Max retries exceeded. Last error: {last_error}",
            stop_reason="max_retries",
            retryable=False,
        )

    def get_usage_summary(self) -> Dict[str, Any]:
        return {
            "total_calls": self.call_count,
            "input_tokens": self.total_usage.input_tokens,
            "output_tokens": self.total_usage.output_tokens,
            "total_tokens": self.total_usage.total_tokens,
            "estimated_cost": self.total_usage.cost(self.model),
        }
