"""Claude access for store candidate generation."""

from .client import ClaudeClient, CompletionResponse, TokenUsage

__all__ = [
    "ClaudeClient",
    "CompletionResponse",
    "TokenUsage",
]
