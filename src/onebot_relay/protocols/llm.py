"""Protocol for chat completion providers."""

from __future__ import annotations

from typing import Protocol


class CompletionClient(Protocol):
    async def complete(self, prompt: str, model: str) -> str:
        """One request, no internal retry. Raises CompletionFailure."""
        ...
