"""OpenAI chat completion provider using the openai SDK."""

from __future__ import annotations

from openai import AsyncOpenAI

from onebot_relay.exceptions import CompletionFailure
from onebot_relay.observability.logger import get_logger

logger = get_logger("openai")


class OpenAIChatProvider:
    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 60.0,
        verbose: bool = False,
    ) -> None:
        # Retries belong to the orchestrator, so the SDK must not add its own.
        self._client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=0,
        )
        self._verbose = verbose

    async def complete(self, prompt: str, model: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=model,
                messages=[{"role": "user", "content": prompt}],
            )
        except Exception as e:
            raise CompletionFailure(f"ChatCompletion error: {e}", model=model) from e

        if not response.choices:
            raise CompletionFailure("ChatCompletion returned no choices", model=model)
        message = response.choices[0].message
        if message.content is None:
            raise CompletionFailure("ChatCompletion returned empty content", model=model)

        if self._verbose:
            logger.info(
                "completion_response",
                model=model,
                role=message.role,
                content=message.content,
            )
        return message.content

    async def close(self) -> None:
        await self._client.close()
