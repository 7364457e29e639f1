"""Central configuration via Pydantic Settings. All values driven by env vars."""

from __future__ import annotations

import math

from pydantic import field_validator
from pydantic_settings import BaseSettings

from onebot_relay.observability.logger import get_logger
from onebot_relay.retry.engine import RetryPolicy

logger = get_logger("settings")

DEFAULT_MAX_RETRIES = 3
DEFAULT_RETRY_DELAY = 5.0

_TRUTHY = {"true", "1", "yes", "on"}


def _parse_flag(value: object) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in _TRUTHY


class Settings(BaseSettings):
    # Logging
    extra_log: bool = False  # verbose content dumps
    log_json: bool = True

    # OpenAI
    openai_api_key: str = ""
    openai_base_url: str | None = None
    primary_model: str = "gpt-4-0314"
    secondary_model: str = "gpt-3.5-turbo-0301"

    # Retry budget, shared by completion tiers and delivery
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_delay: float = DEFAULT_RETRY_DELAY

    # OneBot gateway, e.g. http://1.2.3.4:5700
    recv_addr: str = ""
    delivery_check_status: bool = False

    request_timeout: float = 60.0

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    model_config = {"env_file": ".env", "extra": "ignore", "frozen": True}

    @field_validator("extra_log", "log_json", "delivery_check_status", mode="before")
    @classmethod
    def _lenient_flag(cls, value: object) -> bool:
        return _parse_flag(value)

    @field_validator("max_retries", mode="before")
    @classmethod
    def _lenient_max_retries(cls, value: object) -> int:
        try:
            parsed = int(str(value).strip())
        except (TypeError, ValueError):
            parsed = 0
        if parsed < 1:
            logger.warning(
                "invalid_max_retries",
                raw=value,
                default=DEFAULT_MAX_RETRIES,
            )
            return DEFAULT_MAX_RETRIES
        return parsed

    @field_validator("retry_delay", mode="before")
    @classmethod
    def _lenient_retry_delay(cls, value: object) -> float:
        try:
            parsed = float(str(value).strip())
        except (TypeError, ValueError):
            parsed = -1.0
        if not math.isfinite(parsed) or parsed < 0:
            logger.warning(
                "invalid_retry_delay",
                raw=value,
                default=DEFAULT_RETRY_DELAY,
            )
            return DEFAULT_RETRY_DELAY
        return parsed

    @field_validator("recv_addr", mode="after")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.strip().rstrip("/")

    @field_validator("openai_base_url", mode="after")
    @classmethod
    def _blank_base_url_is_default(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(max_attempts=self.max_retries, delay_seconds=self.retry_delay)
