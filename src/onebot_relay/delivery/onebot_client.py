"""HTTP client for the OneBot gateway's send_group_msg action."""

from __future__ import annotations

import httpx

from onebot_relay.exceptions import DeliveryFailure
from onebot_relay.models.schemas import SendGroupMessageRequest
from onebot_relay.observability.logger import get_logger

logger = get_logger("onebot_client")

SEND_GROUP_MSG_PATH = "/send_group_msg"


class OnebotHttpClient:
    """Posts JSON to ``<base_address>/send_group_msg``.

    The gateway's response body is never inspected. Unless ``check_status`` is
    set, any response that arrives without a transport error counts as delivered.
    """

    def __init__(
        self,
        base_address: str,
        timeout: float = 60.0,
        check_status: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_address = base_address.rstrip("/")
        self._check_status = check_status
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Content-Type": "application/json"},
            transport=transport,
        )

    @property
    def url(self) -> str:
        return self._base_address + SEND_GROUP_MSG_PATH

    async def send_group_msg(self, payload: dict) -> None:
        if not self._base_address:
            raise DeliveryFailure("Gateway base address is not configured")

        body = SendGroupMessageRequest.model_validate(payload).model_dump(mode="json")
        try:
            response = await self._client.post(self.url, json=body)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise DeliveryFailure(f"Error making request: {e}") from e

        logger.info("send_group_msg_response", status=response.status_code, url=self.url)
        if self._check_status and not response.is_success:
            raise DeliveryFailure(
                f"Gateway responded with HTTP {response.status_code}",
                status_code=response.status_code,
            )

    async def close(self) -> None:
        await self._client.aclose()
