"""OneBot event endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from onebot_relay.api.dependencies import get_relay_pipeline
from onebot_relay.exceptions import ParseError
from onebot_relay.models.schemas import EventAck
from onebot_relay.pipeline.relay_pipeline import RelayPipeline, RequestMeta

router = APIRouter()


@router.post("/", response_model=EventAck)
@router.post("/onebot/event", response_model=EventAck)
async def receive_event(
    request: Request,
    pipeline: RelayPipeline = Depends(get_relay_pipeline),
) -> EventAck:
    body = await request.body()
    meta = RequestMeta(
        method=request.method,
        path=request.url.path,
        headers=dict(request.headers),
    )
    try:
        result = await pipeline.handle(body, meta)
    except ParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return EventAck(
        trace_id=result.trace_id,
        outcome=result.outcome.kind.value,
        delivered=result.delivery.succeeded,
    )
