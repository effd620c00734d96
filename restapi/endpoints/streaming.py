"""Pushing change-driven updates over a WebSocket."""

import asyncio
import logging
from typing import Any, AsyncIterator

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder

logger = logging.getLogger(__name__)


async def stream_updates(websocket: WebSocket, updates: AsyncIterator[Any]) -> None:
    """
    Send every value of updates to the client until it disconnects.

    Incoming messages are read alongside so a disconnect stops the stream
    even while no update is pending.
    """
    receiver = asyncio.ensure_future(websocket.receive())
    pending = asyncio.ensure_future(updates.__anext__())
    logger.debug("Stream opened for %s", websocket.url.path)
    try:
        while True:
            done, _ = await asyncio.wait({receiver, pending}, return_when=asyncio.FIRST_COMPLETED)
            if pending in done:
                await websocket.send_json(jsonable_encoder(pending.result()))
                pending = asyncio.ensure_future(updates.__anext__())
            if receiver in done:
                if receiver.result()["type"] == "websocket.disconnect":
                    break
                receiver = asyncio.ensure_future(websocket.receive())
    finally:
        receiver.cancel()
        pending.cancel()
        await asyncio.gather(receiver, pending, return_exceptions=True)
        await updates.aclose()
        logger.debug("Stream closed for %s", websocket.url.path)
