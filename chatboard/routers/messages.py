from __future__ import annotations

import logging
import re
from typing import Any, Optional

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from chatboard.repositories.json_storage import StorageError
from chatboard.services.message_service import MessageNotFoundError, MessageService

router = APIRouter(prefix="/api/messages", tags=["messages"])
logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _get_message_service(request: Request) -> MessageService:
    svc = getattr(getattr(request.app, "state", None), "message_service", None)
    if not svc:
        raise RuntimeError("MessageService not configured")
    return svc


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _parse_id(raw: str) -> Optional[int]:
    """Leading base-10 integer of the path segment ("12abc" -> 12), else None."""
    match = _LEADING_INT.match(raw or "")
    if not match:
        return None
    return int(match.group(1), 10)


async def _json_object(request: Request) -> dict:
    """Body as a JSON object; empty, non-JSON or non-object bodies read as {}."""
    try:
        body: Any = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


@router.get("")
def list_messages(request: Request):
    svc = _get_message_service(request)
    try:
        messages = svc.list_messages()
    except StorageError:
        logger.exception("Failed to read messages")
        return _error_response("Failed to read messages", 500)
    return JSONResponse(messages)


@router.post("")
async def create_message(request: Request):
    svc = _get_message_service(request)
    body = await _json_object(request)
    try:
        message = await run_in_threadpool(svc.create_message, body.get("user"), body.get("text"))
    except StorageError:
        logger.exception("Failed to save the message")
        return _error_response("Failed to save the message", 500)
    return JSONResponse(message.as_dict(), status_code=201)


@router.delete("/{message_id}")
def delete_message(message_id: str, request: Request):
    svc = _get_message_service(request)
    try:
        svc.delete_message(_parse_id(message_id))
    except MessageNotFoundError:
        return _error_response("Message not found", 404)
    except StorageError:
        logger.exception("Failed to delete the message")
        return _error_response("Failed to delete the message", 500)
    return Response(status_code=204)
