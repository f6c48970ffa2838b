"""Alexa Skill webhook endpoint."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import ValidationError
from starlette.concurrency import run_in_threadpool

from ..errors import RequestVerificationError
from ..models.request import RequestEnvelope
from ..services.pipeline import Skill

logger = logging.getLogger(__name__)

router = APIRouter(tags=["alexa"])

EMPTY_RESPONSE: dict[str, Any] = {"version": "1.0", "response": {}}


@router.post("/alexa")
async def alexa_webhook(request: Request) -> dict[str, Any]:
    """
    Handle Alexa Skill requests.

    The body is parsed into a request envelope and dispatched through the
    skill configured on the application. When no handler claims the request
    an empty response is returned.

    Errors:
    - 400: body is not a request envelope, or request verification failed
      and no error handler accepted it
    """
    try:
        body = await request.json()
        envelope = RequestEnvelope.model_validate(body)
    except ValidationError as e:
        logger.warning(f"Invalid Alexa request envelope: {e.error_count()} errors")
        raise HTTPException(status_code=400, detail="Invalid request envelope")
    except ValueError as e:
        logger.warning(f"Invalid Alexa request body: {e}")
        raise HTTPException(status_code=400, detail="Invalid request body")

    logger.info(f"Alexa request received: {envelope.request.type}")

    skill: Skill = request.app.state.skill
    try:
        response = await run_in_threadpool(skill.invoke, envelope)
    except RequestVerificationError as e:
        logger.warning(f"Request verification failed: {e}")
        raise HTTPException(status_code=400, detail=str(e))

    if response is None:
        return EMPTY_RESPONSE

    return response.to_wire()
