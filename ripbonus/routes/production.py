from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from ripbonus.application import get_bonus_service

router = APIRouter(prefix="/production", tags=["production"])


def _invalid(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))


@router.post("/packs")
async def record_pack(payload: dict) -> dict:
    """Record a finished pack; in-progress packs must not be sent."""
    service = get_bonus_service()
    try:
        pack = service.add_pack(payload)
    except ValidationError as exc:
        raise _invalid(exc) from exc
    return pack.model_dump(mode="json")


@router.post("/sessions")
async def record_session(payload: dict) -> dict:
    service = get_bonus_service()
    try:
        session = service.add_session(payload)
    except ValidationError as exc:
        raise _invalid(exc) from exc
    return session.model_dump(mode="json")


@router.put("/names")
async def update_names(payload: dict) -> dict:
    names = payload.get("names")
    if not isinstance(names, dict):
        raise HTTPException(status_code=400, detail="names must map person ids to display names")
    service = get_bonus_service()
    service.set_names(names)
    return {"updated": len(names)}
