from __future__ import annotations

from fastapi import APIRouter, HTTPException
from pydantic import ValidationError

from ripbonus.application import get_bonus_service

router = APIRouter(prefix="/bonus-parameters", tags=["bonus-parameters"])


def _invalid(exc: ValidationError) -> HTTPException:
    return HTTPException(status_code=422, detail=exc.errors(include_url=False, include_context=False))


@router.get("")
async def list_bonus_parameters() -> dict:
    service = get_bonus_service()
    return {"items": [tier.model_dump(mode="json") for tier in service.list_tiers()]}


@router.put("")
async def replace_bonus_parameters(payload: dict) -> dict:
    rows = payload.get("items")
    if not isinstance(rows, list):
        raise HTTPException(status_code=400, detail="items must be a list of tiers")

    service = get_bonus_service()
    try:
        tiers = service.replace_tiers(rows)
    except ValidationError as exc:
        raise _invalid(exc) from exc
    return {"items": [tier.model_dump(mode="json") for tier in tiers]}


@router.patch("/{tier_id}")
async def update_bonus_parameter(tier_id: str, payload: dict) -> dict:
    if not payload:
        raise HTTPException(status_code=400, detail="no tier fields provided")

    service = get_bonus_service()
    try:
        tier = service.update_tier(tier_id, payload)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="bonus parameter not found") from exc
    except ValidationError as exc:
        raise _invalid(exc) from exc
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return tier.model_dump(mode="json")


@router.delete("/{tier_id}")
async def retire_bonus_parameter(tier_id: str) -> dict:
    service = get_bonus_service()
    try:
        tier = service.retire_tier(tier_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="bonus parameter not found") from exc
    return tier.model_dump(mode="json")
