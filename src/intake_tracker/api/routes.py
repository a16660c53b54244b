"""JSON API endpoints with token and user header auth."""

from __future__ import annotations

import logging
from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from intake_tracker.api.models import (
    CreateEntryRequest,
    SetActivityRequest,
    UpdateItemRequest,
    UpdateSettingsRequest,
)
from intake_tracker.config import parse_allowed_user_ids
from intake_tracker.domain.activity import ACTIVITY_LEVELS
from intake_tracker.domain.nutrients import FoodItemPatch
from intake_tracker.services.aggregation import OverrideValidationError
from intake_tracker.services.dates import (
    InvalidTimezoneError,
    parse_date_string,
    today_in_timezone,
)
from intake_tracker.services.energy import UnknownActivityLevelError
from intake_tracker.services.entries import EntryValidationError
from intake_tracker.services.user_settings import ProfileValidationError

if TYPE_CHECKING:
    from intake_tracker.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["api"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


async def require_user(
    request: Request,
    x_api_token: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
) -> UUID:
    """Ensure requests carry the API token and return the acting user id."""
    settings = _container(request).settings
    if not x_api_token or x_api_token != settings.api_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    if not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        user_id = UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid user id"
        ) from exc
    allowed = parse_allowed_user_ids(settings.allowed_user_ids)
    if allowed is not None and user_id not in allowed:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN)
    return user_id


def _parse_day(raw: str, label: str = "date") -> date:
    parsed = parse_date_string(raw)
    if parsed is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid {label}, expected YYYY-MM-DD",
        )
    return parsed


def _bad_request(exc: Exception) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))


@router.post("/entries")
async def create_entry(
    payload: CreateEntryRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Parse and store a meal submission."""
    container = _container(request)
    try:
        result = await container.entry_service.create_entry(
            user_id,
            payload.raw_text,
            image_data_url=payload.image,
            submitted_at=payload.client_timestamp,
            override_date=payload.override_date,
        )
    except (EntryValidationError, InvalidTimezoneError) as exc:
        raise _bad_request(exc) from exc
    except Exception as exc:
        logger.exception("Meal parsing failed", extra={"user_id": str(user_id)})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to parse meal",
        ) from exc
    return {
        "entry": result.entry,
        "items": result.items,
        "validation_warnings": result.validation_warnings,
    }


@router.get("/entries")
async def list_entries(
    request: Request,
    day: str | None = Query(default=None, alias="date"),
    start: str | None = Query(default=None, alias="from"),
    end: str | None = Query(default=None, alias="to"),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return entries for a day or an inclusive range."""
    container = _container(request)
    if day is not None:
        start_day = end_day = _parse_day(day)
    elif start is not None and end is not None:
        start_day, end_day = _parse_day(start, "from"), _parse_day(end, "to")
    elif start is not None or end is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both from and to are required for a range",
        )
    else:
        try:
            timezone = container.user_settings_service.get_timezone(user_id)
            start_day = end_day = today_in_timezone(timezone)
        except InvalidTimezoneError as exc:
            raise _bad_request(exc) from exc
    return {
        "entries": container.entry_service.list_entries(user_id, start_day, end_day)
    }


@router.delete("/entries/{entry_id}")
async def delete_entry(
    entry_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, bool]:
    """Delete an entry and its items."""
    if not _container(request).entry_service.delete_entry(user_id, entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return {"success": True}


@router.patch("/entries/items/{item_id}")
async def update_item(
    item_id: UUID,
    payload: UpdateItemRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Apply a manual override to a food item."""
    patch = FoodItemPatch(**payload.model_dump(exclude_none=True))
    try:
        item = _container(request).entry_service.update_item(user_id, item_id, patch)
    except OverrideValidationError as exc:
        raise _bad_request(exc) from exc
    if item is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Item not found"
        )
    return {"item": item}


@router.delete("/entries/items/{item_id}")
async def delete_item(
    item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, bool]:
    """Delete a single food item."""
    if not _container(request).entry_service.delete_item(user_id, item_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Item not found"
        )
    return {"success": True}


@router.get("/activity")
async def get_activity(
    request: Request,
    day: str = Query(alias="date"),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return the activity level for a day."""
    level = _container(request).activity_service.get_level(user_id, _parse_day(day))
    return {"activity_level": level}


@router.post("/activity")
async def set_activity(
    payload: SetActivityRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Select the activity level for a day."""
    day = _parse_day(payload.date)
    try:
        activity = _container(request).activity_service.set_level(
            user_id, day, payload.activity_level_id
        )
    except UnknownActivityLevelError as exc:
        raise _bad_request(exc) from exc
    return {"activity": activity}


@router.get("/activity-levels", dependencies=[Depends(require_user)])
async def list_activity_levels() -> dict[str, object]:
    """Return the fixed activity level table."""
    return {"activity_levels": list(ACTIVITY_LEVELS)}


@router.get("/daily-summary")
async def daily_summary(
    request: Request,
    day: str | None = Query(default=None, alias="date"),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return totals, targets and limits for a day."""
    resolved = _parse_day(day) if day is not None else None
    try:
        summary = _container(request).stats_service.get_daily_summary(
            user_id, resolved
        )
    except InvalidTimezoneError as exc:
        raise _bad_request(exc) from exc
    return {"summary": summary}


@router.get("/trends")
async def trends(
    request: Request,
    days: int = Query(default=30, ge=1, le=365),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return per-day stats with weekly and monthly averages."""
    try:
        report = _container(request).stats_service.get_trends(user_id, days)
    except InvalidTimezoneError as exc:
        raise _bad_request(exc) from exc
    return {"trends": report}


@router.get("/settings")
async def get_settings(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the user's profile with the effective timezone."""
    service = _container(request).user_settings_service
    profile = service.get_profile(user_id)
    return {"settings": profile, "timezone": service.timezone_for(profile)}


@router.patch("/settings")
async def update_settings(
    payload: UpdateSettingsRequest,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Update profile fields."""
    try:
        profile = _container(request).user_settings_service.update_profile(
            user_id, payload.model_dump(exclude_unset=True)
        )
    except (ProfileValidationError, InvalidTimezoneError) as exc:
        raise _bad_request(exc) from exc
    return {"settings": profile}
