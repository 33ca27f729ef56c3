"""Expose the page navigation sections over HTTP."""

from __future__ import annotations

from typing import cast

from fastapi import (  # type: ignore[import-not-found]
    APIRouter,
    Depends,
    HTTPException,
)
from fastapi.responses import JSONResponse  # type: ignore[import-not-found]
from pydantic import BaseModel  # type: ignore[import-not-found]

from pagenav.navigation import (
    DuplicateSectionError,
    InvalidSectionError,
    MemoryScrollSpy,
    ScrollSpyCoordinator,
    UnknownSectionError,
)
from pagenav.snapshot import section_to_dict, snapshot

from ..utils import get_navigation

router = APIRouter()


class AddSectionRequest(BaseModel):
    """Request body for registering a section."""

    name: str
    id: str
    parent: str | None = None


def _require_section(
    navigation: ScrollSpyCoordinator, section_id: str
) -> None:
    """Abort with 404 when ``section_id`` is not registered."""

    if section_id not in navigation.registry:
        raise HTTPException(status_code=404, detail="Section not found")


@router.get("/sections")
async def list_sections(
    navigation: ScrollSpyCoordinator = Depends(get_navigation),
) -> JSONResponse:
    """Return the navigation with its sections in outline order."""

    return JSONResponse(snapshot(navigation))


@router.get("/sections/active")
async def active_section(
    navigation: ScrollSpyCoordinator = Depends(get_navigation),
) -> JSONResponse:
    """Return the active section, ``null`` when nothing is active."""

    active = navigation.active_section
    return JSONResponse(section_to_dict(active) if active else None)


@router.post("/sections", status_code=201)
async def add_section(
    payload: AddSectionRequest,
    navigation: ScrollSpyCoordinator = Depends(get_navigation),
) -> JSONResponse:
    """Register a new section.

    Args:
        payload: Name, identifier and optional parent of the section.
        navigation: Navigation served by the application.

    Returns:
        The registered section.
    """

    try:
        section = navigation.add_section(
            payload.name, payload.id, parent=payload.parent
        )
    except DuplicateSectionError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except UnknownSectionError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except InvalidSectionError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    # Let the default activation reach the tracking service.
    await navigation.settle()
    return JSONResponse(section_to_dict(section), status_code=201)


@router.post("/sections/{section_id}/click")
async def click_section(
    section_id: str,
    navigation: ScrollSpyCoordinator = Depends(get_navigation),
) -> JSONResponse:
    """Activate a section and scroll to it, as a navigation link does."""

    _require_section(navigation, section_id)
    await navigation.click(section_id)
    return JSONResponse(snapshot(navigation))


@router.post("/sections/{section_id}/centered")
async def center_section(
    section_id: str,
    navigation: ScrollSpyCoordinator = Depends(get_navigation),
) -> JSONResponse:
    """Report ``section_id`` as centered in the viewport."""

    spy = cast(MemoryScrollSpy, navigation.scroll_spy)
    spy.center(section_id)
    return JSONResponse(snapshot(navigation))


@router.delete("/sections/{section_id}")
async def remove_section(
    section_id: str,
    navigation: ScrollSpyCoordinator = Depends(get_navigation),
) -> JSONResponse:
    """Remove a section together with its descendants."""

    _require_section(navigation, section_id)
    removed = navigation.remove_section(section_id)
    return JSONResponse({"removed": [s.section_id for s in removed]})
