"""Tracking endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.tracking import (
    GeofenceRequest,
    GeofenceResponse,
    LatenessRequest,
    LatenessResponse,
    MissionLatenessResponse,
    NextMissionRequest,
    NextMissionResponse,
)
from ...services.tracking.service import (
    check_geofences,
    check_mission_lateness,
    evaluate_lateness,
    next_mission_eta,
)

router = APIRouter(prefix="/tracking", tags=["tracking"])


@router.post("/lateness", response_model=LatenessResponse, status_code=status.HTTP_200_OK)
def lateness(payload: LatenessRequest) -> LatenessResponse:
    try:
        return evaluate_lateness(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc


@router.post("/missions/{mission_id}/check", response_model=MissionLatenessResponse, status_code=status.HTTP_200_OK)
def check_mission(mission_id: str) -> MissionLatenessResponse:
    """Run one lateness tick for a mission and flag it late when needed."""
    try:
        result = check_mission_lateness(mission_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error checking mission {mission_id}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to check mission: {str(exc)}"
        ) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Mission {mission_id} or its runner position not found"
        )
    return result


@router.post("/next-mission", response_model=NextMissionResponse, status_code=status.HTTP_200_OK)
def next_mission(payload: NextMissionRequest) -> NextMissionResponse:
    try:
        result = next_mission_eta(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error estimating next mission for {payload.intervenant_email}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to estimate next mission: {str(exc)}"
        ) from exc
    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No active mission with a delivery address for {payload.intervenant_email}"
        )
    return result


@router.post("/geofence", response_model=GeofenceResponse, status_code=status.HTTP_200_OK)
def geofence(payload: GeofenceRequest) -> GeofenceResponse:
    try:
        return check_geofences(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error checking geofences: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to check geofences: {str(exc)}"
        ) from exc
