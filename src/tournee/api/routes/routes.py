"""Routing endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.routing import IntervenantRoutingRequest, RoutingRequest, RoutingResponse
from ...services.routing.service import optimize_intervenant_route, optimize_route

router = APIRouter(prefix="/routes", tags=["routes"])


@router.post("/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize(payload: RoutingRequest) -> RoutingResponse:
    try:
        return optimize_route(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing route: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize route: {str(exc)}"
        ) from exc


@router.post("/intervenants/{intervenant_email}/optimize", response_model=RoutingResponse, status_code=status.HTTP_200_OK)
def optimize_for_intervenant(intervenant_email: str, payload: IntervenantRoutingRequest) -> RoutingResponse:
    """Plan the day's tour from the runner's active missions."""
    try:
        return optimize_intervenant_route(intervenant_email, payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logging.exception(f"Error optimizing tour for {intervenant_email}: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to optimize tour: {str(exc)}"
        ) from exc
