"""Database persistence for missions, runner locations and notifications."""

from __future__ import annotations

import logging
from typing import Any

from ..config import settings
from ..db.supabase import get_supabase_client
from ..models.domain import ACTIVE_STATUSES


def get_mission(mission_id: str) -> dict[str, Any] | None:
    """Fetch a single mission record by id.

    Returns:
        The mission row, or None if the database is not configured or the mission does not exist.
    """
    supabase = get_supabase_client()
    if not supabase:
        logging.warning("Database not configured - cannot load mission")
        return None

    try:
        response = supabase.table(settings.missions_table).select("*").eq("id", mission_id).limit(1).execute()
        if not response.data:
            logging.warning(f"Mission '{mission_id}' not found in database")
            return None
        return response.data[0]
    except Exception as e:
        logging.error(f"Failed to load mission '{mission_id}': {e}")
        return None


def get_active_missions(intervenant_email: str, limit: int | None = None) -> list[dict[str, Any]]:
    """Retrieve the runner's missions that are still in progress, oldest first.

    Args:
        intervenant_email: Runner the missions are assigned to
        limit: Optional maximum number of records

    Returns:
        List of mission rows (empty on any failure)
    """
    supabase = get_supabase_client()
    if not supabase:
        return []

    try:
        query = (
            supabase.table(settings.missions_table)
            .select("*")
            .eq("intervenant_email", intervenant_email)
            .in_("status", list(ACTIVE_STATUSES))
            .order("created_date")
        )
        if limit:
            query = query.limit(limit)
        response = query.execute()
        missions = response.data or []
        logging.info(f"Retrieved {len(missions)} active missions for '{intervenant_email}'")
        return missions
    except Exception as e:
        logging.warning(f"Failed to retrieve missions for '{intervenant_email}': {e}")
        return []


def get_latest_location(user_email: str) -> dict[str, Any] | None:
    """Most recently updated location row for a runner."""
    supabase = get_supabase_client()
    if not supabase:
        return None

    try:
        response = (
            supabase.table(settings.locations_table)
            .select("*")
            .eq("user_email", user_email)
            .order("updated_date", desc=True)
            .limit(1)
            .execute()
        )
        return response.data[0] if response.data else None
    except Exception as e:
        logging.warning(f"Failed to retrieve latest location for '{user_email}': {e}")
        return None


def get_available_locations() -> list[dict[str, Any]]:
    supabase = get_supabase_client()
    if not supabase:
        return []

    try:
        response = supabase.table(settings.locations_table).select("*").eq("is_available", True).execute()
        return response.data or []
    except Exception as e:
        logging.warning(f"Failed to retrieve runner locations: {e}")
        return []


def mark_mission_late(mission_id: str) -> bool:
    """Persist the 'late' status on a mission.

    Returns:
        True if the update was sent, False otherwise
    """
    supabase = get_supabase_client()
    if not supabase:
        logging.warning("Database not configured - cannot mark mission late")
        return False

    try:
        supabase.table(settings.missions_table).update({"status": "late"}).eq("id", mission_id).execute()
        logging.info(f"Mission '{mission_id}' marked late")
        return True
    except Exception as e:
        logging.error(f"Failed to mark mission '{mission_id}' late: {e}")
        return False


def create_notification(
    user_email: str,
    title: str,
    message: str,
    *,
    mission_id: str | None = None,
    notification_type: str = "urgent",
) -> bool:
    supabase = get_supabase_client()
    if not supabase:
        logging.warning("Database not configured - notification not sent")
        return False

    try:
        supabase.table(settings.notifications_table).insert({
            "user_email": user_email,
            "title": title,
            "message": message,
            "type": notification_type,
            "mission_id": mission_id,
        }).execute()
        return True
    except Exception as e:
        logging.error(f"Failed to create notification for '{user_email}': {e}")
        return False


def check_connection() -> dict[str, Any]:
    """Report whether the missions table is reachable."""
    supabase = get_supabase_client()
    if not supabase:
        return {
            "configured": False,
            "message": "Supabase not configured. Set TOURNEE_SUPABASE_URL and TOURNEE_SUPABASE_KEY environment variables.",
        }

    try:
        supabase.table(settings.missions_table).select("id", count="exact").limit(1).execute()
        return {"configured": True, "connected": True, "message": "Database connected."}
    except Exception as exc:
        return {
            "configured": True,
            "connected": False,
            "error": str(exc),
            "message": f"Database connection error: {exc}",
        }
