"""Calendar tools: calendars, groups, availability, appointments and blocked time."""

from __future__ import annotations

from typing import Literal, Optional, Tuple

from ..dates import convert_date_to_milliseconds, convert_to_milliseconds
from ..errors import ErrorHint
from ..mcp_server import ghl_tool
from .common import api, items, location, pick, unwrap

CATEGORY = "calendar"

AppointmentStatus = Literal["confirmed", "showed", "noshow", "cancelled"]


def _permission(action: str) -> Tuple[ErrorHint, ...]:
    message = f"Permission denied: cannot {action}. Check that the token has calendar scopes and access to this calendar."
    return ErrorHint(message, status=401), ErrorHint(message, status=403)


def _not_found(what: str, finder: str) -> ErrorHint:
    return ErrorHint(
        f"{what} not found. It may have been deleted or the ID is incorrect; use {finder} to find valid IDs.",
        status=404,
    )


TIME_FORMAT = ErrorHint(
    "Invalid date/time format. Use ISO 8601, e.g. \"2025-10-20T14:00:00Z\" or \"2025-10-20T14:00:00-05:00\".",
    status=400,
    keywords=("time",),
)
TIMEZONE = ErrorHint(
    "Invalid timezone. Use an IANA name such as \"America/New_York\", \"Europe/London\" or \"UTC\".",
    status=400,
    keywords=("timezone", "time zone"),
)
SLOT_TAKEN = ErrorHint(
    "Time slot conflict: the requested time is already booked or blocked. "
    "Use get_free_slots or get_calendar_events to find an open time.",
    status=409,
)
SERVICE_ERROR = ErrorHint(
    "Calendar service error: calendars may not be enabled or configured for this location.",
    status=500,
)


def _invalid(what: str) -> ErrorHint:
    return ErrorHint(
        f"Invalid {what}. Check required fields, that the end time is after the start time, "
        "and that referenced IDs exist.",
        status=400,
    )


CALENDAR_NOT_FOUND = _not_found("Calendar", "get_calendars")
APPOINTMENT_NOT_FOUND = _not_found("Appointment", "get_calendar_events")


@ghl_tool(CATEGORY, action="get calendar groups", hints=_permission("access calendar groups") + (SERVICE_ERROR,))
def get_calendar_groups() -> dict:
    """List calendar groups (e.g. "Sales Team"). Use a group ID to filter get_calendars."""
    data = api().get("/calendars/groups", params={"locationId": location()})
    groups = items(data, "groups")
    return {"success": True, "groups": groups, "message": f"Retrieved {len(groups)} calendar groups"}


@ghl_tool(
    CATEGORY,
    action="get calendars",
    hints=(_not_found("Calendar group", "get_calendar_groups"),) + _permission("access calendars"),
)
def get_calendars(group_id: Optional[str] = None) -> dict:
    """List calendars, optionally only those in one group."""
    data = api().get("/calendars/", params={"locationId": location(), "groupId": group_id})
    calendars = items(data, "calendars")
    return {"success": True, "calendars": calendars, "message": f"Retrieved {len(calendars)} calendars"}


@ghl_tool(
    CATEGORY,
    action="create calendar",
    hints=_permission("create calendars") + (_invalid("calendar data"), _not_found("Calendar group", "get_calendar_groups")),
)
def create_calendar(
    name: str,
    description: str,
    group_id: Optional[str] = None,
    meeting_location: Optional[str] = None,
    slot_duration: Optional[int] = None,
    slot_interval: Optional[int] = None,
) -> dict:
    """Create a calendar. Requires calendar management permissions.

    Args:
        name: Display name, e.g. "Sales Consultations"
        description: What the calendar is for
        group_id: Calendar group to put it in
        meeting_location: Default location (address, video link)
        slot_duration: Default appointment length in minutes
        slot_interval: Booking interval in minutes
    """
    data = api().post("/calendars/", json={
        "locationId": location(),
        "name": name,
        "description": description,
        "groupId": group_id,
        "meetingLocation": meeting_location,
        "slotDuration": slot_duration,
        "slotInterval": slot_interval,
    })
    calendar = unwrap(data, "calendar")
    return {"success": True, "calendar": calendar, "message": f"Calendar created with ID: {pick(calendar, 'id')}"}


@ghl_tool(
    CATEGORY,
    action="update calendar",
    hints=(CALENDAR_NOT_FOUND,) + _permission("update calendar") + (_invalid("calendar data"),),
)
def update_calendar(
    calendar_id: str,
    name: Optional[str] = None,
    description: Optional[str] = None,
    group_id: Optional[str] = None,
    meeting_location: Optional[str] = None,
    slot_duration: Optional[int] = None,
    slot_interval: Optional[int] = None,
) -> dict:
    """Update calendar settings. Only the fields you pass are changed."""
    data = api().put(f"/calendars/{calendar_id}", json={
        "name": name,
        "description": description,
        "groupId": group_id,
        "meetingLocation": meeting_location,
        "slotDuration": slot_duration,
        "slotInterval": slot_interval,
    })
    return {"success": True, "calendar": unwrap(data, "calendar"), "message": "Calendar updated successfully"}


@ghl_tool(
    CATEGORY,
    action="delete calendar",
    hints=(CALENDAR_NOT_FOUND,) + _permission("delete calendar") + (
        ErrorHint(
            "Cannot delete calendar: it still has scheduled appointments. Cancel them first "
            "(see get_calendar_events) or disable the calendar instead.",
            status=409,
        ),
    ),
)
def delete_calendar(calendar_id: str) -> dict:
    """Permanently delete a calendar. Appointments on it are affected."""
    data = api().delete(f"/calendars/{calendar_id}")
    return {"success": bool(pick(data, "succeeded", True)), "message": "Calendar deleted successfully"}


@ghl_tool(
    CATEGORY,
    action="get calendar events",
    hints=(CALENDAR_NOT_FOUND, TIME_FORMAT) + _permission("access calendar events"),
)
def get_calendar_events(calendar_id: str, start_time: str, end_time: str) -> dict:
    """List appointments and blocks on a calendar within a time range.

    Args:
        calendar_id: Calendar ID
        start_time: Range start, ISO 8601 (e.g. "2025-10-20T09:00:00Z") or epoch milliseconds
        end_time: Range end, ISO 8601 or epoch milliseconds
    """
    data = api().get("/calendars/events", params={
        "locationId": location(),
        "calendarId": calendar_id,
        "startTime": convert_to_milliseconds(start_time),
        "endTime": convert_to_milliseconds(end_time),
    })
    events = items(data, "events")
    return {"success": True, "events": events, "message": f"Retrieved {len(events)} events"}


@ghl_tool(
    CATEGORY,
    action="get free slots",
    hints=(CALENDAR_NOT_FOUND, TIMEZONE, ErrorHint(
        "Invalid date format. Use YYYY-MM-DD, e.g. \"2025-10-20\".", status=400, keywords=("date",),
    )) + _permission("check calendar availability"),
)
def get_free_slots(calendar_id: str, start_date: str, end_date: str, timezone: Optional[str] = None) -> dict:
    """List bookable slots on a calendar. Check this before create_appointment.

    Args:
        calendar_id: Calendar ID
        start_date: First day, YYYY-MM-DD (or ISO datetime / epoch ms)
        end_date: Last day, YYYY-MM-DD (or ISO datetime / epoch ms)
        timezone: IANA timezone for the returned slots, e.g. "America/New_York"

    Returns:
        {"success": True, "slots": {date: {"slots": [...]}}, "message": str}
    """
    data = api().get(f"/calendars/{calendar_id}/free-slots", params={
        "startDate": convert_date_to_milliseconds(start_date),
        "endDate": convert_date_to_milliseconds(end_date),
        "timezone": timezone,
    })
    slots = {k: v for k, v in data.items() if k != "traceId"} if isinstance(data, dict) else data
    return {"success": True, "slots": slots, "message": f"Retrieved free slots for {len(slots)} days"}


@ghl_tool(
    CATEGORY,
    action="create appointment",
    hints=(
        SLOT_TAKEN,
        ErrorHint("Calendar not found. Use get_calendars to find valid IDs.", status=404, keywords=("calendar",)),
        ErrorHint("Contact not found. Use search_contacts to find valid IDs.", status=404, keywords=("contact",)),
        TIME_FORMAT,
        _invalid("appointment data"),
    ) + _permission("create appointments"),
)
def create_appointment(
    calendar_id: str,
    contact_id: str,
    start_time: str,
    end_time: str,
    title: Optional[str] = None,
    appointment_status: Optional[AppointmentStatus] = None,
    assigned_user_id: Optional[str] = None,
) -> dict:
    """Book an appointment. Check get_free_slots first to avoid conflicts.

    Args:
        calendar_id: Calendar to book on
        contact_id: Contact the appointment is for
        start_time: Start, ISO 8601 (e.g. "2025-10-20T14:00:00Z")
        end_time: End, ISO 8601
        title: Appointment title
        appointment_status: confirmed, showed, noshow or cancelled
        assigned_user_id: Team member to assign
    """
    data = api().post("/calendars/events/appointments", json={
        "calendarId": calendar_id,
        "locationId": location(),
        "contactId": contact_id,
        "startTime": start_time,
        "endTime": end_time,
        "title": title,
        "appointmentStatus": appointment_status,
        "assignedUserId": assigned_user_id,
    })
    return {"success": True, "appointment": data, "message": f"Appointment created with ID: {pick(data, 'id')}"}


@ghl_tool(CATEGORY, action="get appointment", hints=(APPOINTMENT_NOT_FOUND,) + _permission("access this appointment"))
def get_appointment(event_id: str) -> dict:
    data = api().get(f"/calendars/events/appointments/{event_id}")
    appointment = pick(data, "appointment") or pick(data, "event") or data
    return {"success": True, "appointment": appointment, "message": "Appointment retrieved successfully"}


@ghl_tool(
    CATEGORY,
    action="update appointment",
    hints=(APPOINTMENT_NOT_FOUND, SLOT_TAKEN, TIME_FORMAT, _invalid("update data")) + _permission("update this appointment"),
)
def update_appointment(
    event_id: str,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    title: Optional[str] = None,
    appointment_status: Optional[AppointmentStatus] = None,
    assigned_user_id: Optional[str] = None,
) -> dict:
    """Reschedule or edit an appointment. Only the fields you pass are changed."""
    data = api().put(f"/calendars/events/appointments/{event_id}", json={
        "startTime": start_time,
        "endTime": end_time,
        "title": title,
        "appointmentStatus": appointment_status,
        "assignedUserId": assigned_user_id,
    })
    return {"success": True, "appointment": data, "message": "Appointment updated successfully"}


@ghl_tool(CATEGORY, action="delete appointment", hints=(APPOINTMENT_NOT_FOUND,) + _permission("delete this appointment"))
def delete_appointment(event_id: str) -> dict:
    """Delete an appointment or block slot.

    To keep history, set appointment_status="cancelled" with update_appointment instead.
    """
    data = api().delete(f"/calendars/events/{event_id}")
    return {"success": bool(pick(data, "succeeded", True)), "message": "Appointment deleted successfully"}


@ghl_tool(
    CATEGORY,
    action="create block slot",
    hints=(CALENDAR_NOT_FOUND, SLOT_TAKEN, TIME_FORMAT, _invalid("block slot data")) + _permission("create block slots"),
)
def create_block_slot(
    calendar_id: str,
    start_time: str,
    end_time: str,
    title: Optional[str] = None,
    assigned_user_id: Optional[str] = None,
) -> dict:
    """Block time on a calendar so it cannot be booked (lunch, time off, internal meetings)."""
    data = api().post("/calendars/events/block-slots", json={
        "calendarId": calendar_id,
        "locationId": location(),
        "startTime": start_time,
        "endTime": end_time,
        "title": title,
        "assignedUserId": assigned_user_id,
    })
    return {"success": True, "block_slot": data, "message": f"Block slot created with ID: {pick(data, 'id')}"}


@ghl_tool(
    CATEGORY,
    action="update block slot",
    hints=(_not_found("Block slot", "get_calendar_events"), SLOT_TAKEN, TIME_FORMAT, _invalid("update data"))
    + _permission("update this block slot"),
)
def update_block_slot(
    event_id: str,
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    title: Optional[str] = None,
    assigned_user_id: Optional[str] = None,
) -> dict:
    data = api().put(f"/calendars/events/block-slots/{event_id}", json={
        "startTime": start_time,
        "endTime": end_time,
        "title": title,
        "assignedUserId": assigned_user_id,
    })
    return {"success": True, "block_slot": data, "message": "Block slot updated successfully"}
