"""Contact tools: CRUD, tags, tasks, notes, followers, campaigns and workflows."""

from __future__ import annotations

from typing import List, Literal, Optional

from ..errors import ErrorHint
from ..mcp_server import ghl_tool
from ..models import CustomFieldValue, payload
from .common import api, items, location, pick, unwrap

CATEGORY = "contact"

DUPLICATE_HINT = ErrorHint(
    "A contact with this email or phone already exists. Use upsert_contact or search_contacts instead.",
    status=400,
    keywords=("duplicate", "already exists"),
)
NOT_FOUND_HINT = ErrorHint(
    "Contact not found. Verify the contact ID with search_contacts.",
    status=404,
)


@ghl_tool(CATEGORY, action="create contact", hints=(DUPLICATE_HINT,))
def create_contact(
    email: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    phone: Optional[str] = None,
    tags: Optional[List[str]] = None,
    source: Optional[str] = None,
) -> dict:
    """Create a new contact in the configured location.

    Args:
        email: Contact email address (required)
        first_name: First name
        last_name: Last name
        phone: Phone number in E.164 format (e.g. "+15551234567")
        tags: Tags to apply
        source: Lead source (e.g. "Website", "Referral")

    Returns:
        {"success": True, "contact": created contact, "message": str}
    """
    data = api().post("/contacts/", json={
        "locationId": location(),
        "firstName": first_name,
        "lastName": last_name,
        "email": email,
        "phone": phone,
        "tags": tags,
        "source": source,
    })
    contact = unwrap(data, "contact")
    return {"success": True, "contact": contact, "message": f"Contact created with ID: {pick(contact, 'id')}"}


@ghl_tool(CATEGORY, action="search contacts")
def search_contacts(
    query: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    limit: int = 25,
) -> dict:
    """Search contacts by free text, email or phone.

    Args:
        query: Free-text search (name, email, phone, company)
        email: Exact email filter
        phone: Exact phone filter
        limit: Maximum results (default: 25)

    Returns:
        {"success": True, "contacts": [...], "total": int, "message": str}
    """
    filters = []
    if email:
        filters.append({"field": "email", "operator": "eq", "value": email})
    if phone:
        filters.append({"field": "phone", "operator": "eq", "value": phone})
    data = api().post("/contacts/search", json={
        "locationId": location(),
        "pageLimit": limit,
        "query": query,
        "filters": filters or None,
    })
    contacts = items(data, "contacts")
    total = pick(data, "total", len(contacts))
    return {
        "success": True,
        "contacts": contacts,
        "total": total,
        "message": f"Found {len(contacts)} contacts ({total} total)",
    }


@ghl_tool(CATEGORY, action="get contact", hints=(NOT_FOUND_HINT,))
def get_contact(contact_id: str) -> dict:
    """Get a contact by ID, including custom field values.

    Args:
        contact_id: Contact ID
    """
    data = api().get(f"/contacts/{contact_id}")
    return {"success": True, "contact": unwrap(data, "contact")}


@ghl_tool(CATEGORY, action="update contact", hints=(NOT_FOUND_HINT,))
def update_contact(
    contact_id: str,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    tags: Optional[List[str]] = None,
    custom_fields: Optional[List[CustomFieldValue]] = None,
) -> dict:
    """Update contact fields. Only the supplied fields change.

    Note that ``tags`` replaces the whole tag list; use add_contact_tags or
    remove_contact_tags to change individual tags.

    Args:
        contact_id: Contact ID
        first_name: New first name
        last_name: New last name
        email: New email
        phone: New phone
        tags: Complete replacement tag list
        custom_fields: Custom field values as [{"id": ..., "field_value": ...}]
    """
    data = api().put(f"/contacts/{contact_id}", json={
        "firstName": first_name,
        "lastName": last_name,
        "email": email,
        "phone": phone,
        "tags": tags,
        "customFields": payload(custom_fields),
    })
    return {"success": True, "contact": unwrap(data, "contact"), "message": "Contact updated successfully"}


@ghl_tool(CATEGORY, action="delete contact", hints=(NOT_FOUND_HINT,))
def delete_contact(contact_id: str) -> dict:
    """Permanently delete a contact."""
    data = api().delete(f"/contacts/{contact_id}")
    return {"success": True, "succeded": pick(data, "succeded", True), "message": f"Contact {contact_id} deleted"}


@ghl_tool(CATEGORY, action="add contact tags")
def add_contact_tags(contact_id: str, tags: List[str]) -> dict:
    """Add tags to a contact without touching its other tags."""
    data = api().post(f"/contacts/{contact_id}/tags", json={"tags": tags})
    return {"success": True, "tags": items(data, "tags")}


@ghl_tool(CATEGORY, action="remove contact tags")
def remove_contact_tags(contact_id: str, tags: List[str]) -> dict:
    """Remove tags from a contact."""
    data = api().delete(f"/contacts/{contact_id}/tags", json={"tags": tags})
    return {"success": True, "tags": items(data, "tags")}


# Tasks

@ghl_tool(CATEGORY, action="get contact tasks")
def get_contact_tasks(contact_id: str) -> dict:
    """List all tasks on a contact.

    Returns:
        {"success": True, "tasks": [...], "count": int, "contact_id": str}
    """
    tasks = items(api().get(f"/contacts/{contact_id}/tasks"), "tasks")
    return {"success": True, "tasks": tasks, "count": len(tasks), "contact_id": contact_id}


@ghl_tool(CATEGORY, action="create contact task")
def create_contact_task(
    contact_id: str,
    title: str,
    due_date: str,
    body: Optional[str] = None,
    completed: bool = False,
    assigned_to: Optional[str] = None,
) -> dict:
    """Create a task on a contact.

    Args:
        contact_id: Contact the task belongs to
        title: Task title
        due_date: Due date, ISO 8601 (e.g. "2025-03-01T17:00:00Z")
        body: Task details
        completed: Whether the task starts completed (default: False)
        assigned_to: USER ID of the assignee (not a contact ID)
    """
    data = api().post(f"/contacts/{contact_id}/tasks", json={
        "title": title,
        "body": body,
        "dueDate": due_date,
        "completed": completed,
        "assignedTo": assigned_to,
    })
    return {"success": True, "task": unwrap(data, "task"), "message": "Task created successfully"}


@ghl_tool(CATEGORY, action="get contact task")
def get_contact_task(contact_id: str, task_id: str) -> dict:
    """Get one task of a contact."""
    data = api().get(f"/contacts/{contact_id}/tasks/{task_id}")
    return {"success": True, "task": unwrap(data, "task")}


@ghl_tool(CATEGORY, action="update contact task")
def update_contact_task(
    contact_id: str,
    task_id: str,
    title: Optional[str] = None,
    body: Optional[str] = None,
    due_date: Optional[str] = None,
    completed: Optional[bool] = None,
    assigned_to: Optional[str] = None,
) -> dict:
    """Update a contact task. Only the supplied fields change.

    Args:
        contact_id: Contact ID
        task_id: Task ID
        title: New title
        body: New details
        due_date: New due date (ISO 8601)
        completed: Completion flag
        assigned_to: USER ID of the new assignee
    """
    data = api().put(f"/contacts/{contact_id}/tasks/{task_id}", json={
        "title": title,
        "body": body,
        "dueDate": due_date,
        "completed": completed,
        "assignedTo": assigned_to,
    })
    return {"success": True, "task": unwrap(data, "task"), "message": "Task updated successfully"}


@ghl_tool(CATEGORY, action="delete contact task")
def delete_contact_task(contact_id: str, task_id: str) -> dict:
    """Delete a contact task."""
    data = api().delete(f"/contacts/{contact_id}/tasks/{task_id}")
    return {"success": True, "succeded": pick(data, "succeded", True), "message": f"Task {task_id} deleted"}


@ghl_tool(CATEGORY, action="update task completion")
def update_task_completion(contact_id: str, task_id: str, completed: bool) -> dict:
    """Mark a contact task as completed or open."""
    data = api().put(f"/contacts/{contact_id}/tasks/{task_id}/completed", json={"completed": completed})
    return {"success": True, "task": unwrap(data, "task")}


# Notes

@ghl_tool(CATEGORY, action="get contact notes")
def get_contact_notes(contact_id: str) -> dict:
    """List all notes on a contact.

    Returns:
        {"success": True, "notes": [...], "count": int, "contact_id": str}
    """
    notes = items(api().get(f"/contacts/{contact_id}/notes"), "notes")
    return {"success": True, "notes": notes, "count": len(notes), "contact_id": contact_id}


@ghl_tool(CATEGORY, action="create contact note")
def create_contact_note(contact_id: str, body: str, user_id: Optional[str] = None) -> dict:
    """Add a note to a contact.

    Args:
        contact_id: Contact ID
        body: Note text
        user_id: Author user ID
    """
    data = api().post(f"/contacts/{contact_id}/notes", json={"body": body, "userId": user_id})
    return {"success": True, "note": unwrap(data, "note"), "message": "Note created successfully"}


@ghl_tool(CATEGORY, action="get contact note")
def get_contact_note(contact_id: str, note_id: str) -> dict:
    data = api().get(f"/contacts/{contact_id}/notes/{note_id}")
    return {"success": True, "note": unwrap(data, "note")}


@ghl_tool(CATEGORY, action="update contact note")
def update_contact_note(contact_id: str, note_id: str, body: str, user_id: Optional[str] = None) -> dict:
    """Replace the text of a contact note."""
    data = api().put(f"/contacts/{contact_id}/notes/{note_id}", json={"body": body, "userId": user_id})
    return {"success": True, "note": unwrap(data, "note"), "message": "Note updated successfully"}


@ghl_tool(CATEGORY, action="delete contact note")
def delete_contact_note(contact_id: str, note_id: str) -> dict:
    data = api().delete(f"/contacts/{contact_id}/notes/{note_id}")
    return {"success": True, "succeded": pick(data, "succeded", True), "message": f"Note {note_id} deleted"}


# Advanced operations

@ghl_tool(CATEGORY, action="upsert contact")
def upsert_contact(
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    name: Optional[str] = None,
    email: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    postal_code: Optional[str] = None,
    website: Optional[str] = None,
    timezone: Optional[str] = None,
    company_name: Optional[str] = None,
    tags: Optional[List[str]] = None,
    custom_fields: Optional[List[CustomFieldValue]] = None,
    source: Optional[str] = None,
    assigned_to: Optional[str] = None,
) -> dict:
    """Create a contact, or update it if one with the same email/phone exists.

    The location's duplicate-contact settings decide which field is matched.

    Args:
        first_name: First name
        last_name: Last name
        name: Full name
        email: Email address
        phone: Phone number
        address: Street address
        city: City
        state: State or province
        country: Country code
        postal_code: ZIP / postal code
        website: Website URL
        timezone: IANA timezone
        company_name: Company name
        tags: Tags to apply
        custom_fields: Custom field values as [{"id": ..., "field_value": ...}]
        source: Lead source
        assigned_to: User ID of the owner

    Returns:
        {"success": True, "contact": dict, "is_new": bool, "message": str}
    """
    if not email and not phone:
        raise ValueError("upsert_contact needs an email or a phone to match on")
    data = api().post("/contacts/upsert", json={
        "locationId": location(),
        "firstName": first_name,
        "lastName": last_name,
        "name": name,
        "email": email,
        "phone": phone,
        "address1": address,
        "city": city,
        "state": state,
        "country": country,
        "postalCode": postal_code,
        "website": website,
        "timezone": timezone,
        "companyName": company_name,
        "tags": tags,
        "customFields": payload(custom_fields),
        "source": source,
        "assignedTo": assigned_to,
    })
    is_new = bool(pick(data, "new", False))
    return {
        "success": True,
        "contact": unwrap(data, "contact"),
        "is_new": is_new,
        "message": "Contact created" if is_new else "Existing contact updated",
    }


@ghl_tool(CATEGORY, action="check for duplicate contact")
def get_duplicate_contact(email: Optional[str] = None, phone: Optional[str] = None) -> dict:
    """Find the contact that would be treated as a duplicate of this email/phone.

    Returns:
        {"success": True, "contact": dict or None, "is_duplicate": bool}
    """
    if not email and not phone:
        raise ValueError("Provide an email or a phone to check")
    data = api().get("/contacts/search/duplicate", params={
        "locationId": location(),
        "email": email,
        "number": phone,
    })
    contact = pick(data, "contact")
    return {"success": True, "contact": contact, "is_duplicate": bool(contact)}


@ghl_tool(CATEGORY, action="get contacts by business")
def get_contacts_by_business(
    business_id: str,
    limit: Optional[int] = None,
    skip: Optional[int] = None,
    query: Optional[str] = None,
) -> dict:
    """List contacts linked to a business (company) record."""
    data = api().get(f"/contacts/business/{business_id}", params={
        "locationId": location(),
        "limit": limit,
        "skip": skip,
        "query": query,
    })
    contacts = items(data, "contacts")
    return {"success": True, "contacts": contacts, "count": len(contacts), "business_id": business_id}


@ghl_tool(CATEGORY, action="get contact appointments")
def get_contact_appointments(contact_id: str) -> dict:
    """List calendar appointments booked for a contact."""
    appointments = items(api().get(f"/contacts/{contact_id}/appointments"), "events")
    return {"success": True, "appointments": appointments, "count": len(appointments), "contact_id": contact_id}


# Bulk operations

@ghl_tool(CATEGORY, action="bulk update contact tags")
def bulk_update_contact_tags(
    contact_ids: List[str],
    tags: List[str],
    operation: Literal["add", "remove"],
    remove_all_tags: Optional[bool] = None,
) -> dict:
    """Add or remove tags on many contacts at once.

    Args:
        contact_ids: Contacts to update
        tags: Tags to add or remove
        operation: "add" or "remove"
        remove_all_tags: With operation "remove", clear every tag first
    """
    data = api().post(f"/contacts/tags/bulk/{operation}", json={
        "contacts": contact_ids,
        "tags": tags,
        "locationId": location(),
        "removeAllTags": remove_all_tags,
    })
    return {"success": True, "result": data, "message": f"Tags {operation} applied to {len(contact_ids)} contacts"}


@ghl_tool(CATEGORY, action="bulk update contact business")
def bulk_update_contact_business(contact_ids: List[str], business_id: Optional[str] = None) -> dict:
    """Attach contacts to a business, or detach them when business_id is omitted."""
    data = api().post("/contacts/bulk/business", json={
        "locationId": location(),
        "ids": contact_ids,
        "businessId": business_id,
    })
    return {"success": True, "result": data}


# Followers

@ghl_tool(CATEGORY, action="add contact followers")
def add_contact_followers(contact_id: str, followers: List[str]) -> dict:
    """Add users (by user ID) as followers of a contact."""
    data = api().post(f"/contacts/{contact_id}/followers", json={"followers": followers})
    return {"success": True, **(data if isinstance(data, dict) else {})}


@ghl_tool(CATEGORY, action="remove contact followers")
def remove_contact_followers(contact_id: str, followers: List[str]) -> dict:
    """Remove follower users from a contact."""
    data = api().delete(f"/contacts/{contact_id}/followers", json={"followers": followers})
    return {"success": True, **(data if isinstance(data, dict) else {})}


# Campaigns and workflows

@ghl_tool(CATEGORY, action="add contact to campaign")
def add_contact_to_campaign(contact_id: str, campaign_id: str) -> dict:
    api().post(f"/contacts/{contact_id}/campaigns/{campaign_id}", json={})
    return {"success": True, "message": f"Contact {contact_id} added to campaign {campaign_id}"}


@ghl_tool(CATEGORY, action="remove contact from campaign")
def remove_contact_from_campaign(contact_id: str, campaign_id: str) -> dict:
    api().delete(f"/contacts/{contact_id}/campaigns/{campaign_id}")
    return {"success": True, "message": f"Contact {contact_id} removed from campaign {campaign_id}"}


@ghl_tool(CATEGORY, action="remove contact from all campaigns")
def remove_contact_from_all_campaigns(contact_id: str) -> dict:
    api().delete(f"/contacts/{contact_id}/campaigns/removeAll")
    return {"success": True, "message": f"Contact {contact_id} removed from all campaigns"}


@ghl_tool(CATEGORY, action="add contact to workflow")
def add_contact_to_workflow(contact_id: str, workflow_id: str, event_start_time: Optional[str] = None) -> dict:
    """Enroll a contact in a workflow.

    Args:
        contact_id: Contact ID
        workflow_id: Workflow ID (see get_workflows)
        event_start_time: Optional ISO 8601 start time for time-based triggers
    """
    api().post(f"/contacts/{contact_id}/workflow/{workflow_id}", json={"eventStartTime": event_start_time})
    return {"success": True, "message": f"Contact {contact_id} added to workflow {workflow_id}"}


@ghl_tool(CATEGORY, action="remove contact from workflow")
def remove_contact_from_workflow(contact_id: str, workflow_id: str, event_start_time: Optional[str] = None) -> dict:
    api().delete(f"/contacts/{contact_id}/workflow/{workflow_id}", json={"eventStartTime": event_start_time})
    return {"success": True, "message": f"Contact {contact_id} removed from workflow {workflow_id}"}
