"""Location (sub-account) tools: locations, tags, tasks, custom fields/values, templates."""

from __future__ import annotations

from typing import List, Literal, Optional

from ..mcp_server import ghl_tool
from ..models import ProspectInfo, payload
from .common import api, items, location, pick, unwrap

CATEGORY = "location"


@ghl_tool(CATEGORY, action="search locations")
def search_locations(
    company_id: Optional[str] = None,
    email: Optional[str] = None,
    skip: int = 0,
    limit: int = 10,
    order: Literal["asc", "desc"] = "asc",
) -> dict:
    """Search the sub-accounts of an agency. Needs an agency-level token.

    Args:
        company_id: Agency ID
        email: Location email filter
        skip: Results to skip (default: 0)
        limit: Maximum results, up to 100 (default: 10)
        order: Sort by creation date (default: asc)
    """
    data = api().get("/locations/search", params={
        "companyId": company_id,
        "email": email,
        "skip": skip,
        "limit": limit,
        "order": order,
    })
    locations = items(data, "locations")
    return {"success": True, "locations": locations, "message": f"Found {len(locations)} locations"}


@ghl_tool(CATEGORY, action="get location")
def get_location(location_id: Optional[str] = None) -> dict:
    """Get the details of a location (default: the configured one)."""
    data = api().get(f"/locations/{location(location_id)}")
    return {"success": True, "location": unwrap(data, "location"), "message": "Location retrieved successfully"}


@ghl_tool(CATEGORY, action="create location")
def create_location(
    name: str,
    company_id: str,
    prospect_info: Optional[ProspectInfo] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    postal_code: Optional[str] = None,
    website: Optional[str] = None,
    timezone: Optional[str] = None,
    snapshot_id: Optional[str] = None,
) -> dict:
    """Create a sub-account under an agency. Needs an agency-level token.

    Args:
        name: Location name, e.g. "Acme Corp - NYC"
        company_id: Parent agency ID
        prospect_info: Primary contact {first_name, last_name, email}
        phone: Business phone with country code
        address: Street address
        city: City
        state: State or province
        country: 2-letter country code
        postal_code: Postal/ZIP code
        website: Website URL
        timezone: IANA timezone (see get_timezones)
        snapshot_id: Snapshot to load into the new location
    """
    data = api().post("/locations/", json={
        "name": name,
        "companyId": company_id,
        "prospectInfo": payload(prospect_info),
        "phone": phone,
        "address": address,
        "city": city,
        "state": state,
        "country": country,
        "postalCode": postal_code,
        "website": website,
        "timezone": timezone,
        "snapshotId": snapshot_id,
    })
    return {"success": True, "location": unwrap(data, "location"), "message": f"Location \"{name}\" created successfully"}


@ghl_tool(CATEGORY, action="update location")
def update_location(
    location_id: str,
    name: Optional[str] = None,
    company_id: Optional[str] = None,
    phone: Optional[str] = None,
    address: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    country: Optional[str] = None,
    postal_code: Optional[str] = None,
    website: Optional[str] = None,
    timezone: Optional[str] = None,
) -> dict:
    """Update a location. Only the fields you pass are changed."""
    data = api().put(f"/locations/{location_id}", json={
        "name": name,
        "companyId": company_id,
        "phone": phone,
        "address": address,
        "city": city,
        "state": state,
        "country": country,
        "postalCode": postal_code,
        "website": website,
        "timezone": timezone,
    })
    return {"success": True, "location": unwrap(data, "location"), "message": "Location updated successfully"}


@ghl_tool(CATEGORY, action="delete location")
def delete_location(location_id: str, delete_twilio_account: bool = False) -> dict:
    """Permanently delete a sub-account and all its data."""
    data = api().delete(f"/locations/{location_id}", params={"deleteTwilioAccount": delete_twilio_account})
    return {"success": True, "message": pick(data, "message", "Location deleted successfully")}


# Tags

@ghl_tool(CATEGORY, action="get location tags")
def get_location_tags(location_id: Optional[str] = None) -> dict:
    data = api().get(f"/locations/{location(location_id)}/tags")
    tags = items(data, "tags")
    return {"success": True, "tags": tags, "message": f"Retrieved {len(tags)} location tags"}


@ghl_tool(CATEGORY, action="create location tag")
def create_location_tag(name: str, location_id: Optional[str] = None) -> dict:
    """Create a tag (names are unique within a location)."""
    data = api().post(f"/locations/{location(location_id)}/tags", json={"name": name})
    return {"success": True, "tag": unwrap(data, "tag"), "message": f"Tag \"{name}\" created successfully"}


@ghl_tool(CATEGORY, action="get location tag")
def get_location_tag(tag_id: str, location_id: Optional[str] = None) -> dict:
    data = api().get(f"/locations/{location(location_id)}/tags/{tag_id}")
    return {"success": True, "tag": unwrap(data, "tag"), "message": "Location tag retrieved successfully"}


@ghl_tool(CATEGORY, action="update location tag")
def update_location_tag(tag_id: str, name: str, location_id: Optional[str] = None) -> dict:
    """Rename a tag. Contacts carrying it are updated too."""
    data = api().put(f"/locations/{location(location_id)}/tags/{tag_id}", json={"name": name})
    return {"success": True, "tag": unwrap(data, "tag"), "message": "Location tag updated successfully"}


@ghl_tool(CATEGORY, action="delete location tag")
def delete_location_tag(tag_id: str, location_id: Optional[str] = None) -> dict:
    """Delete a tag. It is removed from every contact carrying it."""
    api().delete(f"/locations/{location(location_id)}/tags/{tag_id}")
    return {"success": True, "message": "Location tag deleted successfully"}


# Tasks

@ghl_tool(CATEGORY, action="search location tasks")
def search_location_tasks(
    location_id: Optional[str] = None,
    contact_id: Optional[List[str]] = None,
    completed: Optional[bool] = None,
    assigned_to: Optional[List[str]] = None,
    query: Optional[str] = None,
    limit: int = 25,
    skip: int = 0,
    business_id: Optional[str] = None,
) -> dict:
    """Search tasks across every contact of a location.

    Args:
        location_id: Location (default: configured)
        contact_id: Only tasks of these contacts
        completed: Completion filter
        assigned_to: Only tasks assigned to these users
        query: Text search in task content
        limit: Maximum results (default: 25)
        skip: Results to skip (default: 0)
        business_id: Business filter
    """
    data = api().post(f"/locations/{location(location_id)}/tasks/search", json={
        "contactId": contact_id,
        "completed": completed,
        "assignedTo": assigned_to,
        "query": query,
        "limit": limit,
        "skip": skip,
        "businessId": business_id,
    })
    tasks = items(data, "tasks")
    return {"success": True, "tasks": tasks, "message": f"Found {len(tasks)} tasks"}


# Custom fields

@ghl_tool(CATEGORY, action="get custom fields")
def get_location_custom_fields(
    location_id: Optional[str] = None,
    model: Literal["contact", "opportunity", "all"] = "all",
) -> dict:
    data = api().get(f"/locations/{location(location_id)}/customFields", params={"model": model})
    fields = items(data, "customFields")
    return {"success": True, "custom_fields": fields, "message": f"Retrieved {len(fields)} custom fields"}


@ghl_tool(CATEGORY, action="create custom field")
def create_location_custom_field(
    name: str,
    data_type: Literal["TEXT", "TEXTAREA", "NUMBER", "CHECKBOX", "SELECT", "RADIO", "DATE"],
    model: Literal["contact", "opportunity"],
    location_id: Optional[str] = None,
    placeholder: Optional[str] = None,
    position: Optional[int] = None,
) -> dict:
    """Create a contact or opportunity custom field on a location.

    Args:
        name: Field label
        data_type: TEXT, TEXTAREA, NUMBER, CHECKBOX, SELECT, RADIO or DATE
        model: contact or opportunity
        location_id: Location (default: configured)
        placeholder: Placeholder text
        position: Display order
    """
    data = api().post(f"/locations/{location(location_id)}/customFields", json={
        "name": name,
        "dataType": data_type,
        "model": model,
        "placeholder": placeholder,
        "position": position,
    })
    return {
        "success": True,
        "custom_field": unwrap(data, "customField"),
        "message": f"Custom field \"{name}\" created successfully",
    }


@ghl_tool(CATEGORY, action="get custom field")
def get_location_custom_field(custom_field_id: str, location_id: Optional[str] = None) -> dict:
    data = api().get(f"/locations/{location(location_id)}/customFields/{custom_field_id}")
    return {"success": True, "custom_field": unwrap(data, "customField"), "message": "Custom field retrieved successfully"}


@ghl_tool(CATEGORY, action="update custom field")
def update_location_custom_field(
    custom_field_id: str,
    name: str,
    location_id: Optional[str] = None,
    placeholder: Optional[str] = None,
    position: Optional[int] = None,
) -> dict:
    data = api().put(f"/locations/{location(location_id)}/customFields/{custom_field_id}", json={
        "name": name,
        "placeholder": placeholder,
        "position": position,
    })
    return {"success": True, "custom_field": unwrap(data, "customField"), "message": "Custom field updated successfully"}


@ghl_tool(CATEGORY, action="delete custom field")
def delete_location_custom_field(custom_field_id: str, location_id: Optional[str] = None) -> dict:
    """Delete a custom field and the data stored in it."""
    api().delete(f"/locations/{location(location_id)}/customFields/{custom_field_id}")
    return {"success": True, "message": "Custom field deleted successfully"}


# Custom values

@ghl_tool(CATEGORY, action="get custom values")
def get_location_custom_values(location_id: Optional[str] = None, limit: int = 25) -> dict:
    """List custom values (location-wide merge fields).

    GHL returns every value at once; only the first ``limit`` are passed
    back to keep the response small.

    Returns:
        {"success": True, "custom_values": [...], "total": int, "returned": int, "has_more": bool, "message": str}
    """
    data = api().get(f"/locations/{location(location_id)}/customValues")
    every = items(data, "customValues")
    values = every[:limit]
    has_more = len(every) > limit
    message = f"Retrieved {len(values)} of {len(every)} custom values"
    if has_more:
        message += " (use limit parameter to get more)"
    return {
        "success": True,
        "custom_values": values,
        "total": len(every),
        "returned": len(values),
        "has_more": has_more,
        "message": message,
    }


@ghl_tool(CATEGORY, action="create custom value")
def create_location_custom_value(name: str, value: str, location_id: Optional[str] = None) -> dict:
    data = api().post(f"/locations/{location(location_id)}/customValues", json={"name": name, "value": value})
    return {
        "success": True,
        "custom_value": unwrap(data, "customValue"),
        "message": f"Custom value \"{name}\" created successfully",
    }


@ghl_tool(CATEGORY, action="get custom value")
def get_location_custom_value(custom_value_id: str, location_id: Optional[str] = None) -> dict:
    data = api().get(f"/locations/{location(location_id)}/customValues/{custom_value_id}")
    return {"success": True, "custom_value": unwrap(data, "customValue"), "message": "Custom value retrieved successfully"}


@ghl_tool(CATEGORY, action="update custom value")
def update_location_custom_value(custom_value_id: str, name: str, value: str, location_id: Optional[str] = None) -> dict:
    data = api().put(
        f"/locations/{location(location_id)}/customValues/{custom_value_id}",
        json={"name": name, "value": value},
    )
    return {"success": True, "custom_value": unwrap(data, "customValue"), "message": "Custom value updated successfully"}


@ghl_tool(CATEGORY, action="delete custom value")
def delete_location_custom_value(custom_value_id: str, location_id: Optional[str] = None) -> dict:
    api().delete(f"/locations/{location(location_id)}/customValues/{custom_value_id}")
    return {"success": True, "message": "Custom value deleted successfully"}


# Templates

@ghl_tool(CATEGORY, action="get location templates")
def get_location_templates(
    location_id: Optional[str] = None,
    origin_id: Optional[str] = None,
    type: Optional[Literal["sms", "email", "whatsapp"]] = None,
    deleted: bool = False,
    skip: int = 0,
    limit: int = 25,
) -> dict:
    """List SMS, email and WhatsApp snippets of a location.

    Args:
        location_id: Location (default: configured)
        origin_id: Origin ID (default: the location ID)
        type: sms, email or whatsapp
        deleted: Include deleted templates
        skip: Results to skip (default: 0)
        limit: Maximum results, up to 100 (default: 25)
    """
    loc = location(location_id)
    data = api().get(f"/locations/{loc}/templates", params={
        "originId": origin_id or loc,
        "type": type,
        "deleted": deleted,
        "skip": skip,
        "limit": limit,
    })
    templates = items(data, "templates")
    total = pick(data, "totalCount", len(templates))
    return {
        "success": True,
        "templates": templates,
        "total_count": total,
        "message": f"Retrieved {len(templates)} templates ({total} total)",
    }


@ghl_tool(CATEGORY, action="delete template")
def delete_location_template(template_id: str, location_id: Optional[str] = None) -> dict:
    api().delete(f"/locations/{location(location_id)}/templates/{template_id}")
    return {"success": True, "message": "Template deleted successfully"}


@ghl_tool(CATEGORY, action="get timezones")
def get_timezones(location_id: Optional[str] = None) -> dict:
    """List IANA timezone names accepted by GHL."""
    data = api().get(f"/locations/{location(location_id)}/timezones")
    timezones = data if isinstance(data, list) else items(data, "timeZones")
    return {"success": True, "timezones": timezones, "message": f"Retrieved {len(timezones)} available timezones"}
