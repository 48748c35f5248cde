"""Custom object tools: schemas and records."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..mcp_server import ghl_tool
from ..models import ObjectLabels, PrimaryDisplayProperty, payload
from .common import api, items, location, pick, unwrap

CATEGORY = "object"


def _check_people(owner: Optional[List[str]], followers: Optional[List[str]]) -> None:
    if owner is not None and len(owner) > 1:
        raise ValueError("owner accepts at most 1 user ID")
    if followers is not None and len(followers) > 10:
        raise ValueError("followers accepts at most 10 user IDs")


@ghl_tool(CATEGORY, action="get objects")
def get_all_objects(location_id: Optional[str] = None) -> dict:
    """List standard (contact, opportunity, business) and custom objects of a location."""
    data = api().get("/objects/", params={"locationId": location(location_id)})
    objects = items(data, "objects")
    return {"success": True, "objects": objects, "message": f"Retrieved {len(objects)} objects for location"}


@ghl_tool(CATEGORY, action="create object schema")
def create_object_schema(
    labels: ObjectLabels,
    key: str,
    primary_display_property_details: PrimaryDisplayProperty,
    description: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Create a custom object.

    Args:
        labels: {singular, plural}, e.g. {"singular": "Pet", "plural": "Pets"}
        key: Object key, e.g. "pet"; GHL adds the "custom_objects." prefix
        primary_display_property_details: {key, name, data_type TEXT or NUMERICAL}
        description: Object description
        location_id: Location (default: configured)
    """
    data = api().post("/objects/", json={
        "labels": payload(labels),
        "key": key,
        "description": description,
        "locationId": location(location_id),
        "primaryDisplayPropertyDetails": payload(primary_display_property_details),
    })
    obj = unwrap(data, "object")
    return {
        "success": True,
        "object": obj,
        "message": f"Custom object schema created successfully with key: {pick(obj, 'key', key)}",
    }


@ghl_tool(CATEGORY, action="get object schema")
def get_object_schema(key: str, location_id: Optional[str] = None, fetch_properties: bool = True) -> dict:
    """Get an object's schema, and its fields when fetch_properties is true.

    Args:
        key: "custom_objects.pet" for custom objects, "contact" etc. for standard ones
    """
    data = api().get(f"/objects/{key}", params={
        "locationId": location(location_id),
        "fetchProperties": fetch_properties,
    })
    return {
        "success": True,
        "object": pick(data, "object", data),
        "fields": items(data, "fields"),
        "cache": pick(data, "cache"),
        "message": f"Object schema retrieved successfully for key: {key}",
    }


@ghl_tool(CATEGORY, action="update object schema")
def update_object_schema(
    key: str,
    searchable_properties: List[str],
    labels: Optional[ObjectLabels] = None,
    description: Optional[str] = None,
    location_id: Optional[str] = None,
) -> dict:
    """Update labels, description and searchable fields of an object.

    Args:
        key: Object key
        searchable_properties: Field keys to index, e.g. ["custom_objects.pet.name"]
    """
    data = api().put(f"/objects/{key}", json={
        "labels": payload(labels),
        "description": description,
        "locationId": location(location_id),
        "searchableProperties": searchable_properties,
    })
    return {
        "success": True,
        "object": unwrap(data, "object"),
        "message": f"Object schema updated successfully for key: {key}",
    }


@ghl_tool(CATEGORY, action="create object record")
def create_object_record(
    schema_key: str,
    properties: Dict[str, Any],
    location_id: Optional[str] = None,
    owner: Optional[List[str]] = None,
    followers: Optional[List[str]] = None,
) -> dict:
    """Create a record of an object.

    Args:
        schema_key: e.g. "custom_objects.pet" or "business"
        properties: Field values, e.g. {"name": "Buddy", "breed": "Golden Retriever"}
        location_id: Location (default: configured)
        owner: Owning user ID (at most 1, custom objects only)
        followers: Following user IDs (at most 10)
    """
    _check_people(owner, followers)
    data = api().post(f"/objects/{schema_key}/records", json={
        "properties": properties,
        "locationId": location(location_id),
        "owner": owner,
        "followers": followers,
    })
    record = unwrap(data, "record")
    record_id = pick(record, "id")
    return {
        "success": True,
        "record": record,
        "record_id": record_id,
        "message": f"Record created successfully in {schema_key} with ID: {record_id}",
    }


@ghl_tool(CATEGORY, action="get object record")
def get_object_record(schema_key: str, record_id: str) -> dict:
    data = api().get(f"/objects/{schema_key}/records/{record_id}")
    return {"success": True, "record": unwrap(data, "record"), "message": f"Record retrieved successfully from {schema_key}"}


@ghl_tool(CATEGORY, action="update object record")
def update_object_record(
    schema_key: str,
    record_id: str,
    properties: Optional[Dict[str, Any]] = None,
    location_id: Optional[str] = None,
    owner: Optional[List[str]] = None,
    followers: Optional[List[str]] = None,
) -> dict:
    """Update a record. Only the properties you pass are changed."""
    _check_people(owner, followers)
    data = api().put(
        f"/objects/{schema_key}/records/{record_id}",
        params={"locationId": location(location_id)},
        json={"properties": properties, "owner": owner, "followers": followers},
    )
    return {"success": True, "record": unwrap(data, "record"), "message": f"Record updated successfully in {schema_key}"}


@ghl_tool(CATEGORY, action="delete object record")
def delete_object_record(schema_key: str, record_id: str) -> dict:
    data = api().delete(f"/objects/{schema_key}/records/{record_id}")
    return {
        "success": True,
        "deleted_id": pick(data, "id", record_id),
        "message": f"Record deleted successfully from {schema_key}",
    }


@ghl_tool(CATEGORY, action="search object records")
def search_object_records(
    schema_key: str,
    query: str,
    location_id: Optional[str] = None,
    page: int = 1,
    page_limit: int = 10,
    search_after: Optional[List[str]] = None,
) -> dict:
    """Search records by their searchable properties.

    Args:
        schema_key: Object to search
        query: e.g. "name:Buddy"
        location_id: Location (default: configured)
        page: Page number (default: 1)
        page_limit: Records per page, up to 100 (default: 10)
        search_after: Cursor from a previous search
    """
    data = api().post(f"/objects/{schema_key}/records/search", json={
        "locationId": location(location_id),
        "page": page,
        "pageLimit": page_limit,
        "query": query,
        "searchAfter": search_after or [],
    })
    records = items(data, "records")
    total = pick(data, "total", len(records))
    return {
        "success": True,
        "records": records,
        "total": total,
        "message": f"Found {len(records)} records in {schema_key} ({total} total)",
    }
