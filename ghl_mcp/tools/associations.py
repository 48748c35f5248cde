"""Association tools: relationship types between objects, and relations between records."""

from __future__ import annotations

from typing import List, Optional

from ..mcp_server import ghl_tool
from .common import api, items, location

CATEGORY = "association"


def _result(data, message: str) -> dict:
    return {"success": True, "data": data, "message": message}


@ghl_tool(CATEGORY, action="get associations")
def get_all_associations(location_id: Optional[str] = None, skip: int = 0, limit: int = 20) -> dict:
    """List association types (both system-defined and user-defined)."""
    data = api().get("/associations/", params={"locationId": location(location_id), "skip": skip, "limit": limit})
    return _result(data, f"Retrieved {len(items(data, 'associations'))} associations")


@ghl_tool(CATEGORY, action="create association")
def create_association(
    key: str,
    first_object_label: str,
    first_object_key: str,
    second_object_label: str,
    second_object_key: str,
    location_id: Optional[str] = None,
) -> dict:
    """Define a relationship type between two objects.

    Args:
        key: Unique key, e.g. "student_tutor"
        first_object_label: Label of the first side, e.g. "student"
        first_object_key: First object key, e.g. "custom_objects.student"
        second_object_label: Label of the second side, e.g. "tutor"
        second_object_key: Second object key, e.g. "contact"
        location_id: Location (default: configured)
    """
    data = api().post("/associations/", json={
        "locationId": location(location_id),
        "key": key,
        "firstObjectLabel": first_object_label,
        "firstObjectKey": first_object_key,
        "secondObjectLabel": second_object_label,
        "secondObjectKey": second_object_key,
    })
    return _result(data, f"Association '{key}' created successfully")


@ghl_tool(CATEGORY, action="get association")
def get_association_by_id(association_id: str) -> dict:
    return _result(api().get(f"/associations/{association_id}"), "Association retrieved successfully")


@ghl_tool(CATEGORY, action="update association")
def update_association(association_id: str, first_object_label: str, second_object_label: str) -> dict:
    """Rename the labels of an association. Keys and object types cannot change."""
    data = api().put(f"/associations/{association_id}", json={
        "firstObjectLabel": first_object_label,
        "secondObjectLabel": second_object_label,
    })
    return _result(data, "Association updated successfully")


@ghl_tool(CATEGORY, action="delete association")
def delete_association(association_id: str) -> dict:
    """Delete a user-defined association and every relation that uses it."""
    return _result(api().delete(f"/associations/{association_id}"), "Association deleted successfully")


@ghl_tool(CATEGORY, action="get association by key")
def get_association_by_key(key_name: str, location_id: Optional[str] = None) -> dict:
    data = api().get(f"/associations/key/{key_name}", params={"locationId": location(location_id)})
    return _result(data, f"Association with key '{key_name}' retrieved successfully")


@ghl_tool(CATEGORY, action="get association by object key")
def get_association_by_object_key(object_key: str, location_id: Optional[str] = None) -> dict:
    """Find associations that involve an object, e.g. "custom_objects.pet" or "contact"."""
    data = api().get(f"/associations/objectKey/{object_key}", params={"locationId": location(location_id)})
    return _result(data, f"Association with object key '{object_key}' retrieved successfully")


@ghl_tool(CATEGORY, action="create relation")
def create_relation(
    association_id: str,
    first_record_id: str,
    second_record_id: str,
    location_id: Optional[str] = None,
) -> dict:
    """Link two records through an association.

    The first record must belong to the association's first object and the
    second record to its second object.
    """
    data = api().post("/associations/relations", json={
        "locationId": location(location_id),
        "associationId": association_id,
        "firstRecordId": first_record_id,
        "secondRecordId": second_record_id,
    })
    return _result(data, "Relation created successfully between records")


@ghl_tool(CATEGORY, action="get relations")
def get_relations_by_record(
    record_id: str,
    location_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 20,
    association_ids: Optional[List[str]] = None,
) -> dict:
    data = api().get(f"/associations/relations/{record_id}", params={
        "locationId": location(location_id),
        "skip": skip,
        "limit": limit,
        "associationIds": association_ids,
    })
    return _result(data, f"Retrieved {len(items(data, 'relations'))} relations for record")


@ghl_tool(CATEGORY, action="delete relation")
def delete_relation(relation_id: str, location_id: Optional[str] = None) -> dict:
    data = api().delete(f"/associations/relations/{relation_id}", params={"locationId": location(location_id)})
    return _result(data, "Relation deleted successfully")
