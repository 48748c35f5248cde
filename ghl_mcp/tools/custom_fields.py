"""Custom field (v2) tools for custom objects: fields and folders."""

from __future__ import annotations

from typing import List, Literal, Optional

from ..mcp_server import ghl_tool
from ..models import FieldOption, payload
from .common import api, items, location

CATEGORY = "custom_field"

FieldType = Literal[
    "TEXT", "LARGE_TEXT", "NUMERICAL", "PHONE", "MONETORY", "CHECKBOX", "SINGLE_OPTIONS",
    "MULTIPLE_OPTIONS", "DATE", "TEXTBOX_LIST", "FILE_UPLOAD", "RADIO", "EMAIL",
]
FileFormat = Literal[".pdf", ".docx", ".doc", ".jpg", ".jpeg", ".png", ".gif", ".csv", ".xlsx", ".xls", "all"]


def _result(data, message: str) -> dict:
    return {"success": True, "data": data, "message": message}


@ghl_tool(CATEGORY, action="get custom field")
def get_custom_field_by_id(id: str) -> dict:
    """Get a custom field or folder by ID."""
    return _result(api().get(f"/custom-fields/{id}"), "Custom field/folder retrieved successfully")


@ghl_tool(CATEGORY, action="create custom field")
def create_custom_field(
    data_type: FieldType,
    field_key: str,
    object_key: str,
    parent_id: str,
    location_id: Optional[str] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
    placeholder: Optional[str] = None,
    show_in_forms: bool = True,
    options: Optional[List[FieldOption]] = None,
    accepted_formats: Optional[FileFormat] = None,
    max_file_limit: Optional[int] = None,
    allow_custom_option: Optional[bool] = None,
) -> dict:
    """Create a field on a custom object.

    Args:
        data_type: Field type (TEXT, LARGE_TEXT, NUMERICAL, PHONE, MONETORY, CHECKBOX,
            SINGLE_OPTIONS, MULTIPLE_OPTIONS, DATE, TEXTBOX_LIST, FILE_UPLOAD, RADIO, EMAIL)
        field_key: "custom_object.{objectKey}.{fieldKey}", e.g. "custom_object.pet.name"
        object_key: "custom_object.{objectKey}", e.g. "custom_object.pet"
        parent_id: Folder ID
        location_id: Location (default: configured)
        name: Field name
        description: Field description
        placeholder: Placeholder text
        show_in_forms: Show the field in forms (default: True)
        options: Choices for option types [{key, label, url}]; url is for RADIO only
        accepted_formats: Allowed file type (FILE_UPLOAD only)
        max_file_limit: Maximum files (FILE_UPLOAD only)
        allow_custom_option: Accept values outside the options (RADIO only)
    """
    data = api().post("/custom-fields/", json={
        "locationId": location(location_id),
        "dataType": data_type,
        "fieldKey": field_key,
        "objectKey": object_key,
        "parentId": parent_id,
        "name": name,
        "description": description,
        "placeholder": placeholder,
        "showInForms": show_in_forms,
        "options": payload(options),
        "acceptedFormats": accepted_formats,
        "maxFileLimit": max_file_limit,
        "allowCustomOption": allow_custom_option,
    })
    return _result(data, f"Custom field '{field_key}' created successfully")


@ghl_tool(CATEGORY, action="update custom field")
def update_custom_field(
    id: str,
    location_id: Optional[str] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
    placeholder: Optional[str] = None,
    show_in_forms: Optional[bool] = None,
    options: Optional[List[FieldOption]] = None,
    accepted_formats: Optional[FileFormat] = None,
    max_file_limit: Optional[int] = None,
) -> dict:
    """Update a custom field. Passing options replaces the whole option list."""
    data = api().put(f"/custom-fields/{id}", json={
        "locationId": location(location_id),
        "name": name,
        "description": description,
        "placeholder": placeholder,
        "showInForms": show_in_forms,
        "options": payload(options),
        "acceptedFormats": accepted_formats,
        "maxFileLimit": max_file_limit,
    })
    return _result(data, "Custom field updated successfully")


@ghl_tool(CATEGORY, action="delete custom field")
def delete_custom_field(id: str) -> dict:
    return _result(api().delete(f"/custom-fields/{id}"), "Custom field deleted successfully")


@ghl_tool(CATEGORY, action="get custom fields by object key")
def get_custom_fields_by_object_key(object_key: str, location_id: Optional[str] = None) -> dict:
    """List the fields and folders of a custom object, e.g. "custom_object.pet"."""
    data = api().get(f"/custom-fields/object-key/{object_key}", params={"locationId": location(location_id)})
    return _result(
        data,
        f"Retrieved {len(items(data, 'fields'))} fields and {len(items(data, 'folders'))} folders "
        f"for object '{object_key}'",
    )


@ghl_tool(CATEGORY, action="create custom field folder")
def create_custom_field_folder(object_key: str, name: str, location_id: Optional[str] = None) -> dict:
    data = api().post("/custom-fields/folder", json={
        "objectKey": object_key,
        "name": name,
        "locationId": location(location_id),
    })
    return _result(data, f"Custom field folder '{name}' created successfully")


@ghl_tool(CATEGORY, action="update custom field folder")
def update_custom_field_folder(id: str, name: str, location_id: Optional[str] = None) -> dict:
    data = api().put(f"/custom-fields/folder/{id}", json={"name": name, "locationId": location(location_id)})
    return _result(data, f"Custom field folder updated to '{name}'")


@ghl_tool(CATEGORY, action="delete custom field folder")
def delete_custom_field_folder(id: str, location_id: Optional[str] = None) -> dict:
    data = api().delete(f"/custom-fields/folder/{id}", params={"locationId": location(location_id)})
    return _result(data, "Custom field folder deleted successfully")
