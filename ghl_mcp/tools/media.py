"""Media library tools: list, upload and delete files and folders."""

from __future__ import annotations

import base64
from typing import Literal, Optional

from ..mcp_server import ghl_tool
from .common import api, items, location, pick

CATEGORY = "media"

AltType = Literal["location", "agency"]


@ghl_tool(CATEGORY, action="get media files")
def get_media_files(
    query: Optional[str] = None,
    parent_id: Optional[str] = None,
    type: Optional[Literal["file", "folder"]] = None,
    limit: int = 10,
    offset: int = 0,
    sort_by: str = "createdAt",
    sort_order: Literal["asc", "desc"] = "desc",
    alt_type: AltType = "location",
    alt_id: Optional[str] = None,
) -> dict:
    """Browse the media library.

    With query, only files are searched. With type, only that kind is
    listed. With neither, both files and folders are returned (limit
    applies to each).

    Args:
        query: File name search, e.g. "logo"
        parent_id: Folder to list
        type: "file" or "folder"
        limit: Results per kind, up to 100 (default: 10)
        offset: Results to skip (default: 0)
        sort_by: createdAt, name or size (default: createdAt)
        sort_order: asc or desc (default: desc)
        alt_type: location or agency (default: location)
        alt_id: Location or agency ID (default: configured location)
    """
    client = api()
    base = {
        "sortBy": sort_by,
        "sortOrder": sort_order,
        "limit": limit,
        "offset": offset,
        "altType": alt_type,
        "altId": alt_id or client.location_id,
        "parentId": parent_id,
    }

    if query:
        data = client.get("/medias/files", params=dict(base, type="file", query=query))
        files = items(data, "files")
        return {
            "success": True,
            "files": files,
            "total": pick(data, "total", len(files)),
            "message": f"Found {len(files)} files matching \"{query}\"",
        }

    if type:
        data = client.get("/medias/files", params=dict(base, type=type))
        # GHL returns folders under "files" too
        found = items(data, "files")
        key = "folders" if type == "folder" else "files"
        return {
            "success": True,
            key: found,
            "total": pick(data, "total", len(found)),
            "message": f"Retrieved {len(found)} {key}",
        }

    files = items(client.get("/medias/files", params=dict(base, type="file")), "files")
    folders = items(client.get("/medias/files", params=dict(base, type="folder")), "files")
    return {
        "success": True,
        "files": files,
        "folders": folders,
        "message": f"Retrieved {len(files)} files and {len(folders)} folders",
    }


@ghl_tool(CATEGORY, action="upload media file")
def upload_media_file(
    file_url: Optional[str] = None,
    hosted: bool = False,
    content_type: Optional[str] = None,
    name: Optional[str] = None,
    file: Optional[str] = None,
    parent_id: Optional[str] = None,
    alt_type: AltType = "location",
    alt_id: Optional[str] = None,
) -> dict:
    """Upload a file to the media library, from a hosted URL or from base64 data.

    Args:
        file_url: Public URL of the file (requires hosted=True)
        hosted: True when uploading from file_url
        content_type: MIME type, e.g. "image/png"; give it for hosted URLs
        name: File name to store, e.g. "logo.png"
        file: Base64-encoded file content (direct upload)
        parent_id: Folder to upload into
        alt_type: location or agency (default: location)
        alt_id: Location or agency ID (default: configured location)

    Returns:
        {"success": True, "file_id": str, "url": str, "message": str}
    """
    if hosted and not file_url:
        raise ValueError("file_url is required when hosted is true")
    if not hosted and not file:
        raise ValueError("file is required when hosted is false")

    client = api()
    fields = {
        "altType": alt_type,
        "altId": alt_id or client.location_id,
        "name": name,
        "parentId": parent_id,
    }
    if hosted:
        fields.update(hosted=True, fileUrl=file_url, contentType=content_type)
        data = client.upload("/medias/upload-file", fields=fields)
    else:
        content = base64.b64decode(file, validate=True)
        parts = {"file": (name or "upload", content, content_type or "application/octet-stream")}
        data = client.upload("/medias/upload-file", fields=fields, files=parts)

    file_id = pick(data, "fileId")
    return {
        "success": True,
        "file_id": file_id,
        "url": pick(data, "url"),
        "message": f"File uploaded successfully with ID: {file_id}",
    }


@ghl_tool(CATEGORY, action="delete media file")
def delete_media_file(id: str, alt_type: AltType = "location", alt_id: Optional[str] = None) -> dict:
    """Delete a file or folder from the media library."""
    api().delete(f"/medias/{id}", params={"altType": alt_type, "altId": alt_id or location()})
    return {"success": True, "message": "Media file/folder deleted successfully"}
