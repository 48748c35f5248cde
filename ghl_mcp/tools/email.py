"""Email marketing tools: campaigns and email builder templates."""

from __future__ import annotations

from typing import Literal, Optional

from ..mcp_server import ghl_tool
from .common import api, items, location, pick

CATEGORY = "email"

CampaignStatus = Literal["active", "pause", "complete", "cancelled", "retry", "draft", "resend-scheduled"]


@ghl_tool(CATEGORY, action="get email campaigns")
def get_email_campaigns(status: Optional[CampaignStatus] = None, limit: int = 10, offset: int = 0) -> dict:
    """List bulk email campaigns (schedules).

    Args:
        status: active, pause, complete, cancelled, retry, draft or resend-scheduled
        limit: Maximum results (default: 10)
        offset: Results to skip (default: 0)
    """
    data = api().get("/emails/schedule", params={
        "locationId": location(),
        "status": status,
        "limit": limit,
        "offset": offset,
    })
    campaigns = items(data, "schedules")
    return {
        "success": True,
        "campaigns": campaigns,
        "total": pick(data, "total", len(campaigns)),
        "message": f"Successfully retrieved {len(campaigns)} email campaigns.",
    }


@ghl_tool(CATEGORY, action="create email template")
def create_email_template(title: str, html: str, is_plain_text: bool = False) -> dict:
    """Create a reusable email template.

    Args:
        title: Template name
        html: HTML body; use inline CSS and merge fields like {{contact.first_name}}
        is_plain_text: Store as plain text instead of HTML
    """
    data = api().post("/emails/builder", json={
        "locationId": location(),
        "title": title,
        "type": "html",
        "html": html,
        "isPlainText": is_plain_text,
    })
    return {"success": True, "template": data, "message": "Successfully created email template."}


@ghl_tool(CATEGORY, action="get email templates")
def get_email_templates(limit: int = 10, offset: int = 0) -> dict:
    data = api().get("/emails/builder", params={"locationId": location(), "limit": limit, "offset": offset})
    templates = items(data, "builders")
    return {
        "success": True,
        "templates": templates,
        "total": pick(data, "total", len(templates)),
        "message": f"Successfully retrieved {len(templates)} email templates.",
    }


@ghl_tool(CATEGORY, action="update email template")
def update_email_template(template_id: str, html: str, preview_text: Optional[str] = None) -> dict:
    """Replace the HTML of a template. Scheduled sends pick up the new version."""
    api().post("/emails/builder/data", json={
        "locationId": location(),
        "templateId": template_id,
        "html": html,
        "previewText": preview_text,
        "editorType": "html",
    })
    return {"success": True, "message": "Successfully updated email template."}


@ghl_tool(CATEGORY, action="delete email template")
def delete_email_template(template_id: str) -> dict:
    """Delete a template. Campaigns and workflows still using it may fail."""
    api().delete(f"/emails/builder/{location()}/{template_id}")
    return {"success": True, "message": "Successfully deleted email template."}
