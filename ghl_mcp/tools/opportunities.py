"""Opportunity tools: pipelines, deals, status changes and followers."""

from __future__ import annotations

from typing import List, Literal, Optional

from ..errors import ErrorHint
from ..mcp_server import ghl_tool
from ..models import CustomFieldValue, payload
from .common import api, items, location, pick, unwrap

CATEGORY = "opportunity"

Status = Literal["open", "won", "lost", "abandoned"]

PIPELINE_MESSAGE = (
    "Invalid pipeline or stage configuration. The pipeline may not exist in this location, "
    "the stage may belong to another pipeline, or the pipeline is archived. "
    "Use get_pipelines to see available pipelines and stages."
)
CREATE_HINTS = (
    ErrorHint(PIPELINE_MESSAGE, status=400),
    ErrorHint(PIPELINE_MESSAGE, keywords=("pipeline", "stage")),
    ErrorHint(
        "Contact not found. Opportunities must belong to an existing contact; "
        "use search_contacts or create_contact first.",
        status=404,
    ),
    ErrorHint(
        "Permission denied: cannot create opportunities. Check that the token has opportunity "
        "scopes and access to this pipeline.",
        status=403,
    ),
)
STATUS_HINTS = (
    ErrorHint(
        "Cannot update opportunity status. The opportunity may already be won or lost, the "
        "pipeline rules may forbid this change, or required fields (won/lost reason) are missing.",
        status=409,
    ),
    ErrorHint(
        "Opportunity not found. It may have been deleted or the ID is incorrect; "
        "use search_opportunities to find it.",
        status=404,
    ),
)


@ghl_tool(CATEGORY, action="search opportunities")
def search_opportunities(
    query: Optional[str] = None,
    pipeline_id: Optional[str] = None,
    pipeline_stage_id: Optional[str] = None,
    contact_id: Optional[str] = None,
    status: Optional[Literal["open", "won", "lost", "abandoned", "all"]] = None,
    assigned_to: Optional[str] = None,
    limit: int = 20,
) -> dict:
    """Search opportunities with filters.

    Args:
        query: Free text (opportunity name, contact info)
        pipeline_id: Pipeline filter
        pipeline_stage_id: Stage filter
        contact_id: Contact filter
        status: open, won, lost, abandoned or all
        assigned_to: Assigned user ID
        limit: Maximum results, up to 100 (default: 20)

    Returns:
        {"success": True, "opportunities": [...], "meta": dict, "message": str}
    """
    data = api().get("/opportunities/search", params={
        "location_id": location(),
        "limit": limit,
        "q": query.strip() if query and query.strip() else None,
        "pipeline_id": pipeline_id,
        "pipeline_stage_id": pipeline_stage_id,
        "contact_id": contact_id,
        "status": status,
        "assigned_to": assigned_to,
    })
    opportunities = items(data, "opportunities")
    meta = pick(data, "meta", {})
    total = pick(meta, "total", len(opportunities))
    return {
        "success": True,
        "opportunities": opportunities,
        "meta": meta,
        "message": f"Found {len(opportunities)} opportunities ({total} total)",
    }


@ghl_tool(CATEGORY, action="get pipelines")
def get_pipelines() -> dict:
    """List sales pipelines and their stages. Use it to find pipeline and stage IDs."""
    data = api().get("/opportunities/pipelines", params={"locationId": location()})
    pipelines = items(data, "pipelines")
    return {"success": True, "pipelines": pipelines, "message": f"Retrieved {len(pipelines)} pipelines"}


@ghl_tool(CATEGORY, action="get opportunity")
def get_opportunity(opportunity_id: str) -> dict:
    data = api().get(f"/opportunities/{opportunity_id}")
    return {"success": True, "opportunity": unwrap(data, "opportunity"), "message": "Opportunity retrieved successfully"}


@ghl_tool(CATEGORY, action="create opportunity", hints=CREATE_HINTS)
def create_opportunity(
    name: str,
    pipeline_id: str,
    contact_id: str,
    pipeline_stage_id: Optional[str] = None,
    status: Status = "open",
    monetary_value: Optional[float] = None,
    assigned_to: Optional[str] = None,
    custom_fields: Optional[List[CustomFieldValue]] = None,
) -> dict:
    """Create an opportunity (deal) for a contact.

    Args:
        name: Opportunity title
        pipeline_id: Pipeline ID (see get_pipelines)
        contact_id: Existing contact ID
        pipeline_stage_id: Initial stage (default: first stage)
        status: open, won, lost or abandoned (default: open)
        monetary_value: Deal value in the account currency, e.g. 100.50 (not cents)
        assigned_to: User ID to assign
        custom_fields: Custom field values [{id, field_value}]
    """
    data = api().post("/opportunities/", json={
        "locationId": location(),
        "name": name,
        "pipelineId": pipeline_id,
        "contactId": contact_id,
        "status": status,
        "pipelineStageId": pipeline_stage_id,
        "monetaryValue": monetary_value,
        "assignedTo": assigned_to,
        "customFields": payload(custom_fields),
    })
    opportunity = unwrap(data, "opportunity")
    return {
        "success": True,
        "opportunity": opportunity,
        "message": f"Opportunity created successfully with ID: {pick(opportunity, 'id')}",
    }


@ghl_tool(CATEGORY, action="update opportunity status", hints=STATUS_HINTS)
def update_opportunity_status(opportunity_id: str, status: Status) -> dict:
    """Mark an opportunity open, won, lost or abandoned."""
    api().put(f"/opportunities/{opportunity_id}/status", json={"status": status})
    return {"success": True, "message": f"Opportunity status updated to {status}"}


@ghl_tool(CATEGORY, action="delete opportunity")
def delete_opportunity(opportunity_id: str) -> dict:
    """Permanently delete an opportunity.

    Prefer update_opportunity_status with "abandoned" to keep history.
    """
    api().delete(f"/opportunities/{opportunity_id}")
    return {"success": True, "message": "Opportunity deleted successfully"}


@ghl_tool(CATEGORY, action="update opportunity")
def update_opportunity(
    opportunity_id: str,
    name: Optional[str] = None,
    pipeline_id: Optional[str] = None,
    pipeline_stage_id: Optional[str] = None,
    status: Optional[Status] = None,
    monetary_value: Optional[float] = None,
    assigned_to: Optional[str] = None,
) -> dict:
    """Update an opportunity. Only the fields you pass are changed.

    monetary_value is in the account currency (250.50 means 250.50), not cents.
    """
    data = api().put(f"/opportunities/{opportunity_id}", json={
        "name": name,
        "pipelineId": pipeline_id,
        "pipelineStageId": pipeline_stage_id,
        "status": status,
        "monetaryValue": monetary_value,
        "assignedTo": assigned_to,
    })
    return {"success": True, "opportunity": unwrap(data, "opportunity"), "message": "Opportunity updated successfully"}


@ghl_tool(CATEGORY, action="upsert opportunity")
def upsert_opportunity(
    pipeline_id: str,
    contact_id: str,
    name: Optional[str] = None,
    status: Status = "open",
    pipeline_stage_id: Optional[str] = None,
    monetary_value: Optional[float] = None,
    assigned_to: Optional[str] = None,
) -> dict:
    """Create or update the opportunity for a contact in a pipeline.

    Returns:
        {"success": True, "opportunity": dict, "is_new": bool, "message": str}
    """
    data = api().post("/opportunities/upsert", json={
        "locationId": location(),
        "pipelineId": pipeline_id,
        "contactId": contact_id,
        "name": name,
        "status": status,
        "pipelineStageId": pipeline_stage_id,
        "monetaryValue": monetary_value,
        "assignedTo": assigned_to,
    })
    is_new = bool(pick(data, "new", False))
    return {
        "success": True,
        "opportunity": pick(data, "opportunity", data),
        "is_new": is_new,
        "message": f"Opportunity {'created' if is_new else 'updated'} successfully",
    }


@ghl_tool(CATEGORY, action="add opportunity followers")
def add_opportunity_followers(opportunity_id: str, followers: List[str]) -> dict:
    """Add users (user IDs, not contact IDs) as followers of an opportunity."""
    data = api().post(f"/opportunities/{opportunity_id}/followers", json={"followers": followers})
    added = items(data, "followersAdded")
    return {
        "success": True,
        "followers": items(data, "followers"),
        "followers_added": added,
        "message": f"Added {len(added)} followers to opportunity",
    }


@ghl_tool(CATEGORY, action="remove opportunity followers")
def remove_opportunity_followers(opportunity_id: str, followers: List[str]) -> dict:
    data = api().delete(f"/opportunities/{opportunity_id}/followers", json={"followers": followers})
    removed = items(data, "followersRemoved")
    return {
        "success": True,
        "followers": items(data, "followers"),
        "followers_removed": removed,
        "message": f"Removed {len(removed)} followers from opportunity",
    }
