"""Workflow tools."""

from __future__ import annotations

from typing import Dict, Optional

from ..mcp_server import ghl_tool
from .common import api, items, location

CATEGORY = "workflow"


@ghl_tool(CATEGORY, action="get workflows")
def get_workflows(location_id: Optional[str] = None) -> dict:
    """List automation workflows with a count per status (draft, published).

    Use a workflow ID with add_contact_to_workflow to enroll a contact.
    """
    data = api().get("/workflows/", params={"locationId": location(location_id)})
    workflows = items(data, "workflows")
    statuses: Dict[str, int] = {}
    for workflow in workflows:
        status = workflow.get("status", "unknown")
        statuses[status] = statuses.get(status, 0) + 1
    return {
        "success": True,
        "workflows": workflows,
        "message": f"Successfully retrieved {len(workflows)} workflows",
        "metadata": {"total_workflows": len(workflows), "workflow_statuses": statuses},
    }
