"""Survey tools."""

from __future__ import annotations

from typing import Optional

from ..mcp_server import ghl_tool
from .common import api, items, location, only_set, pick

CATEGORY = "survey"


@ghl_tool(CATEGORY, action="get surveys")
def get_surveys(
    location_id: Optional[str] = None,
    skip: int = 0,
    limit: int = 10,
    type: Optional[str] = None,
) -> dict:
    """List surveys.

    Args:
        location_id: Location (default: configured)
        skip: Records to skip (default: 0)
        limit: Maximum surveys, 1 to 50 (default: 10)
        type: Survey type filter, e.g. "folder"
    """
    if not 1 <= limit <= 50:
        raise ValueError("limit must be between 1 and 50")
    data = api().get("/surveys/", params={
        "locationId": location(location_id),
        "skip": skip,
        "limit": limit,
        "type": type,
    })
    surveys = items(data, "surveys")
    total = pick(data, "total", len(surveys))
    metadata = {
        "total_surveys": total,
        "returned_count": len(surveys),
        "pagination": {"skip": skip, "limit": limit},
    }
    if type:
        metadata["filter_type"] = type
    return {
        "success": True,
        "surveys": surveys,
        "total": total,
        "message": f"Successfully retrieved {len(surveys)} surveys",
        "metadata": metadata,
    }


@ghl_tool(CATEGORY, action="get survey submissions")
def get_survey_submissions(
    location_id: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
    survey_id: Optional[str] = None,
    q: Optional[str] = None,
    start_at: Optional[str] = None,
    end_at: Optional[str] = None,
) -> dict:
    """List survey submissions with filters.

    Args:
        location_id: Location (default: configured)
        page: Page number (default: 1)
        limit: Submissions per page, 1 to 100 (default: 20)
        survey_id: Only this survey
        q: Search by contact ID, name, email or phone
        start_at: From date, YYYY-MM-DD
        end_at: To date, YYYY-MM-DD
    """
    if not 1 <= limit <= 100:
        raise ValueError("limit must be between 1 and 100")
    data = api().get("/surveys/submissions", params={
        "locationId": location(location_id),
        "page": page,
        "limit": limit,
        "surveyId": survey_id,
        "q": q,
        "startAt": start_at,
        "endAt": end_at,
    })
    submissions = items(data, "submissions")
    meta = pick(data, "meta", {})
    return {
        "success": True,
        "submissions": submissions,
        "meta": meta,
        "message": f"Successfully retrieved {len(submissions)} survey submissions",
        "metadata": {
            "total_submissions": pick(meta, "total", len(submissions)),
            "returned_count": len(submissions),
            "pagination": {
                "current_page": pick(meta, "currentPage"),
                "next_page": pick(meta, "nextPage"),
                "prev_page": pick(meta, "prevPage"),
                "limit": limit,
            },
            "filters": only_set(survey_id=survey_id, search=q, start_date=start_at, end_date=end_at),
        },
    }
