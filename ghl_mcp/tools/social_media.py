"""Social planner tools: posts, accounts, CSV imports, categories, tags and OAuth."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime, timedelta, timezone
from typing import Any, List, Literal, Optional

from ..dates import iso_z
from ..mcp_server import ghl_tool
from ..models import GmbPostDetails, SocialMedia, TikTokPostDetails, payload
from .common import api, items, location, pick

CATEGORY = "social_media"

# GHL rejects posts whose userId/createdBy are empty
DEFAULT_USER = "mcp-server"

Platform = Literal["google", "facebook", "instagram", "linkedin", "twitter", "tiktok", "tiktok-business"]
PostKind = Literal["post", "story", "reel"]
PostStatus = Literal["draft", "scheduled", "published"]

PLATFORM_ACCOUNT_PATHS = {
    "google": "google/locations",
    "facebook": "facebook/accounts",
    "instagram": "instagram/accounts",
    "linkedin": "linkedin/accounts",
    "twitter": "twitter/accounts",
    "tiktok": "tiktok/accounts",
    "tiktok-business": "tiktok-business/accounts",
}


def _base() -> str:
    return f"/social-media-posting/{location()}"


def _results(data: Any) -> Any:
    """Social planner responses nest their payload under ``results``."""
    return pick(data, "results", data)


def _search_window(type: str, from_date: Optional[str], to_date: Optional[str]):
    now = datetime.now(timezone.utc)
    year = timedelta(days=365)
    if type == "scheduled":
        start, end = now, now + year
    elif type == "draft":
        start, end = now - year, now + year
    else:
        start, end = now - timedelta(days=30), now
    return from_date or iso_z(start), to_date or iso_z(end)


@ghl_tool(CATEGORY, action="search social posts")
def search_social_posts(
    type: Literal[
        "recent", "all", "scheduled", "draft", "failed", "in_review", "published", "in_progress", "deleted"
    ] = "all",
    accounts: Optional[str] = None,
    skip: int = 0,
    limit: int = 10,
    from_date: Optional[str] = None,
    to_date: Optional[str] = None,
    include_users: bool = True,
    post_type: Optional[PostKind] = None,
) -> dict:
    """Search social planner posts.

    Without dates the search covers the last 30 days. Scheduled posts are
    searched a year ahead and drafts a year either side.

    Args:
        type: Status filter (default: all)
        accounts: Comma-separated account IDs
        skip: Posts to skip (default: 0)
        limit: Posts to return (default: 10)
        from_date: ISO start date
        to_date: ISO end date
        include_users: Include user data (default: True)
        post_type: post, story or reel
    """
    start, end = _search_window(type, from_date, to_date)
    data = api().post(f"{_base()}/posts/list", json={
        "type": type,
        "accounts": accounts,
        "skip": str(skip),
        "limit": str(limit),
        "fromDate": start,
        "toDate": end,
        "includeUsers": "true" if include_users else "false",
        "postType": post_type,
    })
    results = _results(data)
    count = pick(results, "count", 0)
    return {
        "success": True,
        "posts": items(results, "posts"),
        "count": count,
        "message": f"Found {count} social media posts ({start} to {end})",
    }


def _post_body(
    account_ids, summary, type, media, status, schedule_date, follow_up_comment, tags, category_id,
    user_id, created_by, tiktok_post_details, gmb_post_details,
) -> dict:
    return {
        "accountIds": account_ids,
        "summary": summary,
        "type": type,
        "media": payload(media) or [],
        "userId": user_id or created_by or DEFAULT_USER,
        "createdBy": created_by or user_id or DEFAULT_USER,
        "status": status,
        "scheduleDate": schedule_date,
        "followUpComment": follow_up_comment,
        "tags": tags,
        "categoryId": category_id,
        "tiktokPostDetails": payload(tiktok_post_details),
        "gmbPostDetails": payload(gmb_post_details),
    }


@ghl_tool(CATEGORY, action="create social post")
def create_social_post(
    account_ids: List[str],
    summary: str,
    type: PostKind = "post",
    media: Optional[List[SocialMedia]] = None,
    status: Optional[PostStatus] = None,
    schedule_date: Optional[str] = None,
    follow_up_comment: Optional[str] = None,
    tags: Optional[List[str]] = None,
    category_id: Optional[str] = None,
    created_by: Optional[str] = None,
    user_id: Optional[str] = None,
    tiktok_post_details: Optional[TikTokPostDetails] = None,
    gmb_post_details: Optional[GmbPostDetails] = None,
) -> dict:
    """Create a post for one or more connected accounts.

    Args:
        account_ids: Accounts to post to (see get_social_accounts)
        summary: Caption text
        type: post, story or reel (default: post)
        media: [{url, caption, type}] with publicly reachable URLs
        status: draft, scheduled or published (GHL default: published)
        schedule_date: ISO 8601 time for scheduled posts
        follow_up_comment: Comment added after publishing
        tags: Tag IDs
        category_id: Category ID
        created_by: Creating user ID
        user_id: Acting user ID
        tiktok_post_details: TikTok-only settings
        gmb_post_details: Google Business-only settings
    """
    data = api().post(f"{_base()}/posts", json=_post_body(
        account_ids, summary, type, media, status, schedule_date, follow_up_comment, tags, category_id,
        user_id, created_by, tiktok_post_details, gmb_post_details,
    ))
    post = pick(_results(data), "post") or pick(data, "post")
    suffix = {"scheduled": " and scheduled", "draft": " as draft"}.get(status or "", "")
    return {
        "success": True,
        "post": post,
        "post_id": pick(post, "_id"),
        "message": f"Social media post created successfully{suffix}",
    }


@ghl_tool(CATEGORY, action="get social post")
def get_social_post(post_id: str) -> dict:
    data = api().get(f"{_base()}/posts/{post_id}")
    return {
        "success": True,
        "post": pick(_results(data), "post") or pick(data, "post"),
        "message": f"Retrieved social media post {post_id}",
    }


@ghl_tool(CATEGORY, action="update social post")
def update_social_post(
    post_id: str,
    account_ids: List[str],
    summary: str,
    type: Optional[PostKind] = None,
    media: Optional[List[SocialMedia]] = None,
    status: Optional[PostStatus] = None,
    schedule_date: Optional[str] = None,
    follow_up_comment: Optional[str] = None,
    tags: Optional[List[str]] = None,
    category_id: Optional[str] = None,
    schedule_time_updated: Optional[bool] = None,
    user_id: Optional[str] = None,
    created_by: Optional[str] = None,
    tiktok_post_details: Optional[TikTokPostDetails] = None,
    gmb_post_details: Optional[GmbPostDetails] = None,
) -> dict:
    """Edit a draft or scheduled post. Published posts cannot be edited.

    GHL moves an edited scheduled post back to draft. To keep it scheduled,
    pass status="scheduled" with schedule_date and schedule_time_updated=True.
    Fields you leave out (type, media, status, schedule date) keep the
    current post's values.
    """
    client = api()
    current = pick(_results(client.get(f"{_base()}/posts/{post_id}")), "post") or {}

    body = _post_body(
        account_ids, summary, type or current.get("type") or "post",
        media if media is not None else current.get("media"),
        status or current.get("status") or "draft",
        schedule_date or current.get("scheduleDate"),
        follow_up_comment, tags, category_id, user_id, created_by, tiktok_post_details, gmb_post_details,
    )
    body["scheduleTimeUpdated"] = schedule_time_updated
    data = client.put(f"{_base()}/posts/{post_id}", json=body)
    post = pick(_results(data), "post") or pick(data, "post")
    return {
        "success": True,
        "post": post,
        "post_id": pick(post, "_id", post_id),
        "message": f"Social media post updated successfully{' and rescheduled' if schedule_date else ''}",
    }


@ghl_tool(CATEGORY, action="delete social post")
def delete_social_post(post_id: str) -> dict:
    api().delete(f"{_base()}/posts/{post_id}")
    return {"success": True, "message": f"Social media post {post_id} deleted successfully"}


@ghl_tool(CATEGORY, action="bulk delete social posts")
def bulk_delete_social_posts(post_ids: List[str]) -> dict:
    """Delete up to 50 posts at once."""
    if len(post_ids) > 50:
        raise ValueError("post_ids accepts at most 50 IDs")
    data = api().post(f"{_base()}/posts/bulk-delete", json={"postIds": post_ids})
    deleted = pick(_results(data), "deletedCount", 0)
    return {
        "success": True,
        "deleted_count": deleted,
        "message": f"{deleted} social media posts deleted successfully",
    }


@ghl_tool(CATEGORY, action="get social accounts")
def get_social_accounts() -> dict:
    """List connected social accounts and account groups."""
    results = _results(api().get(f"{_base()}/accounts"))
    accounts = items(results, "accounts")
    groups = items(results, "groups")
    return {
        "success": True,
        "accounts": accounts,
        "groups": groups,
        "message": f"Retrieved {len(accounts)} social media accounts and {len(groups)} groups",
    }


@ghl_tool(CATEGORY, action="delete social account")
def delete_social_account(account_id: str, company_id: Optional[str] = None, user_id: Optional[str] = None) -> dict:
    api().delete(f"{_base()}/accounts/{account_id}", params={"companyId": company_id, "userId": user_id})
    return {"success": True, "message": f"Social media account {account_id} deleted successfully"}


@ghl_tool(CATEGORY, action="upload social CSV")
def upload_social_csv(file: str, file_name: str = "posts.csv") -> dict:
    """Upload a CSV of posts for bulk creation. Each row becomes a post.

    Args:
        file: Base64-encoded CSV content
        file_name: Name to store the upload under (default: posts.csv)
    """
    try:
        content = base64.b64decode(file, validate=True)
    except (binascii.Error, ValueError) as e:
        raise ValueError("file must be base64-encoded CSV data") from e
    data = api().upload(f"{_base()}/csv", files={"file": (file_name, content, "text/csv")})
    return {"success": True, "upload": _results(data), "message": "CSV file uploaded successfully"}


@ghl_tool(CATEGORY, action="get CSV upload status")
def get_csv_upload_status(
    skip: int = 0,
    limit: int = 10,
    include_users: Optional[bool] = None,
    user_id: Optional[str] = None,
) -> dict:
    data = api().get(f"{_base()}/csv", params={
        "skip": skip,
        "limit": limit,
        "includeUsers": include_users,
        "userId": user_id,
    })
    results = _results(data)
    return {
        "success": True,
        "csvs": items(results, "csvs"),
        "count": pick(results, "count", 0),
        "message": "Retrieved CSV upload status",
    }


@ghl_tool(CATEGORY, action="set CSV accounts")
def set_csv_accounts(
    account_ids: List[str],
    file_path: str,
    rows_count: int,
    file_name: str,
    approver: Optional[str] = None,
    user_id: Optional[str] = None,
) -> dict:
    """Choose the accounts an uploaded CSV publishes to.

    Args:
        account_ids: Target account IDs
        file_path: Path returned by upload_social_csv
        rows_count: Rows to process
        file_name: CSV file name
        approver: Approver user ID
        user_id: Acting user ID
    """
    data = api().post(f"{_base()}/set-accounts", json={
        "accountIds": account_ids,
        "filePath": file_path,
        "rowsCount": rows_count,
        "fileName": file_name,
        "approver": approver,
        "userId": user_id,
    })
    return {"success": True, "result": _results(data), "message": "CSV accounts set successfully"}


@ghl_tool(CATEGORY, action="get social categories")
def get_social_categories(search_text: Optional[str] = None, limit: int = 10, skip: int = 0) -> dict:
    results = _results(api().get(f"{_base()}/categories", params={
        "searchText": search_text,
        "limit": limit,
        "skip": skip,
    }))
    count = pick(results, "count", 0)
    return {
        "success": True,
        "categories": items(results, "categories"),
        "count": count,
        "message": f"Retrieved {count} social media categories",
    }


@ghl_tool(CATEGORY, action="get social category")
def get_social_category(category_id: str) -> dict:
    results = _results(api().get(f"{_base()}/categories/{category_id}"))
    return {
        "success": True,
        "category": pick(results, "category", results),
        "message": f"Retrieved social media category {category_id}",
    }


@ghl_tool(CATEGORY, action="get social tags")
def get_social_tags(search_text: Optional[str] = None, limit: int = 10, skip: int = 0) -> dict:
    results = _results(api().get(f"{_base()}/tags", params={
        "searchText": search_text,
        "limit": limit,
        "skip": skip,
    }))
    count = pick(results, "count", 0)
    return {
        "success": True,
        "tags": items(results, "tags"),
        "count": count,
        "message": f"Retrieved {count} social media tags",
    }


@ghl_tool(CATEGORY, action="get social tags by IDs")
def get_social_tags_by_ids(tag_ids: List[str]) -> dict:
    results = _results(api().post(f"{_base()}/tags/details", json={"tagIds": tag_ids}))
    tags = items(results, "tags")
    count = pick(results, "count", len(tags))
    return {"success": True, "tags": tags, "count": count, "message": f"Retrieved {count} social media tags by IDs"}


@ghl_tool(CATEGORY, action="start social OAuth")
def start_social_oauth(
    platform: Platform,
    user_id: str,
    page: Optional[str] = None,
    reconnect: Optional[bool] = None,
) -> dict:
    """Start the OAuth flow that connects a social account to the location.

    Args:
        platform: google, facebook, instagram, linkedin, twitter, tiktok or tiktok-business
        user_id: User starting the flow
        page: Page context
        reconnect: True when reconnecting an expired account
    """
    data = api().get(f"/social-media-posting/oauth/{platform}/start", params={
        "locationId": location(),
        "userId": user_id,
        "page": page,
        "reconnect": reconnect,
    })
    return {"success": True, "oauth_data": data, "message": f"OAuth process started for {platform}"}


@ghl_tool(CATEGORY, action="get platform accounts")
def get_platform_accounts(platform: Platform, account_id: str) -> dict:
    """List the pages, profiles or business locations behind an OAuth account.

    Args:
        platform: Platform the OAuth account belongs to
        account_id: OAuth account ID from start_social_oauth
    """
    path = PLATFORM_ACCOUNT_PATHS.get(platform)
    if path is None:
        raise ValueError(f"Unsupported platform: {platform}")
    data = api().get(f"/social-media-posting/oauth/{location()}/{path}/{account_id}")
    return {
        "success": True,
        "platform_accounts": data,
        "message": f"Retrieved {platform} accounts for OAuth ID {account_id}",
    }
