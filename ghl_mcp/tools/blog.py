"""Blog tools: posts, sites, authors, categories and slug checks."""

from __future__ import annotations

from typing import List, Literal, Optional

from ..dates import utc_now_iso
from ..errors import ErrorHint
from ..mcp_server import ghl_tool
from .common import api, items, location, pick, unwrap

CATEGORY = "blog"

PostStatus = Literal["DRAFT", "PUBLISHED", "SCHEDULED", "ARCHIVED"]

SLUG_TAKEN = (
    "Blog post slug already exists. Use check_url_slug to find an available slug, "
    "choose a different one, or let GHL generate one from a unique title."
)
SLUG_HINTS = (
    ErrorHint(SLUG_TAKEN, status=409),
    ErrorHint(SLUG_TAKEN, keywords=("slug", "already exists")),
)


@ghl_tool(CATEGORY, action="create blog post", hints=SLUG_HINTS)
def create_blog_post(
    title: str,
    blog_id: str,
    content: str,
    description: str,
    image_url: str,
    image_alt_text: str,
    url_slug: str,
    author: str,
    categories: List[str],
    tags: Optional[List[str]] = None,
    status: PostStatus = "DRAFT",
    canonical_link: Optional[str] = None,
    published_at: Optional[str] = None,
) -> dict:
    """Create a blog post.

    Run check_url_slug first; GHL rejects duplicate slugs.

    Args:
        title: Post title
        blog_id: Blog site ID (see get_blog_sites)
        content: Full post body as raw HTML
        description: Short excerpt
        image_url: Featured image URL
        image_alt_text: Featured image alt text
        url_slug: URL slug
        author: Author ID (see get_blog_authors)
        categories: Category IDs (see get_blog_categories)
        tags: Tags (default: none)
        status: DRAFT, PUBLISHED, SCHEDULED or ARCHIVED (default: DRAFT)
        canonical_link: Canonical URL for SEO
        published_at: ISO publication timestamp (default: now)

    Returns:
        {"success": True, "blog_post": dict, "message": str}
    """
    data = api().post("/blogs/posts", json={
        "title": title,
        "locationId": location(),
        "blogId": blog_id,
        "imageUrl": image_url,
        "description": description,
        "rawHTML": content,
        "status": status,
        "imageAltText": image_alt_text,
        "categories": categories,
        "tags": tags or [],
        "author": author,
        "urlSlug": url_slug,
        "canonicalLink": canonical_link,
        "publishedAt": published_at or utc_now_iso(),
    })
    post = unwrap(data, "data")
    return {
        "success": True,
        "blog_post": post,
        "message": f"Blog post \"{title}\" created successfully with ID: {pick(post, '_id')}",
    }


@ghl_tool(CATEGORY, action="update blog post")
def update_blog_post(
    post_id: str,
    blog_id: str,
    title: Optional[str] = None,
    content: Optional[str] = None,
    description: Optional[str] = None,
    image_url: Optional[str] = None,
    image_alt_text: Optional[str] = None,
    url_slug: Optional[str] = None,
    author: Optional[str] = None,
    categories: Optional[List[str]] = None,
    tags: Optional[List[str]] = None,
    status: Optional[PostStatus] = None,
    canonical_link: Optional[str] = None,
    published_at: Optional[str] = None,
) -> dict:
    """Update a blog post. Only the fields you pass are changed."""
    data = api().put(f"/blogs/posts/{post_id}", json={
        "locationId": location(),
        "blogId": blog_id,
        "title": title,
        "rawHTML": content,
        "description": description,
        "imageUrl": image_url,
        "imageAltText": image_alt_text,
        "urlSlug": url_slug,
        "author": author,
        "categories": categories,
        "tags": tags,
        "status": status,
        "canonicalLink": canonical_link,
        "publishedAt": published_at,
    })
    return {"success": True, "blog_post": unwrap(data, "updatedBlogPost"), "message": "Blog post updated successfully"}


@ghl_tool(CATEGORY, action="get blog posts")
def get_blog_posts(
    blog_id: str,
    limit: int = 10,
    offset: int = 0,
    search_term: Optional[str] = None,
    status: Optional[PostStatus] = None,
) -> dict:
    """List posts of a blog site.

    Args:
        blog_id: Blog site ID
        limit: Posts to return (default: 10)
        offset: Posts to skip (default: 0)
        search_term: Filter by title or content
        status: Filter by publication status
    """
    data = api().get("/blogs/posts/all", params={
        "locationId": location(),
        "blogId": blog_id,
        "limit": limit,
        "offset": offset,
        "searchTerm": search_term,
        "status": status,
    })
    posts = items(data, "blogs")
    return {
        "success": True,
        "posts": posts,
        "count": len(posts),
        "message": f"Retrieved {len(posts)} blog posts from blog {blog_id}",
    }


@ghl_tool(CATEGORY, action="get blog sites")
def get_blog_sites(limit: int = 10, skip: int = 0, search_term: Optional[str] = None) -> dict:
    """List the blog sites of the location."""
    data = api().get("/blogs/site/all", params={
        "locationId": location(),
        "skip": skip,
        "limit": limit,
        "searchTerm": search_term,
    })
    sites = items(data, "data")
    return {"success": True, "sites": sites, "count": len(sites), "message": f"Retrieved {len(sites)} blog sites"}


@ghl_tool(CATEGORY, action="get blog authors")
def get_blog_authors(limit: int = 10, offset: int = 0) -> dict:
    data = api().get("/blogs/authors", params={"locationId": location(), "limit": limit, "offset": offset})
    authors = items(data, "authors")
    return {"success": True, "authors": authors, "count": len(authors), "message": f"Retrieved {len(authors)} blog authors"}


@ghl_tool(CATEGORY, action="get blog categories")
def get_blog_categories(limit: int = 10, offset: int = 0) -> dict:
    data = api().get("/blogs/categories", params={"locationId": location(), "limit": limit, "offset": offset})
    categories = items(data, "categories")
    return {
        "success": True,
        "categories": categories,
        "count": len(categories),
        "message": f"Retrieved {len(categories)} blog categories",
    }


@ghl_tool(CATEGORY, action="check URL slug")
def check_url_slug(url_slug: str, post_id: Optional[str] = None) -> dict:
    """Check whether a blog URL slug is free.

    Args:
        url_slug: Slug to check
        post_id: Post being edited, excluded from the check
    """
    data = api().get("/blogs/posts/url-slug-exists", params={
        "locationId": location(),
        "urlSlug": url_slug,
        "postId": post_id,
    })
    exists = bool(pick(data, "exists", False))
    return {
        "success": True,
        "url_slug": url_slug,
        "exists": exists,
        "available": not exists,
        "message": f"URL slug \"{url_slug}\" is already in use" if exists else f"URL slug \"{url_slug}\" is available",
    }
