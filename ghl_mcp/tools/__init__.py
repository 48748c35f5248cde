"""
Tool modules for the GHL MCP server.

Importing this package registers every tool on the shared FastMCP instance.
"""

from . import (
    contacts,
    conversations,
    blog,
    opportunities,
    calendar,
    locations,
    email,
    email_verification,
    workflows,
    surveys,
    associations,
    custom_fields,
    media,
    objects,
    payments,
    products,
    social_media,
    store,
    invoices,
    utility,
)

__all__ = [
    "contacts",
    "conversations",
    "blog",
    "opportunities",
    "calendar",
    "locations",
    "email",
    "email_verification",
    "workflows",
    "surveys",
    "associations",
    "custom_fields",
    "media",
    "objects",
    "payments",
    "products",
    "social_media",
    "store",
    "invoices",
    "utility",
]
