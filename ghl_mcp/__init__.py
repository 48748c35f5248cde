"""
GHL MCP Server - GoHighLevel CRM tools for MCP clients
"""

__version__ = "1.0.0"

from .config import Settings, settings
from .errors import GHLAPIError

__all__ = ["Settings", "settings", "GHLAPIError"]
