"""
GHL MCP Server - HTTP Entry Point
Run this file to serve the GoHighLevel tools over Streamable HTTP
"""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from ghl_mcp.http_server import main

if __name__ == "__main__":
    # Listens on PORT (default 9000); MCP endpoint at /mcp
    main()
