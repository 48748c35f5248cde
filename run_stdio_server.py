"""
GHL MCP Server - STDIO Entry Point
Point Claude Desktop (or any stdio MCP host) at this file
"""

import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from ghl_mcp.stdio_server import main

if __name__ == "__main__":
    main()
