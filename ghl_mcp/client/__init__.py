"""GoHighLevel HTTP client."""

from ghl_mcp.client.config import Settings
from ghl_mcp.client.ghl_client import GHLClient

__all__ = ["GHLClient", "Settings"]
