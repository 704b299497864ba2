"""GoHighLevel MCP server: category-gated CRM tools behind a small discovery surface."""

__version__ = "0.1.0"
