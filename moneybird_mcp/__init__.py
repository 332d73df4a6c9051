"""
Moneybird MCP server: exposes Moneybird accounting data as Model Context Protocol tools.
"""

__version__ = "1.0.0"
