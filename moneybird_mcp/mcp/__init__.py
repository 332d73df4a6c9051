"""
Model Context Protocol (MCP) Server

This package implements an MCP server that exposes:
- Tools: Moneybird contacts, sales invoices, financial accounts, products,
  projects, time entries, a generic API passthrough and an assistant guide
- Prompts: the moneybird_assistant system prompt

Tools and prompts are served over HTTP endpoints (see server.py).
"""
