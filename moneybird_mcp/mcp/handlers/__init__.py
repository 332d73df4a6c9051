"""
MCP Endpoint Handlers

This package contains handlers for MCP protocol endpoints:
- tools: Tool listing and execution
- prompts: Prompt listing and retrieval
- formatting: Rendering of tool results and errors
"""
