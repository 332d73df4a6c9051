"""
MCP Protocol Request/Response Models

This module defines Pydantic models for MCP protocol requests and responses
following the Model Context Protocol specification.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List


# ============================================================================
# Tool Models
# ============================================================================

class ToolDefinition(BaseModel):
    """MCP tool definition schema."""
    name: str = Field(..., description="Tool name/identifier")
    description: str = Field(..., description="Tool description")
    inputSchema: Dict[str, Any] = Field(..., description="JSON schema for tool inputs")


class ToolListResponse(BaseModel):
    """Response for listing available tools."""
    tools: List[ToolDefinition] = Field(..., description="List of available tools")


class ToolCallRequest(BaseModel):
    """Request to call a tool."""
    name: str = Field(..., description="Tool name to call")
    arguments: Optional[Dict[str, Any]] = Field(default_factory=dict, description="Tool arguments")


class TextContent(BaseModel):
    """Text block of a tool result."""
    type: str = Field("text", description="Content type")
    text: str = Field(..., description="Text content")


class ToolCallResponse(BaseModel):
    """Response from tool call."""
    content: List[TextContent] = Field(..., description="Tool output content")
    isError: bool = Field(default=False, description="Whether the result is an error")

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolCallResponse":
        return cls(content=[TextContent(text=text)], isError=is_error)


# ============================================================================
# Prompt Models
# ============================================================================

class PromptArgument(BaseModel):
    """Prompt argument definition."""
    name: str = Field(..., description="Argument name")
    description: Optional[str] = Field(None, description="Argument description")
    required: bool = Field(default=True, description="Whether argument is required")


class PromptDefinition(BaseModel):
    """MCP prompt definition schema."""
    name: str = Field(..., description="Prompt name/identifier")
    description: Optional[str] = Field(None, description="Prompt description")
    arguments: List[PromptArgument] = Field(default_factory=list, description="Prompt arguments")


class PromptListResponse(BaseModel):
    """Response for listing available prompts."""
    prompts: List[PromptDefinition] = Field(..., description="List of available prompts")


class PromptGetRequest(BaseModel):
    """Request to get a prompt."""
    name: str = Field(..., description="Prompt name")
    arguments: Optional[Dict[str, str]] = Field(None, description="Prompt arguments")


class PromptGetResponse(BaseModel):
    """Response from getting a prompt."""
    messages: List[Dict[str, str]] = Field(..., description="Prompt messages")
    isError: bool = Field(default=False, description="Whether the result is an error")


# ============================================================================
# Error Models
# ============================================================================

class MCPError(BaseModel):
    """MCP error response."""
    code: int = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    data: Optional[Dict[str, Any]] = Field(None, description="Additional error data")


# ============================================================================
# Tool Argument Models
# ============================================================================

class NoArguments(BaseModel):
    """Arguments of tools that take none."""
    model_config = ConfigDict(extra="forbid")


class GetContactArguments(BaseModel):
    model_config = ConfigDict(extra="forbid")

    contact_id: str = Field(..., min_length=1, description="The ID of the contact to retrieve")


class GetSalesInvoiceArguments(BaseModel):
    model_config = ConfigDict(extra="forbid")

    invoice_id: str = Field(..., min_length=1, description="The ID of the sales invoice to retrieve")
