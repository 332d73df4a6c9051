"""
MCP Server - Main FastAPI Application

Implements the Model Context Protocol over HTTP for the Moneybird API:
- /tool/* endpoints for the Moneybird tools
- /prompt/* endpoints for the assistant prompt

Run with `moneybird-mcp` or `uvicorn moneybird_mcp.mcp.server:app`.
"""

import logging
from fastapi import Depends, FastAPI, Request, Security
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from moneybird_mcp import __version__
from moneybird_mcp.config import MoneybirdSettings
from moneybird_mcp.services.moneybird import ClientProvider
from .auth import verify_api_key
from .models import (
    ToolListResponse,
    ToolCallRequest,
    ToolCallResponse,
    PromptListResponse,
    PromptGetRequest,
    PromptGetResponse,
    MCPError,
)
from .handlers import tools, prompts

settings = MoneybirdSettings.from_env()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)
logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Moneybird MCP Server",
    description="Model Context Protocol server exposing Moneybird accounting data as tools",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS middleware for cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# One client per process, built on the first tool call that needs it
app.state.client_provider = ClientProvider(settings)

if settings.credentials is None:
    logger.warning(
        "MONEYBIRD_API_TOKEN or MONEYBIRD_ADMINISTRATION_ID is not set; "
        "tool calls that reach Moneybird will fail until they are configured"
    )


if settings.api_key is None:
    logger.warning("MCP_API_KEY is not set; endpoints accept requests without an API key")


def get_client_provider(request: Request) -> ClientProvider:
    return request.app.state.client_provider


# ============================================================================
# Error Handlers
# ============================================================================

@app.exception_handler(ValueError)
async def value_error_handler(request, exc: ValueError):
    """Handle ValueError exceptions."""
    return JSONResponse(
        status_code=400,
        content=MCPError(
            code=400,
            message=str(exc),
            data={"type": "ValueError"}
        ).model_dump()
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle general exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=MCPError(
            code=500,
            message="Internal server error",
            data={"type": type(exc).__name__}
        ).model_dump()
    )


# ============================================================================
# Health Check
# ============================================================================

@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Moneybird MCP Server",
        "version": __version__
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API information."""
    return {
        "service": "Moneybird MCP Server",
        "version": __version__,
        "protocol": "Model Context Protocol",
        "endpoints": {
            "tools": "/tool/list, /tool/call",
            "prompts": "/prompt/list, /prompt/get",
            "docs": "/docs"
        }
    }


# ============================================================================
# Tool Endpoints
# ============================================================================

@app.get(
    "/tool/list",
    response_model=ToolListResponse,
    tags=["Tools"],
    summary="List available tools"
)
async def list_tools_endpoint(api_key: str = Security(verify_api_key)):
    """
    List all available tools.

    Returns a list of tool definitions with their schemas.
    """
    return await tools.list_tools()


@app.post(
    "/tool/call",
    response_model=ToolCallResponse,
    tags=["Tools"],
    summary="Call a tool"
)
async def call_tool_endpoint(
    request: ToolCallRequest,
    api_key: str = Security(verify_api_key),
    provider: ClientProvider = Depends(get_client_provider),
):
    """
    Execute a tool call.

    - **name**: Tool name to call
    - **arguments**: Tool arguments as JSON object

    Returns tool execution result; failures come back with `isError: true`.
    """
    return await tools.call_tool(request, provider)


# ============================================================================
# Prompt Endpoints
# ============================================================================

@app.get(
    "/prompt/list",
    response_model=PromptListResponse,
    tags=["Prompts"],
    summary="List available prompts"
)
async def list_prompts_endpoint(api_key: str = Security(verify_api_key)):
    """
    List all available prompts.

    Returns a list of prompt definitions with their arguments.
    """
    return await prompts.list_prompts()


@app.post(
    "/prompt/get",
    response_model=PromptGetResponse,
    tags=["Prompts"],
    summary="Get a prompt"
)
async def get_prompt_endpoint(
    request: PromptGetRequest,
    api_key: str = Security(verify_api_key)
):
    """
    Get a prompt template.

    - **name**: Prompt name
    - **arguments**: Optional prompt arguments for substitution

    Returns prompt messages ready for LLM use.
    """
    return await prompts.get_prompt(request)


def main():
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
