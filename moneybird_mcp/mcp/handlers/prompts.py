"""
MCP Prompt Endpoint Handlers

Handles prompt listing and retrieval for MCP protocol.
Exposes prompts: moneybird_assistant
"""

import logging
from typing import Dict, Any
from ..models import (
    PromptDefinition,
    PromptArgument,
    PromptListResponse,
    PromptGetRequest,
    PromptGetResponse,
)

logger = logging.getLogger(__name__)


ASSISTANT_PROMPT = """You are a financial assistant that helps users with their Moneybird accounting software.
You can help them find information about contacts, invoices, financial accounts, and more.
Always be helpful, accurate, and professional.

Some things you can do:
- Look up contact information
- Find invoice details
- Check financial accounts
- List products and services
- View project information
- Access time entries

When users ask for financial information, try to be as specific as possible in your responses.
Large listings are truncated to 50 items; use the page and perPage arguments to walk through them."""


# Prompt registry
PROMPT_REGISTRY: Dict[str, Dict[str, Any]] = {
    "moneybird_assistant": {
        "description": "Get assistance with using the Moneybird MCP server",
        "content": ASSISTANT_PROMPT,
        "arguments": []
    }
}


async def list_prompts() -> PromptListResponse:
    """
    List all available prompts.

    Returns:
        PromptListResponse with list of prompt definitions
    """
    prompts = []

    for prompt_id, metadata in PROMPT_REGISTRY.items():
        arguments = [
            PromptArgument(
                name=arg["name"],
                description=arg.get("description"),
                required=arg.get("required", True)
            )
            for arg in metadata.get("arguments", [])
        ]

        prompts.append(PromptDefinition(
            name=prompt_id,
            description=metadata.get("description"),
            arguments=arguments
        ))

    return PromptListResponse(prompts=prompts)


async def get_prompt(request: PromptGetRequest) -> PromptGetResponse:
    """
    Get a prompt template. The prompts take no arguments.

    Args:
        request: Prompt get request with name

    Returns:
        PromptGetResponse with prompt messages

    Raises:
        ValueError: If prompt name is not found
    """
    prompt_name = request.name

    if prompt_name not in PROMPT_REGISTRY:
        raise ValueError(f"Prompt '{prompt_name}' not found. Available prompts: {list(PROMPT_REGISTRY.keys())}")

    prompt_content = PROMPT_REGISTRY[prompt_name]["content"]

    logger.info(f"Serving prompt '{prompt_name}'")
    return PromptGetResponse(
        messages=[{
            "role": "system",
            "content": prompt_content
        }],
        isError=False
    )
