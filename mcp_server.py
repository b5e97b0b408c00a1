"""MCP servers for the tools, resources and prompts demos.

Each server owns an ``mcp.server.Server`` and registers handlers for a
single capability only, so capability negotiation advertises exactly that
capability. The SDK handles framing, request correlation and converting
raised exceptions into protocol-level errors.
"""

from typing import Any, Dict, Iterable, List, Optional

import mcp.types as types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from pydantic import AnyUrl

from logging_config import get_logger
from prompt_templates import PromptLibrary
from resource_catalog import ResourceCatalog
from tool_registry import ToolRegistry

logger = get_logger(__name__)

SERVER_VERSION = "1.0.0"


class DemoServer:
    """Common lifecycle for the demo servers."""

    server_name = "demo-server"
    title = "Demo"

    def __init__(self) -> None:
        self.server = Server(self.server_name, version=SERVER_VERSION)

    async def run(self) -> None:
        """Run the MCP server over stdio until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info(f"{self.title} Demo MCP Server 已启动")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
        logger.info(f"{self.title} Demo MCP Server stopped")


class ToolsDemoServer(DemoServer):
    """Exposes the calculator and weather tools."""

    server_name = "tools-demo-server"
    title = "Tools"

    def __init__(self, registry: Optional[ToolRegistry] = None) -> None:
        super().__init__()
        self.registry = registry or ToolRegistry()

        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)

    async def list_tools(self) -> List[types.Tool]:
        tools = [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema(),
            )
            for tool in self.registry.list()
        ]
        logger.info(f"Listed {len(tools)} tools")
        return tools

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> types.CallToolResult:
        """Invoke a tool. Failures come back as results with isError set."""
        result = self.registry.invoke(name, arguments)
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )


class ResourcesDemoServer(DemoServer):
    """Exposes the user, product and config tables as resources."""

    server_name = "resources-demo-server"
    title = "Resources"

    def __init__(self, catalog: Optional[ResourceCatalog] = None) -> None:
        super().__init__()
        self.catalog = catalog or ResourceCatalog()

        self.server.list_resources()(self.list_resources)
        self.server.list_resource_templates()(self.list_resource_templates)
        self.server.read_resource()(self.read_resource)

    async def list_resources(self) -> List[types.Resource]:
        resources = [
            types.Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in self.catalog.list()
        ]
        logger.info(f"Listed {len(resources)} resources")
        return resources

    async def list_resource_templates(self) -> List[types.ResourceTemplate]:
        return [
            types.ResourceTemplate(
                uriTemplate=template.uri_template,
                name=template.name,
                description=template.description,
                mimeType=template.mime_type,
            )
            for template in self.catalog.list_templates()
        ]

    async def read_resource(self, uri: AnyUrl) -> Iterable[ReadResourceContents]:
        """Read a resource. ResourceError propagates to the client as a protocol error."""
        contents = self.catalog.read(str(uri))
        return [
            ReadResourceContents(content=item.text, mime_type=item.mime_type)
            for item in contents
        ]


class PromptsDemoServer(DemoServer):
    """Exposes the instructional prompt templates."""

    server_name = "prompts-demo-server"
    title = "Prompts"

    def __init__(self, library: Optional[PromptLibrary] = None) -> None:
        super().__init__()
        self.library = library or PromptLibrary()

        self.server.list_prompts()(self.list_prompts)
        self.server.get_prompt()(self.get_prompt)

    async def list_prompts(self) -> List[types.Prompt]:
        prompts = [
            types.Prompt(
                name=prompt.name,
                description=prompt.description,
                arguments=[
                    types.PromptArgument(
                        name=arg.name,
                        description=arg.description,
                        required=arg.required,
                    )
                    for arg in prompt.arguments
                ],
            )
            for prompt in self.library.list()
        ]
        logger.info(f"Listed {len(prompts)} prompts")
        return prompts

    async def get_prompt(
        self, name: str, arguments: Optional[Dict[str, str]]
    ) -> types.GetPromptResult:
        """Render a prompt. PromptError propagates to the client as a protocol error."""
        result = self.library.get(name, arguments)
        return types.GetPromptResult(
            description=result.description,
            messages=[
                types.PromptMessage(
                    role=message.role,
                    content=types.TextContent(type="text", text=message.text),
                )
                for message in result.messages
            ],
        )


SERVERS = {
    "tools": ToolsDemoServer,
    "resources": ResourcesDemoServer,
    "prompts": PromptsDemoServer,
}
