"""Shared pytest fixtures for the MCP demo tests."""

import logging

import pytest
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict

from mcp import ClientSession
from mcp.shared.memory import create_connected_server_and_client_session

from mcp_server import SERVERS
from prompt_templates import PromptLibrary
from resource_catalog import ResourceCatalog
from tool_registry import ToolRegistry


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo handlers installed by setup_logging so they never outlive capture."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def tool_registry() -> ToolRegistry:
    return ToolRegistry()


@pytest.fixture
def resource_catalog() -> ResourceCatalog:
    return ResourceCatalog()


@pytest.fixture
def prompt_library() -> PromptLibrary:
    return PromptLibrary()


@pytest.fixture
def sample_demo_config() -> Dict[str, Any]:
    """Config overriding the tools and prompts server commands."""
    return {
        "servers": [
            {
                "name": "tools",
                "command": "python3",
                "args": ["main.py", "tools"],
            },
            {
                "name": "prompts",
                "command": "python3",
                "args": ["main.py", "prompts", "--debug"],
                "env": {"PYTHONUNBUFFERED": "1"},
            },
        ]
    }


@asynccontextmanager
async def in_memory_session(server: Dict[str, Any]) -> AsyncIterator[ClientSession]:
    """Connect to a demo server in-process instead of spawning it."""
    demo = SERVERS[server["name"]]()
    async with create_connected_server_and_client_session(demo.server) as session:
        yield session


@pytest.fixture
def connect_in_memory():
    """Drop-in replacement for demo_client.connect."""
    return in_memory_session
