"""Demo client that exercises the tools, resources and prompts servers.

Spawns each server in turn over stdio, runs a fixed scenario against it
and prints a readable transcript. Scenarios run strictly one after the
other; each connection and subprocess is closed before the next starts.
"""

import argparse
import asyncio
import json
import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, List, Optional

import mcp.types as types
from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client
from pydantic import AnyUrl

from demo_config import SCENARIOS, ConfigError, load_config
from logging_config import get_logger, setup_logging

logger = get_logger(__name__)

CLIENT_INFO = types.Implementation(name="demo-client", version="1.0.0")

PREVIEW_CHARS = 200


@asynccontextmanager
async def connect(server: Dict[str, Any]) -> AsyncIterator[ClientSession]:
    """Spawn a server and yield an initialized session.

    The subprocess is terminated when the context exits.
    """
    params = StdioServerParameters(
        command=server["command"],
        args=server.get("args", []),
        env=server.get("env"),
        cwd=server.get("cwd"),
    )
    logger.info(
        f"Starting server '{server['name']}': {params.command} {' '.join(params.args)}"
    )

    async with stdio_client(params) as (read_stream, write_stream):
        async with ClientSession(
            read_stream, write_stream, client_info=CLIENT_INFO
        ) as session:
            init = await session.initialize()
            logger.info(
                f"Connected to {init.serverInfo.name} {init.serverInfo.version}"
            )
            yield session

    logger.info(f"Server '{server['name']}' stopped")


def first_text(content: List[Any]) -> str:
    """Text of the first content block, or an empty string."""
    for block in content:
        if isinstance(block, types.TextContent):
            return block.text
    return ""


async def run_tools_demo(session: ClientSession) -> None:
    print("\n🔧 ========== Tools Demo 测试 ==========\n")

    print("📋 可用工具列表：")
    tools = await session.list_tools()
    for i, tool in enumerate(tools.tools, 1):
        print(f"  {i}. {tool.name} - {tool.description}")

    print("\n🧮 测试计算工具：123 + 456")
    calc_result = await session.call_tool(
        "calculate", {"operation": "add", "a": 123, "b": 456}
    )
    print(f"  结果: {first_text(calc_result.content)}")

    print("\n🌤️  测试天气工具：查询北京天气")
    weather_result = await session.call_tool("get_weather", {"city": "beijing"})
    print(f"  结果:\n{first_text(weather_result.content)}")

    print("\n✅ Tools Demo 测试完成\n")


async def _read_json(session: ClientSession, uri: str) -> Any:
    result = await session.read_resource(AnyUrl(uri))
    contents = result.contents[0]
    if not isinstance(contents, types.TextResourceContents):
        raise ValueError(f"Resource {uri} did not return text")
    return json.loads(contents.text)


async def run_resources_demo(session: ClientSession) -> None:
    print("\n📚 ========== Resources Demo 测试 ==========\n")

    print("📋 可用资源列表：")
    resources = await session.list_resources()
    for i, resource in enumerate(resources.resources, 1):
        print(f"  {i}. {resource.name} ({resource.uri})")
        print(f"     {resource.description}")

    print("\n👥 读取用户列表资源：")
    print("  内容:")
    for user in await _read_json(session, "data://users"):
        print(f"    - {user['name']} ({user['role']})")

    print("\n🛍️  读取产品目录资源：")
    print("  内容:")
    for product in await _read_json(session, "data://products"):
        print(f"    - {product['name']}: ¥{product['price']}")

    print("\n✅ Resources Demo 测试完成\n")


async def run_prompts_demo(session: ClientSession) -> None:
    print("\n📋 ========== Prompts Demo 测试 ==========\n")

    print("📋 可用提示模板列表：")
    prompts = await session.list_prompts()
    for i, prompt in enumerate(prompts.prompts, 1):
        print(f"  {i}. {prompt.name} - {prompt.description}")
        if prompt.arguments:
            print(f"     参数: {', '.join(arg.name for arg in prompt.arguments)}")

    print("\n📝 获取代码审查模板：")
    code_review = await session.get_prompt(
        "code_review",
        {
            "code": "function add(a, b) { return a + b; }",
            "language": "JavaScript",
        },
    )
    text = first_text([code_review.messages[0].content])
    print(f"  描述: {code_review.description}")
    print(f"  提示长度: {len(text)} 字符")
    print(f"  提示预览:\n{text[:PREVIEW_CHARS]}...")

    print("\n✅ Prompts Demo 测试完成\n")


SCENARIO_RUNNERS: Dict[str, Callable[[ClientSession], Awaitable[None]]] = {
    "tools": run_tools_demo,
    "resources": run_resources_demo,
    "prompts": run_prompts_demo,
}


async def run_demo(servers: List[Dict[str, Any]], only: Optional[str] = None) -> None:
    """Run each scenario against a freshly spawned server, one at a time."""
    for server in servers:
        if only and server["name"] != only:
            continue
        async with connect(server) as session:
            await SCENARIO_RUNNERS[server["name"]](session)


def describe_error(error: BaseException) -> str:
    """Message of the innermost error, unwrapping task group exception groups."""
    while getattr(error, "exceptions", None):
        error = error.exceptions[0]  # type: ignore[attr-defined]
    return str(error)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Exercise the MCP demo servers and print a transcript",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python demo_client.py                         # Run all three scenarios
  python demo_client.py --only prompts          # Run a single scenario
  python demo_client.py --config servers.json   # Override server commands
        """,
    )

    parser.add_argument(
        "--config",
        default=None,
        help="Path to a JSON file overriding the server commands",
    )

    parser.add_argument(
        "--only", choices=SCENARIOS, default=None, help="Run a single scenario"
    )

    parser.add_argument(
        "--log", action="store_true", help="Log client diagnostics to stderr"
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    setup_logging(log_level=logging.INFO if args.log else logging.WARNING)

    print("🚀 MCP 三大核心概念演示\n")
    print("本演示将依次测试 Tools、Resources 和 Prompts\n")

    try:
        config = load_config(args.config)
        asyncio.run(run_demo(config["servers"], only=args.only))
    except ConfigError as e:
        print(f"❌ 配置错误: {e}")
        sys.exit(1)
    except Exception as e:
        logger.debug("Demo failed", exc_info=True)
        print(f"❌ 测试失败: {describe_error(e)}")
        sys.exit(1)

    print("\n🎉 所有测试完成！\n")
    print("💡 提示：")
    print('  - 在 Claude 中尝试: "帮我计算 100 + 200" 或 "显示用户列表"\n')


if __name__ == "__main__":
    main()
