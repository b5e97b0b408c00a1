"""Tool registry and invoker for the tools demo server.

Exposes two tools over static data: ``calculate`` (basic arithmetic) and
``get_weather`` (lookup in the seeded weather table). Every failure during
invocation is reported as an error result, never raised to the caller.
"""

import math
import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from demo_data import WEATHER, find_weather
from logging_config import get_logger

logger = get_logger(__name__)


class ToolError(Exception):
    """Tool invocation failed with a human-readable reason."""

    pass


class ToolName(str, Enum):
    CALCULATE = "calculate"
    GET_WEATHER = "get_weather"


class Operation(str, Enum):
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


@dataclass(frozen=True)
class ToolArgument:
    """One property of a tool's input schema."""

    name: str
    type: str
    description: str
    enum: Tuple[str, ...] = ()
    required: bool = True

    def to_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type}
        if self.enum:
            schema["enum"] = list(self.enum)
        schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    arguments: Tuple[ToolArgument, ...] = field(default_factory=tuple)

    def input_schema(self) -> Dict[str, Any]:
        """Render the arguments as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {arg.name: arg.to_schema() for arg in self.arguments},
            "required": [arg.name for arg in self.arguments if arg.required],
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
        }


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a tool call: one text block, optionally flagged as an error."""

    text: str
    is_error: bool = False

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            result["isError"] = True
        return result


TOOLS: Tuple[ToolDescriptor, ...] = (
    ToolDescriptor(
        name=ToolName.CALCULATE.value,
        description="执行基本的数学计算（加、减、乘、除）",
        arguments=(
            ToolArgument(
                name="operation",
                type="string",
                description="要执行的运算类型",
                enum=tuple(op.value for op in Operation),
            ),
            ToolArgument(name="a", type="number", description="第一个数字"),
            ToolArgument(name="b", type="number", description="第二个数字"),
        ),
    ),
    ToolDescriptor(
        name=ToolName.GET_WEATHER.value,
        description="获取指定城市的天气信息",
        arguments=(
            ToolArgument(
                name="city",
                type="string",
                description="城市名称（拼音小写，如：beijing, shanghai）",
            ),
        ),
    ),
)


_OPERATORS: Mapping[Operation, Callable[[Any, Any], Any]] = {
    Operation.ADD: operator.add,
    Operation.SUBTRACT: operator.sub,
    Operation.MULTIPLY: operator.mul,
    Operation.DIVIDE: operator.truediv,
}

# Whole floats below this convert to int without changing their digits
MAX_EXACT_INTEGER = 2**53


def format_number(value: Any) -> str:
    """Format a number the way it would be written by hand (``2`` not ``2.0``).

    Floats outside the exactly representable integer range keep their
    shortest form (``1e+23``), and overflow prints as ``Infinity``.
    """
    if isinstance(value, float):
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if math.isnan(value):
            return "NaN"
        if value.is_integer() and abs(value) < MAX_EXACT_INTEGER:
            return str(int(value))
        return repr(value)
    return str(value)


def _require(arguments: Dict[str, Any], name: str) -> Any:
    if arguments.get(name) is None:
        raise ToolError(f"缺少必需参数：{name}")
    return arguments[name]


def _require_number(arguments: Dict[str, Any], name: str) -> Any:
    value = _require(arguments, name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolError(f"参数 {name} 必须是数字")
    return value


def calculate(arguments: Dict[str, Any]) -> str:
    """Apply one of the four arithmetic operations to ``a`` and ``b``.

    Raises:
        ToolError: On a missing or non-numeric operand, an unknown
            operation, or division by zero
    """
    raw_operation = _require(arguments, "operation")
    try:
        operation = Operation(raw_operation)
    except ValueError:
        raise ToolError(f"未知的运算类型: {raw_operation}")

    a = _require_number(arguments, "a")
    b = _require_number(arguments, "b")

    if operation is Operation.DIVIDE and b == 0:
        raise ToolError("除数不能为零")

    result = _OPERATORS[operation](a, b)
    return (
        f"计算结果: {format_number(a)} {operation.value} "
        f"{format_number(b)} = {format_number(result)}"
    )


def get_weather(arguments: Dict[str, Any]) -> str:
    """Report the seeded weather for a city.

    An unknown city is not an error: the text lists the supported cities.
    """
    city = _require(arguments, "city")
    if not isinstance(city, str):
        raise ToolError("参数 city 必须是字符串")

    weather = find_weather(city)
    if weather is None:
        logger.info(f"No weather data for city '{city}'")
        return f'未找到城市 "{city}" 的天气信息。支持的城市：{", ".join(WEATHER)}'

    return (
        f"{city} 的天气:\n"
        f"温度: {weather.temp}°C\n"
        f"天气: {weather.condition}\n"
        f"湿度: {weather.humidity}%"
    )


_HANDLERS: Mapping[ToolName, Callable[[Dict[str, Any]], str]] = {
    ToolName.CALCULATE: calculate,
    ToolName.GET_WEATHER: get_weather,
}


class ToolRegistry:
    """Lists the demo tools and invokes them by name."""

    def __init__(self) -> None:
        missing = set(ToolName) - set(_HANDLERS)
        if missing:
            raise RuntimeError(f"Tools without handlers: {sorted(m.value for m in missing)}")
        self._tools = TOOLS

    def list(self) -> Tuple[ToolDescriptor, ...]:
        """Return the tool descriptors, identical on every call."""
        return self._tools

    def invoke(self, name: str, arguments: Optional[Dict[str, Any]] = None) -> ToolResult:
        """Invoke a tool by name.

        Args:
            name: Tool name
            arguments: Tool arguments (may be None)

        Returns:
            ToolResult with the tool's text, or an error result whose text
            starts with ``错误: ``
        """
        logger.info(f"Invoking tool '{name}'")
        try:
            try:
                tool_name = ToolName(name)
            except ValueError:
                raise ToolError(f"未知的工具: {name}")
            text = _HANDLERS[tool_name](arguments or {})
            return ToolResult(text=text)
        except ToolError as e:
            logger.warning(f"Tool '{name}' failed: {e}")
            return ToolResult(text=f"错误: {e}", is_error=True)
        except Exception as e:
            logger.error(f"Unexpected error in tool '{name}': {e}", exc_info=True)
            return ToolResult(text=f"错误: {e}", is_error=True)
