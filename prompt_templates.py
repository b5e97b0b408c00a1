"""Prompt template engine for the prompts demo server.

Each template validates its arguments and interpolates them verbatim into
a fixed instructional message. Failures are raised to the caller.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from logging_config import get_logger

logger = get_logger(__name__)

FENCE = "```"


class PromptError(Exception):
    """Prompt could not be generated."""

    pass


class PromptName(str, Enum):
    CODE_REVIEW = "code_review"
    GENERATE_DOCS = "generate_docs"
    BUG_ANALYSIS = "bug_analysis"
    API_DESIGN = "api_design"


@dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "required": self.required,
        }


@dataclass(frozen=True)
class PromptDescriptor:
    name: str
    description: str
    arguments: Tuple[PromptArgument, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [arg.to_dict() for arg in self.arguments],
        }


@dataclass(frozen=True)
class PromptMessage:
    text: str
    role: str = "user"

    def to_dict(self) -> Dict[str, Any]:
        return {"role": self.role, "content": {"type": "text", "text": self.text}}


@dataclass(frozen=True)
class PromptResult:
    description: str
    messages: Tuple[PromptMessage, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "messages": [message.to_dict() for message in self.messages],
        }


PROMPTS: Tuple[PromptDescriptor, ...] = (
    PromptDescriptor(
        name=PromptName.CODE_REVIEW.value,
        description="对代码进行全面的审查，检查质量、性能和最佳实践",
        arguments=(
            PromptArgument(name="code", description="要审查的代码"),
            PromptArgument(
                name="language",
                description="编程语言（如：JavaScript, Python, Java）",
            ),
        ),
    ),
    PromptDescriptor(
        name=PromptName.GENERATE_DOCS.value,
        description="为代码生成详细的文档",
        arguments=(
            PromptArgument(name="code", description="要生成文档的代码"),
            PromptArgument(
                name="format",
                description="文档格式（如：markdown, jsdoc, sphinx）",
                required=False,
            ),
        ),
    ),
    PromptDescriptor(
        name=PromptName.BUG_ANALYSIS.value,
        description="分析Bug报告并提供解决方案",
        arguments=(
            PromptArgument(name="bug_description", description="Bug的详细描述"),
            PromptArgument(
                name="error_logs", description="相关的错误日志", required=False
            ),
        ),
    ),
    PromptDescriptor(
        name=PromptName.API_DESIGN.value,
        description="设计RESTful API接口",
        arguments=(
            PromptArgument(name="feature", description="要实现的功能描述"),
            PromptArgument(name="resources", description="涉及的资源类型"),
        ),
    ),
)

_DEFAULTS: Mapping[str, str] = {"format": "markdown", "error_logs": "无"}


def _single_message(description: str, text: str) -> PromptResult:
    return PromptResult(description=description, messages=(PromptMessage(text=text),))


def code_review(args: Dict[str, str]) -> PromptResult:
    code, language = args["code"], args["language"]
    text = f"""请对以下 {language} 代码进行全面审查：

{FENCE}{language}
{code}
{FENCE}

请从以下几个方面进行审查：
1. **代码质量**：可读性、命名规范、代码结构
2. **性能问题**：潜在的性能瓶颈或优化建议
3. **安全性**：可能的安全漏洞
4. **最佳实践**：是否遵循该语言的最佳实践
5. **Bug风险**：可能导致Bug的代码模式

请提供具体的改进建议和示例代码。"""
    return _single_message(f"对 {language} 代码进行审查", text)


def generate_docs(args: Dict[str, str]) -> PromptResult:
    code, doc_format = args["code"], args["format"]
    text = f"""请为以下代码生成详细的文档（格式：{doc_format}）：

{FENCE}
{code}
{FENCE}

文档应包含：
1. **功能概述**：代码的主要功能和用途
2. **参数说明**：每个参数的类型、描述和默认值
3. **返回值**：返回值的类型和说明
4. **使用示例**：1-2个实际使用示例
5. **注意事项**：使用时需要注意的事项

请使用 {doc_format} 格式输出。"""
    return _single_message(f"生成 {doc_format} 格式的代码文档", text)


def bug_analysis(args: Dict[str, str]) -> PromptResult:
    bug_description, error_logs = args["bug_description"], args["error_logs"]
    text = f"""请分析以下Bug并提供解决方案：

**Bug描述：**
{bug_description}

**错误日志：**
{error_logs}

请提供：
1. **根因分析**：Bug的可能原因
2. **重现步骤**：如何重现这个问题
3. **解决方案**：详细的修复步骤和代码示例
4. **预防措施**：如何避免类似问题
5. **测试建议**：如何验证修复是否有效"""
    return _single_message("分析Bug并提供解决方案", text)


def api_design(args: Dict[str, str]) -> PromptResult:
    feature, resources = args["feature"], args["resources"]
    text = f"""请设计以下功能的RESTful API接口：

**功能需求：**
{feature}

**涉及的资源：**
{resources}

请提供：
1. **接口列表**：所有需要的API端点（GET/POST/PUT/DELETE）
2. **请求格式**：每个接口的请求参数和body结构
3. **响应格式**：成功和失败情况的响应示例
4. **状态码**：使用的HTTP状态码
5. **认证方式**：API的认证和授权机制
6. **错误处理**：统一的错误响应格式

请使用Markdown表格和代码块展示。"""
    return _single_message("设计RESTful API", text)


_RENDERERS: Mapping[PromptName, Callable[[Dict[str, str]], PromptResult]] = {
    PromptName.CODE_REVIEW: code_review,
    PromptName.GENERATE_DOCS: generate_docs,
    PromptName.BUG_ANALYSIS: bug_analysis,
    PromptName.API_DESIGN: api_design,
}


def resolve_arguments(
    descriptor: PromptDescriptor, arguments: Optional[Dict[str, str]]
) -> Dict[str, str]:
    """Check required arguments and fill in defaults for optional ones.

    Absent and empty values count as missing. Unknown arguments are dropped.

    Raises:
        PromptError: Naming the first missing required argument
    """
    supplied = arguments or {}
    resolved: Dict[str, str] = {}
    for arg in descriptor.arguments:
        value = supplied.get(arg.name)
        if not value:
            if arg.required:
                raise PromptError(f"缺少必需参数：{arg.name}")
            value = _DEFAULTS.get(arg.name, "")
        resolved[arg.name] = value
    return resolved


class PromptLibrary:
    """Lists the prompt templates and renders them by name."""

    def __init__(self) -> None:
        missing = set(PromptName) - set(_RENDERERS)
        if missing:
            raise RuntimeError(f"Prompts without renderers: {sorted(m.value for m in missing)}")
        self._prompts: Mapping[PromptName, PromptDescriptor] = {
            PromptName(p.name): p for p in PROMPTS
        }

    def list(self) -> Tuple[PromptDescriptor, ...]:
        """Return the prompt descriptors, identical on every call."""
        return PROMPTS

    def get(self, name: str, arguments: Optional[Dict[str, str]] = None) -> PromptResult:
        """Render a prompt template.

        Args:
            name: Template name
            arguments: Argument name to string value

        Returns:
            PromptResult with a description and a single user message

        Raises:
            PromptError: If the template is unknown or a required argument
                is missing
        """
        logger.info(f"Rendering prompt '{name}'")
        try:
            try:
                prompt_name = PromptName(name)
            except ValueError:
                raise PromptError(f"未知的提示模板: {name}")
            args = resolve_arguments(self._prompts[prompt_name], arguments)
            return _RENDERERS[prompt_name](args)
        except PromptError as e:
            logger.warning(f"Failed to render prompt '{name}': {e}")
            raise PromptError(f"获取提示失败: {e}") from e
