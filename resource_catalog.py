"""Resource catalog and reader for the resources demo server.

Serves the static user, product and config tables as JSON documents
addressed by ``data://`` URIs, plus single users via ``data://users/{id}``.
Read failures are raised; the transport turns them into protocol errors.
"""

import json
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Tuple

from demo_data import APP_CONFIG, PRODUCTS, USERS, find_user
from logging_config import get_logger

logger = get_logger(__name__)

JSON_MIME_TYPE = "application/json"
USER_URI_PREFIX = "data://users/"


class ResourceError(Exception):
    """Resource could not be read."""

    pass


@dataclass(frozen=True)
class ResourceDescriptor:
    uri: str
    name: str
    description: str
    mime_type: str = JSON_MIME_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


@dataclass(frozen=True)
class ResourceTemplateDescriptor:
    """A parametric URI pattern such as ``data://users/{id}``."""

    uri_template: str
    name: str
    description: str
    mime_type: str = JSON_MIME_TYPE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "uriTemplate": self.uri_template,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


@dataclass(frozen=True)
class ResourceContents:
    uri: str
    mime_type: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        return {"uri": self.uri, "mimeType": self.mime_type, "text": self.text}


RESOURCES: Tuple[ResourceDescriptor, ...] = (
    ResourceDescriptor(
        uri="data://users",
        name="用户列表",
        description="系统中所有用户的信息",
    ),
    ResourceDescriptor(
        uri="data://products",
        name="产品目录",
        description="所有可用产品的列表和价格",
    ),
    ResourceDescriptor(
        uri="data://config",
        name="系统配置",
        description="应用程序的配置信息",
    ),
    ResourceDescriptor(
        uri="data://users/1",
        name="用户详情 - 张三",
        description="ID为1的用户详细信息",
    ),
)

RESOURCE_TEMPLATES: Tuple[ResourceTemplateDescriptor, ...] = (
    ResourceTemplateDescriptor(
        uri_template=USER_URI_PREFIX + "{id}",
        name="用户详情",
        description="按用户 ID 读取单个用户的详细信息",
    ),
)


def to_json(payload: Any) -> str:
    """Serialize a payload as indented JSON, keeping non-ASCII text readable."""
    return json.dumps(payload, indent=2, ensure_ascii=False)


# Exact-match URIs; anything else falls through to the user pattern
_STATIC_READERS: Mapping[str, Callable[[], Any]] = {
    "data://users": lambda: [user.to_dict() for user in USERS],
    "data://products": lambda: [product.to_dict() for product in PRODUCTS],
    "data://config": APP_CONFIG.to_dict,
}


def _read_user(uri: str) -> Dict[str, Any]:
    segment = uri[len(USER_URI_PREFIX):]
    try:
        user_id = int(segment)
    except ValueError:
        raise ResourceError(f"未找到用户 ID: {segment}")

    user = find_user(user_id)
    if user is None:
        raise ResourceError(f"未找到用户 ID: {user_id}")
    return user.to_dict()


class ResourceCatalog:
    """Lists the demo resources and reads them by URI."""

    def __init__(self) -> None:
        self._resources = RESOURCES
        self._templates = RESOURCE_TEMPLATES

    def list(self) -> Tuple[ResourceDescriptor, ...]:
        """Return the resource descriptors, identical on every call."""
        return self._resources

    def list_templates(self) -> Tuple[ResourceTemplateDescriptor, ...]:
        return self._templates

    def read(self, uri: str) -> Tuple[ResourceContents, ...]:
        """Read a resource.

        Args:
            uri: Resource URI, either an exact catalog entry or
                ``data://users/{id}``

        Returns:
            One ResourceContents item holding the JSON document

        Raises:
            ResourceError: If the URI is unknown or the user id does not exist
        """
        logger.info(f"Reading resource '{uri}'")
        try:
            payload = self._resolve(uri)
        except ResourceError as e:
            logger.warning(f"Failed to read resource '{uri}': {e}")
            raise ResourceError(f"读取资源失败: {e}") from e

        return (ResourceContents(uri=uri, mime_type=JSON_MIME_TYPE, text=to_json(payload)),)

    def _resolve(self, uri: str) -> Any:
        reader = _STATIC_READERS.get(uri)
        if reader is not None:
            return reader()
        if uri.startswith(USER_URI_PREFIX):
            return _read_user(uri)
        raise ResourceError(f"未知的资源 URI: {uri}")
