"""Static in-memory tables served by the demo servers.

All tables are built once at import time and are read-only: records are
frozen dataclasses, collections are tuples, and keyed lookups go through
``MappingProxyType`` views.
"""

from dataclasses import asdict, dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class WeatherRecord:
    """Current weather for one city."""

    temp: int
    condition: str
    humidity: int


@dataclass(frozen=True)
class UserRecord:
    id: int
    name: str
    role: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProductRecord:
    id: int
    name: str
    price: Union[int, float]
    category: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AppConfig:
    """Application settings exposed as ``data://config``."""

    app_name: str
    version: str
    max_users: int
    features: Tuple[str, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "appName": self.app_name,
            "version": self.version,
            "maxUsers": self.max_users,
            "features": list(self.features),
        }


# Keyed by lower-case city pinyin
WEATHER: Mapping[str, WeatherRecord] = MappingProxyType(
    {
        "beijing": WeatherRecord(temp=5, condition="晴天", humidity=45),
        "shanghai": WeatherRecord(temp=12, condition="多云", humidity=65),
        "guangzhou": WeatherRecord(temp=20, condition="小雨", humidity=80),
        "shenzhen": WeatherRecord(temp=22, condition="晴天", humidity=70),
    }
)

USERS: Tuple[UserRecord, ...] = (
    UserRecord(id=1, name="张三", role="开发工程师", email="zhangsan@example.com"),
    UserRecord(id=2, name="李四", role="产品经理", email="lisi@example.com"),
    UserRecord(id=3, name="王五", role="设计师", email="wangwu@example.com"),
)

PRODUCTS: Tuple[ProductRecord, ...] = (
    ProductRecord(id=101, name="Claude Pro", price=20, category="AI服务"),
    ProductRecord(id=102, name="API访问", price=0.01, category="AI服务"),
    ProductRecord(id=103, name="企业版", price=100, category="AI服务"),
)

APP_CONFIG = AppConfig(
    app_name="MCP Demo App",
    version="1.0.0",
    max_users=1000,
    features=("tools", "resources", "prompts"),
)

_USERS_BY_ID: Mapping[int, UserRecord] = MappingProxyType({u.id: u for u in USERS})


def find_weather(city: str) -> Optional[WeatherRecord]:
    """Look up weather by city name, ignoring case."""
    return WEATHER.get(city.lower())


def find_user(user_id: int) -> Optional[UserRecord]:
    return _USERS_BY_ID.get(user_id)
