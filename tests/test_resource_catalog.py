"""Tests for resource_catalog.py - static data resources."""

import json

import pytest

from resource_catalog import JSON_MIME_TYPE, ResourceCatalog, ResourceError


class TestListResources:
    """Tests for ResourceCatalog.list and list_templates."""

    def test_lists_catalog_uris(self, resource_catalog: ResourceCatalog):
        uris = [resource.uri for resource in resource_catalog.list()]

        assert uris == [
            "data://users",
            "data://products",
            "data://config",
            "data://users/1",
        ]

    def test_all_resources_are_json(self, resource_catalog: ResourceCatalog):
        assert all(r.mime_type == JSON_MIME_TYPE for r in resource_catalog.list())

    def test_list_is_idempotent(self, resource_catalog: ResourceCatalog):
        first = [r.to_dict() for r in resource_catalog.list()]
        second = [r.to_dict() for r in resource_catalog.list()]

        assert first == second

    def test_user_template(self, resource_catalog: ResourceCatalog):
        templates = resource_catalog.list_templates()

        assert [t.uri_template for t in templates] == ["data://users/{id}"]
        assert templates[0].to_dict()["uriTemplate"] == "data://users/{id}"


class TestReadResource:
    """Tests for ResourceCatalog.read."""

    def test_read_users(self, resource_catalog: ResourceCatalog):
        contents = resource_catalog.read("data://users")

        assert len(contents) == 1
        assert contents[0].uri == "data://users"
        assert contents[0].mime_type == JSON_MIME_TYPE
        users = json.loads(contents[0].text)
        assert [u["name"] for u in users] == ["张三", "李四", "王五"]

    def test_read_products(self, resource_catalog: ResourceCatalog):
        products = json.loads(resource_catalog.read("data://products")[0].text)

        assert [p["id"] for p in products] == [101, 102, 103]
        assert products[1]["price"] == 0.01

    def test_read_config(self, resource_catalog: ResourceCatalog):
        config = json.loads(resource_catalog.read("data://config")[0].text)

        assert config == {
            "appName": "MCP Demo App",
            "version": "1.0.0",
            "maxUsers": 1000,
            "features": ["tools", "resources", "prompts"],
        }

    def test_read_single_user(self, resource_catalog: ResourceCatalog):
        contents = resource_catalog.read("data://users/2")

        assert contents[0].uri == "data://users/2"
        assert json.loads(contents[0].text) == {
            "id": 2,
            "name": "李四",
            "role": "产品经理",
            "email": "lisi@example.com",
        }

    def test_json_keeps_chinese_text(self, resource_catalog: ResourceCatalog):
        text = resource_catalog.read("data://users/1")[0].text

        assert "张三" in text
        assert text.startswith('{\n  "id": 1,')

    def test_unknown_user_id(self, resource_catalog: ResourceCatalog):
        with pytest.raises(ResourceError) as exc_info:
            resource_catalog.read("data://users/999")

        assert str(exc_info.value) == "读取资源失败: 未找到用户 ID: 999"

    def test_non_integer_user_id(self, resource_catalog: ResourceCatalog):
        with pytest.raises(ResourceError) as exc_info:
            resource_catalog.read("data://users/abc")

        assert "未找到用户 ID: abc" in str(exc_info.value)

    def test_unknown_uri(self, resource_catalog: ResourceCatalog):
        with pytest.raises(ResourceError) as exc_info:
            resource_catalog.read("data://orders")

        assert "未知的资源 URI: data://orders" in str(exc_info.value)

    def test_to_dict(self, resource_catalog: ResourceCatalog):
        item = resource_catalog.read("data://config")[0].to_dict()

        assert set(item) == {"uri", "mimeType", "text"}
