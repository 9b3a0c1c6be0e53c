"""Tests for GET /rules."""

from httpx import AsyncClient

from perfpilot.rules import PERFORMANCE_RULES


class TestListRules:
    async def test_returns_full_catalog_in_order(self, client: AsyncClient) -> None:
        res = await client.get("/rules")
        assert res.status_code == 200
        data = res.json()
        assert data["count"] == len(PERFORMANCE_RULES)
        assert [r["id"] for r in data["rules"]] == [r.id for r in PERFORMANCE_RULES]

    async def test_rule_shape(self, client: AsyncClient) -> None:
        res = await client.get("/rules")
        img = next(r for r in res.json()["rules"] if r["id"] == "img-tag-usage")
        assert img["severity"] == "critical"
        assert img["category"] == "images"
        assert img["docs"].startswith("https://nextjs.org/")
        assert "codeExample" in img
        assert {"name", "description", "pattern", "recommendation"} <= img.keys()

    async def test_severities_are_known(self, client: AsyncClient) -> None:
        res = await client.get("/rules")
        assert {r["severity"] for r in res.json()["rules"]} <= {"critical", "warning", "info"}
