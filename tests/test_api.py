"""Tests for FastAPI endpoints."""

import pytest

from catalog_discovery.api import get_engine
from catalog_discovery.engine import DiscoveryEngine
from catalog_discovery.main import app
from catalog_discovery.stores import MemoryItemStore
from conftest import BASE_CONTEXT, context_uri

DISCOVER = "/beckn/v1/discover"
BROWSER_SEARCH = "/beckn/v1/discover/browser-search"


def ids(body):
    return [item["beckn:id"] for item in body["catalogs"][0]["beckn:items"]]


class BrokenStore(MemoryItemStore):
    async def list_items(self, types=None, text_search=None):
        raise RuntimeError("disk on fire")


class TestHealthEndpoint:
    """Tests for health check endpoint."""

    @pytest.mark.unit
    def test_health_response_format(self, client, sample_items):
        """Health reports the store and loaded data."""
        response = client.get("/beckn/v1/health")
        assert response.status_code == 200

        data = response.json()
        assert data["status"] == "healthy"
        assert data["store"] == "memory"
        assert data["items"] == len(sample_items)
        assert data["item_types"] == 6


class TestRootEndpoint:
    """Tests for root endpoint."""

    @pytest.mark.unit
    def test_root_response_format(self, client):
        """Root response has API info."""
        data = client.get("/").json()

        assert data["name"] == "Catalog Discovery"
        assert data["endpoints"]["discover"] == DISCOVER
        assert data["mcp"] == "/mcp"


class TestDiscoverEndpoint:
    """Tests for POST /discover."""

    @pytest.mark.unit
    def test_discover_response_format(self, client, make_context):
        """Successful responses use the JSON-LD catalog envelope."""
        response = client.post(DISCOVER, json={"context": make_context("SmartphoneItem")})
        assert response.status_code == 200

        body = response.json()
        assert body["context"]["msgid"] == "msg-001"
        assert body["context"]["traceid"] == "trace-001"
        assert body["context"]["network_id"] == "beckn.one/test"
        assert body["context"]["schema_context"] == [context_uri("SmartphoneItem")]
        assert body["context"]["ts"].endswith("Z")

        catalog = body["catalogs"][0]
        assert catalog["@type"] == "beckn:Catalog"
        assert catalog["beckn:descriptor"] == {
            "@type": "beckn:Descriptor",
            "schema:name": "Electronic Catalog",
            "beckn:shortDesc": "Latest electronics, smartphones and televisions",
        }
        assert catalog["beckn:providerId"] == "tech-store-001"
        assert catalog["beckn:timePeriod"]["schema:startDate"] == "2025-01-27"
        assert ids(body) == ["phone-001", "phone-002"]
        assert all(
            item["@context"] == context_uri("SmartphoneItem")
            for item in catalog["beckn:items"]
        )

    @pytest.mark.unit
    def test_discover_with_search_filter_and_page(self, client, make_context):
        """All request options flow through to the engine."""
        response = client.post(DISCOVER, json={
            "context": make_context("Item"),
            "text_search": "deals",
            "filters": "$[?@.price < 50000]",
            "pagination": {"page": 1, "limit": 5},
        })
        assert response.status_code == 200
        assert ids(response.json()) == ["phone-002"]

    @pytest.mark.unit
    def test_missing_context(self, client):
        """A body without context is MISSING_CONTEXT."""
        response = client.post(DISCOVER, json={})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_CONTEXT"

    @pytest.mark.unit
    def test_missing_traceid(self, client, make_context):
        """The missing field is named in the error."""
        response = client.post(DISCOVER, json={"context": make_context("GroceryItem", traceid=...)})
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["code"] == "MISSING_CONTEXT_FIELD"
        assert error["details"] == {"field": "traceid"}
        assert "traceid" in error["message"]

    @pytest.mark.unit
    def test_unknown_schema_context(self, client, make_context):
        """Unknown type URIs are INVALID_SCHEMA_CONTEXT."""
        bad = context_uri("SpaceshipItem")
        response = client.post(DISCOVER, json={"context": make_context(schema_context=[bad])})
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["code"] == "INVALID_SCHEMA_CONTEXT"
        assert error["details"]["schema_context"] == bad

    @pytest.mark.unit
    def test_invalid_pagination(self, client, make_context):
        """Out-of-range limits are INVALID_PAGINATION."""
        response = client.post(DISCOVER, json={
            "context": make_context("GroceryItem"),
            "pagination": {"limit": 101},
        })
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PAGINATION"

    @pytest.mark.unit
    def test_invalid_filter(self, client, make_context):
        """Malformed filters return INVALID_FILTER and no catalogs."""
        expression = '$[?@.brand == "FarmFresh"'
        response = client.post(DISCOVER, json={
            "context": make_context("GroceryItem"),
            "filters": expression,
        })
        assert response.status_code == 400

        body = response.json()
        assert "catalogs" not in body
        assert body["error"]["code"] == "INVALID_FILTER"
        assert body["error"]["message"] == "Invalid JSONPath filter expression"
        assert body["error"]["details"]["filter"] == expression

    @pytest.mark.unit
    def test_base_context_only(self, client, make_context):
        """The base context alone matches nothing."""
        response = client.post(DISCOVER, json={"context": make_context(schema_context=[BASE_CONTEXT])})
        assert response.status_code == 200
        assert response.json()["catalogs"][0]["beckn:items"] == []

    @pytest.mark.unit
    @pytest.mark.parametrize("body", [{"context": "nope"}, {"context": ["a"]}, [1], "text"])
    def test_wrong_body_types_are_missing_context(self, client, body):
        """Bodies without a context object use the error envelope, not a 422."""
        response = client.post(DISCOVER, json=body)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_CONTEXT"

    @pytest.mark.unit
    def test_empty_body(self, client):
        """A POST with no body is MISSING_CONTEXT."""
        response = client.post(DISCOVER)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_CONTEXT"

    @pytest.mark.unit
    def test_non_object_pagination(self, client, make_context):
        """Pagination that is not an object names the field."""
        response = client.post(DISCOVER, json={
            "context": make_context("GroceryItem"),
            "pagination": "x",
        })
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["code"] == "INVALID_PAGINATION"
        assert error["details"]["field"] == "pagination"

    @pytest.mark.unit
    def test_non_string_text_search(self, client, make_context):
        """A numeric text_search is rejected with the field named."""
        response = client.post(DISCOVER, json={
            "context": make_context("GroceryItem"),
            "text_search": 5,
        })
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["code"] == "MISSING_SEARCH_PARAMETERS"
        assert error["details"] == {"field": "text_search", "value": 5}

    @pytest.mark.unit
    def test_non_string_filters(self, client, make_context):
        response = client.post(DISCOVER, json={
            "context": make_context("GroceryItem"),
            "filters": {"price": 1},
        })
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILTER"

    @pytest.mark.unit
    def test_internal_error(self, client, make_context, registry, sample_items):
        """Unexpected failures become INTERNAL_ERROR without leaking details."""
        app.dependency_overrides[get_engine] = lambda: DiscoveryEngine(BrokenStore(sample_items), registry)

        response = client.post(DISCOVER, json={"context": make_context("GroceryItem")})

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "INTERNAL_ERROR"
        assert "disk on fire" not in error["message"]


class TestBrowserSearchEndpoint:
    """Tests for GET /discover/browser-search."""

    @pytest.mark.unit
    def test_requires_schema_context(self, client):
        response = client.get(BROWSER_SEARCH, params={"text_search": "rice"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_SCHEMA_CONTEXT"

    @pytest.mark.unit
    def test_requires_search_parameters(self, client):
        response = client.get(BROWSER_SEARCH, params={"schema_context": context_uri("GroceryItem")})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "MISSING_SEARCH_PARAMETERS"

    @pytest.mark.unit
    def test_search(self, client):
        """Context is generated server-side."""
        response = client.get(BROWSER_SEARCH, params={
            "schema_context": context_uri("GroceryItem"),
            "text_search": "rice",
        })
        assert response.status_code == 200

        body = response.json()
        assert ids(body) == ["grocery-001"]
        assert body["catalogs"][0]["beckn:descriptor"]["schema:name"] == "Grocery Catalog"
        assert body["context"]["msgid"]
        assert body["context"]["traceid"]
        assert body["context"]["schema_context"] == [context_uri("GroceryItem")]

    @pytest.mark.unit
    def test_repeated_schema_context_and_filter(self, client):
        """schema_context may repeat; filters alone are enough."""
        response = client.get(BROWSER_SEARCH, params=[
            ("schema_context", context_uri("GroceryItem")),
            ("schema_context", context_uri("TelevisionItem")),
            ("filters", "$[?@.price > 800]"),
            ("limit", "2"),
        ])
        assert response.status_code == 200
        assert ids(response.json()) == ["tv-001", "grocery-001"]

    @pytest.mark.unit
    def test_invalid_page(self, client):
        response = client.get(BROWSER_SEARCH, params={
            "schema_context": context_uri("GroceryItem"),
            "text_search": "rice",
            "page": 0,
        })
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PAGINATION"

    @pytest.mark.unit
    @pytest.mark.parametrize("field", ["page", "limit"])
    def test_unparseable_page_or_limit(self, client, field):
        """Non-integer query values are INVALID_PAGINATION, not a 422."""
        response = client.get(BROWSER_SEARCH, params={
            "schema_context": context_uri("GroceryItem"),
            "text_search": "rice",
            field: "abc",
        })
        assert response.status_code == 400

        error = response.json()["error"]
        assert error["code"] == "INVALID_PAGINATION"
        assert error["details"]["field"] == field
        assert error["details"]["value"] == "abc"
