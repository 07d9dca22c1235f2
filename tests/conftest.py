"""Pytest configuration and fixtures."""

import pytest
from pathlib import Path
from dotenv import load_dotenv

# Load test environment
test_env = Path(__file__).parent / ".env"
if test_env.exists():
    load_dotenv(test_env)

BASE_CONTEXT = "https://becknprotocol.io/schema/context.jsonld"
CONTEXT_TEMPLATE = "https://becknprotocol.io/schema/items/{name}/schema-context.jsonld"


def context_uri(name: str) -> str:
    """Schema-context URI for a local type name."""
    return CONTEXT_TEMPLATE.format(name=name)


def make_item(type_id, item_id, name, short_desc="", long_desc="", **attrs):
    """Build a JSON-LD item."""
    return {
        "@type": type_id,
        "beckn:id": item_id,
        "beckn:descriptor": {
            "@type": "beckn:Descriptor",
            "schema:name": name,
            "beckn:shortDesc": short_desc,
            "beckn:longDesc": long_desc,
        },
        **attrs,
    }


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "integration: Integration tests (filesystem or database)")


@pytest.fixture
def hierarchy_edges():
    """Parent -> child edges of the test hierarchy."""
    return {
        "beckn:Item": ["beckn:ElectronicItem", "beckn:GroceryItem", "beckn:WorkOpportunityItem"],
        "beckn:ElectronicItem": ["beckn:SmartphoneItem", "beckn:TelevisionItem"],
    }


@pytest.fixture
def hierarchy(hierarchy_edges):
    """Small synthetic type hierarchy."""
    from catalog_discovery.schema import HierarchyTable
    return HierarchyTable.from_edges(hierarchy_edges)


@pytest.fixture
def registry(hierarchy):
    """Type registry over the test hierarchy."""
    from catalog_discovery.schema import TypeRegistry
    return TypeRegistry(hierarchy, BASE_CONTEXT, CONTEXT_TEMPLATE)


@pytest.fixture
def sample_items():
    """Mixed-type corpus, in storage order."""
    return [
        make_item(
            "beckn:SmartphoneItem", "phone-001", "Pixel Pro 9",
            "Smart phone deals this week", "Flagship Android device",
            brand="Pixel", price=84999, rating=4.6,
        ),
        make_item(
            "beckn:SmartphoneItem", "phone-002", "Galaxy A55",
            "Smartphone deals on a mid-range favourite", "AMOLED display and 5G",
            brand="Galaxy", price=39999, rating=4.3,
        ),
        make_item(
            "beckn:TelevisionItem", "tv-001", "Bravia 55 inch",
            "4K HDR television", "Google TV with Dolby Vision",
            brand="Bravia", price=99990, rating=4.5,
        ),
        make_item(
            "beckn:ElectronicItem", "acc-001", "USB-C Charger",
            "Fast charger for laptops", "Compact GaN charger",
            brand="Anker", price=2999, rating=4.7,
        ),
        make_item(
            "beckn:GroceryItem", "grocery-001", "Organic Basmati Rice",
            "Aged long grain rice", "Certified organic",
            brand="FarmFresh", price=899, rating=4.4,
        ),
        make_item(
            "beckn:GroceryItem", "grocery-002", "Coconut Oil",
            "Cold pressed virgin oil", "For cooking and care",
            brand="FarmFresh", price=549, rating=4.2,
        ),
        make_item(
            "beckn:WorkOpportunityItem", "job-001", "Delivery Partner",
            "Flexible delivery work", "Weekly payouts",
        ),
        make_item(
            "beckn:UnknownItem", "mystery-001", "Mystery phone",
            "Unregistered type", "",
        ),
    ]


@pytest.fixture
def memory_store(sample_items):
    """In-memory store over the sample corpus."""
    from catalog_discovery.stores import MemoryItemStore
    return MemoryItemStore(sample_items)


@pytest.fixture
def engine(memory_store, registry):
    """Discovery engine over the memory store."""
    from catalog_discovery.engine import DiscoveryEngine
    return DiscoveryEngine(memory_store, registry)


@pytest.fixture
def make_context():
    """Build a request context, overriding or removing fields."""
    def _make(*schema_names, **overrides):
        context = {
            "ts": "2025-06-01T10:00:00.000Z",
            "msgid": "msg-001",
            "traceid": "trace-001",
            "network_id": "beckn.one/test",
            "schema_context": [context_uri(n) for n in schema_names],
        }
        for key, value in overrides.items():
            if value is ...:
                context.pop(key, None)
            else:
                context[key] = value
        return context
    return _make


@pytest.fixture
def client(engine):
    """FastAPI test client wired to the test engine."""
    from fastapi.testclient import TestClient
    from catalog_discovery.main import app
    from catalog_discovery.api import get_engine

    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()
