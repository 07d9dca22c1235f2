"""Configuration for the catalog discovery service."""

from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Schema Configuration
    schema_dir: str = Field(default="schemas/items", description="Directory of per-type schema definitions")
    schema_base_url: str = Field(default="https://becknprotocol.io/schema/", description="Base URL of schema @id values")
    type_prefix: str = Field(default="beckn:", description="Canonical prefix for type identifiers")
    type_prefix_aliases: str = Field(default="electronic:,grocery:", description="Comma-separated prefixes rewritten to type_prefix")
    base_context_uri: str = Field(
        default="https://becknprotocol.io/schema/context.jsonld",
        description="Base JSON-LD context, always accepted in schema_context",
    )
    item_context_template: str = Field(
        default="https://becknprotocol.io/schema/items/{name}/schema-context.jsonld",
        description="Per-type context URI; {name} is the local type name",
    )
    item_context_uris: dict[str, str] = Field(
        default_factory=dict,
        description="Type id -> context URI overrides, as a JSON object",
    )

    # Storage Configuration
    store_backend: str = Field(default="memory", description="Item store: memory or sqlite")
    data_dir: str = Field(default="sample-data", description="Directory of JSON-LD corpus files")
    sqlite_path: str = Field(default="./data/catalog.db", description="SQLite document store path")

    # Catalog Configuration
    provider_id: str = Field(default="tech-store-001", description="Provider id stamped on catalogs")
    catalog_start_date: str = Field(default="2025-01-27", description="Catalog validity start")
    catalog_end_date: str = Field(default="2026-12-31", description="Catalog validity end")
    network_id: str = Field(default="beckn.one/default", description="Network id for browser search")

    # Pagination Configuration
    default_page: int = Field(default=1, description="Page used when omitted")
    default_limit: int = Field(default=20, description="Page size used when omitted")
    max_limit: int = Field(default=100, description="Largest accepted page size")

    # Server Configuration
    log_level: str = Field(default="INFO", description="Root log level")
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    model_config = {"env_prefix": "DISCOVERY_"}

    def prefix_aliases(self) -> list[str]:
        """Return configured alias prefixes as a list."""
        return [p.strip() for p in self.type_prefix_aliases.split(",") if p.strip()]


settings = Settings()
