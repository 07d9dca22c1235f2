"""Pydantic schemas for API requests and responses."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..engine.models import Catalog, DiscoveryResult


# =============================================================================
# Request Schemas
# =============================================================================


class DiscoverRequest(BaseModel):
    """
    Request for catalog discovery.

    Fields are untyped here and validated by the engine, so that wrong
    shapes fail with discovery error codes instead of a generic 422.
    """

    context: Any = Field(
        default=None,
        description="ts, msgid, traceid, network_id and schema_context (array of URIs)",
    )
    text_search: Any = Field(
        default=None,
        description="Whole-word term matched against item name, descriptions and type",
    )
    filters: Any = Field(
        default=None,
        description="JSONPath expression whose root is the items array",
    )
    pagination: Any = Field(
        default=None,
        description="page (>= 1) and limit (1-100); defaults to page 1, limit 20",
    )


# =============================================================================
# Response Schemas
# =============================================================================


class ResponseContextSchema(BaseModel):
    """Context echoed back to the caller; ts is server time."""

    ts: str
    msgid: Any
    traceid: Any
    network_id: Any
    schema_context: list[str] = Field(default_factory=list)


class DescriptorSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="beckn:Descriptor", alias="@type")
    name: str = Field(alias="schema:name")
    short_desc: str = Field(alias="beckn:shortDesc")


class TimePeriodSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="beckn:TimePeriod", alias="@type")
    start_date: str = Field(alias="schema:startDate")
    end_date: str = Field(alias="schema:endDate")


class CatalogSchema(BaseModel):
    """Synthesized catalog holding one page of items."""

    model_config = ConfigDict(populate_by_name=True)

    type: str = Field(default="beckn:Catalog", alias="@type")
    descriptor: DescriptorSchema = Field(alias="beckn:descriptor")
    provider_id: str = Field(alias="beckn:providerId")
    time_period: TimePeriodSchema = Field(alias="beckn:timePeriod")
    items: list[dict[str, Any]] = Field(default_factory=list, alias="beckn:items")

    @classmethod
    def from_catalog(cls, catalog: Catalog) -> "CatalogSchema":
        return cls(
            descriptor=DescriptorSchema(
                name=catalog.descriptor.name,
                short_desc=catalog.descriptor.short_desc,
            ),
            provider_id=catalog.provider_id,
            time_period=TimePeriodSchema(
                start_date=catalog.start_date,
                end_date=catalog.end_date,
            ),
            items=catalog.items,
        )


class DiscoverResponse(BaseModel):
    """Response from discover endpoints."""

    context: ResponseContextSchema
    catalogs: list[CatalogSchema]

    @classmethod
    def from_result(cls, result: DiscoveryResult) -> "DiscoverResponse":
        return cls(
            context=ResponseContextSchema(
                ts=result.context.ts,
                msgid=result.context.msgid,
                traceid=result.context.traceid,
                network_id=result.context.network_id,
                schema_context=result.context.schema_context,
            ),
            catalogs=[CatalogSchema.from_catalog(c) for c in result.catalogs],
        )


class ErrorDetailSchema(BaseModel):
    code: str
    message: str
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error body returned for every rejected request."""

    error: ErrorDetailSchema


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    store: str
    item_types: int
    items: int
