"""Load the type hierarchy from per-type schema definition files.

Layout:
    <schema_dir>/<TypeDir>/schema-definition.jsonld

Each definition carries an ``@id`` (the type) and an optional
``rdfs:subClassOf`` (its parent).
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional

from ..config import Settings, settings as default_settings
from ..errors import HierarchyError
from .hierarchy import HierarchyTable
from .registry import TypeRegistry

logger = logging.getLogger(__name__)

DEFINITION_FILE = "schema-definition.jsonld"


def normalize_type_id(
    value: str,
    base_url: str,
    prefix: str,
    aliases: list[str],
) -> str:
    """Rewrite a schema IRI or aliased CURIE to the canonical prefix."""
    if value.startswith(base_url):
        return prefix + value[len(base_url):]
    for alias in aliases:
        if value.startswith(alias):
            return prefix + value[len(alias):]
    return value


def _reference(value: Any) -> Optional[str]:
    """Extract an IRI from a JSON-LD reference (string, {"@id": ...}, or first of a list)."""
    if isinstance(value, list):
        value = value[0] if value else None
    if isinstance(value, dict):
        value = value.get("@id")
    return value if isinstance(value, str) and value else None


def load_hierarchy(
    schema_dir: str | Path,
    base_url: str,
    prefix: str,
    aliases: Optional[list[str]] = None,
) -> HierarchyTable:
    """
    Build the hierarchy from every definition under ``schema_dir``.

    Malformed definition files are logged and skipped. A missing directory or
    a cyclic hierarchy raises HierarchyError.
    """
    root = Path(schema_dir)
    if not root.is_dir():
        raise HierarchyError(f"Schema directory does not exist: {root}")

    aliases = aliases or []
    edges: dict[str, list[str]] = {}
    nodes: list[str] = []

    for definition in sorted(root.glob(f"*/{DEFINITION_FILE}")):
        try:
            schema = json.loads(definition.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Skipping schema %s: %s", definition.parent.name, e)
            continue

        child = _reference(schema.get("@id")) if isinstance(schema, dict) else None
        if not child:
            logger.warning("Skipping schema %s: no @id", definition.parent.name)
            continue
        child = normalize_type_id(child, base_url, prefix, aliases)
        nodes.append(child)

        parent = _reference(schema.get("rdfs:subClassOf"))
        if parent:
            parent = normalize_type_id(parent, base_url, prefix, aliases)
            edges.setdefault(parent, []).append(child)

    table = HierarchyTable.from_edges(edges, nodes)
    logger.info("Loaded %d item types from %s", len(table), root)
    logger.debug("Type hierarchy: %s", table.as_dict())
    return table


def load_registry(settings: Optional[Settings] = None) -> TypeRegistry:
    """Load the hierarchy named by ``settings`` and wrap it in a registry."""
    settings = settings or default_settings
    hierarchy = load_hierarchy(
        settings.schema_dir,
        base_url=settings.schema_base_url,
        prefix=settings.type_prefix,
        aliases=settings.prefix_aliases(),
    )
    return TypeRegistry(
        hierarchy,
        base_context_uri=settings.base_context_uri,
        context_template=settings.item_context_template,
        context_uris=settings.item_context_uris,
    )
