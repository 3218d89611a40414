"""Line-mapping registry and the built-in rule tables."""

from __future__ import annotations

import logging

from .registry import LineMappingRegistry, LineRange, LineRule, RuleTable, per_language
from .tables import TABLE_FACTORIES

logger = logging.getLogger(__name__)


def ensure_default_tables(registry: LineMappingRegistry) -> LineMappingRegistry:
    """Register every built-in table not already present in *registry*."""
    for algorithm_id, factory in TABLE_FACTORIES.items():
        registry.ensure_registered(algorithm_id, factory)
    return registry


def build_default_registry() -> LineMappingRegistry:
    """Construct a registry holding every built-in rule table."""
    registry = ensure_default_tables(LineMappingRegistry())
    logger.info(
        "Built line-mapping registry with %d algorithms",
        len(registry.registered_algorithms()),
    )
    return registry


__all__ = [
    "LineMappingRegistry",
    "LineRange",
    "LineRule",
    "RuleTable",
    "per_language",
    "build_default_registry",
    "ensure_default_tables",
]
