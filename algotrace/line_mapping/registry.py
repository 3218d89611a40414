"""Line-mapping registry — step events to highlighted source lines.

A rule table per algorithm maps a step type (optionally narrowed by a
predicate over the step context) to line numbers for each display
language. Resolution is most-specific-first:

1. a context-qualified rule whose predicate matches,
2. the unqualified rule for the step type,
3. the table's default lines,
4. ``[]`` when the algorithm itself is unknown.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Sequence, Union

from pydantic import ValidationError

from ..context_types import parse_step_context
from ..step_types import StepType
from .. import constants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineRange:
    """Inclusive span of lines with an optional primary line."""

    start: int
    end: int
    primary: int | None = None

    def lines(self) -> list[int]:
        return list(range(self.start, self.end + 1))

    def primary_line(self) -> int:
        return self.primary if self.primary is not None else self.start


LineSpec = Union[Sequence[int], LineRange]


def _expand(spec: LineSpec) -> list[int]:
    if isinstance(spec, LineRange):
        return spec.lines()
    return list(spec)


def per_language(*specs: int | LineSpec) -> dict[str, LineSpec]:
    """Build a language → lines map, in ``SUPPORTED_LANGUAGES`` order.

    A bare ``int`` is shorthand for a single line.
    """
    if len(specs) != len(constants.SUPPORTED_LANGUAGES):
        raise ValueError(
            f"Expected {len(constants.SUPPORTED_LANGUAGES)} line specs, got {len(specs)}"
        )
    return {
        language: ((spec,) if isinstance(spec, int) else spec)
        for language, spec in zip(constants.SUPPORTED_LANGUAGES, specs)
    }


@dataclass(frozen=True)
class LineRule:
    """Lines for one step type, optionally guarded by a context predicate."""

    step_type: StepType
    lines: dict[str, LineSpec]
    when: Callable[[Any], bool] | None = None
    name: str = ""

    @property
    def is_qualified(self) -> bool:
        return self.when is not None

    def matches(self, context: Any) -> bool:
        if self.when is None:
            return True
        if context is None:
            return False
        try:
            return bool(self.when(context))
        except (AttributeError, TypeError, KeyError, ValueError) as exc:
            logger.debug("Predicate %s rejected context %r: %s", self.name, context, exc)
            return False


@dataclass(frozen=True)
class RuleTable:
    """All line rules for one algorithm plus its fallback lines."""

    algorithm_id: str
    rules: tuple[LineRule, ...]
    default: dict[str, LineSpec] = field(default_factory=dict)

    def rules_for(self, step_type: str, language: str) -> list[LineRule]:
        return [
            r for r in self.rules if r.step_type.value == step_type and language in r.lines
        ]


def _step_type_key(step_type: StepType | str) -> str:
    return step_type.value if isinstance(step_type, StepType) else str(step_type)


def _coerce_context(context: Any) -> Any:
    if isinstance(context, dict):
        try:
            return parse_step_context(context)
        except ValidationError:
            logger.debug("Ignoring unparseable step context %r", context)
            return None
    return context


class LineMappingRegistry:
    """Explicit registry of rule tables keyed by algorithm id.

    Registration replaces a single key and never touches another
    algorithm's table, so lookups for one algorithm are unaffected by
    registrations of others.
    """

    def __init__(self) -> None:
        self._tables: dict[str, RuleTable] = {}

    def register(self, algorithm_id: str, table: RuleTable) -> None:
        if algorithm_id in self._tables:
            logger.debug("Replacing line-mapping table for %s", algorithm_id)
        self._tables[algorithm_id] = table

    def ensure_registered(
        self, algorithm_id: str, factory: Callable[[], RuleTable]
    ) -> RuleTable:
        table = self._tables.get(algorithm_id)
        if table is None:
            table = factory()
            self.register(algorithm_id, table)
        return table

    def get(self, algorithm_id: str) -> RuleTable | None:
        return self._tables.get(algorithm_id)

    def registered_algorithms(self) -> tuple[str, ...]:
        return tuple(sorted(self._tables))

    def _select(
        self,
        algorithm_id: str,
        step_type: StepType | str,
        language: str,
        context: Any,
    ) -> LineSpec | None:
        table = self._tables.get(algorithm_id)
        if table is None:
            logger.warning("No line mapping registered for algorithm %s", algorithm_id)
            return None

        key = _step_type_key(step_type)
        context = _coerce_context(context)
        candidates = table.rules_for(key, language)
        for rule in candidates:
            if rule.is_qualified and rule.matches(context):
                logger.debug("%s/%s/%s -> qualified rule %s", algorithm_id, key, language, rule.name)
                return rule.lines[language]
        for rule in candidates:
            if not rule.is_qualified:
                return rule.lines[language]

        logger.debug("%s/%s/%s -> default lines", algorithm_id, key, language)
        return table.default.get(language)

    def resolve(
        self,
        algorithm_id: str,
        step_type: StepType | str,
        language: str,
        context: Any = None,
    ) -> list[int]:
        """Return the lines to highlight; never raises for unknown ids or types."""
        spec = self._select(algorithm_id, step_type, language, context)
        return _expand(spec) if spec is not None else []

    def resolve_primary(
        self,
        algorithm_id: str,
        step_type: StepType | str,
        language: str,
        context: Any = None,
    ) -> int | None:
        spec = self._select(algorithm_id, step_type, language, context)
        if spec is None:
            return None
        if isinstance(spec, LineRange):
            return spec.primary_line()
        lines = list(spec)
        return lines[0] if lines else None
