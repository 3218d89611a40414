"""Coverage audit for line-mapping rule tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..step_types import StepType
from .. import constants
from .registry import RuleTable


@dataclass
class TableAudit:
    """Which step types and languages a table covers explicitly."""

    algorithm_id: str
    default_fallbacks: list[str] = field(default_factory=list)
    missing_languages: dict[str, list[str]] = field(default_factory=dict)
    unused_rules: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return not self.default_fallbacks and not self.missing_languages

    def report(self) -> str:
        lines = [f"═══ {self.algorithm_id} ═══"]
        if self.is_complete:
            lines.append("  all emitted step types mapped in every language")
        for step_type in self.default_fallbacks:
            lines.append(f"  default fallback: {step_type}")
        for rule_name, languages in self.missing_languages.items():
            lines.append(f"  {rule_name}: missing {', '.join(languages)}")
        for step_type in self.unused_rules:
            lines.append(f"  unused rule: {step_type}")
        return "\n".join(lines)


def audit_table(
    table: RuleTable,
    emitted: Iterable[StepType],
    languages: tuple[str, ...] = constants.SUPPORTED_LANGUAGES,
) -> TableAudit:
    """Compare *table* against the step types a generator actually emits."""
    emitted_keys = sorted({s.value for s in emitted})
    mapped = {r.step_type.value for r in table.rules if not r.is_qualified}
    audit = TableAudit(algorithm_id=table.algorithm_id)
    audit.default_fallbacks = [s for s in emitted_keys if s not in mapped]
    for rule in table.rules:
        missing = [lang for lang in languages if lang not in rule.lines]
        if missing:
            audit.missing_languages[rule.name or rule.step_type.value] = missing
    audit.unused_rules = sorted(
        {r.step_type.value for r in table.rules} - set(emitted_keys)
    )
    return audit
