"""Audit the built-in line-mapping tables against the steps generators emit.

For every algorithm, the default trace plus a handful of inputs that reach
the failure and degenerate branches are generated. The union of emitted
step types is compared with the algorithm's rule table:

- default fallback: an emitted step type with no unqualified rule, so a
  step with an unmatched context lands on the table's entry lines
- missing: a rule that has no lines for one of the display languages
- unused rule: a mapped step type that none of the sample traces emit

Exits non-zero when any table has a default fallback or a missing language.
"""

from __future__ import annotations

import logging
import sys

from algotrace import constants
from algotrace.api import generate_trace
from algotrace.generators import SUPPORTED_ALGORITHMS
from algotrace.line_mapping import build_default_registry
from algotrace.line_mapping.audit import TableAudit, audit_table
from algotrace.step_types import StepType

logging.basicConfig(level=logging.INFO, format="%(message)s")
logger = logging.getLogger(__name__)

# Extra inputs per algorithm that reach branches the defaults skip
EXTRA_INPUTS: dict[str, list[dict]] = {
    constants.ALGO_COIN_CHANGE: [{"coins": [5], "amount": 3}],
    constants.ALGO_CYCLE_DETECTION: [
        {"nodes": [{"id": "A"}, {"id": "B"}], "edges": [{"from": "A", "to": "B"}]},
    ],
    constants.ALGO_K_LARGEST: [{"array": [1, 2, 3], "k": 3}],
    constants.ALGO_BFS_TRAVERSAL: [{"tree": "unbalanced"}],
    constants.ALGO_FACTORIAL: [{"n": 0}],
    constants.ALGO_IN_ORDER_TRAVERSAL: [{"tree": "medium"}],
    constants.ALGO_BALANCED_PARENTHESES: [
        {"expression": "(]"},
        {"expression": ")"},
        {"expression": "(("},
        {"expression": "a(b)"},
    ],
    constants.ALGO_ANAGRAM_DETECTION: [
        {"first": "abc", "second": "abcd"},
        {"first": "aab", "second": "abb"},
    ],
    constants.ALGO_LINEAR_SEARCH: [{"target": 4}],
    constants.ALGO_BINARY_SEARCH: [{"target": 4}],
    constants.ALGO_TWO_SUM: [{"array": [1, 2], "target": 10}],
    constants.ALGO_BUBBLE_SORT: [{"array": [1, 2, 3]}],
    constants.ALGO_REVERSE_LINKED_LIST: [{"values": [7]}],
    constants.ALGO_MIN_COST_ARRAY: [{"array": [5]}],
}


def emitted_step_types(algorithm_id: str) -> set[StepType]:
    """Collect every step type emitted across the default and extra inputs."""
    emitted: set[StepType] = set()
    for inputs in [{}] + EXTRA_INPUTS.get(algorithm_id, []):
        emitted.update(s.step_type for s in generate_trace(algorithm_id, **inputs))
    return emitted


def main() -> int:
    registry = build_default_registry()
    audits: list[TableAudit] = []

    for algorithm_id in SUPPORTED_ALGORITHMS:
        table = registry.get(algorithm_id)
        if table is None:
            logger.error("No rule table registered for %s", algorithm_id)
            continue
        audit = audit_table(table, emitted_step_types(algorithm_id))
        audits.append(audit)
        logger.info(audit.report())
        logger.info("")

    incomplete = [a.algorithm_id for a in audits if not a.is_complete]
    missing_tables = len(SUPPORTED_ALGORITHMS) - len(audits)

    logger.info("=" * 70)
    logger.info("  %-28s %9s %9s %7s", "Algorithm", "Fallback", "Missing", "Unused")
    logger.info("  %s", "-" * 56)
    for a in audits:
        logger.info(
            "  %-28s %9d %9d %7d",
            a.algorithm_id,
            len(a.default_fallbacks),
            len(a.missing_languages),
            len(a.unused_rules),
        )
    logger.info("=" * 70)

    if incomplete:
        logger.info("  Tables with gaps: %s", ", ".join(incomplete))
    return 1 if incomplete or missing_tables else 0


if __name__ == "__main__":
    sys.exit(main())
