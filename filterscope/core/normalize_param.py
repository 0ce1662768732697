"""Param Normalization — reshape a raw request value into (operator, tagged value).

Invariants:
    - Pure, never raises; depends only on the value and the canonical type
    - Non-mapping input means operator "eq"
    - Only the first operator key of a mapping is honored; the rest are dropped
    - Hash-typed filters always end up with operator "eq" and a StructuredValue

Design Decisions:
    - Hash filters read a non-eq mapping as the literal itself: {"id": 1} is an
      object to match, not an operator named "id"
    - "{{{" / "}}}" collapse to "{" / "}" so object text survives the wire escape
"""

from typing import Any

from filterscope.core.domain_types import (
    NormalizedParam, Operator, StructuredValue, tag_value,
)


def normalize_param(raw_value: Any, canonical_type: str) -> NormalizedParam:
    """Split a raw parameter into operator and tagged value."""
    param = raw_value if isinstance(raw_value, dict) else {Operator.EQ.value: raw_value}
    if not param:
        return NormalizedParam(Operator.EQ.value, StructuredValue(param))

    operator, value = next(iter(param.items()))
    operator = str(operator)

    if canonical_type == "hash":
        return _normalize_structured(param, operator, value)
    return NormalizedParam(operator, tag_value(value))


def _normalize_structured(param: dict, operator: str, value: Any) -> NormalizedParam:
    if operator != Operator.EQ.value:
        operator, value = Operator.EQ.value, param
    if isinstance(value, str):
        value = value.replace("{{{", "{").replace("}}}", "}")
    return NormalizedParam(operator, StructuredValue(value))
