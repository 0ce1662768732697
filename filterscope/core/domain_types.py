"""Domain Types — operators, tagged filter values, and the resolved filter record.

Invariants:
    - Built-in operators encoded as a str Enum — custom operator names stay plain str
    - A leading "!" on an operator is always rewritten to "not_" before lookup
    - Every value flowing between pipeline stages is one of the four tagged variants
    - Variants are frozen: stages return new values, never mutate

Design Decisions:
    - Tagged dataclasses over shape sniffing: each stage matches on the variant
      with `match`, so an unhandled shape is visible at the match site
    - str Enum for Operator: compares equal to the wire spelling ("eq" == Operator.EQ)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


# ─── Operators ───────────────────────────────────────────────────

class Operator(str, Enum):
    """Built-in filter operators. Custom operators are registered per filter."""
    EQ = "eq"
    NOT_EQ = "not_eq"
    EQL = "eql"
    NOT_EQL = "not_eql"
    PREFIX = "prefix"
    NOT_PREFIX = "not_prefix"
    SUFFIX = "suffix"
    NOT_SUFFIX = "not_suffix"
    LIKE = "like"
    NOT_LIKE = "not_like"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"


NEGATION_PREFIX = "not_"


def normalize_operator(operator: object) -> str:
    """Wire spelling → dispatch spelling. "!eq" becomes "not_eq"."""
    name = operator.value if isinstance(operator, Operator) else str(operator)
    if name.startswith("!"):
        return NEGATION_PREFIX + name[1:]
    return name


# ─── Tagged Values ───────────────────────────────────────────────

@dataclass(frozen=True)
class RawLiteral:
    """Untokenized string straight off the wire."""
    text: str


@dataclass(frozen=True)
class ScalarValue:
    """A single value (already tokenized, or non-string input)."""
    value: Any


@dataclass(frozen=True)
class SequenceValue:
    """An ordered collection of values."""
    items: tuple


@dataclass(frozen=True)
class StructuredValue:
    """A mapping, or JSON object text, destined for a hash-typed filter."""
    value: Any


ParamValue = RawLiteral | ScalarValue | SequenceValue | StructuredValue


def tag_value(raw: Any) -> ParamValue:
    """Wrap a raw request value in the variant matching its shape."""
    if isinstance(raw, str):
        return RawLiteral(raw)
    if isinstance(raw, dict):
        return StructuredValue(raw)
    if isinstance(raw, (list, tuple)):
        return SequenceValue(tuple(raw))
    return ScalarValue(raw)


@dataclass(frozen=True)
class NormalizedParam:
    """Normalizer output: operator as supplied + tagged value."""
    operator: str
    value: ParamValue


@dataclass(frozen=True)
class ResolvedFilter:
    """A fully validated, coerced filter ready for dispatch."""
    attribute: str
    operator: str
    value: Any
