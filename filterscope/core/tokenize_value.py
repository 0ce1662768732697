"""Value Tokenization — split a raw filter string into scalar or sequence tokens.

Grammar:
    a,b,c           → ["a", "b", "c"]
    {{a,b}},c       → ["a,b", "c"]     braces protect commas
    a               → "a"              one token is a scalar
    [1,2]           → [1, 2]           JSON literal, string/array types only
    [1],["x"]       → [[1], ["x"]]

Invariants:
    - Bracket literals and comma splitting are mutually exclusive for one value
    - Empty tokens are dropped; surrounding whitespace is kept
    - Idempotent: a single scalar token tokenizes to itself
    - Malformed or unclosed bracket literal → InvalidLiteralError naming the substring
    - Any "[" in a string/array value switches to literal mode
"""

import json
import re

from filterscope.core.domain_types import RawLiteral, ScalarValue, SequenceValue
from filterscope.core.errors import InvalidLiteralError
from filterscope.core.resource import FilterDefinition


_BRACKET_LITERAL = re.compile(r"\[.*?\]")
_BRACED_TOKEN = re.compile(r"(\{\{.*?\}\})")
_LITERAL_TYPES = frozenset({"string", "array"})


def tokenize_value(
    resource_name: str,
    definition: FilterDefinition,
    literal: RawLiteral,
    canonical_type: str,
) -> ScalarValue | SequenceValue:
    """Tokenize a RawLiteral for the given filter."""
    text = literal.text
    if canonical_type in _LITERAL_TYPES and "[" in text:
        return _decode_literals(resource_name, definition.name, text)
    return split_tokens(text)


def split_tokens(text: str) -> ScalarValue | SequenceValue:
    """Comma-split with {{...}} protection, keeping tokens in written order."""
    tokens: list[str] = []
    for chunk in _BRACED_TOKEN.split(text):
        if _BRACED_TOKEN.fullmatch(chunk):
            tokens.append(chunk[2:-2])
        else:
            tokens.extend(chunk.split(","))
    tokens = [t for t in tokens if t]
    if len(tokens) == 1:
        return ScalarValue(tokens[0])
    return SequenceValue(tuple(tokens))


def _decode_literals(
    resource_name: str, filter_name: str, text: str,
) -> ScalarValue | SequenceValue:
    leftover = _BRACKET_LITERAL.sub("", text)
    if "[" in leftover:
        unclosed = leftover[leftover.index("["):]
        raise InvalidLiteralError(resource_name, filter_name, unclosed)

    decoded = []
    for chunk in _BRACKET_LITERAL.findall(text):
        try:
            decoded.append(json.loads(chunk))
        except json.JSONDecodeError:
            raise InvalidLiteralError(resource_name, filter_name, chunk) from None

    if len(decoded) == 1:
        return _as_tagged(decoded[0])
    return SequenceValue(tuple(decoded))


def _as_tagged(decoded) -> ScalarValue | SequenceValue:
    if isinstance(decoded, list):
        return SequenceValue(tuple(decoded))
    return ScalarValue(decoded)
