"""Filter Query Parsing — bracketed query-string keys → ordered filter mapping.

    filter[status]=active            → {"status": "active"}
    filter[age][gt]=30               → {"age": {"gt": "30"}}
    filter[name][!eq]=bob            → {"name": {"!eq": "bob"}}

Invariants:
    - Keys under other roots, or not in bracket form, are ignored
    - Filter order is the order each name first appears
    - A repeated key overwrites the earlier value
    - A plain value and an operator value for the same name: the later one wins
"""

import re
from typing import Any, Iterable


_FILTER_KEY = re.compile(
    r"^(?P<root>[^\[\]]+)\[(?P<name>[^\[\]]+)\](?:\[(?P<operator>[^\[\]]+)\])?$"
)


def parse_filter_query(
    items: Iterable[tuple[str, str]], root: str = "filter",
) -> dict[str, Any]:
    """Collect filter[...] query items into the mapping FilterEngine consumes."""
    filters: dict[str, Any] = {}
    for key, value in items:
        parsed = _FILTER_KEY.match(key)
        if parsed is None or parsed["root"] != root:
            continue
        name, operator = parsed["name"], parsed["operator"]
        if operator is None:
            filters[name] = value
            continue
        by_operator = filters.get(name)
        if not isinstance(by_operator, dict):
            by_operator = {}
        by_operator[operator] = value
        filters[name] = by_operator
    return filters
