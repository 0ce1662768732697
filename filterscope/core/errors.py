"""Error Hierarchy — typed, categorized exceptions for all filter-resolution failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Every error names the resource it was raised for (ErrorContext.resource)
    - User-input errors are 400-level; configuration defects are 500-level
    - to_response() produces the REST envelope; transport mapping lives in api/

Design Decisions:
    - Single hierarchy with FilterScopeError base: one FastAPI handler catches all
    - ErrorContext as dataclass: filter name, operator and offending value travel
      with the error without coupling core to logging
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """How loudly an error is reported."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """Who has to fix it: the client (validation) or the operator (the rest)."""
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Where in the filter pipeline an error was raised."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    resource: str | None = None
    filter_name: str | None = None
    operator: str | None = None
    value: Any = None


class FilterScopeError(Exception):
    """Base exception for all filterscope errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """REST error envelope."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "resource": self.context.resource,
                    "filter": self.context.filter_name,
                    "operator": self.context.operator,
                    "value": _printable(self.context.value),
                },
            }
        }


def _printable(value: Any) -> Any:
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if isinstance(value, (list, tuple)):
        return [_printable(v) for v in value]
    return str(value)


# ─── Request Errors (400-level) ─────────────────────────────────

class UnknownFilterError(FilterScopeError):
    """Filter name/alias is not allowlisted (or its guard rejected it)."""
    def __init__(self, resource: str, filter_name: str):
        super().__init__(
            f"Filter '{filter_name}' is not allowed on resource '{resource}'",
            "UNKNOWN_FILTER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            ErrorContext(resource=resource, filter_name=filter_name), 400,
        )
        self.filter_name = filter_name


class RequiredFilterMissingError(FilterScopeError):
    """One or more required filters were not supplied."""
    def __init__(self, resource: str, missing: list[str]):
        super().__init__(
            f"The required filter(s) {', '.join(missing)} "
            f"on resource '{resource}' were not provided",
            "REQUIRED_FILTER_MISSING", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ErrorContext(resource=resource, value=missing), 400,
        )
        self.missing = missing


class DependentFilterMissingError(FilterScopeError):
    """Supplied filters depend on filters that were not supplied."""
    def __init__(self, resource: str, filters: list[str]):
        super().__init__(
            f"The filter(s) {', '.join(filters)} on resource '{resource}' "
            f"require a dependent filter that was not provided",
            "DEPENDENT_FILTER_MISSING", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ErrorContext(resource=resource, value=filters), 400,
        )
        self.filters = filters


class SingularViolationError(FilterScopeError):
    """A list was supplied to a filter that only accepts one value."""
    def __init__(self, resource: str, filter_name: str, value: Any):
        super().__init__(
            f"Filter '{filter_name}' on resource '{resource}' "
            f"accepts a single value, got {list(value)!r}",
            "SINGULAR_FILTER", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            ErrorContext(resource=resource, filter_name=filter_name, value=value),
            400,
        )
        self.filter_name = filter_name
        self.value = value


class InvalidFilterValueError(FilterScopeError):
    """Value rejected by the filter's allow-list or deny-list."""
    def __init__(self, resource: str, filter_name: str, value: Any):
        super().__init__(
            f"Filter '{filter_name}' on resource '{resource}' "
            f"does not accept the value {value!r}",
            "INVALID_FILTER_VALUE", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            ErrorContext(resource=resource, filter_name=filter_name, value=value),
            400,
        )
        self.filter_name = filter_name
        self.value = value


class InvalidLiteralError(FilterScopeError):
    """Bracketed JSON literal could not be parsed."""
    def __init__(self, resource: str, filter_name: str, literal: str):
        super().__init__(
            f"Filter '{filter_name}' on resource '{resource}' "
            f"received malformed JSON literal {literal!r}",
            "INVALID_LITERAL", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            ErrorContext(resource=resource, filter_name=filter_name, value=literal),
            400,
        )
        self.filter_name = filter_name
        self.literal = literal


class CoercionFailedError(FilterScopeError):
    """Type system refused to cast a literal to the filter's declared type."""
    def __init__(
        self, resource: str, attribute: str, type_name: str, literal: Any,
    ):
        super().__init__(
            f"Filter '{attribute}' on resource '{resource}' could not cast "
            f"{literal!r} to {type_name}",
            "COERCION_FAILED", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR,
            ErrorContext(resource=resource, filter_name=attribute, value=literal),
            400,
        )
        self.attribute = attribute
        self.type_name = type_name
        self.literal = literal


class ResourceNotFoundError(FilterScopeError):
    """Requested resource is not registered."""
    def __init__(self, resource: str):
        super().__init__(
            f"Resource '{resource}' not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ErrorContext(resource=resource), 404,
        )


# ─── Configuration Defects (500-level) ──────────────────────────

class AdapterNotImplementedError(FilterScopeError):
    """Adapter has no operation for this canonical type + operator."""
    def __init__(
        self, resource: str, adapter: str, attribute: str, operation: str,
    ):
        super().__init__(
            f"Adapter '{adapter}' does not implement '{operation}' "
            f"(filter '{attribute}' on resource '{resource}')",
            "ADAPTER_NOT_IMPLEMENTED", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL,
            ErrorContext(resource=resource, filter_name=attribute), 500,
        )
        self.adapter = adapter
        self.attribute = attribute
        self.operation = operation


class UnknownFilterTypeError(FilterScopeError):
    """Declared filter type is not registered with the type system."""
    def __init__(self, type_name: str):
        super().__init__(
            f"Filter type '{type_name}' is not registered",
            "UNKNOWN_FILTER_TYPE", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, None, 500,
        )
        self.type_name = type_name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(FilterScopeError):
    """The backend could not run the filtered query."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
