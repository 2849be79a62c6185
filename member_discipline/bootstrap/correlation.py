"""Bootstrap wiring for request correlation ids."""

from member_discipline.infrastructure.observability.correlation import (
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
)


def bind_request_correlation(header_value: str | None) -> str:
    """Adopt the caller's correlation id, or mint one, for this request.

    Args:
        header_value: Incoming X-Correlation-ID value, if any.

    Returns:
        The correlation id now set in the request context.
    """
    correlation_id = (header_value or "").strip() or generate_correlation_id()
    set_correlation_id(correlation_id)
    return correlation_id


__all__ = [
    "bind_request_correlation",
    "get_correlation_id",
]
