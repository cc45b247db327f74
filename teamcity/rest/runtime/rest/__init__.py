"""REST runtime abstractions."""

from .http_client import HTTPClient
from .messages import RawResponse, RequestDescriptor
from .retry import (
    RETRYABLE_STATUSES,
    RetryPolicy,
    execute_with_retry,
    execute_with_retry_blocking,
    is_retryable_status,
)
from .runner import ResponseAdapter, RestEndpointSpec, RestRunner, split_href
from .transport import RESTTransport

__all__ = [
    "HTTPClient",
    "RESTTransport",
    "RawResponse",
    "RequestDescriptor",
    "RetryPolicy",
    "RETRYABLE_STATUSES",
    "execute_with_retry",
    "execute_with_retry_blocking",
    "is_retryable_status",
    "RestRunner",
    "RestEndpointSpec",
    "ResponseAdapter",
    "split_href",
]
