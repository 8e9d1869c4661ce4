"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Upstream repository access: typed fetch outcomes and the HTTP client.
"""

from .classify import classify_fetch_error, is_transient
from .client import UpstreamClient, declared_length
from .types import (
    FetchOutcome,
    FetchRejected,
    FetchSuccess,
    UpstreamFailed,
    UpstreamResponse,
    UpstreamTimeouts,
)

__all__ = [
    "UpstreamClient",
    "UpstreamResponse",
    "UpstreamTimeouts",
    "FetchOutcome",
    "FetchSuccess",
    "UpstreamFailed",
    "FetchRejected",
    "classify_fetch_error",
    "is_transient",
    "declared_length",
]
