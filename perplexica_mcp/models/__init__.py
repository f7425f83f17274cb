"""Data models for requests, backend payloads and parsed responses."""

from .query import (
    DEFAULT_FOCUS_MODE,
    BackendSearchPayload,
    ModelSelection,
    ResolvedIdentifiers,
    SearchRequest,
)
from .results import (
    Model,
    Provider,
    ProvidersResult,
    SearchResult,
    Source,
    SourceMetadata,
)

__all__ = [
    "DEFAULT_FOCUS_MODE",
    "BackendSearchPayload",
    "Model",
    "ModelSelection",
    "Provider",
    "ProvidersResult",
    "ResolvedIdentifiers",
    "SearchRequest",
    "SearchResult",
    "Source",
    "SourceMetadata",
]
