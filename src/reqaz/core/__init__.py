"""Source resolution core: paths, loading, include expansion."""

from .errors import (
    ContentNotFoundError,
    ContentReadError,
    DocumentParseError,
    ExpansionError,
    ImportInternalError,
    ImportNotFoundError,
    IncludeCycleError,
    MissingHrefError,
    ReqazError,
    UnsupportedTargetError,
)
from .source import SourceResolver
from .types import Invalid, SourceResult, Valid

__all__ = [
    "ContentNotFoundError",
    "ContentReadError",
    "DocumentParseError",
    "ExpansionError",
    "ImportInternalError",
    "ImportNotFoundError",
    "IncludeCycleError",
    "Invalid",
    "MissingHrefError",
    "ReqazError",
    "SourceResolver",
    "SourceResult",
    "UnsupportedTargetError",
    "Valid",
]
