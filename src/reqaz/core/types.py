"""Core type definitions."""

from dataclasses import dataclass
from typing import Literal, NewType

# Request path as received in the URL (e.g., "/about", "/style.css")
# Distinct from filesystem Path to catch type mismatches
URLPath = NewType("URLPath", str)

InvalidStatus = Literal[404, 500]


@dataclass(frozen=True)
class Valid:
    """Successfully resolved source content."""

    body: str
    mime: str | None = None


@dataclass(frozen=True)
class Invalid:
    """Failed resolution, carrying the HTTP status to report."""

    status: InvalidStatus


SourceResult = Valid | Invalid
