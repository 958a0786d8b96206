"""reqaz - Requests from A to Z.

Serves a pages/static content tree and expands nib-import directives in
HTML documents at request time.
"""

from .core import Invalid, SourceResolver, SourceResult, Valid

__all__ = ["Invalid", "SourceResolver", "SourceResult", "Valid"]
