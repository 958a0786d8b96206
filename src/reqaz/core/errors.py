"""Error taxonomy for source resolution.

Loader errors describe a single file read. Expansion errors describe a
failed ``nib-import`` directive. Both are classified into 404/500 by
``SourceResolver`` and never reach the HTTP layer.
"""

from pathlib import Path


class ReqazError(Exception):
    """Base class for all reqaz errors."""


class ContentError(ReqazError):
    """Content could not be loaded from a locator."""

    def __init__(self, locator: Path, message: str) -> None:
        super().__init__(f"{message}: {locator}")
        self.locator = locator


class ContentNotFoundError(ContentError):
    """No file exists at the locator."""

    def __init__(self, locator: Path) -> None:
        super().__init__(locator, "Content not found")


class ContentReadError(ContentError):
    """File exists but could not be read or decoded.

    The underlying platform error is chained as ``__cause__``.
    """

    def __init__(self, locator: Path) -> None:
        super().__init__(locator, "Content could not be read")


class ExpansionError(ReqazError):
    """An import directive could not be expanded."""


class MissingHrefError(ExpansionError):
    """Import directive has no href attribute."""

    def __init__(self) -> None:
        super().__init__("nib-import requires an href attribute")


class UnsupportedTargetError(ExpansionError):
    """Import directive points at a file type that cannot be inlined."""

    def __init__(self, href: str) -> None:
        super().__init__(f"Unsupported nib-import target: {href}")
        self.href = href


class ImportNotFoundError(ExpansionError):
    """Imported resource resolved to 404."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Imported resource not found: {url}")
        self.url = url


class ImportInternalError(ExpansionError):
    """Imported resource resolved to 500."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Imported resource failed to resolve: {url}")
        self.url = url


class IncludeCycleError(ExpansionError):
    """Imports form a cycle or nest deeper than the configured limit."""

    def __init__(self, chain: tuple[str, ...], url: str) -> None:
        path = " -> ".join((*chain, url))
        super().__init__(f"Include cycle or depth limit reached: {path}")
        self.chain = chain
        self.url = url


class DocumentParseError(ExpansionError):
    """HTML document could not be parsed."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Could not parse HTML document: {url}")
        self.url = url
