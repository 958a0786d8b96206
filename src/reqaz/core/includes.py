"""Server-side include expansion for HTML documents.

Documents pull in other resources with import directives:

    <head>
      <nib-import href="style.css"></nib-import>
    </head>

Each directive is resolved relative to the document path, which is treated
as a directory ("/about" + "style.css" is "/about/style.css"). Its content is
inlined into a new element, and the directive itself is removed. Only
stylesheets are supported; they become ``<style>`` elements in ``<head>``.
"""

import logging
from pathlib import PurePosixPath
from typing import Protocol
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup, ParserRejectedMarkup, Tag
from bs4.element import Stylesheet

from reqaz.core.errors import (
    DocumentParseError,
    ImportInternalError,
    ImportNotFoundError,
    IncludeCycleError,
    MissingHrefError,
    UnsupportedTargetError,
)
from reqaz.core.paths import request_path_from_url
from reqaz.core.types import Invalid, SourceResult, Valid

logger = logging.getLogger(__name__)

DIRECTIVE_TAG = "nib-import"

DEFAULT_MAX_INCLUDE_DEPTH = 16


class NestedResolver(Protocol):
    """Resolves imported URLs on behalf of the expander."""

    def resolve(self, url: str, *, chain: tuple[str, ...] = ()) -> SourceResult: ...


class IncludeExpander:
    """Expands import directives in HTML documents.

    Expansion is all-or-nothing: the first failing directive aborts the
    document and no partially expanded HTML is returned.
    """

    def __init__(
        self,
        resolver: NestedResolver,
        *,
        max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    ) -> None:
        """Initialize expander.

        Args:
            resolver: Resolver used for imported resources
            max_depth: Maximum nesting of documents being expanded at once
        """
        self._resolver = resolver
        self._max_depth = max_depth

    def expand(self, url: str, html: str, *, chain: tuple[str, ...] = ()) -> str:
        """Expand all import directives in a document.

        Args:
            url: Absolute URL of the document, used to resolve relative hrefs
            html: Raw document text
            chain: Request paths of documents currently being expanded,
                   outermost first, including this one

        Returns:
            Serialized document with all directives inlined

        Raises:
            MissingHrefError: If a directive has no href
            UnsupportedTargetError: If a directive targets a non-CSS resource
            ImportNotFoundError: If an imported resource resolves to 404
            ImportInternalError: If an imported resource resolves to 500
            IncludeCycleError: If imports form a cycle or nest too deeply
            DocumentParseError: If the document cannot be parsed
        """
        try:
            soup = BeautifulSoup(html, "html.parser")
        except ParserRejectedMarkup as e:
            raise DocumentParseError(url) from e

        # Snapshot before mutating the tree
        directives: list[Tag] = list(soup.find_all(DIRECTIVE_TAG))
        logger.debug("%d imports found in %s", len(directives), url)

        for directive in directives:
            href = directive.get("href")
            if not href or not isinstance(href, str):
                raise MissingHrefError()

            target = self._create_target(soup, href)
            try:
                import_url = urljoin(_base_url(url), href)
            except ValueError as e:
                raise UnsupportedTargetError(href) from e
            target.string = Stylesheet(self._fetch(import_url, chain))
            _head(soup).append(target)
            # Unclosed directives nest; the inner ones must stay intact
            directive.extract()

        return str(soup)

    def _create_target(self, soup: BeautifulSoup, href: str) -> Tag:
        """Create the element that will hold imported content.

        Args:
            soup: Document being expanded
            href: Directive href

        Returns:
            New, detached element

        Raises:
            UnsupportedTargetError: If href extension is not supported
        """
        try:
            ext = PurePosixPath(urlsplit(href).path).suffix.lower()
        except ValueError as e:
            raise UnsupportedTargetError(href) from e
        if ext == ".css":
            return soup.new_tag("style")
        raise UnsupportedTargetError(href)

    def _fetch(self, import_url: str, chain: tuple[str, ...]) -> str:
        import_path = request_path_from_url(import_url)
        if import_path in chain or len(chain) >= self._max_depth:
            raise IncludeCycleError(chain, import_path)

        result = self._resolver.resolve(import_url, chain=chain)
        match result:
            case Valid(body=body):
                return body
            case Invalid(status=404):
                raise ImportNotFoundError(import_url)
            case Invalid():
                raise ImportInternalError(import_url)


def _base_url(url: str) -> str:
    """Return the document URL with its path as a directory.

    Query and fragment are dropped.
    """
    parts = urlsplit(url)
    path = parts.path if parts.path.endswith("/") else parts.path + "/"
    return urlunsplit((parts.scheme, parts.netloc, path, "", ""))


def _head(soup: BeautifulSoup) -> Tag:
    """Return the document head, creating it when missing."""
    head = soup.head
    if head is not None:
        return head

    head = soup.new_tag("head")
    if soup.html is not None:
        soup.html.insert(0, head)
    else:
        soup.insert(0, head)
    return head
