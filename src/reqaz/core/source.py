"""Request-to-content resolution.

Ties path resolution, content loading and include expansion together and
classifies every failure into a 404 or 500 result.
"""

import logging
from pathlib import Path

from reqaz.core.errors import (
    ContentNotFoundError,
    ContentReadError,
    ExpansionError,
    ImportNotFoundError,
)
from reqaz.core.includes import DEFAULT_MAX_INCLUDE_DEPTH, IncludeExpander
from reqaz.core.loader import ContentLoader
from reqaz.core.mime import mime_for_extension
from reqaz.core.paths import PathResolver, request_path_from_url
from reqaz.core.types import Invalid, SourceResult, Valid

logger = logging.getLogger(__name__)


class SourceResolver:
    """Resolves absolute URLs to content under a content root.

    HTML documents have their import directives expanded, which calls back
    into this resolver for every imported resource.
    """

    def __init__(
        self,
        root: Path,
        *,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
    ) -> None:
        """Initialize resolver.

        Args:
            root: Content root containing pages/ and static/
            max_include_depth: Maximum nesting of expanded documents
        """
        self._root = root
        self._paths = PathResolver(root)
        self._loader = ContentLoader(root)
        self._expander = IncludeExpander(self, max_depth=max_include_depth)

    @property
    def root(self) -> Path:
        """Content root directory."""
        return self._root

    def resolve(self, url: str, *, chain: tuple[str, ...] = ()) -> SourceResult:
        """Resolve a URL to content.

        Args:
            url: Absolute URL; only its path component is used
            chain: Request paths of documents currently being expanded
                   (empty for top-level requests)

        Returns:
            Valid with body and MIME type, or Invalid with 404/500
        """
        try:
            request_path = request_path_from_url(url)
        except ValueError:
            logger.debug("Malformed URL: %s", url)
            return Invalid(status=404)
        locator = self._paths.resolve(request_path)

        try:
            body = self._loader.load(locator)
        except ContentNotFoundError:
            logger.debug("Not found: /%s -> %s", request_path, locator)
            return Invalid(status=404)
        except ContentReadError as e:
            logger.warning("%s (%s)", e, e.__cause__)
            return Invalid(status=500)

        mime = mime_for_extension(locator.suffix)

        if locator.suffix.lower() == ".html":
            try:
                body = self._expander.expand(url, body, chain=(*chain, request_path))
            except ImportNotFoundError as e:
                logger.debug("%s (in /%s)", e, request_path)
                return Invalid(status=404)
            except ExpansionError as e:
                logger.warning("%s (in /%s)", e, request_path)
                return Invalid(status=500)

        return Valid(body=body, mime=mime)
