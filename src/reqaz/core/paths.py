"""Request path to filesystem locator resolution.

Content tree layout:
    <root>/
    ├── pages/
    │   ├── index.html          # "/"
    │   └── about/
    │       └── index.html      # "/about"
    └── static/
        └── style.css           # "/style.css"
"""

import posixpath
from pathlib import Path
from urllib.parse import unquote, urlsplit

from reqaz.core.types import URLPath

PAGES_DIR = "pages"
STATIC_DIR = "static"
INDEX_FILE = "index.html"


def normalize_request_path(path: str) -> str:
    """Normalize a request path so it cannot leave the content root.

    Dot segments are collapsed against a virtual "/" before the leading
    slash is dropped, so "../../etc/passwd" becomes "etc/passwd".

    Args:
        path: URL-decoded request path, with or without leading slash

    Returns:
        Relative path without leading or trailing slashes ("" for the root)
    """
    normalized = posixpath.normpath("/" + path.replace("\\", "/"))
    return normalized.lstrip("/")


def request_path_from_url(url: str) -> URLPath:
    """Extract the normalized, URL-decoded request path from a URL.

    Only the path component is used; scheme, host, query and fragment
    are ignored.

    Args:
        url: Absolute URL (e.g., "http://localhost:5000/about?x=1")

    Returns:
        Normalized relative path (e.g., "about")
    """
    return URLPath(normalize_request_path(unquote(urlsplit(url).path)))


class PathResolver:
    """Maps request paths to candidate files under a content root.

    Pages win over static files: "/about" resolves to
    pages/about/index.html when that file exists, otherwise to
    static/about. Existence of the final locator is not checked here.
    """

    def __init__(self, root: Path) -> None:
        """Initialize resolver.

        Args:
            root: Content root containing pages/ and static/
        """
        self._root = root

    @property
    def root(self) -> Path:
        """Content root directory."""
        return self._root

    def resolve(self, path: URLPath | str) -> Path:
        """Resolve request path to a locator.

        Args:
            path: URL-decoded request path (e.g., "about" or "css/site.css")

        Returns:
            Path under the content root (may not exist)
        """
        relative = normalize_request_path(path)
        pages_dir = self._root / PAGES_DIR

        if not relative:
            return pages_dir / INDEX_FILE

        index_path = pages_dir / relative / INDEX_FILE
        if _is_file(index_path):
            return index_path

        return self._root / STATIC_DIR / relative


def _is_file(path: Path) -> bool:
    """Check for a regular file, treating any OS error as absent."""
    try:
        return path.is_file()
    except OSError:
        return False
