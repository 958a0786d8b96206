"""Content loading with failure classification."""

import logging
from pathlib import Path

from reqaz.core.errors import ContentNotFoundError, ContentReadError

logger = logging.getLogger(__name__)


class ContentLoader:
    """Reads text content from locators under a content root.

    Failures are split into "not found" (no file at the locator) and
    "read error" (anything else: permissions, encoding, device errors).
    """

    def __init__(self, root: Path, *, encoding: str = "utf-8") -> None:
        """Initialize loader.

        Args:
            root: Content root; locators outside it are treated as missing
            encoding: Text encoding of content files
        """
        self._root = root
        self._encoding = encoding

    def load(self, locator: Path) -> str:
        """Read file text at locator.

        Args:
            locator: Path produced by PathResolver

        Returns:
            Decoded file contents

        Raises:
            ContentNotFoundError: If no file exists at locator
            ContentReadError: If the file exists but cannot be read or decoded
        """
        if not locator.is_relative_to(self._root):
            raise ContentNotFoundError(locator)

        try:
            return locator.read_text(encoding=self._encoding)
        except (FileNotFoundError, IsADirectoryError, NotADirectoryError) as e:
            raise ContentNotFoundError(locator) from e
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.debug("Failed to read %s: %s", locator, e)
            raise ContentReadError(locator) from e
