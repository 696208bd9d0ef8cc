"""Resolution of relative link targets to document titles."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import logging
import os
from pathlib import Path
from typing import Protocol, runtime_checkable

from mdtex.core.exceptions import AssetMissingError


logger = logging.getLogger(__name__)


@runtime_checkable
class ReferenceResolver(Protocol):
    """Map a local link target to the title of the document it points at."""

    def resolve(self, fragment: str) -> str | None: ...


def strip_parent_segments(fragment: str) -> str:
    """Drop every ``../`` segment from a link target."""
    return fragment.replace("../", "")


def read_title(path: Path) -> str:
    """Return the first line of ``path`` without leading hashes or whitespace."""
    try:
        with path.open(encoding="utf-8") as handle:
            first_line = handle.readline()
    except (OSError, UnicodeDecodeError) as exc:
        raise AssetMissingError(f"Unable to read title from '{path}'") from exc
    return first_line.lstrip("#").strip()


class DirectoryReferenceResolver:
    """Search a directory tree for the file a link points at.

    Files are visited in the order :func:`os.walk` reports them, which depends on
    the filesystem; the first file whose path ends with the target wins.
    """

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def iter_files(self) -> Iterator[Path]:
        for directory, _dirnames, filenames in os.walk(self.root):
            for filename in filenames:
                yield Path(directory) / filename

    def find(self, fragment: str) -> Path | None:
        """Return the first file whose path ends with ``fragment``."""
        target = strip_parent_segments(fragment)
        if not target:
            return None
        for candidate in self.iter_files():
            if candidate.as_posix().endswith(target):
                return candidate
        return None

    def resolve(self, fragment: str) -> str | None:
        match = self.find(fragment)
        if match is None:
            return None
        logger.debug("Link '%s' matches %s", fragment, match)
        return read_title(match)


class MappingReferenceResolver:
    """In-memory index of titles keyed by document path."""

    def __init__(self, titles: Mapping[str, str]) -> None:
        self.titles = dict(titles)

    def resolve(self, fragment: str) -> str | None:
        target = strip_parent_segments(fragment)
        if not target:
            return None
        for path, title in self.titles.items():
            if path.endswith(target):
                return title
        return None


__all__ = [
    "DirectoryReferenceResolver",
    "MappingReferenceResolver",
    "ReferenceResolver",
    "read_title",
    "strip_parent_segments",
]
