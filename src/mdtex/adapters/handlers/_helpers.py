"""Internal helpers shared across handler modules."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlparse

from mdtex.core.context import ContextKind, RenderContext


_NETLOC_FREE_SCHEMES = frozenset({"mailto", "tel"})


def is_valid_url(url: str) -> bool:
    """Check whether a URL string carries an absolute scheme."""
    try:
        result = urlparse(url)
    except ValueError:
        return False
    scheme = result.scheme.lower()
    if scheme in _NETLOC_FREE_SCHEMES:
        return bool(result.path)
    return bool(scheme and result.netloc)


def resolve_asset_path(context: RenderContext, path: str | Path) -> Path:
    """Resolve an asset path against the configured assets root."""
    candidate = Path(path)
    if candidate.is_absolute():
        return candidate
    root = context.config.assets_root
    return (Path(root) / candidate) if root is not None else candidate


def record_heading_text(context: RenderContext, text: str) -> None:
    """Accumulate heading text for the labels emitted when the heading closes.

    Footnotes inlined in a heading do not contribute to its labels.
    """
    stack = context.stack
    if ContextKind.HEADER in stack and ContextKind.FOOTNOTE not in stack:
        context.state.header_value += text
