"""Link handling utilities."""

from __future__ import annotations

from mdtex.core.context import RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.rules import renders

from ..latex.utils import escape_url
from ._helpers import is_valid_url


def reference_label(context: RenderContext, fragment: str) -> str:
    """Return the ``\\hyperref`` label for a document-relative link.

    The resolver's title wins; without a match the fragment itself is used with
    its ``#`` characters removed.
    """
    resolver = context.resolver
    title = resolver.resolve(fragment) if resolver is not None else None
    if title:
        context.emitter.event("reference_resolved", {"fragment": fragment, "title": title})
        return title
    context.emitter.event("reference_missing", {"fragment": fragment})
    return fragment.replace("#", "")


@renders(EventKind.LINK_START, name="link_start")
def render_link_start(event: ParseEvent, context: RenderContext) -> None:
    """Open an external hyperlink or a cross-document reference."""
    url = event.url or ""
    out = context.out
    if is_valid_url(url):
        out.push_str(f"\\href{{{escape_url(url)}}}{{")
        return
    out.push_str(f"\\hyperref[{reference_label(context, url)}]{{")


@renders(EventKind.LINK_END, name="link_end")
def render_link_end(_event: ParseEvent, context: RenderContext) -> None:
    context.out.push("}")


__all__ = ["reference_label"]
