"""Handlers responsible for image assets."""

from __future__ import annotations

from mdtex.core.context import RenderContext
from mdtex.core.events import EventKind, ParseEvent
from mdtex.core.rules import renders

from ..transformers import is_vector_image
from ._helpers import is_valid_url, resolve_asset_path


def include_path(context: RenderContext, src: str) -> str:
    """Return the path to hand to ``\\includegraphics`` for ``src``.

    Local paths are resolved against the assets root. Vector images are
    rasterized first and the bitmap is included in their place.
    """
    if is_valid_url(src):
        return src

    resolved = resolve_asset_path(context, src)
    rasterizer = context.rasterizer
    if rasterizer is None or not is_vector_image(resolved):
        return resolved.as_posix()

    target = rasterizer(resolved)
    context.state.rasterized.append((resolved, target))
    context.emitter.event(
        "image_rasterized", {"source": resolved.as_posix(), "target": target.as_posix()}
    )
    return target.as_posix()


@renders(EventKind.IMAGE, name="image")
def render_image(event: ParseEvent, context: RenderContext) -> None:
    """Render an image as a centered full-width figure with its caption."""
    path = include_path(context, event.path or "")
    figure = context.formatter.figure(path=path, caption=event.title or event.text or "")
    context.out.push_str(figure).new_line()


__all__ = ["include_path"]
