"""Vector to raster conversion of image assets."""

from __future__ import annotations

import logging
from pathlib import Path

from mdtex.core.exceptions import TransformerExecutionError


logger = logging.getLogger(__name__)

VECTOR_SUFFIX = ".svg"
RASTER_SUFFIX = ".png"


def _cairo_dependency_hint() -> str:
    return (
        "CairoSVG requires the system cairo library (package: libcairo2). "
        "Install it via your package manager to enable SVG conversion."
    )


def is_vector_image(path: Path | str) -> bool:
    return Path(path).suffix.lower() == VECTOR_SUFFIX


def raster_sibling(path: Path | str) -> Path:
    """Return the PNG path sitting next to a vector image."""
    return Path(path).with_suffix(RASTER_SUFFIX)


def rasterize_svg(source: Path | str, target: Path | str | None = None) -> Path:
    """Render ``source`` at its intrinsic size and write it as a PNG.

    The bitmap is written to ``target`` when given, otherwise next to the
    source with a ``.png`` suffix. Parent directories are created as needed.
    """
    source = Path(source)
    destination = Path(target) if target is not None else raster_sibling(source)

    try:
        payload = source.read_bytes()
    except OSError as exc:
        raise TransformerExecutionError(f"Unable to read SVG image '{source}': {exc}") from exc

    try:
        import cairosvg  # type: ignore[import]
    except ImportError as exc:  # pragma: no cover - optional dependency
        msg = "cairosvg is required to rasterize SVG assets. Install 'cairosvg'."
        raise TransformerExecutionError(msg) from exc
    except OSError as exc:  # pragma: no cover - missing native library
        hint = _cairo_dependency_hint()
        logger.warning(hint)
        raise TransformerExecutionError(f"Unable to load CairoSVG: {exc}. {hint}") from exc

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise TransformerExecutionError(
            f"Unable to create directory for '{destination}': {exc}"
        ) from exc

    try:
        cairosvg.svg2png(
            bytestring=payload,
            url=str(source.resolve()),
            write_to=str(destination),
        )
    except OSError as exc:
        raise TransformerExecutionError(f"Unable to write raster image '{destination}': {exc}") from exc
    except Exception as exc:
        raise TransformerExecutionError(f"Failed to render SVG with CairoSVG: {exc}") from exc

    logger.debug("Rasterized %s to %s", source, destination)
    return destination


__all__ = [
    "RASTER_SUFFIX",
    "VECTOR_SUFFIX",
    "is_vector_image",
    "raster_sibling",
    "rasterize_svg",
]
