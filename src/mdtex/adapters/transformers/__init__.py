"""Image conversion helpers used while rendering."""

from __future__ import annotations

from .rasterize import (
    RASTER_SUFFIX,
    VECTOR_SUFFIX,
    is_vector_image,
    raster_sibling,
    rasterize_svg,
)


__all__ = [
    "RASTER_SUFFIX",
    "VECTOR_SUFFIX",
    "is_vector_image",
    "raster_sibling",
    "rasterize_svg",
]
