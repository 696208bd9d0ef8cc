"""CLI command implementations exposed via `mdtex.ui.cli`."""

from __future__ import annotations

from .convert import convert


__all__ = ["convert"]
