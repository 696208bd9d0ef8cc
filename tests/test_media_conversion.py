from pathlib import Path

import pytest

from mdtex.adapters.latex.renderer import LaTeXRenderer
from mdtex.adapters.markdown import parse_markdown
from mdtex.adapters.transformers import is_vector_image, raster_sibling, rasterize_svg
from mdtex.core.conversion import Converter
from mdtex.core.config import RenderConfig
from mdtex.core.context import DocumentState
from mdtex.core.diagnostics import NullEmitter
from mdtex.core.exceptions import TransformerExecutionError


SVG_SOURCE = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="40" height="20">'
    '<rect width="40" height="20" fill="#c00"/>'
    "</svg>"
)


class RecordingRasterizer:
    def __init__(self) -> None:
        self.calls: list[Path] = []

    def __call__(self, source: Path) -> Path:
        self.calls.append(source)
        return source.with_suffix(".png")


def test_bitmap_images_are_embedded_as_is() -> None:
    rasterizer = RecordingRasterizer()
    renderer = LaTeXRenderer(rasterizer=rasterizer, emitter=NullEmitter())

    latex = renderer.render(parse_markdown("![A cat](img/cat.jpg)\n"))

    assert (
        "\\begin{figure}\n"
        "\\centering\n"
        "\\includegraphics[width=\\textwidth]{img/cat.jpg}\n"
        "\\caption{A cat}\n"
        "\\end{figure}\n"
    ) in latex
    assert rasterizer.calls == []


def test_image_title_becomes_the_caption() -> None:
    renderer = LaTeXRenderer(rasterizer=None, emitter=NullEmitter())

    latex = renderer.render(parse_markdown('![alt](cat.jpg "Cats & dogs")\n'))

    assert "\\caption{Cats \\& dogs}" in latex


def test_vector_images_are_rasterized_under_the_assets_root(tmp_path: Path) -> None:
    rasterizer = RecordingRasterizer()
    renderer = LaTeXRenderer(
        RenderConfig(assets_root=tmp_path), rasterizer=rasterizer, emitter=NullEmitter()
    )
    state = DocumentState()

    latex = renderer.render(parse_markdown("![Flow](diagram.svg)\n"), state=state)

    source = tmp_path / "diagram.svg"
    assert rasterizer.calls == [source]
    assert state.rasterized == [(source, tmp_path / "diagram.png")]
    assert f"\\includegraphics[width=\\textwidth]{{{(tmp_path / 'diagram.png').as_posix()}}}" in latex


def test_remote_images_are_not_rasterized() -> None:
    rasterizer = RecordingRasterizer()
    renderer = LaTeXRenderer(rasterizer=rasterizer, emitter=NullEmitter())

    latex = renderer.render(parse_markdown("![Logo](https://example.com/logo.svg)\n"))

    assert "{https://example.com/logo.svg}" in latex
    assert rasterizer.calls == []


def test_vector_detection() -> None:
    assert is_vector_image("a/b.SVG")
    assert not is_vector_image("a/b.png")
    assert raster_sibling(Path("a/b.svg")) == Path("a/b.png")


def test_rasterize_missing_source(tmp_path: Path) -> None:
    with pytest.raises(TransformerExecutionError, match="Unable to read SVG"):
        rasterize_svg(tmp_path / "absent.svg")


def test_rasterize_svg_writes_png_next_to_source(tmp_path: Path) -> None:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as exc:
        pytest.skip(f"cairosvg unavailable: {exc}")
    image_module = pytest.importorskip("PIL.Image")

    source = tmp_path / "shape.svg"
    source.write_text(SVG_SOURCE, encoding="utf-8")

    target = rasterize_svg(source)

    assert target == tmp_path / "shape.png"
    with image_module.open(target) as image:
        assert image.size == (40, 20)


def test_rasterize_svg_to_explicit_target(tmp_path: Path) -> None:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as exc:
        pytest.skip(f"cairosvg unavailable: {exc}")

    source = tmp_path / "shape.svg"
    source.write_text(SVG_SOURCE, encoding="utf-8")

    target = rasterize_svg(source, tmp_path / "build" / "out.png")

    assert target.read_bytes().startswith(b"\x89PNG")


def test_failing_rasterizer_aborts_rendering(tmp_path: Path) -> None:
    def broken(source: Path) -> Path:
        raise TransformerExecutionError(f"cannot convert {source.name}")

    renderer = LaTeXRenderer(
        RenderConfig(assets_root=tmp_path), rasterizer=broken, emitter=NullEmitter()
    )

    with pytest.raises(TransformerExecutionError, match="cannot convert diagram.svg"):
        renderer.render(parse_markdown("![Flow](diagram.svg)\n"))


def test_missing_svg_under_assets_root_fails_conversion(tmp_path: Path) -> None:
    with pytest.raises(TransformerExecutionError, match="Unable to read SVG"):
        Converter("![Flow](diagram.svg)\n").assets(tmp_path).run()


def test_conversion_writes_png_next_to_svg(tmp_path: Path) -> None:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError) as exc:
        pytest.skip(f"cairosvg unavailable: {exc}")
    (tmp_path / "diagram.svg").write_text(SVG_SOURCE, encoding="utf-8")

    latex = Converter("![Flow](diagram.svg)\n").assets(tmp_path).run()

    png = tmp_path / "diagram.png"
    assert png.is_file()
    assert f"\\includegraphics[width=\\textwidth]{{{png.as_posix()}}}" in latex
    assert "diagram.svg" not in latex
