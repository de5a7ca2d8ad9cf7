import io

import pytest
from PIL import Image

from qrstyle.domain.colors import ColorModel
from qrstyle.domain.content import ContentField
from qrstyle.domain.logo import LogoModel
from qrstyle.domain.styles import StyleSelection
from qrstyle.domain.synthesizer import Snapshot, synthesize
from qrstyle.errors import ExportError, RenderError
from qrstyle.services.renderer import Layout, QRCodeRenderer, build_matrix, render_image, render_svg
from qrstyle.session import DesignSession


def _config(content="hello", colors=None, styles=None, logo=None):
    return synthesize(Snapshot.capture(ContentField(content), colors or ColorModel(),
                                       styles or StyleSelection(), logo or LogoModel()))


def test_preview_matches_dimensions():
    img = render_image(_config())
    assert img.size == (400, 400)
    assert img.getpixel((0, 0)) == (255, 255, 255)

def test_corner_color_painted_on_finder():
    colors = ColorModel()
    colors.set_corner_override("#FFD700")
    cfg = _config(colors=colors, styles=StyleSelection().with_corner_square_shape("square"))
    lay = Layout.fit(cfg, len(build_matrix(cfg)))
    img = render_image(cfg)
    assert img.getpixel((lay.left + 1, lay.top + 1)) == (255, 215, 0)
    # ring interior is background
    assert img.getpixel((lay.left + lay.box + 1, lay.top + lay.box + 1)) == (255, 255, 255)

def test_logo_is_composited_in_center(logo_uri):
    logo = LogoModel()
    logo.set_logo(logo_uri)
    img = render_image(_config(logo=logo))
    assert img.getpixel((200, 200)) == (200, 30, 30)

def test_gradient_preview_renders():
    colors = ColorModel()
    colors.set_gradient_enabled(True)
    colors.set_gradient_kind("radial")
    assert render_image(_config(colors=colors)).size == (400, 400)

def test_png_export():
    renderer = QRCodeRenderer()
    session = DesignSession(renderer=renderer)
    artifact = session.export("png")
    assert artifact.filename == "printscribe-qr.png"
    assert artifact.mime == "image/png"
    with Image.open(io.BytesIO(artifact.data)) as img:
        assert img.size == (400, 400)

def test_svg_export_gradient_and_logo(logo_uri):
    renderer = QRCodeRenderer()
    session = DesignSession(renderer=renderer)
    session.set_gradient_enabled(True)
    session.set_logo(logo_uri)
    artifact = session.export("SVG")
    assert artifact.filename == "printscribe-qr.svg"
    assert artifact.data.startswith(b"<?xml")
    assert b"<svg" in artifact.data[:200]
    assert b"linearGradient" in artifact.data
    assert logo_uri.encode() in artifact.data

def test_flat_svg_has_no_gradient():
    data = render_svg(_config())
    assert b"Gradient" not in data
    assert b'fill="#000000"' in data

def test_unknown_format_is_export_error():
    session = DesignSession(renderer=QRCodeRenderer())
    with pytest.raises(ExportError):
        session.export("gif")

def test_update_refreshes_preview():
    shown = []
    renderer = QRCodeRenderer(on_render=shown.append)
    session = DesignSession(renderer=renderer)
    session.set_content("another payload")
    assert len(shown) == 2
    assert session.handle.renders == 2
    assert session.handle.config.content == "another payload"

def test_overflowing_content_is_render_error():
    styles = StyleSelection().with_error_correction("H")
    with pytest.raises(RenderError):
        build_matrix(_config(content="x" * 5000, styles=styles))

def test_every_dot_shape_renders():
    for shape in ("square", "dots", "rounded", "extra-rounded", "classy", "classy-rounded"):
        cfg = _config(styles=StyleSelection().with_dot_shape(shape).with_corner_dot_shape("square"))
        assert render_image(cfg).size == (400, 400)
        assert render_svg(cfg).endswith(b"</svg>")

def test_bad_color_keeps_last_exportable_configuration():
    session = DesignSession(renderer=QRCodeRenderer())
    session.set_background("#FAFAFA")
    session.set_background("#GGG")
    assert session.handle.config.background.color == "#FAFAFA"
    artifact = session.export("png")
    with Image.open(io.BytesIO(artifact.data)) as img:
        assert img.convert("RGB").getpixel((0, 0)) == (250, 250, 250)

def test_overflowing_content_keeps_last_exportable_configuration():
    session = DesignSession(renderer=QRCodeRenderer())
    session.set_error_correction("H")
    session.set_content("short payload")
    session.set_content("x" * 5000)
    assert session.handle.config.content == "short payload"
    assert session.export("svg").data.startswith(b"<?xml")
    assert session.export("png").data.startswith(b"\x89PNG")
