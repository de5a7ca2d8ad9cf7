import pytest

from qrstyle.config import FALLBACK_CONTENT
from qrstyle.domain.colors import ColorModel
from qrstyle.domain.content import ContentField
from qrstyle.domain.logo import LogoModel
from qrstyle.domain.spec import BackgroundOptions, CornerDotOptions, CornerSquareOptions, DotOptions, RenderingConfiguration
from qrstyle.domain.styles import CornerDotShape, CornerSquareShape, DotShape, ErrorCorrection, StyleSelection
from qrstyle.domain.synthesizer import Snapshot, assess_configuration, synthesize


def _snap(content=None, colors=None, styles=None, logo=None):
    return Snapshot.capture(content or ContentField(), colors or ColorModel(), styles or StyleSelection(), logo or LogoModel())


def test_defaults():
    cfg = synthesize(_snap())
    assert cfg.content == "https://printscribe.ph"
    assert cfg.error_correction is ErrorCorrection.M
    assert cfg.dots.shape is DotShape.ROUNDED
    assert cfg.corner_square == CornerSquareOptions("#000000", CornerSquareShape.EXTRA_ROUNDED)
    assert cfg.corner_dot == CornerDotOptions("#000000", CornerDotShape.DOT)
    assert (cfg.dimensions.width, cfg.dimensions.height, cfg.dimensions.margin) == (400, 400, 10)
    assert cfg.logo is None

def test_idempotent():
    content, colors, styles, logo = ContentField("hello"), ColorModel(), StyleSelection(), LogoModel()
    colors.set_gradient_enabled(True)
    first = synthesize(Snapshot.capture(content, colors, styles, logo))
    second = synthesize(Snapshot.capture(content, colors, styles, logo))
    assert first == second
    assert first is not second

def test_empty_content_falls_back():
    content = ContentField()
    content.set_text("")
    assert synthesize(_snap(content=content)).content == FALLBACK_CONTENT

def test_flat_and_gradient_never_both_populated():
    colors = ColorModel()
    for step in (lambda: colors.set_gradient_enabled(True), lambda: colors.set_foreground("#0000FF"),
                 lambda: colors.set_gradient_kind("radial"), lambda: colors.set_gradient_enabled(False),
                 lambda: colors.set_gradient_second_color("#FF00FF")):
        step()
        d = synthesize(_snap(colors=colors)).to_dict()["dotsOptions"]
        assert (d["color"] is None) != (d["gradient"] is None)

def test_gradient_dict_shape():
    colors = ColorModel()
    colors.set_gradient_enabled(True)
    cfg = synthesize(_snap(colors=colors))
    assert cfg.flat_color is None
    grad = cfg.to_dict()["dotsOptions"]["gradient"]
    assert grad["type"] == "linear"
    assert grad["colorStops"] == [{"offset": 0, "color": "#000000"}, {"offset": 1, "color": "#FFD700"}]

def test_logo_only_present_with_image(logo_uri):
    logo = LogoModel()
    logo.set_margin(3)
    assert "image" not in synthesize(_snap(logo=logo)).to_dict()
    logo.set_logo(logo_uri)
    d = synthesize(_snap(logo=logo)).to_dict()
    assert d["image"] == logo_uri
    assert d["imageOptions"] == {"imageSize": 0.4, "margin": 3, "hideBackgroundDots": True}

def test_contrast_uses_first_gradient_stop():
    colors = ColorModel()
    colors.set_gradient_enabled(True)
    colors.set_gradient_second_color("#FFFFFF")
    assert assess_configuration(synthesize(_snap(colors=colors))).is_low_contrast is False
    colors.set_foreground("#EEEEEE")
    colors.set_gradient_second_color("#000000")
    assert assess_configuration(synthesize(_snap(colors=colors))).is_low_contrast is True

def test_configuration_rejects_unknown_foreground():
    with pytest.raises(TypeError):
        RenderingConfiguration(
            content="x", error_correction=ErrorCorrection.L, foreground="#000000",
            background=BackgroundOptions("#FFFFFF"), dots=DotOptions(DotShape.SQUARE),
            corner_square=CornerSquareOptions("#000000", CornerSquareShape.SQUARE),
            corner_dot=CornerDotOptions("#000000", CornerDotShape.SQUARE),
        )

def test_style_values_accept_wire_names():
    styles = StyleSelection().with_dot_shape("classy-rounded").with_error_correction("H")
    assert styles.dot_shape is DotShape.CLASSY_ROUNDED
    assert styles.error_correction is ErrorCorrection.H
    assert styles.corner_dot_shape is CornerDotShape.DOT

def test_error_correction_order():
    assert [e.rank for e in ErrorCorrection] == [0, 1, 2, 3]
