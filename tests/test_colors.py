import pytest

from qrstyle.domain.colors import ColorMode, ColorModel, FlatColor, GradientColor, GradientStop
from qrstyle.domain.styles import GradientKind


def test_starts_flat():
    cm = ColorModel()
    assert cm.mode is ColorMode.FLAT
    assert cm.foreground_spec() == FlatColor("#000000")

def test_enable_gradient_uses_foreground_as_first_stop():
    cm = ColorModel()
    cm.set_foreground("#123456")
    cm.set_gradient_enabled(True)
    spec = cm.foreground_spec()
    assert isinstance(spec, GradientColor)
    assert spec.stops[0].color == "#123456"
    assert spec.stops[1].color == "#FFD700"
    assert spec.kind is GradientKind.LINEAR

def test_foreground_change_in_gradient_moves_stop_zero():
    cm = ColorModel()
    cm.set_gradient_enabled(True)
    cm.set_foreground("#FF0000")
    assert cm.foreground_spec().stops[0].color == "#FF0000"

def test_gradient_round_trip_restores_flat_color():
    cm = ColorModel()
    cm.set_foreground("#336699")
    cm.set_gradient_enabled(True)
    cm.set_gradient_second_color("#00FF00")
    cm.set_gradient_enabled(False)
    assert cm.foreground_spec() == FlatColor("#336699")

def test_disabling_discards_second_stop_and_kind():
    cm = ColorModel()
    cm.set_gradient_enabled(True)
    cm.set_gradient_kind("radial")
    cm.set_gradient_second_color("#00FF00")
    cm.set_gradient_enabled(False)
    cm.set_gradient_enabled(True)
    spec = cm.foreground_spec()
    assert spec.kind is GradientKind.LINEAR
    assert spec.stops[1].color == "#FFD700"

def test_gradient_setters_are_noops_when_flat():
    cm = ColorModel()
    cm.set_gradient_kind(GradientKind.RADIAL)
    cm.set_gradient_second_color("#ABCDEF")
    assert cm.gradient_kind is GradientKind.LINEAR
    assert cm.second_color == "#FFD700"
    assert cm.foreground_spec() == FlatColor("#000000")

def test_corners_track_foreground_until_overridden():
    cm = ColorModel()
    cm.set_foreground("#222222")
    assert cm.corner_color() == "#222222"
    cm.set_corner_override("#FFD700")
    assert cm.corner_color() == "#FFD700"
    cm.set_foreground("#333333")
    assert cm.corner_color() == "#333333"

def test_background_is_independent():
    cm = ColorModel()
    cm.set_background("#EEEEEE")
    assert cm.foreground == "#000000"

def test_gradient_requires_two_stops():
    with pytest.raises(ValueError):
        GradientColor(kind=GradientKind.LINEAR, stops=(GradientStop(0, "#000000"),))

def test_normalize_hex_accepts_user_spellings():
    from qrstyle.domain.colors import normalize_hex

    assert normalize_hex("ffd700") == "#FFD700"
    assert normalize_hex(" #abc ") == "#AABBCC"

def test_normalize_hex_rejects_garbage():
    from qrstyle.domain.colors import normalize_hex

    assert normalize_hex("#GGG") is None
    assert normalize_hex("#ZZZZZZ") is None
    assert normalize_hex("") is None
