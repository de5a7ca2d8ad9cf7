import pytest

from qrstyle.domain.colors import parse_hex
from qrstyle.domain.contrast import assess, brightness


def test_black_on_white_is_fine():
    assert assess("#000000", "#FFFFFF").is_low_contrast is False

def test_black_on_near_black_is_low():
    assert assess("#000000", "#111111").is_low_contrast is True

def test_gold_on_white_is_low():
    assert round(brightness("#FFD700")) == 202
    assert assess("#FFD700", "#FFFFFF").is_low_contrast is True

def test_threshold_is_exclusive():
    # 128 exactly is not low contrast
    assert assess("#808080", "#000000").is_low_contrast is False
    assert assess("#7F7F7F", "#000000").is_low_contrast is True

def test_malformed_color_is_indeterminate():
    result = assess("not-a-color", "#FFFFFF")
    assert result.indeterminate
    assert result.should_warn

def test_short_hex_and_lowercase():
    assert parse_hex("#fff") == (255, 255, 255)
    assert parse_hex("ffd700") == (255, 215, 0)

def test_parse_hex_rejects_garbage():
    with pytest.raises(ValueError):
        parse_hex("#12345")
