import pytest

from errors import ValidationError
from utils import get_color, parse_int_sequence, parse_positive


def test_parse_int_sequence():
    assert parse_int_sequence("98, 183,37 ,, 14") == [98, 183, 37, 14]
    assert parse_int_sequence("") == []


def test_parse_int_sequence_rejects_garbage():
    with pytest.raises(ValidationError, match="comma-separated"):
        parse_int_sequence("1, two, 3", "page sequence")


def test_parse_positive():
    assert parse_positive("12", "block size") == 12
    with pytest.raises(ValidationError):
        parse_positive(0, "block size")
    with pytest.raises(ValidationError):
        parse_positive("abc", "block size")


def test_get_color_is_stable():
    assert get_color(3) == get_color(3)
    assert get_color(None) != get_color(1)
