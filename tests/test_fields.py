import pytest

from tinyrt.color import Color
from tinyrt.fields import in_unit_range, normalize_direction, parse_color, parse_vector
from tinyrt.lexing import ParseError
from tinyrt.linalg import Vec


def test_parse_color_full_scale():
    assert parse_color("255,0,255") == Color(1.0, 0.0, 1.0, 0.0)


def test_parse_color_with_alpha():
    color = parse_color("0,0,0,255")
    assert color.a == pytest.approx(1.0)
    assert (color.r, color.g, color.b) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize("r,g,b", [(0, 0, 0), (255, 255, 255), (10, 200, 37)])
def test_parse_color_round_trip_argb(r, g, b):
    color = parse_color(f"{r},{g},{b}")
    packed = color.to_argb()
    channels = ((packed >> 16) & 0xFF, (packed >> 8) & 0xFF, packed & 0xFF)
    assert all(abs(got - want) <= 1 for got, want in zip(channels, (r, g, b)))


@pytest.mark.parametrize(
    "token", ["256,0,0", "-1,0,0", "1,2", "1,2,3,4,5", "0,0,0,300", ""]
)
def test_parse_color_rejects(token):
    with pytest.raises(ParseError):
        parse_color(token)


def test_parse_color_ignores_empty_pieces():
    assert parse_color("255,,0,0") == parse_color("255,0,0")


def test_parse_vector_point_and_direction():
    assert parse_vector("1,2,3", "p") == Vec.point(1, 2, 3)
    assert parse_vector("-1.5,0,2.25", "v") == Vec.direction(-1.5, 0, 2.25)


def test_parse_vector_extra_components_ignored():
    assert parse_vector("1,2,3,4", "p") == parse_vector("1,2,3", "p")


def test_parse_vector_too_short():
    with pytest.raises(ParseError):
        parse_vector("1,2", "p")


def test_parse_vector_bad_key():
    with pytest.raises(ValueError):
        parse_vector("1,2,3", "q")


def test_normalize_direction_unit_and_parallel():
    v = Vec.direction(0.3, -0.4, 0.5)
    n = normalize_direction(v)
    assert n.length() == pytest.approx(1.0)
    assert n.cross(v).length() == pytest.approx(0.0, abs=1e-12)
    assert n.dot(v) > 0
    assert n.w == 0.0


def test_normalize_direction_zero():
    with pytest.raises(ParseError):
        normalize_direction(Vec.direction(0, 0, 0))


@pytest.mark.parametrize(
    "v,expected",
    [
        (Vec.direction(1, -1, 0), True),
        (Vec.direction(0.5, 0.5, 0.5), True),
        (Vec.direction(1.01, 0, 0), False),
        (Vec.direction(0, -2, 0), False),
    ],
)
def test_in_unit_range(v, expected):
    assert in_unit_range(v) is expected