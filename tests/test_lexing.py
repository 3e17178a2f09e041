import pytest

from tinyrt.lexing import (
    ParseError,
    check_duplicates,
    check_param_count,
    count_objects,
    count_tokens,
    parse_float,
    read_scene_file,
    split_tokens,
)


@pytest.mark.parametrize(
    "text,value",
    [
        ("1.5", 1.5),
        ("-0.25", -0.25),
        ("  +3", 3.0),
        ("--2", 2.0),
        ("7.", 7.0),
        ("12", 12.0),
        ("-+4.5", -4.5),
    ],
)
def test_parse_float(text, value):
    assert parse_float(text) == pytest.approx(value)


@pytest.mark.parametrize("text", ["1.5x", "1.2.3", "0.-1"])
def test_parse_float_bad_fraction(text):
    with pytest.raises(ParseError):
        parse_float(text)


def test_split_tokens_matches_count():
    line = "sp  0,0,0 1.5   255,0,0"
    tokens = split_tokens(line, " ")
    assert tokens == ["sp", "0,0,0", "1.5", "255,0,0"]
    assert len(tokens) == count_tokens(line)


def test_count_tokens_tabs_and_spaces_agree():
    assert count_tokens("A\t0.2 255,255,255") == count_tokens("A 0.2 255,255,255")
    assert count_tokens("   ") == count_tokens("")


def test_split_tokens_tab_separator_rejected():
    with pytest.raises(ParseError):
        split_tokens("A\t0.2 255,255,255", " ")


@pytest.mark.parametrize(
    "tokens,key",
    [
        (["A", "0.2", "255,255,255"], "a"),
        (["C", "0,0,0", "0,0,1", "70"], "c"),
        (["L", "0,0,0", "0.5", "255,255,255"], "l"),
        (["sp", "0,0,0", "2", "255,0,0"], "s"),
        (["sp", "0,0,0", "2", "255,0,0", "1"], "s"),
        (["pl", "0,0,0", "0,1,0", "255,0,0"], "p"),
        (["cy", "0,0,0", "0,1,0", "2", "3", "255,0,0"], "y"),
        (["cy", "0,0,0", "0,1,0", "2", "3", "255,0,0", "2"], "y"),
    ],
)
def test_check_param_count_accepts(tokens, key):
    assert check_param_count(tokens, key) == tokens


@pytest.mark.parametrize(
    "tokens,key",
    [
        (["A", "0.2"], "a"),
        (["A", "0.2", "255,255,255", "x"], "a"),
        (["C", "0,0,0", "0,0,1"], "c"),
        (["L", "0,0,0", "0.5", "255,255,255", "x"], "l"),
        (["sp", "0,0,0", "2"], "s"),
        (["sp", "0,0,0", "2", "255,0,0", "1", "x"], "s"),
        (["pl", "0,0,0", "0,1,0"], "p"),
        (["cy", "0,0,0", "0,1,0", "2", "3"], "y"),
        (["cy", "0,0,0", "0,1,0", "2", "3", "255,0,0", "2", "x"], "y"),
        (["A", "0.2", "255,255,255"], "z"),
    ],
)
def test_check_param_count_rejects(tokens, key):
    with pytest.raises(ParseError):
        check_param_count(tokens, key)


def test_read_scene_file_drops_blank_lines(tmp_path):
    path = tmp_path / "scene.rt"
    path.write_text("A 0.2 255,255,255\n\n\nC 0,0,0 0,0,1 70\n")
    assert read_scene_file(path) == ["A 0.2 255,255,255", "C 0,0,0 0,0,1 70"]


@pytest.mark.parametrize("name", ["scene.txt", "scene.rtx", "scene", "scene.RT"])
def test_read_scene_file_bad_extension(tmp_path, name):
    path = tmp_path / name
    path.write_text("A 0.2 255,255,255\n")
    with pytest.raises(ParseError):
        read_scene_file(path)


def test_read_scene_file_missing(tmp_path):
    with pytest.raises(ParseError):
        read_scene_file(tmp_path / "absent.rt")


def test_count_objects_weights_cylinders():
    lines = ["A 0.2 255,255,255", "sp 0,0,0 1 255,0,0", "pl 0,0,0 0,1,0 0,0,255",
             "cy 0,0,0 0,1,0 1 2 0,255,0", "spx 1"]
    assert count_objects(lines) == 5
    assert count_objects(lines + ["cy 0,0,0 0,1,0 1 2 0,255,0"]) == count_objects(lines) + 3


@pytest.mark.parametrize("prefix", ["A ", "C ", "L "])
def test_check_duplicates_rejects(prefix):
    with pytest.raises(ParseError):
        check_duplicates([prefix + "x", "sp 0,0,0 1 255,0,0", prefix + "y"])