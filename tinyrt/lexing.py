"""Reading scene files: numbers, tokens, parameter counts and file checks."""

from __future__ import annotations

import os
from typing import List, Sequence, Union

_PARAM_RULES = {
    "a": (3, 3, "Invalid number of Ambient light!"),
    "c": (4, 4, "Invalid number of Camera parameter!"),
    "l": (4, 4, "Invalid number of Light parameter!"),
    "s": (4, 5, "Invalid Sphere parameter! Must be: sp Coodinate Diameter Color"),
    "p": (
        4,
        5,
        "Invalid Plane parameter! Must be: pl Coordinate Vector_Orientation Color",
    ),
    "y": (
        6,
        7,
        "Invalid Cylinder parameter! Must be: "
        "cy Coodinate Vector_Orientation Diameter Height Color",
    ),
}

_OBJECT_WEIGHTS = {"sp ": 1, "pl ": 1, "cy ": 3}


class ParseError(Exception):
    """Raised when a scene file or one of its fields is invalid."""


def _is_space(ch: str) -> bool:
    return ch == " " or "\t" <= ch <= "\r"


def parse_float(s: str) -> float:
    """Read a decimal number of the form ``[ws][signs]int[.frac]``.

    Any number of leading signs is accepted, each ``-`` flipping the sign.
    Characters before the point are folded in by their offset from ``'0'``;
    anything but digits after the point is an error.
    """
    pos = 0
    n = len(s)
    while pos < n and _is_space(s[pos]):
        pos += 1
    sign = 1
    while pos < n and s[pos] in "+-":
        if s[pos] == "-":
            sign = -sign
        pos += 1
    whole = 0
    while pos < n and s[pos] != ".":
        whole = whole * 10 + (ord(s[pos]) - ord("0"))
        pos += 1
    if pos < n:
        pos += 1
    frac = 0.0
    weight = 0.1
    for ch in s[pos:]:
        if not "0" <= ch <= "9":
            raise ParseError(f"Invalid number: {s!r}")
        frac += (ord(ch) - ord("0")) * weight
        weight /= 10
    return sign * (whole + frac)


def count_tokens(line: str) -> int:
    """Count words separated by spaces or tabs."""
    count = 0
    within = False
    for ch in line:
        if ch in " \t":
            within = False
        elif not within:
            within = True
            count += 1
    return count


def split_tokens(line: str, delim: str = " ") -> List[str]:
    """Split ``line`` on ``delim``, dropping empty pieces."""
    tokens = [t for t in line.split(delim) if t]
    if len(tokens) != count_tokens(line):
        raise ParseError(f"Malformed separators in line: {line!r}")
    return tokens


def check_param_count(tokens: Sequence[str], key: str) -> Sequence[str]:
    """Check the token count for the element kind ``key`` and return the tokens.

    Keys: ``a`` ambient, ``c`` camera, ``l`` light, ``s`` sphere, ``p`` plane,
    ``y`` cylinder.
    """
    try:
        low, high, message = _PARAM_RULES[key]
    except KeyError:
        raise ParseError("Invalid key passed for parameter number check!") from None
    if not low <= len(tokens) <= high:
        raise ParseError(message)
    return tokens


def read_scene_file(filename: Union[str, "os.PathLike[str]"]) -> List[str]:
    """Return the non-empty lines of a ``.rt`` scene file."""
    name = os.fspath(filename)
    dot = name.rfind(".")
    if dot < 0 or name[dot:] != ".rt":
        raise ParseError("Invalid filename! Must be .rt extension.")
    try:
        with open(name, encoding="utf-8", errors="replace") as fh:
            content = fh.read()
    except OSError as exc:
        raise ParseError("Cannot open file!") from exc
    return [line for line in content.split("\n") if line]


def count_objects(lines: Sequence[str]) -> int:
    """Number of scene objects; a cylinder counts three (body and two caps)."""
    return sum(
        weight
        for line in lines
        for prefix, weight in _OBJECT_WEIGHTS.items()
        if line.startswith(prefix)
    )


def check_duplicates(lines: Sequence[str]) -> None:
    """Reject files declaring more than one ambient light, camera or light."""
    for prefix in ("A ", "L ", "C "):
        if sum(1 for line in lines if line.startswith(prefix)) > 1:
            raise ParseError("More than one Camera/Light/Ambient parameter passed!")