"""Parsing of comma-separated vectors and matrices."""

from __future__ import annotations

import re

import numpy as np

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:inf(?:inity)?|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))",
    re.IGNORECASE,
)


def _to_float(text: str) -> float:
    """Parse the leading number of ``text``, ignoring anything after it."""
    match = _FLOAT_PREFIX.match(text)
    if match is None:
        raise ValueError(f"no number in {text!r}")
    return float(match.group(1))


def _parse_vec(text: str, length: int) -> np.ndarray:
    result = np.zeros(length, dtype=float)
    for idx, part in enumerate(text.split(",")[:length]):
        result[idx] = _to_float(part)
    return result


def parse_vec3(text: str) -> np.ndarray:
    """Parse up to three comma-separated numbers; missing ones are zero."""
    return _parse_vec(text, 3)


def parse_vec4(text: str) -> np.ndarray:
    """Parse up to four comma-separated numbers; missing ones are zero."""
    return _parse_vec(text, 4)


def parse_mat4(text: str) -> np.ndarray:
    """Parse a 4x4 matrix given row by row; missing entries keep the identity."""
    result = np.identity(4)
    parts = text.split(",")
    for index, part in enumerate(parts[:16]):
        row, col = divmod(index, 4)
        result[row, col] = _to_float(part)
    return result