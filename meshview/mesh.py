"""Loading of triangle meshes from Wavefront OBJ text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, TextIO

from meshview.vectors import Vector3

_DECIMAL = re.compile(r"[1-9][0-9]*|0")
_OCTAL = re.compile(r"0[0-7]+")
_HEX = re.compile(r"0[xX][0-9a-fA-F]+")


class ObjParseError(ValueError):
    """Raised when OBJ input cannot be turned into a mesh."""


@dataclass(frozen=True)
class Vertex:
    """One renderable vertex: a position paired with a normal."""

    position: Vector3
    normal: Vector3


def _flatten(positions, normals, faces):
    """Give every distinct (position, normal) pair its own vertex."""
    lookup: dict[tuple[int, int], int] = {}
    vertices: list[Vertex] = []
    indices: list[int] = []
    for face in faces:
        for v_index, n_index in face:
            key = (v_index, n_index)
            if key not in lookup:
                if not 1 <= v_index <= len(positions):
                    raise ObjParseError(f"position index {v_index} out of range")
                if not 1 <= n_index <= len(normals):
                    raise ObjParseError(f"normal index {n_index} out of range")
                lookup[key] = len(vertices)
                vertices.append(Vertex(positions[v_index - 1], normals[n_index - 1]))
            indices.append(lookup[key])
    return vertices, indices


@dataclass
class Mesh:
    """Positions, normals and triangles, plus the flattened vertex and index buffers."""

    positions: list[Vector3] = field(default_factory=list)
    normals: list[Vector3] = field(default_factory=list)
    faces: list[tuple[tuple[int, int], ...]] = field(default_factory=list)
    vertices: list[Vertex] = field(init=False)
    indices: list[int] = field(init=False)

    def __post_init__(self) -> None:
        self.vertices, self.indices = _flatten(self.positions, self.normals, self.faces)

    @property
    def triangle_count(self) -> int:
        return len(self.indices) // 3


def _parse_index(text: str, line_number: int) -> int:
    """Parse an index with C-style base detection (decimal, 0-octal, 0x-hex)."""
    if _HEX.fullmatch(text):
        return int(text, 16)
    if _OCTAL.fullmatch(text):
        return int(text, 8)
    if _DECIMAL.fullmatch(text):
        return int(text)
    raise ObjParseError(f"line {line_number}: bad index {text!r}")


def _parse_vector(tokens: list[str], line_number: int) -> Vector3:
    if len(tokens) < 3:
        raise ObjParseError(f"line {line_number}: expected three components")
    try:
        return Vector3(*(float(t) for t in tokens[:3]))
    except ValueError as exc:
        raise ObjParseError(f"line {line_number}: {exc}") from None


def _parse_face(tokens: list[str], line_number: int) -> tuple[tuple[int, int], ...]:
    if len(tokens) < 3:
        raise ObjParseError(f"line {line_number}: a face needs three corners")
    corners = []
    for corner in tokens[:3]:
        parts = corner.split("/")
        if len(parts) < 3:
            raise ObjParseError(f"line {line_number}: corner {corner!r} is not v/t/n")
        corners.append(
            (_parse_index(parts[0], line_number), _parse_index(parts[2], line_number))
        )
    return tuple(corners)


def parse_obj(lines: Iterable[str]) -> Mesh:
    """Build a mesh from OBJ lines.

    Reading stops at the end of the input or at two consecutive blank lines.
    Only the first three corners of each face are used.
    """
    positions: list[Vector3] = []
    normals: list[Vector3] = []
    faces: list[tuple[tuple[int, int], ...]] = []
    blank_run = 0
    for line_number, line in enumerate(lines, start=1):
        tokens = line.split()
        if not tokens:
            blank_run += 1
            if blank_run == 2:
                break
            continue
        blank_run = 0
        keyword, rest = tokens[0], tokens[1:]
        if keyword == "v":
            positions.append(_parse_vector(rest, line_number))
        elif keyword == "vn":
            normals.append(_parse_vector(rest, line_number))
        elif keyword == "f":
            faces.append(_parse_face(rest, line_number))
    return Mesh(positions, normals, faces)


def read_obj(stream: TextIO) -> Mesh:
    """Build a mesh from an open text stream of OBJ data."""
    return parse_obj(line.rstrip("\r\n") for line in stream)