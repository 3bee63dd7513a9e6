"""Interaction state of the mesh viewer and a command-line entry point."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass, field
from enum import IntEnum

from meshview.matrices import Matrix3
from meshview.matrix4 import Matrix4
from meshview.mesh import ObjParseError, read_obj
from meshview.vectors import Vector3

DIFFUSE_COLORS = (
    (0.5, 0.5, 0.9, 1.0),
    (0.9, 0.5, 0.5, 1.0),
    (0.5, 0.9, 0.3, 1.0),
    (0.3, 0.8, 0.9, 1.0),
)
MIDDLE_BUTTON = 1
ESCAPE = "\x1b"

_MOUSE_SENSITIVITY = 0.002
_TICK_DEGREES = 0.05
_LIGHT_STEP = 0.5
_Y_AXIS = Vector3(0.0, 1.0, 0.0)


class Key(IntEnum):
    """Special (non-character) keys, with their GLUT key codes."""

    LEFT = 100
    UP = 101
    RIGHT = 102
    DOWN = 103


@dataclass
class ViewerState:
    """Camera, light, colour and input state of the viewer."""

    color_index: int = 0
    rotating: bool = False
    quit_requested: bool = False
    light_position: tuple[float, float, float, float] = (1.0, 1.0, 5.0, 1.0)
    camera_dir: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, -1.0))
    camera_up: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    camera_pos: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.0, 5.0))
    mouse_x: int = 0
    mouse_y: int = 0
    mouse_rotating: bool = False

    def diffuse_color(self) -> tuple[float, float, float, float]:
        """The current RGBA diffuse colour."""
        return DIFFUSE_COLORS[self.color_index]

    def handle_key(self, key: str) -> bool:
        """React to a character key; returns False for keys with no binding."""
        if key == ESCAPE:
            self.quit_requested = True
        elif key == "c":
            self.color_index = (self.color_index + 1) % len(DIFFUSE_COLORS)
        elif key == "r":
            self.rotating = not self.rotating
        else:
            print(f"Unhandled key press {key}.")
            return False
        return True

    def handle_special_key(self, key: Key) -> None:
        """Arrow keys move the light in its x/y plane."""
        x, y, z, w = self.light_position
        if key == Key.UP:
            y += _LIGHT_STEP
        elif key == Key.DOWN:
            y -= _LIGHT_STEP
        elif key == Key.LEFT:
            x -= _LIGHT_STEP
        elif key == Key.RIGHT:
            x += _LIGHT_STEP
        self.light_position = (x, y, z, w)

    def mouse_button(self, button: int, pressed: bool, x: int, y: int) -> None:
        """Holding the middle button enables drag rotation."""
        if button == MIDDLE_BUTTON:
            self.mouse_rotating = pressed
            self.mouse_x = x
            self.mouse_y = y

    def _rotate_camera(self, rotation: Matrix3) -> None:
        self.camera_dir = rotation @ self.camera_dir
        self.camera_up = rotation @ self.camera_up
        self.camera_pos = rotation @ self.camera_pos

    def mouse_move(self, x: int, y: int) -> bool:
        """Track the pointer; while dragging, orbit the camera. Returns whether it moved."""
        dx = x - self.mouse_x
        dy = y - self.mouse_y
        self.mouse_x = x
        self.mouse_y = y
        if not self.mouse_rotating:
            return False
        vertical_axis = self.camera_dir.cross(self.camera_up).normalized()
        rotation = Matrix3.rotation(_Y_AXIS, -dx * _MOUSE_SENSITIVITY) @ Matrix3.rotation(
            vertical_axis, -dy * _MOUSE_SENSITIVITY
        )
        self._rotate_camera(rotation)
        return True

    def tick(self) -> bool:
        """Advance the automatic rotation by one step; returns whether the camera moved."""
        if not self.rotating:
            return False
        self._rotate_camera(Matrix3.rotation(_Y_AXIS, math.radians(_TICK_DEGREES)))
        return True

    def view_matrix(self) -> Matrix4:
        """The camera's view transform."""
        return Matrix4.look_at(self.camera_pos, self.camera_pos + self.camera_dir, self.camera_up)


def square_viewport(width: int, height: int) -> tuple[int, int, int, int]:
    """The largest centred square viewport (x, y, width, height) in a window."""
    if width > height:
        return (width - height) // 2, 0, height, height
    return 0, (height - width) // 2, width, width


def main(argv=None) -> int:
    """Load an OBJ mesh (from a file or standard input) and describe it."""
    parser = argparse.ArgumentParser(prog="meshview", description=main.__doc__)
    parser.add_argument("path", nargs="?", help="OBJ file; standard input if omitted")
    args = parser.parse_args(argv)
    try:
        if args.path is None:
            mesh = read_obj(sys.stdin)
        else:
            with open(args.path, encoding="utf-8") as stream:
                mesh = read_obj(stream)
    except (OSError, ObjParseError) as exc:
        print(f"meshview: {exc}", file=sys.stderr)
        return 1
    state = ViewerState()
    print(f"{len(mesh.vertices)} unique vertices, {mesh.triangle_count} triangles")
    print("view matrix:")
    print(state.view_matrix())
    return 0