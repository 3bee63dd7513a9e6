# meshview

A small toolkit for simple 3D viewing that needs only the standard library.

- `meshview.vectors` has the immutable vectors `Vector2`, `Vector3` and `Vector4`.
  They support component-wise `+`, `-`, `*` and `/`, and scaling by a number.
  They also offer `dot`, `length`, `length_squared`, `normalized` and `lerp`.
  `Vector2.normal()` gives `(-y, x)`, and `Vector2.cross` and `Vector3.cross` give
  cross products. `Vector4.homogenized()` divides by `w`, and `Vector4.from_xyz`
  builds a vector from a `Vector3` and a `w`. Swizzle properties such as `v.xy`
  and `v.zxy` are available too.
- `meshview.matrices` has the mutable 2x2 and 3x3 matrices `Matrix2` and `Matrix3`.
  They are built from row-major elements, or with `from_rows`, `from_columns`,
  `filled`, `identity` or `ones`.
  - `Matrix3` has the rotation constructors `rotate_x`, `rotate_y`, `rotate_z`,
    `rotation(axis, radians)` and `rotation_from_quaternion(w, x, y, z)`, as well
    as `scaling` and `uniform_scaling`.
  - Elements are read and written as `m[i, j]`. `row`, `column`, their setters
    and the 2x2 submatrix helpers cover whole rows, columns and blocks.
  - `@` multiplies by a matrix or a vector, and `*` multiplies by a number.
  - `column_major()` gives the elements in OpenGL order.
  - `inverse(epsilon)` raises `SingularMatrixError` when the determinant is zero
    or smaller in size than `epsilon`.
- `meshview.matrix4` has `Matrix4`, which has the same interface as `Matrix3`.
  - It adds `translation`, which takes three numbers or a `Vector3`, and `look_at`.
  - It adds the projections `orthographic_projection`,
    `orthographic_projection_bounds`, `frustum_projection`,
    `perspective_projection` and `infinite_perspective_projection`. Each uses the
    OpenGL depth range by default, or the DirectX one when given `direct_x=True`.
  - It also has 2x2 and 3x3 submatrix access.
- `meshview.mesh` reads Wavefront OBJ text with `parse_obj(lines)` or
  `read_obj(stream)` and returns a `Mesh`.
  - It reads `v`, `vn` and `f v/t/n` (or `f v//n`) records. Only the first three
    corners of a face are used, and the texture index is ignored.
  - Reading stops at the end of the input or at two blank lines in a row.
  - Each distinct position/normal pair becomes one `Vertex` in `Mesh.vertices`,
    and `Mesh.indices` lists three vertex indices per triangle.
  - Malformed records and indices that are out of range raise `ObjParseError`.
- `meshview.viewer` holds the interactive state of a viewer in `ViewerState`.
  - The `c` key cycles the diffuse colour and `r` toggles the turntable
    rotation. Escape sets `quit_requested`.
  - The arrow keys (`Key`) move the light by 0.5.
  - Dragging with the middle button orbits the camera, and `tick()` turns it by
    0.05 degrees per call while rotation is on.
  - `view_matrix()` gives the camera's view matrix.
  - `square_viewport(width, height)` gives the largest centred square viewport.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

```python
from meshview.vectors import Vector3
from meshview.matrices import Matrix3

turn = Matrix3.rotation(Vector3(0, 1, 0), 0.5)
print(turn.determinant())          # 1.0, up to rounding
print(turn @ Vector3(1, 0, 0))     # the rotated vector
```

```python
import io
from meshview.mesh import read_obj

text = """v 0 0 0
v 1 0 0
v 0 1 0
vn 0 0 1
f 1//1 2//1 3//1
"""
mesh = read_obj(io.StringIO(text))
print(len(mesh.vertices), mesh.indices)   # 3 [0, 1, 2]
```

```python
from meshview.viewer import ViewerState, square_viewport

state = ViewerState()
state.handle_key("c")             # next diffuse colour
print(state.diffuse_color())      # (0.9, 0.5, 0.5, 1.0)
print(square_viewport(640, 480))  # (80, 0, 480, 480)
```

## Command line

```
meshview model.obj
meshview < model.obj
```

The command reads an OBJ model from the named file, or from standard input when no
file is given. It prints the number of unique vertices and triangles, followed by
the default camera's view matrix. It exits with status 1 when the file cannot be
read or does not parse.

## What it does not do

The package does not open a window or draw anything. `ViewerState` keeps the
camera, light, colour and input state, and the command only reports what it
loaded. Rendering, such as showing the mesh on screen and passing key and mouse
events to `ViewerState`, is left to whatever graphics layer you connect it to.