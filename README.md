# tinyrt

tinyrt renders small 3D scenes that are described in plain-text `.rt` files.
It handles spheres, planes and capped cylinders. A single point light gives
Phong shading with hard shadows, and an ambient light is added on top. Each
object can have a matte, plastic or metal finish.

## Installing

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Scene files

A scene file must have the `.rt` extension. Each line holds one element, and
the fields on a line are separated by spaces. Vectors and colours are written
as comma-separated values. Colours are `R,G,B` or `R,G,B,A`, and each channel
runs from 0 to 255.

| Identifier | Fields |
|------------|--------|
| `A`  | ambient ratio `[0,1]`, colour |
| `C`  | position, direction (each component in `[-1,1]`), field of view in degrees `(0,180]` |
| `L`  | position, brightness ratio `[0,1]`, colour |
| `sp` | centre, diameter, colour, optional material |
| `pl` | point, normal (each component in `[-1,1]`), colour, optional material |
| `cy` | centre, axis (each component in `[-1,1]`), diameter, height, colour, optional material |

The material is `0` for matte, `1` for plastic or `2` for metal. Any other
value, or no value, gives matte. Directions are normalised after they are
read. A scene may hold at most one `A`, one `C` and one `L` line.

Example:

```
A 0.2 255,255,255
C 0,0,-20 0,0,1 70
L -10,10,-10 0.7 255,255,255
sp 0,0,0 6 255,0,0 2
pl 0,-3,0 0,1,0 200,200,200
cy 6,0,2 0,1,0 3 5 0,128,255 1
```

A malformed scene raises `tinyrt.lexing.ParseError`. Its message says what is
wrong.

## Command line

```
tinyrt scene.rt
tinyrt scene.rt -o picture.ppm --res 10
```

The command parses the scene and renders it into a 1920x1080 image. The
result is written as a binary PPM file. If `-o/--output` is not given, the
output file is the scene path with a `.ppm` suffix. `--res` sets the
resolution in percent and defaults to `100`. On success the command prints
the output path and exits with status 0. If the scene is invalid, it prints
the error to standard error and exits with status 1. Run `tinyrt --help` to
list the options.

The renderer traces every pixel in Python, so a full-resolution render takes
some time.

## Library use

```python
from tinyrt.parser import parse_scene
from tinyrt.cli import render_file

scene = parse_scene("scene.rt")
framebuffer = render_file("scene.rt", "scene.ppm", 100)
```

The last argument of `render_file` is the resolution in percent. At `100`
every pixel is traced. At `10` the image is a fast preview made of blocks.

These are the lower-level modules:

- `tinyrt.linalg`: `Vec` (homogeneous points and directions), `Matrix4`, `to_rad`
- `tinyrt.color`: `Color`
- `tinyrt.scene`: `Scene`, `SceneObject`, the shapes `Sphere`, `Plane`,
  `Cylinder` and `Disc`, plus `Camera`, `Light`, `AmbientLight`, `Viewport`
  and `Material`
- `tinyrt.lexing` and `tinyrt.fields`: tokenising and field parsing
- `tinyrt.parser`: `parse_scene`, `parse_lines`, and one parser per element
- `tinyrt.geometry`: `Ray`, `intersect`, `contains_point`, `surface_normal`
- `tinyrt.renderer`: `FrameBuffer` (with `to_ppm`), `render`, `shade`,
  `find_hit`, `cast_ray`
- `tinyrt.edits`: move, rotate and scale objects, the camera and the light

## Interactive controls

`tinyrt.controls.Controller` takes a scene and, optionally, its file path and
a `FrameBuffer`. It maps key and mouse events to edits. Keys are given as
`tinyrt.controls.Key` codes and are passed to `key_action(key)` or
`mouse_button(button, x, y)`. After most edits the controller renders a
preview at 10% resolution into its frame buffer.

- A left click (button `1`) toggles selection of the object under the pixel.
  A click on a cylinder cap selects the whole cylinder. `Key.L` toggles
  selection of the light.
- `W A S D Q E` move the selected object or light. When nothing is selected,
  they move the camera.
- The arrow keys, `Key.S_LEFT` and `Key.S_RIGHT` rotate the selected object.
  When nothing is selected, they turn or roll the camera.
- `Key.PLUS`, `Key.MINUS` and the scroll wheel change the selection:
  - a selected object is scaled;
  - a selected light gets brighter or dimmer;
  - with nothing selected, scrolling zooms and plus or minus changes the
    ambient light.
- `Key.WIDTH` and `Key.HEIGHT` choose whether scaling a selected cylinder
  changes its radius or its height.
- `Key.SPACE` clears the selection and renders at full resolution.
- `Key.REVERT` reloads the scene from its file.
- `Key.ESC` sets `closed` and `exit_message` on the controller.

## What it does not do

tinyrt does not open a window, show the image on screen or read the keyboard
or mouse itself. `Controller` only reacts to the events its caller passes in,
and it draws into an in-memory `FrameBuffer`. The only image format it writes
is PPM.