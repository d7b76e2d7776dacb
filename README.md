# gfxkit

`gfxkit` is a small graphics toolkit for Python. It provides vector and matrix arithmetic, quaternions, a line-oriented command language for reading scripted file formats, and raster images with file I/O.

## Modules

- **`gfxkit.core`** has tolerant float comparison (`feq`, `feq2`, with tolerances `FEQ_EPS` and `FEQ_EPS2`) and random helpers (`random1`, `random_byte`). It also has CPU timing: `get_cpu_time` returns the user CPU time of the process, and the `timing()` context manager yields an object whose `elapsed` attribute holds the CPU time spent in the block.
- **`gfxkit.vectors`** has `Vec`, a mutable float vector of any dimension. It supports `+`, `-`, scalar `*` and `/`, and `dot` or `u @ v` for the inner product. The module also provides `norm`, `norm2`, `unitize` (in place), `perp` (2-D), `cross4` (the 4-D cross product of three vectors), `proj` (homogeneous 4-D to 3-D), `tet_raw_normal` and `tet_normal`.
- **`gfxkit.intvec`** has `IntVec` and `IntVec3`. They store components as integers scaled by a maximum value `t_max`, and read them back as floats. Signed storage covers [-1, 1] and unsigned storage covers [0, 1]. Use `set`, `fill`, `raw_data`, and on `IntVec3` also `pack` and `unpack`.
- **`gfxkit.array`** has `Array2` and `Array3`, flat containers indexed as `a[i, j]` or `a[i, j, k]`. They can also be indexed by a flat position `a[n]`.
- **`gfxkit.matrices`** has the `Mat2` and `Mat4` classes. They support element access `m[i, j]`, row access `m[i]`, `col`, `identity` and the arithmetic operators. `m @ v` multiplies a matrix by a vector and `m @ n` multiplies two matrices. On a `Mat4`, `m @ v` with a 3-vector transforms it as a homogeneous point (see `transform_point`). The module also provides the functions `det` (2x2, 3x3, 4x4), `trace`, `transpose`, `adjoint2` and `outer_product2`.
- **`gfxkit.symmat`** has `SymMat`, a symmetric matrix of any dimension that stores only its upper triangle. It provides `row`, `col`, `trace`, `copy` and `fullmatrix`; `fullmatrix` returns a dense `Mat2` or `Mat4` where the size fits. The module also provides `sym_identity` and `sym_outer_product`.
- **`gfxkit.quat`** has `Quat`, with multiplication, `conjugate`, `inverse`, `unit` and `norm`. The module also provides:
  - `qexp` and `qlog`
  - `axis_to_quat`
  - `quat_to_matrix` and `unit_quat_to_matrix`, which return a `Mat4`
  - `slerp`
  - `trackball(p1x, p1y, p2x, p2y)`, which returns the rotation of a virtual trackball dragged between two points in normalised window coordinates
- **`gfxkit.script`** has `CmdEnv`, which runs line-oriented scripts against registered command handlers. A handler receives a `CmdLine`, which provides `opname`, `argcount`, `argline`, `token_to_string`, `token_to_float`, `token_to_int`, `collect_as_strings`, `collect_as_floats` and `collect_as_ints`. Blank lines and lines starting with `#` are skipped. The commands `include`, `ignore` and `end` are built in. Error statuses are raised as exceptions: `NameError_` for an unknown command, `SyntaxError_`, `IOError_`, all subclasses of `ScriptError`. `do_file` reads files ending in `.gz`, `.z` or `.Z` as gzip.
- **`gfxkit.raster`** has `ByteRaster` and `FloatRaster`, which convert to each other with `ByteRaster.from_float` and `FloatRaster.from_bytes`. `ByteRaster` also has `pixel(x, y)` and `vflip`. PNM files (PGM/PPM, raw or ASCII) are read and written by the module itself. PNG, JPEG and TIFF go through Pillow. `read_image` and `write_image` choose the format from the file extension or from an explicit `ImageType`; an extension they cannot recognise raises `ValueError`.

## Installation

```
pip install .
```

## Examples

```python
from gfxkit.vectors import Vec, norm

u = Vec(1.0, 0.0, 0.0)
x = u * 2.0
print(x, norm(x))          # 2 0 0 2.0
```

```python
import math
from gfxkit.quat import axis_to_quat, slerp, unit_quat_to_matrix
from gfxkit.vectors import Vec

a = axis_to_quat(Vec(0, 0, 1), 0.0)
b = axis_to_quat(Vec(0, 0, 1), math.pi / 2)
m = unit_quat_to_matrix(slerp(a, b, 0.5))
print(m @ Vec(1.0, 0.0, 0.0))
```

```python
from gfxkit.script import CmdEnv

def add(cmd):
    print(sum(cmd.collect_as_floats()))

env = CmdEnv()
env.register_command("add", add)
env.do_string("add 1 2 3\n# comments are skipped\n")
```

```python
from gfxkit.raster import ByteRaster, read_image, write_image

img = ByteRaster(4, 4, 3)
img.pixel(1, 2)[0] = 255
write_image("out.ppm", img)
assert read_image("out.ppm") == img
```

## What it does not do

- There is no window, OpenGL drawing or mouse handling. `trackball` computes a rotation, but there is no interactive trackball controller.
- Matrices are not inverted, and eigenvalues are not computed.
- TIFF output is uncompressed.
- PNM output supports only 1-channel and 3-or-more-channel images. Channels beyond the third are dropped.

## Running the tests

```
pip install -e .[test]
pytest
```