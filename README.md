# mineola

CPU-side building blocks for a small real-time 3D renderer, written on top
of numpy. The package maps graphics types to OpenGL enumerants, builds
camera and projection matrices, plays key-frame animation, reads glTF
files and turns their animation data into key frames. It also holds two
small physics scenes: a mass-spring cloth and a Gerstner-wave ocean
surface.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `mineola.gltypes` maps engine data types (`DataType`) to OpenGL
  enumerants (`GL`) and back. It has the following functions:
  - `size_of` and `size_of_gl_type` give sizes.
  - `num_channels` and `map_gl_format` give channel counts and texture
    format details.
  - `map_gl_type` and `map_to_gl_type` map shader variable types.
  - `gl_type_for` gives a pixel type for a channel width.
  - `depth_format_for` raises `ValueError` for an unsupported bit depth.
    `map_gl_depth_format` covers the same depth formats.
  - `usage_to_gl` and `access_to_gl` give buffer hints.
- `mineola.aabb` has `AABB`, an axis-aligned bounding box. It provides
  `center`, `extent`, `corners`, `combine` and `transform`. The last one
  gives the bounds of the corners under a 4x4 matrix.
- `mineola.parsing` has `parse_vec3`, `parse_vec4` and `parse_mat4`. They
  read comma-separated numbers. Missing vector entries are zero, and
  missing matrix entries keep the identity. Matrices are given row by row.
- `mineola.filesystem` has `join_paths`, `split_path`, `file_type` and
  `file_exists`. `file_type` returns a `FileType` or `None`.
- `mineola.camera` has the `perspective` and `ortho` projection matrices,
  and `Camera`:
  - `set_proj_params` sets perspective parameters.
  - `set_ortho_proj_params` sets orthographic ones.
  - `set_proj_matrix` sets a fixed matrix.
  - `on_size` adapts to a viewport.
  - `uniforms` returns the view and projection matrices as a dict keyed by
    uniform name.
- `mineola.animation` has `KeyFrame`, `Channel` and `Animation`:
  - `KeyFrame.lerp` and `KeyFrame.cubic_spline` blend frames.
  - A `Channel` poses any target object that has `position`, `rotation`
    and `scale` attributes. Its key frames are uniformly sampled. It uses
    `Interpolation.STEP`, `LINEAR` or `CUBIC_SPLINE`.
  - Rotations are (w, x, y, z) quaternions, interpolated with
    `quat_slerp`.
- `mineola.entity` has `Entity`, the base of anything that takes part in
  the frame loop, and `AnimatedEntity`. `AnimatedEntity` is a
  play/pause/reset/snapshot state machine over a set of animations. It
  plays once or in a loop (`PlayMode`), and times are in milliseconds.
- `mineola.controls` has the maths behind the arcball and first-person
  camera controllers: `arcball_direction`, `roll_correction` and
  `pinch_translation`. It also has the `MoveKeys` tracker for the W/A/S/D
  and E/Q movement keys.
- `mineola.gltf_mapping` maps glTF names and enumerants to engine values:
  - `map_semantics`, `map_component_type` and `vec_length` cover
    attributes and accessors.
  - `map_min_filter`, `map_mag_filter` and `map_wrap_mode` cover samplers.
  - `abbrev_texture_mode` builds a short key for a sampler configuration.
  - `effect_sfx_flags` and `shadowmap_effect_type` read effect names.
- `mineola.gltf` works on glTF documents:
  - `load_document` reads `.gltf` and `.glb` files. It resolves external
    buffers and base64 data URIs.
  - `parse_normalized_floats` decodes accessors.
  - `resample_channel` resamples animation samples every 0.04 s.
  - `buffer_view_usages` infers what each buffer view is for.
  - `load_animations` returns resampled `ChannelData` for every animation.
- `mineola.cloth` has `cloth_grid` and `Cloth`, a mass-spring sheet pinned
  along its top row and every fourth column. It has `step`, `frame_move`,
  `toggle` and `reset`.
- `mineola.ocean` has `WaterSurface`, a grid moved by ten random Gerstner
  waves (`WaveLevel`). It has `init_cpu_data`, `update` and
  `frame_move`. Pass `seed` for repeatable waves.

## Example

```python
import numpy as np
from mineola.aabb import AABB
from mineola.camera import Camera

box = AABB(np.array([-1.0, 0.0, -1.0]), np.array([1.0, 2.0, 1.0]))
print(box.center(), box.extent())

camera = Camera(perspective=True)
camera.set_proj_params(np.radians(60.0), 0.1, 100.0)
camera.on_size(800, 600)
print(camera.uniforms()["_proj_view_mat"])
```

Stepping the cloth simulation:

```python
from mineola.cloth import Cloth

cloth = Cloth(rest_len=1.0, num_segments=(10, 10))
cloth.toggle()                 # start running
cloth.frame_move(0.0, 16.0)    # frame time in milliseconds
print(cloth.positions[:3])
```

## What it does not do

The package does not draw anything. It has no OpenGL context, window,
shaders, textures, framebuffers, render passes or input loop. It has no
engine object or scene graph that ties the pieces together, and no
command-line program.

The glTF support stops at reading documents, decoding accessors, inferring
buffer view usage and resampling animations. It does not build meshes,
materials, textures, skins or scene nodes from a document.

The camera controllers are provided as their maths only. Hooking them to
mouse and keyboard events is left to the caller.