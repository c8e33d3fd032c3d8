# simuverse

Building blocks for real-time simulations whose heavy work runs on the GPU.
This package holds the part that runs on the CPU, written in plain Python:
it builds the data that a compute or render pass would consume.

- **Vector-field particles**: trajectory particles scattered over a canvas
  with random jitter, WGSL function bodies for the built-in velocity fields,
  and records matching the uniform layouts used by those shaders.
- **Lattice Boltzmann fluid (D2Q9)**: relaxation parameters and direction
  tables, cell materials for Poiseuille flow, a lid-driven cavity and a
  closed box, round obstacles, and the cells hit by a drag gesture.
- **Position-based cloth**: a regular particle grid with its triangle mesh,
  stretch and bending constraints, and a greedy graph colouring that puts
  constraints sharing no particle into the same group (at most 16 groups).
- **Geometry and noise**: planes, UV spheres, circle and ring fans, and the
  permutation-hash and gradient tables used by Perlin noise shaders.

There are no runtime dependencies beyond the standard library.

## Modules

| Module | Contents |
| --- | --- |
| `simuverse.core` | `SimuType`, `FieldAnimationType`, `ParticleColorType`, `FieldUniform`, `ParticleUniform`, `TrajectoryParticle`, `Pixel`, `MAX_PARTICLE_COUNT`, `get_particles_data`, `init_trajectory_particles`, `generate_circle_plane`, `generate_disc_plane` |
| `simuverse.velocity_code` | `get_velocity_code_snippet` |
| `simuverse.text` | `remove_leading_indentation`, `parse_url_query_string` |
| `simuverse.point3d` | `Point3D` |
| `simuverse.geometry` | `PosUv`, `PosNormalUv`, `Plane`, `Sphere` |
| `simuverse.noise` | `TexGeneratorParams`, `PERMUTATION`, `GRADIENT`, `is_the_same_color`, `is_the_same_f32`, `permutation_hash_table`, `gradient_table` |
| `simuverse.fluid` | `OBSTACLE_RADIUS`, `LbmUniform`, `LatticeType`, `LatticeInfo`, `is_sd_sphere`, `init_lattice_material`, `FluidLattice` |
| `simuverse.constraints` | `Particle`, `StretchConstraint`, `BendingConstraint`, `BendingDynamicUniform`, `MeshColoring`, `ClothUniform`, `MAX_GROUPS`, `generate_stretch_constraints`, `generate_bend_constraints`, `generate_bend_constraints2`, `get_h0` |
| `simuverse.cloth` | `ClothFabric`, `gen_fabric`, `connect_particles` |

## Examples

A filled circle as a triangle fan written out as an indexed triangle list:

```python
from simuverse.core import generate_circle_plane

vertices, indices = generate_circle_plane(1.0, 16)
assert len(indices) == 16 * 3
```

Particles for a canvas; the list is padded with zero particles up to
`MAX_PARTICLE_COUNT`, and a `random.Random` can be passed for repeatable
layouts:

```python
import random
from simuverse.core import get_particles_data

size, workgroups, particles = get_particles_data((800, 600), 10000, 60.0, random.Random(1))
```

The shader body for a built-in velocity field (an empty string for types
that have none):

```python
from simuverse.core import FieldAnimationType
from simuverse.velocity_code import get_velocity_code_snippet

code = get_velocity_code_snippet(FieldAnimationType.JULIA_SET)
```

`FieldAnimationType.from_u32` maps a stored number back to the enum; any
value past the known ones gives `CUSTOM`.

A lattice for flow past three cylinders:

```python
from simuverse.core import FieldAnimationType
from simuverse.fluid import init_lattice_material

cells = init_lattice_material(320, 180, 1, FieldAnimationType.POISEUILLE)
assert len(cells) == 320 * 180
```

`FluidLattice` keeps such a lattice for a canvas. `add_obstacle(x, y)`
writes a round obstacle and returns the first changed cell index with the
cells of the rows it spans; `external_force_cells(pos, pre_pos)` returns the
cells a drag would push, without changing the stored lattice.

A 50 × 50 cloth with its constraints already coloured into groups:

```python
from simuverse.cloth import gen_fabric

fabric = gen_fabric(50, 50, 800.0, 800.0, 0.001)
colorings, stretch = fabric.stretch_constraints
```

Small text helpers:

```python
from simuverse.text import parse_url_query_string, remove_leading_indentation

print(remove_leading_indentation("    let a = 1;\n    return a;\n"))
assert parse_url_query_string("?level=debug&x=1", "level") == "debug"
```

`Point3D` is an immutable vector supporting `+` and `-` with other points,
`*` and `/` by a number, `length()`, `offset()` and unpacking into `x, y, z`.

## What the package does not do

It opens no window, draws nothing and runs no simulation steps: there is no
GPU device, no buffer upload, no shader compilation, no user interface and
no command to start. The records and lists it produces are meant to be handed
to such code elsewhere.

## Running the tests

Install the `test` extra and run `pytest` from the project root.