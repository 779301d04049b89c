"""Utilities for working with triangulated views of sampled meshes."""

from __future__ import annotations

from typing import Iterator, Set, Tuple

from yaphomotopy.sampling import Mesh
from yaphomotopy.vec import Vec3, triangle_normal

TriTuple = Tuple[Vec3, Vec3, Vec3, Vec3]


def mesh_view(mesh: Mesh) -> Iterator[TriTuple]:
    """Yield triangles of a sampled patch as ``(normal, v0, v1, v2)``.

    Normals are unit vectors. Vertices are returned as ``(x, y, z)`` tuples.
    Triangles with degenerate geometry (zero area, e.g. at the pole of a
    sphere) are skipped silently.
    """

    if not isinstance(mesh, Mesh) or mesh.cell_type != 'quad':
        raise ValueError("mesh_view expects a mesh sampled from a patch")

    verts = [tuple(p) for p in mesh.points.tolist()]
    for idx0, idx1, idx2 in mesh.triangles().tolist():
        v0 = verts[idx0]
        v1 = verts[idx1]
        v2 = verts[idx2]

        calc_normal = triangle_normal(v0, v1, v2)
        if calc_normal is None:
            continue

        yield calc_normal, v0, v1, v2


def mesh_edges(mesh: Mesh) -> Set[Tuple[int, int]]:
    """Return the unique undirected edges of a mesh as ``(low, high)`` pairs.

    Segments contribute themselves, quads their four sides and
    hexahedra their twelve edges.
    """

    if mesh.cell_type == 'line':
        sides = ((0, 1),)
    elif mesh.cell_type == 'quad':
        sides = ((0, 1), (1, 2), (2, 3), (3, 0))
    else:
        sides = ((0, 1), (1, 2), (2, 3), (3, 0),
                 (4, 5), (5, 6), (6, 7), (7, 4),
                 (0, 4), (1, 5), (2, 6), (3, 7))

    edges = set()
    for cell in mesh.cells.tolist():
        for i, j in sides:
            a, b = cell[i], cell[j]
            edges.add((a, b) if a < b else (b, a))
    return edges


__all__ = ['mesh_view', 'mesh_edges']
