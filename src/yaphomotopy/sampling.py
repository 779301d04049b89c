## sampling and tessellation of homotopy maps

## Copyright (c) 2026 yapHomotopy contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
==========================================================
sampling -- turning lazy homotopy maps into concrete meshes
==========================================================

``sample(map, resolution)`` is the only path from a lazy map to
concrete geometry.  It evaluates the map on a regular grid spanning
[0,1]^arity, both endpoints included, and returns a ``Mesh``: the
sampled points in canonical grid order plus the connectivity of the
grid cells.

canonical grid order
====================

Grid points are ordered row-major over the parameter axes with the
last parameter varying fastest.  For a Volume sampled at ``(n0, n1,
n2)`` the point for grid index ``(i, j, k)`` is at position
``(i * n1 + j) * n2 + k`` and was evaluated at parameters
``(i / (n0 - 1), j / (n1 - 1), k / (n2 - 1))``.  Parameters are
computed by a single correctly rounded division, so a grid point that
appears in both a coarse and a fine grid gets bit-identical parameters
(and hence a bit-identical point) in both.

connectivity
============

- Curve: ``'line'`` cells, index pairs ``(i, i + 1)``
- Patch: ``'quad'`` cells ``(a, b, c, d)`` counter-clockwise in
  parameter space, starting at the lowest (u, v) corner
- Volume: ``'hexahedron'`` cells in VTK vertex order: the four corners
  of the lower w face counter-clockwise in (u, v), then the upper face

``Mesh.triangles()`` and ``Mesh.tetrahedra()`` derive simplices from
these cells.

parallel sampling
=================

With ``workers > 1`` the grid is cut into contiguous chunks that a
thread pool evaluates.  Results are reassembled in submission order,
so the output is identical to the serial path.  Maps are immutable and
their functions pure by contract, so no locking is involved.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from yaphomotopy.config import DEFAULT_LOD, EngineConfig, LodTable
from yaphomotopy.diagnostics import check_map, check_resolution
from yaphomotopy.maps import HomotopyMap
from yaphomotopy.vec import vec3

logger = logging.getLogger(__name__)

CELL_TYPES = {1: 'line', 2: 'quad', 3: 'hexahedron'}

# six tetrahedra around the 0-6 diagonal of a VTK-ordered hexahedron
_HEX_TETS = ((0, 1, 2, 6), (0, 2, 3, 6), (0, 3, 7, 6),
             (0, 7, 4, 6), (0, 4, 5, 6), (0, 5, 1, 6))


def _frozen(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class Mesh:
    """Sampled geometry: points plus grid connectivity.

    Attributes
    ----------
    points : ndarray, shape (N, 3)
        Sampled points in canonical grid order.
    params : ndarray, shape (N, arity)
        The parameter tuple each point was evaluated at.
    cells : ndarray of int
        ``(M, 2)`` segments, ``(M, 4)`` quads or ``(M, 8)`` hexahedra.
    resolution : tuple of int
        Samples per parameter axis.
    cell_type : str
        ``'line'``, ``'quad'`` or ``'hexahedron'``.

    The arrays are read-only.  A mesh does not refer back to the map it
    was sampled from.
    """

    points: np.ndarray
    params: np.ndarray
    cells: np.ndarray
    resolution: Tuple[int, ...]
    cell_type: str

    @property
    def arity(self) -> int:
        return len(self.resolution)

    def __len__(self) -> int:
        return len(self.points)

    def grid(self) -> np.ndarray:
        """Points reshaped to ``resolution + (3,)``."""
        return self.points.reshape(tuple(self.resolution) + (3,))

    def triangles(self) -> np.ndarray:
        """Split every quad into two triangles, ``(2M, 3)``.

        Quad ``(a, b, c, d)`` becomes ``(a, b, c)`` and ``(a, c, d)``; the
        winding of the quad is preserved.
        """
        if self.cell_type != 'quad':
            raise ValueError('triangles() needs a patch mesh, this one has {} cells'.format(self.cell_type))
        q = self.cells
        tris = np.empty((len(q) * 2, 3), dtype=q.dtype)
        tris[0::2] = q[:, [0, 1, 2]]
        tris[1::2] = q[:, [0, 2, 3]]
        return tris

    def tetrahedra(self) -> np.ndarray:
        """Split every hexahedron into six tetrahedra, ``(6M, 4)``.

        All hexahedra are split around the same diagonal, so the faces of
        neighbouring cells match.
        """
        if self.cell_type != 'hexahedron':
            raise ValueError('tetrahedra() needs a volume mesh, this one has {} cells'.format(self.cell_type))
        h = self.cells
        return h[:, np.array(_HEX_TETS)].reshape(-1, 4)

    def bbox(self):
        """Return ``(min_corner, max_corner)`` of the sampled points."""
        lo = self.points.min(axis=0)
        hi = self.points.max(axis=0)
        return tuple(lo.tolist()), tuple(hi.tolist())


def grid_params(resolution: Sequence[int]) -> np.ndarray:
    """Return the ``(N, arity)`` grid parameters in canonical order.

    ``resolution`` must already be valid (see ``check_resolution``).
    """
    axes = [np.arange(n, dtype=np.float64) / (n - 1) for n in resolution]
    mesh = np.meshgrid(*axes, indexing='ij')
    return np.stack([a.reshape(-1) for a in mesh], axis=1)


def grid_cells(resolution: Sequence[int]) -> np.ndarray:
    """Return the cell connectivity of a grid with ``resolution``."""
    res = tuple(resolution)
    idx = np.arange(int(np.prod(res)), dtype=np.int64).reshape(res)
    if len(res) == 1:
        return np.stack([idx[:-1], idx[1:]], axis=1)
    if len(res) == 2:
        return np.stack([idx[:-1, :-1], idx[1:, :-1],
                         idx[1:, 1:], idx[:-1, 1:]], axis=-1).reshape(-1, 4)
    return np.stack([idx[:-1, :-1, :-1], idx[1:, :-1, :-1],
                     idx[1:, 1:, :-1], idx[:-1, 1:, :-1],
                     idx[:-1, :-1, 1:], idx[1:, :-1, 1:],
                     idx[1:, 1:, 1:], idx[:-1, 1:, 1:]], axis=-1).reshape(-1, 8)


def _evaluate_chunk(fn, chunk):
    return [vec3(fn(*p)) for p in chunk]


def sample(m: HomotopyMap, resolution, *, workers: Optional[int] = None,
           config: Optional[EngineConfig] = None) -> Mesh:
    """Sample ``m`` on a regular grid and return a ``Mesh``.

    Parameters
    ----------
    m : HomotopyMap
        The map to materialize.
    resolution : int or sequence of int
        Samples per parameter axis, one entry per parameter of ``m``
        (a bare int is accepted for a Curve).  Every entry must be at
        least 2.
    workers : int, optional
        Threads used for evaluation; overrides ``config.workers``.
    config : EngineConfig, optional
        Engine settings; defaults to ``EngineConfig()``.

    Raises
    ------
    InvalidResolution
        If ``resolution`` does not match the arity of ``m`` or some axis
        has fewer than 2 samples.
    """
    check_map(m, 'sample')
    res = check_resolution(m, resolution)
    if config is None:
        config = EngineConfig()
    if workers is None:
        workers = config.workers
    elif isinstance(workers, bool) or not isinstance(workers, int) or workers < 1:
        raise ValueError('workers must be a positive integer, got {!r}'.format(workers))

    params = grid_params(res)
    plist = [tuple(p) for p in params.tolist()]
    fn = m.fn
    chunk_size = config.chunk_size

    if workers == 1 or len(plist) <= chunk_size:
        values = _evaluate_chunk(fn, plist)
    else:
        chunks = [plist[i:i + chunk_size] for i in range(0, len(plist), chunk_size)]
        with ThreadPoolExecutor(max_workers=workers) as pool:
            values = []
            for part in pool.map(lambda c: _evaluate_chunk(fn, c), chunks):
                values.extend(part)

    points = np.array(values, dtype=np.float64).reshape(-1, 3)
    cells = grid_cells(res)
    logger.debug('sampled %s at %s: %d points, %d %s cells, %d worker(s)',
                 m.kind, list(res), len(points), len(cells), CELL_TYPES[m.arity], workers)
    return Mesh(points=_frozen(points),
                params=_frozen(params),
                cells=_frozen(cells),
                resolution=res,
                cell_type=CELL_TYPES[m.arity])


def sample_lod(m: HomotopyMap, level: str, *, table: Optional[LodTable] = None,
               workers: Optional[int] = None, config: Optional[EngineConfig] = None) -> Mesh:
    """Sample ``m`` at a named level of detail.

    ``table`` defaults to ``DEFAULT_LOD`` (levels ``low``, ``medium``,
    ``high``).  Raises ``KeyError`` for an unknown level.
    """
    check_map(m, 'sample_lod')
    if table is None:
        table = DEFAULT_LOD
    res = table.resolution_for(level, m.arity)
    logger.debug('level of detail %r resolves to %s for a %s', level, list(res), m.kind)
    return sample(m, res, workers=workers, config=config)


__all__ = [
    'CELL_TYPES',
    'Mesh',
    'grid_params',
    'grid_cells',
    'sample',
    'sample_lod',
]
