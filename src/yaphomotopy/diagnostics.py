"""Validation helpers for yapHomotopy maps and meshes.

Two kinds of checks live here:

- eager validators (``check_arity``, ``check_same_arity``,
  ``check_resolution``, ``check_domain``) that raise the typed errors of
  ``yaphomotopy.errors``.  Combinators and the sampling engine call them
  at construction or invocation time, using only metadata.
- advisory mesh checks (``mesh_finite``, ``degenerate_cells``,
  ``is_closed_curve``, ``faces_oriented``, ``surface_watertight``) that
  return a ``CheckResult`` instead of raising.

Copyright (c) 2026 yapHomotopy contributors
MIT License
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from math import isfinite
from typing import TYPE_CHECKING, List, Sequence, Tuple

from yaphomotopy.errors import ArityMismatch, DomainViolation, InvalidResolution
from yaphomotopy.maps import HomotopyMap
from yaphomotopy.vec import dist, epsilon, triangle_area, triangle_normal

if TYPE_CHECKING:
    from yaphomotopy.sampling import Mesh

logger = logging.getLogger(__name__)


@dataclass
class CheckResult:
    ok: bool
    warnings: List[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.ok


# ---------------------------------------------------------------------------
# eager validators
# ---------------------------------------------------------------------------

def check_map(m, what: str) -> HomotopyMap:
    if not isinstance(m, HomotopyMap):
        raise TypeError(f'{what} expects a homotopy map, got {m!r}')
    return m


def check_arity(m, expected, what: str) -> HomotopyMap:
    """Raise ``ArityMismatch`` unless ``m`` has arity ``expected``.

    ``expected`` may be an int or a collection of acceptable arities.
    """
    check_map(m, what)
    allowed = (expected,) if isinstance(expected, int) else tuple(expected)
    if m.arity not in allowed:
        names = ' or '.join(str(a) for a in allowed)
        raise ArityMismatch(f'{what} expects a map of arity {names}, got a {m.kind} (arity {m.arity})')
    return m


def check_same_arity(a, b, what: str) -> int:
    """Raise ``ArityMismatch`` unless ``a`` and ``b`` share an arity."""
    check_map(a, what)
    check_map(b, what)
    if a.arity != b.arity:
        raise ArityMismatch(
            f'{what} needs maps of identical arity, got a {a.kind} (arity {a.arity}) '
            f'and a {b.kind} (arity {b.arity})')
    return a.arity


def check_resolution(m: HomotopyMap, resolution) -> Tuple[int, ...]:
    """Normalize and validate a per-axis sample count for ``m``.

    A bare int is accepted for a Curve.  Every axis needs at least two
    samples so that both domain endpoints are covered.
    """
    check_map(m, 'sample')
    if isinstance(resolution, int) and not isinstance(resolution, bool):
        resolution = (resolution,)
    try:
        res = tuple(resolution)
    except TypeError:
        raise InvalidResolution(f'bad resolution, expected a sequence of counts: {resolution!r}') from None
    if len(res) != m.arity:
        raise InvalidResolution(
            f'a {m.kind} needs {m.arity} resolution value(s), got {len(res)}: {list(res)}')
    out = []
    for n in res:
        if isinstance(n, bool) or not isinstance(n, int):
            # accept integral numpy scalars and the like
            try:
                as_int = int(n)
            except (TypeError, ValueError, OverflowError):
                raise InvalidResolution(f'bad sample count in resolution: {n!r}') from None
            if as_int != n:
                raise InvalidResolution(f'bad sample count in resolution: {n!r}')
            n = as_int
        if n < 2:
            raise InvalidResolution(f'every axis needs at least 2 samples, got {list(res)}')
        out.append(n)
    return tuple(out)


def in_domain(params: Sequence[float]) -> bool:
    """``True`` if every parameter lies in [0,1]."""
    return all(0.0 <= p <= 1.0 for p in params)


def check_domain(params: Sequence[float], policy: str = 'ignore') -> bool:
    """Apply a domain policy to a parameter tuple.

    Returns ``in_domain(params)``.  Under ``'warn'`` an out-of-range tuple
    is logged; under ``'raise'`` it raises ``DomainViolation``.
    """
    if policy not in ('ignore', 'warn', 'raise'):
        raise ValueError(f'bad domain policy: {policy!r}')
    ok = in_domain(params)
    if not ok:
        if policy == 'raise':
            raise DomainViolation(f'parameters outside the unit domain: {tuple(params)}')
        if policy == 'warn':
            logger.warning('parameters outside the unit domain: %s', tuple(params))
    return ok


# ---------------------------------------------------------------------------
# mesh checks
# ---------------------------------------------------------------------------

def mesh_finite(mesh: "Mesh") -> CheckResult:
    """Report points containing NaN or infinite coordinates."""
    bad = [i for i, p in enumerate(mesh.points.tolist())
           if not (isfinite(p[0]) and isfinite(p[1]) and isfinite(p[2]))]
    if bad:
        return CheckResult(False, [f'{len(bad)} non-finite points, first at index {bad[0]}'])
    return CheckResult(True, [])


def degenerate_cells(mesh: "Mesh", tol: float = epsilon) -> CheckResult:
    """Report segments of zero length or quads of zero area.

    Hexahedra are checked through their six faces; a hexahedron is
    reported only if every face collapses.
    """
    pts = [tuple(p) for p in mesh.points.tolist()]
    cells = mesh.cells.tolist()
    bad = []
    if mesh.cell_type == 'line':
        for idx, (a, b) in enumerate(cells):
            if dist(pts[a], pts[b]) <= tol:
                bad.append(idx)
    elif mesh.cell_type == 'quad':
        for idx, (a, b, c, d) in enumerate(cells):
            if _quad_area(pts, a, b, c, d) <= tol:
                bad.append(idx)
    else:
        for idx, h in enumerate(cells):
            faces = ((h[0], h[1], h[2], h[3]), (h[4], h[5], h[6], h[7]),
                     (h[0], h[1], h[5], h[4]), (h[1], h[2], h[6], h[5]),
                     (h[2], h[3], h[7], h[6]), (h[3], h[0], h[4], h[7]))
            if all(_quad_area(pts, *f) <= tol for f in faces):
                bad.append(idx)
    if bad:
        return CheckResult(False, [f'{len(bad)} degenerate {mesh.cell_type} cells: {bad[:10]}'])
    return CheckResult(True, [])


def _quad_area(pts, a, b, c, d) -> float:
    return triangle_area(pts[a], pts[b], pts[c]) + triangle_area(pts[a], pts[c], pts[d])


def is_closed_curve(mesh: "Mesh", tol: float = epsilon) -> bool:
    """Return ``True`` if a sampled curve ends where it starts."""

    if mesh.cell_type != 'line' or len(mesh.points) < 2:
        return False
    first = mesh.points[0].tolist()
    last = mesh.points[-1].tolist()
    return dist(first, last) <= tol


def faces_oriented(mesh: "Mesh") -> CheckResult:
    """Check that the triangles of a sampled patch share one orientation.

    Adjacent triangles are consistently oriented when every interior
    edge is traversed once in each direction.  Triangle normals are not
    compared against a global reference, since curved patches turn.
    """
    if mesh.cell_type != 'quad':
        raise ValueError('faces_oriented expects a patch mesh')

    pts = [tuple(p) for p in mesh.points.tolist()]
    directed = Counter()
    live = 0
    for tri in mesh.triangles().tolist():
        a, b, c = tri
        if triangle_normal(pts[a], pts[b], pts[c]) is None:
            continue
        live += 1
        directed[(a, b)] += 1
        directed[(b, c)] += 1
        directed[(c, a)] += 1

    if not live:
        return CheckResult(True, ['no non-degenerate faces found'])
    clashes = [edge for edge, count in directed.items() if count > 1]
    if clashes:
        return CheckResult(False, [f'inconsistent face orientation along edges: {clashes[:10]}'])
    return CheckResult(True, [])


def surface_watertight(mesh: "Mesh", tol: float = epsilon) -> CheckResult:
    """Check a sampled patch for open boundary edges.

    Grid points that coincide in space (for example the seam of a
    sphere, or a pole) are welded within ``tol`` before edges are
    counted.
    """
    if mesh.cell_type != 'quad':
        raise ValueError('surface_watertight expects a patch mesh')

    weld = _weld(mesh.points.tolist(), tol)
    edges = Counter()
    for tri in mesh.triangles().tolist():
        a, b, c = (weld[i] for i in tri)
        if a == b or b == c or c == a:
            continue
        edges[_edge_key(a, b)] += 1
        edges[_edge_key(b, c)] += 1
        edges[_edge_key(c, a)] += 1

    boundary = [edge for edge, count in edges.items() if count == 1]
    invalid = [edge for edge, count in edges.items() if count > 2]

    warnings: List[str] = []
    ok = True
    if boundary:
        ok = False
        warnings.append(f'{len(boundary)} boundary edges detected')
    if invalid:
        ok = False
        warnings.append(f'edges with multiplicity >2: {invalid[:10]}')

    return CheckResult(ok, warnings)


def _weld(points, tol: float) -> List[int]:
    """Map every point index to the index of its first coincident point."""
    cell = max(tol, 1e-12)
    buckets = {}
    out = []
    for i, p in enumerate(points):
        if not (isfinite(p[0]) and isfinite(p[1]) and isfinite(p[2])):
            out.append(i)
            continue
        key = (round(p[0] / cell), round(p[1] / cell), round(p[2] / cell))
        found = _find_near(points, buckets, key, p, tol)
        if found is None:
            buckets.setdefault(key, []).append(i)
            found = i
        out.append(found)
    return out


def _find_near(points, buckets, key, p, tol: float):
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            for dz in (-1, 0, 1):
                for j in buckets.get((key[0] + dx, key[1] + dy, key[2] + dz), ()):
                    if dist(points[j], p) <= tol:
                        return j
    return None


def _edge_key(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a < b else (b, a)


__all__ = [
    'CheckResult',
    'check_map',
    'check_arity',
    'check_same_arity',
    'check_resolution',
    'in_domain',
    'check_domain',
    'mesh_finite',
    'degenerate_cells',
    'is_closed_curve',
    'faces_oriented',
    'surface_watertight',
]
