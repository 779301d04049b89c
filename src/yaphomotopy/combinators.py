## higher order combinators over homotopy maps

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
==============================================================
combinators -- building new homotopy maps from existing ones
==============================================================

Every function here takes one or more maps plus constant arguments and
returns a *new* map.  Nothing is evaluated: the returned map closes
over the operands' raw functions and only calls them when it is itself
evaluated.  Operands are never modified and stay usable.

Arity and parameter-count preconditions are validated eagerly, when
the combinator is called, from metadata alone.  Mismatches are never
coerced:

- ``ArityMismatch``: operands of the wrong or of differing arity
- ``DimensionError``: inconsistent counts for ``promote``/``slice``
  and the other parameter-shaping combinators
- ``InvalidBoundary``: ``boundary`` identifiers that name nothing

Parameter axes are numbered from 0 in code.  Human readable boundary
identifiers number them from 1 (``"param1=0"``).
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Callable, Mapping, Optional, Sequence

from yaphomotopy.diagnostics import check_arity, check_map, check_same_arity
from yaphomotopy.errors import DimensionError, InvalidBoundary
from yaphomotopy.maps import HomotopyMap, map_class
from yaphomotopy.vec import add, clamp01, isgoodnum, lerp, vec3
from yaphomotopy.xform import Matrix, Mirror, Translation

_UNIT_AXES = ((1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0))


def _number(x, what):
    if not isgoodnum(x):
        raise ValueError('bad number passed to {}: {!r}'.format(what, x))
    return float(x)


def _param_axis(m, axis, what):
    if isinstance(axis, bool) or not isinstance(axis, int) or not 0 <= axis < m.arity:
        raise DimensionError('{}: bad parameter axis {!r} for a {} (arity {})'.format(
            what, axis, m.kind, m.arity))
    return axis


## constant and output-side transforms
## ------------------------------------

def constant(point, arity: int = 1) -> HomotopyMap:
    """A map of ``arity`` that ignores its parameters and returns ``point``."""
    pt = vec3(point)
    cls = map_class(arity)

    def f(*p):
        return pt

    return cls(f)


def transform(m: HomotopyMap, affine: Matrix) -> HomotopyMap:
    """Post-compose ``m`` with an affine matrix; arity is preserved."""
    check_map(m, 'transform')
    if not isinstance(affine, Matrix):
        raise TypeError('transform expects a yaphomotopy.xform.Matrix, got {!r}'.format(affine))
    fn = m.fn
    apply = affine.apply

    def f(*p):
        return apply(fn(*p))

    return type(m)(f)


def offset(m: HomotopyMap, delta) -> HomotopyMap:
    """Translate the output of ``m`` by ``delta``."""
    check_map(m, 'offset')
    return transform(m, Translation(delta))


def mirror(m: HomotopyMap, axis: str, at: float = 0.0) -> HomotopyMap:
    """Reflect the output of ``m`` across the plane ``axis = at``.

    ``axis`` is one of ``'x'``, ``'y'``, ``'z'``.
    """
    check_map(m, 'mirror')
    return transform(m, Mirror(axis, at))


## dimension promotion and demotion
## ------------------------------------

def promote(m: HomotopyMap, axis_values: Sequence[float],
            directions: Optional[Sequence] = None) -> HomotopyMap:
    """Lift ``m`` to a higher arity by appending parameters.

    One trailing parameter is added per entry of ``axis_values``.  Each
    entry is the anchor of its parameter: wherever every added
    parameter sits at its anchor, the promoted map reproduces ``m``.
    Moving an added parameter ``s`` away from its anchor ``v`` offsets
    the output by ``(s - v) * direction``.

    The default direction of the parameter at result index ``j`` is the
    unit vector of coordinate axis ``j``, so promoting the identity
    curve once gives the unit square and twice the unit cube.  A zero
    direction makes the added parameter ignored.
    """
    check_map(m, 'promote')
    try:
        anchors = tuple(_number(v, 'promote') for v in axis_values)
    except TypeError:
        raise DimensionError('promote expects a sequence of axis values, got {!r}'.format(axis_values)) from None
    k = len(anchors)
    n = m.arity
    if k == 0:
        raise DimensionError('promote needs at least one axis value')
    if n + k > 3:
        raise DimensionError('cannot promote a {} by {} axes; maps have at most 3 parameters'.format(
            m.kind, k))

    if directions is None:
        dirs = tuple(_UNIT_AXES[n + i] for i in range(k))
    else:
        dirs = tuple(vec3(d) for d in directions)
        if len(dirs) != k:
            raise DimensionError('promote got {} axis values but {} directions'.format(k, len(dirs)))

    active = tuple((n + i, anchors[i], dirs[i]) for i in range(k) if dirs[i] != (0.0, 0.0, 0.0))
    fn = m.fn

    def f(*p):
        x, y, z = fn(*p[:n])
        for i, v, d in active:
            s = p[i] - v
            x += s * d[0]
            y += s * d[1]
            z += s * d[2]
        return (x, y, z)

    return map_class(n + k)(f)


def slice(m: HomotopyMap, fixed_params) -> HomotopyMap:
    """Fix some parameters of ``m`` to constants, reducing its arity.

    ``fixed_params`` is either a sequence of values, which pins the
    trailing parameters in order, or a mapping ``{axis: value}`` that
    pins arbitrary axes.  The free parameters of the result keep their
    relative order.
    """
    check_map(m, 'slice')
    n = m.arity
    if isinstance(fixed_params, Mapping):
        fixed = {}
        for axis, value in fixed_params.items():
            fixed[_param_axis(m, axis, 'slice')] = _number(value, 'slice')
    else:
        try:
            values = [_number(v, 'slice') for v in fixed_params]
        except TypeError:
            raise DimensionError('slice expects a sequence or mapping, got {!r}'.format(fixed_params)) from None
        fixed = {n - len(values) + i: v for i, v in enumerate(values)}

    count = len(fixed)
    if count == 0:
        raise DimensionError('slice needs at least one fixed parameter')
    if count >= n:
        raise DimensionError('cannot fix {} parameter(s) of a {} (arity {})'.format(count, m.kind, n))

    free = tuple(i for i in range(n) if i not in fixed)
    template = [fixed.get(i, 0.0) for i in range(n)]
    fn = m.fn

    def f(*p):
        full = list(template)
        for i, x in zip(free, p):
            full[i] = x
        return fn(*full)

    return map_class(n - count)(f)


_BOUNDARY_RE = re.compile(r'^\s*(?:param\s*([1-3])|([uvw]))\s*=\s*([01])(?:\.0*)?\s*$')
_LETTERS = {'u': 1, 'v': 2, 'w': 3}


def boundary_names(m: HomotopyMap) -> list:
    """List the boundary identifiers valid for ``m``."""
    check_map(m, 'boundary_names')
    if m.arity < 2:
        return []
    return ['param{}={}'.format(k, side) for k in range(1, m.arity + 1) for side in (0, 1)]


def _parse_boundary(m, which):
    if isinstance(which, str):
        match = _BOUNDARY_RE.match(which)
        if not match:
            raise InvalidBoundary('bad boundary identifier {!r}; expected one of {}'.format(
                which, boundary_names(m)))
        k = int(match.group(1)) if match.group(1) else _LETTERS[match.group(2)]
        return k - 1, float(match.group(3))
    if isinstance(which, (tuple, list)) and len(which) == 2:
        axis, side = which
        if isinstance(axis, bool) or not isinstance(axis, int):
            raise InvalidBoundary('bad boundary axis in {!r}'.format(which))
        if side not in (0, 1) or isinstance(side, bool):
            raise InvalidBoundary('boundary side must be 0 or 1, got {!r}'.format(side))
        return axis, float(side)
    raise InvalidBoundary('bad boundary identifier {!r}'.format(which))


def boundary(m: HomotopyMap, which) -> HomotopyMap:
    """Extract a boundary of a Patch or Volume as a map of one lower arity.

    ``which`` is ``"param<k>=<0|1>"`` with ``k`` counted from 1 (the
    letters ``u``, ``v``, ``w`` may stand for parameters 1, 2, 3), or a
    tuple ``(axis, side)`` with ``axis`` counted from 0.  For a Patch,
    ``"param2=0"`` is the edge where the second parameter is 0; for a
    Volume it is a face of the cube.
    """
    check_map(m, 'boundary')
    if m.arity < 2:
        raise InvalidBoundary('a {} has no boundary that is itself a map'.format(m.kind))
    axis, side = _parse_boundary(m, which)
    if not 0 <= axis < m.arity:
        raise InvalidBoundary('boundary {!r} is not valid for a {}; expected one of {}'.format(
            which, m.kind, boundary_names(m)))
    return slice(m, {axis: side})


## homotopy interpolation and products
## ------------------------------------

def blend(a: HomotopyMap, b: HomotopyMap, t) -> HomotopyMap:
    """Homotopy interpolation ``(1 - t) * a(p) + t * b(p)``.

    ``t`` is a number in [0,1], or the string ``'param'`` to obtain the
    whole continuous family as a map with one extra trailing parameter
    carrying ``t``.  The endpoints are exact: ``t == 0`` reproduces
    ``a`` and ``t == 1`` reproduces ``b`` bit for bit.
    """
    n = check_same_arity(a, b, 'blend')
    fa = a.fn
    fb = b.fn

    if isinstance(t, str):
        if t != 'param':
            raise ValueError("blend factor must be a number or 'param', got {!r}".format(t))
        if n + 1 > 3:
            raise DimensionError('cannot blend {}s as a family; the result would need {} parameters'.format(
                a.kind, n + 1))

        def family(*p):
            q = p[:n]
            s = p[n]
            if s == 0:
                return fa(*q)
            if s == 1:
                return fb(*q)
            return lerp(fa(*q), fb(*q), s)

        return map_class(n + 1)(family)

    s = _number(t, 'blend')
    if not 0.0 <= s <= 1.0:
        raise ValueError('blend factor must lie in [0,1], got {}'.format(s))
    if s == 0.0:
        return type(a)(fa)
    if s == 1.0:
        return type(b)(fb)

    def f(*p):
        return lerp(fa(*p), fb(*p), s)

    return type(a)(f)


class ProductRule(Enum):
    """How ``product`` combines two curves into a patch."""

    SUM = 'sum'          # a(u) + b(v)
    LOFT = 'loft'        # (1 - v) * a(u) + v * b(u)
    TENSOR = 'tensor'    # merge(a(u), b(v))


def product(a: HomotopyMap, b: HomotopyMap, rule: ProductRule = ProductRule.SUM,
            merge: Optional[Callable] = None) -> HomotopyMap:
    """Combine two curves into a Patch.

    The first parameter of the patch drives ``a``.  Under ``SUM`` and
    ``TENSOR`` the second parameter drives ``b``; under ``LOFT`` it is the
    interpolation factor between ``a`` and ``b`` evaluated at the first
    parameter.  ``TENSOR`` requires ``merge(pa, pb) -> point``.
    """
    check_arity(a, 1, 'product')
    check_arity(b, 1, 'product')
    rule = ProductRule(rule)
    fa = a.fn
    fb = b.fn

    if rule is ProductRule.SUM:
        if merge is not None:
            raise ValueError('merge is only used by ProductRule.TENSOR')

        def f(u, v):
            return add(fa(u), fb(v))

    elif rule is ProductRule.LOFT:
        if merge is not None:
            raise ValueError('merge is only used by ProductRule.TENSOR')

        def f(u, v):
            if v == 0:
                return fa(u)
            if v == 1:
                return fb(u)
            return lerp(fa(u), fb(u), v)

    else:
        if not callable(merge):
            raise ValueError('ProductRule.TENSOR needs a callable merge function')

        def f(u, v):
            return merge(vec3(fa(u)), vec3(fb(v)))

    return map_class(2)(f)


def extrude(path: HomotopyMap, profile: HomotopyMap) -> HomotopyMap:
    """Sweep ``profile`` along ``path`` by adding their outputs.

    ``path`` is a Curve, ``profile`` a Curve or Patch.  The result has
    one more parameter than ``profile``; the path parameter comes first.
    """
    check_arity(path, 1, 'extrude')
    check_arity(profile, (1, 2), 'extrude')
    fa = path.fn
    fb = profile.fn

    def f(s, *q):
        return add(fa(s), fb(*q))

    return map_class(profile.arity + 1)(f)


## input-side reparameterization
## ------------------------------------

def reparameterize(m: HomotopyMap, warp) -> HomotopyMap:
    """Compose the input side of ``m`` with a scalar warp per axis.

    ``warp`` is one callable applied to every axis, or a sequence with
    one callable (or ``None`` for "leave alone") per parameter.  Warped
    values are clamped to [0,1].  Arity is unchanged.
    """
    check_map(m, 'reparameterize')
    n = m.arity
    if callable(warp):
        warps = (warp,) * n
    else:
        try:
            warps = tuple(warp)
        except TypeError:
            raise DimensionError('reparameterize expects a callable or a sequence, got {!r}'.format(warp)) from None
        if len(warps) != n:
            raise DimensionError('a {} needs {} warp(s), got {}'.format(m.kind, n, len(warps)))
        for w in warps:
            if w is not None and not callable(w):
                raise TypeError('bad non-callable warp: {!r}'.format(w))
    fn = m.fn

    def f(*p):
        return fn(*(x if w is None else clamp01(w(x)) for w, x in zip(warps, p)))

    return type(m)(f)


def _remap_axis(m, axis, g):
    fn = m.fn

    def f(*p):
        q = list(p)
        q[axis] = g(q[axis])
        return fn(*q)

    return type(m)(f)


def segment(m: HomotopyMap, start: float, end: float, axis: int = 0) -> HomotopyMap:
    """Pick the sub-range ``[start, end]`` of one parameter axis.

    ``segment(c, 1, 0)`` runs a curve backwards.
    """
    check_map(m, 'segment')
    axis = _param_axis(m, axis, 'segment')
    a = _number(start, 'segment')
    b = _number(end, 'segment')
    span = b - a
    return _remap_axis(m, axis, lambda x: a + span * x)


def reverse(m: HomotopyMap, axis: int = 0) -> HomotopyMap:
    """Reverse the direction of one parameter axis."""
    return segment(m, 1.0, 0.0, axis)


def margin(m: HomotopyMap, width: float) -> HomotopyMap:
    """Shrink the domain of ``m`` by ``width`` on every side of every axis.

    Parameter ``p`` maps to ``(p + width) / (1 + 2 * width)``.
    """
    check_map(m, 'margin')
    w = _number(width, 'margin')
    if w < 0:
        raise ValueError('margin width must be non-negative, got {}'.format(w))
    s = 1.0 / (1.0 + 2.0 * w)
    fn = m.fn

    def f(*p):
        return fn(*((x + w) * s for x in p))

    return type(m)(f)


## joining maps
## ------------------------------------

def concat(a: HomotopyMap, b: HomotopyMap, weight: float = 0.5, axis: int = 0) -> HomotopyMap:
    """Join two maps of the same arity along one parameter axis.

    Parameters below ``weight`` on ``axis`` drive ``a``, renormalized to
    [0,1]; the rest drive ``b``.
    """
    check_same_arity(a, b, 'concat')
    axis = _param_axis(a, axis, 'concat')
    w = _number(weight, 'concat')
    if not 0.0 < w < 1.0:
        raise ValueError('concat weight must lie strictly between 0 and 1, got {}'.format(w))
    fa = a.fn
    fb = b.fn
    rest = 1.0 - w

    def f(*p):
        q = list(p)
        x = q[axis]
        if x < w:
            q[axis] = x / w
            return fa(*q)
        q[axis] = (x - w) / rest
        return fb(*q)

    return type(a)(f)


_AXIS_INDEX = {'x': 0, 'y': 1, 'z': 2}


def mirror_concat(m: HomotopyMap, axis: str, at: float = 0.0,
                  param_axis: Optional[int] = None) -> HomotopyMap:
    """Join ``m`` with its mirror image across the plane ``axis = at``.

    The first half of ``param_axis`` traces ``m``, the second half
    traces the mirrored copy.  By default ``param_axis`` is the
    parameter with the same index as the coordinate axis, or the last
    parameter of ``m`` when it has fewer.
    """
    check_map(m, 'mirror_concat')
    if axis not in _AXIS_INDEX:
        raise ValueError("bad mirror axis, expected 'x', 'y' or 'z': {!r}".format(axis))
    if param_axis is None:
        param_axis = min(_AXIS_INDEX[axis], m.arity - 1)
    _param_axis(m, param_axis, 'mirror_concat')
    return concat(m, mirror(m, axis, at), 0.5, param_axis)


def contour(m: HomotopyMap) -> HomotopyMap:
    """The closed curve running around the edges of a Patch.

    ::

        0.0-0.25: [0, 0] -> [1, 0]
        0.25-0.5: [1, 0] -> [1, 1]
        0.5-0.75: [1, 1] -> [0, 1]
        0.75-1.0: [0, 1] -> [0, 0]
    """
    check_arity(m, 2, 'contour')
    fn = m.fn

    def f(t):
        if t < 0.25:
            return fn(4.0 * t, 0.0)
        elif t < 0.5:
            return fn(1.0, 4.0 * (t - 0.25))
        elif t < 0.75:
            return fn(1.0 - 4.0 * (t - 0.5), 1.0)
        return fn(0.0, 1.0 - 4.0 * (t - 0.75))

    return map_class(1)(f)


## pipelines
## ------------------------------------

def chain(*steps: Callable[[HomotopyMap], HomotopyMap]) -> Callable[[HomotopyMap], HomotopyMap]:
    """Compose single-argument map builders left to right.

    ``chain(f, g)(m) == g(f(m))``.  Use ``functools.partial`` or a lambda
    to bind the constant arguments of a combinator::

        lift = chain(lambda c: promote(c, [0]), lambda p: promote(p, [0]))
        cube = lift(identity_curve())
    """
    for step in steps:
        if not callable(step):
            raise TypeError('bad non-callable step passed to chain: {!r}'.format(step))

    def run(m):
        for step in steps:
            m = step(m)
        return m

    return run


__all__ = [
    'constant',
    'transform',
    'offset',
    'mirror',
    'promote',
    'slice',
    'boundary',
    'boundary_names',
    'blend',
    'ProductRule',
    'product',
    'extrude',
    'reparameterize',
    'segment',
    'reverse',
    'margin',
    'concat',
    'mirror_concat',
    'contour',
    'chain',
]
