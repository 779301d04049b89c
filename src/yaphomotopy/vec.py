## three-vector helpers for yapHomotopy

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

"""scalar and 3-vector helpers for **yapHomotopy**

Points produced by homotopy maps are plain ``(x, y, z)`` tuples of
floats.  Unlike a homogeneous ``[x, y, z, w]`` representation, there is
no normalization coordinate: the codomain of every map is ordinary 3D
space, and affine transforms are applied through ``yaphomotopy.xform``
which lifts and projects points as needed.

constants
=========

``epsilon`` is the comparison tolerance used by ``close`` and the
diagnostics.  Redefine it at your peril.
"""

from __future__ import annotations

from math import sqrt, isfinite, pi
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]

## constants
epsilon = 0.000005
pi2 = 2.0 * pi


## operations on scalars
## -----------------------

def isgoodnum(n) -> bool:
    """determine if an argument is actually a scalar number, and not boolean"""
    return (not isinstance(n, bool)) and isinstance(n, (int, float))


def close(a: float, b: float, tol: float = epsilon) -> bool:
    """are two scalars the same within ``tol``"""
    return abs(a - b) < tol


def clamp01(x: float) -> float:
    """clamp a scalar into the unit interval"""
    if x < 0.0:
        return 0.0
    if x > 1.0:
        return 1.0
    return x


## operations on vectors
## ------------------------

def vec3(a) -> Vec3:
    """Convert any 3-sequence of numbers into a ``(x, y, z)`` float tuple.

    Raises ``ValueError`` if ``a`` does not have exactly three
    components.
    """
    try:
        x, y, z = a
    except (TypeError, ValueError):
        raise ValueError('bad point, expected three components: {}'.format(a)) from None
    return (float(x), float(y), float(z))


def isvec3(x) -> bool:
    """check to see if argument is a proper 3-vector for our purposes"""
    return (isinstance(x, (tuple, list)) and len(x) == 3
            and isgoodnum(x[0]) and isgoodnum(x[1]) and isgoodnum(x[2]))


def add(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """3 vector, `a + b`"""
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def sub(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """3 vector, `a - b`"""
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def scale3(a: Sequence[float], c: float) -> Vec3:
    """3 vector ``a`` times scalar ``c``"""
    return (a[0] * c, a[1] * c, a[2] * c)


def lerp(a: Sequence[float], b: Sequence[float], t: float) -> Vec3:
    """linear interpolation ``(1 - t) * a + t * b``

    Exact at the endpoints: ``t == 0`` returns ``a`` and ``t == 1``
    returns ``b`` component for component, with no rounding error.
    """
    if t == 0:
        return (float(a[0]), float(a[1]), float(a[2]))
    if t == 1:
        return (float(b[0]), float(b[1]), float(b[2]))
    s = 1.0 - t
    return (s * a[0] + t * b[0],
            s * a[1] + t * b[1],
            s * a[2] + t * b[2])


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    """3 vector ``a`` dot ``b``"""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence[float], b: Sequence[float]) -> Vec3:
    """3 vector ``a`` cross ``b``"""
    return (a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0])


def mag(a: Sequence[float]) -> float:
    """compute the magnitude of 3 vector ``a``"""
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def dist(a: Sequence[float], b: Sequence[float]) -> float:
    """euclidean distance between two 3 vector points ``a`` and ``b``"""
    return mag(sub(a, b))


def isfinite3(a: Sequence[float]) -> bool:
    """``True`` unless some component of ``a`` is NaN or infinite"""
    return isfinite(a[0]) and isfinite(a[1]) and isfinite(a[2])


## triangle helpers
## ------------------------

def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3 | None:
    """Return the unit normal of a triangle or ``None`` if degenerate."""

    n = cross(sub(v1, v0), sub(v2, v0))
    length = mag(n)
    if length <= epsilon:
        return None
    return (n[0] / length, n[1] / length, n[2] / length)


def triangle_area(v0: Vec3, v1: Vec3, v2: Vec3) -> float:
    """Return the area of a triangle."""

    return 0.5 * mag(cross(sub(v1, v0), sub(v2, v0)))


__all__ = [
    'Vec3',
    'epsilon',
    'pi2',
    'isgoodnum',
    'close',
    'clamp01',
    'vec3',
    'isvec3',
    'add',
    'sub',
    'scale3',
    'lerp',
    'dot',
    'cross',
    'mag',
    'dist',
    'isfinite3',
    'triangle_normal',
    'triangle_area',
]
