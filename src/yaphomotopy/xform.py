## affine matrix transformations for homotopy map outputs

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

from math import cos, sin
from yaphomotopy.vec import epsilon, close, isgoodnum, isvec3, mag, pi2, vec3

## a matrix is represented as four rows of four numbers, acting on
## homogeneous column vectors [x, y, z, 1].  Points handed to
## Matrix.apply() are plain (x, y, z) tuples; they are lifted into
## homogeneous form, multiplied, and projected back onto the w=1
## plane.

## Matrix instances are immutable.  Every operation that would
## modify a matrix returns a new one instead, so a matrix captured by
## a transformed homotopy map can be shared freely between threads.


def _isrow(x):
    return (isinstance(x, (tuple, list)) and len(x) == 4
            and all(isgoodnum(e) for e in x))


class Matrix:
    """4x4 immutable transformation matrix for homogeneous 3D coordinates"""

    __slots__ = ('m',)

    def __init__(self, a=False, trans=False):
        m = [[1.0, 0.0, 0.0, 0.0],
             [0.0, 1.0, 0.0, 0.0],
             [0.0, 0.0, 1.0, 0.0],
             [0.0, 0.0, 0.0, 1.0]]

        if isinstance(a, Matrix):
            m = [list(r) for r in a.m]
        elif isinstance(a, (tuple, list)):
            if len(a) == 4 and all(_isrow(r) for r in a):
                m = [[float(x) for x in r] for r in a]
            elif len(a) == 16 and all(isgoodnum(x) for x in a):
                m = [[float(a[i * 4 + j]) for j in range(4)] for i in range(4)]
            else:
                raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))
        elif a is not False:
            raise ValueError('bad thing used in attempt to initialize matrix: {}'.format(a))

        if trans:
            m = [[m[j][i] for j in range(4)] for i in range(4)]
        object.__setattr__(self, 'm', tuple(tuple(r) for r in m))

    def __setattr__(self, name, value):
        raise AttributeError('Matrix is immutable')

    def __repr__(self):
        return "Matrix({},{},{},{})".format(*self.m)

    def __eq__(self, other):
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.m == other.m

    def __hash__(self):
        return hash(self.m)

    # return value indexed by i,j
    def get(self, i, j):
        if i < 0 or i > 3 or j < 0 or j > 3:
            raise ValueError('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    def getrow(self, i):
        if i < 0 or i > 3:
            raise ValueError('bad row passed to getrow: {}'.format(i))
        return self.m[i]

    def getcol(self, j):
        if j < 0 or j > 3:
            raise ValueError('bad column passed to getcol: {}'.format(j))
        return (self.m[0][j], self.m[1][j], self.m[2][j], self.m[3][j])

    def transpose(self):
        return Matrix(self, trans=True)

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # homogeneous 4 vector, compute Mx.  If x is a scalar, compute xM.
    def mul(self, x):
        if isinstance(x, Matrix):
            return Matrix([[sum(self.m[i][k] * x.m[k][j] for k in range(4))
                            for j in range(4)]
                           for i in range(4)])
        elif _isrow(x):
            return tuple(sum(self.m[i][k] * x[k] for k in range(4))
                         for i in range(4))
        elif isgoodnum(x):
            return Matrix([[e * x for e in r] for r in self.m])

        raise ValueError('bad thing passed to mul(): {}'.format(x))

    def apply(self, p):
        """Transform the 3D point ``p`` and return an ``(x, y, z)`` tuple.

        The point is treated as ``[x, y, z, 1]``; the result is
        projected back onto the w=1 plane, which is a no-op for affine
        matrices.
        """
        x, y, z = p[0], p[1], p[2]
        m = self.m
        rx = m[0][0] * x + m[0][1] * y + m[0][2] * z + m[0][3]
        ry = m[1][0] * x + m[1][1] * y + m[1][2] * z + m[1][3]
        rz = m[2][0] * x + m[2][1] * y + m[2][2] * z + m[2][3]
        rw = m[3][0] * x + m[3][1] * y + m[3][2] * z + m[3][3]
        if rw == 1.0:
            return (rx, ry, rz)
        return (rx / rw, ry / rw, rz / rw)

    def isaffine(self):
        """``True`` if the bottom row is ``[0, 0, 0, 1]``"""
        return self.m[3] == (0.0, 0.0, 0.0, 1.0)


def compose(*matrices):
    """Return the matrix that applies ``matrices`` left to right.

    ``compose(A, B)`` transforms a point by ``A`` first and then by
    ``B``, i.e. it returns ``B.mul(A)``.
    """
    result = Matrix()
    for x in matrices:
        if not isinstance(x, Matrix):
            raise ValueError('bad non-matrix passed to compose: {}'.format(x))
        result = x.mul(result)
    return result


# return the generalized 4x4 arbitrary axis rotation matrix, angle in
# degrees
def Rotation(axis, angle, inverse=False):
    u = vec3(axis)
    m = mag(u)
    if m < epsilon:
        raise ValueError('zero-length rotation axis not allowed')
    if not close(m, 1.0):
        u = (u[0] / m, u[1] / m, u[2] / m)

    if inverse:
        angle *= -1.0
    rad = (angle % 360.0) * pi2 / 360.0

    ux, uy, uz = u

    cang = cos(rad)
    cmin = 1.0 - cang
    sang = sin(rad)

    # see http://www.opengl-tutorial.org/assets/faq_quaternions/index.html#Q38
    R = [[cang + ux*ux*cmin, ux*uy*cmin - uz*sang, ux*uz*cmin + uy*sang, 0],
         [uy*ux*cmin + uz*sang, cang + uy*uy*cmin, uy*uz*cmin - ux*sang, 0],
         [uz*ux*cmin - uy*sang, uz*uy*cmin + ux*sang, cang + uz*uz*cmin, 0],
         [0, 0, 0, 1]]

    return Matrix(R)


def Translation(delta, inverse=False):
    dx, dy, dz = vec3(delta)
    if inverse:
        dx, dy, dz = -dx, -dy, -dz
    T = [[1, 0, 0, dx],
         [0, 1, 0, dy],
         [0, 0, 1, dz],
         [0, 0, 0, 1]]
    return Matrix(T)


def Scale(x, y=False, z=False, inverse=False):
    if isgoodnum(x):
        sx = x
        if isgoodnum(y) and isgoodnum(z):
            sy = y
            sz = z
        else:
            sy = sz = x
    elif isvec3(x):
        sx, sy, sz = x
    else:
        raise ValueError('bad scaling values passed to Scale')

    if inverse:
        if sx == 0 or sy == 0 or sz == 0:
            raise ValueError('cannot invert a degenerate scale: {}'.format((sx, sy, sz)))
        sx = 1.0 / sx
        sy = 1.0 / sy
        sz = 1.0 / sz

    S = [[sx, 0, 0, 0],
         [0, sy, 0, 0],
         [0, 0, sz, 0],
         [0, 0, 0, 1.0]]
    return Matrix(S)


_AXES = {'x': 0, 'y': 1, 'z': 2}


# reflection across the plane perpendicular to ``axis`` located at
# coordinate ``at``.  A mirror is its own inverse.
def Mirror(axis, at=0.0):
    if axis not in _AXES:
        raise ValueError("bad mirror axis, expected 'x', 'y' or 'z': {}".format(axis))
    if not isgoodnum(at):
        raise ValueError('bad mirror plane coordinate: {}'.format(at))
    k = _AXES[axis]
    M = [[1, 0, 0, 0],
         [0, 1, 0, 0],
         [0, 0, 1, 0],
         [0, 0, 0, 1]]
    M[k][k] = -1
    M[k][3] = 2.0 * at
    return Matrix(M)
