## typed homotopy maps: the core representation of yapHomotopy

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
=====================================================
maps -- typed homotopy maps for yapHomotopy
=====================================================

A homotopy map is a pure function from the normalized parameter domain
[0,1]^n to a point in 3D space.  ``n`` is the *arity* of the map:

- ``Curve``: one parameter, a curved line
- ``Patch``: two parameters, a curved quad
- ``Volume``: three parameters, a curved cube

A "curved cube" need not look like a cube.  The identity volume is the
unit cube; other volumes deform it, e.g. into a sphere.  What makes it
a curved cube is that three parameters between 0 and 1 drive the
generation of points.

Each map wraps a raw Python callable taking ``arity`` positional float
parameters and returning three numbers.  Maps are immutable values: a
map never changes after construction, combinators always build new
maps, and any number of threads may evaluate the same map at once.

The wrapped function must be deterministic and free of hidden shared
mutable state.  This is a contract, not something the library can
check.  Continuity over the unit domain is likewise assumed, not
verified.

Parameters outside [0,1] are a contract violation.  ``evaluate``
passes them through to the wrapped function by default, which yields
a deterministic (but possibly meaningless) point; see
``yaphomotopy.diagnostics.check_domain`` for the stricter policies.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

from yaphomotopy.errors import ArityMismatch
from yaphomotopy.vec import Vec3, vec3

RawFn = Callable[..., Sequence[float]]


class HomotopyMap:
    """Base class of the arity-tagged homotopy maps."""

    __slots__ = ('_fn', '_name')

    arity = 0
    kind = 'map'

    def __init__(self, fn: RawFn, name: Optional[str] = None):
        if type(self) is HomotopyMap:
            raise TypeError('HomotopyMap is abstract; use Curve, Patch or Volume')
        if isinstance(fn, HomotopyMap):
            if fn.arity != self.arity:
                raise ArityMismatch('cannot wrap a {} as a {}'.format(fn.kind, self.kind))
            fn = fn.fn
        if not callable(fn):
            raise TypeError('bad non-callable passed to {}: {!r}'.format(self.kind, fn))
        object.__setattr__(self, '_fn', fn)
        object.__setattr__(self, '_name', name)

    def __setattr__(self, name, value):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    def __delattr__(self, name):
        raise AttributeError('{} is immutable'.format(type(self).__name__))

    @property
    def fn(self) -> RawFn:
        """The wrapped raw function."""
        return self._fn

    @property
    def name(self) -> Optional[str]:
        return self._name

    def named(self, name: str) -> 'HomotopyMap':
        """Return a map sharing this map's function under a new name."""
        return type(self)(self._fn, name)

    def __call__(self, *params: float) -> Vec3:
        if len(params) != self.arity:
            raise ArityMismatch('{} takes {} parameter(s), got {}'.format(
                self._label(), self.arity, len(params)))
        return vec3(self._fn(*params))

    def evaluate(self, params: Sequence[float]) -> Vec3:
        """Evaluate at a parameter sequence of length ``arity``."""
        return self(*_astuple(params))

    def _label(self) -> str:
        if self._name:
            return '{} {!r}'.format(self.kind, self._name)
        return self.kind

    def __repr__(self):
        if self._name:
            return '{}(name={!r})'.format(type(self).__name__, self._name)
        return '{}({!r})'.format(type(self).__name__, self._fn)


class Curve(HomotopyMap):
    """A ``1d -> 3d`` homotopy map."""
    __slots__ = ()
    arity = 1
    kind = 'curve'


class Patch(HomotopyMap):
    """A ``2d -> 3d`` homotopy map (curved quad)."""
    __slots__ = ()
    arity = 2
    kind = 'patch'


class Volume(HomotopyMap):
    """A ``3d -> 3d`` homotopy map (curved cube)."""
    __slots__ = ()
    arity = 3
    kind = 'volume'


_KINDS = {1: Curve, 2: Patch, 3: Volume}


def _astuple(params) -> tuple:
    if isinstance(params, (int, float)) and not isinstance(params, bool):
        return (params,)
    try:
        return tuple(params)
    except TypeError:
        raise ArityMismatch('bad parameters, expected a sequence: {!r}'.format(params)) from None


def map_class(arity: int):
    """Return the map class for ``arity`` (1, 2 or 3)."""
    try:
        return _KINDS[arity]
    except (KeyError, TypeError):
        raise ArityMismatch('bad arity, expected 1, 2 or 3: {!r}'.format(arity)) from None


def make_map(arity: int, fn: RawFn, name: Optional[str] = None) -> HomotopyMap:
    """Wrap ``fn`` as a map of the given arity."""
    return map_class(arity)(fn, name)


def curve(f: RawFn, name: Optional[str] = None) -> Curve:
    """Wrap ``f(t) -> (x, y, z)`` as a Curve."""
    return Curve(f, name)


def patch(f: RawFn, name: Optional[str] = None) -> Patch:
    """Wrap ``f(u, v) -> (x, y, z)`` as a Patch."""
    return Patch(f, name)


def volume(f: RawFn, name: Optional[str] = None) -> Volume:
    """Wrap ``f(u, v, w) -> (x, y, z)`` as a Volume."""
    return Volume(f, name)


def ismap(x) -> bool:
    return isinstance(x, HomotopyMap)


def iscurve(x) -> bool:
    return isinstance(x, Curve)


def ispatch(x) -> bool:
    return isinstance(x, Patch)


def isvolume(x) -> bool:
    return isinstance(x, Volume)


def evaluate(m: HomotopyMap, params, policy: Optional[str] = None,
             config=None) -> Vec3:
    """Apply ``m`` to ``params``.

    ``params`` is a sequence whose length matches the arity of ``m``
    (a bare number is accepted for a Curve).  A wrong length raises
    ``ArityMismatch``.  ``policy`` selects what happens to parameters
    outside [0,1]: ``'ignore'``, ``'warn'`` or ``'raise'``.  When it is
    not given, the ``domain_policy`` of ``config`` (an
    ``yaphomotopy.config.EngineConfig``) applies, and without a config
    the policy is ``'ignore'``.
    """
    if not isinstance(m, HomotopyMap):
        raise TypeError('bad non-map passed to evaluate: {!r}'.format(m))
    p = _astuple(params)
    if len(p) != m.arity:
        raise ArityMismatch('{} takes {} parameter(s), got {}'.format(
            m._label(), m.arity, len(p)))
    if policy is None:
        policy = config.domain_policy if config is not None else 'ignore'
    if policy != 'ignore':
        from yaphomotopy.diagnostics import check_domain
        check_domain(p, policy)
    return m(*p)


__all__ = [
    'HomotopyMap',
    'Curve',
    'Patch',
    'Volume',
    'map_class',
    'make_map',
    'curve',
    'patch',
    'volume',
    'ismap',
    'iscurve',
    'ispatch',
    'isvolume',
    'evaluate',
]
