## error taxonomy for yapHomotopy

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

"""Exceptions raised by yapHomotopy.

Every error the library raises on purpose derives from
``HomotopyError``.  The concrete classes also derive from ``ValueError``
so that callers who only care about "bad argument" can catch that.

All of these are raised when a combinator is constructed or when
``sample`` is invoked.  They are detected from metadata alone (arities
and counts) and never require evaluating a user-supplied function.
Numeric failures inside user functions (NaN, inf) are not errors here;
they flow into the sampled mesh unchanged.
"""


class HomotopyError(Exception):
    """Base exception for yapHomotopy errors."""
    pass


class ArityMismatch(HomotopyError, ValueError):
    """Operands or parameters disagree about the number of inputs."""
    pass


class DimensionError(HomotopyError, ValueError):
    """A dimension-changing combinator got an inconsistent parameter count."""
    pass


class InvalidBoundary(HomotopyError, ValueError):
    """A boundary identifier does not name a boundary of the map."""
    pass


class InvalidResolution(HomotopyError, ValueError):
    """A sampling resolution is malformed or below two samples on an axis."""
    pass


class DomainViolation(HomotopyError, ValueError):
    """Evaluation parameters fall outside the unit domain.

    Advisory: only raised when the engine runs with the ``'raise'``
    domain policy.
    """
    pass


__all__ = [
    'HomotopyError',
    'ArityMismatch',
    'DimensionError',
    'InvalidBoundary',
    'InvalidResolution',
    'DomainViolation',
]
