"""Primitive homotopy maps and common parametric shapes.

Everything here returns a lazy map; no point is computed until the map
is evaluated or sampled.

Primitives:
- identity_curve / identity_quad / identity_cube: the parameter tuple
  itself, padded with zeros to a 3D point
- line, lerp_curves, quadratic_bezier, cubic_bezier: curves
- coons_quad, smooth_quad: curved quads spanned by four boundary curves
- circle: a flat disc parameterized by angle and radius
- sphere, cylinder: solid volumes parameterized by two coordinates plus
  radius; sphere_surface and cylinder_surface are their outer skins

Angles are expressed as a fraction of a full turn: a parameter of 0
starts on the +x axis and 1 comes back to it.

Copyright (c) 2026 yapHomotopy contributors
MIT License
"""

from math import cos, sin, sqrt

from yaphomotopy.combinators import boundary
from yaphomotopy.diagnostics import check_arity
from yaphomotopy.maps import Curve, Patch, Volume
from yaphomotopy.vec import add, lerp, pi2, scale3, sub, vec3


# -----------------------------------------------------------------------------
# Identity maps
# -----------------------------------------------------------------------------

def identity_curve():
    """The unit segment from ``(0, 0, 0)`` to ``(1, 0, 0)``."""
    return Curve(lambda t: (t, 0.0, 0.0), 'identity_curve')


def identity_quad():
    """The unit square in the XY plane."""
    return Patch(lambda u, v: (u, v, 0.0), 'identity_quad')


def identity_cube():
    """The unit cube."""
    return Volume(lambda u, v, w: (u, v, w), 'identity_cube')


# -----------------------------------------------------------------------------
# Curves
# -----------------------------------------------------------------------------

def line(a, b):
    """Create the straight curve from ``a`` to ``b``.

    Parameters
    ----------
    a, b : point
        Start and end points.

    Returns
    -------
    Curve
        A curve that hits ``a`` exactly at 0 and ``b`` exactly at 1.
    """
    pa = vec3(a)
    pb = vec3(b)
    return Curve(lambda t: lerp(pa, pb, t))


def lerp_curves(a, b):
    """Interpolate between two curves along their own parameter.

    Returns the curve ``t -> (1 - t) * a(t) + t * b(t)``: it starts on
    ``a`` and ends on ``b``.
    """
    check_arity(a, 1, 'lerp_curves')
    check_arity(b, 1, 'lerp_curves')
    fa = a.fn
    fb = b.fn
    return Curve(lambda t: lerp(fa(t), fb(t), t))


def quadratic_bezier(a, b, c):
    """Quadratic Bezier curve with control points ``a``, ``b``, ``c``."""
    pa, pb, pc = vec3(a), vec3(b), vec3(c)

    def f(t):
        return lerp(lerp(pa, pb, t), lerp(pb, pc, t), t)

    return Curve(f)


def cubic_bezier(a, b, c, d):
    """Cubic Bezier curve with control points ``a``, ``b``, ``c``, ``d``.

    Evaluated by De Casteljau interpolation.
    """
    pa, pb, pc, pd = vec3(a), vec3(b), vec3(c), vec3(d)

    def f(t):
        ab = lerp(pa, pb, t)
        bc = lerp(pb, pc, t)
        cd = lerp(pc, pd, t)
        return lerp(lerp(ab, bc, t), lerp(bc, cd, t), t)

    return Curve(f)


# -----------------------------------------------------------------------------
# Quads spanned by boundary curves
# -----------------------------------------------------------------------------

def _check_edges(what, *edges):
    for e in edges:
        check_arity(e, 1, what)
    return tuple(e.fn for e in edges)


def coons_quad(ab, cd, ac, bd):
    """Bilinearly blended Coons patch through four boundary curves.

    Parameters
    ----------
    ab : Curve
        Edge at u=0, driven by v.
    cd : Curve
        Edge at u=1, driven by v.
    ac : Curve
        Edge at v=0, driven by u.
    bd : Curve
        Edge at v=1, driven by u.

    The corners are taken from ``ab`` and ``cd``.  When the four curves
    meet at the corners, the patch reproduces every edge exactly.
    """
    fab, fcd, fac, fbd = _check_edges('coons_quad', ab, cd, ac, bd)

    def f(u, v):
        ruled_u = lerp(fab(v), fcd(v), u)
        ruled_v = lerp(fac(u), fbd(u), v)
        corners = lerp(lerp(fab(0.0), fcd(0.0), u), lerp(fab(1.0), fcd(1.0), u), v)
        return sub(add(ruled_u, ruled_v), corners)

    return Patch(f)


def smooth_quad(ab, cd, ac, bd, smooth=0.0):
    """Curved quad built by smoothing between four boundary curves.

    The two ruled interpolants (between ``ab`` and ``cd`` across u, and
    between ``ac`` and ``bd`` across v) are mixed with weights that grow
    quadratically towards the edges, ``4*(u - 1/2)**2 + smooth`` and
    ``4*(v - 1/2)**2 + smooth``.  Larger ``smooth`` values even out the
    mix.  Edge layout is the same as for ``coons_quad``.
    """
    fab, fcd, fac, fbd = _check_edges('smooth_quad', ab, cd, ac, bd)
    smooth = float(smooth)

    def f(u, v):
        a = lerp(fab(v), fcd(v), u)
        b = lerp(fac(u), fbd(u), v)

        w0 = 4.0 * (u - 0.5) * (u - 0.5) + smooth
        w1 = 4.0 * (v - 0.5) * (v - 0.5) + smooth
        total = w0 + w1
        if total == 0.0:
            return scale3(add(a, b), 0.5)
        w0, w1 = w0 / total, w1 / total
        if w0 == 1.0:
            return a
        if w1 == 1.0:
            return b
        return add(scale3(a, w0), scale3(b, w1))

    return Patch(f)


# -----------------------------------------------------------------------------
# Round shapes
# -----------------------------------------------------------------------------

def circle(center, radius):
    """Create a flat disc located at ``center`` with ``radius``.

    The first parameter is the angle, a full turn from 0 to 1.  The
    second is the radius, from the center at 0 to the rim at 1.  The
    disc lies in the plane ``z = center[2]``.
    """
    cx, cy, cz = vec3(center)
    r = float(radius)

    def f(u, v):
        angle = u * pi2
        return (cx + r * v * cos(angle),
                cy + r * v * sin(angle),
                cz)

    return Patch(f)


def sphere(center, radius):
    """Create a solid ball located at ``center`` with ``radius``.

    The first parameter rotates around the z axis.  The second runs
    from the bottom of the sphere (0) to the top (1).  The third is the
    radius, from the axis at 0 to the skin at 1.
    """
    cx, cy, cz = vec3(center)
    r = float(radius)

    def f(u, v, w):
        angle = u * pi2
        tz = 2.0 * v - 1.0
        rad = r * sqrt(max(0.0, 1.0 - tz * tz))
        return (cx + rad * w * cos(angle),
                cy + rad * w * sin(angle),
                cz - r + 2.0 * r * v)

    return Volume(f)


def cylinder(center, radius, height):
    """Create a solid cylinder standing on ``center`` along +z.

    Parameters are angle, height fraction and radius fraction.
    """
    cx, cy, cz = vec3(center)
    r = float(radius)
    h = float(height)

    def f(u, v, w):
        angle = u * pi2
        return (cx + r * w * cos(angle),
                cy + r * w * sin(angle),
                cz + h * v)

    return Volume(f)


def sphere_surface(center, radius):
    """The skin of ``sphere(center, radius)`` as a Patch (angle, height)."""
    return boundary(sphere(center, radius), 'param3=1')


def cylinder_surface(center, radius, height):
    """The mantle of ``cylinder(center, radius, height)`` as a Patch."""
    return boundary(cylinder(center, radius, height), 'param3=1')
