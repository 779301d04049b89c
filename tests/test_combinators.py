"""Tests for the combinator library."""

from functools import partial
from math import sqrt

import pytest

from yaphomotopy.combinators import (
    ProductRule, blend, boundary, boundary_names, chain, concat, constant,
    contour, extrude, margin, mirror, mirror_concat, offset, product,
    promote, reparameterize, reverse, segment, slice, transform,
)
from yaphomotopy.errors import ArityMismatch, DimensionError, InvalidBoundary
from yaphomotopy.maps import Curve, Patch, Volume, curve, evaluate, patch, volume
from yaphomotopy.shapes import identity_cube, identity_curve, identity_quad, line
from yaphomotopy.xform import Rotation, Scale, Translation, compose

TICKS = [i / 8 for i in range(9)]


def _wavy():
    return curve(lambda t: (t, t * t, 1.0 - t / 3.0))


def _saddle():
    return patch(lambda u, v: (u, v, u * u - v * v))


def _close3(a, b, tol=1e-12):
    return all(abs(x - y) <= tol for x, y in zip(a, b))


class TestConstant:

    def test_ignores_parameters(self):
        for arity, params in ((1, [0.3]), (2, [0.1, 0.9]), (3, [1, 0, 0.5])):
            c = constant([1, 2, 3], arity)
            assert c.arity == arity
            assert evaluate(c, params) == (1.0, 2.0, 3.0)

    def test_bad_point(self):
        with pytest.raises(ValueError):
            constant([1, 2])


class TestTransform:

    def test_translate_and_scale(self):
        c = _wavy()
        moved = transform(c, compose(Scale(2.0), Translation([1, 0, 0])))
        assert isinstance(moved, Curve)
        x, y, z = c(0.5)
        assert _close3(moved(0.5), (2 * x + 1, 2 * y, 2 * z))

    def test_rotation_about_z(self):
        turned = transform(identity_curve(), Rotation([0, 0, 1], 90))
        assert _close3(turned(1.0), (0.0, 1.0, 0.0))

    def test_requires_matrix(self):
        with pytest.raises(TypeError):
            transform(identity_curve(), [[1, 0, 0, 0]] * 4)

    def test_offset(self):
        q = offset(identity_quad(), (0, 0, 5))
        assert q(0.25, 0.75) == (0.25, 0.75, 5.0)

    def test_mirror(self):
        c = mirror(_wavy(), 'x', 1.0)
        x, y, z = _wavy()(0.25)
        assert _close3(c(0.25), (2.0 - x, y, z))
        with pytest.raises(ValueError):
            mirror(_wavy(), 'q')

    def test_operand_untouched(self):
        c = _wavy()
        before = [c(t) for t in TICKS]
        offset(c, (1, 1, 1))
        mirror(c, 'y')
        assert [c(t) for t in TICKS] == before


class TestPromoteSlice:

    def test_promote_arity(self):
        assert isinstance(promote(identity_curve(), [0]), Patch)
        assert isinstance(promote(identity_curve(), [0, 0]), Volume)
        assert isinstance(promote(identity_quad(), [0]), Volume)

    def test_promote_identity_builds_square_and_cube(self):
        square = promote(identity_curve(), [0])
        cube = promote(square, [0])
        assert square(0.25, 0.75) == (0.25, 0.75, 0.0)
        assert cube(0.25, 0.5, 0.75) == (0.25, 0.5, 0.75)

    def test_promote_reproduces_map_at_anchor(self):
        c = _wavy()
        lifted = promote(c, [0.3])
        for t in TICKS:
            assert lifted(t, 0.3) == c(t)

    def test_promote_zero_direction_ignores_parameter(self):
        c = _wavy()
        flat = promote(c, [0.0], directions=[(0, 0, 0)])
        for t in TICKS:
            assert flat(t, 0.0) == flat(t, 1.0) == c(t)

    def test_promote_custom_direction(self):
        raised = promote(identity_curve(), [0.0], directions=[(0, 0, 2)])
        assert raised(0.5, 0.5) == (0.5, 0.0, 1.0)

    def test_promote_errors(self):
        with pytest.raises(DimensionError):
            promote(identity_curve(), [])
        with pytest.raises(DimensionError):
            promote(identity_curve(), [0, 0, 0])
        with pytest.raises(DimensionError):
            promote(identity_cube(), [0])
        with pytest.raises(DimensionError):
            promote(identity_curve(), [0], directions=[(1, 0, 0), (0, 1, 0)])
        with pytest.raises(DimensionError):
            promote(identity_curve(), 0)

    @pytest.mark.parametrize('v', [0.0, 0.4, 1.0])
    def test_slice_inverts_promote(self, v):
        c = _wavy()
        back = slice(promote(c, [v]), [v])
        assert isinstance(back, Curve)
        for t in TICKS:
            assert back(t) == c(t)

    def test_slice_mapping_keeps_free_order(self):
        v = volume(lambda a, b, c: (a, b, c))
        s = slice(v, {1: 0.5})
        assert isinstance(s, Patch)
        assert s(0.1, 0.9) == (0.1, 0.5, 0.9)
        s0 = slice(v, {0: 0.25, 2: 1.0})
        assert s0(0.75) == (0.25, 0.75, 1.0)

    def test_slice_sequence_pins_trailing(self):
        v = volume(lambda a, b, c: (a, b, c))
        assert slice(v, [0.5])(0.1, 0.2) == (0.1, 0.2, 0.5)
        assert slice(v, [0.5, 0.6])(0.1) == (0.1, 0.5, 0.6)

    def test_slice_errors(self):
        with pytest.raises(DimensionError):
            slice(identity_curve(), [0.5])
        with pytest.raises(DimensionError):
            slice(identity_quad(), [0.5, 0.5])
        with pytest.raises(DimensionError):
            slice(identity_quad(), [])
        with pytest.raises(DimensionError):
            slice(identity_quad(), {2: 0.5})
        with pytest.raises(DimensionError):
            slice(identity_quad(), 0.5)


class TestBoundary:

    def test_boundary_of_promoted_curve(self):
        c = _wavy()
        edge = boundary(promote(c, [0]), 'param2=0')
        assert isinstance(edge, Curve)
        for t in TICKS:
            assert edge(t) == c(t)

    def test_patch_edges(self):
        q = identity_quad()
        assert boundary(q, 'param1=1')(0.5) == (1.0, 0.5, 0.0)
        assert boundary(q, 'param2=1')(0.5) == (0.5, 1.0, 0.0)
        assert boundary(q, 'v=0')(0.25) == (0.25, 0.0, 0.0)
        assert boundary(q, (0, 0))(0.25) == (0.0, 0.25, 0.0)

    def test_cube_faces(self):
        face = boundary(identity_cube(), 'param3=1')
        assert isinstance(face, Patch)
        assert face(0.2, 0.4) == (0.2, 0.4, 1.0)
        side = boundary(identity_cube(), 'param1=0')
        assert side(0.2, 0.4) == (0.0, 0.2, 0.4)

    def test_boundary_names(self):
        assert boundary_names(identity_quad()) == ['param1=0', 'param1=1', 'param2=0', 'param2=1']
        assert len(boundary_names(identity_cube())) == 6
        assert boundary_names(identity_curve()) == []

    @pytest.mark.parametrize('which', ['param3=0', 'param2=2', 'top', 'w=1', (2, 0), (0, 0.5), 7])
    def test_invalid_identifiers(self, which):
        with pytest.raises(InvalidBoundary):
            boundary(identity_quad(), which)

    def test_curve_has_no_map_boundary(self):
        with pytest.raises(InvalidBoundary):
            boundary(identity_curve(), 'param1=0')


class TestBlend:

    def test_endpoints_exact(self):
        a = _wavy()
        b = curve(lambda t: (sqrt(t), 0.1 * t, 3.0))
        at0 = blend(a, b, 0)
        at1 = blend(a, b, 1)
        for t in TICKS:
            assert at0(t) == a(t)
            assert at1(t) == b(t)

    @pytest.mark.parametrize('t', [0.1, 0.25, 0.5, 0.9])
    def test_linearity(self, t):
        a = _saddle()
        b = patch(lambda u, v: (u + 1, 2 * v, u * v))
        mid = blend(a, b, t)
        for u in (0.0, 0.3, 1.0):
            for v in (0.0, 0.6, 1.0):
                pa, pb = a(u, v), b(u, v)
                want = tuple((1 - t) * x + t * y for x, y in zip(pa, pb))
                assert mid(u, v) == pytest.approx(want, abs=1e-12)

    def test_constant_blend(self):
        m = blend(constant([0, 0, 0]), constant([1, 1, 1]), 0.5)
        assert m(0.7) == (0.5, 0.5, 0.5)

    def test_family_parameter(self):
        a = identity_curve()
        b = offset(identity_curve(), (0, 2, 0))
        fam = blend(a, b, 'param')
        assert isinstance(fam, Patch)
        assert fam(0.5, 0.0) == a(0.5)
        assert fam(0.5, 1.0) == b(0.5)
        assert fam(0.5, 0.5) == pytest.approx((0.5, 1.0, 0.0))

    def test_family_too_many_parameters(self):
        with pytest.raises(DimensionError):
            blend(identity_cube(), identity_cube(), 'param')

    def test_arity_mismatch(self):
        with pytest.raises(ArityMismatch):
            blend(identity_curve(), identity_quad(), 0.5)

    @pytest.mark.parametrize('t', [-0.1, 1.5, 'half', None, True])
    def test_bad_factor(self, t):
        with pytest.raises((ValueError, TypeError)):
            blend(identity_curve(), identity_curve(), t)


class TestProduct:

    def test_sum(self):
        p = product(line([0, 0, 0], [1, 0, 0]), line([0, 0, 0], [0, 0, 2]))
        assert isinstance(p, Patch)
        assert p(0.5, 0.5) == (0.5, 0.0, 1.0)

    def test_loft(self):
        low = line([0, 0, 0], [1, 0, 0])
        high = line([0, 0, 1], [1, 0, 1])
        p = product(low, high, ProductRule.LOFT)
        assert p(0.25, 0.0) == low(0.25)
        assert p(0.25, 1.0) == high(0.25)
        assert p(0.25, 0.5) == pytest.approx((0.25, 0.0, 0.5))

    def test_tensor(self):
        a = line([1, 1, 1], [2, 2, 2])
        b = line([0, 0, 0], [1, 2, 3])
        p = product(a, b, 'tensor', merge=lambda pa, pb: tuple(x * y for x, y in zip(pa, pb)))
        assert p(0.0, 1.0) == (1.0, 2.0, 3.0)

    def test_tensor_needs_merge(self):
        with pytest.raises(ValueError):
            product(identity_curve(), identity_curve(), ProductRule.TENSOR)

    def test_merge_only_for_tensor(self):
        with pytest.raises(ValueError):
            product(identity_curve(), identity_curve(), ProductRule.SUM, merge=lambda a, b: a)

    def test_curves_only(self):
        with pytest.raises(ArityMismatch):
            product(identity_quad(), identity_curve())

    def test_extrude(self):
        path = line([0, 0, 0], [0, 0, 4])
        prism = extrude(path, identity_quad())
        assert isinstance(prism, Volume)
        assert prism(0.5, 0.25, 0.75) == (0.25, 0.75, 2.0)
        with pytest.raises(ArityMismatch):
            extrude(identity_quad(), identity_curve())
        with pytest.raises(ArityMismatch):
            extrude(path, identity_cube())


class TestReparameterize:

    def test_single_warp(self):
        sq = reparameterize(identity_curve(), lambda t: t * t)
        assert sq(0.5) == (0.25, 0.0, 0.0)

    def test_clamped(self):
        wild = reparameterize(identity_curve(), lambda t: 3 * t - 1)
        assert wild(0.0) == (0.0, 0.0, 0.0)
        assert wild(1.0) == (1.0, 0.0, 0.0)

    def test_per_axis(self):
        q = reparameterize(identity_quad(), [None, lambda v: 1 - v])
        assert q(0.25, 0.25) == (0.25, 0.75, 0.0)

    def test_count_checked(self):
        with pytest.raises(DimensionError):
            reparameterize(identity_quad(), [None])
        with pytest.raises(TypeError):
            reparameterize(identity_curve(), ['nope'])

    def test_segment_and_reverse(self):
        c = _wavy()
        r = reverse(c)
        s = segment(c, 1, 0)
        for t in TICKS:
            assert r(t) == s(t) == c(1.0 - t)
        half = segment(identity_curve(), 0.5, 1.0)
        assert half(0.0) == (0.5, 0.0, 0.0)
        with pytest.raises(DimensionError):
            segment(identity_curve(), 0, 1, axis=1)

    def test_margin(self):
        m = margin(identity_curve(), 0.25)
        assert m(0.0) == pytest.approx((0.25 / 1.5, 0.0, 0.0))
        assert m(1.0) == pytest.approx((1.25 / 1.5, 0.0, 0.0))
        with pytest.raises(ValueError):
            margin(identity_curve(), -0.1)


class TestJoining:

    def test_concat(self):
        a = line([0, 0, 0], [1, 0, 0])
        b = line([1, 0, 0], [1, 1, 0])
        joined = concat(a, b, 0.25)
        assert joined(0.0) == (0.0, 0.0, 0.0)
        assert joined(0.125) == pytest.approx((0.5, 0.0, 0.0))
        assert joined(0.25) == (1.0, 0.0, 0.0)
        assert joined(1.0) == (1.0, 1.0, 0.0)

    def test_concat_errors(self):
        with pytest.raises(ArityMismatch):
            concat(identity_curve(), identity_quad())
        with pytest.raises(ValueError):
            concat(identity_curve(), identity_curve(), 1.0)
        with pytest.raises(DimensionError):
            concat(identity_quad(), identity_quad(), 0.5, axis=2)

    def test_mirror_concat_symmetric(self):
        half = patch(lambda u, v: (1.0 + u, v, u * v))
        both = mirror_concat(half, 'x', 0.0)
        for u in (0.0, 0.2, 0.4):
            for v in (0.0, 0.5, 1.0):
                x, y, z = both(u, v)
                mx, my, mz = both(u + 0.5, v)
                assert mx == pytest.approx(-x)
                assert (my, mz) == pytest.approx((y, z))

    def test_mirror_concat_default_axis_fits_arity(self):
        # a curve has only parameter 0 to split
        ring = mirror_concat(curve(lambda t: (t, 1.0 + t, 0.0)), 'y')
        assert ring(0.25) == (0.5, 1.5, 0.0)
        assert ring(0.75) == (0.5, -1.5, 0.0)
        # a patch mirrored in z splits its second parameter
        sheet = mirror_concat(identity_quad(), 'z', 1.0)
        assert sheet(0.5, 0.25) == (0.5, 0.5, 0.0)
        assert sheet(0.5, 0.75) == (0.5, 0.5, 2.0)
        with pytest.raises(DimensionError):
            mirror_concat(identity_curve(), 'y', param_axis=1)
        assert mirror_concat(identity_curve(), 'y', param_axis=0)(0.75) == (0.5, 0.0, 0.0)

    def test_contour_corners(self):
        ring = contour(identity_quad())
        assert isinstance(ring, Curve)
        assert ring(0.0) == (0.0, 0.0, 0.0)
        assert ring(0.25) == (1.0, 0.0, 0.0)
        assert ring(0.5) == (1.0, 1.0, 0.0)
        assert ring(0.75) == (0.0, 1.0, 0.0)
        assert ring(1.0) == (0.0, 0.0, 0.0)
        with pytest.raises(ArityMismatch):
            contour(identity_curve())


class TestChain:

    def test_chain_order(self):
        lift = chain(partial(promote, axis_values=[0]), partial(promote, axis_values=[0]))
        cube = lift(identity_curve())
        assert isinstance(cube, Volume)
        assert cube(1, 1, 1) == (1.0, 1.0, 1.0)

    def test_empty_chain_is_identity(self):
        c = identity_curve()
        assert chain()(c) is c

    def test_chain_rejects_non_callables(self):
        with pytest.raises(TypeError):
            chain(promote, 3)
