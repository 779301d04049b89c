import logging

import pytest

from yaphomotopy.combinators import contour
from yaphomotopy.diagnostics import (
    CheckResult, check_arity, check_domain, check_resolution, check_same_arity,
    degenerate_cells, faces_oriented, in_domain, is_closed_curve, mesh_finite,
    surface_watertight,
)
from yaphomotopy.errors import ArityMismatch, DomainViolation, InvalidResolution
from yaphomotopy.maps import curve, patch
from yaphomotopy.sampling import sample
from yaphomotopy.shapes import (
    circle, identity_cube, identity_curve, identity_quad, line, sphere,
    sphere_surface,
)


def test_check_result_truthiness():
    assert CheckResult(True, [])
    assert not CheckResult(False, ['bad'])


def test_check_arity():
    assert check_arity(identity_curve(), 1, 'test') is not None
    check_arity(identity_quad(), (1, 2), 'test')
    with pytest.raises(ArityMismatch) as exc:
        check_arity(identity_quad(), 1, 'test')
    assert 'patch' in str(exc.value)
    with pytest.raises(TypeError):
        check_arity('curve', 1, 'test')


def test_check_same_arity():
    assert check_same_arity(identity_quad(), identity_quad(), 'test') == 2
    with pytest.raises(ArityMismatch):
        check_same_arity(identity_curve(), identity_cube(), 'test')


def test_check_resolution_normalizes():
    assert check_resolution(identity_curve(), 4) == (4,)
    assert check_resolution(identity_quad(), [2, 9]) == (2, 9)
    with pytest.raises(InvalidResolution):
        check_resolution(identity_quad(), [2, 9, 3])
    with pytest.raises(InvalidResolution):
        check_resolution(identity_quad(), None)
    with pytest.raises(InvalidResolution):
        check_resolution(identity_curve(), [True])


def test_domain_checks(caplog):
    assert in_domain((0.0, 1.0, 0.5))
    assert not in_domain((0.0, 1.0001))
    assert not check_domain((-1.0,), 'ignore')
    with pytest.raises(DomainViolation):
        check_domain((2.0,), 'raise')
    with caplog.at_level(logging.WARNING, logger='yaphomotopy'):
        assert not check_domain((0.5, 1.5), 'warn')
    assert '(0.5, 1.5)' in caplog.text
    with pytest.raises(ValueError):
        check_domain((0.5,), 'panic')


def test_mesh_finite():
    assert mesh_finite(sample(identity_quad(), [3, 3]))
    bad = sample(curve(lambda t: (1.0 / t if t else float('inf'), 0, 0)), [4])
    result = mesh_finite(bad)
    assert not result
    assert 'index 0' in result.warnings[0]


def test_degenerate_cells():
    assert degenerate_cells(sample(identity_curve(), [4]))
    assert degenerate_cells(sample(identity_quad(), [3, 3]))
    assert degenerate_cells(sample(identity_cube(), [2, 2, 2]))
    # the disc collapses to its center along the v=0 edge, but quads keep area
    assert degenerate_cells(sample(circle([0, 0, 0], 1.0), [8, 3]))
    flat = patch(lambda u, v: (u, 0.0, 0.0))
    result = degenerate_cells(sample(flat, [3, 3]))
    assert not result
    assert '4 degenerate quad' in result.warnings[0]
    stuck = curve(lambda t: (0.0, 0.0, 0.0))
    assert not degenerate_cells(sample(stuck, [3]))


def test_is_closed_curve():
    assert is_closed_curve(sample(contour(identity_quad()), [9]))
    assert not is_closed_curve(sample(line([0, 0, 0], [1, 0, 0]), [5]))
    assert not is_closed_curve(sample(identity_quad(), [3, 3]))


def test_faces_oriented():
    assert faces_oriented(sample(identity_quad(), [4, 5]))
    assert faces_oriented(sample(sphere_surface([0, 0, 0], 1.0), [9, 7]))
    with pytest.raises(ValueError):
        faces_oriented(sample(identity_curve(), [3]))


def test_surface_watertight():
    open_square = surface_watertight(sample(identity_quad(), [3, 3]))
    assert not open_square
    assert '8 boundary edges' in open_square.warnings[0]
    # the seam at angle 0/1 and the poles weld shut
    assert surface_watertight(sample(sphere_surface([0, 0, 0], 1.0), [13, 9]))
    with pytest.raises(ValueError):
        surface_watertight(sample(sphere([0, 0, 0], 1.0), [3, 3, 3]))
