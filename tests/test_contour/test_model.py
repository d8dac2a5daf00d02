"""Tests for Contour: area, winding, reference points, cleanup."""

import pytest

from planecut.contour.model import Contour, heights_match
from planecut.core.errors import ContourInputError
from planecut.utils.geometry import Plane, Vec3

L_SHAPE = [
    [0.0, 0.0, 0.0], [4.0, 0.0, 0.0], [4.0, 1.0, 0.0],
    [1.0, 1.0, 0.0], [1.0, 4.0, 0.0], [0.0, 4.0, 0.0],
]


class TestHeightsMatch:
    def test_exact(self):
        assert heights_match(0.0, 0.0, 0.1)

    def test_within_tolerance(self):
        assert heights_match(100.05, 100.0, 0.1)
        assert not heights_match(100.5, 100.0, 0.1)

    def test_zero_reference_needs_exact_match(self):
        assert not heights_match(1e-12, 0.0, 0.1)


class TestSignedArea:
    def test_ccw_square(self, square):
        assert square.signed_area() == pytest.approx(16.0)

    def test_cw_square_is_negative(self, square):
        cw = Contour(points=list(reversed(square.points)))
        assert cw.signed_area() == pytest.approx(-16.0)

    def test_l_shape(self):
        assert Contour.from_coords(L_SHAPE).signed_area() == pytest.approx(7.0)

    def test_near_vertical_edges(self):
        tri = Contour.from_coords([[0.0, 0.0, 0.0], [1e-9, 5.0, 0.0], [-1.0, 5.0, 0.0]])
        assert tri.signed_area() == pytest.approx(2.5 + 2.5e-9)

    def test_fewer_than_three_points(self):
        assert Contour.from_coords([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]]).signed_area() == 0.0

    def test_repeated_points_contribute_nothing(self, square):
        doubled = Contour(points=[square.points[0]] + square.points)
        assert doubled.signed_area() == pytest.approx(16.0)

    def test_open_contour_raises(self, square):
        square.closed = False
        with pytest.raises(ContourInputError, match="open contour"):
            square.signed_area()

    def test_non_planar_raises(self):
        bent = Contour.from_coords([[0.0, 0.0, 1.0], [4.0, 0.0, 1.0], [4.0, 4.0, 2.0], [0.0, 4.0, 1.0]])
        with pytest.raises(ContourInputError, match="non-planar"):
            bent.signed_area()

    def test_tolerance_is_configurable(self):
        bent = Contour.from_coords([[0.0, 0.0, 100.0], [4.0, 0.0, 100.0], [4.0, 4.0, 101.0], [0.0, 4.0, 100.0]])
        assert bent.signed_area(height_tolerance_percent=2.0) == pytest.approx(16.0)


class TestOrientation:
    def test_is_counter_clockwise(self, square):
        assert square.is_counter_clockwise()
        assert not Contour(points=list(reversed(square.points))).is_counter_clockwise()

    def test_reorient_reverses_cw(self, square):
        cw = Contour(points=list(reversed(square.points)))
        cw.reorient_counter_clockwise()
        assert cw.points == square.points
        assert cw.signed_area() == pytest.approx(16.0)

    def test_reorient_keeps_ccw(self, square):
        before = list(square.points)
        square.reorient_counter_clockwise()
        assert square.points == before


class TestReferencePoints:
    def test_average_point(self, square):
        assert square.average_point() == Vec3(2.0, 2.0, 0.0)

    def test_average_of_empty_raises(self):
        with pytest.raises(ContourInputError):
            Contour().average_point()

    def test_first_n_point_avg(self, square):
        assert square.first_n_point_avg(2) == Vec3(2.0, 0.0, 0.0)
        assert square.first_n_point_avg(4) == square.average_point()

    @pytest.mark.parametrize("n", [0, -1, 5])
    def test_first_n_out_of_range(self, square, n):
        with pytest.raises(ContourInputError):
            square.first_n_point_avg(n)

    def test_centroid_of_square(self):
        lifted = Contour.from_coords([[0.0, 0.0, 3.0], [4.0, 0.0, 3.0], [4.0, 4.0, 3.0], [0.0, 4.0, 3.0]])
        c = lifted.centroid()
        assert c.x == pytest.approx(2.0)
        assert c.y == pytest.approx(2.0)
        assert c.z == pytest.approx(3.0)

    def test_centroid_is_area_weighted(self):
        l_shape = Contour.from_coords(L_SHAPE)
        c = l_shape.centroid()
        assert c.x == pytest.approx(9.5 / 7.0)
        assert c.y == pytest.approx(9.5 / 7.0)
        assert l_shape.average_point().x == pytest.approx(10.0 / 6.0)

    def test_centroid_independent_of_winding(self):
        l_shape = Contour.from_coords(L_SHAPE)
        cw = Contour(points=list(reversed(l_shape.points)))
        assert cw.centroid().x == pytest.approx(l_shape.centroid().x)
        assert cw.centroid().y == pytest.approx(l_shape.centroid().y)

    def test_zero_area_falls_back_to_average(self):
        flat = Contour.from_coords([[0.0, 0.0, 0.0], [2.0, 0.0, 0.0], [4.0, 0.0, 0.0]])
        assert flat.centroid() == flat.average_point()


class TestAvoidsPlane:
    @pytest.mark.parametrize("x, expected", [(10.0, -1), (-1.0, 1), (2.0, 0), (0.0, 1), (4.0, -1)])
    def test_vertical_planes(self, square, x, expected):
        plane = Plane(normal=Vec3(1.0, 0.0, 0.0), point=Vec3(x, 0.0, 0.0))
        assert square.avoids_plane(plane) == expected

    def test_contour_inside_plane(self, square):
        plane = Plane(normal=Vec3(0.0, 0.0, 1.0), point=Vec3(0.0, 0.0, 0.0))
        assert square.avoids_plane(plane) == 0

    def test_piece_touching_the_cut(self, plane_x2):
        half = Contour.from_coords([[4, 0, 0], [4, 4, 0], [2, 4, 0], [2, 0, 0]])
        assert half.avoids_plane(plane_x2) == 1
        assert half.avoids_plane(plane_x2.flipped()) == -1

    def test_empty_raises(self, plane_x2):
        with pytest.raises(ContourInputError):
            Contour().avoids_plane(plane_x2)

class TestPerimeter:
    def test_closed(self, square):
        assert square.perimeter() == pytest.approx(16.0)

    def test_open(self, square):
        square.closed = False
        assert square.perimeter() == pytest.approx(12.0)

    def test_single_point(self):
        assert Contour.from_coords([[1.0, 1.0, 1.0]]).perimeter() == 0.0


class TestRemoveAdjacentDuplicates:
    def test_interior_run(self):
        c = Contour.from_coords([[0, 0, 0], [1, 0, 0], [1, 0, 0], [1, 0, 0], [1, 1, 0]])
        assert len(c.remove_adjacent_duplicates()) == 3

    def test_wrap_around(self, square):
        c = Contour(points=square.points + [square.points[0]], metadata={"k": "v"})
        cleaned = c.remove_adjacent_duplicates()
        assert cleaned.points == square.points
        assert cleaned.metadata == {"k": "v"}
        assert len(c) == 5

    def test_open_contour_keeps_matching_ends(self, square):
        c = Contour(points=square.points + [square.points[0]], closed=False)
        assert len(c.remove_adjacent_duplicates()) == 5
