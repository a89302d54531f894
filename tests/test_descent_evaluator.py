import math

import pytest

from skirank.routes.descent_evaluator import analyze_descent_segment
from skirank.routes.descent_finder import DescentSegment
from skirank.routes.rating_system import RatingSystem
from skirank.routes.route import GeoPoint

from route_factory import START_LAT, START_LON, lat_step, meridian_route, profile


@pytest.fixture
def system():
    return RatingSystem.create()


def test_equal_drop_and_run_is_45_degrees(system):
    route = meridian_route(profile(1000, (10, -100)), spacing_m=100.0)
    analysis = analyze_descent_segment(route.points, route.elevations, DescentSegment(0, 10, 1000.0), system)
    assert analysis.vertical_drop == 1000
    assert analysis.horiz_dist_m == 1000
    assert analysis.avg_gradient_deg == 45.0
    assert (analysis.peak_ele, analysis.trough_ele) == (1000, 0)
    assert (analysis.peak_index, analysis.trough_index) == (0, 10)
    # every 100 m chunk is 45 degrees, outside the steep band
    assert analysis.steep_segment is None


def test_too_short_segment_is_discarded(system):
    points = [GeoPoint(START_LAT, START_LON, 1000.0), GeoPoint(START_LAT + lat_step(5), START_LON, 700.0)]
    elevations = [p.elevation for p in points]
    assert analyze_descent_segment(points, elevations, DescentSegment(0, 1, 300.0), system) is None


def test_glitch_hops_do_not_count_as_distance(system):
    offsets = [0, 500, 6500, 7000]
    points = [GeoPoint(START_LAT + lat_step(m), START_LON, 1000.0 - 100 * i) for i, m in enumerate(offsets)]
    elevations = [p.elevation for p in points]
    analysis = analyze_descent_segment(points, elevations, DescentSegment(0, 3, 300.0), system)
    assert analysis.horiz_dist_m == 1000
    assert analysis.avg_gradient_deg == round(math.degrees(math.atan(0.3)), 1)


def test_steep_pitch_is_attached(system):
    steep_hop = 20 * math.tan(math.radians(30))
    route = meridian_route(profile(1000, (9, -2), (12, -steep_hop), (9, -2)))
    analysis = analyze_descent_segment(route.points, route.elevations, DescentSegment(0, 30, 0.0), system)
    assert analysis.steep_segment is not None
    assert analysis.steep_segment.avg_gradient_deg == 30.0
    assert analysis.to_dict()['steep_segment']['vertical_drop'] == 139
