import pytest

from skirank.routes.rating_system import RatingSystem
from skirank.routes.route_summary import summarize_route

from route_factory import START_LAT, START_LON, meridian_route, profile


@pytest.fixture
def system():
    return RatingSystem.create()


def test_unsmoothed_summary_counts_every_climb(system):
    route = meridian_route(profile(0, (10, 100)), spacing_m=100.0)
    summary = summarize_route(route, system, smooth=False)
    assert summary.ascent_m == 1000
    assert summary.distance_km == 1.0
    assert summary.max_ele == 1000
    assert (summary.start_lat, summary.start_lon) == (START_LAT, START_LON)


def test_smoothed_summary_loses_the_ends_of_a_ramp(system):
    # smoothed ends sit at e[5] and e[n-6] of a linear ramp
    route = meridian_route(profile(0, (59, 2)))
    summary = summarize_route(route, system)
    assert summary.ascent_m == 98
    assert summary.max_ele == 118


def test_summary_without_elevation(system):
    route = meridian_route([None] * 5)
    summary = summarize_route(route, system)
    assert summary.max_ele is None
    assert summary.ascent_m == 0
    assert summary.to_dict()['distance_km'] == 0.1
