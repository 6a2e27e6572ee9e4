"""Tests for haversine distance, path sampling and risk classification."""

import pytest
from pydantic import ValidationError

from route_risk import Coordinate, LocationInput, PathGeometry, PathSampler, RiskLevel, classify, distance
from route_risk.geometry import path_length
from route_risk.risk import status_line

from helpers import straight_path


class TestDistance:
    def test_zero_for_same_point(self):
        a = Coordinate(lat=12.9716, lon=77.5946)
        assert distance(a, a) == 0

    def test_symmetric(self):
        pairs = [
            (Coordinate(lat=12.9716, lon=77.5946), Coordinate(lat=13.0827, lon=80.2707)),
            (Coordinate(lat=-33.8688, lon=151.2093), Coordinate(lat=51.5074, lon=-0.1278)),
            (Coordinate(lat=89.9, lon=-179.9), Coordinate(lat=-89.9, lon=179.9)),
        ]
        for a, b in pairs:
            assert distance(a, b) == pytest.approx(distance(b, a))

    def test_one_degree_of_latitude(self):
        a = Coordinate(lat=0, lon=0)
        b = Coordinate(lat=1, lon=0)
        assert distance(a, b) == pytest.approx(111_194.9, rel=1e-4)

    def test_antipodes_are_half_the_circumference(self):
        a = Coordinate(lat=0, lon=0)
        b = Coordinate(lat=0, lon=180)
        assert distance(a, b) == pytest.approx(3.14159265 * 6_371_000, rel=1e-6)

    def test_path_length(self):
        path = straight_path(11, step_deg=0.1)
        assert path_length(path.coordinates) == pytest.approx(distance(path.coordinates[0], path.coordinates[-1]))


class TestStrideSampling:
    def test_every_tenth_vertex(self):
        path = straight_path(25)
        points = PathSampler().sample(path)
        assert points == [path.coordinates[0], path.coordinates[10], path.coordinates[20]]

    def test_short_path_gives_first_vertex(self):
        path = straight_path(5)
        assert PathSampler().sample(path) == [path.coordinates[0]]

    def test_single_vertex(self):
        path = straight_path(1)
        assert PathSampler().sample(path) == [path.coordinates[0]]

    def test_ignores_real_spacing(self):
        # uneven vertices: the stride picks by index, not by distance
        coords = [Coordinate(lat=0, lon=0)] + [Coordinate(lat=0, lon=1 + i * 1e-5) for i in range(10)]
        points = PathSampler(stride=10).sample(PathGeometry(coordinates=coords))
        assert points == [coords[0], coords[10]]

    @pytest.mark.parametrize("mode", ["stride", "distance"])
    def test_subset_invariants(self, mode):
        sampler = PathSampler(mode=mode, stride=3, spacing_m=150)
        for n in range(1, 40):
            path = straight_path(n)
            points = sampler.sample(path)
            assert 1 <= len(points) <= n
            assert points[0] == path.coordinates[0]
            indices = [path.coordinates.index(p) for p in points]
            assert indices == sorted(indices)


class TestDistanceSampling:
    def test_keeps_vertex_once_spacing_reached(self):
        # 0.001 deg of longitude on the equator is ~111 m
        path = straight_path(10)
        points = PathSampler(mode="distance", spacing_m=250).sample(path)
        assert points == [path.coordinates[i] for i in (0, 3, 6, 9)]

    def test_spacing_longer_than_path(self):
        path = straight_path(10)
        assert PathSampler(mode="distance", spacing_m=50_000).sample(path) == [path.coordinates[0]]

    def test_invalid_configuration(self):
        with pytest.raises(ValueError):
            PathSampler(mode="random")
        with pytest.raises(ValueError):
            PathSampler(stride=0)
        with pytest.raises(ValueError):
            PathSampler(mode="distance", spacing_m=0)


class TestClassify:
    @pytest.mark.parametrize(
        "water, rain, expected",
        [
            (True, 11, RiskLevel.HIGH),
            (False, 6, RiskLevel.MEDIUM),
            (True, 3, RiskLevel.MEDIUM),
            (False, 0, RiskLevel.LOW),
            (True, 10, RiskLevel.MEDIUM),
            (True, 7.5, RiskLevel.MEDIUM),
            (False, 11, RiskLevel.MEDIUM),
            (False, 5, RiskLevel.LOW),
            (True, 0, RiskLevel.MEDIUM),
        ],
    )
    def test_decision_table(self, water, rain, expected):
        assert classify(water, rain) is expected

    def test_status_line(self):
        assert status_line(RiskLevel.HIGH, True, 12) == "Risk Level: High | Water nearby: yes | Max rain (3h): 12.0 mm"
        assert status_line(RiskLevel.LOW, False, 0.04) == "Risk Level: Low | Water nearby: no | Max rain (3h): 0.0 mm"


class TestModels:
    def test_coordinate_bounds(self):
        with pytest.raises(ValidationError):
            Coordinate(lat=91, lon=0)
        with pytest.raises(ValidationError):
            Coordinate(lat=0, lon=-181)

    def test_coordinate_value_equality(self):
        assert Coordinate(lat=1.5, lon=2.5) == Coordinate(lat=1.5, lon=2.5)
        assert len({Coordinate(lat=1.5, lon=2.5), Coordinate(lat=1.5, lon=2.5)}) == 1

    def test_pinned_label(self):
        assert Coordinate(lat=12.9716, lon=77.5946).label() == "Lat 12.97160, Lon 77.59460"

    def test_location_requires_address_or_pin(self):
        with pytest.raises(ValidationError):
            LocationInput()
        with pytest.raises(ValidationError):
            LocationInput(address="   ")

    def test_pin_takes_precedence_in_display(self):
        loc = LocationInput(address="MG Road").pin(Coordinate(lat=1, lon=2))
        assert loc.address == "MG Road"
        assert loc.display_text() == "Lat 1.00000, Lon 2.00000"

    def test_path_needs_a_vertex(self):
        with pytest.raises(ValidationError):
            PathGeometry(coordinates=[])
