"""Tests for the gap distance functions."""

from __future__ import annotations

import pytest

from street_coverage.coverage.distance import (
    build_local_transformer,
    distance_for_metric,
    geodesic_distance,
    haversine_distance,
    planar_distance,
    projected_distance,
)


def test_planar_distance_is_euclidean() -> None:
    assert planar_distance((1.0, 1.0), (4.0, 5.0)) == pytest.approx(5.0)


def test_haversine_one_degree_of_latitude() -> None:
    assert haversine_distance((0.0, 0.0), (0.0, 1.0)) == pytest.approx(111_195.08, rel=1e-6)


def test_geodesic_one_degree_of_latitude_at_equator() -> None:
    assert geodesic_distance((0.0, 0.0), (0.0, 1.0)) == pytest.approx(110_574.0, abs=5.0)


def test_projected_distance_agrees_with_geodesic_at_city_scale() -> None:
    a = (-111.6500, 40.2300)
    b = (-111.6488, 40.2309)

    local = projected_distance([a, b])

    assert local(a, b) == pytest.approx(geodesic_distance(a, b), rel=0.01)


def test_local_transformer_picks_southern_utm_zone() -> None:
    transformer = build_local_transformer([(151.2, -33.9)])

    assert transformer.target_crs.to_epsg() == 32756


@pytest.mark.parametrize(
    "name, expected",
    [
        ("planar", planar_distance),
        ("Haversine", haversine_distance),
        (" geodesic ", geodesic_distance),
    ],
)
def test_distance_for_metric_resolves_names(name, expected) -> None:
    assert distance_for_metric(name) is expected


def test_distance_for_metric_projected_needs_reference_points() -> None:
    with pytest.raises(ValueError):
        distance_for_metric("projected")
    fn = distance_for_metric("projected", [(10.0, 50.0)])
    assert fn((10.0, 50.0), (10.0, 50.0)) == pytest.approx(0.0)


def test_unknown_metric_rejected() -> None:
    with pytest.raises(ValueError, match="Unknown distance metric"):
        distance_for_metric("manhattan")
