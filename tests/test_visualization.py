"""Tests for the folium coverage map."""

from __future__ import annotations

from pathlib import Path

import folium

from street_coverage.coverage import evaluate_coverage
from street_coverage.node_index import NodeCoordinateIndex
from street_coverage.visualization import create_coverage_map

from conftest import make_response


def _geo_report():
    index = NodeCoordinateIndex(
        {
            1: (-111.6500, 40.2300),
            2: (-111.6500, 40.2310),
            3: (-111.6500, 40.2320),
        }
    )
    response = make_response(
        [[[1, 2], [2, 3]]],
        [((-111.6500, 40.2301), 0, 0), ((-111.6500, 40.2309), 0, 0), ((-111.6500, 40.2312), 0, 1)],
    )
    return evaluate_coverage(response, index, threshold=0.0005)


def test_create_coverage_map_writes_html(tmp_path: Path) -> None:
    report = _geo_report()
    output = tmp_path / "maps" / "coverage.html"

    map_object = create_coverage_map(
        report,
        trace=[(-111.6500, 40.2300), (-111.6500, 40.2320)],
        output_html_path=output,
    )

    assert isinstance(map_object, folium.Map)
    assert output.exists()
    html = output.read_text(encoding="utf-8")
    assert "#1a9641" in html
    assert "#d73027" in html


def test_create_coverage_map_centres_on_segments_without_trace() -> None:
    map_object = create_coverage_map(_geo_report(), show_uncovered=False)

    lat, lon = map_object.location
    assert 40.229 < lat < 40.233
    assert -111.651 < lon < -111.649
