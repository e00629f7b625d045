"""Tests for measurement/geometry.py and measurement/labels.py."""
from __future__ import annotations

import os
import sys

import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models import ArrowInfo
from measurement.geometry import (
    absolute_vertices,
    length_of_arrow,
    midpoint_of_arrow,
    value_for_arrow,
)
from measurement.labels import make_text_element_at, new_element_id
from settings import LabelSettings


def _arrow(points, x=0.0, y=0.0, width=0.0, height=0.0):
    return {"id": "a", "type": "arrow", "x": x, "y": y,
            "width": width, "height": height, "points": points}


class TestLengthOfArrow:
    def test_straight(self):
        assert length_of_arrow(_arrow([[0, 0], [3, 4]])) == pytest.approx(5)

    def test_polyline(self):
        assert length_of_arrow(_arrow([[0, 0], [30, 0], [30, 40]])) == pytest.approx(70)

    def test_offset_does_not_matter(self):
        assert length_of_arrow(_arrow([[0, 0], [3, 4]], x=500, y=-20)) == pytest.approx(5)

    def test_single_point(self):
        assert length_of_arrow(_arrow([[0, 0]])) == 0

    def test_non_arrow(self):
        assert length_of_arrow({"type": "line", "points": [[0, 0], [10, 0]]}) == 0

    def test_missing_points(self):
        assert length_of_arrow({"type": "arrow"}) == 0


class TestMidpointOfArrow:
    def test_straight_segment(self):
        assert midpoint_of_arrow(_arrow([[0, 0], [100, 0]], x=10, y=20)) == pytest.approx((60, 20))

    def test_bent_polyline(self):
        # Total 70; halfway (35) lands 5 units up the vertical leg.
        mid = midpoint_of_arrow(_arrow([[0, 0], [30, 0], [30, 40]], x=1, y=2))
        assert mid == pytest.approx((31, 7))

    def test_halfway_on_a_vertex(self):
        mid = midpoint_of_arrow(_arrow([[0, 0], [10, 0], [10, 10]]))
        assert mid == pytest.approx((10, 0))

    def test_zero_length_falls_back_to_bbox_center(self):
        el = _arrow([[0, 0], [0, 0]], x=10, y=10, width=8, height=6)
        assert midpoint_of_arrow(el) == (14, 13)

    def test_single_point_falls_back_to_bbox_center(self):
        el = _arrow([[0, 0]], x=0, y=0, width=4, height=2)
        assert midpoint_of_arrow(el) == (2, 1)

    def test_vertices_are_absolute(self):
        assert absolute_vertices(_arrow([[0, 0], [5, 5]], x=1, y=1)) == [(1, 1), (6, 6)]


class TestValueForArrow:
    def test_computed(self):
        assert value_for_arrow(_arrow([[0, 0], [100, 0]]), 1.493) == "12'-05\""

    def test_override_wins(self):
        info = ArrowInfo(text_id="t", override="6'-00\"")
        assert value_for_arrow(_arrow([[0, 0], [100, 0]]), 1.493, info) == "6'-00\""

    def test_info_without_override(self):
        info = ArrowInfo(text_id="t")
        assert value_for_arrow(_arrow([[0, 0], [100, 0]]), 1.493, info) == "12'-05\""


class TestMakeTextElement:
    def test_fields(self):
        ls = LabelSettings(font_size=6, stroke_color="#123")
        el = make_text_element_at(5.5, 7.0, "1'-00\"", ls, element_id="lbl")
        assert el["id"] == "lbl"
        assert el["type"] == "text"
        assert el["text"] == el["originalText"] == "1'-00\""
        assert (el["x"], el["y"]) == (5.5, 7.0)
        assert el["fontSize"] == 6
        assert el["strokeColor"] == "#123"
        assert el["textAlign"] == "center"
        assert el["isDeleted"] is False
        assert el["containerId"] is None

    def test_generated_ids_are_unique(self):
        ls = LabelSettings()
        ids = {make_text_element_at(0, 0, "x", ls)["id"] for _ in range(50)}
        assert len(ids) == 50

    def test_new_element_id_is_string(self):
        assert isinstance(new_element_id(), str)
