"""Tests for finding rows, confidence/severity folding and overlay ids."""
from __future__ import annotations

import math

import pytest

from dental.findings import (
    ToothFinding,
    confidence_percent,
    findings_to_items,
    geometry_glyphs,
    group_overlay_ids,
    has_geometry,
    normalize_confidence,
    normalize_severity,
)
from models import Box, Circle, Geometry
from overlay.ids import ids_equal, make_overlay_id, parse_overlay_id


class TestOverlayIds:
    def test_make(self):
        assert make_overlay_id(2, 36) == "2:36"

    def test_parse(self):
        assert parse_overlay_id("2:36") == (2, 36)
        assert parse_overlay_id("nope") is None
        assert parse_overlay_id("a:b") is None
        assert parse_overlay_id(None) is None

    def test_string_coercion(self):
        assert ids_equal(5, "5")
        assert ids_equal("2:36", make_overlay_id(2, "36"))
        assert not ids_equal("2:36", "2:37")

    def test_none(self):
        assert ids_equal(None, None)
        assert not ids_equal(None, "None")
        assert not ids_equal("", None)


class TestNormalizeConfidence:
    @pytest.mark.parametrize("value, expected", [
        (0.42, 0.42),
        (1, 1.0),
        (42, 0.42),
        (100, 1.0),
        (4200, 0.42),
        (20000, 1.0),
    ])
    def test_scales(self, value, expected):
        assert normalize_confidence(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", [None, 0, -3, math.nan, math.inf, "x", True])
    def test_degenerate_is_zero(self, value):
        assert normalize_confidence(value) == 0

    def test_percent(self):
        assert confidence_percent(0.876) == 88
        assert confidence_percent(None) == 0


class TestNormalizeSeverity:
    @pytest.mark.parametrize("text, expected", [
        ("High", "high"),
        ("severe decay", "high"),
        ("Moderate", "medium"),
        ("medium", "medium"),
        ("mild", "low"),
        ("low", "low"),
        ("", None),
        (None, None),
    ])
    def test_fold(self, text, expected):
        assert normalize_severity(text) == expected


class TestFindingRows:
    def test_from_dict(self):
        row = ToothFinding.from_dict({
            "tooth_fdi": 36,
            "findings": ["caries", "periapical lesion"],
            "severity": "Moderate",
            "confidence": 87,
            "image_index": 1,
            "image_id": "img-1",
            "geometry": {"boxes": [{"x": 1, "y": 2, "w": 3, "h": 4}]},
        })
        assert row.overlay_id == "1:36"
        assert row.findings == ["caries", "periapical lesion"]
        assert row.geometry.boxes[0] == Box(1, 2, 3, 4)

    def test_from_dict_tooth_as_string(self):
        assert ToothFinding.from_dict({"tooth_fdi": "11"}).tooth_fdi == 11

    def test_from_dict_rejects_missing_tooth(self):
        assert ToothFinding.from_dict({"findings": ["x"]}) is None
        assert ToothFinding.from_dict({"tooth_fdi": "molar"}) is None

    def test_defaults(self):
        row = ToothFinding.from_dict({"tooth_fdi": 11, "image_index": True, "confidence": "high"})
        assert row.image_index == 0
        assert row.confidence is None
        assert row.geometry is None

    def test_group_overlay_ids(self):
        rows = [ToothFinding(36, 0), ToothFinding(36, 0), ToothFinding(36, 1)]
        assert group_overlay_ids(rows) == {"0:36": [0, 1], "1:36": [2]}


class TestGeometrySummary:
    def test_has_geometry(self):
        assert not has_geometry(None)
        assert not has_geometry(Geometry())
        assert has_geometry(Geometry(circles=(Circle(1, 1, 1),)))

    def test_glyphs(self):
        g = Geometry(circles=(Circle(1, 1, 1),), boxes=(Box(0, 0, 1, 1), Box(2, 2, 1, 1)))
        assert geometry_glyphs(g) == "◯ ▭×2"
        assert geometry_glyphs(None) == ""


class TestFindingsToItems:
    def test_filters_image_and_geometry(self):
        g = Geometry(circles=(Circle(10, 10, 3),))
        rows = [
            ToothFinding(36, 0, severity="severe", geometry=g),
            ToothFinding(11, 0, geometry=None),
            ToothFinding(21, 1, geometry=g),
        ]
        items = findings_to_items(rows, image_index=0)
        assert len(items) == 1
        item = items[0]
        assert item.id == "0:36"
        assert item.label == "36"
        assert item.severity == "high"
        assert item.geometry is g
