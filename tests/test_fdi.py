"""Tests for FDI / Universal / Palmer tooth numbering."""
from __future__ import annotations

import string

import pytest

import settings
from dental.fdi import ToothNumberingIndex, get_tooth_index

PERMANENT_CODES = [f"{q}{p}" for q in (1, 2, 3, 4) for p in range(1, 9)]
PRIMARY_CODES = [f"{q}{p}" for q in (5, 6, 7, 8) for p in range(1, 6)]
ALL_CODES = PERMANENT_CODES + PRIMARY_CODES


@pytest.fixture(scope="module")
def index():
    return ToothNumberingIndex()


# ─────────────────────────────────────────────────────────
# Table construction
# ─────────────────────────────────────────────────────────


class TestIndexContents:
    def test_52_teeth(self, index):
        assert len(index) == 52
        assert len(index.list("permanent")) == 32
        assert len(index.list("primary")) == 20

    def test_every_code_defined(self, index):
        for code in ALL_CODES:
            assert index.get(code) is not None, code

    def test_upper_right_third_molar_is_universal_1(self, index):
        t = index.get("18")
        assert t.universal == 1
        assert t.palmer == "UR8"
        assert t.arch == "maxillary"
        assert t.side == "right"
        assert t.class_name == "third molar"
        assert t.is_primary is False

    def test_lower_right_third_molar_is_universal_32(self, index):
        assert index.to_universal("48") == 32

    def test_tooth_name(self, index):
        assert index.get("13").name == "Maxillary right canine"
        assert index.get("36").name == "Mandibular left first molar"

    def test_primary_tooth(self, index):
        t = index.get("55")
        assert t.universal == "A"
        assert t.palmer == "UR5"
        assert t.class_name == "primary second molar"
        assert t.is_primary is True
        assert t.position == 5

    def test_primary_quadrants_follow_permanent_arch_side(self, index):
        for primary_q, permanent_q in ((5, 1), (6, 2), (7, 3), (8, 4)):
            p = index.get(f"{primary_q}1")
            q = index.get(f"{permanent_q}1")
            assert (p.arch, p.side, p.quadrant) == (q.arch, q.side, q.quadrant)

    def test_universal_bijective_within_dentition(self, index):
        perm = [index.to_universal(c) for c in PERMANENT_CODES]
        prim = [index.to_universal(c) for c in PRIMARY_CODES]
        assert sorted(perm) == list(range(1, 33))
        assert sorted(prim) == list(string.ascii_uppercase[:20])

    def test_palmer_unique_within_dentition(self, index):
        assert len({index.to_palmer(c) for c in PERMANENT_CODES}) == 32
        assert len({index.to_palmer(c) for c in PRIMARY_CODES}) == 20

    def test_tooth_is_immutable(self, index):
        with pytest.raises(AttributeError):
            index.get("11").fdi = "12"

    def test_shared_instance(self):
        assert get_tooth_index() is get_tooth_index()


# ─────────────────────────────────────────────────────────
# Validation and lookup
# ─────────────────────────────────────────────────────────


class TestValidate:
    @pytest.mark.parametrize("code", ["19", "09", "00", "68", "", "1", "111", "56", "90", " 11", "11\n"])
    def test_invalid(self, index, code):
        assert index.validate(code) is False

    @pytest.mark.parametrize("code", [11, None, 1.5, ["11"]])
    def test_non_strings_invalid(self, index, code):
        assert index.validate(code) is False

    def test_all_valid(self, index):
        assert all(index.validate(c) for c in ALL_CODES)

    def test_unknown_code_lookups_return_none(self, index):
        assert index.get("99") is None
        assert index.to_universal("99") is None
        assert index.to_palmer("99") is None
        assert index.to_quadrant("99") is None


class TestProjections:
    def test_palmer_three_chars_for_permanent(self, index):
        for code in PERMANENT_CODES:
            assert len(index.to_palmer(code)) == 3

    def test_palmer_example(self, index):
        assert index.to_palmer("13") == "UR3"
        assert index.to_palmer("27") == "UL7"
        assert index.to_palmer("34") == "LL4"
        assert index.to_palmer("85") == "LR5"

    def test_quadrant(self, index):
        assert index.to_quadrant("46") == "LR"
        assert index.to_quadrant("63") == "UL"


# ─────────────────────────────────────────────────────────
# Reverse lookup and normalization
# ─────────────────────────────────────────────────────────


class TestFromUniversal:
    def test_round_trip_all_codes(self, index):
        for code in ALL_CODES:
            assert index.from_universal(index.to_universal(code)) == code

    def test_letter_case_insensitive(self, index):
        assert index.from_universal("t") == "85"

    @pytest.mark.parametrize("value", [0, 33, -1, "U", "AB", "", None, True, 2.5])
    def test_unknown(self, index, value):
        assert index.from_universal(value) is None


class TestNormalizeToFDI:
    def test_fdi_string_passthrough(self, index):
        assert index.normalize_to_fdi("36") == "36"
        assert index.normalize_to_fdi(" 36 ") == "36"

    def test_integer_is_universal(self, index):
        assert index.normalize_to_fdi(1) == "18"
        assert index.normalize_to_fdi(11) == "23"

    def test_integral_float_is_universal(self, index):
        assert index.normalize_to_fdi(8.0) == "11"
        assert index.from_universal(32.0) == "48"

    def test_letter_is_primary_universal(self, index):
        assert index.normalize_to_fdi("a") == "55"
        assert index.normalize_to_fdi("K") == "75"

    def test_consistent_with_universal_over_full_domain(self, index):
        domain = list(range(1, 33)) + list(string.ascii_uppercase[:20])
        for value in domain:
            code = index.normalize_to_fdi(value)
            assert code is not None, value
            assert index.to_universal(code) == value
            assert index.from_universal(value) == code

    @pytest.mark.parametrize("value", [0, 33, 33.0, 2.5, float("nan"), "19", "U", "", "abc", None, False])
    def test_not_found(self, index, value):
        assert index.normalize_to_fdi(value) is None


# ─────────────────────────────────────────────────────────
# Listing and formatting
# ─────────────────────────────────────────────────────────


class TestListAndFormat:
    def test_list_sorted(self, index):
        codes = [t.fdi for t in index.list()]
        assert codes == sorted(codes)
        assert codes[0] == "11"
        assert codes[-1] == "85"

    def test_list_filters(self, index):
        assert all(not t.is_primary for t in index.list("permanent"))
        assert all(t.is_primary for t in index.list("primary"))
        assert len(index.list("all")) == 52

    def test_format_short(self, index):
        assert index.format_short("13") == "UR3 • #6"
        assert index.format_short("53") == "UR3 • C"
        assert index.format_short("99") == ""

    def test_format_notations(self, index):
        assert index.format("16", "fdi") == "16"
        assert index.format("16", "universal") == "3"
        assert index.format("16", "palmer") == "UR6"
        assert index.format("xx", "palmer") == "Unknown"

    def test_format_uses_configured_notation(self, index):
        settings.get_settings().settings.dental.notation = "palmer"
        assert index.format("16") == "UR6"

    def test_to_dict_keys(self, index):
        d = index.get("11").to_dict()
        assert d["className"] == "central incisor"
        assert d["isPrimary"] is False
        assert d["universal"] == 8
