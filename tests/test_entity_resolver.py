"""Unit tests for name indexes and subject / year group resolution."""

import pytest

from utils.entity_resolver import (
    ImportContext,
    NameIndex,
    build_subject_index,
    build_year_group_index,
    resolve_subject,
    resolve_year_group,
)

pytestmark = pytest.mark.unit


class TestNameIndex:

    def test_lookup_ignores_case_and_whitespace(self):
        index = NameIndex([("Ava Patel", 1)])
        assert index.get("  ava PATEL ") == 1
        assert "AVA PATEL" in index

    def test_first_registration_wins(self):
        index = NameIndex([("Ava Patel", 1), ("ava patel", 2)])
        assert index.get("Ava Patel") == 1
        assert len(index) == 1

    def test_blank_names_are_not_indexed(self):
        index = NameIndex([("", 1), (None, 2)])
        assert len(index) == 0
        assert index.get("") is None


class TestSubjectResolution:

    def test_exact_match(self):
        index = build_subject_index([("Physics", 1), ("Chemistry", 2)])
        assert resolve_subject(index, "chemistry") == 2

    def test_math_alias_keys_are_added(self):
        index = build_subject_index([("Mathematics", 7)])
        assert index.get("maths") == 7
        assert resolve_subject(index, "Maths") == 7

    def test_maths_does_not_match_mathematics_without_alias(self):
        index = build_subject_index([("Mathematics", 1)], aliases={})
        assert resolve_subject(index, "Maths") is None

    def test_alias_keys_use_the_first_matching_subject(self):
        index = build_subject_index([("Mathematics", 4), ("Further Mathematics", 3)])
        assert resolve_subject(index, "maths") == 4
        assert resolve_subject(index, "Further Mathematics") == 3

    def test_alias_never_shadows_a_real_name(self):
        index = build_subject_index([("Further Mathematics", 3), ("Mathematics", 4)])
        assert resolve_subject(index, "Mathematics") == 4

    def test_substring_fallback_in_both_directions(self):
        index = build_subject_index([("Physics", 1), ("Computer Science", 2)], aliases={})
        assert resolve_subject(index, "Physics Higher") == 1
        assert resolve_subject(index, "Science") == 2

    def test_short_names_do_not_fuzzy_match(self):
        index = build_subject_index([("Dramatic Arts", 1)], aliases={})
        assert resolve_subject(index, "Art") is None

    def test_four_characters_is_long_enough(self):
        index = build_subject_index([("Dramatic Arts", 1)], aliases={})
        assert resolve_subject(index, "Arts") == 1

    def test_short_stored_name_is_not_a_substring_candidate(self):
        index = build_subject_index([("PE", 1)], aliases={})
        assert resolve_subject(index, "Speech and Drama") is None
        assert resolve_subject(index, "pe") == 1

    def test_unknown_subject(self):
        index = build_subject_index([("Physics", 1)])
        assert resolve_subject(index, "Geography") is None
        assert resolve_subject(index, "") is None


class TestYearGroupResolution:

    @pytest.fixture
    def index(self):
        return build_year_group_index([("Y10", 10), ("Year 11", 11), ("Reception", 99)])

    @pytest.mark.parametrize("label, expected", [
        ("Y10", 10),
        ("Year 10", 10),
        ("year 10", 10),
        ("Y10 Maths - Group A", 10),
        ("Y11", 11),
        ("Reception", 99),
    ])
    def test_resolves(self, index, label, expected):
        assert resolve_year_group(index, label) == expected

    @pytest.mark.parametrize("label", [None, "", "Y12", "Nursery"])
    def test_unresolved(self, index, label):
        assert resolve_year_group(index, label) is None


class TestImportContext:

    def test_lookups_delegate_to_indexes(self):
        context = ImportContext(
            teachers=NameIndex([("Ava Patel", 5)]),
            students=NameIndex([("Liam Chen", 8)]),
            subjects=build_subject_index([("Mathematics", 2)]),
            year_groups=build_year_group_index([("Y10", 3)]),
            teacher_departments={5: 1},
        )
        assert context.teacher_id("ava patel") == 5
        assert context.student_id("Liam Chen") == 8
        assert context.subject_id("Maths") == 2
        assert context.year_group_id("Year 10") == 3
        assert context.teacher_id("Unknown Person") is None

    def test_empty_context_resolves_nothing(self):
        context = ImportContext()
        assert context.subject_id("Physics") is None
        assert context.year_group_id("Y10") is None
