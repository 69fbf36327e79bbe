"""Tests for the skill list editor."""

from __future__ import annotations

import pytest

from profile_editor.services.skill_list import (
    add_skill,
    can_add_skill,
    normalize_skills,
    remove_skill,
)


def test_add_appends_trimmed_skill() -> None:
    assert add_skill(("Go",), "  Rust ") == ("Go", "Rust")


def test_add_ignores_trimmed_duplicate() -> None:
    skills = add_skill((), "Go")
    skills = add_skill(skills, " Go ")
    assert skills == ("Go",)
    assert len(skills) == 1


def test_add_is_case_sensitive() -> None:
    assert add_skill(("go",), "Go") == ("go", "Go")


@pytest.mark.parametrize("candidate", ["", "   ", "\t\n"])
def test_add_blank_never_mutates(candidate: str) -> None:
    skills = ("Go",)
    assert add_skill(skills, candidate) == ("Go",)


def test_add_returns_new_sequence_and_leaves_input_untouched() -> None:
    original = ["Go"]
    result = add_skill(original, "Rust")
    assert result == ("Go", "Rust")
    assert original == ["Go"]
    assert result is not original


def test_remove_existing_skill() -> None:
    assert remove_skill(("Go", "Rust"), "Go") == ("Rust",)


def test_remove_missing_skill_is_noop() -> None:
    assert remove_skill(("Go", "Rust"), "Python") == ("Go", "Rust")


def test_remove_uses_exact_match() -> None:
    assert remove_skill(("Go", "Rust"), " Go") == ("Go", "Rust")


def test_can_add_skill_requires_non_blank_input() -> None:
    assert can_add_skill("Go") is True
    assert can_add_skill("") is False
    assert can_add_skill("   ") is False
    assert can_add_skill(None) is False


def test_normalize_drops_blanks_and_duplicates_keeping_order() -> None:
    assert normalize_skills(["Rust", " ", "Go", "Rust", " Go", None]) == ("Rust", "Go")
    assert normalize_skills(None) == ()
