"""Tests for merging account and extended profile records into a view."""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from profile_editor.errors import FetchFailure, RecordStoreError
from profile_editor.services.profile_view import (
    ProfileChanges,
    ProfileView,
    apply_changes,
    load_profile_view,
    merge_profile_view,
)


def test_account_without_profile_yields_defaults(records) -> None:
    view = asyncio.run(load_profile_view("acct-1", records))

    assert view.first_name == "Ada"
    assert view.email == "ada@example.com"
    assert view.profile_id is None
    assert view.bio == ""
    assert view.skills == ()
    assert view.hourly_rate == 0.0
    assert view.years_experience == 0
    assert view.experience_years == 0
    assert view.service_radius == 0
    assert view.avatar_url is None
    assert view.average_rating is None
    assert view.total_jobs is None


def test_existing_profile_is_merged(records) -> None:
    records.add(
        "extended_profiles",
        7,
        {
            "account_id": "acct-1",
            "bio": "Mathematician",
            "skills": ["Go", "Go", " ", "Rust"],
            "hourly_rate": 85.5,
            "portfolio_url": "https://ada.dev",
            "github_url": None,
            "linkedin_url": "https://linkedin.com/in/ada",
            "years_experience": 12,
            "experience_years": 10,
            "service_radius": 25,
            "avatar_url": "https://cdn.example.com/avatars/old.png",
            "average_rating": 4.8,
            "total_jobs": 31,
        },
    )

    view = asyncio.run(load_profile_view("acct-1", records))

    assert view.profile_id == 7
    assert view.bio == "Mathematician"
    assert view.skills == ("Go", "Rust")
    assert view.hourly_rate == 85.5
    assert view.github_url == ""
    assert view.years_experience == 12
    assert view.experience_years == 10
    assert view.service_radius == 25
    assert view.avatar_url == "https://cdn.example.com/avatars/old.png"
    assert view.average_rating == 4.8
    assert view.total_jobs == 31


def test_missing_account_is_tolerated(records) -> None:
    view = asyncio.run(load_profile_view("acct-unknown", records))

    assert view.account_id == "acct-unknown"
    assert view.first_name == ""
    assert view.last_name == ""
    assert view.phone == ""
    assert view.email == ""


def test_account_fetch_failure_aborts_before_profile_fetch(records) -> None:
    records.fail_on[("fetch", "accounts")] = RecordStoreError("connection reset")

    with pytest.raises(FetchFailure, match="connection reset"):
        asyncio.run(load_profile_view("acct-1", records))

    assert records.calls == [("fetch", "accounts")]


def test_profile_fetch_failure_raises(records) -> None:
    records.fail_on[("fetch", "extended_profiles")] = RecordStoreError("timeout")

    with pytest.raises(FetchFailure, match="timeout"):
        asyncio.run(load_profile_view("acct-1", records))


def test_merge_with_no_records_uses_all_defaults() -> None:
    assert merge_profile_view("acct-1", None, None) == ProfileView(account_id="acct-1")


def test_apply_changes_replaces_only_set_fields() -> None:
    view = ProfileView(account_id="acct-1", first_name="Ada", bio="old", hourly_rate=10.0)

    updated = apply_changes(view, ProfileChanges(bio="new", service_radius=40))

    assert updated.bio == "new"
    assert updated.service_radius == 40
    assert updated.first_name == "Ada"
    assert updated.hourly_rate == 10.0
    assert view.bio == "old"


def test_apply_changes_normalizes_skills() -> None:
    view = ProfileView(account_id="acct-1")

    updated = apply_changes(view, ProfileChanges(skills=["Go", " Go ", "", "Rust"]))

    assert updated.skills == ("Go", "Rust")


def test_changes_reject_unknown_and_read_only_keys() -> None:
    with pytest.raises(ValidationError):
        ProfileChanges.model_validate({"nickname": "ada"})
    with pytest.raises(ValidationError):
        ProfileChanges.model_validate({"average_rating": 5.0})
    with pytest.raises(ValidationError):
        ProfileChanges.model_validate({"email": "other@example.com"})


@pytest.mark.parametrize(
    "payload",
    [
        {"hourly_rate": -1},
        {"years_experience": -2},
        {"experience_years": -1},
        {"service_radius": 0},
        {"service_radius": 101},
    ],
)
def test_changes_enforce_numeric_ranges(payload: dict) -> None:
    with pytest.raises(ValidationError):
        ProfileChanges.model_validate(payload)


def test_profile_fields_exclude_read_only_columns() -> None:
    view = ProfileView(account_id="acct-1", skills=("Go",), average_rating=4.0, total_jobs=3)

    fields = view.profile_fields()

    assert fields["skills"] == ["Go"]
    assert "average_rating" not in fields
    assert "total_jobs" not in fields
    assert "account_id" not in fields
