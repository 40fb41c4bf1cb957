"""Unit tests for the completeness score."""

from dataclasses import replace

import pytest

from resumeai.contexts.preview.aggregate import ResumeAggregate
from resumeai.contexts.preview.scoring import (
    SCORE_WEIGHTS,
    CompletenessSnapshot,
    calculate_completeness_score,
    find_validation_gaps,
)
from resumeai.contexts.records import Profile, Project, Skill, WorkExperience

FULL_SNAPSHOT = CompletenessSnapshot(
    full_name="Jane Doe",
    email="j@x.com",
    phone="555-0100",
    summary="x" * 51,
    skills=["a", "b", "c"],
    experience=["job"],
    projects=["proj"],
)


@pytest.mark.unit
def test_partial_profile_scores_twenty():
    """Name and email only, one skill, nothing else."""
    snapshot = CompletenessSnapshot(
        full_name="Jane Doe",
        email="j@x.com",
        phone="",
        summary="",
        skills=["Python"],
        experience=[],
        projects=[],
    )
    assert calculate_completeness_score(snapshot) == 20


@pytest.mark.unit
def test_everything_but_projects_scores_ninety():
    snapshot = CompletenessSnapshot(
        full_name="Jane Doe",
        email="j@x.com",
        phone="555-0100",
        summary="s" * 60,
        skills=["Python", "SQL", "Go"],
        experience=["job"],
        projects=[],
    )
    assert calculate_completeness_score(snapshot) == 90


@pytest.mark.unit
def test_full_snapshot_scores_hundred():
    assert calculate_completeness_score(FULL_SNAPSHOT) == 100
    assert sum(SCORE_WEIGHTS.values()) == 100


@pytest.mark.unit
def test_empty_snapshot_scores_zero():
    """Absent fields fail their conditions instead of raising."""
    assert calculate_completeness_score(CompletenessSnapshot()) == 0


@pytest.mark.unit
@pytest.mark.parametrize(
    "summary, expected",
    [("x" * 50, 0), ("x" * 51, 20)],
)
def test_summary_threshold_is_strictly_greater_than_fifty(summary, expected):
    assert calculate_completeness_score(CompletenessSnapshot(summary=summary)) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "skills, expected",
    [(["a", "b"], 0), (["a", "b", "c"], 20), (["a", "b", "c", "d"], 20)],
)
def test_skill_threshold_is_at_least_three(skills, expected):
    assert calculate_completeness_score(CompletenessSnapshot(skills=skills)) == expected


@pytest.mark.unit
def test_score_is_deterministic():
    assert calculate_completeness_score(FULL_SNAPSHOT) == calculate_completeness_score(FULL_SNAPSHOT)


@pytest.mark.unit
@pytest.mark.parametrize(
    "field_name, value",
    [
        ("full_name", "Jane"),
        ("email", "j@x.com"),
        ("phone", "1"),
        ("summary", "y" * 80),
        ("skills", ["a", "b", "c"]),
        ("experience", ["job"]),
        ("projects", ["proj"]),
    ],
)
def test_satisfying_a_condition_never_lowers_the_score(field_name, value):
    """Monotonic in each condition, starting from both empty and partial snapshots."""
    for base in (
        CompletenessSnapshot(),
        CompletenessSnapshot(full_name="Jane", skills=["a"], projects=["p"]),
    ):
        improved = replace(base, **{field_name: value})
        before = calculate_completeness_score(base)
        after = calculate_completeness_score(improved)
        assert after >= before
        assert 0 <= after <= 100


@pytest.mark.unit
def test_validation_gaps_account_for_missing_points():
    snapshot = CompletenessSnapshot(full_name="Jane Doe", email="j@x.com", skills=["a"])
    gaps = find_validation_gaps(snapshot)

    assert [gap.condition for gap in gaps] == ["phone", "summary", "skills", "experience", "projects"]
    assert calculate_completeness_score(snapshot) + sum(gap.points for gap in gaps) == 100


@pytest.mark.unit
def test_no_gaps_for_full_snapshot():
    assert find_validation_gaps(FULL_SNAPSHOT) == []


@pytest.mark.unit
def test_snapshot_from_aggregate_uses_bio_as_summary():
    profile = Profile(id="u1", full_name="Jane Doe", email="j@x.com", phone="1", bio="b" * 55)
    aggregate = ResumeAggregate(
        user_id="u1",
        profile=profile,
        experiences=(WorkExperience(user_id="u1"),),
        skills=tuple(Skill(user_id="u1", name=n) for n in ("a", "b", "c")),
        projects=(Project(user_id="u1"),),
    )
    snapshot = CompletenessSnapshot.from_aggregate(aggregate)

    assert snapshot.summary == profile.bio
    assert calculate_completeness_score(snapshot) == 100


@pytest.mark.unit
def test_snapshot_from_aggregate_without_profile():
    aggregate = ResumeAggregate(user_id="u1", experiences=(WorkExperience(user_id="u1"),))
    snapshot = CompletenessSnapshot.from_aggregate(aggregate)

    assert snapshot.full_name is None
    assert calculate_completeness_score(snapshot) == 20
