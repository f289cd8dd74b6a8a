"""Tests for the plan/review filename codec."""

from __future__ import annotations

import pytest

from plsr_task.tasks.naming import (
    TaskFile,
    TaskType,
    decode_cycle,
    decode_task_name,
    encode,
    is_task_file_candidate,
    parse_task_file,
)


def test_encode_builds_canonical_name():
    assert encode(TaskType.PLAN, "demo", 1) == "plan.demo.1.md"
    assert encode("review", "demo", 3) == "review.demo.3.md"


@pytest.mark.parametrize(
    ("task_type", "task_name", "cycle"),
    [
        (TaskType.PLAN, "demo", 1),
        (TaskType.REVIEW, "api.v2", 12),
        (TaskType.PLAN, "fix-login", 7),
        (TaskType.REVIEW, "a.b.c", 2),
    ],
)
def test_decode_recovers_encoded_parts(task_type, task_name, cycle):
    file_name = encode(task_type, task_name, cycle)

    assert decode_task_name(file_name) == task_name
    assert decode_cycle(file_name) == cycle


def test_decode_cycle_rejects_non_numeric_segments():
    assert decode_cycle("plan.demo.x.md") is None
    assert decode_cycle("plan.demo..md") is None
    assert decode_cycle("plan.md") is None


def test_decode_cycle_needs_three_segments():
    assert decode_cycle("plan.1.md") == 1
    assert decode_cycle("1.md") is None


def test_decode_task_name_needs_four_segments():
    assert decode_task_name("plan.demo.md") == ""
    assert decode_task_name("plan.demo.1.md") == "demo"


def test_is_task_file_candidate_checks_prefix_and_suffix():
    assert is_task_file_candidate("plan.demo.1.md")
    assert is_task_file_candidate("review.whatever.md")
    assert not is_task_file_candidate("planning.demo.1.md")
    assert not is_task_file_candidate("plan.demo.1.txt")
    assert not is_task_file_candidate("README.md")


def test_parse_task_file_strict_grammar():
    assert parse_task_file("plan.demo.v2.3.md") == TaskFile(TaskType.PLAN, "demo.v2", 3)
    assert parse_task_file("review.demo.1.md") == TaskFile(TaskType.REVIEW, "demo", 1)

    assert parse_task_file("plan.demo.0.md") is None
    assert parse_task_file("plan.demo.01.md") is None
    assert parse_task_file("plan..1.md") is None
    assert parse_task_file("plan.demo.md") is None
    assert parse_task_file("plan.demo.x.md") is None


def test_task_file_name_property():
    assert TaskFile(TaskType.REVIEW, "demo", 2).file_name == "review.demo.2.md"


def test_only_ascii_digits_count_as_cycles():
    assert parse_task_file("plan.x.1\u0660.md") is None
    assert parse_task_file("plan.x.\u0661.md") is None
    assert decode_cycle("plan.x.1\u0660.md") is None


def test_trailing_newline_is_not_a_task_file():
    assert parse_task_file("plan.x.1.md\n") is None
    assert decode_cycle("plan.x.1\n.md") is None
