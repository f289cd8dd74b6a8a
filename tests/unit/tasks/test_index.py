"""Tests for task directory scanning."""

from __future__ import annotations

from plsr_task.tasks.index import (
    latest_by_modification_time,
    list_active_task_names,
    list_related_entries,
    list_stashed_task_names,
    list_task_files,
)
from plsr_task.tasks.naming import TaskType


def test_list_task_files_is_lenient_about_cycles(task_dir, write_file):
    write_file(task_dir, "plan.alpha.1.md")
    write_file(task_dir, "review.alpha.x.md")
    write_file(task_dir, "notes.md")
    write_file(task_dir, "plan.alpha.1.txt")

    files = {(f.type, f.task_name, f.cycle) for f in list_task_files(task_dir)}

    assert files == {
        (TaskType.PLAN, "alpha", 1),
        (TaskType.REVIEW, "alpha", 0),
    }


def test_list_task_files_missing_directory(tmp_path):
    assert list_task_files(tmp_path / "absent") == []


def test_list_active_task_names_is_distinct(task_dir, write_file):
    write_file(task_dir, "plan.alpha.1.md")
    write_file(task_dir, "review.alpha.1.md")
    write_file(task_dir, "plan.beta.v2.1.md")
    write_file(task_dir, "plan.broken.md")

    assert sorted(list_active_task_names(task_dir)) == ["alpha", "beta.v2"]


def test_list_related_entries_includes_auxiliary_artifacts(task_dir, write_file):
    write_file(task_dir, "plan.alpha.1.md")
    write_file(task_dir, "review.alpha.1.md")
    write_file(task_dir, "alpha.notes.txt")
    (task_dir / "alpha").mkdir()
    (task_dir / "alpha.assets").mkdir()
    write_file(task_dir, "plan.beta.1.md")
    write_file(task_dir, "alphabet.txt")
    (task_dir / "stash").mkdir()

    related = list_related_entries(task_dir, "alpha")

    assert sorted(related) == [
        "alpha",
        "alpha.assets",
        "alpha.notes.txt",
        "plan.alpha.1.md",
        "review.alpha.1.md",
    ]


def test_list_related_entries_keeps_dotted_task_names_apart(task_dir, write_file):
    write_file(task_dir, "plan.api.1.md")
    write_file(task_dir, "plan.api.v2.1.md")

    assert list_related_entries(task_dir, "api") == ["plan.api.1.md"]
    assert list_related_entries(task_dir, "api.v2") == ["plan.api.v2.1.md"]


def test_list_related_entries_skips_archive_directories(task_dir, write_file):
    write_file(task_dir, "plan.done.1.md")
    (task_dir / "done.2024-01-01").mkdir()

    assert list_related_entries(task_dir, "done") == ["plan.done.1.md"]


def test_latest_by_modification_time(task_dir, write_file):
    write_file(task_dir, "plan.alpha.1.md")
    write_file(task_dir, "plan.beta.1.md")
    write_file(task_dir, "review.alpha.1.md")

    names = ["review.alpha.1.md", "plan.alpha.1.md", "plan.beta.1.md"]

    assert latest_by_modification_time(task_dir, names) == "review.alpha.1.md"
    assert latest_by_modification_time(task_dir, []) is None


def test_list_stashed_task_names(task_dir, write_file):
    assert list_stashed_task_names(task_dir) == []

    write_file(task_dir / "stash" / "beta", "plan.beta.1.md")
    write_file(task_dir / "stash" / "alpha", "plan.alpha.1.md")
    write_file(task_dir / "stash", "stray.txt")

    assert list_stashed_task_names(task_dir) == ["alpha", "beta"]


def test_list_related_entries_leaves_longer_task_artifacts(task_dir, write_file):
    write_file(task_dir, "plan.a.1.md")
    write_file(task_dir, "plan.a.b.1.md")
    write_file(task_dir, "a.notes.txt")
    write_file(task_dir, "a.b.notes.txt")
    write_file(task_dir / "a.b", "draft.txt")

    assert list_related_entries(task_dir, "a") == ["a.notes.txt", "plan.a.1.md"]
    assert list_related_entries(task_dir, "a.b") == [
        "a.b",
        "a.b.notes.txt",
        "plan.a.b.1.md",
    ]
