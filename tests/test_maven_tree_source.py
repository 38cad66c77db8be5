"""Tests for running and reading dependency:tree output."""

import subprocess
from unittest.mock import patch

import pytest

from conflicts.errors import ExtractionError
from sources.maven_tree import MavenTreeRunner, build_tree_command, read_tree_output, run_dependency_tree


def test_build_tree_command_defaults():
    assert build_tree_command() == ["mvn", "dependency:tree", "-Dverbose"]


def test_build_tree_command_with_module_and_args():
    assert build_tree_command("core", "./mvnw", ["-q", "-o"]) == [
        "./mvnw", "dependency:tree", "-Dverbose", "-pl", "core", "-q", "-o",
    ]


@patch("sources.maven_tree.subprocess.run")
def test_run_returns_output_lines(mock_run, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(
        args=[], returncode=0, stdout="[INFO] line one\n[INFO] line two\n"
    )
    lines = run_dependency_tree(str(tmp_path), module="core")
    assert lines == ["[INFO] line one", "[INFO] line two"]
    args, kwargs = mock_run.call_args
    assert args[0] == ["mvn", "dependency:tree", "-Dverbose", "-pl", "core"]
    assert kwargs["cwd"] == str(tmp_path)
    assert kwargs["stderr"] == subprocess.STDOUT


@patch("sources.maven_tree.subprocess.run")
def test_run_nonzero_exit_raises(mock_run, tmp_path):
    mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=1, stdout="[ERROR] BUILD FAILURE\n")
    with pytest.raises(ExtractionError) as excinfo:
        run_dependency_tree(str(tmp_path))
    assert "exit code: 1" in str(excinfo.value)
    assert excinfo.value.snapshot == str(tmp_path)


@patch("sources.maven_tree.subprocess.run", side_effect=FileNotFoundError("mvn"))
def test_run_missing_executable_raises(_mock_run, tmp_path):
    with pytest.raises(ExtractionError):
        run_dependency_tree(str(tmp_path))


@patch("sources.maven_tree.subprocess.run", side_effect=subprocess.TimeoutExpired(cmd="mvn", timeout=1))
def test_run_timeout_raises(_mock_run, tmp_path):
    with pytest.raises(ExtractionError):
        run_dependency_tree(str(tmp_path), timeout=1)


def test_run_missing_directory_raises(tmp_path):
    with pytest.raises(ExtractionError):
        run_dependency_tree(str(tmp_path / "nope"))


@patch("sources.maven_tree.run_dependency_tree", return_value=["x"])
def test_runner_passes_settings(mock_tree):
    runner = MavenTreeRunner(module="web", executable="./mvnw", extra_args=["-o"])
    assert runner("/work/base") == ["x"]
    mock_tree.assert_called_once_with("/work/base", "web", "./mvnw", ("-o",))


def test_read_tree_output(tmp_path):
    path = tmp_path / "tree.txt"
    path.write_text("a\nb\n", encoding="utf-8")
    assert read_tree_output(str(path)) == ["a", "b"]


def test_read_tree_output_missing(tmp_path):
    with pytest.raises(ExtractionError):
        read_tree_output(str(tmp_path / "missing.txt"))
