"""Tests for flag parsing."""

import pytest

from devdeploy.config import Settings
from devdeploy.options import (
    OPTIONS,
    PROJECT,
    ParsedOptions,
    flag_value,
    has_flag,
    option_value,
    options_help,
)


@pytest.mark.parametrize(
    "args",
    [
        ["--tag=2.0"],
        ["--tag", "2.0"],
        ["--yes", "--tag=2.0", "--project", "demo"],
        ["--project", "demo", "--tag", "2.0", "--yes"],
        ["-t", "2.0"],
        ["-y", "-t=2.0"],
    ],
)
def test_flag_value_any_position(args) -> None:
    assert flag_value(args, "--tag", "-t") == "2.0"


def test_flag_value_first_occurrence_wins() -> None:
    assert flag_value(["--tag=1.0", "--tag", "2.0"], "--tag") == "1.0"
    assert flag_value(["-t", "1.0", "--tag=2.0"], "--tag", "-t") == "1.0"


def test_flag_value_absent() -> None:
    assert flag_value([], "--tag") is None
    assert flag_value(["--project", "demo", "--yes"], "--tag", "-t") is None


def test_flag_value_last_argument_without_value() -> None:
    assert flag_value(["--yes", "--tag"], "--tag") is None


def test_flag_value_requires_exact_spelling() -> None:
    assert flag_value(["--tags=2.0", "--tagged", "x"], "--tag") is None


def test_flag_value_keeps_everything_after_equals() -> None:
    assert flag_value(["--project=a=b"], "--project") == "a=b"
    assert flag_value(["--project="], "--project") == ""


def test_has_flag() -> None:
    assert has_flag(["--project", "demo", "-y"], "--yes", "-y")
    assert has_flag(["--show-log"], "--show-logs", "--show-log")
    assert not has_flag(["--yes=1", "--project", "demo"], "--yes", "-y")
    assert not has_flag([], "--yes")


def test_parsed_options_defaults(clean_settings) -> None:
    options = ParsedOptions.from_args([], Settings())
    assert options.tag is None
    assert options.project == "syndesis"
    assert options.yes is False
    assert options.memory == "4912"
    assert options.cpus == "2"
    assert options.disk_size == "20GB"
    assert options.openshift_version == "v3.6.0"
    assert options.show_logs is False


def test_parsed_options_from_args(clean_settings) -> None:
    args = [
        "--project=demo", "-y", "--tag", "2.0",
        "--memory", "8192", "--cpus=4", "--disk-size", "40GB",
        "--openshift-version=v3.7.0", "--show-logs",
    ]
    options = ParsedOptions.from_args(args, Settings())
    assert options.project == "demo"
    assert options.yes is True
    assert options.tag == "2.0"
    assert options.memory == "8192"
    assert options.cpus == "4"
    assert options.disk_size == "40GB"
    assert options.openshift_version == "v3.7.0"
    assert options.show_logs is True


def test_parsed_options_settings_from_environment(clean_settings, monkeypatch) -> None:
    monkeypatch.setenv("DEVDEPLOY_PROJECT", "envproject")
    monkeypatch.setenv("DEVDEPLOY_MEMORY", "6144")
    options = ParsedOptions.from_args(["--memory", "2048"], Settings())
    assert options.project == "envproject"
    assert options.memory == "2048"


def test_explicit_empty_project_is_kept(clean_settings) -> None:
    assert ParsedOptions.from_args(["--project="], Settings()).project == ""


def test_option_table() -> None:
    assert option_value(["-p", "demo"], PROJECT) == "demo"
    rendered = options_help()
    for option in OPTIONS:
        assert option.name in rendered
