"""CLI error-handling tests."""

from __future__ import annotations

from pathlib import Path

from field_group_schema.cli import main


def test_missing_required_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["print-schema"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "Missing option" in captured.err
    assert "--config" in captured.err
    assert "Traceback" not in captured.err


def test_unknown_option_returns_clean_click_error(capsys) -> None:
    exit_code = main(["list-groups", "--bogus"])
    captured = capsys.readouterr()

    assert exit_code == 2
    assert "No such option" in captured.err
    assert "--bogus" in captured.err
    assert "Traceback" not in captured.err


def test_configuration_errors_are_reported_without_traceback(tmp_path: Path, capsys) -> None:
    exit_code = main(["print-schema", "--config", str(tmp_path / "missing.yaml")])
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "not found" in captured.err
    assert "Traceback" not in captured.err


def test_invalid_variables_are_reported(tmp_path: Path, capsys) -> None:
    config_path = tmp_path / "field-groups.yaml"
    config_path.write_text("field_groups: []\n", encoding="utf-8")

    exit_code = main(
        [
            "query",
            "--config",
            str(config_path),
            "--query",
            "{ __typename }",
            "--variables",
            "[1, 2]",
        ]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "--variables must be a JSON object." in captured.err
