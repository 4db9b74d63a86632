"""Unit tests for the cadence_lite command-line entry."""

import logging

import pytest

from cadence_lite.__main__ import _create_parser, load_rule_file, main
from cadence_lite.cadence_exceptions import RecurrenceParseError
from cadence_lite.recurrence_models import RecurPattern

pytestmark = pytest.mark.unit


@pytest.fixture
def rule_file(tmp_path):
    path = tmp_path / "rule.yaml"
    path.write_text("pattern: daily\ndaily:\n  every: 2\n", encoding="utf-8")
    return path


@pytest.fixture
def base_args(rule_file, tmp_path):
    return [str(rule_file), "--timezone", "UTC", "--config", str(tmp_path / "no-config.yaml")]


def output_lines(capsys):
    return capsys.readouterr().out.splitlines()


class TestParser:
    def test_start_is_required(self, rule_file):
        with pytest.raises(SystemExit):
            _create_parser().parse_args([str(rule_file)])

    def test_parses_options(self, rule_file):
        args = _create_parser().parse_args([str(rule_file), "--start", "2024-01-01", "--limit", "3", "--debug"])

        assert args.rule_file == rule_file
        assert args.limit == 3
        assert args.debug


class TestLoadRuleFile:
    def test_yaml_rule(self, rule_file):
        rule = load_rule_file(rule_file)

        assert rule.pattern is RecurPattern.DAILY
        assert rule.daily.every == 2

    def test_json_rule(self, tmp_path):
        path = tmp_path / "rule.json"
        path.write_text('{"pattern": "weekly", "weekly": {"every": 1, "days": [true, false, false, false, false, false, false]}}')

        assert load_rule_file(path).weekly.days[0] is True

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "rule.yaml"
        path.write_text("- daily\n", encoding="utf-8")

        with pytest.raises(RecurrenceParseError):
            load_rule_file(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(RecurrenceParseError):
            load_rule_file(tmp_path / "absent.yaml")


class TestMain:
    def test_prints_occurrences(self, base_args, capsys):
        code = main(base_args + ["--start", "2024-01-01T09:00", "--window-end", "2024-01-05"])

        assert code == 0
        assert output_lines(capsys) == [
            "2024-01-01T09:00:00+00:00",
            "2024-01-03T09:00:00+00:00",
            "2024-01-05T09:00:00+00:00",
        ]

    def test_prints_occurrence_ends(self, base_args, capsys):
        main(base_args + ["--start", "2024-01-01T09:00", "--end", "2024-01-01T09:30", "--window-end", "2024-01-03"])

        assert output_lines(capsys) == [
            "2024-01-01T09:00:00+00:00\t2024-01-01T09:30:00+00:00",
            "2024-01-03T09:00:00+00:00\t2024-01-03T09:30:00+00:00",
        ]

    def test_window_start(self, base_args, capsys):
        main(base_args + ["--start", "2024-01-01T09:00", "--window-start", "2024-01-04", "--window-end", "2024-01-08"])

        assert output_lines(capsys) == ["2024-01-05T09:00:00+00:00", "2024-01-07T09:00:00+00:00"]

    def test_limit(self, base_args, capsys):
        main(base_args + ["--start", "2024-01-01T09:00", "--limit", "2"])

        assert len(output_lines(capsys)) == 2

    def test_max_occurrences_from_environment(self, base_args, capsys, monkeypatch):
        monkeypatch.setenv("CADENCE_MAX_OCCURRENCES", "4")

        main(base_args + ["--start", "2024-01-01T09:00"])

        assert len(output_lines(capsys)) == 4

    def test_default_window_uses_configured_years(self, tmp_path, capsys, monkeypatch):
        path = tmp_path / "yearly.yaml"
        path.write_text("pattern: yearly\nyearly:\n  month: 0\n  byDate:\n    date: 1\n", encoding="utf-8")
        monkeypatch.setenv("CADENCE_WINDOW_YEARS", "2")

        main([str(path), "--timezone", "UTC", "--config", str(tmp_path / "none.yaml"), "--start", "2024-01-01"])

        assert output_lines(capsys) == [
            "2024-01-01T00:00:00+00:00",
            "2025-01-01T00:00:00+00:00",
            "2026-01-01T00:00:00+00:00",
        ]

    @pytest.mark.parametrize(
        "extra,message",
        [
            (["--start", "soon"], "Invalid --start"),
            (["--start", "2024-01-01", "--end", "later"], "Invalid --end"),
            (["--start", "2024-01-01", "--timezone", "Atlantis/Lost"], "Unknown timezone"),
        ],
    )
    def test_invalid_input_exits_with_two(self, base_args, capsys, extra, message):
        code = main(base_args + extra)

        assert code == 2
        assert message in capsys.readouterr().err

    def test_invalid_rule_file_exits_with_two(self, tmp_path, capsys):
        path = tmp_path / "rule.yaml"
        path.write_text("pattern: hourly\n", encoding="utf-8")

        code = main([str(path), "--timezone", "UTC", "--config", str(tmp_path / "none.yaml"), "--start", "2024-01-01"])

        assert code == 2
        assert "Invalid recurrence data" in capsys.readouterr().err

    def test_config_log_level_is_applied(self, rule_file, tmp_path, capsys, caplog):
        config = tmp_path / "config.yaml"
        config.write_text("log_level: WARNING\n", encoding="utf-8")

        main([str(rule_file), "--timezone", "UTC", "--config", str(config), "--start", "2024-01-01", "--limit", "2"])

        assert logging.getLogger().level == logging.WARNING
        assert len(output_lines(capsys)) == 2
        assert "Printed" not in caplog.text
