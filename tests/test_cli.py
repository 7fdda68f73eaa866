"""Tests for the report CLI."""

from __future__ import annotations

import json

import pytest

from conftest import raw_record, wrap
from dual_tracker.report.cli import EXIT_CONFIG_ERROR, EXIT_INPUT_ERROR, main


@pytest.fixture
def batch_files(tmp_path):
    first = tmp_path / "first.json"
    first.write_text(json.dumps(wrap(raw_record(id="1"), raw_record(id="2", amount="bad"))))
    second = tmp_path / "second.json"
    second.write_text(json.dumps(wrap(raw_record(id="1"), raw_record(id="3", type="UP", investment_asset="BTC", settle_price="120"))))
    return [str(first), str(second)]


class TestReportCli:
    def test_prints_report(self, batch_files, capsys):
        assert main(batch_files) == 0
        out = json.loads(capsys.readouterr().out)
        assert out["stats"]["totalTrades"] == 2
        assert out["duplicates"] == 1
        assert out["rejected"][0]["recordId"] == "2"

    def test_filters(self, batch_files, capsys):
        assert main([*batch_files, "--direction", "SELL_HIGH"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert [t["trade"]["id"] for t in out["trades"]] == ["3"]

    def test_bad_filter_exit_code(self, batch_files, capsys):
        assert main([*batch_files, "--status", "OPEN"]) == EXIT_CONFIG_ERROR
        assert "OPEN" in capsys.readouterr().err

    def test_logs_go_to_stderr(self, batch_files, capsys, monkeypatch):
        monkeypatch.setenv("DUAL_LOG_FORMAT", "json")
        main(batch_files)
        captured = capsys.readouterr()
        json.loads(captured.out)
        assert "batch_normalized" in captured.err

    def test_unreadable_file(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("{not json")
        assert main([str(bad)]) == EXIT_INPUT_ERROR
        assert capsys.readouterr().out == ""
