# File: tests/test_cli.py
"""Тесты для CLI (`bucket_scout.cli`) с использованием click.testing.CliRunner.
Проверяют команды `scan`, `config`, `regions`, `--version`, а также обработку ошибок.
"""
import asyncio
import importlib
import json
from datetime import datetime, timedelta

import pytest
from click.testing import CliRunner

from bucket_scout.aggregator import ScanReport
from bucket_scout.cli import cli
from bucket_scout.prober.models import Outcome, OutcomeKind

# `bucket_scout.cli` as a package attribute is the click Group re-exported in
# __init__.py; bind the module itself so monkeypatching reaches `scan`.
cli_module = importlib.import_module("bucket_scout.cli")


@pytest.fixture(autouse=True)
def patch_start_scan(monkeypatch):
    """Патчим start_scan: возвращает фиктивный отчёт без сетевых запросов."""
    calls = []

    async def fake_scan(cfg, reporter):
        calls.append(cfg)
        outcome = Outcome(OutcomeKind.FOUND, bucket=cfg.domain, host=cfg.host, url=f"{cfg.host}/{cfg.domain}")
        reporter.report(outcome)
        started = datetime(2024, 1, 1, 12, 0, 0)
        return ScanReport(
            domain=cfg.domain,
            host=cfg.host,
            candidates=3,
            started=started,
            finished=started + timedelta(seconds=2),
            outcomes=list(reporter.outcomes),
        )

    monkeypatch.setattr(cli_module, "start_scan", fake_scan)
    return calls


def test_version_option():
    runner = CliRunner()
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert "BucketScout" in result.output


def test_regions_command():
    result = CliRunner().invoke(cli, ["regions"])
    assert result.exit_code == 0
    assert "s3-eu-west-1.amazonaws.com" in result.output


def test_scan_requires_domain():
    result = CliRunner().invoke(cli, ["scan"])
    assert result.exit_code != 0
    assert "--domain" in result.output


def test_scan_unknown_region():
    result = CliRunner().invoke(cli, ["scan", "-d", "example", "-r", "mars"])
    assert result.exit_code != 0
    assert "Usage" in result.output


def test_scan_prints_outcomes_and_times(patch_start_scan):
    result = CliRunner().invoke(cli, ["scan", "-d", "example", "-r", "ie"])
    assert result.exit_code == 0
    assert "Bucket Found: example" in result.output
    assert "Total time: 2.00s" in result.output
    assert patch_start_scan[0].host == "http://s3-eu-west-1.amazonaws.com"


def test_scan_flags_reach_config(patch_start_scan, tmp_path):
    words = tmp_path / "w.txt"
    words.write_text("a\n", encoding="utf-8")
    result = CliRunner().invoke(
        cli,
        ["scan", "-d", "example", "-a", "--prefix", "--pool-size", "3", "-w", str(words),
         "--output-dir", str(tmp_path / "dl")],
    )
    assert result.exit_code == 0
    cfg = patch_start_scan[0]
    assert cfg.download is True
    assert cfg.prefix_candidates is True
    assert cfg.pool_size == 3
    assert cfg.wordlist == words


def test_scan_json_and_html_files(tmp_path):
    out_json = tmp_path / "out.json"
    out_html = tmp_path / "report.html"
    result = CliRunner().invoke(
        cli, ["scan", "-d", "example", "--json", str(out_json), "--html", str(out_html)]
    )
    assert result.exit_code == 0
    data = json.loads(out_json.read_text(encoding="utf-8"))
    assert data["counts"]["found"] == 1
    assert data["outcomes"][0]["bucket"] == "example"
    assert "example" in out_html.read_text(encoding="utf-8")


def test_bad_log_file(tmp_path):
    result = CliRunner().invoke(
        cli, ["--log-file", str(tmp_path / "missing-dir" / "scan.log"), "scan", "-d", "example"]
    )
    assert result.exit_code != 0
    assert "logging file" in result.output


def test_log_file_records_outcomes(tmp_path):
    log_file = tmp_path / "scan.log"
    result = CliRunner().invoke(cli, ["--log-file", str(log_file), "scan", "-d", "example"])
    assert result.exit_code == 0
    assert "Bucket Found: example" in log_file.read_text(encoding="utf-8")


def test_show_config(tmp_path):
    cfg_file = tmp_path / "scan.yaml"
    cfg_file.write_text("domain: ignored\npool_size: 7\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["--config", str(cfg_file), "config", "-d", "example"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["domain"] == "example"
    assert data["pool_size"] == 7


def test_scan_interrupted(monkeypatch):
    async def interrupted(cfg, reporter):
        raise KeyboardInterrupt

    monkeypatch.setattr(cli_module, "start_scan", interrupted)
    result = CliRunner().invoke(cli, ["scan", "-d", "example"])
    assert result.exit_code == 130


def test_scan_failure(monkeypatch):
    async def broken(cfg, reporter):
        await asyncio.sleep(0)
        raise RuntimeError("boom")

    monkeypatch.setattr(cli_module, "start_scan", broken)
    result = CliRunner().invoke(cli, ["scan", "-d", "example"])
    assert result.exit_code == 1
    assert "boom" in result.output
