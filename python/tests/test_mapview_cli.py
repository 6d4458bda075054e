"""CLI tests for mapview."""

from __future__ import annotations

import json

import pytest

from mapview import config
from mapview.cli import build_arg_parser, main


@pytest.fixture(autouse=True)
def _no_user_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", tmp_path / "absent.json")


def test_default_commands_print_resources_and_modules(sample_report_path, capsys):
    assert main([str(sample_report_path)]) == 0
    out = capsys.readouterr().out
    assert "resources:" in out
    assert "modules:" in out
    assert out.index("resources:") < out.index("modules:")


def test_one_shot_commands_with_json(sample_report_path, capsys):
    rc = main([str(sample_report_path), "--json", "--show-object-files", "-c", "modules --sort name"])
    assert rc == 0
    chunks = capsys.readouterr().out.strip().split("\n}\n")
    payload = json.loads(chunks[-1])
    names = [row["name"] for row in payload["result"]["rows"]]
    assert names == ["libA.a(obj1.o)", "libA.a(obj2.o)", "main.o"]


def test_grouping_flags(sample_report_path, capsys):
    rc = main(
        [
            str(sample_report_path),
            "--json",
            "--no-group-by-group",
            "--no-group-by-module",
            "-c",
            "locations",
        ]
    )
    assert rc == 0
    out = capsys.readouterr().out
    payload = json.loads(out[out.rindex('{\n  "result"') :])
    assert [row["chip"] for row in payload["result"]["rows"]] == ["mpe:pflash0", "mpe:dspr0"]


def test_config_file_and_flag_override(sample_report_path, tmp_path, capsys):
    cfg = tmp_path / "cfg.json"
    cfg.write_text(json.dumps({"dataSectionNames": ".data, .rodata", "showObjectFiles": True}), encoding="utf-8")
    rc = main([str(sample_report_path), "--config", str(cfg), "--data", ".data", "-c", "params"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "showObjectFiles   : True" in out
    assert "dataSectionNames  : .data\n" in out


def test_bad_config_exits_with_error(sample_report_path, tmp_path, capsys):
    cfg = tmp_path / "cfg.json"
    cfg.write_text("[]", encoding="utf-8")
    assert main([str(sample_report_path), "--config", str(cfg)]) == 2
    assert "error:" in capsys.readouterr().err


def test_missing_report_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing.map")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_first_failure_sets_exit_status(sample_report_path, capsys):
    assert main([str(sample_report_path), "-c", "nope", "-c", "modules"]) == 1
    captured = capsys.readouterr()
    assert "unknown command: nope" in captured.err
    assert "modules:" in captured.out


def test_unknown_sort_column_is_rejected(sample_report_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(sample_report_path), "--sort", "bogus"])
    assert excinfo.value.code == 2
    assert "invalid choice: 'bogus'" in capsys.readouterr().err


def test_sort_column_from_another_view_is_accepted(sample_report_path, capsys):
    assert main([str(sample_report_path), "--sort", "actualSize", "-c", "locations", "-c", "modules"]) == 0
    out = capsys.readouterr().out
    assert "locations:" in out and "modules:" in out


def test_no_report_and_no_command_prints_usage(capsys):
    assert main([]) == 2
    assert "usage" in capsys.readouterr().out.lower()


def test_arg_parser_defaults():
    args = build_arg_parser().parse_args(["r.map"])
    assert args.show_object_files is None
    assert args.group_by_group is None
    assert args.command is None
