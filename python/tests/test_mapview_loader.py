"""Tests for report loading and progress reporting."""

from __future__ import annotations

import pytest

from mapview.loader import LoadResponse, iter_load, load_report
from mapview.parser import MalformedReportError


def test_iter_load_streams_progress_then_payload(sample_report_path):
    responses = list(iter_load(sample_report_path))
    assert responses[0] == LoadResponse(sample_report_path, 0, None)
    final = responses[-1]
    assert final.progress == 100
    assert final.done
    assert len(final.payload.link_result) == 3
    progress = [response.progress for response in responses]
    assert progress == sorted(progress)
    assert all(response.payload is None for response in responses[:-1])
    assert all(response.progress < 100 for response in responses[:-1])


def test_iter_load_prompts_for_missing_path(sample_report_path):
    responses = list(iter_load(prompt=lambda: str(sample_report_path)))
    assert responses[-1].path == sample_report_path


def test_iter_load_cancelled_prompt_yields_nothing():
    assert list(iter_load(prompt=lambda: None)) == []


def test_iter_load_requires_path_or_prompt():
    with pytest.raises(ValueError):
        list(iter_load())


def test_missing_file_raises_oserror(tmp_path):
    with pytest.raises(OSError):
        load_report(tmp_path / "missing.map")


def test_malformed_file_yields_no_payload(tmp_path):
    path = tmp_path / "bad.map"
    path.write_text("*** Used Resources ***\n| RAM | x | 0 | 0 | 0 | 0 |\n", encoding="utf-8")
    seen = []
    with pytest.raises(MalformedReportError):
        for response in iter_load(path):
            seen.append(response)
    assert all(response.payload is None for response in seen)


def test_empty_file_loads_empty_model(tmp_path):
    path = tmp_path / "empty.map"
    path.write_text("", encoding="utf-8")
    linker_map = load_report(path)
    assert linker_map.link_result == ()


def test_load_response_to_dict(sample_report_path):
    final = list(iter_load(sample_report_path))[-1]
    payload = final.to_dict()
    assert payload["progress"] == 100
    assert payload["path"] == str(sample_report_path)
    assert payload["payload"]["usedResources"][0]["name"] == "mpe:dspr0"


def test_load_report_without_final_payload_raises(monkeypatch, tmp_path):
    path = tmp_path / "stalled.map"
    monkeypatch.setattr("mapview.loader.iter_load", lambda *args, **kwargs: iter([LoadResponse(path, 50)]))
    with pytest.raises(RuntimeError, match="produced no report"):
        load_report(path)
