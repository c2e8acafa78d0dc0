"""Tests for atomic file writers."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from scanroll.io import write_json_atomic, write_text_atomic


def test_write_json_atomic_cleans_temp_file_on_error(tmp_path: Path) -> None:
    out_path = tmp_path / "report.json"
    temp_prefix = ".tmp-"
    temp_suffix = ".json"

    with pytest.raises(TypeError):
        write_json_atomic(
            path=out_path,
            payload={"bad": object()},
            temp_prefix=temp_prefix,
            temp_suffix=temp_suffix,
        )

    leftovers = [
        item for item in tmp_path.iterdir() if item.name.startswith(temp_prefix) and item.name.endswith(temp_suffix)
    ]
    assert not leftovers
    assert not out_path.exists()


def test_write_json_atomic_keeps_key_order_and_creates_dirs(tmp_path: Path) -> None:
    out_path = tmp_path / "nested" / "aggregate.json"

    write_json_atomic(path=out_path, payload={"z": 1, "a": 2}, temp_prefix=".tmp-", temp_suffix=".json")

    assert list(json.loads(out_path.read_text(encoding="utf-8"))) == ["z", "a"]
    assert json.loads(out_path.read_text(encoding="utf-8")) == {"z": 1, "a": 2}
    assert [item.name for item in out_path.parent.iterdir()] == ["aggregate.json"]


def test_write_text_atomic_replaces_existing_file(tmp_path: Path) -> None:
    out_path = tmp_path / "report.html"
    out_path.write_text("old", encoding="utf-8")

    write_text_atomic(path=out_path, content="<html></html>", temp_prefix=".tmp-", temp_suffix=".html")

    assert out_path.read_text(encoding="utf-8") == "<html></html>"
