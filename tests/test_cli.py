"""Tests for the offline selection CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest

from src.engine.cli import main, select


def _write_plan(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "plan.json"
    path.write_text(content, encoding="utf-8")
    return path


def test_select_applies_plan_file(tmp_path: Path, projects_csv: Path) -> None:
    plan = {
        "operation": "include",
        "criteria": [{"column": "Beneficios_Estimados", "comparison": "less_than", "value": 200000}],
    }
    plan_path = _write_plan(tmp_path, json.dumps(plan))
    assert select(csv_path=str(projects_csv), plan_path=str(plan_path)) == ["3", "5"]


def test_select_uses_default_plan_for_invalid_json(tmp_path: Path, projects_csv: Path) -> None:
    plan_path = _write_plan(tmp_path, "not json")
    assert select(csv_path=str(projects_csv), plan_path=str(plan_path)) == ["1", "2", "3", "4", "5"]


def test_main_prints_ids(
        tmp_path: Path,
        projects_csv: Path,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
) -> None:
    plan_path = _write_plan(tmp_path, '{"operation": "exclude", "criteria": [], "limit": 4}')
    monkeypatch.setattr(
        sys, "argv", ["portfolio-select", "--csv", str(projects_csv), "--plan", str(plan_path)]
    )

    main()

    assert capsys.readouterr().out == "5,6\n"
