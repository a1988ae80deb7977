"""Pytest configuration and shared fixtures.

The repository uses a flat `src/` layout. This conftest ensures tests can import from the `src.*`
namespace when running `pytest` without installing the package.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.dataset.loader import load_records_from_csv_text  # noqa: E402
from src.dataset.records import Record  # noqa: E402

PROJECTS_CSV = """\
ID,Iniciativa,Gerencia,Aporte_Estrategico,Beneficios_Estimados
1,Ruteo Optimo,Operaciones,Sistémico,"$1,200,000"
2,Prediccion de Churn,Marketing,Competitivo,"$250,000"
3,Chatbot RRHH,Personas,Habilitador,"$25,000"
4,Pricing Dinamico,Comercial,Sistémico,"$800,000"
5,Conciliacion Automatica,Finanzas,Habilitador,"$150,000"
6,Mantenimiento Predictivo,Operaciones,Competitivo,"$400,000"
"""


@pytest.fixture()
def projects() -> list[Record]:
    """A small portfolio covering every organizational unit."""

    return load_records_from_csv_text(PROJECTS_CSV)


@pytest.fixture()
def projects_csv(tmp_path: Path) -> Path:
    path = tmp_path / "projects.csv"
    path.write_text(PROJECTS_CSV, encoding="utf-8")
    return path
