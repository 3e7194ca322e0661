from __future__ import annotations

import subprocess
import sys
from pathlib import Path

SCRIPT_PATH = Path(__file__).resolve().parents[2] / "tools" / "depcheck.py"


def _run(root: Path) -> subprocess.CompletedProcess[str]:
    return subprocess.run(
        [sys.executable, str(SCRIPT_PATH), "--root", str(root)],
        capture_output=True,
        text=True,
        check=False,
    )


def test_depcheck_fails_on_framework_import_in_domain(tmp_path: Path) -> None:
    domain_dir = tmp_path / "domain"
    domain_dir.mkdir(parents=True)
    violating_file = domain_dir / "model.py"
    violating_file.write_text("import sqlalchemy\n", encoding="utf-8")

    result = _run(tmp_path)

    combined_output = f"{result.stdout}\n{result.stderr}"
    assert result.returncode != 0
    assert "sqlalchemy" in combined_output
    assert str(violating_file) in combined_output


def test_depcheck_fails_on_adapter_import_in_application(tmp_path: Path) -> None:
    application_dir = tmp_path / "application"
    application_dir.mkdir(parents=True)
    (application_dir / "use_case.py").write_text(
        "from foh.infrastructure.db.database import Database\n",
        encoding="utf-8",
    )

    result = _run(tmp_path)

    assert result.returncode != 0
    assert "foh.infrastructure.db.database" in result.stdout


def test_application_may_use_pydantic(tmp_path: Path) -> None:
    application_dir = tmp_path / "application"
    application_dir.mkdir(parents=True)
    (application_dir / "dto.py").write_text("from pydantic import BaseModel\n", encoding="utf-8")

    result = _run(tmp_path)

    assert result.returncode == 0
    assert "depcheck passed" in result.stdout


def test_project_source_is_clean() -> None:
    result = subprocess.run(
        [sys.executable, str(SCRIPT_PATH)],
        capture_output=True,
        text=True,
        check=False,
    )

    assert result.returncode == 0, result.stdout
