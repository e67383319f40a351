"""Test CLI commands."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
from typer.testing import CliRunner

from skknpro import __version__
from skknpro.cli import app
from skknpro.observability import close_file_logging
from skknpro.providers.demo import DEMO_MARKER

if TYPE_CHECKING:
    from pathlib import Path

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """No credentials or user config leak in from the environment."""
    for name in (
        "SKKN_API_KEY",
        "SKKN_SYSTEM_API_KEY",
        "SKKN_MODEL",
        "SKKN_PROJECT_DIR",
        "GOOGLE_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("skknpro.pipeline.load_user_config", lambda: None)


def _invoke(tmp_path: Path, *args: str):  # type: ignore[no-untyped-def]
    return runner.invoke(app, ["--project", str(tmp_path), *args])


def test_version_command() -> None:
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert f"v{__version__}" in result.stdout


def test_no_args_shows_help() -> None:
    result = runner.invoke(app, [])

    assert "Usage" in result.stdout
    assert "generate" in result.stdout


def test_models_command_lists_selectors() -> None:
    result = runner.invoke(app, ["models"])

    assert result.exit_code == 0
    for selector in ("fast", "smart", "expert", "custom"):
        assert selector in result.stdout


def test_test_connection_demo(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "test-connection", "--api-key", "demo")

    assert result.exit_code == 0
    assert "Kết nối thành công" in result.stdout


def test_generate_demo_writes_output(tmp_path: Path) -> None:
    output = tmp_path / "skkn.md"

    result = _invoke(
        tmp_path,
        "generate",
        "Ứng dụng Kahoot trong dạy học Toán 6",
        "--subject",
        "Toán",
        "--api-key",
        "demo",
        "--output",
        str(output),
    )

    assert result.exit_code == 0
    assert "Lưu ý:" in result.stdout
    text = output.read_text(encoding="utf-8")
    assert text.count(DEMO_MARKER) == 3
    assert "# ỨNG DỤNG KAHOOT TRONG DẠY HỌC TOÁN 6" in text


def test_generate_with_text_attachment(tmp_path: Path) -> None:
    notes = tmp_path / "notes.txt"
    notes.write_text("Tiết 12", encoding="utf-8")

    result = _invoke(
        tmp_path, "generate", "Đề tài", "--attach", str(notes), "--api-key", "demo"
    )

    assert result.exit_code == 0


def test_generate_missing_attachment_fails(tmp_path: Path) -> None:
    result = _invoke(
        tmp_path, "generate", "Đề tài", "--attach", str(tmp_path / "nope.pdf"), "-k", "demo"
    )

    assert result.exit_code == 1
    assert "File not found" in result.stdout


def test_binary_attachment_asks_for_extracted_text(tmp_path: Path) -> None:
    docx = tmp_path / "skkn.docx"
    docx.write_bytes(b"PK\x03\x04\xff\xfe\x00binary")

    result = _invoke(tmp_path, "generate", "Đề tài", "--attach", str(docx), "-k", "demo")

    assert result.exit_code == 1
    assert "is not UTF-8 text" in result.stdout


def test_generate_without_credential_fails(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "generate", "Đề tài")

    assert result.exit_code == 1
    assert "Vui lòng nhập API Key." in result.stdout


def test_evaluate_without_content_fails(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "evaluate", "--api-key", "demo")

    assert result.exit_code == 1
    assert "Vui lòng nhập nội dung SKKN" in result.stdout


def test_evaluate_pasted_text_demo(tmp_path: Path) -> None:
    output = tmp_path / "danh_gia.md"

    result = _invoke(
        tmp_path, "evaluate", "--text", "Nội dung SKKN", "-k", "demo", "-o", str(output)
    )

    assert result.exit_code == 0
    assert DEMO_MARKER in output.read_text(encoding="utf-8")


def test_plagiarism_pdf_demo(tmp_path: Path) -> None:
    pdf = tmp_path / "skkn.pdf"
    pdf.write_bytes(b"%PDF-1.4 test")
    output = tmp_path / "dao_van.md"

    result = _invoke(tmp_path, "plagiarism", str(pdf), "-k", "demo", "-o", str(output))

    assert result.exit_code == 0
    assert '"skkn.pdf"' in output.read_text(encoding="utf-8")


def test_analyze_title_json_output(tmp_path: Path) -> None:
    output = tmp_path / "title.json"

    result = _invoke(
        tmp_path, "analyze-title", "Một số biện pháp nâng cao chất lượng", "-o", str(output)
    )

    assert result.exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert data["demo"] is True
    assert len(data["alternatives"]) == 5
    assert "layerAnalysis" in data


def test_analyze_title_table_output(tmp_path: Path) -> None:
    result = _invoke(tmp_path, "analyze-title", "Ứng dụng Canva", "-k", "demo")

    assert result.exit_code == 0
    assert "Phân tích tên đề tài" in result.stdout


def test_appraise_text_file(tmp_path: Path) -> None:
    report = tmp_path / "skkn.txt"
    report.write_text("Nội dung bản thảo", encoding="utf-8")
    output = tmp_path / "appraisal.json"

    result = _invoke(
        tmp_path, "appraise", str(report), "--award", "Cấp Tỉnh", "-k", "demo", "-o", str(output)
    )

    assert result.exit_code == 0
    data = json.loads(output.read_text(encoding="utf-8"))
    assert [c["id"] for c in data["criteria"]] == ["1", "2", "3", "4"]
    assert data["totalScore"] == sum(c["score"] for c in data["criteria"])


def test_appraise_rejects_pdf(tmp_path: Path) -> None:
    pdf = tmp_path / "skkn.pdf"
    pdf.write_bytes(b"%PDF-1.4")

    result = _invoke(tmp_path, "appraise", str(pdf), "-k", "demo")

    assert result.exit_code == 1
    assert "PDF" in result.stdout


def test_write_demo(tmp_path: Path) -> None:
    output = tmp_path / "full.md"

    result = _invoke(
        tmp_path, "write", "Ứng dụng Padlet", "--author", "Nguyễn Văn A", "-k", "demo",
        "-o", str(output),
    )

    assert result.exit_code == 0
    assert "Nguyễn Văn A" in output.read_text(encoding="utf-8")


def test_invalid_project_config_fails(tmp_path: Path) -> None:
    (tmp_path / "skknpro.yaml").write_text("appraisal_char_limit: 0\n", encoding="utf-8")

    result = _invoke(tmp_path, "write", "Đề tài", "-k", "demo")

    assert result.exit_code == 1
    assert "Error" in result.stdout


def test_log_flag_creates_log_files(tmp_path: Path) -> None:
    try:
        result = runner.invoke(
            app, ["--log", "--project", str(tmp_path), "write", "Đề tài", "-k", "demo"]
        )
    finally:
        close_file_logging()

    assert result.exit_code == 0
    assert (tmp_path / "logs" / "debug.jsonl").exists()
