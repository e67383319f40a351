"""Tests for the per-stage request builders."""

from __future__ import annotations

import pytest

from skknpro.models import (
    AppraisalInput,
    Attachment,
    Submission,
    TitleTopic,
    TopicForm,
    WriterInput,
)
from skknpro.prompts import (
    build_appraisal_request,
    build_connection_test_request,
    build_evaluation_request,
    build_full_report_request,
    build_outline_request,
    build_part1_request,
    build_part23_request,
    build_plagiarism_request,
    build_title_analysis_request,
    truncate_content,
)
from skknpro.prompts.builders import TRUNCATION_NOTE, fold_text_attachments
from skknpro.providers import InlineAttachment, ResponseFormat, StageKind, TextPart, get_sampling

PDF = Attachment(name="giao_an.pdf", kind="pdf", content="JVBERi0xLjQ=")
NOTES = Attachment(name="ghi_chu.txt", kind="txt", content="Tiết 12: phân số")


@pytest.fixture
def form() -> TopicForm:
    return TopicForm(
        title="Ứng dụng Kahoot trong dạy học Toán 6",
        subject="Toán",
        book_set="Cánh Diều",
        grade="Lớp 6",
        situation="Học sinh thụ động",
        solution="Trò chơi hóa",
    )


# --- generator stages ---


def test_outline_request_fills_topic(form: TopicForm) -> None:
    request = build_outline_request(form)

    assert request.stage is StageKind.OUTLINE
    assert request.response_format is ResponseFormat.TEXT
    assert "Ứng dụng Kahoot trong dạy học Toán 6" in request.text
    assert "Cánh Diều" in request.text
    assert "Học sinh thụ động" in request.text
    assert request.system_instruction
    assert request.sampling == get_sampling("generation")


def test_outline_request_placeholders_for_blank_fields() -> None:
    request = build_outline_request(TopicForm(title="Đề tài"))

    assert "Không xác định" in request.text
    assert "Chưa có thông tin cụ thể" in request.text


def test_builders_are_deterministic(form: TopicForm) -> None:
    assert build_outline_request(form) == build_outline_request(form)
    assert build_part23_request("o", "p", form) == build_part23_request("o", "p", form)


def test_generator_stages_share_system_instruction(form: TopicForm) -> None:
    outline = build_outline_request(form)
    part1 = build_part1_request("DÀN Ý")

    assert outline.system_instruction == part1.system_instruction
    assert "DÀN Ý" in part1.text


def test_part23_embeds_previous_stages(form: TopicForm) -> None:
    request = build_part23_request("DÀN Ý GỐC", "PHẦN I ĐÃ VIẾT", form)

    assert request.stage is StageKind.PART_2_3
    assert "DÀN Ý GỐC" in request.text
    assert "PHẦN I ĐÃ VIẾT" in request.text
    assert "Không có tài liệu đính kèm" in request.text


def test_part23_folds_text_and_passes_pdf_inline(form: TopicForm) -> None:
    form.specific_lessons = "Bài 3"
    form.attachments = [PDF, NOTES]

    request = build_part23_request("o", "p", form)

    assert isinstance(request.parts[0], TextPart)
    assert "--- FILE: ghi_chu.txt ---" in request.text
    assert "Tiết 12: phân số" in request.text
    assert "JVBERi0xLjQ=" not in request.text
    assert request.attachments == (
        InlineAttachment(mime_type="application/pdf", data="JVBERi0xLjQ=", name="giao_an.pdf"),
    )
    assert len(request.parts) == 2


def test_fold_text_attachments_skips_binary() -> None:
    folded = fold_text_attachments("Gốc", [PDF, NOTES])

    assert folded.startswith("Gốc")
    assert "giao_an.pdf" not in folded
    assert "ghi_chu.txt" in folded


# --- evaluation and plagiarism ---


@pytest.mark.parametrize(
    ("builder", "stage"),
    [
        (build_evaluation_request, StageKind.EVALUATION),
        (build_plagiarism_request, StageKind.PLAGIARISM),
    ],
)
def test_review_with_pasted_text(builder, stage: StageKind) -> None:  # type: ignore[no-untyped-def]
    request = builder(Submission(content="Nội dung SKKN cần chấm"))

    assert request.stage is stage
    assert len(request.parts) == 1
    assert "Nội dung SKKN cần chấm" in request.text
    assert request.attachments == ()


@pytest.mark.parametrize("builder", [build_evaluation_request, build_plagiarism_request])
def test_review_with_pdf_puts_attachment_first(builder) -> None:  # type: ignore[no-untyped-def]
    request = builder(Submission(content="bị bỏ qua", attachment=PDF))

    first, second = request.parts
    assert isinstance(first, InlineAttachment)
    assert first.mime_type == "application/pdf"
    assert isinstance(second, TextPart)
    assert "bị bỏ qua" not in request.text


def test_review_with_text_attachment_uses_its_content() -> None:
    request = build_evaluation_request(Submission(content="Nội dung dán tay", attachment=NOTES))

    assert "Tiết 12: phân số" in request.text
    assert "Nội dung dán tay" not in request.text


def test_evaluation_and_plagiarism_share_system_instruction() -> None:
    submission = Submission(content="x")

    assert (
        build_evaluation_request(submission).system_instruction
        == build_plagiarism_request(submission).system_instruction
    )


# --- structured stages ---


def test_title_analysis_request_is_json() -> None:
    request = build_title_analysis_request(
        TitleTopic(title="Sử dụng Padlet", subject="Văn", award_goal="Cấp Tỉnh")
    )

    assert request.response_format is ResponseFormat.JSON
    assert request.sampling == get_sampling("title_analysis")
    assert "Sử dụng Padlet" in request.text


@pytest.mark.parametrize(
    ("award_goal", "marker"),
    [
        ("Cấp Quốc gia", "CẤP QUỐC GIA"),
        ("Cấp Tỉnh/Thành phố", "CẤP TỈNH/THÀNH PHỐ"),
        ("Cấp Huyện/Quận", "CẤP HUYỆN/QUẬN"),
        ("Cấp Trường", "CẤP TRƯỜNG"),
        ("Giải thưởng khác", "CẤP TRƯỜNG"),
    ],
)
def test_appraisal_system_carries_tier_requirements(award_goal: str, marker: str) -> None:
    request = build_appraisal_request(AppraisalInput(title="t", award_goal=award_goal))

    assert marker in request.system_instruction
    assert request.response_format is ResponseFormat.JSON
    assert request.sampling == get_sampling("appraisal")


def test_appraisal_defaults_for_blank_fields() -> None:
    request = build_appraisal_request(AppraisalInput(title="t"))

    assert "bộ môn" in request.text
    assert "Chưa xác định" in request.text


def test_appraisal_truncates_long_content() -> None:
    request = build_appraisal_request(AppraisalInput(title="t", content="a" * 50), char_limit=10)

    assert "a" * 10 + TRUNCATION_NOTE in request.text
    assert "a" * 11 not in request.text


def test_truncate_content_boundary() -> None:
    assert truncate_content("abc", 3) == "abc"
    assert truncate_content("abcd", 3) == "abc" + TRUNCATION_NOTE


def test_full_report_request_uses_tier_thresholds() -> None:
    request = build_full_report_request(
        WriterInput(title="Ứng dụng STEM", award_goal="Cấp Quốc gia", author_name="Trần B")
    )

    assert request.stage is StageKind.FULL_REPORT
    assert request.response_format is ResponseFormat.TEXT
    assert request.sampling == get_sampling("appraisal")
    assert "Trần B" in request.system_instruction
    assert "Điểm tối thiểu: 90/100" in request.system_instruction
    assert "Mẫu nghiên cứu tối thiểu: 100 học sinh" in request.system_instruction
    assert "Ứng dụng STEM" in request.text


def test_connection_test_request() -> None:
    request = build_connection_test_request()

    assert request.stage is StageKind.CONNECTION_TEST
    assert request.text == "Xin chào! Đây là tin nhắn test kết nối."
