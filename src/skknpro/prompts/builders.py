"""Request builders, one per pipeline stage.

Each builder turns task input (and earlier stage output) into a complete
StageRequest. Builders read templates through the compiler but do no other
I/O and are deterministic: equal input gives byte-identical requests.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from skknpro.models.inputs import AwardTier, award_tier
from skknpro.prompts.compiler import PromptCompiler
from skknpro.providers.base import (
    ContentPart,
    InlineAttachment,
    ResponseFormat,
    StageKind,
    StageRequest,
    TextPart,
)
from skknpro.providers.settings import APPRAISAL, GENERATION, TITLE_ANALYSIS, get_sampling

if TYPE_CHECKING:
    from skknpro.models.inputs import (
        AppraisalInput,
        Attachment,
        Submission,
        TitleTopic,
        TopicForm,
        WriterInput,
    )

DEFAULT_APPRAISAL_CHAR_LIMIT = 100_000
TRUNCATION_NOTE = "\n\n...(Nội dung đã được cắt bớt do quá dài)"

NO_ATTACHMENTS = "Không có tài liệu đính kèm"
NO_DETAILS = "Chưa có thông tin cụ thể"
UNKNOWN_GRADE = "Không xác định"
UNKNOWN_PAIN_POINT = "Chưa xác định"

_TIER_FRAGMENTS: dict[AwardTier, str] = {
    AwardTier.NATIONAL: "tier_national",
    AwardTier.PROVINCIAL: "tier_provincial",
    AwardTier.DISTRICT: "tier_district",
    AwardTier.SCHOOL: "tier_school",
}

# (minimum score, minimum sample size, criteria) per tier for the writer
WRITER_TIER_REQUIREMENTS: dict[AwardTier, tuple[int, int, str]] = {
    AwardTier.SCHOOL: (60, 15, "Cơ bản, có tính ứng dụng tại đơn vị"),
    AwardTier.DISTRICT: (70, 30, "Có tính mới, khả năng nhân rộng trong huyện"),
    AwardTier.PROVINCIAL: (
        80,
        50,
        "Tính mới cao, có số liệu thống kê, khả năng nhân rộng toàn tỉnh",
    ),
    AwardTier.NATIONAL: (
        90,
        100,
        "Đột phá, có nhóm đối chứng, phân tích thống kê suy diễn, khả năng nhân rộng toàn quốc",
    ),
}

_default_compiler: PromptCompiler | None = None


def get_default_compiler() -> PromptCompiler:
    """Module-level compiler over the packaged templates, created lazily."""
    global _default_compiler
    if _default_compiler is None:
        _default_compiler = PromptCompiler()
    return _default_compiler


def _attachment_part(attachment: Attachment) -> InlineAttachment:
    return InlineAttachment(
        mime_type=attachment.mime_type, data=attachment.content, name=attachment.name
    )


def fold_text_attachments(base: str, attachments: list[Attachment]) -> str:
    """Append the text of every non-binary attachment to ``base``."""
    folded = base
    for attachment in attachments:
        if not attachment.is_binary:
            folded += f"\n\n--- FILE: {attachment.name} ---\n{attachment.content}\n"
    return folded


def truncate_content(content: str, limit: int = DEFAULT_APPRAISAL_CHAR_LIMIT) -> str:
    """Cut ``content`` to ``limit`` characters, noting the cut."""
    if len(content) <= limit:
        return content
    return content[:limit] + TRUNCATION_NOTE


# ---------------------------------------------------------------------------
# Generator stages
# ---------------------------------------------------------------------------


def build_outline_request(form: TopicForm, compiler: PromptCompiler | None = None) -> StageRequest:
    """Stage 1: outline from the topic metadata."""
    compiler = compiler or get_default_compiler()
    prompt = compiler.compile(
        "outline",
        {
            "title": form.title,
            "subject": form.subject,
            "book_set": form.book_set,
            "grade": form.grade or UNKNOWN_GRADE,
            "situation": form.situation or NO_DETAILS,
            "solution": form.solution or NO_DETAILS,
        },
    )
    return StageRequest(
        stage=StageKind.OUTLINE,
        system_instruction=prompt.system,
        parts=(TextPart(prompt.user),),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling(GENERATION),
    )


def build_part1_request(outline: str, compiler: PromptCompiler | None = None) -> StageRequest:
    """Stage 2: sections I and II expanded from the outline."""
    compiler = compiler or get_default_compiler()
    prompt = compiler.compile("part1", {"outline": outline})
    return StageRequest(
        stage=StageKind.PART_1,
        system_instruction=prompt.system,
        parts=(TextPart(prompt.user),),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling(GENERATION),
    )


def build_part23_request(
    outline: str,
    part1: str,
    form: TopicForm,
    compiler: PromptCompiler | None = None,
) -> StageRequest:
    """Stage 3: remaining sections.

    Text attachments are folded into the supporting material; PDF
    attachments follow the instruction as separate inline parts.
    """
    compiler = compiler or get_default_compiler()
    supporting = fold_text_attachments(form.specific_lessons, form.attachments)
    prompt = compiler.compile(
        "part23",
        {
            "outline": outline,
            "part1": part1,
            "specific_lessons": supporting if supporting.strip() else NO_ATTACHMENTS,
        },
    )
    parts: list[ContentPart] = [TextPart(prompt.user)]
    parts.extend(_attachment_part(a) for a in form.attachments if a.is_binary)
    return StageRequest(
        stage=StageKind.PART_2_3,
        system_instruction=prompt.system,
        parts=tuple(parts),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling(GENERATION),
    )


# ---------------------------------------------------------------------------
# Single-shot stages
# ---------------------------------------------------------------------------


def _review_request(
    stage: StageKind,
    template_name: str,
    submission: Submission,
    compiler: PromptCompiler,
) -> StageRequest:
    prompt = compiler.compile(template_name)
    attachment = submission.attachment

    parts: tuple[ContentPart, ...]
    if attachment is not None and attachment.is_binary:
        parts = (_attachment_part(attachment), TextPart(prompt.user))
    else:
        content = attachment.content if attachment is not None else submission.content
        text = compiler.compile_fragment(
            template_name, "with_content", {"content": content, "rubric": prompt.user}
        )
        parts = (TextPart(text),)

    return StageRequest(
        stage=stage,
        system_instruction=prompt.system,
        parts=parts,
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling(GENERATION),
    )


def build_evaluation_request(
    submission: Submission, compiler: PromptCompiler | None = None
) -> StageRequest:
    """Rubric evaluation of pasted text or an attached PDF."""
    return _review_request(
        StageKind.EVALUATION, "evaluation", submission, compiler or get_default_compiler()
    )


def build_plagiarism_request(
    submission: Submission, compiler: PromptCompiler | None = None
) -> StageRequest:
    """Originality check of pasted text or an attached PDF."""
    return _review_request(
        StageKind.PLAGIARISM, "plagiarism", submission, compiler or get_default_compiler()
    )


def build_title_analysis_request(
    topic: TitleTopic, compiler: PromptCompiler | None = None
) -> StageRequest:
    compiler = compiler or get_default_compiler()
    prompt = compiler.compile(
        "title_analysis",
        {
            "title": topic.title,
            "subject": topic.subject,
            "grade_level": topic.grade_level,
            "award_goal": topic.award_goal,
        },
    )
    return StageRequest(
        stage=StageKind.TITLE_ANALYSIS,
        system_instruction=prompt.system,
        parts=(TextPart(prompt.user),),
        response_format=ResponseFormat.JSON,
        sampling=get_sampling(TITLE_ANALYSIS),
    )


def build_appraisal_request(
    task: AppraisalInput,
    char_limit: int = DEFAULT_APPRAISAL_CHAR_LIMIT,
    compiler: PromptCompiler | None = None,
) -> StageRequest:
    """Full appraisal; the system instruction carries the tier's requirements."""
    compiler = compiler or get_default_compiler()
    tier_requirements = compiler.compile_fragment(
        "appraisal", _TIER_FRAGMENTS[award_tier(task.award_goal)]
    )
    prompt = compiler.compile(
        "appraisal",
        {
            "award_goal": task.award_goal,
            "award_goal_upper": task.award_goal.upper(),
            "subject": task.subject or "bộ môn",
            "grade_level": task.grade_level,
            "tier_requirements": tier_requirements,
            "pain_point": task.pain_point or UNKNOWN_PAIN_POINT,
            "title": task.title,
            "content": truncate_content(task.content, char_limit),
        },
    )
    return StageRequest(
        stage=StageKind.APPRAISAL,
        system_instruction=prompt.system,
        parts=(TextPart(prompt.user),),
        response_format=ResponseFormat.JSON,
        sampling=get_sampling(APPRAISAL),
    )


def build_full_report_request(
    task: WriterInput, compiler: PromptCompiler | None = None
) -> StageRequest:
    """One-shot full report; uses the rigorous appraisal sampling."""
    compiler = compiler or get_default_compiler()
    min_score, min_sample, tier_criteria = WRITER_TIER_REQUIREMENTS[award_tier(task.award_goal)]
    prompt = compiler.compile(
        "full_report",
        {
            "author_name": task.author_name,
            "author_title": task.author_title,
            "school_name": task.school_name,
            "school_address": task.school_address,
            "title": task.title,
            "subject": task.subject,
            "grade_level": task.grade_level,
            "award_goal": task.award_goal,
            "award_goal_upper": task.award_goal.upper(),
            "min_score": min_score,
            "min_sample": min_sample,
            "tier_criteria": tier_criteria,
            "current_problem": task.current_problem or "(AI tự phân tích từ đề tài)",
            "proposed_solution": task.proposed_solution or "(AI tự đề xuất phù hợp)",
            "expected_outcome": task.expected_outcome or "(AI tự thiết kế chỉ số đo lường)",
            "sample_size": task.sample_size or "60",
            "duration": task.duration or "1 học kỳ (16 tuần)",
            "tools_used": task.tools_used or "(AI tự đề xuất phù hợp với đề tài)",
        },
    )
    return StageRequest(
        stage=StageKind.FULL_REPORT,
        system_instruction=prompt.system,
        parts=(TextPart(prompt.user),),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling(APPRAISAL),
    )


def build_connection_test_request(compiler: PromptCompiler | None = None) -> StageRequest:
    compiler = compiler or get_default_compiler()
    prompt = compiler.compile("connection_test")
    return StageRequest(
        stage=StageKind.CONNECTION_TEST,
        system_instruction=prompt.system,
        parts=(TextPart(prompt.user),),
        response_format=ResponseFormat.TEXT,
        sampling=get_sampling(GENERATION),
    )
