"""Task inputs and per-request settings.

Attachments arrive already decoded by whatever ingests files; the core
never parses PDF or DOCX itself. A PDF stays a base64 payload and travels
as an inline attachment, everything else is plain extracted text.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from skknpro.providers.model_plans import CUSTOM, FAST


class AwardTier(StrEnum):
    """Competition level a report is aimed at, highest first."""

    NATIONAL = "Quốc gia"
    PROVINCIAL = "Tỉnh"
    DISTRICT = "Huyện"
    SCHOOL = "Trường"


def award_tier(award_goal: str) -> AwardTier:
    """Map a free-form award goal ("Cấp Tỉnh/Thành phố", ...) to its tier.

    Anything that names no known tier is treated as school level.
    """
    for tier in (AwardTier.NATIONAL, AwardTier.PROVINCIAL, AwardTier.DISTRICT):
        if tier.value in award_goal:
            return tier
    return AwardTier.SCHOOL


class Attachment(BaseModel):
    """An already-decoded uploaded file.

    Attributes:
        name: Original file name.
        kind: Source format.
        content: Base64 payload for PDFs, extracted text otherwise.
        mime_type: Media type of the original file.
    """

    name: str
    kind: Literal["pdf", "docx", "txt"]
    content: str
    mime_type: str = ""

    @model_validator(mode="after")
    def _default_mime_type(self) -> Attachment:
        if not self.mime_type:
            self.mime_type = {
                "pdf": "application/pdf",
                "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
                "txt": "text/plain",
            }[self.kind]
        return self

    @property
    def is_binary(self) -> bool:
        """True when content is a payload to pass through, not text."""
        return self.kind == "pdf"


class TopicForm(BaseModel):
    """Generator input: the topic the three-stage draft is written for."""

    title: str
    subject: str = ""
    book_set: str = ""
    grade: str = ""
    situation: str = ""
    solution: str = ""
    specific_lessons: str = ""
    attachments: list[Attachment] = Field(default_factory=list)


class Submission(BaseModel):
    """A finished report to evaluate or plagiarism-check.

    Either pasted ``content`` or an ``attachment``; an attachment wins.
    """

    content: str = ""
    attachment: Attachment | None = None

    @property
    def is_empty(self) -> bool:
        if self.attachment is not None:
            return not self.attachment.content.strip()
        return not self.content.strip()


class TitleTopic(BaseModel):
    """Title-analysis input."""

    title: str
    subject: str = ""
    grade_level: str = ""
    award_goal: str = ""


class AppraisalInput(BaseModel):
    """Full appraisal input: the topic plus the report text."""

    title: str
    subject: str = ""
    grade_level: str = ""
    award_goal: str = "Cấp Trường"
    pain_point: str = ""
    content: str = ""


class WriterInput(BaseModel):
    """Full-report writer input."""

    author_name: str = ""
    author_title: str = ""
    school_name: str = ""
    school_address: str = ""
    title: str
    subject: str = ""
    grade_level: str = ""
    award_goal: str = "Cấp Trường"
    current_problem: str = ""
    proposed_solution: str = ""
    expected_outcome: str = ""
    sample_size: str = "60"
    duration: str = "1 học kỳ (16 tuần)"
    tools_used: str = ""


class RequestSettings(BaseModel):
    """Credential and model choice supplied by the caller for one request.

    Attributes:
        credential: The user's own API key ("" when none).
        model_selector: Logical mode, legacy alias, explicit id or ``custom``.
        custom_model: Model id used when the selector is ``custom``.
        system_credential: The application's shared default key, if any.
    """

    credential: str = ""
    model_selector: str = FAST
    custom_model: str = ""
    system_credential: str = ""

    @property
    def effective_credential(self) -> str:
        """The user's key when given, else the shared default."""
        return self.credential.strip() or self.system_credential.strip()

    @property
    def uses_system_credential(self) -> bool:
        """True when requests go out on the shared default key."""
        shared = self.system_credential.strip()
        return bool(shared) and self.effective_credential == shared

    @property
    def resolved_selector(self) -> str:
        selector = self.model_selector.strip()
        if selector == CUSTOM:
            return self.custom_model.strip() or FAST
        return selector or FAST
