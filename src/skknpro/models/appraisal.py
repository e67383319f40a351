"""Pydantic models for the full appraisal result.

The rubric has four criteria with fixed ids, names, maxima and display
colours. The model is free to phrase strengths and weaknesses, but the
rubric itself is checked here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


@dataclass(frozen=True)
class RubricCriterion:
    id: str
    name: str
    max: int
    color: str


APPRAISAL_RUBRIC: tuple[RubricCriterion, ...] = (
    RubricCriterion("1", "Tính mới & Sáng tạo", 30, "#4F46E5"),
    RubricCriterion("2", "Tính Khoa học", 25, "#10B981"),
    RubricCriterion("3", "Hiệu quả Thực tiễn", 30, "#F59E0B"),
    RubricCriterion("4", "Hình thức & Thể thức", 15, "#EF4444"),
)

_RUBRIC_BY_ID = {c.id: c for c in APPRAISAL_RUBRIC}


class AppraisalCriterion(BaseModel):
    id: str
    name: str = ""
    score: float = Field(ge=0)
    max: int
    strengths: str = ""
    weaknesses: str = ""
    comment: str = ""
    color: str = ""

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_string(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class WarningNote(BaseModel):
    level: str
    text: str = ""


class AppraisalWarnings(BaseModel):
    duplicate: WarningNote
    plagiarism: WarningNote


class ReviewParagraph(BaseModel):
    """A passage flagged as resembling existing reports."""

    text: str
    match: str
    source: str = ""


class UpgradePlan(BaseModel):
    short: list[str] = Field(default_factory=list)
    medium: list[str] = Field(default_factory=list)
    long: list[str] = Field(default_factory=list)


class SpellingError(BaseModel):
    original: str
    suggest: str
    context: str = ""


class AppraisalResult(BaseModel):
    """Scored appraisal of a complete report.

    Attributes:
        total_score: Overall score out of 100.
        criteria: Exactly the four rubric criteria, ordered by id.
        spelling_errors: Defaults to empty when the model omits it.
        demo: True when produced without a live model.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_score: float = Field(ge=0, le=100, alias="totalScore")
    criteria: list[AppraisalCriterion]
    warnings: AppraisalWarnings
    review_paragraphs: list[ReviewParagraph] = Field(
        default_factory=list, alias="reviewParagraphs"
    )
    upgrade_plan: UpgradePlan = Field(default_factory=UpgradePlan, alias="upgradePlan")
    spelling_errors: list[SpellingError] = Field(default_factory=list, alias="spellingErrors")
    demo: bool = False

    @field_validator("spelling_errors", "review_paragraphs", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def _check_rubric(self) -> AppraisalResult:
        ids = sorted(c.id for c in self.criteria)
        if ids != sorted(_RUBRIC_BY_ID):
            raise ValueError(f"criteria ids must be exactly {sorted(_RUBRIC_BY_ID)}, got {ids}")

        for criterion in self.criteria:
            rubric = _RUBRIC_BY_ID[criterion.id]
            if criterion.max != rubric.max:
                raise ValueError(
                    f"criterion {criterion.id} max must be {rubric.max}, got {criterion.max}"
                )
            if criterion.score > rubric.max:
                raise ValueError(
                    f"criterion {criterion.id} score {criterion.score} exceeds {rubric.max}"
                )
            criterion.name = criterion.name or rubric.name
            criterion.color = criterion.color or rubric.color

        self.criteria.sort(key=lambda c: c.id)
        return self

    @property
    def criteria_total(self) -> float:
        return sum(c.score for c in self.criteria)

    def to_json_dict(self) -> dict[str, object]:
        """Serialise with the wire (camelCase) keys."""
        return self.model_dump(by_alias=True, mode="json")
