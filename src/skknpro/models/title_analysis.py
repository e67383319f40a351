"""Pydantic models for the title-analysis result.

Field names follow the JSON layout the prompt asks the model for, so the
camelCase keys are aliases; Python code uses the snake_case names.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

TitleGrade = Literal["excellent", "good", "average", "poor"]

ALTERNATIVE_COUNT = 5

# Rubric maxima, in the order the criteria are presented
TITLE_CRITERIA_MAXIMA: dict[str, int] = {
    "specificity": 25,
    "novelty": 30,
    "feasibility": 25,
    "clarity": 20,
}


def grade_for_score(score: int) -> TitleGrade:
    """Colour band for an overall title score."""
    if score >= 80:
        return "excellent"
    if score >= 65:
        return "good"
    if score >= 50:
        return "average"
    return "poor"


class _CriterionScore(BaseModel):
    score: int = Field(ge=0)
    comment: str = ""

    @model_validator(mode="after")
    def _score_within_max(self) -> _CriterionScore:
        maximum = self.max  # type: ignore[attr-defined]
        if self.score > maximum:
            raise ValueError(f"score {self.score} exceeds maximum {maximum}")
        return self


class SpecificityScore(_CriterionScore):
    max: Literal[25] = 25


class NoveltyScore(_CriterionScore):
    max: Literal[30] = 30


class FeasibilityScore(_CriterionScore):
    max: Literal[25] = 25


class ClarityScore(_CriterionScore):
    max: Literal[20] = 20


class TitleCriteria(BaseModel):
    """The four scored criteria; maxima are fixed and sum to 100."""

    specificity: SpecificityScore
    novelty: NoveltyScore
    feasibility: FeasibilityScore
    clarity: ClarityScore

    @property
    def total(self) -> int:
        return (
            self.specificity.score
            + self.novelty.score
            + self.feasibility.score
            + self.clarity.score
        )


class TitleStructure(BaseModel):
    """Title decomposed into action, tool, subject, scope and goal."""

    action: str = ""
    tool: str = ""
    subject: str = ""
    scope: str = ""
    goal: str = ""


class AlternativeTitle(BaseModel):
    title: str = Field(min_length=1)
    reason: str = ""
    score: int = Field(ge=0, le=100)
    tags: list[str] = Field(default_factory=list)


class DatabaseLayer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    duplicate_level: Literal["low", "medium", "high"] = Field(alias="duplicateLevel")
    similar_titles: list[str] = Field(default_factory=list, alias="similarTitles")


class OnlineLayer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    estimated_results: int = Field(ge=0, alias="estimatedResults")
    popularity_level: str = Field(alias="popularityLevel")


class ExpertLayer(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    expert_verdict: str = Field(alias="expertVerdict")
    recommendations: list[str] = Field(default_factory=list)


class LayerAnalysis(BaseModel):
    """Duplicate check, online popularity estimate and expert verdict."""

    layer1_database: DatabaseLayer
    layer2_online: OnlineLayer
    layer3_expert: ExpertLayer


class TitleAnalysis(BaseModel):
    """Scored analysis of a proposed report title.

    Attributes:
        score: Overall score out of 100.
        grade: Colour band derived from the score.
        criteria: The four rubric criteria.
        alternatives: Exactly five suggested replacement titles.
        demo: True when produced without a live model.
    """

    model_config = ConfigDict(populate_by_name=True)

    score: int = Field(ge=0, le=100)
    grade: TitleGrade
    criteria: TitleCriteria
    structure: TitleStructure = Field(default_factory=TitleStructure)
    issues: list[str] = Field(default_factory=list)
    alternatives: list[AlternativeTitle] = Field(
        min_length=ALTERNATIVE_COUNT, max_length=ALTERNATIVE_COUNT
    )
    related_topics: list[str] = Field(default_factory=list)
    layer_analysis: LayerAnalysis | None = Field(default=None, alias="layerAnalysis")
    conclusion: str = ""
    demo: bool = False

    def to_json_dict(self) -> dict[str, object]:
        """Serialise with the wire (camelCase) keys."""
        return self.model_dump(by_alias=True, mode="json")
