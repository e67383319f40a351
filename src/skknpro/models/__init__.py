"""Pydantic models for task inputs and structured stage results."""

from skknpro.models.appraisal import (
    APPRAISAL_RUBRIC,
    AppraisalCriterion,
    AppraisalResult,
    AppraisalWarnings,
    ReviewParagraph,
    RubricCriterion,
    SpellingError,
    UpgradePlan,
    WarningNote,
)
from skknpro.models.inputs import (
    AppraisalInput,
    Attachment,
    AwardTier,
    RequestSettings,
    Submission,
    TitleTopic,
    TopicForm,
    WriterInput,
    award_tier,
)
from skknpro.models.title_analysis import (
    ALTERNATIVE_COUNT,
    TITLE_CRITERIA_MAXIMA,
    AlternativeTitle,
    LayerAnalysis,
    TitleAnalysis,
    TitleCriteria,
    TitleGrade,
    TitleStructure,
    grade_for_score,
)

__all__ = [
    "ALTERNATIVE_COUNT",
    "APPRAISAL_RUBRIC",
    "TITLE_CRITERIA_MAXIMA",
    "AlternativeTitle",
    "AppraisalCriterion",
    "AppraisalInput",
    "AppraisalResult",
    "AppraisalWarnings",
    "Attachment",
    "AwardTier",
    "LayerAnalysis",
    "RequestSettings",
    "ReviewParagraph",
    "RubricCriterion",
    "SpellingError",
    "Submission",
    "TitleAnalysis",
    "TitleCriteria",
    "TitleGrade",
    "TitleStructure",
    "TitleTopic",
    "TopicForm",
    "UpgradePlan",
    "WarningNote",
    "WriterInput",
    "award_tier",
    "grade_for_score",
]
