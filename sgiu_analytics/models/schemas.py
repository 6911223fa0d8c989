"""
Pydantic request/response models for the SGIU analytics backend.

This module provides type-safe data validation and serialization for the
modeling core and its API contracts:
- Statistics results: RegressionFit, CorrelationResult
- Logistic model data: LabeledRow, TrainedModel
- Source records for dataset preparation: IncidentRecord, ActiveStudentsMonth
- Request/response bodies for the /analytics endpoints

All models use Pydantic v2 syntax with field validation and examples.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from sgiu_analytics.models.enums import (
    EducationLevel,
    FitReason,
    IncidentCategory,
    PreviousCategory,
)


# Number of entries in an encoded feature vector:
# bias + ordinal + count + 5-way one-hot of the previous category
FEATURE_COUNT: int = 8

# sigmoid(35) differs from 1.0 by ~6e-16, so clamping here loses nothing
# representable while keeping exp() finite.
LOGIT_CLIP: float = 35.0


# =============================================================================
# Statistics Results
# =============================================================================


class RegressionFit(BaseModel):
    """
    Ordinary least squares fit y = intercept + slope * x.

    valid=False means the line must not be plotted or used for prediction.
    reason tells apart too few observations from constant x values; for a
    zero-variance fit the intercept still carries mean(y).
    """
    model_config = ConfigDict(frozen=True)

    intercept: float = Field(..., description="Fitted intercept (a)")
    slope: float = Field(..., description="Fitted slope (b)")
    valid: bool = Field(..., description="Whether the fit can be trusted")
    reason: Optional[FitReason] = Field(
        default=None,
        description="Why the fit is invalid; None when valid"
    )
    n: int = Field(default=0, ge=0, description="Observations used")


class CorrelationResult(BaseModel):
    """
    JSON-safe Pearson correlation result.

    r is None wherever pearson() returns NaN.
    """
    r: Optional[float] = Field(
        default=None,
        description="Pearson correlation coefficient in [-1, 1]"
    )
    n: int = Field(default=0, ge=0, description="Observations used")
    reason: Optional[FitReason] = Field(default=None)


class LinePoint(BaseModel):
    """A point on a fitted regression line, for chart rendering."""
    x: float
    y: float


# =============================================================================
# Logistic Model Data
# =============================================================================


class LabeledRow(BaseModel):
    """
    One historical incident prepared for the logistic model.

    Accepts the legacy dataset column names (prev_category, level_num, y)
    so exports from the incident database validate unchanged.
    ordinal_level is deliberately not range-checked here.
    """
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "category": "equipment",
                "previous_category": "none",
                "prior_count": 0,
                "ordinal_level": 3,
                "label": 1
            }
        }
    )

    category: IncidentCategory = Field(..., description="Category of this incident")
    previous_category: PreviousCategory = Field(
        default=PreviousCategory.NONE,
        validation_alias=AliasChoices('previous_category', 'prev_category'),
        description="Category of the student's previous incident, or 'none'"
    )
    prior_count: int = Field(
        default=0,
        ge=0,
        description="Incidents the same student filed before this one"
    )
    ordinal_level: int = Field(
        default=1,
        validation_alias=AliasChoices('ordinal_level', 'level_num'),
        description="Education level mapped to 1..5"
    )
    label: int = Field(
        default=0,
        ge=0,
        le=1,
        validation_alias=AliasChoices('label', 'y'),
        description="1 when category equals the prediction target"
    )


class TrainedModel(BaseModel):
    """
    Weights of a trained linear-logistic model plus its normalizer.

    max_prior_count is the training-set normalizer and must be reused
    unchanged for every later prediction, and so must logit_clip. The other
    hyperparameters are recorded for display only.
    """
    model_config = ConfigDict(frozen=True)

    weights: List[float] = Field(
        ...,
        min_length=FEATURE_COUNT,
        max_length=FEATURE_COUNT,
        description="One weight per feature, in feature order"
    )
    max_prior_count: int = Field(..., ge=1)
    n_rows: int = Field(default=0, ge=0)
    n_positive: int = Field(default=0, ge=0)
    iterations: Optional[int] = None
    learning_rate: Optional[float] = None
    l2_penalty: Optional[float] = None
    logit_clip: float = Field(
        default=LOGIT_CLIP,
        gt=0,
        description="Logit clamp used in training, reapplied at prediction time"
    )


# =============================================================================
# Source Records
# =============================================================================


class IncidentRecord(BaseModel):
    """
    Incident as listed by the incidents API, joined with the filer's profile.
    """
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": 42,
                "user_id": 7,
                "category": "services",
                "created_at": "2025-03-14T10:22:00Z",
                "satisfaction": 4,
                "education_level": "year2"
            }
        }
    )

    id: Optional[int] = None
    user_id: int = Field(..., description="Student who filed the incident")
    category: IncidentCategory
    created_at: datetime
    satisfaction: Optional[int] = Field(
        default=None,
        ge=1,
        le=5,
        description="Satisfaction rating (1..5) if the student left one"
    )
    education_level: Optional[EducationLevel] = None


class ActiveStudentsMonth(BaseModel):
    """Active student population recorded for a calendar month."""
    month: str = Field(..., pattern=r'^\d{4}-(0[1-9]|1[0-2])$', description="YYYY-MM")
    active_students: int = Field(..., ge=0)


class MonthlySatisfactionRow(BaseModel):
    """Per-month incident volume and average satisfaction."""
    month: str
    total: int
    rated: int
    avg_satisfaction: Optional[float] = None


class MonthlyReportsRow(BaseModel):
    """Per-month active students and incident reports."""
    month: str
    active_students: int
    reports: int


# =============================================================================
# API Request/Response Bodies
# =============================================================================


class PairedSeriesRequest(BaseModel):
    """Two ordered numeric sequences; only the common prefix is used."""
    x: List[float] = Field(default_factory=list)
    y: List[float] = Field(default_factory=list)


class LinearRegressionRequest(PairedSeriesRequest):
    predict_x: Optional[float] = Field(
        default=None,
        description="Optional x value to predict y for"
    )


class LinearRegressionResponse(BaseModel):
    fit: RegressionFit
    correlation: CorrelationResult
    line: List[LinePoint] = Field(default_factory=list)
    prediction: Optional[float] = None


class SatisfactionCorrelationRequest(BaseModel):
    incidents: List[IncidentRecord] = Field(default_factory=list)
    category: Optional[IncidentCategory] = Field(
        default=None,
        description="Restrict the analysis to one category; all when omitted"
    )


class SatisfactionCorrelationResponse(BaseModel):
    months: List[MonthlySatisfactionRow]
    months_analyzed: int
    correlation: CorrelationResult
    fit: RegressionFit
    line: List[LinePoint] = Field(default_factory=list)


class ReportsVsStudentsRequest(BaseModel):
    active_students: List[ActiveStudentsMonth] = Field(default_factory=list)
    incidents: List[IncidentRecord] = Field(default_factory=list)
    predict_x: Optional[float] = Field(
        default=None,
        ge=0,
        description="Active students to predict monthly reports for"
    )


class ReportsVsStudentsResponse(BaseModel):
    months: List[MonthlyReportsRow]
    correlation: CorrelationResult
    fit: RegressionFit
    line: List[LinePoint] = Field(default_factory=list)
    prediction: Optional[float] = None


class DatasetRequest(BaseModel):
    incidents: List[IncidentRecord] = Field(default_factory=list)
    target: IncidentCategory = IncidentCategory.EQUIPMENT


class DatasetResponse(BaseModel):
    target: IncidentCategory
    rows: List[LabeledRow]
    n: int
    positives: int
    negatives: int


class TrainRequest(BaseModel):
    """
    Labeled rows plus optional hyperparameter overrides.

    Omitted hyperparameters fall back to the configured defaults.
    """
    rows: List[LabeledRow] = Field(default_factory=list)
    iterations: Optional[int] = Field(default=None, ge=1, le=100_000)
    learning_rate: Optional[float] = Field(default=None, gt=0)
    l2_penalty: Optional[float] = Field(default=None, ge=0)
    min_rows: Optional[int] = Field(default=None, ge=1)


class TrainResponse(BaseModel):
    model: Optional[TrainedModel] = None
    reason: Optional[FitReason] = None
    feature_names: List[str]
    training_accuracy: Optional[float] = None
    n: int
    positives: int


class PredictRequest(BaseModel):
    model: TrainedModel
    ordinal_level: int = Field(..., ge=1, le=5)
    prior_count: int = Field(..., ge=0)
    previous_category: PreviousCategory = PreviousCategory.NONE


class PredictResponse(BaseModel):
    probability: float = Field(..., ge=0.0, le=1.0)
