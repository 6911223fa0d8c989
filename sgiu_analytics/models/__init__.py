"""
Package initialization file for the analytics models.

Re-exports all Pydantic schemas and enumerations from schemas.py and enums.py
so other modules can import them from sgiu_analytics.models directly.

Usage:
    from sgiu_analytics.models import LabeledRow, TrainedModel, PreviousCategory
"""

from sgiu_analytics.models.enums import (
    EducationLevel,
    FitReason,
    IncidentCategory,
    PreviousCategory,
)
from sgiu_analytics.models.schemas import (
    FEATURE_COUNT,
    LOGIT_CLIP,
    ActiveStudentsMonth,
    CorrelationResult,
    DatasetRequest,
    DatasetResponse,
    IncidentRecord,
    LabeledRow,
    LinearRegressionRequest,
    LinearRegressionResponse,
    LinePoint,
    MonthlyReportsRow,
    MonthlySatisfactionRow,
    PairedSeriesRequest,
    PredictRequest,
    PredictResponse,
    RegressionFit,
    ReportsVsStudentsRequest,
    ReportsVsStudentsResponse,
    SatisfactionCorrelationRequest,
    SatisfactionCorrelationResponse,
    TrainedModel,
    TrainRequest,
    TrainResponse,
)

__all__ = [
    # ----- Enums -----
    'EducationLevel',
    'FitReason',
    'IncidentCategory',
    'PreviousCategory',
    # ----- Statistics -----
    'CorrelationResult',
    'LinePoint',
    'RegressionFit',
    # ----- Logistic model -----
    'FEATURE_COUNT',
    'LOGIT_CLIP',
    'LabeledRow',
    'TrainedModel',
    # ----- Source records -----
    'ActiveStudentsMonth',
    'IncidentRecord',
    'MonthlyReportsRow',
    'MonthlySatisfactionRow',
    # ----- API bodies -----
    'DatasetRequest',
    'DatasetResponse',
    'LinearRegressionRequest',
    'LinearRegressionResponse',
    'PairedSeriesRequest',
    'PredictRequest',
    'PredictResponse',
    'ReportsVsStudentsRequest',
    'ReportsVsStudentsResponse',
    'SatisfactionCorrelationRequest',
    'SatisfactionCorrelationResponse',
    'TrainRequest',
    'TrainResponse',
]
