"""
FastAPI router module for the analytics endpoints.

This module implements the computation endpoints used by the admin dashboard:
- Paired-series statistics: Pearson correlation and OLS regression
- Monthly satisfaction correlation (reports vs average satisfaction)
- Reports vs active students regression with point prediction
- Logistic model: labeled dataset preparation, training and prediction

Every endpoint is stateless. The dashboard sends the records it already
fetched and receives plain numeric results; trained models are returned to
the caller and sent back for prediction, never stored.

Error Semantics:
- Too little or degenerate data is NOT an error: 200 with r=None, an
  invalid fit, or model=None plus a reason code
- Malformed bodies are rejected with 422 by request validation
- Unexpected failures are logged and returned as 500
"""

import logging
from dataclasses import replace

from fastapi import APIRouter, HTTPException

from sgiu_analytics.core.dependencies import TrainingConfigDep
from sgiu_analytics.models import (
    CorrelationResult,
    DatasetRequest,
    DatasetResponse,
    FitReason,
    LinearRegressionRequest,
    LinearRegressionResponse,
    PairedSeriesRequest,
    PredictRequest,
    PredictResponse,
    ReportsVsStudentsRequest,
    ReportsVsStudentsResponse,
    SatisfactionCorrelationRequest,
    SatisfactionCorrelationResponse,
    TrainRequest,
    TrainResponse,
)
from sgiu_analytics.services.datasets import (
    build_labeled_rows,
    monthly_satisfaction,
    reports_rows,
    reports_vs_active_students,
    satisfaction_correlation_inputs,
    satisfaction_rows,
)
from sgiu_analytics.services.feature_encoding import FEATURE_NAMES
from sgiu_analytics.services.logistic_trainer import train
from sgiu_analytics.services.predictor import predict, training_accuracy
from sgiu_analytics.services.statistics import (
    correlation_summary,
    fit_line_endpoints,
    linear_regression,
    predict_linear,
)

# Configure logging
logger = logging.getLogger(__name__)

# Create router with prefix and tags for OpenAPI documentation
router = APIRouter(prefix="/analytics", tags=["analytics"])


# =============================================================================
# Paired-Series Statistics
# =============================================================================


@router.post("/correlation", response_model=CorrelationResult)
async def correlation_endpoint(request: PairedSeriesRequest) -> CorrelationResult:
    """
    Pearson correlation between two numeric sequences.

    Only the common prefix of x and y is used. r is null when fewer than two
    observations are available or either sequence is constant.
    """
    return correlation_summary(request.x, request.y)


@router.post("/linear-regression", response_model=LinearRegressionResponse)
async def linear_regression_endpoint(
    request: LinearRegressionRequest,
) -> LinearRegressionResponse:
    """
    OLS fit of y on x, with correlation, chart line and optional prediction.

    Returns:
        LinearRegressionResponse. When fit.valid is false the line is empty
        and prediction is null.
    """
    fit = linear_regression(request.x, request.y)
    prediction = None
    if request.predict_x is not None:
        prediction = predict_linear(fit, request.predict_x)

    return LinearRegressionResponse(
        fit=fit,
        correlation=correlation_summary(request.x, request.y),
        line=fit_line_endpoints(fit, request.x[:fit.n]),
        prediction=prediction,
    )


# =============================================================================
# Monthly Analyses
# =============================================================================


@router.post("/satisfaction-correlation", response_model=SatisfactionCorrelationResponse)
async def satisfaction_correlation_endpoint(
    request: SatisfactionCorrelationRequest,
) -> SatisfactionCorrelationResponse:
    """
    Correlate monthly report volume with monthly average satisfaction.

    All months with incidents are listed; only months with at least one
    satisfaction rating enter the correlation and regression.

    Raises:
        HTTPException 500: If aggregation fails unexpectedly
    """
    try:
        monthly = monthly_satisfaction(request.incidents, request.category)
        xs, ys = satisfaction_correlation_inputs(monthly)
    except Exception as e:
        logger.error(f"Error aggregating monthly satisfaction: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error aggregating monthly satisfaction: {str(e)}",
        )

    fit = linear_regression(xs, ys)
    return SatisfactionCorrelationResponse(
        months=satisfaction_rows(monthly),
        months_analyzed=len(xs),
        correlation=correlation_summary(xs, ys),
        fit=fit,
        line=fit_line_endpoints(fit, xs),
    )


@router.post("/reports-vs-students", response_model=ReportsVsStudentsResponse)
async def reports_vs_students_endpoint(
    request: ReportsVsStudentsRequest,
) -> ReportsVsStudentsResponse:
    """
    Regress monthly reports on monthly active students.

    predict_x, when given, is an active student count; the prediction is the
    expected number of monthly reports, floored at zero.

    Raises:
        HTTPException 500: If the monthly join fails unexpectedly
    """
    try:
        monthly = reports_vs_active_students(request.active_students, request.incidents)
    except Exception as e:
        logger.error(f"Error joining active students to reports: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error joining active students to reports: {str(e)}",
        )

    xs = monthly['active_students'].astype(float).tolist()
    ys = monthly['reports'].astype(float).tolist()
    fit = linear_regression(xs, ys)

    prediction = None
    if request.predict_x is not None:
        prediction = predict_linear(fit, request.predict_x)

    return ReportsVsStudentsResponse(
        months=reports_rows(monthly),
        correlation=correlation_summary(xs, ys),
        fit=fit,
        line=fit_line_endpoints(fit, xs),
        prediction=prediction,
    )


# =============================================================================
# Logistic Model
# =============================================================================


@router.post("/logistic/dataset", response_model=DatasetResponse)
async def logistic_dataset_endpoint(request: DatasetRequest) -> DatasetResponse:
    """
    Derive labeled rows (previous category, prior count, level) for a target.

    Raises:
        HTTPException 500: If the derivation fails unexpectedly
    """
    try:
        rows = build_labeled_rows(request.incidents, request.target)
    except Exception as e:
        logger.error(f"Error building labeled dataset: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error building labeled dataset: {str(e)}",
        )

    positives = sum(row.label for row in rows)
    return DatasetResponse(
        target=request.target,
        rows=rows,
        n=len(rows),
        positives=positives,
        negatives=len(rows) - positives,
    )


@router.post("/logistic/train", response_model=TrainResponse)
async def logistic_train_endpoint(
    request: TrainRequest,
    defaults: TrainingConfigDep,
) -> TrainResponse:
    """
    Train a logistic model on the given labeled rows.

    Hyperparameters omitted from the request use the deployment defaults.
    With fewer rows than min_rows the response carries model=null and
    reason=insufficient_data.

    Raises:
        HTTPException 500: If training fails (e.g. diverging learning rate)
    """
    overrides = {
        'iterations': request.iterations,
        'learning_rate': request.learning_rate,
        'l2_penalty': request.l2_penalty,
        'min_rows': request.min_rows,
    }
    config = replace(defaults, **{k: v for k, v in overrides.items() if v is not None})

    positives = sum(row.label for row in request.rows)

    try:
        model = train(request.rows, config=config)
    except ArithmeticError as e:
        logger.error(f"Logistic training failed: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Logistic training failed: {str(e)}",
        )

    if model is None:
        return TrainResponse(
            model=None,
            reason=FitReason.INSUFFICIENT_DATA,
            feature_names=FEATURE_NAMES,
            n=len(request.rows),
            positives=positives,
        )

    return TrainResponse(
        model=model,
        feature_names=FEATURE_NAMES,
        training_accuracy=training_accuracy(model, request.rows),
        n=len(request.rows),
        positives=positives,
    )


@router.post("/logistic/predict", response_model=PredictResponse)
async def logistic_predict_endpoint(request: PredictRequest) -> PredictResponse:
    """
    Probability that the next report with these attributes is the target.

    The model's own max_prior_count is used to normalize prior_count.
    """
    probability = predict(
        request.model,
        request.ordinal_level,
        request.prior_count,
        request.previous_category,
    )
    return PredictResponse(probability=probability)
