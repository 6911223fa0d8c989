"""
Analytics Services Module

Stateless computation services behind the dashboard's analytics pages.
Every function takes its data as arguments and returns plain results;
nothing here holds module-level state.

Services:
- statistics: Pearson correlation and OLS simple regression
- feature_encoding: Incident attributes -> fixed-length feature vector
- logistic_trainer: Gradient descent logistic regression
- predictor: Probabilities from a trained model
- datasets: Monthly aggregates and labeled rows from incident records
"""

# =============================================================================
# Statistics Service Exports
# =============================================================================

from sgiu_analytics.services.statistics import (
    pearson,
    correlation_summary,
    linear_regression,
    predict_linear,
    fit_line_endpoints,
)

# =============================================================================
# Feature Encoding Exports
# =============================================================================

from sgiu_analytics.services.feature_encoding import (
    FEATURE_NAMES,
    compute_normalizer,
    encode,
    encode_attributes,
    encode_matrix,
)

# =============================================================================
# Logistic Trainer / Predictor Exports
# =============================================================================

from sgiu_analytics.services.logistic_trainer import (
    TrainingConfig,
    sigmoid,
    train,
)
from sgiu_analytics.services.predictor import (
    predict,
    predict_rows,
    training_accuracy,
)

# =============================================================================
# Dataset Preparation Exports
# =============================================================================

from sgiu_analytics.services.datasets import (
    build_labeled_rows,
    education_level_to_ordinal,
    label_rows,
    month_key,
    monthly_satisfaction,
    reports_vs_active_students,
    satisfaction_correlation_inputs,
)

__all__ = [
    # ----- Statistics -----
    'pearson',
    'correlation_summary',
    'linear_regression',
    'predict_linear',
    'fit_line_endpoints',
    # ----- Feature Encoding -----
    'FEATURE_NAMES',
    'compute_normalizer',
    'encode',
    'encode_attributes',
    'encode_matrix',
    # ----- Logistic Trainer / Predictor -----
    'TrainingConfig',
    'sigmoid',
    'train',
    'predict',
    'predict_rows',
    'training_accuracy',
    # ----- Dataset Preparation -----
    'build_labeled_rows',
    'education_level_to_ordinal',
    'label_rows',
    'month_key',
    'monthly_satisfaction',
    'reports_vs_active_students',
    'satisfaction_correlation_inputs',
]
