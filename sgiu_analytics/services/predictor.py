"""
Probability prediction from a trained logistic model.

Scores a hypothetical next incident (education level, prior report count,
previous category) against a TrainedModel. The row is encoded with the
model's stored max_prior_count, never one recomputed from the scored row.
"""

import logging
from typing import Optional, Sequence, Union

import numpy as np

from sgiu_analytics.models.enums import PreviousCategory
from sgiu_analytics.models.schemas import LabeledRow, TrainedModel
from sgiu_analytics.services.feature_encoding import encode_attributes, encode_matrix
from sgiu_analytics.services.logistic_trainer import sigmoid


logger = logging.getLogger(__name__)

# Probability at or above which a row is classified as the target category
DECISION_THRESHOLD: float = 0.5


def predict(
    model: TrainedModel,
    ordinal_level: int,
    prior_count: int,
    previous_category: Union[PreviousCategory, str],
) -> float:
    """
    Probability that an incident with these attributes is the target category.

    Args:
        model: Trained model (not modified)
        ordinal_level: Education level in 1..5
        prior_count: Incidents the student filed before this one
        previous_category: Category of the student's previous incident

    Returns:
        Probability in [0, 1].
    """
    x = encode_attributes(ordinal_level, prior_count, previous_category, model.max_prior_count)
    z = float(np.dot(np.asarray(model.weights, dtype=np.float64), x))
    return sigmoid(z, clip=model.logit_clip)


def predict_rows(model: TrainedModel, rows: Sequence[LabeledRow]) -> np.ndarray:
    """Probabilities for a batch of rows, in input order."""
    X = encode_matrix(rows, model.max_prior_count)
    return sigmoid(X @ np.asarray(model.weights, dtype=np.float64), clip=model.logit_clip)


def training_accuracy(
    model: TrainedModel,
    rows: Sequence[LabeledRow],
    labels: Optional[Sequence[int]] = None,
) -> Optional[float]:
    """
    Share of rows whose thresholded prediction matches the label.

    Returns:
        Accuracy in [0, 1], or None for an empty row set.
    """
    if not rows:
        return None
    if labels is None:
        labels = [row.label for row in rows]

    predicted = (predict_rows(model, rows) >= DECISION_THRESHOLD).astype(int)
    accuracy = float(np.mean(predicted == np.asarray(labels, dtype=int)))
    logger.debug(f"Training accuracy over {len(rows)} rows: {accuracy:.3f}")
    return accuracy
