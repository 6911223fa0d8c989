"""
Logistic Regression Trainer (full-batch gradient descent).

This module trains the "will the student's next report be category X" model
shown on the dashboard's multiple regression page.

Algorithm Overview:
    Starting from all-zero weights, each iteration computes for every row

        z   = w . x
        p   = sigmoid(z)
        err = p - label

    and then updates every weight with

        grad_j = mean(err * x_j)
        w_j    = w_j - learning_rate * (grad_j + l2_penalty * w_j)

    The L2 term is added after averaging the data gradient and is not divided
    by n. Changing that order changes the reference outputs.

Determinism:
    Fixed iteration count, no shuffling, no early stopping and no randomness.
    The same rows in the same order always give the same weights.

Failure Semantics:
    - Fewer rows than the configured minimum returns None instead of a model
    - Logits are clamped to +/- LOGIT_CLIP before exponentiation so extreme
      inputs saturate instead of overflowing

Algorithm Parameters (defaults, overridable via TrainingConfig):
    - DEFAULT_ITERATIONS = 2000
    - DEFAULT_LEARNING_RATE = 0.1
    - DEFAULT_L2_PENALTY = 0.001
    - DEFAULT_MIN_ROWS = 8

Usage:
    from sgiu_analytics.services.logistic_trainer import TrainingConfig, train

    model = train(rows)
    if model is None:
        ...  # render "need more data"

    quick = train(rows, config=TrainingConfig(iterations=500))
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

import numpy as np

from sgiu_analytics.core.config import Settings
from sgiu_analytics.models.schemas import (
    FEATURE_COUNT,
    LOGIT_CLIP,
    LabeledRow,
    TrainedModel,
)
from sgiu_analytics.services.feature_encoding import compute_normalizer, encode_matrix


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_ITERATIONS: int = 2000

DEFAULT_LEARNING_RATE: float = 0.1

DEFAULT_L2_PENALTY: float = 0.001

# Dashboard usability guard: below this the page asks for more incidents.
DEFAULT_MIN_ROWS: int = 8


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class TrainingConfig:
    """
    Hyperparameters for a single training call.

    Every field has the historical default; override only what you need.
    """
    iterations: int = DEFAULT_ITERATIONS
    learning_rate: float = DEFAULT_LEARNING_RATE
    l2_penalty: float = DEFAULT_L2_PENALTY
    min_rows: int = DEFAULT_MIN_ROWS
    logit_clip: float = LOGIT_CLIP

    @classmethod
    def from_settings(cls, settings: Settings) -> "TrainingConfig":
        """Build the default config from environment-backed settings."""
        return cls(
            iterations=settings.training_iterations,
            learning_rate=settings.learning_rate,
            l2_penalty=settings.l2_penalty,
            min_rows=settings.min_training_rows,
            logit_clip=settings.logit_clip,
        )


# =============================================================================
# Sigmoid
# =============================================================================


def sigmoid(
    z: Union[float, np.ndarray],
    clip: float = LOGIT_CLIP
) -> Union[float, np.ndarray]:
    """
    Logistic function 1 / (1 + e^-z) with the logit clamped to [-clip, clip].

    Accepts a scalar or an array; returns the same kind.
    """
    clipped = np.clip(z, -clip, clip)
    result = 1.0 / (1.0 + np.exp(-clipped))
    if np.ndim(result) == 0:
        return float(result)
    return result


# =============================================================================
# Training
# =============================================================================


def train(
    rows: Sequence[LabeledRow],
    labels: Optional[Sequence[int]] = None,
    config: Optional[TrainingConfig] = None,
) -> Optional[TrainedModel]:
    """
    Train a linear-logistic model by full-batch gradient descent.

    Args:
        rows: Labeled rows in a fixed order
        labels: Optional 0/1 labels, one per row. Defaults to each row's label.
        config: Hyperparameters; defaults to TrainingConfig()

    Returns:
        TrainedModel with 8 weights and the training normalizer, or None when
        there are fewer than config.min_rows rows.

    Raises:
        ValueError: If labels is given with a different length than rows
        ArithmeticError: If the weights stop being finite (only possible
            with a pathological learning rate)

    Example:
        >>> model = train(rows)
        >>> len(model.weights)
        8
    """
    config = config or TrainingConfig()

    if labels is None:
        labels = [row.label for row in rows]
    elif len(labels) != len(rows):
        raise ValueError(
            f"labels has {len(labels)} entries but rows has {len(rows)}"
        )

    n = len(rows)
    if n == 0 or n < config.min_rows:
        logger.info(
            f"Not training: {n} rows available, {config.min_rows} required"
        )
        return None

    max_prior_count = compute_normalizer(rows)
    X = encode_matrix(rows, max_prior_count)
    y = np.asarray(labels, dtype=np.float64)
    w = np.zeros(FEATURE_COUNT, dtype=np.float64)

    logger.info(
        f"Training logistic model on {n} rows "
        f"({int(y.sum())} positive), {config.iterations} iterations"
    )

    for _ in range(config.iterations):
        p = sigmoid(X @ w, clip=config.logit_clip)
        gradient = X.T @ (p - y) / n
        w = w - config.learning_rate * (gradient + config.l2_penalty * w)

    if not np.all(np.isfinite(w)):
        raise ArithmeticError(
            f"Training diverged (learning_rate={config.learning_rate})"
        )

    logger.debug(f"Trained weights: {np.round(w, 4).tolist()}")

    return TrainedModel(
        weights=w.tolist(),
        max_prior_count=max_prior_count,
        n_rows=n,
        n_positive=int(y.sum()),
        iterations=config.iterations,
        learning_rate=config.learning_rate,
        l2_penalty=config.l2_penalty,
        logit_clip=config.logit_clip,
    )
