"""
Feature Encoding for the Incident Category Model.

Turns a LabeledRow (or the raw attributes of a hypothetical next incident)
into the fixed-length numeric vector consumed by the logistic trainer and
predictor.

Feature Layout (length 8, fixed order):
    [0] bias                 always 1.0
    [1] level                ordinal_level / 5
    [2] prior_count (norm)   prior_count / max_prior_count
    [3..7] previous category one-hot over
           equipment, infrastructure, services, other, none

The normalizer max_prior_count is computed once from the training set and
stored on the model; prediction must reuse it instead of recomputing it from
the single row being scored.
"""

from typing import List, Sequence, Union

import numpy as np

from sgiu_analytics.models.enums import PreviousCategory
from sgiu_analytics.models.schemas import FEATURE_COUNT, LabeledRow


# Upper bound of the ordinal level scale (education year 1..5)
ORDINAL_SCALE: float = 5.0

# One-hot order, taken from the enum declaration order
CATEGORY_ORDER: List[PreviousCategory] = list(PreviousCategory)

FEATURE_NAMES: List[str] = [
    'bias',
    'level(1..5)',
    'prior_count(norm)',
    *[f'prev_{category.value}' for category in CATEGORY_ORDER],
]


def compute_normalizer(rows: Sequence[LabeledRow]) -> int:
    """
    Largest prior_count in the training set, floored at 1.

    Args:
        rows: Training rows (may be empty)

    Returns:
        max(1, max(row.prior_count)); 1 for an empty set.
    """
    return max([1, *(row.prior_count for row in rows)])


def one_hot_previous(previous_category: Union[PreviousCategory, str]) -> np.ndarray:
    """
    One-hot vector for a previous category.

    Raises:
        ValueError: If previous_category is not a known category or 'none'.
    """
    category = PreviousCategory(previous_category)
    vector = np.zeros(len(CATEGORY_ORDER), dtype=np.float64)
    vector[CATEGORY_ORDER.index(category)] = 1.0
    return vector


def encode_attributes(
    ordinal_level: float,
    prior_count: float,
    previous_category: Union[PreviousCategory, str],
    max_prior_count: int,
) -> np.ndarray:
    """
    Encode raw incident attributes into a feature vector.

    ordinal_level is not range-checked; callers supply levels in 1..5.

    Args:
        ordinal_level: Education level in 1..5
        prior_count: Incidents the student filed before this one
        previous_category: Category of the student's previous incident
        max_prior_count: Training-set normalizer

    Returns:
        float64 array of length 8.
    """
    normalizer = max(1, max_prior_count)
    head = np.array(
        [1.0, ordinal_level / ORDINAL_SCALE, prior_count / normalizer],
        dtype=np.float64,
    )
    return np.concatenate([head, one_hot_previous(previous_category)])


def encode(row: LabeledRow, max_prior_count: int) -> np.ndarray:
    """Encode a LabeledRow into its length-8 feature vector."""
    return encode_attributes(
        row.ordinal_level,
        row.prior_count,
        row.previous_category,
        max_prior_count,
    )


def encode_matrix(rows: Sequence[LabeledRow], max_prior_count: int) -> np.ndarray:
    """
    Build the (n, 8) design matrix for a list of rows.

    An empty input yields a (0, 8) matrix.
    """
    if not rows:
        return np.zeros((0, FEATURE_COUNT), dtype=np.float64)
    return np.vstack([encode(row, max_prior_count) for row in rows])
