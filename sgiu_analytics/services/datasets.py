"""
Dataset Preparation Service.

Builds the plain numeric inputs of the modeling core from in-memory incident
records. The dashboard pages used to do this in SQL or in the browser:

- Monthly satisfaction: per calendar month, the number of reports and the
  average satisfaction of the reports that carry a rating
- Reports vs active students: monthly active student counts left-joined to
  monthly report counts (months without reports count 0)
- Labeled rows: for every incident, the same student's previous category and
  number of earlier incidents, labeled against a target category

Month Keys:
    Months are "YYYY-MM" strings taken from created_at as given. Timestamps
    are normalized to UTC first so aware and naive inputs can be mixed.

Dependencies:
    - pandas: Grouping, window (per-student lag) and join operations
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence, Tuple, Union

import pandas as pd

from sgiu_analytics.models.enums import (
    EducationLevel,
    IncidentCategory,
    PreviousCategory,
)
from sgiu_analytics.models.schemas import (
    ActiveStudentsMonth,
    IncidentRecord,
    LabeledRow,
    MonthlyReportsRow,
    MonthlySatisfactionRow,
)


logger = logging.getLogger(__name__)


# Level used when a student's education level is missing or unrecognized
DEFAULT_ORDINAL_LEVEL: int = 1

EDUCATION_LEVEL_ORDINALS = {
    EducationLevel.YEAR1: 1,
    EducationLevel.YEAR2: 2,
    EducationLevel.YEAR3: 3,
    EducationLevel.YEAR4: 4,
    EducationLevel.YEAR5: 5,
}

SATISFACTION_COLUMNS: List[str] = ['month', 'total', 'rated', 'avg_satisfaction']
REPORTS_COLUMNS: List[str] = ['month', 'active_students', 'reports']


# =============================================================================
# Helpers
# =============================================================================


def month_key(ts: Union[datetime, pd.Timestamp]) -> str:
    """Format a timestamp as its 'YYYY-MM' month key."""
    return ts.strftime('%Y-%m')


def education_level_to_ordinal(level: Optional[Union[EducationLevel, str]]) -> int:
    """
    Map an education level (year1..year5) to its 1..5 ordinal.

    Missing or unknown levels map to 1.
    """
    if level is None:
        return DEFAULT_ORDINAL_LEVEL
    try:
        return EDUCATION_LEVEL_ORDINALS[EducationLevel(level)]
    except ValueError:
        return DEFAULT_ORDINAL_LEVEL


def _incidents_frame(incidents: Sequence[IncidentRecord]) -> pd.DataFrame:
    """Incidents as a DataFrame sorted by created_at, ties in input order."""
    if not incidents:
        return pd.DataFrame(
            columns=['user_id', 'category', 'created_at', 'satisfaction', 'education_level', 'month']
        )

    df = pd.DataFrame(
        [
            {
                'user_id': incident.user_id,
                'category': incident.category.value,
                'created_at': incident.created_at,
                'satisfaction': incident.satisfaction,
                'education_level': incident.education_level,
            }
            for incident in incidents
        ],
        columns=['user_id', 'category', 'created_at', 'satisfaction', 'education_level'],
    )
    df['created_at'] = pd.to_datetime(df['created_at'], utc=True)
    df['month'] = df['created_at'].dt.strftime('%Y-%m')
    df['satisfaction'] = pd.to_numeric(df['satisfaction'], errors='coerce')
    return df.sort_values('created_at', kind='mergesort').reset_index(drop=True)


# =============================================================================
# Logistic Model Dataset
# =============================================================================


def label_rows(
    rows: Sequence[LabeledRow],
    target: Union[IncidentCategory, str]
) -> List[LabeledRow]:
    """
    Relabel rows against a target category: label = 1 iff category == target.

    Raises:
        ValueError: If target is not a valid incident category.
    """
    target = IncidentCategory(target)
    return [
        row.model_copy(update={'label': int(row.category == target)})
        for row in rows
    ]


def build_labeled_rows(
    incidents: Sequence[IncidentRecord],
    target: Union[IncidentCategory, str],
) -> List[LabeledRow]:
    """
    Derive labeled training rows from an incident history.

    For each incident, ordered by created_at:
    - previous_category: category of the same student's previous incident,
      'none' for their first one
    - prior_count: number of incidents the student filed before this one
    - ordinal_level: the student's education level as 1..5
    - label: 1 iff the incident's category equals target

    Args:
        incidents: Incident records of any number of students, any order
        target: Category whose membership the model will predict

    Returns:
        LabeledRow list ordered by created_at ascending.
    """
    target = IncidentCategory(target)
    if not incidents:
        return []

    df = _incidents_frame(incidents)
    by_user = df.groupby('user_id', sort=False)
    df['previous_category'] = by_user['category'].shift(1).fillna(PreviousCategory.NONE.value)
    df['prior_count'] = by_user.cumcount()

    rows = [
        LabeledRow(
            category=record['category'],
            previous_category=record['previous_category'],
            prior_count=int(record['prior_count']),
            ordinal_level=education_level_to_ordinal(record['education_level']),
            label=int(record['category'] == target.value),
        )
        for record in df.to_dict('records')
    ]

    positives = sum(row.label for row in rows)
    logger.info(
        f"Built {len(rows)} labeled rows for target={target.value} "
        f"({positives} positive, {len(rows) - positives} negative)"
    )
    return rows


# =============================================================================
# Monthly Satisfaction (correlation page)
# =============================================================================


def monthly_satisfaction(
    incidents: Sequence[IncidentRecord],
    category: Optional[Union[IncidentCategory, str]] = None,
) -> pd.DataFrame:
    """
    Aggregate incidents per month into report volume and average satisfaction.

    Args:
        incidents: Incident records
        category: Only count incidents of this category when given

    Returns:
        DataFrame with columns month, total, rated, avg_satisfaction, one row
        per month with at least one incident, sorted by month.
        avg_satisfaction is NaN for months without any rating.
    """
    df = _incidents_frame(incidents)
    if category is not None:
        df = df[df['category'] == IncidentCategory(category).value]

    if df.empty:
        return pd.DataFrame(columns=SATISFACTION_COLUMNS)

    grouped = df.groupby('month', sort=True).agg(
        total=('category', 'size'),
        rated=('satisfaction', 'count'),
        sum_satisfaction=('satisfaction', 'sum'),
    ).reset_index()

    grouped['avg_satisfaction'] = (
        grouped['sum_satisfaction'] / grouped['rated']
    ).where(grouped['rated'] > 0)

    return grouped[SATISFACTION_COLUMNS]


def satisfaction_correlation_inputs(monthly: pd.DataFrame) -> Tuple[List[float], List[float]]:
    """
    Paired (reports, average satisfaction) sequences from monthly aggregates.

    Months without any satisfaction rating are skipped.
    """
    rated = monthly[monthly['rated'] > 0]
    return (
        rated['total'].astype(float).tolist(),
        rated['avg_satisfaction'].astype(float).tolist(),
    )


def satisfaction_rows(monthly: pd.DataFrame) -> List[MonthlySatisfactionRow]:
    """Convert monthly aggregates to response rows (NaN averages become None)."""
    return [
        MonthlySatisfactionRow(
            month=record['month'],
            total=int(record['total']),
            rated=int(record['rated']),
            avg_satisfaction=None if pd.isna(record['avg_satisfaction']) else float(record['avg_satisfaction']),
        )
        for record in monthly.to_dict('records')
    ]


# =============================================================================
# Reports vs Active Students (simple regression page)
# =============================================================================


def reports_vs_active_students(
    active_students: Sequence[ActiveStudentsMonth],
    incidents: Sequence[IncidentRecord],
) -> pd.DataFrame:
    """
    Left-join monthly active students to monthly incident counts.

    Only months with a recorded active student count appear. If a month is
    recorded more than once the last value wins.

    Returns:
        DataFrame with columns month, active_students, reports, sorted by month.
    """
    active = pd.DataFrame(
        [entry.model_dump() for entry in active_students],
        columns=['month', 'active_students'],
    ).drop_duplicates(subset='month', keep='last')

    if active.empty:
        return pd.DataFrame(columns=REPORTS_COLUMNS)

    counts = (
        _incidents_frame(incidents)
        .groupby('month')
        .size()
        .rename('reports')
        .reset_index()
    )

    merged = active.merge(counts, on='month', how='left')
    merged['reports'] = merged['reports'].fillna(0).astype(int)
    merged['active_students'] = merged['active_students'].astype(int)

    logger.debug(f"Joined {len(merged)} months of active students to report counts")
    return merged.sort_values('month').reset_index(drop=True)[REPORTS_COLUMNS]


def reports_rows(monthly: pd.DataFrame) -> List[MonthlyReportsRow]:
    """Convert the joined monthly frame to response rows."""
    return [
        MonthlyReportsRow(
            month=record['month'],
            active_students=int(record['active_students']),
            reports=int(record['reports']),
        )
        for record in monthly.to_dict('records')
    ]
