"""
Test suite for dataset preparation from incident records.

The tests verify:
1. Labeled rows carry each student's previous category and prior count
2. Labels follow the target category; education levels map to 1..5
3. Monthly satisfaction aggregates skip unrated incidents in the average
4. Reports are left-joined to active-student months with zero fill
"""

from datetime import datetime, timezone

import math
import pandas as pd
import pytest

from sgiu_analytics.models import (
    ActiveStudentsMonth,
    EducationLevel,
    IncidentCategory,
    IncidentRecord,
    PreviousCategory,
)
from sgiu_analytics.services.datasets import (
    build_labeled_rows,
    education_level_to_ordinal,
    label_rows,
    month_key,
    monthly_satisfaction,
    reports_rows,
    reports_vs_active_students,
    satisfaction_correlation_inputs,
    satisfaction_rows,
)


class TestHelpers:
    """Tests for month keys and education level mapping."""

    def test_month_key(self) -> None:
        assert month_key(datetime(2025, 3, 9, 23, 59)) == '2025-03'
        assert month_key(pd.Timestamp('2024-12-31T08:00:00Z')) == '2024-12'

    @pytest.mark.parametrize("level,expected", [
        (EducationLevel.YEAR1, 1),
        ('year3', 3),
        ('year5', 5),
        (None, 1),
        ('postgrad', 1),
    ])
    def test_education_level_to_ordinal(self, level, expected: int) -> None:
        assert education_level_to_ordinal(level) == expected


class TestLabeledRows:
    """Tests for build_labeled_rows() and label_rows()."""

    def test_history_derivation(self, incident_history) -> None:
        rows = build_labeled_rows(incident_history, 'equipment')

        assert [
            (r.category.value, r.previous_category.value, r.prior_count, r.ordinal_level, r.label)
            for r in rows
        ] == [
            ('equipment', 'none', 0, 2, 1),
            ('equipment', 'none', 0, 5, 1),
            ('services', 'equipment', 1, 2, 0),
            ('other', 'none', 0, 1, 0),
            ('equipment', 'services', 2, 2, 1),
            ('infrastructure', 'equipment', 1, 5, 0),
        ]

    def test_target_changes_labels_only(self, incident_history) -> None:
        equipment = build_labeled_rows(incident_history, IncidentCategory.EQUIPMENT)
        services = build_labeled_rows(incident_history, IncidentCategory.SERVICES)

        assert [r.label for r in services] == [0, 0, 1, 0, 0, 0]
        assert [r.previous_category for r in services] == [r.previous_category for r in equipment]

    def test_first_incident_of_each_student_is_none(self, incident_history) -> None:
        rows = build_labeled_rows(incident_history, 'other')
        first_reports = [r for r in rows if r.prior_count == 0]

        assert len(first_reports) == 3
        assert all(r.previous_category == PreviousCategory.NONE for r in first_reports)

    def test_empty_history(self) -> None:
        assert build_labeled_rows([], 'equipment') == []

    def test_invalid_target_raises(self, incident_history) -> None:
        with pytest.raises(ValueError):
            build_labeled_rows(incident_history, 'none')

    def test_label_rows(self, make_row) -> None:
        rows = [make_row(category=c, label=0) for c in ('services', 'equipment', 'services')]

        relabeled = label_rows(rows, 'services')

        assert [r.label for r in relabeled] == [1, 0, 1]
        assert [r.label for r in rows] == [0, 0, 0]


class TestMonthlySatisfaction:
    """Tests for monthly_satisfaction() and its correlation inputs."""

    def test_aggregates_per_month(self, incident_history) -> None:
        monthly = monthly_satisfaction(incident_history)

        assert monthly['month'].tolist() == ['2025-01', '2025-02', '2025-03']
        assert monthly['total'].tolist() == [3, 1, 2]
        assert monthly['rated'].tolist() == [2, 0, 2]
        assert monthly['avg_satisfaction'].iloc[0] == pytest.approx(3.0)
        assert math.isnan(monthly['avg_satisfaction'].iloc[1])
        assert monthly['avg_satisfaction'].iloc[2] == pytest.approx(5.0)

    def test_correlation_inputs_skip_unrated_months(self, incident_history) -> None:
        xs, ys = satisfaction_correlation_inputs(monthly_satisfaction(incident_history))

        assert xs == [3.0, 2.0]
        assert ys == [3.0, 5.0]

    def test_category_filter(self, incident_history) -> None:
        monthly = monthly_satisfaction(incident_history, category='equipment')

        assert monthly['month'].tolist() == ['2025-01', '2025-03']
        assert monthly['total'].tolist() == [2, 1]
        assert monthly['avg_satisfaction'].tolist() == [4.0, 5.0]

    def test_empty_selection(self, incident_history) -> None:
        monthly = monthly_satisfaction(incident_history, category=IncidentCategory.OTHER)
        assert satisfaction_correlation_inputs(monthly) == ([], [])

        empty = monthly_satisfaction([])
        assert empty.empty
        assert list(empty.columns) == ['month', 'total', 'rated', 'avg_satisfaction']

    def test_rows_convert_nan_to_none(self, incident_history) -> None:
        rows = satisfaction_rows(monthly_satisfaction(incident_history))

        assert rows[1].month == '2025-02'
        assert rows[1].avg_satisfaction is None
        assert rows[0].avg_satisfaction == pytest.approx(3.0)


class TestReportsVsActiveStudents:
    """Tests for reports_vs_active_students()."""

    def test_left_join_with_zero_fill(self, active_students, incident_history) -> None:
        monthly = reports_vs_active_students(active_students, incident_history)

        assert monthly['month'].tolist() == ['2025-01', '2025-02', '2025-03', '2025-04']
        assert monthly['active_students'].tolist() == [1000, 1200, 1500, 900]
        assert monthly['reports'].tolist() == [3, 1, 2, 0]

    def test_months_without_active_count_are_dropped(self, incident_history) -> None:
        active = [ActiveStudentsMonth(month='2025-03', active_students=10)]
        extra = incident_history + [
            IncidentRecord(user_id=9, category='other',
                           created_at=datetime(2025, 6, 1, tzinfo=timezone.utc)),
        ]

        rows = reports_rows(reports_vs_active_students(active, extra))

        assert [(r.month, r.active_students, r.reports) for r in rows] == [('2025-03', 10, 2)]

    def test_last_duplicate_month_wins(self) -> None:
        active = [
            ActiveStudentsMonth(month='2025-01', active_students=100),
            ActiveStudentsMonth(month='2025-01', active_students=250),
        ]

        monthly = reports_vs_active_students(active, [])

        assert monthly['active_students'].tolist() == [250]
        assert monthly['reports'].tolist() == [0]

    def test_no_active_months(self, incident_history) -> None:
        assert reports_vs_active_students([], incident_history).empty
