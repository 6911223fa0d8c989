"""
Enumeration definitions for the SGIU analytics backend.

All enums inherit from both `str` and `Enum` to ensure JSON serialization
compatibility with Pydantic models, enabling automatic serialization and
deserialization in API responses.

The values match the database enums of the incident-reporting system
(incident_category, education_level) so rows exported from it validate as-is.
"""

from enum import Enum


class IncidentCategory(str, Enum):
    """
    Facility incident category chosen by the student when filing a report.

    Values: ['equipment', 'infrastructure', 'services', 'other']
    """
    EQUIPMENT = "equipment"
    INFRASTRUCTURE = "infrastructure"
    SERVICES = "services"
    OTHER = "other"


class PreviousCategory(str, Enum):
    """
    Category of the same student's previous incident.

    NONE marks a student's first incident. Declaration order is the fixed
    one-hot order of the feature vector and must not change.
    """
    EQUIPMENT = "equipment"
    INFRASTRUCTURE = "infrastructure"
    SERVICES = "services"
    OTHER = "other"
    NONE = "none"


class EducationLevel(str, Enum):
    """
    Student year of study from the user profile.

    Mapped to the 1..5 ordinal level used as a model feature.
    """
    YEAR1 = "year1"
    YEAR2 = "year2"
    YEAR3 = "year3"
    YEAR4 = "year4"
    YEAR5 = "year5"


class FitReason(str, Enum):
    """
    Why a correlation or regression result is not usable.

    - insufficient_data: fewer than 2 paired observations, or fewer rows
      than the training minimum
    - zero_variance: one of the compared sequences is constant
    """
    INSUFFICIENT_DATA = "insufficient_data"
    ZERO_VARIANCE = "zero_variance"
