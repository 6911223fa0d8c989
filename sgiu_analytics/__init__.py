"""
SGIU Analytics Package.

Statistical modeling service for the SGIU university incident-reporting system.
Computes correlation, simple linear regression and logistic regression over
small in-memory datasets handed over by the admin dashboard.

Subpackages:
    - api: FastAPI route handlers
    - core: Configuration and dependencies
    - models: Pydantic schemas and enums
    - services: Statistics, feature encoding, training and prediction
"""

__version__ = "1.0.0"
