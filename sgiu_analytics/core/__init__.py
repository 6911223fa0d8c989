"""
Core infrastructure package for the SGIU analytics backend.

Provides:
- Configuration management via pydantic-settings (config.py)
- FastAPI dependency injection utilities (dependencies.py)

Only the configuration is re-exported here; the services import it, and the
dependencies module in turn imports the services. Import dependencies from
sgiu_analytics.core.dependencies directly.

    from sgiu_analytics.core import get_settings
    from sgiu_analytics.core.dependencies import TrainingConfigDep
"""

from sgiu_analytics.core.config import Settings, get_settings

__all__ = [
    'Settings',
    'get_settings',
]
