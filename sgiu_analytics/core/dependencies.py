"""
FastAPI dependency injection module for the SGIU analytics backend.

Provides reusable dependencies for configuration access so endpoint handlers
stay decoupled from how settings are loaded, and tests can swap them out via
app.dependency_overrides.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_training_config: Returns the default TrainingConfig built from Settings
- SettingsDep: Type alias for injecting Settings into endpoints
- TrainingConfigDep: Type alias for injecting the default TrainingConfig

Usage Examples:
    @router.post("/logistic/train")
    async def train_endpoint(
        request: TrainRequest,
        defaults: TrainingConfigDep,
    ) -> TrainResponse:
        ...
"""

from typing import Annotated

from fastapi import Depends

from sgiu_analytics.core.config import Settings, get_settings
from sgiu_analytics.services.logistic_trainer import TrainingConfig


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() to enable FastAPI's
    dependency override mechanism for testing:

        app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    """
    return get_settings()


def get_training_config(
    settings: Annotated[Settings, Depends(get_settings_dependency)]
) -> TrainingConfig:
    """
    Default training hyperparameters for this deployment.

    Request-level overrides are applied on top of this by the endpoint.
    """
    return TrainingConfig.from_settings(settings)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(defaults: TrainingConfigDep)
TrainingConfigDep = Annotated[TrainingConfig, Depends(get_training_config)]
