"""Model storage for the calculator session."""

from bedrock_cost_calculator.store.model_store import (
    CUSTOM_MODELS_KEY,
    ModelNotFoundError,
    ModelStore,
    ModelValidationError,
)
from bedrock_cost_calculator.store.storage import JsonFileStorage, MemoryStorage

__all__ = [
    "CUSTOM_MODELS_KEY",
    "ModelNotFoundError",
    "ModelStore",
    "ModelValidationError",
    "JsonFileStorage",
    "MemoryStorage",
]
