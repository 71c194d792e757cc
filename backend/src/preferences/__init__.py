"""Blog preference storage and lookup."""

from .models import Preference
from .repository import (
    PreferenceRepository,
    InMemoryPreferenceRepository,
    DynamoDBPreferenceRepository,
    create_preference_repository,
)
from .service import PreferenceQueryService

__all__ = [
    "Preference",
    "PreferenceRepository",
    "InMemoryPreferenceRepository",
    "DynamoDBPreferenceRepository",
    "create_preference_repository",
    "PreferenceQueryService",
]
