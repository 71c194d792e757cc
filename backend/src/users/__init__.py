"""Blog user accounts: models, storage and services."""
