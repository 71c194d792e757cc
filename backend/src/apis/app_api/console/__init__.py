"""Blog admin console APIs."""
