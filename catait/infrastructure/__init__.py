"""Infrastructure layer: DB pool and repository implementations."""
