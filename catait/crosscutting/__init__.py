"""Cross-cutting concerns: config, logging, errors, metrics, middleware."""
