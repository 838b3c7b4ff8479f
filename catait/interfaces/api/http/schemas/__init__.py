"""HTTP DTOs (pydantic), camelCase on the wire."""
