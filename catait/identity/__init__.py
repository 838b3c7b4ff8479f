"""Identity: API key scopes and password hashing."""
