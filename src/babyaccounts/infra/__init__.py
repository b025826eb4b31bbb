"""Infrastructure adapters (backend HTTP client and repositories)."""
