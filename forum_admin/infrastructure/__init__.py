"""Infrastructure adapters: database, ORM models and repositories."""
