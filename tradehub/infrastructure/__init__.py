"""Infrastructure Layer - adapters for the domain ports (SQLAlchemy, parsers)."""
