"""Database infrastructure - shared engine, session and model primitives."""
