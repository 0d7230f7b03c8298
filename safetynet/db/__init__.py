"""In-memory record store."""
