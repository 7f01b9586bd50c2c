"""In-memory configuration sources."""
