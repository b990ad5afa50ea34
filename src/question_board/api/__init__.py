"""HTTP API for the Question Board service."""
