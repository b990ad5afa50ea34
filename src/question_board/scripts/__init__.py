"""Operational scripts for the Question Board service."""
