"""Core data models for the pagination engine."""
