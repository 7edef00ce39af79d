"""Configuration constants, schemas and config models."""
