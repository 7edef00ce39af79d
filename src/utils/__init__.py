"""Shared helpers: logging, YAML loading, paths and payload validation."""
