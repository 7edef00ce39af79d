"""Clients for the analytics service."""
