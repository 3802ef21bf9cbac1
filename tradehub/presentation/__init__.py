"""Presentation Layer - entry points that drive the application handlers."""
