"""Scenario file loading and validation."""
