"""Comprehensive scoring feature evaluators, grouped by category."""
