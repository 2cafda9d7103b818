"""Scoring core: formulae, catalog, evaluators and the scoring engine."""
