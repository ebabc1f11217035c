"""Plurality-at-large vote tallying."""
