"""Smithy JSON models as a source of operation tables."""
