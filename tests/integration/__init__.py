"""
Integration Tests - Composed Pipelines.

Tests that stack producers and decorators the way callers do.
"""
