"""
Centralized mock objects and test entities.

This package provides reusable entity types and session mock factories,
reducing code duplication across test files.
"""
