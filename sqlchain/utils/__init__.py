"""Utility functions and classes for sqlchain."""
