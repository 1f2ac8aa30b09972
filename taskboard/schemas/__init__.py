"""Schemas package for the task board."""
