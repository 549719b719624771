"""Outline serialization."""
