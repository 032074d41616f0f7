"""Typed response and variables models for GraphQL operations."""

__version__ = "0.1.0"
