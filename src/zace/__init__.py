"""Zace: planner output protocol for an autonomous coding agent."""

__all__ = ["__version__"]

__version__ = "0.1.0"
