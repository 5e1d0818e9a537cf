"""Planogram designer: fixture hierarchy, placement constraints and shelf analytics"""

__version__ = "0.1.0"
