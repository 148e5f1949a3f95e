"""
Pre-flight Check Implementations

Individual check modules for different validation areas.
"""

from .timeline import validate_timeline
from .references import validate_references

__all__ = [
    "validate_timeline",
    "validate_references",
]
