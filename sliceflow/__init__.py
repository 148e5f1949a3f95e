"""
sliceflow - slice view models for event-driven design timelines.

Turns a chronological flow model into deduplicated, cross-referenced,
scenario-enriched slices.
"""

__version__ = "1.0.0"
