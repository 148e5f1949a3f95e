"""Terminal views for slice view models."""

from .slice import render_slices, build_slice_panel
from .table import render_summary, build_summary_table, build_data_flow_tree
from .timeline import render_timeline

__all__ = [
    "render_slices",
    "build_slice_panel",
    "render_summary",
    "build_summary_table",
    "build_data_flow_tree",
    "render_timeline",
]
