"""Kanban board backend with contiguous column and task ordering."""

__version__ = "1.0.0"
