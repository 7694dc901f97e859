"""Schemas for analytics"""
from typing import Dict

from pydantic import BaseModel


class TaskCompletionStats(BaseModel):
    year: int
    total_tasks: int
    daily_stats: Dict[str, int]
