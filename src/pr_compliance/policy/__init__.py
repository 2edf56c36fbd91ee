"""
Policy Decisions

Aggregates rule results into a verdict and derives the action plan.
"""

from .aggregator import PolicyAggregator
from .planner import ActionPlanner

__all__ = ['PolicyAggregator', 'ActionPlanner']
