"""
Command line interface for the Order Miner.
"""
from .panels import ConditionGroup, ConditionPanel, ConditionTracker, GroupState, StatsPanel

__all__ = ["ConditionGroup", "ConditionPanel", "ConditionTracker", "GroupState", "StatsPanel"]
