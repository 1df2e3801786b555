"""
famcost: daily income and cost tracking for a family business.

Records per-unit income/cost, household purchases ("bazar" items) and other
daily expenses, and aggregates them into today/monthly/per-unit statistics.
Local-only: records live in the workspace's record store.
"""

__version__ = "0.1.0"
