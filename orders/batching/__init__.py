"""
Batching subpackage for the Orders domain.

Public API:
- create_batch
- BatchingPolicy
"""

from .engine import create_batch
from .policy import BatchingPolicy, default_batching_policy, peak_batching_policy

__all__ = [
    "create_batch",
    "BatchingPolicy",
    "default_batching_policy",
    "peak_batching_policy",
]
