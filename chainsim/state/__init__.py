"""
chainsim.state — persisted world state and the write journal above it.
"""

from .journal import Journal
from .world import WorldState

__all__ = ["Journal", "WorldState"]
