"""
Algorithms for finding maximal and maximum-cardinality matchings
in general graphs.
"""

__all__ = ["Graph",
           "GraphLike",
           "Matching",
           "maximal_matching",
           "maximum_cardinality_matching",
           "mcm_stage",
           "is_connected",
           "verify_maximum",
           "DisconnectedGraphError",
           "MatchingError"]

from .algorithm import (GraphLike,
                        is_connected,
                        maximal_matching,
                        maximum_cardinality_matching,
                        mcm_stage,
                        verify_maximum,
                        DisconnectedGraphError,
                        MatchingError)
from .graph import Graph
from .matching import Matching
