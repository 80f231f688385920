# src/acsim_core/analysis/__init__.py
"""
Public interface of the analysis package: the net/topology builder, its formal
result contract, and the graph diagnostics used to explain singular circuits.
"""
from .results import TopologyAnalysisResults, REFERENCE_NET
from .topology import TopologyAnalyzer, TerminalArena, DisjointSet
from .connectivity import build_net_graph, find_floating_nets, find_voltage_source_loops
from .exceptions import TopologyAnalysisError

__all__ = [
    # Formal Result Contracts
    "TopologyAnalysisResults",
    "REFERENCE_NET",
    # Services
    "TopologyAnalyzer",
    "TerminalArena",
    "DisjointSet",
    "build_net_graph",
    "find_floating_nets",
    "find_voltage_source_loops",
    # Exceptions
    "TopologyAnalysisError",
]
