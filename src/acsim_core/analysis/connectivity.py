# src/acsim_core/analysis/connectivity.py
"""
Graph view of a solved topology, used to explain singular systems.

A net whose potential is fixed only through current sources (or not at all) has no
defined voltage relative to the reference. These helpers find such nets so a
`SingularSystemError` can name them instead of just reporting a bad pivot.
"""
import logging
from typing import Iterable, Set

import networkx as nx

from ..components.base_enums import ElementKind
from ..components.elements import Element
from .results import REFERENCE_NET, TopologyAnalysisResults

logger = logging.getLogger(__name__)


def build_net_graph(
    topology: TopologyAnalysisResults,
    elements: Iterable[Element],
    include_current_sources: bool = False,
) -> nx.MultiGraph:
    """
    Builds a multigraph with one node per net and one edge per element.

    Edges carry the element id and kind. Current sources are left out by default
    because they do not constrain the voltage between their terminals.
    """
    graph = nx.MultiGraph()
    graph.add_nodes_from(range(topology.net_count))
    for element in elements:
        if element.kind == ElementKind.CURRENT_SOURCE and not include_current_sources:
            continue
        if len(element.terminals) != 2:
            continue
        na = topology.net_of(element.id, element.terminals[0])
        nb = topology.net_of(element.id, element.terminals[1])
        graph.add_edge(na, nb, key=element.id, kind=element.kind)
    return graph


def find_floating_nets(topology: TopologyAnalysisResults, elements: Iterable[Element]) -> Set[int]:
    """Returns the nets with no voltage-defining path to the reference net."""
    if topology.net_count == 0:
        return set()
    graph = build_net_graph(topology, elements)
    grounded = nx.node_connected_component(graph, REFERENCE_NET)
    floating = set(graph.nodes) - grounded
    if floating:
        logger.debug(f"Nets without a path to the reference: {sorted(floating)}")
    return floating


def find_voltage_source_loops(topology: TopologyAnalysisResults, elements: Iterable[Element]) -> Set[str]:
    """
    Returns the ids of voltage sources that sit on a cycle made only of voltage
    sources (including a source whose terminals share a net), which leaves their
    branch currents undetermined.
    """
    graph = nx.MultiGraph()
    for element in elements:
        if element.kind != ElementKind.VOLTAGE_SOURCE:
            continue
        na = topology.net_of(element.id, element.terminals[0])
        nb = topology.net_of(element.id, element.terminals[1])
        graph.add_edge(na, nb, key=element.id)

    looped: Set[str] = set()
    for u, v, key in list(graph.edges(keys=True)):
        if u == v:
            looped.add(key)
            continue
        # The edge is on a cycle iff u and v stay connected without it.
        graph.remove_edge(u, v, key=key)
        if nx.has_path(graph, u, v):
            looped.add(key)
        graph.add_edge(u, v, key=key)
    return looped
