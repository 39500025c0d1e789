#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Dependency graph construction and circular dependency detection for emitted artifacts."""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Sequence, Set, Tuple

import networkx as nx

from buildreport.path_utils import content_length
from buildreport.report_types import DependencyNode

logger = logging.getLogger(__name__)

# End-of-dependencies marker for the traversal frames
_DONE = object()


def _artifact_field(artifact: Any, name: str, default: Any = None) -> Any:
    """Read a field from artifact metadata given as a mapping or an object."""
    if isinstance(artifact, Mapping):
        value = artifact.get(name, default)
    else:
        value = getattr(artifact, name, default)
    return default if value is None else value


def _artifact_size(artifact: Any) -> int:
    """Byte length of an artifact's generated content, 0 when unavailable."""
    for content_field in ("code", "source"):
        content = _artifact_field(artifact, content_field)
        if content is not None:
            return content_length(content)
    return int(_artifact_field(artifact, "size", 0))


def build_dependency_graph(bundle: Mapping[str, Any]) -> List[DependencyNode]:
    """Convert emitted artifact metadata into dependency nodes.

    One node per artifact, in the bundle's iteration order. Missing import or
    dependency lists default to empty and a missing file name falls back to
    the bundle key.

    Args:
        bundle: Mapping of artifact key to artifact metadata (mapping or object
            with fileName, imports, dependencies and code/source/size)

    Returns:
        List of DependencyNode
    """
    graph = []
    for key, artifact in bundle.items():
        graph.append(
            DependencyNode(
                file=str(_artifact_field(artifact, "fileName", key)),
                imports=tuple(_artifact_field(artifact, "imports", ())),
                size=_artifact_size(artifact),
                dependencies=tuple(_artifact_field(artifact, "dependencies", ())),
            )
        )

    logger.debug("Built dependency graph with %s artifacts", len(graph))
    return graph


def _index_graph(graph: Sequence[DependencyNode]) -> Dict[str, DependencyNode]:
    """Map file name to node; the first node wins if a file name repeats."""
    index: Dict[str, DependencyNode] = {}
    for node in graph:
        index.setdefault(node.file, node)
    return index


def detect_circular_dependencies(graph: Sequence[DependencyNode]) -> List[List[str]]:
    """Find cycles in the dependency graph with a depth-first traversal.

    Traversal starts from every not yet visited node in graph order and follows
    each node's dependencies in order. Reaching a node that is on the current
    path records the path slice from that node to the current node. A fully
    explored node is never expanded again, so the walk is O(nodes + edges).

    An explicit frame stack replaces recursion so deep graphs cannot exhaust
    the interpreter's recursion limit; visitation order matches the recursive
    formulation.

    Dependencies that are not nodes of the graph are dead ends.

    Args:
        graph: Dependency nodes

    Returns:
        List of cycles, each a list of file names in traversal order.
        A self-dependency yields a single-element cycle.
    """
    index = _index_graph(graph)
    cycles: List[List[str]] = []
    visited: Set[str] = set()
    on_stack: Set[str] = set()
    path: List[str] = []
    frames: List[Tuple[str, Iterator[str]]] = []

    def enter(file: str) -> None:
        visited.add(file)
        on_stack.add(file)
        path.append(file)
        node = index.get(file)
        frames.append((file, iter(node.dependencies if node is not None else ())))

    for root in graph:
        if root.file in visited:
            continue

        enter(root.file)
        while frames:
            file, dependencies = frames[-1]
            dependency = next(dependencies, _DONE)
            if dependency is _DONE:
                frames.pop()
                path.pop()
                on_stack.discard(file)
                continue

            if dependency in on_stack:
                cycles.append(path[path.index(dependency):])
            elif dependency not in visited:
                enter(dependency)

    if cycles:
        logger.info("Found %s circular dependencies", len(cycles))
    return cycles


def to_networkx(graph: Sequence[DependencyNode]) -> "nx.DiGraph[Any]":
    """Build a NetworkX directed graph from dependency nodes.

    Args:
        graph: Dependency nodes

    Returns:
        DiGraph with one node per artifact (attributes: size, imports) and one
        edge per dependency. Dependencies outside the graph become bare nodes.
    """
    G: nx.DiGraph[str] = nx.DiGraph()

    for node in graph:
        if node.file not in G:
            G.add_node(node.file, size=node.size, imports=len(node.imports))

    edges = [(node.file, dependency) for node in graph for dependency in node.dependencies if dependency is not None]
    G.add_edges_from(edges)

    logger.debug("Built graph with %s nodes and %s edges", G.number_of_nodes(), G.number_of_edges())
    return G


def summarize_cycles(graph: Sequence[DependencyNode]) -> Tuple[List[Set[str]], List[str]]:
    """Group cyclic artifacts into strongly connected components.

    Args:
        graph: Dependency nodes

    Returns:
        Tuple of (cycles, self_loops) where:
        - cycles: Sets of artifacts in multi-artifact cycles, largest first
        - self_loops: Artifacts that depend on themselves, sorted
    """
    G = to_networkx(graph)

    cycles = [scc for scc in nx.strongly_connected_components(G) if len(scc) > 1]
    cycles.sort(key=lambda scc: (-len(scc), sorted(scc)))
    self_loops = sorted(node for node in nx.nodes_with_selfloops(G))

    return cycles, self_loops


def cross_check_cycles(graph: Sequence[DependencyNode], cycles: Sequence[Sequence[str]]) -> Set[str]:
    """Compare the DFS cycle list with the strongly connected components.

    The depth-first walk never expands an artifact twice, so a cycle that only
    closes through an already explored artifact is not listed. Such artifacts
    are still members of a cyclic component.

    Args:
        graph: Dependency nodes
        cycles: Cycles from detect_circular_dependencies()

    Returns:
        Artifacts in a cyclic component that appear in no listed cycle
    """
    components, self_loops = summarize_cycles(graph)
    cyclic = set(self_loops).union(*components)
    listed = {file for cycle in cycles for file in cycle}

    missed = cyclic - listed
    if missed:
        logger.warning("%s artifacts are in dependency cycles not listed individually: %s", len(missed), ", ".join(sorted(missed)))
    return missed
