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
"""Export utilities for writing build reports to various file formats."""

import os
import json
import html
import logging
from typing import Any, Optional, Sequence

import networkx as nx
from networkx.readwrite import json_graph

from buildreport.color_utils import print_error, print_success
from buildreport.constants import DEPENDENCY_REPORT_FILENAME, HTML_REPORT_FILENAME, JSON_REPORT_FILENAME, SUPPORTED_GRAPH_FORMATS
from buildreport.dependency_graph import to_networkx
from buildreport.path_utils import format_duration, format_file_size
from buildreport.report_serialization import node_to_dict, report_to_dict
from buildreport.report_types import BuildReport, DependencyNode, UnitRecord

logger = logging.getLogger(__name__)


def ensure_output_dir(output_dir: str) -> str:
    """Create the output directory if needed and return it."""
    os.makedirs(output_dir, exist_ok=True)
    return output_dir


def _write_text(filename: str, content: str, description: str) -> Optional[str]:
    """Write a report file, reporting failures instead of raising."""
    try:
        ensure_output_dir(os.path.dirname(filename) or ".")
        with open(filename, "w", encoding="utf-8") as f:
            f.write(content)
    except OSError as e:
        logger.error("Failed to write %s: %s", description, e)
        print_error(f"Failed to write {description} {filename}: {e}")
        return None

    logger.info("Wrote %s to %s", description, filename)
    print_success(f"📊 {description.capitalize()} written to {filename}")
    return filename


def write_json_report(report: BuildReport, output_dir: str) -> Optional[str]:
    """Write build-report.json.

    Args:
        report: Finalized build report
        output_dir: Target directory (created on demand)

    Returns:
        Path of the written file, or None on failure
    """
    filename = os.path.join(output_dir, JSON_REPORT_FILENAME)
    return _write_text(filename, json.dumps(report_to_dict(report), indent=2, ensure_ascii=False), "JSON report")


def write_dependency_report(graph: Sequence[DependencyNode], output_dir: str) -> Optional[str]:
    """Write dependencies.json with one entry per emitted artifact."""
    filename = os.path.join(output_dir, DEPENDENCY_REPORT_FILENAME)
    return _write_text(filename, json.dumps([node_to_dict(node) for node in graph], indent=2, ensure_ascii=False), "dependency report")


def _unit_rows(units: Sequence[UnitRecord]) -> str:
    rows = []
    for unit in units:
        rows.append(
            f"<tr><td>{html.escape(unit.id)}</td>"
            f"<td data-value=\"{unit.duration:.3f}\">{format_duration(unit.duration)}</td>"
            f"<td data-value=\"{unit.size}\">{format_file_size(unit.size)}</td></tr>"
        )
    return "\n".join(rows)


def render_html_report(report: BuildReport) -> str:
    """Render the static HTML report document."""
    slowest = sorted(report.slow_modules, key=lambda unit: unit.duration, reverse=True)
    by_duration = sorted(report.modules, key=lambda unit: unit.duration, reverse=True)
    max_module = report.max_duration_module

    summary = [
        ("Total build time", format_duration(report.total_duration)),
        ("Modules processed", str(report.module_count)),
        ("Slow modules", str(len(report.slow_modules))),
        ("Average module size", format_file_size(report.avg_module_size)),
        ("Slowest module", f"{html.escape(max_module.id)} ({format_duration(max_module.duration)})" if max_module else "-"),
        ("Circular dependencies", str(len(report.circular_dependencies))),
    ]
    summary_rows = "\n".join(f"<tr><th>{label}</th><td>{value}</td></tr>" for label, value in summary)

    tips = "\n".join(f"<li>{html.escape(tip)}</li>" for tip in report.optimization_tips) or "<li>No optimization tips.</li>"
    cycles = "\n".join(f"<li>{html.escape(' → '.join(cycle))}</li>" for cycle in report.circular_dependencies) or "<li>None detected.</li>"

    table_head = "<thead><tr><th>Module</th><th>Duration</th><th>Size</th></tr></thead>"

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Build Report</title>
<style>
body {{ font-family: sans-serif; margin: 2em; color: #222; }}
table {{ border-collapse: collapse; margin-bottom: 2em; }}
th, td {{ border: 1px solid #ccc; padding: 4px 8px; text-align: left; }}
thead th {{ background: #f0f0f0; }}
.slow td {{ color: #b00; }}
</style>
</head>
<body class="build-report">
<h1>Build Report</h1>
<h2>Summary</h2>
<table>
{summary_rows}
</table>
<h2>Optimization Tips</h2>
<ul>
{tips}
</ul>
<h2>Slow Modules ({len(slowest)})</h2>
<table class="slow">
{table_head}
<tbody>
{_unit_rows(slowest)}
</tbody>
</table>
<h2>Circular Dependencies</h2>
<ul>
{cycles}
</ul>
<h2>All Modules ({report.module_count})</h2>
<table>
{table_head}
<tbody>
{_unit_rows(by_duration)}
</tbody>
</table>
</body>
</html>
"""


def write_html_report(report: BuildReport, output_dir: str) -> Optional[str]:
    """Write build-report.html.

    Args:
        report: Finalized build report
        output_dir: Target directory (created on demand)

    Returns:
        Path of the written file, or None on failure
    """
    filename = os.path.join(output_dir, HTML_REPORT_FILENAME)
    return _write_text(filename, render_html_report(report), "HTML report")


def export_dependency_graph(filename: str, graph: Sequence[DependencyNode], cycles: Sequence[Sequence[str]]) -> Optional[str]:
    """Export the artifact dependency graph for external visualization tools.

    Supports: GraphML (.graphml), GEXF (.gexf), JSON node-link (.json)

    Node attributes:
        - label: Artifact file name
        - size: Generated content size in bytes
        - imports: Number of imports
        - in_cycle: Whether the artifact participates in a circular dependency

    Args:
        filename: Output filename (extension determines format)
        graph: Dependency nodes
        cycles: Cycles from detect_circular_dependencies()

    Returns:
        Path of the written file, or None on failure
    """
    ext = os.path.splitext(filename)[1].lower()
    if ext not in SUPPORTED_GRAPH_FORMATS:
        print_error(f"Unsupported graph format '{ext}'. Supported: {', '.join(SUPPORTED_GRAPH_FORMATS)}")
        return None

    G = to_networkx(graph)
    in_cycle = {file for cycle in cycles for file in cycle}
    for node, attrs in G.nodes(data=True):
        attrs["label"] = node
        attrs.setdefault("size", 0)
        attrs.setdefault("imports", 0)
        attrs["in_cycle"] = node in in_cycle

    try:
        ensure_output_dir(os.path.dirname(filename) or ".")
        if ext == ".graphml":
            nx.write_graphml(G, filename)
        elif ext == ".gexf":
            nx.write_gexf(G, filename)
        else:
            data: Any = json_graph.node_link_data(G)
            with open(filename, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
    except (OSError, nx.NetworkXError) as e:
        logger.error("Failed to export dependency graph: %s", e)
        print_error(f"Failed to export dependency graph: {e}")
        return None

    logger.info("Exported dependency graph to %s", filename)
    print_success(f"Exported dependency graph ({G.number_of_nodes()} nodes, {G.number_of_edges()} edges) to {filename}")
    return filename

