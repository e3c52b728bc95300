"""Control-flow graph views of MIR passes."""

from __future__ import annotations

from pathlib import Path
import re
from typing import Iterable

import networkx as nx
import pydot

from .core import Block, Document, Pass, render_json, render_name
from .formatter import format_instructions


def _branch_labels(successors) -> list:
    if len(successors) == 2:
        return ["T", "F"]
    return [None] * len(successors)


def build_cfg(blocks: Iterable[Block]) -> nx.MultiDiGraph:
    """
    Build a control-flow graph keyed by rendered block number.

    Two-way branches carry ``branch="T"``/``"F"`` on their edges. Successors
    that name a block missing from the pass still get a node, with
    ``instructions=None``.
    """
    graph = nx.MultiDiGraph()
    blocks = list(blocks)
    for block in blocks:
        graph.add_node(render_json(block.number), instructions=len(block.instructions))

    for block in blocks:
        src = render_json(block.number)
        for target, label in zip(block.successors, _branch_labels(block.successors)):
            dst = render_json(target)
            if dst not in graph:
                graph.add_node(dst, instructions=None)
            graph.add_edge(src, dst, branch=label)
    return graph


def unreachable_blocks(blocks: Iterable[Block]) -> list[str]:
    """Return blocks that cannot be reached from the first block, in order."""
    blocks = list(blocks)
    if not blocks:
        return []
    graph = build_cfg(blocks)
    entry = render_json(blocks[0].number)
    reachable = nx.descendants(graph, entry) | {entry}
    return [
        render_json(block.number)
        for block in blocks
        if render_json(block.number) not in reachable
    ]


def _dot_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _dot_label(block: Block) -> str:
    lines = [f"Block#{render_json(block.number)}"]
    lines.extend(
        line.strip() for line in format_instructions(block.instructions).splitlines()
    )
    text = "\\l".join(_dot_escape(line) for line in lines)
    return f'"{text}\\l"'


def build_graphviz(function_name, pass_: Pass) -> pydot.Dot:
    """Build a Graphviz digraph for one pass of one function."""

    title = f"{render_name(function_name)}: {render_name(pass_.name)}"
    graph = pydot.Dot(
        "ion_mir",
        graph_type="digraph",
        label=f'"{_dot_escape(title)}"',
        labelloc="t",
        fontname="Courier",
    )
    cfg = build_cfg(pass_.blocks)
    by_number = {render_json(block.number): block for block in pass_.blocks}
    # Positional node ids; the rendered number goes in the label.
    dot_ids = {number: f"block{idx}" for idx, number in enumerate(cfg.nodes)}

    for number in cfg.nodes:
        block = by_number.get(number)
        graph.add_node(
            pydot.Node(
                dot_ids[number],
                label=_dot_label(block) if block else f'"Block#{_dot_escape(number)}"',
                shape="box",
                style="solid" if block else "dashed",
                fontname="Courier",
            )
        )

    for src, dst, data in cfg.edges(data=True):
        attrs = {}
        if data.get("branch"):
            attrs["label"] = data["branch"]
        graph.add_edge(pydot.Edge(dot_ids[src], dot_ids[dst], **attrs))

    return graph


def _file_stem(*parts) -> str:
    return "_".join(re.sub(r"[^\w.-]+", "_", render_name(p)) for p in parts)


def export_graphviz(document: Document, output_dir):
    """Write one ``.dot`` file per function and pass into ``output_dir``."""

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for f_idx, func in enumerate(document.functions):
        for p_idx, pass_ in enumerate(func.passes):
            stem = _file_stem(f_idx, func.name, p_idx, pass_.name)
            path = output_dir / f"{stem}.dot"
            build_graphviz(func.name, pass_).write(str(path), format="raw")
            print(f"  ✓ Graphviz graph exported → {path}")
            written.append(path)
    return written


__all__ = [
    "build_cfg",
    "unreachable_blocks",
    "build_graphviz",
    "export_graphviz",
]
