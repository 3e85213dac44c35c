"""Data models for graph structures."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

_SEPARATORS = re.compile(r"[/#]")


class TermKind(str, Enum):
    IRI = "uri"
    BLANK_NODE = "bnode"
    LITERAL = "literal"


def fragment_label(value: str) -> str:
    """Last path or hash segment of an identifier, or the identifier itself."""
    return _SEPARATORS.split(value)[-1] or value


@dataclass
class Node:
    id: str
    label: str
    kind: TermKind
    properties: Dict[str, List[str]] = field(default_factory=dict)
    # Layout state, written by the simulation (x, y, vx, vy) and by drags (fx, fy).
    x: Optional[float] = field(default=None, compare=False)
    y: Optional[float] = field(default=None, compare=False)
    vx: Optional[float] = field(default=None, compare=False)
    vy: Optional[float] = field(default=None, compare=False)
    fx: Optional[float] = field(default=None, compare=False)
    fy: Optional[float] = field(default=None, compare=False)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x or 0.0, self.y or 0.0)

    @property
    def pinned(self) -> bool:
        return self.fx is not None and self.fy is not None


@dataclass
class Edge:
    source: str
    target: str
    label: str


@dataclass
class GraphData:
    nodes: List[Node]
    links: List[Edge] = field(default_factory=list)

    def node(self, node_id: Optional[str]) -> Optional[Node]:
        if node_id is None:
            return None
        return next((n for n in self.nodes if n.id == node_id), None)

    def valid_links(self) -> List[Edge]:
        ids = {n.id for n in self.nodes}
        return [link for link in self.links if link.source in ids and link.target in ids]

    def content(self):
        nodes = [(n.id, n.label, n.kind, {k: list(v) for k, v in n.properties.items()}) for n in self.nodes]
        links = [(l.source, l.target, l.label) for l in self.links]
        return nodes, links
