"""Fold a statement stream into a deduplicated node set and an edge list."""

import logging
from typing import Dict, Iterable, List, Optional

from rdf_explorer.errors import EmptyGraphError, ParseError
from rdf_explorer.models import Edge, GraphData, Node, fragment_label
from rdf_explorer.rdf_parser import Statement, Term, parse_turtle
from rdf_explorer.utils import profile_time


class GraphBuilder:
    """
    Accumulates statements into nodes and links.

    Literal objects become entries in the subject's `properties`; resource objects
    become nodes joined to the subject by an edge. Nodes are keyed by term value and
    kept in first-seen order. Neither property values nor edges are deduplicated.
    """

    def __init__(self):
        self._nodes: Dict[str, Node] = {}
        self._links: List[Edge] = []
        self._error: Optional[Exception] = None
        self._complete = False

    def resolve_or_create(self, term: Term) -> Optional[Node]:
        if term.is_literal:
            return None
        node = self._nodes.get(term.value)
        if node is None:
            node = Node(id=term.value, label=fragment_label(term.value), kind=term.kind)
            self._nodes[term.value] = node
            logging.debug(f"Added node: {node.label} ({node.id})")
        return node

    def add_statement(self, statement: Statement) -> None:
        subject = self.resolve_or_create(statement.subject)
        if subject is None:
            return
        predicate_label = fragment_label(statement.predicate.value)
        if statement.object.is_literal:
            subject.properties.setdefault(predicate_label, []).append(statement.object.value)
            return
        target = self.resolve_or_create(statement.object)
        self._links.append(Edge(source=subject.id, target=target.id, label=predicate_label))

    def handle(self, error: Optional[Exception], statement: Optional[Statement]) -> None:
        """Parser callback."""
        if self._complete or self._error is not None:
            return
        if error is not None:
            self._error = error
        elif statement is None:
            self._complete = True
        else:
            self.add_statement(statement)

    def result(self) -> GraphData:
        if self._error is not None:
            raise self._error
        if not self._complete:
            raise ParseError("Statement stream ended without a completion signal.")
        if not self._nodes:
            raise EmptyGraphError()
        return GraphData(nodes=list(self._nodes.values()), links=list(self._links))


def build_graph(statements: Iterable[Statement]) -> GraphData:
    builder = GraphBuilder()
    for statement in statements:
        builder.handle(None, statement)
    builder.handle(None, None)
    return builder.result()


@profile_time
def parse_graph(text: str) -> GraphData:
    builder = GraphBuilder()
    parse_turtle(text, builder.handle)
    graph = builder.result()
    logging.info(f"Parsed graph with {len(graph.nodes)} node(s) and {len(graph.links)} link(s).")
    return graph
