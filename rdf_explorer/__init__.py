"""RDF Explorer: Turtle datasets as an explorable force-directed graph."""

from rdf_explorer.errors import EmptyGraphError, ParseError, ServiceError
from rdf_explorer.graph_builder import build_graph, parse_graph
from rdf_explorer.models import Edge, GraphData, Node, TermKind, fragment_label

__version__ = "1.0.0"
