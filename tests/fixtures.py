"""Shared Turtle snippets and node factories."""

from rdf_explorer.models import Edge, GraphData, Node, TermKind

EX = "http://example.org/"
FOAF = "http://xmlns.com/foaf/0.1/"
RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"

PREFIXES = """@prefix ex: <http://example.org/> .
@prefix foaf: <http://xmlns.com/foaf/0.1/> .
"""

ALICE = PREFIXES + """
ex:Alice a foaf:Person ; foaf:name "Alice Smith" ; ex:knows ex:Bob .
"""

MULTI_VALUED = PREFIXES + """
ex:Alice foaf:nick "Al" , "Ali" , "Al" ;
    ex:knows ex:Bob , ex:Bob .
ex:Alice ex:knows ex:Bob .
"""

BLANK_NODES = PREFIXES + """
ex:Alice ex:address [ ex:city "Paris" ] .
_:b1 ex:knows ex:Alice .
"""


def make_graph(node_ids, links=()):
    nodes = [Node(id=EX + i, label=i, kind=TermKind.IRI) for i in node_ids]
    edges = [Edge(source=EX + s, target=EX + t, label=label) for s, t, label in links]
    return GraphData(nodes=nodes, links=edges)
