import unittest

from rdf_explorer.models import Edge, GraphData, Node, TermKind, fragment_label
from tests.fixtures import EX, make_graph


class FragmentLabelTests(unittest.TestCase):
    def test_last_path_segment(self):
        self.assertEqual(fragment_label("http://example.org/Alice"), "Alice")
        self.assertEqual(fragment_label("http://xmlns.com/foaf/0.1/name"), "name")

    def test_hash_fragment(self):
        self.assertEqual(fragment_label("http://www.w3.org/1999/02/22-rdf-syntax-ns#type"), "type")

    def test_no_separator_returns_value(self):
        self.assertEqual(fragment_label("mailto:alice@example.org"), "mailto:alice@example.org")
        self.assertEqual(fragment_label("n3-0"), "n3-0")

    def test_trailing_separator_falls_back_to_value(self):
        self.assertEqual(fragment_label("http://example.org/"), "http://example.org/")


class GraphDataTests(unittest.TestCase):
    def test_valid_links_drop_dangling_endpoints(self):
        graph = make_graph(["A", "B"], [("A", "B", "knows"), ("A", "C", "knows")])
        self.assertEqual([(l.source, l.target) for l in graph.valid_links()], [(EX + "A", EX + "B")])

    def test_node_lookup(self):
        graph = make_graph(["A"])
        self.assertIs(graph.node(EX + "A"), graph.nodes[0])
        self.assertIsNone(graph.node(EX + "missing"))
        self.assertIsNone(graph.node(None))

    def test_content_ignores_layout_state(self):
        first = GraphData(nodes=[Node(id="a", label="a", kind=TermKind.IRI, properties={"p": ["1"]})],
                          links=[Edge("a", "a", "self")])
        second = GraphData(nodes=[Node(id="a", label="a", kind=TermKind.IRI, properties={"p": ["1"]}, x=5.0)],
                           links=[Edge("a", "a", "self")])
        self.assertEqual(first.content(), second.content())
        self.assertEqual(first, second)

    def test_position_defaults_to_origin(self):
        node = Node(id="a", label="a", kind=TermKind.BLANK_NODE)
        self.assertEqual(node.position, (0.0, 0.0))
        self.assertFalse(node.pinned)


if __name__ == "__main__":
    unittest.main()
