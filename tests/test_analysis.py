import unittest

from rdf_explorer.analysis import compute_node_metrics, graph_summary, graph_to_jsonld, links_frame, nodes_frame
from rdf_explorer.graph_builder import parse_graph
from tests.fixtures import EX, PREFIXES, make_graph


class AnalysisTests(unittest.TestCase):
    def setUp(self):
        self.graph = make_graph(["A", "B", "C", "D"], [("A", "B", "knows"), ("B", "C", "knows"),
                                                      ("A", "B", "likes")])

    def test_degree_counts_parallel_links(self):
        metrics = compute_node_metrics(self.graph)
        self.assertEqual(metrics[EX + "A"]["out_degree"], 2)
        self.assertEqual(metrics[EX + "B"]["in_degree"], 2)
        self.assertEqual(metrics[EX + "D"]["in_degree"], 0)
        self.assertGreater(metrics[EX + "B"]["betweenness"], 0)
        self.assertEqual(metrics[EX + "A"]["betweenness"], 0)

    def test_summary(self):
        self.assertEqual(graph_summary(self.graph),
                         {"nodes": 4, "links": 3, "components": 2, "literal_values": 0})

    def test_frames(self):
        graph = parse_graph(PREFIXES + 'ex:Alice foaf:nick "Al", "Ali" ; ex:knows ex:Bob .')
        nodes = nodes_frame(graph)
        self.assertEqual(list(nodes.columns), ["ID", "Label", "Kind", "Properties"])
        self.assertEqual(nodes.iloc[0]["Properties"], "nick=Al, Ali")
        links = links_frame(graph)
        self.assertEqual(links.to_dict("records"), [{"Source": EX + "Alice", "Label": "knows", "Target": EX + "Bob"}])

    def test_jsonld_export(self):
        graph = parse_graph(PREFIXES + 'ex:Alice foaf:name "Alice" ; ex:knows ex:Bob , ex:Carol .')
        doc = graph_to_jsonld(graph)
        alice = doc["@graph"][0]
        self.assertEqual(alice["@id"], EX + "Alice")
        self.assertEqual(alice["ex:knows"], [{"@id": EX + "Bob"}, {"@id": EX + "Carol"}])
        self.assertEqual(len(doc["@graph"]), 3)
        self.assertIn("@context", doc)


if __name__ == "__main__":
    unittest.main()
