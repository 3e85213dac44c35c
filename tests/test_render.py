import json
import unittest

from rdf_explorer.interaction import InteractionController
from rdf_explorer.layout import ForceSimulation
from rdf_explorer.render import build_network, build_scene, camera_script, network_html
from tests.fixtures import EX, make_graph


class RenderTests(unittest.TestCase):
    def setUp(self):
        self.simulation = ForceSimulation(width=800, height=600, seed=1)
        self.simulation.reseed(make_graph(["A", "B", "C"], [("A", "B", "knows"), ("B", "C", "worksAt"),
                                                              ("A", "Gone", "knows")]))
        self.simulation.run()
        self.controller = InteractionController(self.simulation)

    def test_scene_mirrors_simulation(self):
        scene = build_scene(self.simulation, self.controller)
        self.assertEqual([s.id for s in scene.nodes], [EX + "A", EX + "B", EX + "C"])
        self.assertEqual([s.label for s in scene.links], ["knows", "worksAt"])
        self.assertEqual(scene.nodes[0].center, self.simulation.nodes[0].position)
        self.assertTrue(all(s.radius == 18.0 for s in scene.nodes))

    def test_link_label_at_midpoint(self):
        scene = build_scene(self.simulation, self.controller)
        link = scene.links[0]
        self.assertAlmostEqual(link.label_at[0], (link.start[0] + link.end[0]) / 2)
        self.assertAlmostEqual(link.label_at[1], (link.start[1] + link.end[1]) / 2)

    def test_highlight_reflected_in_scene(self):
        self.controller.focus_on(EX + "B")
        self.controller.advance(500)
        scene = build_scene(self.simulation, self.controller)
        highlighted = [s for s in scene.nodes if s.highlighted]
        self.assertEqual([s.id for s in highlighted], [EX + "B"])
        self.assertEqual((highlighted[0].radius, highlighted[0].stroke_width), (22.0, 5.0))

    def test_network_uses_simulation_positions(self):
        net = build_network(build_scene(self.simulation, self.controller))
        self.assertEqual(len(net.nodes), 3)
        self.assertEqual(len(net.edges), 2)
        first = net.nodes[0]
        self.assertEqual(first["id"], EX + "A")
        self.assertEqual((first["x"], first["y"]), self.simulation.nodes[0].position)
        self.assertFalse(first["physics"])

    def test_labels_can_be_hidden(self):
        net = build_network(build_scene(self.simulation, self.controller), show_labels=False)
        self.assertTrue(all(n["label"] == "" for n in net.nodes))

    def test_camera_script_targets_focus(self):
        node = self.simulation.node(EX + "C")
        self.controller.focus_on(node.id)
        script = camera_script(self.controller)
        self.assertIn("network.moveTo", script)
        options = json.loads(script.split("network.moveTo(")[1].split(");")[0])
        self.assertAlmostEqual(options["scale"], 1.2)
        self.assertAlmostEqual(options["position"]["x"], node.x)
        self.assertAlmostEqual(options["position"]["y"], node.y)

    def test_network_html_includes_camera(self):
        net = build_network(build_scene(self.simulation, self.controller))
        html = network_html(net, self.controller)
        self.assertIn("network.moveTo", html)


if __name__ == "__main__":
    unittest.main()
