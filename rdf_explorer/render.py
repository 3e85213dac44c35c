"""Graph rendering: a plain-data scene snapshot and its pyvis Network form."""

import json
import logging
from dataclasses import dataclass, field
from typing import List

from pyvis.network import Network

from rdf_explorer.config import CONFIG
from rdf_explorer.interaction import InteractionController, Transform
from rdf_explorer.layout import ForceSimulation, Point
from rdf_explorer.models import TermKind


@dataclass
class NodeShape:
    id: str
    label: str
    kind: TermKind
    center: Point
    radius: float
    stroke_width: float
    highlighted: bool = False


@dataclass
class LinkShape:
    source: str
    target: str
    label: str
    start: Point
    end: Point
    label_at: Point


@dataclass
class Scene:
    nodes: List[NodeShape] = field(default_factory=list)
    links: List[LinkShape] = field(default_factory=list)
    transform: Transform = field(default_factory=Transform)


def build_scene(simulation: ForceSimulation, controller: InteractionController) -> Scene:
    """Snapshot of what to draw at the current tick, in pre-transform coordinates."""
    scene = Scene(transform=controller.transform)
    for node in simulation.nodes:
        style = controller.node_style(node.id)
        scene.nodes.append(NodeShape(id=node.id, label=node.label, kind=node.kind, center=node.position,
                                     radius=style.radius, stroke_width=style.stroke_width,
                                     highlighted=node.id == controller.highlighted))
    for link in simulation.links:
        start, end = simulation.link_endpoints(link)
        scene.links.append(LinkShape(source=link.source, target=link.target, label=link.label,
                                     start=start, end=end, label_at=simulation.link_midpoint(link)))
    return scene


def add_node(net: Network, shape: NodeShape, show_labels: bool = True) -> None:
    colors = CONFIG["COLORS"]
    stroke = colors["iri_stroke"] if shape.kind is TermKind.IRI else colors["bnode_stroke"]
    net.add_node(shape.id, label=shape.label if show_labels else "", title=f"{shape.label}\n{shape.id}",
                 shape="dot", size=shape.radius, x=shape.center[0], y=shape.center[1], physics=False,
                 color={"background": colors["node_fill"], "border": stroke,
                        "highlight": {"background": colors["node_fill"], "border": stroke}},
                 borderWidth=shape.stroke_width,
                 font={"size": 12 if shape.highlighted else 10, "face": "Arial", "color": colors["node_label"]})
    logging.debug(f"Added node: {shape.label} ({shape.id})")


def add_edge(net: Network, shape: LinkShape) -> None:
    colors = CONFIG["COLORS"]
    net.add_edge(shape.source, shape.target, label=shape.label, color=colors["link"], width=1.5, arrows="to",
                 title=f"{shape.label}: {shape.source} → {shape.target}",
                 font={"size": 9, "align": "middle", "color": colors["link_label"]},
                 smooth={"enabled": True, "type": "continuous"})


def build_network(scene: Scene, show_labels: bool = True) -> Network:
    viewport = CONFIG["VIEWPORT"]
    net = Network(height=f"{viewport['height']}px", width="100%", directed=True, notebook=False,
                  bgcolor=CONFIG["COLORS"]["background"], font_color=CONFIG["COLORS"]["node_label"])
    net.toggle_physics(False)
    for shape in scene.nodes:
        add_node(net, shape, show_labels=show_labels)
    for shape in scene.links:
        add_edge(net, shape)
    return net


def camera_script(controller: InteractionController) -> str:
    """vis.js snippet that animates the view to the controller's camera target."""
    target = controller.camera_target()
    cx, cy = target.invert((controller.width / 2, controller.height / 2))
    options = {
        "position": {"x": cx, "y": cy},
        "scale": target.k,
        "animation": {"duration": controller.focus_duration_ms, "easingFunction": "easeInOutCubic"},
    }
    return f"""
    <script type="text/javascript">
      setTimeout(function() {{
          if (typeof network !== 'undefined') {{
              network.moveTo({json.dumps(options)});
          }}
      }}, 300);
    </script>
    """


def network_html(net: Network, controller: InteractionController) -> str:
    return net.generate_html() + camera_script(controller)
