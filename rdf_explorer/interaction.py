"""Zoom/pan, drag-to-pin, click-to-select and focus animation over a ForceSimulation."""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Set, Tuple

from rdf_explorer.config import CONFIG
from rdf_explorer.layout import ForceSimulation, Point
from rdf_explorer.models import Node


def ease_cubic_in_out(t: float) -> float:
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


@dataclass(frozen=True)
class Transform:
    """Screen point = point * k + (x, y)."""
    k: float = 1.0
    x: float = 0.0
    y: float = 0.0

    def apply(self, point: Point) -> Point:
        return (point[0] * self.k + self.x, point[1] * self.k + self.y)

    def invert(self, point: Point) -> Point:
        return ((point[0] - self.x) / self.k, (point[1] - self.y) / self.k)

    def interpolate(self, other: "Transform", t: float) -> "Transform":
        return Transform(
            k=self.k + (other.k - self.k) * t,
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
        )


IDENTITY = Transform()


@dataclass(frozen=True)
class NodeStyle:
    radius: float
    stroke_width: float

    def interpolate(self, other: "NodeStyle", t: float) -> "NodeStyle":
        return NodeStyle(
            radius=self.radius + (other.radius - self.radius) * t,
            stroke_width=self.stroke_width + (other.stroke_width - self.stroke_width) * t,
        )


class Tween:
    def __init__(self, start, end, duration_ms: float):
        self.start = start
        self.end = end
        self.duration_ms = float(duration_ms)
        self.elapsed_ms = 0.0

    @property
    def done(self) -> bool:
        return self.elapsed_ms >= self.duration_ms

    @property
    def value(self):
        if self.done:
            return self.end
        return self.start.interpolate(self.end, ease_cubic_in_out(self.elapsed_ms / self.duration_ms))

    def advance(self, ms: float):
        self.elapsed_ms = min(self.duration_ms, self.elapsed_ms + ms)
        return self.value


class ClickEvent:
    def __init__(self):
        self.propagation_stopped = False

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


class InteractionController:
    """
    Owns the zoom/pan transform and the highlight/camera animations. Selection is
    reported through `on_select`; the controller never stores it. Drags only touch
    the pin fields (`fx`, `fy`) of the dragged node.
    """

    def __init__(self, simulation: ForceSimulation, width: Optional[float] = None, height: Optional[float] = None,
                 on_select: Optional[Callable[[Node], None]] = None):
        params = CONFIG["INTERACTION"]
        self.simulation = simulation
        self.width = float(width if width is not None else simulation.width)
        self.height = float(height if height is not None else simulation.height)
        self.on_select = on_select
        self.scale_extent: Tuple[float, float] = params["scale_extent"]
        self.focus_scale = params["focus_scale"]
        self.focus_duration_ms = params["focus_duration_ms"]
        self.highlight_duration_ms = params["highlight_duration_ms"]
        self.reset_duration_ms = params["reset_duration_ms"]
        self.default_style = NodeStyle(params["node_radius"], params["stroke_width"])
        self.highlight_style = NodeStyle(params["highlight_radius"], params["highlight_stroke_width"])
        self.highlighted: Optional[str] = None
        self._transform = IDENTITY
        self._camera: Optional[Tween] = None
        self._styles: Dict[str, Tween] = {}
        self._dragging: Set[str] = set()

    # ------------------------------
    # Transform
    # ------------------------------
    @property
    def transform(self) -> Transform:
        return self._transform

    def on_zoom_pan(self, transform: Transform) -> Transform:
        low, high = self.scale_extent
        k = min(high, max(low, transform.k))
        self._camera = None
        self._transform = Transform(k, transform.x, transform.y)
        return self._transform

    def screen_to_simulation(self, px: float, py: float) -> Point:
        return self._transform.invert((px, py))

    def camera_target(self) -> Transform:
        return self._camera.end if self._camera is not None else self._transform

    # ------------------------------
    # Pointer events
    # ------------------------------
    def node_at(self, px: float, py: float) -> Optional[Node]:
        sx, sy = self.screen_to_simulation(px, py)
        for node in reversed(self.simulation.nodes):
            nx, ny = node.position
            radius = self.node_style(node.id).radius
            if (sx - nx) ** 2 + (sy - ny) ** 2 <= radius * radius:
                return node
        return None

    def on_node_click(self, node: Node, event: Optional[ClickEvent] = None) -> None:
        if event is not None:
            event.stop_propagation()
        if self.on_select is not None:
            self.on_select(node)

    def on_background_click(self, event: Optional[ClickEvent] = None) -> bool:
        """Returns False when a node already consumed the click."""
        return not (event is not None and event.propagation_stopped)

    def on_drag_start(self, node: Node) -> None:
        if not self._dragging:
            self.simulation.hold_energy()
        self._dragging.add(node.id)
        node.fx, node.fy = node.position

    def on_drag_move(self, node: Node, x: float, y: float) -> None:
        node.fx, node.fy = x, y

    def on_pointer_drag(self, node: Node, px: float, py: float) -> None:
        self.on_drag_move(node, *self.screen_to_simulation(px, py))

    def on_drag_end(self, node: Node) -> None:
        self._dragging.discard(node.id)
        node.fx = None
        node.fy = None
        if not self._dragging:
            self.simulation.release_energy()

    @property
    def dragging(self) -> bool:
        return bool(self._dragging)

    # ------------------------------
    # Focus and highlight
    # ------------------------------
    def focus_on(self, node_id: Optional[str]) -> None:
        for other_id in list(self._styles):
            self._styles[other_id] = Tween(self.node_style(other_id), self.default_style, self.reset_duration_ms)
        self.highlighted = None
        node = self.simulation.node(node_id)
        if node is None:
            return
        self.highlighted = node.id
        self._styles[node.id] = Tween(self.node_style(node.id), self.highlight_style, self.highlight_duration_ms)
        x, y = node.position
        k = self.focus_scale
        target = Transform(k, self.width / 2 - k * x, self.height / 2 - k * y)
        self._camera = Tween(self._transform, target, self.focus_duration_ms)
        logging.debug(f"Focusing on {node.id} at ({x:.1f}, {y:.1f})")

    def node_style(self, node_id: str) -> NodeStyle:
        tween = self._styles.get(node_id)
        return tween.value if tween is not None else self.default_style

    def advance(self, ms: float) -> Transform:
        if self._camera is not None:
            self._transform = self._camera.advance(ms)
            if self._camera.done:
                self._camera = None
        for node_id, tween in list(self._styles.items()):
            tween.advance(ms)
            if tween.done and tween.end == self.default_style:
                del self._styles[node_id]
        return self._transform

    def reset(self) -> None:
        """Forget drags and highlight after the graph has been replaced."""
        self._dragging.clear()
        self._styles.clear()
        self._camera = None
        self.highlighted = None
