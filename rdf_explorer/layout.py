"""Force-directed layout: link springs, many-body repulsion, centering, collision."""

import logging
import math
import random
from enum import Enum
from typing import Dict, List, Optional, Tuple

import numpy as np

from rdf_explorer.config import CONFIG
from rdf_explorer.models import Edge, GraphData, Node

Point = Tuple[float, float]

INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


class Regime(str, Enum):
    COLD = "cold"
    SETTLING = "settling"
    PINNED_DRAG = "pinned-drag"


def midpoint(a: Point, b: Point) -> Point:
    return ((a[0] + b[0]) / 2, (a[1] + b[1]) / 2)


class ForceSimulation:
    """
    A single, reusable simulation. `reseed()` retargets it at a new GraphData and
    restarts from the warm energy level; `step()` advances one tick and writes
    `x`, `y`, `vx`, `vy` back onto the node objects. Pinned axes (`fx`, `fy`) win
    over forces during integration.
    """

    def __init__(self, width: Optional[float] = None, height: Optional[float] = None,
                 seed: Optional[int] = None, **overrides):
        params = dict(CONFIG["LAYOUT"])
        params.update(overrides)
        self.width = float(width if width is not None else CONFIG["VIEWPORT"]["width"])
        self.height = float(height if height is not None else CONFIG["VIEWPORT"]["height"])
        self.link_distance = params["link_distance"]
        self.charge_strength = params["charge_strength"]
        self.collision_radius = params["collision_radius"]
        self.collision_strength = params["collision_strength"]
        self.center_strength = params["center_strength"]
        self.warm_alpha = params["warm_alpha"]
        self.drag_alpha_target = params["drag_alpha_target"]
        self.alpha_min = params["alpha_min"]
        self.alpha_decay = 1 - self.alpha_min ** (1 / 300)
        self.velocity_decay = params["velocity_decay"]
        self.initial_radius = params["initial_radius"]
        self.max_settle_ticks = params["max_settle_ticks"]
        self.alpha = 0.0
        self.alpha_target = 0.0
        self.ticks = 0
        self.nodes: List[Node] = []
        self.links: List[Edge] = []
        self._index: Dict[str, int] = {}
        self._link_terms: List[Tuple[int, int, float, float]] = []
        self._holding = False
        self._random = random.Random(seed)

    # ------------------------------
    # Seeding and energy
    # ------------------------------
    def reseed(self, graph_data: GraphData) -> None:
        self.nodes = list(graph_data.nodes)
        self._index = {node.id: i for i, node in enumerate(self.nodes)}
        self.links = [l for l in graph_data.links if l.source in self._index and l.target in self._index]
        self._initialize_nodes()
        self._initialize_links()
        self.alpha = self.warm_alpha
        self.alpha_target = 0.0
        self._holding = False
        self.ticks = 0
        logging.info(f"Simulation reseeded with {len(self.nodes)} node(s) and {len(self.links)} link(s).")

    def _initialize_nodes(self) -> None:
        for i, node in enumerate(self.nodes):
            if node.x is None or node.y is None:
                radius = self.initial_radius * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            if node.vx is None or node.vy is None:
                node.vx = 0.0
                node.vy = 0.0

    def _initialize_links(self) -> None:
        count = [0] * len(self.nodes)
        pairs = []
        for link in self.links:
            s, t = self._index[link.source], self._index[link.target]
            count[s] += 1
            count[t] += 1
            pairs.append((s, t))
        self._link_terms = [
            (s, t, 1 / min(count[s], count[t]), count[s] / (count[s] + count[t]))
            for s, t in pairs
        ]

    def hold_energy(self) -> None:
        self.alpha_target = self.drag_alpha_target
        self._holding = True

    def release_energy(self) -> None:
        self.alpha_target = 0.0
        self._holding = False

    @property
    def regime(self) -> Regime:
        if self._holding:
            return Regime.PINNED_DRAG
        if self.ticks == 0:
            return Regime.COLD
        return Regime.SETTLING

    @property
    def settled(self) -> bool:
        return self.alpha < self.alpha_min and not self._holding

    # ------------------------------
    # Stepping
    # ------------------------------
    def step(self, dt: float = 1.0) -> Dict[str, Point]:
        if not self.nodes:
            return {}
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        x = np.array([n.x for n in self.nodes], dtype=float)
        y = np.array([n.y for n in self.nodes], dtype=float)
        vx = np.array([n.vx for n in self.nodes], dtype=float)
        vy = np.array([n.vy for n in self.nodes], dtype=float)

        self._apply_links(x, y, vx, vy)
        self._apply_charge(x, y, vx, vy)
        self._apply_center(x, y)
        self._apply_collision(x, y, vx, vy)

        fx = np.array([np.nan if n.fx is None else n.fx for n in self.nodes], dtype=float)
        fy = np.array([np.nan if n.fy is None else n.fy for n in self.nodes], dtype=float)
        self._integrate(x, vx, fx, dt)
        self._integrate(y, vy, fy, dt)

        for i, node in enumerate(self.nodes):
            node.x, node.y = float(x[i]), float(y[i])
            node.vx, node.vy = float(vx[i]), float(vy[i])
        self.ticks += 1
        return self.positions()

    def run(self, max_ticks: Optional[int] = None) -> int:
        """Step until the energy decays below `alpha_min`; returns the number of ticks run."""
        limit = self.max_settle_ticks if max_ticks is None else max_ticks
        ran = 0
        while ran < limit and self.nodes and not self.settled:
            self.step()
            ran += 1
        return ran

    def _integrate(self, pos: np.ndarray, vel: np.ndarray, pinned: np.ndarray, dt: float) -> None:
        free = np.isnan(pinned)
        vel[free] *= 1 - self.velocity_decay
        pos[free] += vel[free] * dt
        pos[~free] = pinned[~free]
        vel[~free] = 0.0

    def _jiggle(self) -> float:
        return (self._random.random() - 0.5) * 1e-6

    def _separate_coincident(self, dx: np.ndarray, dy: np.ndarray) -> None:
        same = (dx == 0) & (dy == 0)
        np.fill_diagonal(same, False)
        for i, j in np.argwhere(same):
            if i < j:
                jx, jy = self._jiggle(), self._jiggle()
                dx[i, j], dy[i, j] = jx, jy
                dx[j, i], dy[j, i] = -jx, -jy

    # ------------------------------
    # Forces
    # ------------------------------
    def _apply_links(self, x, y, vx, vy) -> None:
        for s, t, strength, bias in self._link_terms:
            if s == t:
                continue
            dx = (x[t] + vx[t] - x[s] - vx[s]) or self._jiggle()
            dy = (y[t] + vy[t] - y[s] - vy[s]) or self._jiggle()
            length = math.sqrt(dx * dx + dy * dy)
            length = (length - self.link_distance) / length * self.alpha * strength
            dx *= length
            dy *= length
            vx[t] -= dx * bias
            vy[t] -= dy * bias
            vx[s] += dx * (1 - bias)
            vy[s] += dy * (1 - bias)

    def _apply_charge(self, x, y, vx, vy) -> None:
        if len(x) < 2:
            return
        dx = x[None, :] - x[:, None]
        dy = y[None, :] - y[:, None]
        self._separate_coincident(dx, dy)
        dist2 = dx * dx + dy * dy
        dist2 = np.where(dist2 < 1.0, np.sqrt(dist2), dist2)
        np.fill_diagonal(dist2, np.inf)
        weight = self.charge_strength * self.alpha / dist2
        vx += (dx * weight).sum(axis=1)
        vy += (dy * weight).sum(axis=1)

    def _apply_center(self, x, y) -> None:
        cx, cy = self.width / 2, self.height / 2
        x -= (x.mean() - cx) * self.center_strength
        y -= (y.mean() - cy) * self.center_strength

    def _apply_collision(self, x, y, vx, vy) -> None:
        if len(x) < 2:
            return
        px = x + vx
        py = y + vy
        dx = px[:, None] - px[None, :]
        dy = py[:, None] - py[None, :]
        self._separate_coincident(dx, dy)
        dist2 = dx * dx + dy * dy
        reach = 2 * self.collision_radius
        overlap = dist2 < reach * reach
        np.fill_diagonal(overlap, False)
        if not overlap.any():
            return
        dist = np.sqrt(np.where(overlap, dist2, 1.0))
        push = np.where(overlap, (reach - dist) / dist * self.collision_strength, 0.0)
        # Equal radii split each correction evenly between the pair.
        vx += 0.5 * (dx * push).sum(axis=1)
        vy += 0.5 * (dy * push).sum(axis=1)

    # ------------------------------
    # Reading positions
    # ------------------------------
    def node(self, node_id: Optional[str]) -> Optional[Node]:
        index = self._index.get(node_id) if node_id is not None else None
        return self.nodes[index] if index is not None else None

    def positions(self) -> Dict[str, Point]:
        return {node.id: node.position for node in self.nodes}

    def link_endpoints(self, link: Edge) -> Tuple[Point, Point]:
        return self.node(link.source).position, self.node(link.target).position

    def link_midpoint(self, link: Edge) -> Point:
        return midpoint(*self.link_endpoints(link))
