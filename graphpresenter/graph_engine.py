import logging
import math
import random

logger = logging.getLogger(__name__)

INITIAL_RADIUS = 10
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


def jiggle():
    # Tiny random offset to separate coincident nodes
    return (random.random() - 0.5) * 1e-6


class ManyBodyForce:
    """Repulsion (negative strength) or attraction between every pair of nodes."""

    def __init__(self, strength=-30.0, distance_min=1.0, distance_max=math.inf):
        self.strength = strength
        self.distance_min2 = distance_min * distance_min
        self.distance_max2 = distance_max * distance_max
        self.nodes = []

    def initialize(self, nodes):
        self.nodes = nodes

    def __call__(self, alpha):
        # O(N^2); a quadtree (Barnes-Hut) only pays off for much larger graphs
        for n1 in self.nodes:
            for n2 in self.nodes:
                if n1 is n2:
                    continue

                dx = n2.x - n1.x
                dy = n2.y - n1.y
                if dx == 0:
                    dx = jiggle()
                if dy == 0:
                    dy = jiggle()

                dist_sq = dx*dx + dy*dy
                if dist_sq >= self.distance_max2:
                    continue
                if dist_sq < self.distance_min2:
                    dist_sq = math.sqrt(self.distance_min2 * dist_sq)

                f = self.strength * alpha / dist_sq
                n1.vx += dx * f
                n1.vy += dy * f


class CenterForce:
    """Shifts the whole layout so its mean position moves toward (x, y)."""

    def __init__(self, x=0.0, y=0.0, strength=1.0):
        self.x = x
        self.y = y
        self.strength = strength
        self.nodes = []

    def initialize(self, nodes):
        self.nodes = nodes

    def __call__(self, alpha):
        n = len(self.nodes)
        if not n:
            return

        sx = sum(node.x for node in self.nodes)
        sy = sum(node.y for node in self.nodes)
        sx = (sx / n - self.x) * self.strength
        sy = (sy / n - self.y) * self.strength

        for node in self.nodes:
            node.x -= sx
            node.y -= sy


class LinkForce:
    """Spring pulling linked nodes toward `distance` apart."""

    def __init__(self, distance=30.0, strength=None, iterations=1):
        self.distance = distance
        self.strength = strength # None: 1 / min(degree(source), degree(target))
        self.iterations = iterations
        self._links = []
        self.nodes = []
        self.count = {} # node id -> degree

    def links(self, links=None):
        if links is None:
            return self._links
        self._links = list(links)
        self._count_degrees()
        return self

    def initialize(self, nodes):
        self.nodes = nodes
        self._count_degrees()

    def _count_degrees(self):
        self.count = {}
        for link in self._links:
            self.count[link.source_id] = self.count.get(link.source_id, 0) + 1
            self.count[link.target_id] = self.count.get(link.target_id, 0) + 1

    def _link_strength(self, link):
        if self.strength is not None:
            return self.strength
        return 1 / min(self.count[link.source_id], self.count[link.target_id])

    def __call__(self, alpha):
        for _ in range(self.iterations):
            for link in self._links:
                # Endpoints are resolved live; positions may have moved this tick
                source = link.source
                target = link.target
                if source is None or target is None:
                    continue

                dx = target.x + target.vx - source.x - source.vx or jiggle()
                dy = target.y + target.vy - source.y - source.vy or jiggle()
                dist = math.sqrt(dx*dx + dy*dy)

                f = (dist - self.distance) / dist * alpha * self._link_strength(link)
                dx *= f
                dy *= f

                s_count = self.count[link.source_id]
                bias = s_count / (s_count + self.count[link.target_id])

                target.vx -= dx * bias
                target.vy -= dy * bias
                source.vx += dx * (1 - bias)
                source.vy += dy * (1 - bias)


class CollideForce:
    """Keeps circles of `radius` around each node from overlapping."""

    def __init__(self, radius=1.0, strength=1.0, iterations=1):
        self.radius = radius
        self.strength = strength
        self.iterations = iterations
        self.nodes = []

    def initialize(self, nodes):
        self.nodes = nodes

    def __call__(self, alpha):
        ri = rj = self.radius
        r = ri + rj
        # Every node has the same radius, so velocity changes split evenly
        share = rj * rj / (ri * ri + rj * rj)

        for _ in range(self.iterations):
            for i, n1 in enumerate(self.nodes):
                x1 = n1.x + n1.vx
                y1 = n1.y + n1.vy
                for n2 in self.nodes[i + 1:]:
                    dx = x1 - (n2.x + n2.vx)
                    dy = y1 - (n2.y + n2.vy)
                    dist_sq = dx*dx + dy*dy
                    if dist_sq >= r * r:
                        continue

                    if dx == 0:
                        dx = jiggle()
                        dist_sq += dx * dx
                    if dy == 0:
                        dy = jiggle()
                        dist_sq += dy * dy

                    dist = math.sqrt(dist_sq)
                    f = (r - dist) / dist * self.strength
                    dx *= f
                    dy *= f

                    n1.vx += dx * share
                    n1.vy += dy * share
                    n2.vx -= dx * (1 - share)
                    n2.vy -= dy * (1 - share)


class GraphEngine:
    """Force-directed layout in the style of d3-force.

    Nodes are moved by a set of named forces; `alpha` is the energy left
    in the system and decays toward `alpha_target` every tick. Pinned
    nodes are held at their pin.
    """

    def __init__(self):
        self._nodes = []
        self._forces = {} # name -> force
        self._listeners = []
        self._running = True

        # Physics constants
        self.alpha = 1.0
        self.alpha_min = 0.001
        self.alpha_decay = 1 - math.pow(self.alpha_min, 1 / 300)
        self.alpha_target = 0.0
        self.velocity_decay = 0.6

    def force(self, name, force=None):
        """Returns the force registered as `name`, or registers `force` under it."""
        if force is None:
            return self._forces.get(name)
        force.initialize(self._nodes)
        self._forces[name] = force
        return self

    def nodes(self, nodes=None):
        if nodes is None:
            return self._nodes
        self._nodes = list(nodes)
        self._initialize_nodes()
        for force in self._forces.values():
            force.initialize(self._nodes)
        return self

    def links(self, links):
        """Replaces the links of the "link" force."""
        self._forces["link"].links(links)
        return self

    def _initialize_nodes(self):
        for i, node in enumerate(self._nodes):
            node.index = i
            if node.is_pinned:
                node.x, node.y = node.pin
            if node.x is None or node.y is None:
                # Phyllotaxis arrangement, as d3 does for unplaced nodes
                radius = INITIAL_RADIUS * math.sqrt(0.5 + i)
                angle = i * INITIAL_ANGLE
                node.x = radius * math.cos(angle)
                node.y = radius * math.sin(angle)
            if node.vx is None or node.vy is None:
                node.vx = node.vy = 0.0

    def on_tick(self, callback):
        self._listeners.append(callback)

    def set_alpha_target(self, value):
        self.alpha_target = value
        return self

    def restart(self):
        self._running = True
        return self

    def stop(self):
        self._running = False
        return self

    def is_running(self):
        return self._running

    def step(self, iterations=1):
        """Advances the layout without notifying listeners."""
        for _ in range(iterations):
            self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay

            for force in self._forces.values():
                force(self.alpha)

            # Integration
            for node in self._nodes:
                if node.is_pinned:
                    node.x, node.y = node.pin
                    node.vx = 0.0
                    node.vy = 0.0
                else:
                    node.vx *= self.velocity_decay
                    node.vy *= self.velocity_decay
                    node.x += node.vx
                    node.y += node.vy

    def tick(self):
        """One scheduled step: advance, notify listeners, rest when cooled down."""
        if not self._running:
            return False

        self.step()
        for callback in self._listeners:
            callback()

        if self.alpha < self.alpha_min:
            logger.debug("Layout settled (alpha=%.4f)", self.alpha)
            self._running = False
        return True
