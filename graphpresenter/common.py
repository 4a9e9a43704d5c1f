from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple


class ClickTarget(Enum):
    CENTER = "center"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


ALL_DIRECTIONS = (ClickTarget.UP, ClickTarget.DOWN, ClickTarget.LEFT, ClickTarget.RIGHT)


class Free:
    """Pin state of a node the simulator is allowed to move."""

    def __repr__(self):
        return "Free"

    def __eq__(self, other):
        return isinstance(other, Free)

    def __hash__(self):
        return hash(Free)


FREE = Free()


class Pinned(NamedTuple):
    """Pin state of a node held at (x, y)."""
    x: float
    y: float


class GraphNode:
    def __init__(self, uid, icon="", label="", details="", supported_click_targets=(), style_tags=None):
        self.id = uid
        self.icon = icon # hex code point into the icon font
        self.label = label
        self.details = details
        self.supported_click_targets = set(supported_click_targets)
        self.style_tags = list(style_tags or [])

        # Kinematic state, owned by the engine and by drag handling
        self.index = None
        self.x = None
        self.y = None
        self.vx = 0.0
        self.vy = 0.0
        self.pin = FREE

    @property
    def is_pinned(self):
        return isinstance(self.pin, Pinned)

    @property
    def fx(self):
        return self.pin.x if self.is_pinned else None

    @property
    def fy(self):
        return self.pin.y if self.is_pinned else None

    def pin_at(self, x, y):
        self.pin = Pinned(x, y)

    def unpin(self):
        self.pin = FREE

    @property
    def icon_glyph(self):
        # No check that the font actually has the code point
        return chr(int(self.icon, 16)) if self.icon else ""

    def __repr__(self):
        return f"GraphNode({self.id!r}, label={self.label!r})"


class GraphLink:
    """An edge whose endpoints are looked up by id on every access.

    `resolver` maps a node id to the live node (or None when the node is
    gone), typically the `get` of the store's node table.
    """

    def __init__(self, uid, source_id, target_id, resolver, label=None, details=None, style_tags=None):
        self.id = uid
        self.source_id = source_id
        self.target_id = target_id
        self.resolver = resolver
        self.label = label
        self.details = details
        self.style_tags = list(style_tags or [])
        self.index = None

    @property
    def source(self):
        return self.resolver(self.source_id)

    @property
    def target(self):
        return self.resolver(self.target_id)

    @property
    def is_broken(self):
        return self.source is None or self.target is None

    def __repr__(self):
        return f"GraphLink({self.id!r}, {self.source_id!r} -> {self.target_id!r})"


class GraphData(NamedTuple):
    nodes: list
    links: list


@dataclass(frozen=True)
class NodeClickEvent:
    node: GraphNode
    click_target: ClickTarget
    is_double_click: bool


@dataclass(frozen=True)
class LinkClickEvent:
    link: GraphLink
    is_double_click: bool


class Reconciliation(NamedTuple):
    added: list
    retained: list
    removed: list


def reconcile(previous_ids, items):
    """Splits keyed `items` against the ids rendered last time.

    `added` and `retained` follow the order of `items`; `removed` follows
    the order of `previous_ids`.
    """
    current_ids = [item.id for item in items]
    current = set(current_ids)
    previous = set(previous_ids)
    added = [uid for uid in current_ids if uid not in previous]
    retained = [uid for uid in current_ids if uid in previous]
    removed = [uid for uid in previous_ids if uid not in current]
    return Reconciliation(added, retained, removed)
