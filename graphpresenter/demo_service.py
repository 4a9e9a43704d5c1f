import logging

from graphpresenter.common import ALL_DIRECTIONS, ClickTarget, GraphData, GraphLink, GraphNode

logger = logging.getLogger(__name__)

NODE_ICONS = ["f0f3", "f013", "f15c", "f0e0", "f015", "f279", "f1e6", "f12e", "f3ed", "f5bf",
              "f0f2", "f0ce", "f02b", "f7d9", "f007"]
NODE_STYLES = ["fill-info", "fill-success", "fill-warning", "fill-danger"]
LINK_STYLES = ["info", "success", "warning", "danger"]

# Where related nodes appear relative to the clicked one
DIRECTION_OFFSETS = {
    ClickTarget.UP: (0, -50),
    ClickTarget.DOWN: (0, 50),
    ClickTarget.LEFT: (-50, 0),
    ClickTarget.RIGHT: (50, 0),
}


class DemoGraphNode(GraphNode):
    def __init__(self, counter):
        super().__init__(
            str(counter),
            icon=NODE_ICONS[counter % len(NODE_ICONS)],
            label=f"Node {counter}",
            details=f"This is node {counter}.",
            supported_click_targets=ALL_DIRECTIONS,
            style_tags=[NODE_STYLES[counter % len(NODE_STYLES)]],
        )

    def set_default_position(self, width, height):
        self.x = width / 2
        self.y = height / 2

    def set_relative_position(self, node, offset_x, offset_y, width=0, height=0):
        x = node.x if node.x is not None else width / 2
        y = node.y if node.y is not None else height / 2
        self.x = x + offset_x
        self.y = y + offset_y


class DemoGraphLink(GraphLink):
    def __init__(self, counter, source_id, target_id, resolver):
        super().__init__(
            str(counter),
            source_id,
            target_id,
            resolver,
            label=f"Link {counter}",
            details=f"This is link {counter}.",
            style_tags=[LINK_STYLES[counter % len(LINK_STYLES)]],
        )


class DemoGraphService:
    """Owns the demo graph: creates, relates and removes nodes and links.

    Keeps at least one node around and never hands out a link whose
    endpoint has been removed.
    """

    def __init__(self, width=800, height=600):
        self.width = width
        self.height = height
        self.node_counter = 1
        self.link_counter = 1
        self.nodes = {} # id -> DemoGraphNode
        self.links = {} # id -> GraphLink
        self.clear()

    def graph_data(self):
        return GraphData(list(self.nodes.values()), list(self.links.values()))

    def insert_start_node(self):
        node = DemoGraphNode(self.node_counter)
        self.node_counter += 1
        node.set_default_position(self.width, self.height)
        self.nodes[node.id] = node
        return node

    def insert_related_nodes(self, relative_to, offset_x, offset_y, count=3):
        created = []
        for i in range(count):
            node = DemoGraphNode(self.node_counter)
            self.node_counter += 1
            node.set_relative_position(relative_to, offset_x + i * 10, offset_y + i * 10, self.width, self.height)
            self.nodes[node.id] = node

            link = DemoGraphLink(self.link_counter, relative_to.id, node.id, self.nodes.get)
            self.link_counter += 1
            self.links[link.id] = link
            created.append(node)

        logger.info("Inserted %d nodes related to node %s", count, relative_to.id)
        return created

    def expand(self, node, click_target):
        """Inserts related nodes on the side given by a directional click."""
        offset = DIRECTION_OFFSETS.get(click_target)
        if offset is None:
            return []
        return self.insert_related_nodes(node, *offset)

    def remove_node(self, node):
        self.nodes.pop(node.id, None)
        self.remove_broken_links()
        self._ensure_start_node()

    def clear(self, keep_pinned=False):
        if keep_pinned:
            for uid in [uid for uid, node in self.nodes.items() if not node.is_pinned]:
                del self.nodes[uid]
            self.remove_broken_links()
        else:
            self.nodes = {}
            self.links = {}
        self._ensure_start_node()

    def _ensure_start_node(self):
        if not self.nodes:
            self.insert_start_node()

    def remove_broken_links(self):
        broken = [uid for uid, link in self.links.items() if link.is_broken]
        for uid in broken:
            del self.links[uid]
        if broken:
            logger.debug("Removed %d broken links", len(broken))
        return broken

    def import_graph(self, nx_graph, positions=None):
        """Replaces the graph with the nodes and edges of a networkx graph.

        Node attributes `label`, `details` and `icon` are used when present.
        `positions` maps node keys to (x, y) in surface coordinates.
        """
        self.nodes = {}
        self.links = {}
        key_to_id = {}

        for key, data in nx_graph.nodes(data=True):
            node = DemoGraphNode(self.node_counter)
            self.node_counter += 1
            node.label = str(data.get("label", key))
            node.details = str(data.get("details", node.label))
            node.icon = str(data.get("icon", node.icon))
            if positions is not None and key in positions:
                node.x, node.y = (float(v) for v in positions[key])
            self.nodes[node.id] = node
            key_to_id[key] = node.id

        for u, v, data in nx_graph.edges(data=True):
            link = DemoGraphLink(self.link_counter, key_to_id[u], key_to_id[v], self.nodes.get)
            self.link_counter += 1
            if "label" in data:
                link.label = str(data["label"])
            self.links[link.id] = link

        self._ensure_start_node()
        logger.info("Imported graph with %d nodes and %d links", len(self.nodes), len(self.links))
