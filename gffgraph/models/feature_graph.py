"""
Feature graph holding the part-of relationships among the features of one axis.

Nodes live in a dictionary keyed by feature id, and every edge is recorded on
both endpoints as an id, so a parent can be referenced before its own record
has been read.
"""

import logging
from typing import Callable, Dict, Iterator, List, Optional, Tuple

from gffgraph.models.genomic import Feature, FeatureNode


class FeatureGraph:
    """A forest of FeatureNodes with bidirectional parent/child edges."""

    def __init__(self):
        self.nodes: Dict[str, FeatureNode] = {}
        self.root_ids: List[str] = []

    def __contains__(self, node_id):
        return node_id in self.nodes

    def __len__(self):
        return len(self.nodes)

    def get(self, node_id: str) -> Optional[FeatureNode]:
        """Look up a node by id."""
        return self.nodes.get(node_id)

    @property
    def roots(self) -> List[FeatureNode]:
        """Top-level nodes, in the order their features were read."""
        return [self.nodes[node_id] for node_id in self.root_ids]

    def children_of(self, node_id: str) -> List[FeatureNode]:
        node = self.nodes.get(node_id)
        if node is None:
            return []
        return [self.nodes[child_id] for child_id in node.child_ids if child_id in self.nodes]

    def parents_of(self, node_id: str) -> List[FeatureNode]:
        node = self.nodes.get(node_id)
        if node is None:
            return []
        return [self.nodes[parent_id] for parent_id in node.parent_ids if parent_id in self.nodes]

    def walk(self, node_id: str) -> Iterator[Tuple[int, FeatureNode]]:
        """
        Depth-first traversal below node_id.

        Yields:
            (depth, node) tuples, starting with (0, node_id's node). A node
            reachable along several paths is visited once.
        """
        if node_id not in self.nodes:
            return
        seen = set()
        stack = [(0, node_id)]
        while stack:
            depth, current_id = stack.pop()
            if current_id in seen:
                continue
            seen.add(current_id)
            node = self.nodes[current_id]
            yield depth, node
            for child_id in reversed(node.child_ids):
                if child_id in self.nodes and child_id not in seen:
                    stack.append((depth + 1, child_id))

    def placeholders(self) -> List[FeatureNode]:
        """Nodes named as a parent whose own record never appeared."""
        return [node for node in self.nodes.values() if node.is_placeholder]

    # Low-level mutators. Callers that may need to undo their work go through GraphEdit.

    def add_node(self, node: FeatureNode) -> None:
        self.nodes[node.id] = node

    def remove_node(self, node_id: str) -> None:
        self.nodes.pop(node_id, None)

    def add_root(self, node_id: str) -> bool:
        if node_id in self.root_ids:
            return False
        self.root_ids.append(node_id)
        return True

    def remove_root(self, node_id: str) -> None:
        if node_id in self.root_ids:
            self.root_ids.remove(node_id)

    def link(self, parent_id: str, child_id: str) -> bool:
        """Add the edge parent -> child on both nodes. Returns False if it already existed."""
        parent = self.nodes[parent_id]
        child = self.nodes[child_id]
        if child_id in parent.child_ids:
            return False
        parent.child_ids.append(child_id)
        child.parent_ids.append(parent_id)
        return True

    def unlink(self, parent_id: str, child_id: str) -> None:
        parent = self.nodes.get(parent_id)
        child = self.nodes.get(child_id)
        if parent is not None and child_id in parent.child_ids:
            parent.child_ids.remove(child_id)
        if child is not None and parent_id in child.parent_ids:
            child.parent_ids.remove(parent_id)


class GraphEdit:
    """
    The graph changes made on behalf of a single feature.

    Every change is recorded with its inverse so that a rejected feature leaves
    the graph exactly as it was before.
    """

    def __init__(self, graph: FeatureGraph):
        self.graph = graph
        self._undo: List[Callable[[], None]] = []

    def create_node(self, node_id: str, feature: Optional[Feature] = None) -> FeatureNode:
        node = FeatureNode(node_id, feature)
        self.graph.add_node(node)
        self._undo.append(lambda: self.graph.remove_node(node_id))
        return node

    def attach(self, node: FeatureNode, feature: Feature) -> bool:
        if not node.attach(feature):
            return False
        self._undo.append(lambda: setattr(node, 'feature', None))
        return True

    def add_root(self, node_id: str) -> None:
        if self.graph.add_root(node_id):
            self._undo.append(lambda: self.graph.remove_root(node_id))

    def link(self, parent_id: str, child_id: str) -> None:
        if self.graph.link(parent_id, child_id):
            self._undo.append(lambda: self.graph.unlink(parent_id, child_id))

    def rollback(self) -> None:
        """Undo every recorded change, newest first."""
        logging.debug(f"Rolling back {len(self._undo)} graph change(s)")
        while self._undo:
            self._undo.pop()()

    def commit(self) -> None:
        self._undo.clear()
