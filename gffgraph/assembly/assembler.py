"""
Builds the part-of hierarchy of the features on one axis of a GFF3 file.

Usage is two passes over the same source: discover_axes() finds the landmark
records, then build_tree(axis_id) assembles the features aligned to one of them.
"""

import time
import logging
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from gffgraph.models.genomic import Feature, FeatureNode
from gffgraph.models.feature_graph import FeatureGraph, GraphEdit
from gffgraph.parsers.gff_parser import GFF3Reader, Source

REPEAT_REGION_TYPE = "repeat_region"
SYNTHETIC_ID_PREFIX = "Unknown_Feature_"


@dataclass
class Placement:
    """Outcome of adding one feature to the graph."""
    accepted: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "Placement":
        return cls(True)

    @classmethod
    def rejected(cls, reason: str) -> "Placement":
        return cls(False, reason)


class _BuildState:
    """Everything one build_tree() call accumulates. Never shared between builds."""

    def __init__(self):
        self.graph = FeatureGraph()
        self.seen_ids: Set[str] = set()
        self.seen_identities: Set[Tuple] = set()
        self.next_unknown_id = 1
        self.warnings: List[str] = []

    def generate_id(self) -> str:
        feature_id = f"{SYNTHETIC_ID_PREFIX}{self.next_unknown_id}"
        self.next_unknown_id += 1
        return feature_id


def has_id(feature: Feature) -> bool:
    """True unless the feature's ID is missing, empty or only whitespace."""
    return bool(feature.id and feature.id.strip())


def is_axis(feature: Feature, existing_landmark_ids) -> bool:
    """
    Decide whether a feature defines its own landmark.

    Axes have an ID equal to their landmark ID, or no ID at all (repeat regions
    excepted). Only the first such record per landmark counts; later ones are
    taken to be alignments onto it.
    """
    axis = feature.id == feature.landmark_id
    if not has_id(feature):
        if feature.type.lower() != REPEAT_REGION_TYPE:
            axis = True
    return axis and feature.landmark_id not in existing_landmark_ids


class GFF3Assembler:
    """Reads a GFF3 source and builds feature graphs from it, one axis at a time."""

    def __init__(self, source: Source, multi_parent_acceptable: bool = False):
        self.reader = GFF3Reader(source)
        self.multi_parent_acceptable = multi_parent_acceptable
        self.graph: Optional[FeatureGraph] = None
        self.warnings: List[str] = []

    def configure(self, multi_parent_acceptable: bool) -> None:
        """Set whether a feature may name more than one Parent."""
        self.multi_parent_acceptable = multi_parent_acceptable

    def discover_axes(self) -> List[Feature]:
        """
        Scan the whole source for axis features.

        Returns:
            The axis features, in file order. Data-quality warnings from the scan
            are left in self.warnings.
        """
        start_time = time.time()
        axes = []
        landmark_ids = set()
        self.reader.rewind()
        try:
            for feature in self.reader:
                if is_axis(feature, landmark_ids):
                    landmark_ids.add(feature.landmark_id)
                    axes.append(feature)
        finally:
            self.warnings = list(self.reader.warnings)
            self.reader.close()

        elapsed = time.time() - start_time
        logging.info(f"Found {len(axes)} axes in {self.reader.source_name} in {elapsed:.2f}s")
        return axes

    def build_tree(self, axis_id: str) -> Tuple[List[FeatureNode], List[str]]:
        """
        Assemble the features whose landmark is axis_id.

        Features that cannot be placed (duplicate id, more than one parent when
        that is not allowed) are dropped, leaving the graph as it was before them,
        and the reason is reported among the warnings.

        Returns:
            Tuple of (root nodes, warnings). The full graph stays available as
            self.graph, and get_node() looks nodes up by id.

            A rejected feature that had filled a placeholder left by one of its
            children does not remove that node: the placeholder stays in the
            index, empty again, with the children still linked to it.

        Raises:
            GFF3FormatError: On a structurally broken line
            GFF3SourceError: If the source cannot be read
        """
        start_time = time.time()
        state = _BuildState()
        self.graph = state.graph
        self.reader.rewind()
        try:
            for feature in self.reader:
                if feature.landmark_id != axis_id:
                    continue
                placement = self._place_feature(feature, state)
                if not placement.accepted:
                    logging.warning(placement.reason)
                    state.warnings.append(placement.reason)
        finally:
            reader_warnings = list(self.reader.warnings)
            self.reader.close()

        self.warnings = reader_warnings + state.warnings
        elapsed = time.time() - start_time
        logging.info(f"Built tree for axis {axis_id} in {elapsed:.2f}s: {len(state.graph)} nodes, "
                     f"{len(state.graph.root_ids)} top-level features, {len(state.warnings)} rejected")
        return state.graph.roots, list(self.warnings)

    def get_node(self, node_id: str) -> Optional[FeatureNode]:
        """Look up a node of the last build by id."""
        if self.graph is None:
            return None
        return self.graph.get(node_id)

    def _place_feature(self, feature: Feature, state: _BuildState) -> Placement:
        """Give the feature a unique id and link it into the graph, or undo everything."""
        placement = self._resolve_id(feature, state)
        if not placement.accepted:
            return placement

        edit = GraphEdit(state.graph)
        placement = self._node_for_feature(feature, state, edit)
        if placement.accepted:
            placement = self._make_associations(feature, state, edit)

        if placement.accepted:
            edit.commit()
            state.seen_ids.add(feature.id)
            state.seen_identities.add(feature.identity)
        else:
            edit.rollback()
        return placement

    def _resolve_id(self, feature: Feature, state: _BuildState) -> Placement:
        """Make sure the feature has an id that no earlier feature of this build used."""
        if not has_id(feature):
            feature.id = state.generate_id()
        elif feature.identity in state.seen_identities:
            return Placement.rejected(
                f"ID {feature.id} not unique: line {feature.line_num} repeats {feature.id} at "
                f"{feature.start}..{feature.end}. Dropping data for ID {feature.id}")

        if feature.id in state.seen_ids:
            feature.id = f"{feature.id}:{feature.start}:{feature.end}"
        return Placement.ok()

    def _node_for_feature(self, feature: Feature, state: _BuildState, edit: GraphEdit) -> Placement:
        """Attach the feature to the placeholder a child created for it, or create its node."""
        node = state.graph.get(feature.id)
        if node is None:
            edit.create_node(feature.id, feature)
        elif not edit.attach(node, feature):
            return Placement.rejected(f"ID {feature.id} not unique. Dropping data for ID {feature.id}")
        return Placement.ok()

    def _make_associations(self, feature: Feature, state: _BuildState, edit: GraphEdit) -> Placement:
        """Link the feature's node to its parents, or make it a top-level feature."""
        parent_ids = [parent_id for parent_id in dict.fromkeys(feature.parents) if parent_id]
        if not parent_ids:
            edit.add_root(feature.id)
            return Placement.ok()

        if len(parent_ids) > 1 and not self.multi_parent_acceptable:
            return Placement.rejected(
                f"Found multiple parent IDs ({', '.join(parent_ids)}) for {feature.id} "
                f"and that has been set unacceptable.")

        for parent_id in parent_ids:
            if parent_id not in state.graph:
                edit.create_node(parent_id)
            edit.link(parent_id, feature.id)
        return Placement.ok()


def discover_axes(source: Source, warnings: Optional[List[str]] = None) -> List[Feature]:
    """
    Return the axis features of a GFF3 source.

    Data-quality warnings raised during the scan are appended to warnings when
    a list is given; GFF3Assembler.discover_axes leaves them in its warnings
    attribute instead.
    """
    builder = GFF3Assembler(source)
    axes = builder.discover_axes()
    if warnings is not None:
        warnings.extend(builder.warnings)
    return axes


def build_tree(source: Source, axis_id: str,
               multi_parent_acceptable: bool = False) -> Tuple[List[FeatureNode], List[str]]:
    """Assemble the feature forest of one axis. Returns (root nodes, warnings)."""
    return GFF3Assembler(source, multi_parent_acceptable).build_tree(axis_id)
