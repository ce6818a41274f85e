"""
PromptMap — Graph Builder
=========================
Analysis tree → MindMapData, radial ring layout, and the force-relaxation
pass that pushes overlapping nodes apart.

Node ids are deterministic: main, topic-{i}, subtopic-{i}-{j},
detail-{i}-{j}-{k}. Edge ids mirror them: edge-main-{i},
edge-subtopic-{i}-{j}, edge-detail-{i}-{j}-{k}.
"""

import logging
import math
from typing import Dict, List, Sequence

from promptmap.schemas.mindmap import (
    Analysis,
    MindMapData,
    MindMapEdge,
    MindMapNode,
    NodeKind,
    Position,
)

logger = logging.getLogger(__name__)

MAIN_ID = "main"

# ── Layout Constants ─────────────────────────────────────────────────────────
MIN_TOPIC_RADIUS = 250.0
BASE_TOPIC_RADIUS = 150.0
RADIUS_PER_TOPIC = 20.0
SUBTOPIC_RING_OFFSET = 180.0
DETAIL_RING_OFFSET = 150.0
SUBTOPIC_FAN = 0.8   # total spread in radians, ±0.4
DETAIL_FAN = 0.4     # ±0.2
SIMPLE_RING_RADIUS = 200.0

# ── Relaxation Constants ─────────────────────────────────────────────────────
RELAX_ITERATIONS = 20
REPULSION_FORCE = 0.5
MAX_RADIUS = 800.0
DEFAULT_MIN_DISTANCE = 50.0

# Topics whose children get a dedicated styling variant.
_CHILD_KINDS = {
    "formula": NodeKind.FORMULA,
    "definition": NodeKind.DEFINITION,
}


# ── Layout ───────────────────────────────────────────────────────────────────

def topic_ring_radius(topic_count: int) -> float:
    return max(MIN_TOPIC_RADIUS, BASE_TOPIC_RADIUS + RADIUS_PER_TOPIC * topic_count)


def fan_angle(parent_angle: float, index: int, count: int, spread: float) -> float:
    """Angle of the index-th of `count` children fanned symmetrically around the parent."""
    return parent_angle + ((index - (count - 1) / 2) * spread) / max(1, count - 1)


def _polar(radius: float, angle: float) -> Position:
    return Position(x=radius * math.cos(angle), y=radius * math.sin(angle))


def radial_layout(analysis: Analysis) -> Dict[str, Position]:
    """Initial position of every node id, before relaxation."""
    positions = {MAIN_ID: Position(x=0.0, y=0.0)}

    topic_count = len(analysis.topics)
    radius = topic_ring_radius(topic_count)
    sub_radius = radius + SUBTOPIC_RING_OFFSET
    detail_radius = sub_radius + DETAIL_RING_OFFSET

    for i, topic in enumerate(analysis.topics):
        angle = (i / topic_count) * 2 * math.pi
        positions[f"topic-{i}"] = _polar(radius, angle)

        sub_count = len(topic.subtopics)
        for j, subtopic in enumerate(topic.subtopics):
            sub_angle = fan_angle(angle, j, sub_count, SUBTOPIC_FAN)
            positions[f"subtopic-{i}-{j}"] = _polar(sub_radius, sub_angle)

            detail_count = len(subtopic.children)
            for k in range(detail_count):
                detail_angle = fan_angle(sub_angle, k, detail_count, DETAIL_FAN)
                positions[f"detail-{i}-{j}-{k}"] = _polar(detail_radius, detail_angle)

    return positions


# ── Relaxation ───────────────────────────────────────────────────────────────

def relax(nodes: Sequence[MindMapNode], min_distance: float = DEFAULT_MIN_DISTANCE,
          iterations: int = RELAX_ITERATIONS, repulsion_force: float = REPULSION_FORCE,
          max_radius: float = MAX_RADIUS) -> None:
    """
    Push apart nodes closer than `min_distance`, mutating positions in place.

    Each node's displacement is applied as soon as it is computed, so later
    nodes in the same pass already see the moved positions of earlier ones.
    The main node never moves. Moved nodes are clamped to `max_radius`.
    """
    for _ in range(iterations):
        for i, node in enumerate(nodes):
            if node.id == MAIN_ID:
                continue

            dx = dy = 0.0
            for j, other in enumerate(nodes):
                if i == j:
                    continue
                delta_x = node.position.x - other.position.x
                delta_y = node.position.y - other.position.y
                distance = math.hypot(delta_x, delta_y)
                if 0 < distance < min_distance:
                    force = repulsion_force * (min_distance - distance) / distance
                    dx += delta_x * force
                    dy += delta_y * force

            node.position.x += dx
            node.position.y += dy

            if math.hypot(node.position.x, node.position.y) > max_radius:
                angle = math.atan2(node.position.y, node.position.x)
                node.position.x = max_radius * math.cos(angle)
                node.position.y = max_radius * math.sin(angle)


# ── Conversion ───────────────────────────────────────────────────────────────

def _edge(edge_id: str, source: str, target: str, label: str) -> MindMapEdge:
    return MindMapEdge(id=edge_id, source=source, target=target, label=label)


def to_graph(analysis: Analysis) -> MindMapData:
    """Flatten the analysis tree into nodes and edges, positioned on radial rings."""
    positions = radial_layout(analysis)
    concept = analysis.main_concept

    nodes: List[MindMapNode] = [MindMapNode(
        id=MAIN_ID,
        kind=NodeKind.MAIN,
        label=concept,
        details=analysis.description
        or f"This mind map explores {concept} in detail, showing key concepts and relationships.",
        is_main=True,
        position=positions[MAIN_ID],
    )]
    edges: List[MindMapEdge] = []

    for i, topic in enumerate(analysis.topics):
        topic_id = f"topic-{i}"
        nodes.append(MindMapNode(
            id=topic_id,
            kind=NodeKind.TOPIC,
            label=topic.name,
            details=topic.details or f"Key aspects of {topic.name} related to {concept}.",
            position=positions[topic_id],
        ))
        edges.append(_edge(f"edge-main-{i}", MAIN_ID, topic_id, topic.relation or "related to"))

        sub_kind = _CHILD_KINDS.get(topic.name.lower(), NodeKind.SUBTOPIC)
        for j, subtopic in enumerate(topic.subtopics):
            sub_id = f"subtopic-{i}-{j}"
            nodes.append(MindMapNode(
                id=sub_id,
                kind=sub_kind,
                label=subtopic.name,
                details=subtopic.details or f"{subtopic.name} is a key aspect of {topic.name}.",
                position=positions[sub_id],
            ))
            edges.append(_edge(f"edge-subtopic-{i}-{j}", topic_id, sub_id, subtopic.relation or "related to"))

            for k, detail in enumerate(subtopic.children):
                detail_id = f"detail-{i}-{j}-{k}"
                relation = detail.relation or "includes"
                nodes.append(MindMapNode(
                    id=detail_id,
                    kind=NodeKind.DETAIL,
                    label=detail.name,
                    details=detail.details or f"{detail.name} - {relation} {subtopic.name}.",
                    position=positions[detail_id],
                ))
                edges.append(_edge(f"edge-detail-{i}-{j}-{k}", sub_id, detail_id, relation))

    logger.info(f"[GRAPH] '{concept}': {len(nodes)} nodes, {len(edges)} edges")
    return MindMapData(nodes=nodes, edges=edges)


def build_simple_mind_map(prompt: str) -> MindMapData:
    """Last-resort graph: one ring of the prompt's distinct longer words around a short label."""
    words = prompt.split()
    unique_words = list(dict.fromkeys(word for word in words if len(word) > 3))[:10]

    nodes = [MindMapNode(
        id=MAIN_ID,
        kind=NodeKind.MAIN,
        label=" ".join(words[:3]) + "...",
        details=prompt,
        is_main=True,
    )]
    edges = []
    for i, word in enumerate(unique_words):
        angle = (i / len(unique_words)) * 2 * math.pi
        node_id = f"node-{i}"
        nodes.append(MindMapNode(
            id=node_id,
            kind=NodeKind.TOPIC,
            label=word,
            details=f"Related to {prompt}",
            position=_polar(SIMPLE_RING_RADIUS, angle),
        ))
        edges.append(_edge(f"edge-{i}", MAIN_ID, node_id, "related to"))

    logger.info(f"[GRAPH] Simple fallback map with {len(unique_words)} word nodes")
    return MindMapData(nodes=nodes, edges=edges)
