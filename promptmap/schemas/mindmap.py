"""
PromptMap — Mind Map Schemas
============================
Analysis tree (Topic → Subtopic → Detail) and the rendered graph
(nodes + edges). Wire names are camelCase, attributes are snake_case.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Enums ────────────────────────────────────────────────────────────────────

class PromptType(str, Enum):
    HOW_TO = "how-to"
    FORMULA = "formula"
    COMPARISON = "comparison"
    PROBLEM_SOLUTION = "problem-solution"
    DEFINITION = "definition"
    LIST = "list"
    CAUSE_EFFECT = "cause-effect"
    CONCEPT = "concept"


class Domain(str, Enum):
    """Subject areas. Declaration order is the tie-break order for keyword votes."""
    TECHNOLOGY = "technology"
    SCIENCE = "science"
    MATH = "math"
    BUSINESS = "business"
    EDUCATION = "education"
    HEALTH = "health"
    ARTS = "arts"
    PHILOSOPHY = "philosophy"
    HISTORY = "history"
    SPORTS = "sports"
    GENERAL = "general"


class GenerationMode(str, Enum):
    LOCAL = "local"
    ASSISTED = "assisted"


class NodeKind(str, Enum):
    """Styling variant of a rendered node."""
    MAIN = "main"
    TOPIC = "topic"
    SUBTOPIC = "subtopic"
    DETAIL = "detail"
    FORMULA = "formula"
    DEFINITION = "definition"


# ── Analysis Tree ────────────────────────────────────────────────────────────

class Detail(BaseModel):
    name: str
    relation: str = "includes"
    details: Optional[str] = None


class Subtopic(BaseModel):
    name: str
    relation: str = "related to"
    details: Optional[str] = None
    children: List[Detail] = Field(default_factory=list)


class Topic(BaseModel):
    name: str
    relation: str = "related to"
    details: Optional[str] = None
    subtopics: List[Subtopic] = Field(default_factory=list)


class Analysis(BaseModel):
    """Transient structured result of analysing one prompt."""
    model_config = ConfigDict(populate_by_name=True)

    main_concept: str = Field(..., min_length=1, alias="mainConcept")
    prompt_type: PromptType = Field(PromptType.CONCEPT, alias="promptType")
    topics: List[Topic] = Field(default_factory=list)
    description: Optional[str] = None


# ── Parsed Collaborator Replies ──────────────────────────────────────────────

class ParsedSection(BaseModel):
    """One `Name: Description` line from a collaborator reply."""
    name: str
    description: str


class ParsedList(BaseModel):
    items: List[str] = Field(default_factory=list)


# ── Graph ────────────────────────────────────────────────────────────────────

class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class MindMapNode(BaseModel):
    """A single renderable node. `type` is the renderer's node component."""
    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: str = "custom"
    kind: NodeKind = NodeKind.TOPIC
    label: str
    details: Optional[str] = None
    is_main: bool = Field(False, alias="isMain")
    position: Position = Field(default_factory=Position)


class MindMapEdge(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    source: str
    target: str
    label: str
    type: str = "custom"
    marker_end: str = Field("arrowclosed", alias="markerEnd")


class MindMapData(BaseModel):
    """Full graph returned to the client."""
    nodes: List[MindMapNode] = Field(default_factory=list)
    edges: List[MindMapEdge] = Field(default_factory=list)


# ── Requests / Responses ─────────────────────────────────────────────────────

class MindMapRequest(BaseModel):
    """Request body for mind map generation."""
    prompt: str = Field(..., description="Free-form prompt to turn into a mind map")
    mode: Optional[GenerationMode] = Field(
        None, description="Overrides GENERATION_MODE for this request"
    )


class GenerateContentRequest(BaseModel):
    """Text-generation proxy request. Field names match the browser client."""
    model_config = ConfigDict(populate_by_name=True)

    topic: Optional[str] = None
    main_concept: Optional[str] = Field(None, alias="mainConcept")
    prompt: Optional[str] = None


class GenerateContentResponse(BaseModel):
    content: str


class ErrorResponse(BaseModel):
    """Error envelope returned with every non-2xx response."""
    error: str
    details: Optional[str] = None
    status: Optional[int] = None
