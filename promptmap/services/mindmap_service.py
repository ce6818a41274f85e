"""
PromptMap — Mind Map Service
============================
Orchestrates the pipeline for one request:

  prompt → (structured collaborator reply | local analysis) → Analysis
         → to_graph (radial layout) → relax → MindMapData

Only EmptyInputError escapes. Collaborator failures fall back to the local
analysis, and a prompt with no extractable concept gets the simple word ring.
"""

import logging
from typing import Optional

from promptmap.core.config import settings
from promptmap.core.errors import (
    CollaboratorUnavailable,
    ConceptExtractionFailure,
    EmptyInputError,
    MalformedCollaboratorReply,
)
from promptmap.schemas.mindmap import Analysis, GenerationMode, MindMapData
from promptmap.services.ai_service import HybridTextGenerator, TextGenerator, provider_configured
from promptmap.services.graph_builder import build_simple_mind_map, relax, to_graph
from promptmap.services.prompt_analyzer import classify
from promptmap.services.reply_parser import STRUCTURED_MINDMAP_PROMPT, build_structured_analysis
from promptmap.services.structure_generator import StructureGenerator

logger = logging.getLogger(__name__)


def resolve_mode(mode: Optional[GenerationMode]) -> GenerationMode:
    return mode or GenerationMode(settings.GENERATION_MODE)


def default_collaborator(mode: GenerationMode) -> Optional[TextGenerator]:
    """The hybrid provider client when assisted mode can actually reach one."""
    if mode != GenerationMode.ASSISTED:
        return None
    if not provider_configured():
        logger.warning("[MINDMAP] Assisted mode requested but no provider key is set, running locally")
        return None
    return HybridTextGenerator()


async def _structured_analysis(text: str, collaborator: TextGenerator) -> Optional[Analysis]:
    try:
        reply = await collaborator.generate(STRUCTURED_MINDMAP_PROMPT.format(prompt=text))
        return build_structured_analysis(reply, text, classify(text))
    except (CollaboratorUnavailable, MalformedCollaboratorReply) as e:
        logger.warning(f"[MINDMAP] Structured reply unusable, falling back to local analysis: {e}")
        return None


async def analyze(prompt: Optional[str], mode: Optional[GenerationMode] = None,
                  collaborator: Optional[TextGenerator] = None) -> Analysis:
    """Analysis tree for a prompt, without the graph conversion."""
    mode = resolve_mode(mode)
    if collaborator is None:
        collaborator = default_collaborator(mode)
    return await StructureGenerator(mode, collaborator).analyze_prompt(prompt)


async def generate_mind_map(
    prompt: Optional[str],
    mode: Optional[GenerationMode] = None,
    collaborator: Optional[TextGenerator] = None,
    min_distance: Optional[float] = None,
) -> MindMapData:
    text = (prompt or "").strip()
    if not text:
        raise EmptyInputError("Prompt cannot be empty")

    mode = resolve_mode(mode)
    if collaborator is None:
        collaborator = default_collaborator(mode)
    assisted = mode == GenerationMode.ASSISTED and collaborator is not None

    analysis = await _structured_analysis(text, collaborator) if assisted else None
    if analysis is None:
        try:
            analysis = await StructureGenerator(mode, collaborator).analyze_prompt(text)
        except ConceptExtractionFailure as e:
            logger.warning(f"[MINDMAP] {e}. Using simple mind map")
            return build_simple_mind_map(text)

    data = to_graph(analysis)
    relax(data.nodes, settings.MIN_NODE_DISTANCE if min_distance is None else min_distance)
    logger.info(f"[MINDMAP] ✓ '{analysis.main_concept}' ({analysis.prompt_type.value}) — "
                f"{len(data.nodes)} nodes, {len(data.edges)} edges")
    return data
