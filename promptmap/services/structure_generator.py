"""
PromptMap — Structure Generator
===============================
Single entry point that turns a prompt into an Analysis tree.

  • LOCAL mode     — regex extraction + canned fallbacks only
  • ASSISTED mode  — concept prompts request prose per slot from the
                     collaborator, one awaited call at a time; any slot
                     that fails or cannot be parsed uses canned content
"""

import logging
from typing import Callable, List, Optional, TypeVar

from promptmap.core.errors import (
    CollaboratorUnavailable,
    ConceptExtractionFailure,
    EmptyInputError,
    MalformedCollaboratorReply,
)
from promptmap.schemas.mindmap import (
    Analysis,
    Detail,
    GenerationMode,
    ParsedList,
    ParsedSection,
    PromptType,
    Subtopic,
    Topic,
)
from promptmap.services import canned_content as canned
from promptmap.services.ai_service import TextGenerator
from promptmap.services.prompt_analyzer import classify, extract_main_concept, identify_domain
from promptmap.services.reply_parser import parse_list_items, parse_named_items, parse_pros_cons
from promptmap.services.text_utils import split_sentences
from promptmap.services.topic_builders import generate_topics

logger = logging.getLogger(__name__)

T = TypeVar("T")

# ── Slot Prompts ─────────────────────────────────────────────────────────────
DEFINITION_PROMPT = 'Provide a concise definition of "{concept}" in 1-2 sentences.'
CORE_PROMPT = 'Explain the fundamental essence of "{concept}" in 1-2 sentences.'
COMPONENTS_PROMPT = 'List 3 key components or elements of "{concept}" with a brief description for each.'
EXAMPLES_PROMPT = 'List 3 concrete examples of "{concept}".'
APPLICATIONS_PROMPT = 'List 3 practical applications or uses of "{concept}" with a brief description for each.'
PROS_CONS_PROMPT = 'List 3 advantages and 3 limitations of "{concept}".'


def _require_text(reply: Optional[str]) -> str:
    text = " ".join((reply or "").split())
    if not text:
        raise MalformedCollaboratorReply("Reply contained no text")
    return text


class StructureGenerator:
    """Builds the Topic tree for a prompt, locally or with a collaborator's help."""

    def __init__(self, mode: GenerationMode = GenerationMode.LOCAL,
                 collaborator: Optional[TextGenerator] = None):
        self.mode = mode
        self.collaborator = collaborator

    @property
    def assisted(self) -> bool:
        return self.mode == GenerationMode.ASSISTED and self.collaborator is not None

    async def analyze_prompt(self, prompt: Optional[str]) -> Analysis:
        """Classify the prompt, pick its main concept and build its topics."""
        text = (prompt or "").strip()
        if not text:
            raise EmptyInputError("Prompt cannot be empty")

        prompt_type = classify(text)
        concept = extract_main_concept(text, prompt_type)
        if not concept or not concept.strip():
            raise ConceptExtractionFailure(f"Could not extract main concept from prompt: {text[:80]}")
        logger.info(f"[ANALYZE] type={prompt_type.value}, concept='{concept}', mode={self.mode.value}")

        if self.assisted and prompt_type == PromptType.CONCEPT:
            topics = await self._assisted_concept_topics(text, concept)
        else:
            topics = generate_topics(text, concept, prompt_type, split_sentences(text))

        return Analysis(main_concept=concept.strip(), prompt_type=prompt_type, topics=topics)

    # ── Assisted Concept Builder ─────────────────────────────────────────────

    async def _slot(self, slot: str, prompt: str, parse: Callable[[str], T], fallback: T) -> T:
        """One collaborator request, parsed; canned fallback on any failure."""
        try:
            reply = await self.collaborator.generate(prompt)
            return parse(reply)
        except (CollaboratorUnavailable, MalformedCollaboratorReply) as e:
            logger.warning(f"[ASSISTED] '{slot}' slot using canned content: {e}")
            return fallback

    async def _assisted_concept_topics(self, text: str, concept: str) -> List[Topic]:
        info = canned.concept_info(identify_domain(text), concept)

        definition = await self._slot(
            "definition", DEFINITION_PROMPT.format(concept=concept), _require_text, info["definition"])
        core = await self._slot(
            "core", CORE_PROMPT.format(concept=concept), _require_text, info["core"])
        components = await self._slot(
            "components", COMPONENTS_PROMPT.format(concept=concept),
            lambda reply: parse_named_items(reply, f"A key element of {concept}"),
            [ParsedSection(name=name, description=desc) for name, desc in info["components"]])
        examples = await self._slot(
            "examples", EXAMPLES_PROMPT.format(concept=concept),
            parse_list_items, ParsedList(items=list(info["examples"])))
        applications = await self._slot(
            "applications", APPLICATIONS_PROMPT.format(concept=concept),
            lambda reply: parse_named_items(reply, f"A practical use of {concept}"),
            [ParsedSection(name=name, description=desc) for name, desc in info["applications"]])
        advantages, limitations = await self._slot(
            "pros/cons", PROS_CONS_PROMPT.format(concept=concept),
            parse_pros_cons, (ParsedList(), ParsedList()))

        advantage_items = advantages.items or list(info["advantages"])
        limitation_items = limitations.items or list(info["limitations"])

        return [
            Topic(name="Definition", relation="means", details=f"{concept} refers to {definition}", subtopics=[
                Subtopic(name="Core Concept", relation="essentially", details=core),
            ]),
            Topic(name="Components", relation="consists of",
                  details=f"The key elements that make up {concept}", subtopics=[
                      Subtopic(name=c.name, relation="part of", details=c.description) for c in components
                  ]),
            Topic(name="Examples", relation="such as", details=f"Real-world instances of {concept}", subtopics=[
                Subtopic(name=example, relation="illustrates",
                         details=f"{example} demonstrates key aspects of {concept}")
                for example in examples.items
            ]),
            Topic(name="Applications", relation="used for",
                  details=f"Practical uses and implementations of {concept}", subtopics=[
                      Subtopic(name=a.name, relation="applied in", details=a.description) for a in applications
                  ]),
            Topic(name="Pros & Cons", relation="evaluated by", details=f"Benefits and drawbacks of {concept}",
                  subtopics=[
                      Subtopic(
                          name="Advantages", relation="benefits include", details=f"Key benefits of {concept}",
                          children=[
                              Detail(name=adv, relation="provides",
                                     details=f"{adv} is a significant advantage of {concept}")
                              for adv in advantage_items
                          ],
                      ),
                      Subtopic(
                          name="Limitations", relation="drawbacks include",
                          details=f"Important constraints and challenges of {concept}",
                          children=[
                              Detail(name=lim, relation="limited by",
                                     details=f"{lim} represents a notable limitation of {concept}")
                              for lim in limitation_items
                          ],
                      ),
                  ]),
        ]
