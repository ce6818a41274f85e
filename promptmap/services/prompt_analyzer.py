"""
Prompt classification, domain voting and main-concept extraction.

All tables are ordered: the first matching rule wins, and keyword votes
break ties in favour of the domain declared first.
"""

import logging
import re
from types import MappingProxyType
from typing import Dict, Optional, Tuple

from promptmap.schemas.mindmap import Domain, PromptType
from promptmap.services.text_utils import (
    capitalize_phrase,
    extract_noun_phrases,
    tokenize,
)

logger = logging.getLogger(__name__)

# ── Domain Keywords ──────────────────────────────────────────────────────────

DOMAIN_KEYWORDS = MappingProxyType({
    Domain.TECHNOLOGY: (
        "software", "hardware", "computer", "digital", "internet", "code",
        "programming", "algorithm", "data", "network", "system",
        "application", "technology", "web", "online", "device", "electronic",
        "virtual", "cyber", "tech",
    ),
    Domain.SCIENCE: (
        "science", "scientific", "research", "experiment", "theory",
        "hypothesis", "laboratory", "chemical", "biology", "physics",
        "chemistry", "molecule", "atom", "cell", "organism", "reaction",
        "element", "compound",
    ),
    Domain.MATH: (
        "mathematics", "equation", "formula", "calculation", "algebra",
        "geometry", "calculus", "theorem", "proof", "number", "variable",
        "function", "graph", "coordinate", "value", "solve", "solution",
    ),
    Domain.BUSINESS: (
        "business", "company", "corporation", "market", "finance", "economy",
        "investment", "profit", "loss", "revenue", "customer", "client",
        "product", "service", "management", "strategy", "marketing", "sales",
    ),
    Domain.EDUCATION: (
        "education", "learning", "teaching", "student", "teacher", "school",
        "university", "college", "course", "curriculum", "study",
        "knowledge", "skill", "training", "academic", "classroom", "lecture",
        "lesson",
    ),
    Domain.HEALTH: (
        "health", "medical", "medicine", "disease", "treatment", "therapy",
        "doctor", "patient", "hospital", "clinic", "symptom", "diagnosis",
        "cure", "healthcare", "wellness", "illness", "condition", "syndrome",
    ),
    Domain.ARTS: (
        "art", "music", "literature", "painting", "sculpture", "dance",
        "theater", "film", "creative", "artistic", "culture", "design",
        "performance", "visual", "aesthetic", "composition", "style", "genre",
    ),
    Domain.PHILOSOPHY: (
        "philosophy", "ethics", "logic", "metaphysics", "epistemology",
        "existence", "reality", "knowledge", "truth", "belief", "concept",
        "idea", "thought", "mind", "consciousness", "reason", "rational",
    ),
    Domain.HISTORY: (
        "history", "historical", "past", "ancient", "medieval", "modern",
        "century", "era", "period", "civilization", "culture", "society",
        "event", "war", "revolution", "movement", "empire", "kingdom",
    ),
    Domain.SPORTS: (
        "sport", "game", "competition", "athlete", "team", "player", "coach",
        "tournament", "championship", "match", "race", "score", "win",
        "lose", "play", "training", "fitness", "exercise",
    ),
})

# ── Prompt Patterns (ordered) ────────────────────────────────────────────────

_LIST_NOUNS = r"(?:types|kinds|examples|varieties)\s+of"

PROMPT_PATTERNS = (
    (PromptType.HOW_TO, (
        re.compile(r"how\s+(?:to|do|can|would|should|could)\s+\w+"),
        re.compile(r"steps?\s+(?:to|for|in)\s+\w+"),
        re.compile(r"guide\s+(?:to|for|on)\s+\w+"),
        re.compile(r"process\s+(?:of|for)\s+\w+"),
        re.compile(r"method\s+(?:for|of)\s+\w+"),
        re.compile(r"ways?\s+to\s+\w+"),
        re.compile(r"instructions?\s+(?:for|on|to)\s+\w+"),
    )),
    (PromptType.DEFINITION, (
        # "what are the types of X" and "what is the difference between" belong elsewhere
        re.compile(
            r"what\s+(?:is|are)\s+"
            rf"(?!(?:(?:the|some)\s+)?(?:{_LIST_NOUNS}|differences?\s+between))\w+"
        ),
        re.compile(r"define\s+\w+"),
        re.compile(r"meaning\s+of\s+\w+"),
        re.compile(r"definition\s+of\s+\w+"),
    )),
    (PromptType.CONCEPT, (
        re.compile(r"explain\s+\w+"),
        re.compile(r"describe\s+\w+"),
        re.compile(r"concept\s+of\s+\w+"),
    )),
    (PromptType.FORMULA, (
        re.compile(r"formula\s+(?:for|of)\s+\w+"),
        re.compile(r"equation\s+(?:for|of)\s+\w+"),
        re.compile(r"calculate\s+\w+"),
        re.compile(r"compute\s+\w+"),
        re.compile(r"\w+\s*=\s*[\w+\-*/()]+"),
        re.compile(r"\d+\s*[+\-*/]\s*\d+"),
    )),
    (PromptType.COMPARISON, (
        re.compile(
            r"(?:compare|comparison|versus|vs\.?|differences?\s+between)\s+"
            r"\w+\s+(?:and|to|with|vs\.?)\s+\w+"
        ),
        re.compile(r"\w+\s+(?:versus|vs\.?|or|compared\s+(?:to|with))\s+\w+"),
        re.compile(r"(?:similarities|differences)\s+(?:between|of)\s+\w+\s+(?:and|to|with)\s+\w+"),
        re.compile(
            r"(?:pros|cons|advantages|disadvantages)\s+of\s+\w+\s+"
            r"(?:and|versus|vs\.?|compared\s+to)\s+\w+"
        ),
    )),
    (PromptType.PROBLEM_SOLUTION, (
        re.compile(r"(?:fix|solve|resolve|address|handle|deal\s+with)\s+(?:(?:a|an|the)\s+)?\w+"),
        re.compile(r"(?:solution|approach|remedy|cure|treatment)\s+(?:for|to)\s+\w+"),
        re.compile(r"(?:problem|issue|trouble|difficulty|challenge)\s+(?:with|of|in)\s+\w+"),
        re.compile(r"(?:troubleshoot|debug|repair)\s+(?:(?:a|an|the)\s+)?\w+"),
    )),
    (PromptType.LIST, (
        re.compile(rf"(?:list\s+of|{_LIST_NOUNS})\s+\w+"),
        re.compile(rf"(?:what|which)\s+(?:are|is)\s+(?:(?:the|some)\s+)?{_LIST_NOUNS}\s+\w+"),
    )),
    (PromptType.CAUSE_EFFECT, (
        re.compile(r"(?:causes|effects|impacts|results|consequences|implications)\s+of\s+\w+"),
        re.compile(r"(?:why|how)\s+(?:does|do|is|are)\s+\w+"),
        re.compile(r"(?:what|how)\s+(?:causes|affects|influences|impacts|results\s+in)\s+\w+"),
    )),
)


# ── Domain Voting ────────────────────────────────────────────────────────────

def domain_votes(text: str) -> Dict[Domain, int]:
    """Keyword hit count per domain, in declaration order."""
    words = tokenize(text)
    return {
        domain: sum(1 for word in words if word in keywords)
        for domain, keywords in DOMAIN_KEYWORDS.items()
    }


def _top_domain(votes: Dict[Domain, int]) -> Domain:
    top, best = Domain.GENERAL, 0
    for domain, count in votes.items():
        if count > best:
            top, best = domain, count
    return top


def identify_domain(text: str) -> Domain:
    """Domain with the strictly highest keyword count; GENERAL when nothing matches."""
    return _top_domain(domain_votes(text))


# ── Classification ───────────────────────────────────────────────────────────

def classify(prompt: str) -> PromptType:
    """Map a prompt to its rhetorical type. Never fails; defaults to CONCEPT."""
    lowered = prompt.lower()

    for prompt_type, patterns in PROMPT_PATTERNS:
        for pattern in patterns:
            if pattern.search(lowered):
                logger.debug(f"[CLASSIFIER] '{pattern.pattern}' → {prompt_type.value}")
                return prompt_type

    domain = identify_domain(lowered)
    if domain == Domain.MATH:
        result = PromptType.FORMULA
    elif domain in (Domain.TECHNOLOGY, Domain.BUSINESS):
        result = PromptType.HOW_TO if "how" in lowered else PromptType.CONCEPT
    elif domain == Domain.HEALTH:
        mentions_care = "treat" in lowered or "cure" in lowered
        result = PromptType.PROBLEM_SOLUTION if mentions_care else PromptType.CONCEPT
    else:
        result = PromptType.CONCEPT

    logger.debug(f"[CLASSIFIER] No pattern matched, domain vote {domain.value} → {result.value}")
    return result


# ── Main Concept ─────────────────────────────────────────────────────────────

_CONCEPT_CAPTURES = MappingProxyType({
    PromptType.HOW_TO: (
        re.compile(r"how\s+to\s+(.+)", re.I),
    ),
    PromptType.CONCEPT: (
        re.compile(r"(?:explain|describe)\s+(?:(?:the|a|an)\s+)?(?:concept\s+of\s+)?(.+)", re.I),
        re.compile(r"concept\s+of\s+(.+)", re.I),
    ),
    PromptType.FORMULA: (
        re.compile(r"(?:formula|equation)\s+(?:for|of)\s+(.+)", re.I),
        re.compile(r"calculate\s+(.+)", re.I),
    ),
    PromptType.DEFINITION: (
        re.compile(r"what\s+(?:is|are)\s+(?:(?:a|an)\s+)?(.+)", re.I),
        re.compile(r"define\s+(?:(?:a|an)\s+)?(.+)", re.I),
        re.compile(r"meaning\s+of\s+(.+)", re.I),
        re.compile(r"definition\s+of\s+(.+)", re.I),
    ),
})

_COMPARISON_CAPTURES = (
    re.compile(r"differences?\s+between\s+(.+?)\s+and\s+(.+)", re.I),
    re.compile(r"compare\s+(.+?)\s+(?:and|with|to)\s+(.+)", re.I),
    re.compile(r"(.+?)\s+(?:vs\.?|versus)\s+(.+)", re.I),
)

_EQUATION = re.compile(r"([A-Za-z]+\s*=\s*[A-Za-z0-9\s+\-*/^()]+)")
_TITLE_CASE = re.compile(
    r"^(?:(?i:what\s+(?:is|are)|how\s+to|define|explain|describe)\s+)?(?:(?i:the|a|an)\s+)?"
    r"([A-Z][a-z]+(?:\s+[a-zA-Z]\w+){0,4})"
)
_TRAILING_PUNCTUATION = " \t\n?!.,;:"


def _clean(fragment: str) -> str:
    return fragment.strip().strip(_TRAILING_PUNCTUATION)


def _type_specific_concept(prompt: str, prompt_type: PromptType) -> Optional[str]:
    if prompt_type == PromptType.COMPARISON:
        for pattern in _COMPARISON_CAPTURES:
            match = pattern.search(prompt)
            if match:
                left, right = _clean(match.group(1)), _clean(match.group(2))
                if left and right:
                    return f"{capitalize_phrase(left)} vs {capitalize_phrase(right)}"
        return None

    for pattern in _CONCEPT_CAPTURES.get(prompt_type, ()):
        match = pattern.search(prompt)
        if match and _clean(match.group(1)):
            return capitalize_phrase(_clean(match.group(1)))

    if prompt_type == PromptType.FORMULA:
        # Equations keep their symbol casing: "F = m * a", not "F = M * A".
        match = _EQUATION.search(prompt)
        if match:
            return match.group(1).strip()
    return None


def extract_main_concept(prompt: str, prompt_type: PromptType) -> str:
    """
    Derive the phrase the mind map is centred on.

    Type-specific captures run first, then a title-case phrase at the start
    of the prompt, then the first noun phrase, then the first five words.
    """
    text = prompt.strip()

    concept = _type_specific_concept(text, prompt_type)
    if concept:
        return concept

    match = _TITLE_CASE.search(text)
    if match and _clean(match.group(1)):
        return capitalize_phrase(_clean(match.group(1)))

    phrases = extract_noun_phrases(text)
    if phrases:
        return capitalize_phrase(phrases[0])

    return capitalize_phrase(" ".join(text.split()[:5]))


# ── Comparison Items ─────────────────────────────────────────────────────────

_ITEM_CAPTURES = (
    re.compile(r"(\S+)\s+(?:vs\.?|versus)\s+([^\s.,]+)"),
    re.compile(r"differences?\s+between\s+(\S+)\s+and\s+([^\s.,]+)", re.I),
    re.compile(r"compare\s+(\S+)\s+and\s+([^\s.,]+)", re.I),
)


def extract_comparison_items(text: str) -> Tuple[str, str]:
    """The two single-word sides of a comparison, or generic placeholders."""
    for pattern in _ITEM_CAPTURES:
        match = pattern.search(text)
        if match:
            left, right = _clean(match.group(1)), _clean(match.group(2))
            if left and right:
                return capitalize_phrase(left), capitalize_phrase(right)
    return "Item 1", "Item 2"
