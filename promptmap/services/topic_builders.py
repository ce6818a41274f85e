"""
PromptMap — Local Topic Builders
================================
One builder per PromptType. Each builder runs a fixed pipeline of named
topic slots; every slot extracts from the prompt's sentences first and
tops up with canned content when fewer than two items were found.
"""

import logging
import math
import re
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from promptmap.schemas.mindmap import Detail, Domain, PromptType, Subtopic, Topic
from promptmap.services import canned_content as canned
from promptmap.services.prompt_analyzer import extract_comparison_items, identify_domain
from promptmap.services.text_utils import (
    capitalize_phrase,
    extract_keywords,
    extract_noun_phrases,
    split_sentences,
    truncate_item,
)

logger = logging.getLogger(__name__)

MIN_EXTRACTED = 2
DEFAULT_CAP = 3


# ── Shared Slot Helpers ──────────────────────────────────────────────────────

def collect_matching(sentences: Iterable[str], cues: Sequence[str]) -> List[str]:
    """Sentences mentioning any cue, in order."""
    return [s for s in sentences if any(cue in s.lower() for cue in cues)]


def with_fallback(found: Sequence[str], fallback: Sequence[str], minimum: int = MIN_EXTRACTED) -> List[str]:
    """Append canned items when extraction came up short."""
    items = list(found)
    if len(items) < minimum:
        items.extend(fallback)
    return items


def finalize_items(items: Sequence[str], cap: int = DEFAULT_CAP) -> List[str]:
    return [truncate_item(item) for item in items[:cap]]


def sentence_slot(sentences: Sequence[str], cues: Sequence[str], fallback: Sequence[str],
                  cap: int = DEFAULT_CAP) -> List[str]:
    """Cue-matching sentences, topped up, capped and shortened."""
    return finalize_items(with_fallback(collect_matching(sentences, cues), fallback), cap)


def phrase_slot(found: Sequence[str], fallback: Sequence[str], cap: int = DEFAULT_CAP) -> List[str]:
    """Deduplicated, capitalized short phrases."""
    items = list(dict.fromkeys(with_fallback(found, fallback)))
    return [capitalize_phrase(item) for item in items[:cap]]


def _phrases_from(sentences: Iterable[str]) -> List[str]:
    phrases: List[str] = []
    for sentence in sentences:
        phrases.extend(extract_noun_phrases(sentence))
    return phrases


def _canned_subtopics(rows) -> List[Subtopic]:
    return [
        Subtopic(
            name=name,
            relation=relation,
            children=[Detail(name=d_name, relation=d_relation) for d_name, d_relation in details],
        )
        for name, relation, details in rows
    ]


def _subtopics(names: Iterable[str], relation: str, details: Sequence[Tuple[str, str]] = ()) -> List[Subtopic]:
    return [
        Subtopic(
            name=name,
            relation=relation,
            children=[Detail(name=d_name, relation=d_relation) for d_name, d_relation in details],
        )
        for name in names
    ]


def _for_domain(table, domain: Domain):
    return table.get(domain, table[Domain.GENERAL])


def extract_definition(concept: str, sentences: Sequence[str]) -> str:
    """The sentence that defines the concept, else the first one mentioning it."""
    lowered = concept.lower()
    cues = (
        f"{lowered} is", f"{lowered} are", f"{lowered} refers to", f"{lowered} means",
        f"definition of {lowered}", f"{lowered} can be defined as",
    )
    for sentence in sentences:
        if any(cue in sentence.lower() for cue in cues):
            return sentence
    for sentence in sentences:
        if lowered in sentence.lower():
            return sentence
    return f"{concept} is a concept that encompasses various aspects and applications."


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# HOW-TO
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_NUMBERED_LINE = re.compile(r"^\d+\.\s")
_BULLET_LINE = re.compile(r"^[•*-]\s")
_STEP_INDICATORS = (
    "first", "initially", "begin by", "start", "then", "next", "after",
    "subsequently", "finally", "lastly",
)
MAX_STEPS = 6


def identify_task_type(text: str) -> str:
    lowered = text.lower()
    for task_type, cues in canned.TASK_CUES:
        if any(cue in lowered for cue in cues):
            return task_type
    return canned.GENERAL


def extract_explicit_steps(text: str) -> List[str]:
    """Numbered lines, else bulleted lines, else sentences introduced by sequence words."""
    lines = [line.strip() for line in text.splitlines()]

    numbered = [_NUMBERED_LINE.sub("", line, count=1).strip() for line in lines if _NUMBERED_LINE.match(line)]
    if len(numbered) >= MIN_EXTRACTED:
        return numbered

    bulleted = [_BULLET_LINE.sub("", line, count=1).strip() for line in lines if _BULLET_LINE.match(line)]
    if len(bulleted) >= MIN_EXTRACTED:
        return bulleted

    steps: List[str] = []
    for sentence in split_sentences(text):
        for indicator in _STEP_INDICATORS:
            if indicator not in sentence.lower():
                continue
            parts = re.split(rf"\b{re.escape(indicator)}\b", sentence, maxsplit=1, flags=re.I)
            if len(parts) > 1 and parts[1].strip(" ,"):
                steps.append(parts[1].strip(" ,"))
                break
    return steps if len(steps) >= MIN_EXTRACTED else []


def step_details(step: str, index: int) -> List[Detail]:
    lowered = step.lower()
    if "prepare" in lowered or "gather" in lowered or index == 0:
        pairs = (("Required materials", "needs"), ("Preparation time", "takes approximately"))
    elif any(cue in lowered for cue in ("mix", "combine", "assemble")):
        pairs = (("Proper technique", "requires"), ("Common mistakes", "avoid"))
    elif any(cue in lowered for cue in ("cook", "bake", "heat")):
        pairs = (("Temperature setting", "at"), ("Timing guidelines", "for"))
    elif any(cue in lowered for cue in ("check", "test", "verify")):
        pairs = (("Success indicators", "look for"), ("Troubleshooting", "if needed"))
    elif index == 1:
        pairs = (("Key technique", "using"), ("Important considerations", "with"))
    elif index == 2:
        pairs = (("Progress indicators", "looking for"), ("Common challenges", "overcoming"))
    else:
        pairs = (("Finishing touches", "adding"), ("Quality check", "performing"))
    return [Detail(name=name, relation=relation) for name, relation in pairs]


def _step_relation(index: int, count: int) -> str:
    if index == 0:
        return "start with"
    if index == count - 1:
        return "finish with"
    return "then"


def build_how_to(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    task_type = identify_task_type(text)
    steps = finalize_items(extract_explicit_steps(text), MAX_STEPS)

    if steps:
        first = Topic(name="Steps", relation="requires", subtopics=[
            Subtopic(
                name=f"Step {i + 1}: {step}",
                relation=_step_relation(i, len(steps)),
                children=step_details(step, i),
            )
            for i, step in enumerate(steps)
        ])
    else:
        rows = canned.LOGICAL_STEPS.get(task_type, canned.LOGICAL_STEPS[canned.GENERAL])
        first = Topic(name="Process", relation="follows", subtopics=_canned_subtopics(rows))

    return [
        first,
        Topic(name="Requirements", relation="needs", subtopics=_canned_subtopics(
            canned.REQUIREMENTS.get(task_type, canned.REQUIREMENTS[canned.GENERAL]))),
        Topic(name="Best Practices", relation="considers", subtopics=_canned_subtopics(
            canned.BEST_PRACTICES.get(task_type, canned.BEST_PRACTICES[canned.GENERAL]))),
        Topic(name="Challenges", relation="may face", subtopics=_canned_subtopics(
            canned.CHALLENGES.get(task_type, canned.CHALLENGES[canned.GENERAL]))),
        Topic(name="Benefits", relation="results in", subtopics=_canned_subtopics(canned.BENEFITS)),
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONCEPT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_EXAMPLE_CUES = ("for example", "such as", "like", "instance", "e.g.", "examples include")
_APPLICATION_CUES = ("used for", "applied in", "application", "utilized in", "implemented in")
_ADVANTAGE_CUES = ("advantage", "benefit", "strength", "positive", "improve", "enhance")
_LIMITATION_CUES = (
    "limitation", "drawback", "challenge", "weakness", "disadvantage",
    "problem", "issue", "constraint",
)


def extract_components(text: str, concept: str, sentences: Sequence[str]) -> List[str]:
    lowered = concept.lower()
    cues = (
        f"{lowered} consists of", f"{lowered} comprises", f"{lowered} contains",
        f"{lowered} includes", f"components of {lowered}", f"elements of {lowered}",
        f"parts of {lowered}",
    )
    components = _phrases_from(collect_matching(sentences, cues))

    if len(components) < MIN_EXTRACTED:
        terms = extract_keywords(text, 15) + extract_noun_phrases(text)
        relevant = [t for t in terms if lowered not in t.lower() and len(t) > 3]
        components.extend(relevant[:DEFAULT_CAP])

    return phrase_slot(components, canned.COMPONENTS)


def concept_definition_topic(concept: str, sentences: Sequence[str]) -> Topic:
    definition = extract_definition(concept, sentences)
    return Topic(name="Definition", relation="is defined as", subtopics=[
        Subtopic(
            name=truncate_item(definition),
            relation="meaning",
            details=definition,
            children=[
                Detail(name="Core concept", relation="refers to"),
                Detail(name="In simple terms", relation="means"),
            ],
        )
    ])


def build_concept(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    domain = identify_domain(text)
    topics = [concept_definition_topic(concept, sentences)]

    components = extract_components(text, concept, sentences)
    if components:
        topics.append(Topic(name="Components", relation="consists of", subtopics=_subtopics(
            components, "part of",
            ((f"Role in {concept}", "serves as"), ("Key characteristics", "features")),
        )))

    examples = phrase_slot(
        _phrases_from(collect_matching(sentences, _EXAMPLE_CUES)),
        _for_domain(canned.EXAMPLES, domain),
    )
    applications = phrase_slot(
        _phrases_from(collect_matching(sentences, _APPLICATION_CUES)),
        _for_domain(canned.APPLICATIONS, domain),
    )

    topics.extend([
        Topic(name="Examples", relation="such as", subtopics=_subtopics(
            examples, "illustrates", (("Key features", "demonstrates"), ("Application", "used in")))),
        Topic(name="Applications", relation="used for", subtopics=_subtopics(
            applications, "applied in", (("Benefits", "provides"), ("Implementation", "requires")))),
        Topic(name="Advantages", relation="provides", subtopics=_subtopics(
            sentence_slot(sentences, _ADVANTAGE_CUES, canned.ADVANTAGES),
            "offers", (("Impact", "results in"),))),
        Topic(name="Limitations", relation="constrained by", subtopics=_subtopics(
            sentence_slot(sentences, _LIMITATION_CUES, canned.LIMITATIONS),
            "faces", (("Workarounds", "can be addressed by"),))),
    ])
    return topics


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# FORMULA
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_EQUATION = re.compile(r"([A-Za-z]+\s*=\s*[A-Za-z0-9\s+\-*/^()]+)")
_EXPRESSION = re.compile(r"([A-Za-z0-9]+\s*[+\-*/]\s*[A-Za-z0-9\s+\-*/^()]+)")
_FORMULA_KEYWORD = re.compile(r"(?:formula|equation|expression)[\s:]+([A-Za-z0-9\s+\-*/^()=]+)", re.I)
_UNITS = re.compile(r"measured in ([a-zA-Z]+)")
_SYMBOL = re.compile(r"[A-Za-z]")

MAX_VARIABLES = 6
MAX_CALCULATION_STEPS = 4
MAX_DESCRIPTION_LENGTH = 60

_CALCULATION_CUES = ("step", "first", "then", "next", "finally", "calculate", "compute", "determine")
_FORMULA_APPLICATION_CUES = _APPLICATION_CUES + ("useful for", "helps to")
_CONSTRAINT_CUES = (
    "valid", "constraint", "limitation", "assumption", "condition",
    "restricted", "only if", "requires that",
)


def extract_formula(text: str) -> str:
    """An `x = ...` equation, else an arithmetic expression, else text after a formula keyword."""
    for pattern in (_EQUATION, _EXPRESSION, _FORMULA_KEYWORD):
        match = pattern.search(text)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return canned.DEFAULT_FORMULA


def extract_variables(formula: str, sentences: Sequence[str]) -> List[Tuple[str, str, str]]:
    """`(symbol, description, units)` for each distinct letter of the formula."""
    if formula == canned.DEFAULT_FORMULA:
        return list(canned.DEFAULT_VARIABLES)

    symbols = list(dict.fromkeys(_SYMBOL.findall(formula)))[:MAX_VARIABLES]
    variables = []
    for symbol in symbols:
        lowered = symbol.lower()
        cues = (f"{lowered} is", f"{lowered} represents", f"{lowered} denotes",
                f"where {lowered}", f"{lowered} stands for")
        description, units = "", ""
        for sentence in sentences:
            if any(cue in sentence.lower() for cue in cues):
                description = sentence
                match = _UNITS.search(sentence)
                if match:
                    units = match.group(1)
                break

        if not description:
            description = canned.SYMBOL_MEANINGS.get(lowered, "Variable")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            description = description[:MAX_DESCRIPTION_LENGTH] + "..."
        variables.append((symbol, description, units))

    return variables or list(canned.DEFAULT_VARIABLES)


def calculation_steps(sentences: Sequence[str]) -> List[str]:
    found = collect_matching(sentences, _CALCULATION_CUES)
    if len(found) >= MIN_EXTRACTED:
        return finalize_items(found, MAX_CALCULATION_STEPS)
    return list(canned.CALCULATION_STEPS)


def build_formula(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    formula = extract_formula(text)
    domain = identify_domain(text)

    steps = calculation_steps(sentences)
    return [
        Topic(name="Formula", relation="expressed as", subtopics=[
            Subtopic(name=formula, relation="written as", children=[
                Detail(name="Standard form", relation="represented by"),
                Detail(name="Alternative forms", relation="also written as"),
            ])
        ]),
        Topic(name="Variables", relation="uses", subtopics=[
            Subtopic(name=symbol, relation="where", children=[
                Detail(name=description, relation="represents"),
                Detail(name=units or "Units/dimensions", relation="measured in"),
            ])
            for symbol, description, units in extract_variables(formula, sentences)
        ]),
        Topic(name="Calculation Steps", relation="solved by", subtopics=[
            Subtopic(
                name=f"Step {i + 1}: {step}",
                relation="start with" if i == 0 else "then",
                children=[Detail(name="Key consideration", relation="note that")],
            )
            for i, step in enumerate(steps)
        ]),
        Topic(name="Applications", relation="applied in", subtopics=_subtopics(
            sentence_slot(sentences, _FORMULA_APPLICATION_CUES, _for_domain(canned.FORMULA_APPLICATIONS, domain)),
            "used for", (("Example scenario", "such as"),))),
        Topic(name="Constraints", relation="valid when", subtopics=_subtopics(
            sentence_slot(sentences, _CONSTRAINT_CUES, canned.FORMULA_CONSTRAINTS),
            "requires", (("Implications", "means that"),))),
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# COMPARISON
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_SIMILARITY_CUES = ("similar", "both", "share", "common", "alike")
_DIFFERENCE_CUES = ("differ", "unlike", "whereas", "while", "contrast", "however", "but")


def _mentioning_both(sentences: Sequence[str], item1: str, item2: str) -> List[str]:
    first, second = item1.lower(), item2.lower()
    return [s for s in sentences if first in s.lower() and second in s.lower()]


def _item_topic(item: str) -> Topic:
    return Topic(name=item, relation="compared with", subtopics=[
        Subtopic(name="Key characteristics", relation="defined by", children=[
            Detail(name="Primary feature", relation="known for"),
            Detail(name="Core strength", relation="excels in"),
        ])
    ])


def build_comparison(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    item1, item2 = extract_comparison_items(text)
    both = _mentioning_both(sentences, item1, item2)

    similarities = sentence_slot(both, _SIMILARITY_CUES, canned.similarities(item1, item2))
    differences = sentence_slot(both, _DIFFERENCE_CUES, canned.differences(item1, item2))

    return [
        _item_topic(item1),
        _item_topic(item2),
        Topic(name="Similarities", relation="shared aspects", subtopics=_subtopics(
            similarities, "both have", (("Significance", "important because"),))),
        Topic(name="Differences", relation="distinctions", subtopics=_subtopics(
            differences, "contrast in", (("Impact", "affects"),))),
        Topic(name="Use Cases", relation="when to use", subtopics=_subtopics(
            (f"When to use {item1}", f"When to use {item2}"),
            "prefer when", (("Ideal scenario", "best for"),))),
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PROBLEM / SOLUTION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_PROBLEM_CAPTURES = (
    re.compile(r"problem\s+(?:of|with)\s+([^.,?]+)"),
    re.compile(r"(?:issue|trouble)\s+(?:(?:with|of)\s+)?([^.,?]+)"),
    re.compile(r"(?:fix|solve|resolve)\s+([^.,?]+)"),
)

_CAUSE_CUES = ("cause", "due to", "because", "result of", "stems from", "root", "source")
_SYMPTOM_CUES = ("symptom", "sign", "indication", "manifest", "exhibit", "display", "show")
_SOLUTION_CUES = ("solution", "fix", "resolve", "solve", "address", "correct", "remedy")
_PREVENTION_CUES = ("prevent", "avoid", "mitigate", "reduce risk", "precaution", "proactive")
_LONG_TERM_CUES = ("long-term", "permanent", "sustainable", "ongoing", "future", "strategic")


def extract_problem(text: str, concept: str) -> str:
    lowered = text.lower()
    for pattern in _PROBLEM_CAPTURES:
        match = pattern.search(lowered)
        if match and match.group(1).strip():
            return capitalize_phrase(match.group(1).strip())
    return concept


def build_problem_solution(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    problem = extract_problem(text, concept)
    solutions = sentence_slot(sentences, _SOLUTION_CUES, canned.SOLUTIONS)

    return [
        Topic(name="Causes", relation="caused by", details=f"What leads to {problem}.",
              subtopics=_subtopics(sentence_slot(sentences, _CAUSE_CUES, canned.PROBLEM_CAUSES),
                                   "leads to", (("Contributing factors", "influenced by"),))),
        Topic(name="Symptoms", relation="manifests as", details=f"How {problem} shows itself.",
              subtopics=_subtopics(sentence_slot(sentences, _SYMPTOM_CUES, canned.SYMPTOMS),
                                   "indicated by", (("Severity indicator", "suggests"),))),
        Topic(name="Solutions", relation="resolved by", details=f"Ways to resolve {problem}.",
              subtopics=[
                  Subtopic(
                      name=solution,
                      relation="best approach" if i == 0 else "alternative",
                      children=[
                          Detail(name="Implementation steps", relation="requires"),
                          Detail(name="Expected outcome", relation="results in"),
                      ],
                  )
                  for i, solution in enumerate(solutions)
              ]),
        Topic(name="Prevention", relation="avoided by",
              subtopics=_subtopics(sentence_slot(sentences, _PREVENTION_CUES, canned.PREVENTION),
                                   "helps prevent", (("Best practice", "follow"),))),
        Topic(name="Long-term Strategies", relation="managed with",
              subtopics=_subtopics(sentence_slot(sentences, _LONG_TERM_CUES, canned.LONG_TERM_STRATEGIES),
                                   "involves", (("Key benefit", "provides"),))),
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# LIST
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

MAX_LIST_ITEMS = 5
MAX_CATEGORIES = 3
MIN_LIST_ITEMS = 3

_LIST_CUES = ("types of", "kinds of", "examples of", "varieties of", "categories of", "include")
_LIST_HEADS = _LIST_CUES[:-1]
_LIST_LEAD = re.compile(r"^.*?\b(?:includes?|including|are|such as|like)\b\s*|^[^:]*:\s*", re.I)
_LIST_SEPARATORS = re.compile(r",|;|\b(?:and|or|such as|like|including)\b|e\.g\.|i\.e\.", re.I)
_ITEM_MARKER = re.compile(r"^\d+\.\s*|^[*-]\s*")
_CRITERIA_CUES = ("criteria", "factor", "consider", "choose", "select", "decide", "determine")


def extract_list_items(sentences: Sequence[str]) -> List[str]:
    """Items enumerated after a list cue, e.g. 'Types include solar, wind and hydro'."""
    items: List[str] = []
    for sentence in collect_matching(sentences, _LIST_CUES):
        enumeration = _LIST_LEAD.sub("", sentence, count=1)
        for part in _LIST_SEPARATORS.split(enumeration):
            part = _ITEM_MARKER.sub("", part.strip()).strip(" .!?")
            if part and not any(head in part.lower() for head in _LIST_HEADS):
                items.append(truncate_item(part))

    if len(items) < MIN_LIST_ITEMS:
        items.extend(canned.LIST_ITEMS)
    return items[:MAX_LIST_ITEMS]


def categorize_list_items(items: Sequence[str]) -> Dict[str, List[str]]:
    """One 'Main Types' group for short lists, otherwise up to three even groups."""
    if len(items) <= MIN_LIST_ITEMS:
        return {"Main Types": list(items)}

    category_count = min(MAX_CATEGORIES, math.ceil(len(items) / 2))
    per_category = math.ceil(len(items) / category_count)
    categories = {}
    for i in range(category_count):
        chunk = list(items[i * per_category:(i + 1) * per_category])
        if chunk:
            categories[f"Category {i + 1}"] = chunk
    return categories


def build_list(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    topics = [
        Topic(name=category, relation="includes", subtopics=_subtopics(
            items, "example of", (("Key characteristics", "features"), ("Common use", "used for"))))
        for category, items in categorize_list_items(extract_list_items(sentences)).items()
    ]

    overview = extract_definition(concept, sentences)
    topics.append(Topic(name="Overview", relation="describes", subtopics=[
        Subtopic(name=truncate_item(overview), relation="defines", details=overview, children=[
            Detail(name="Importance", relation="matters because"),
            Detail(name="Context", relation="relevant to"),
        ])
    ]))
    topics.append(Topic(name="Selection Criteria", relation="chosen by", subtopics=_subtopics(
        sentence_slot(sentences, _CRITERIA_CUES, canned.SELECTION_CRITERIA),
        "consider", (("Impact on choice", "affects"),))))
    return topics


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CAUSE / EFFECT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_DETAILED_CAUSE_CUES = ("cause", "lead to", "result in", "due to", "because", "reason")
_EFFECT_CUES = ("effect", "impact", "result", "consequence", "outcome", "leads to")
_MECHANISM_CUES = ("mechanism", "process", "how it works", "function", "operation", "pathway")
_FACTOR_CUES = ("factor", "influence", "affect", "modify", "determine", "impact")
_CAUSE_EFFECT_EXAMPLE_CUES = ("example", "instance", "case", "illustration", "such as", "like")


def build_cause_effect(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    lowered = text.lower()
    cause_focused = any(cue in lowered for cue in ("cause", "why", "lead to"))
    effect_focused = any(cue in lowered for cue in ("effect", "impact", "result"))
    domain = identify_domain(text)

    causes = sentence_slot(sentences, _DETAILED_CAUSE_CUES, _for_domain(canned.DETAILED_CAUSES, domain))
    effects = sentence_slot(sentences, _EFFECT_CUES, _for_domain(canned.DETAILED_EFFECTS, domain))

    return [
        Topic(name="Causes", relation="primary focus" if cause_focused else "lead to", subtopics=[
            Subtopic(
                name=cause,
                relation="main reason" if i == 0 else "also contributes",
                children=[
                    Detail(name="Mechanism", relation="works by"),
                    Detail(name="Contributing factors", relation="influenced by"),
                ],
            )
            for i, cause in enumerate(causes)
        ]),
        Topic(name="Effects", relation="primary focus" if effect_focused else "result from", subtopics=[
            Subtopic(
                name=effect,
                relation="major impact" if i == 0 else "also results in",
                children=[
                    Detail(name="Significance", relation="important because"),
                    Detail(name="Timeline", relation="occurs"),
                ],
            )
            for i, effect in enumerate(effects)
        ]),
        Topic(name="Mechanisms", relation="operates through", subtopics=_subtopics(
            sentence_slot(sentences, _MECHANISM_CUES, canned.MECHANISMS),
            "functions by", (("Key process", "involves"),))),
        Topic(name="Influencing Factors", relation="modified by", subtopics=_subtopics(
            sentence_slot(sentences, _FACTOR_CUES, canned.INFLUENCING_FACTORS),
            "affects", (("Degree of influence", "impacts by"),))),
        Topic(name="Examples", relation="illustrated by", subtopics=_subtopics(
            sentence_slot(sentences, _CAUSE_EFFECT_EXAMPLE_CUES, canned.CAUSE_EFFECT_EXAMPLES),
            "demonstrates", (("Key insight", "shows that"),))),
    ]


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# DEFINITION
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

_CHARACTERISTIC_CUES = ("characterized", "feature", "property", "properties", "attribute", "quality")


def related_concepts(text: str, concept: str) -> List[Tuple[str, str]]:
    lowered = concept.lower()
    phrases = [p for p in extract_noun_phrases(text) if lowered not in p and p not in lowered]
    related = [(capitalize_phrase(p), "related to") for p in phrases]
    if len(related) < MIN_EXTRACTED:
        related.extend(canned.RELATED_CONCEPTS)
    return related[:DEFAULT_CAP]


def build_definition(text: str, concept: str, sentences: Sequence[str]) -> List[Topic]:
    domain = identify_domain(text)
    formal = extract_definition(concept, sentences)
    examples = phrase_slot(
        _phrases_from(collect_matching(sentences, _EXAMPLE_CUES)),
        _for_domain(canned.EXAMPLES, domain),
    )

    return [
        Topic(name="Definition", relation="means", details="The formal meaning and explanation", subtopics=[
            Subtopic(name=truncate_item(formal), relation="formally defined as",
                     details="The technical or academic definition"),
            Subtopic(name=f"{concept} explained in everyday language", relation="in simple terms",
                     details="An easier way to understand it"),
        ]),
        Topic(name="Characteristics", relation="features", subtopics=_subtopics(
            sentence_slot(sentences, _CHARACTERISTIC_CUES, canned.CHARACTERISTICS), "characterized by")),
        Topic(name="Examples", relation="illustrated by", subtopics=_subtopics(examples, "such as")),
        Topic(name="Related Concepts", relation="connected to", subtopics=[
            Subtopic(name=name, relation=relation) for name, relation in related_concepts(text, concept)
        ]),
    ]


# ── Dispatch ─────────────────────────────────────────────────────────────────

Builder = Callable[[str, str, Sequence[str]], List[Topic]]

BUILDERS: Dict[PromptType, Builder] = {
    PromptType.HOW_TO: build_how_to,
    PromptType.FORMULA: build_formula,
    PromptType.COMPARISON: build_comparison,
    PromptType.PROBLEM_SOLUTION: build_problem_solution,
    PromptType.DEFINITION: build_definition,
    PromptType.LIST: build_list,
    PromptType.CAUSE_EFFECT: build_cause_effect,
    PromptType.CONCEPT: build_concept,
}


def generate_topics(text: str, main_concept: str, prompt_type: PromptType,
                    sentences: Optional[Sequence[str]] = None) -> List[Topic]:
    """Build the topic tree for a prompt of the given type without any collaborator."""
    if sentences is None:
        sentences = split_sentences(text)
    builder = BUILDERS.get(prompt_type, build_concept)
    topics = builder(text, main_concept, sentences)
    logger.info(f"[TOPICS] {prompt_type.value}: {len(topics)} topics for '{main_concept}'")
    return topics
