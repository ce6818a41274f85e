"""
PromptMap — Collaborator Reply Parsing
======================================
Turns free-form text from the text-generation collaborator into explicit
shapes: ParsedSection / ParsedList for per-slot replies, and a full
Analysis for replies that follow the MAIN TOPIC / DESCRIPTION / SUBTOPICS
convention.

Every parser raises MalformedCollaboratorReply when nothing usable is found.
"""

import logging
import re
from typing import List, Optional, Tuple

from promptmap.core.errors import MalformedCollaboratorReply
from promptmap.schemas.mindmap import (
    Analysis,
    ParsedList,
    ParsedSection,
    PromptType,
    Subtopic,
    Topic,
)
from promptmap.services.text_utils import truncate_item

logger = logging.getLogger(__name__)

# ── Line Cleanup ─────────────────────────────────────────────────────────────

_LINE_MARKER = re.compile(r"^(?:\d+[.)]|[-*•])\s*")
_EMPHASIS = re.compile(r"\*\*|__")


def _clean_line(line: str) -> str:
    return _EMPHASIS.sub("", _LINE_MARKER.sub("", line.strip())).strip()


def _content_lines(reply: str) -> List[str]:
    """Non-empty, marker-free lines, skipping intro lines such as 'Here are three examples:'."""
    lines = []
    for raw in reply.splitlines():
        line = _clean_line(raw)
        if not line or line.endswith(":"):
            continue
        lines.append(line)
    return lines


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# PER-SLOT REPLIES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def parse_named_items(reply: Optional[str], default_description: str, limit: int = 3) -> List[ParsedSection]:
    """`Name: Description` lines. Lines without a colon get the default description."""
    sections = []
    for line in _content_lines(reply or ""):
        name, _, description = line.partition(":")
        name, description = name.strip(), description.strip()
        if not name:
            continue
        sections.append(ParsedSection(
            name=truncate_item(name), description=description or default_description,
        ))
        if len(sections) >= limit:
            break

    if not sections:
        raise MalformedCollaboratorReply("No 'Name: Description' items found in reply")
    return sections


def parse_list_items(reply: Optional[str], limit: int = 3) -> ParsedList:
    items = [truncate_item(line) for line in _content_lines(reply or "")[:limit]]
    if not items:
        raise MalformedCollaboratorReply("No list items found in reply")
    return ParsedList(items=items)


_PROS_HEADER = re.compile(r"\b(?:advantages?|benefits?|pros)\b", re.I)
_CONS_HEADER = re.compile(r"\b(?:limitations?|drawbacks?|disadvantages?|cons)\b", re.I)
_MAX_HEADER_WORDS = 3


def _section_header(line: str) -> Optional[str]:
    stripped = line.strip().strip("#*").strip()
    is_header = stripped.endswith(":") or len(_clean_line(stripped).split()) <= _MAX_HEADER_WORDS
    if not is_header:
        return None
    if _CONS_HEADER.search(stripped):
        return "cons"
    if _PROS_HEADER.search(stripped):
        return "pros"
    return None


def parse_pros_cons(reply: Optional[str], limit: int = 3) -> Tuple[ParsedList, ParsedList]:
    """Split a reply into advantages and limitations using its section headers."""
    buckets = {"pros": [], "cons": []}
    current = None
    for raw in (reply or "").splitlines():
        if not raw.strip():
            continue
        header = _section_header(raw)
        if header:
            current = header
            continue
        line = _clean_line(raw)
        if current and line and len(buckets[current]) < limit:
            buckets[current].append(truncate_item(line))

    if not buckets["pros"] and not buckets["cons"]:
        raise MalformedCollaboratorReply("No advantages or limitations sections found in reply")
    return ParsedList(items=buckets["pros"]), ParsedList(items=buckets["cons"])


# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# STRUCTURED MIND MAP REPLIES
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

STRUCTURED_MINDMAP_PROMPT = (
    'Create a mind map structure for: "{prompt}".\n'
    "Format your response as follows:\n"
    "MAIN TOPIC: [Short title for the main topic]\n"
    "DESCRIPTION: [Brief description of the main topic]\n"
    "SUBTOPICS:\n"
    "1. [Subtopic 1]\n"
    "   - [Detail 1]\n"
    "   - [Detail 2]\n"
    "2. [Subtopic 2]\n"
    "   - [Detail 1]\n"
    "   - [Detail 2]\n"
    "3. [Subtopic 3]\n"
    "   - [Detail 1]\n"
    "   - [Detail 2]\n"
    "4. [Subtopic 4]\n"
    "   - [Detail 1]\n"
    "   - [Detail 2]\n"
    "5. [Subtopic 5]\n"
    "   - [Detail 1]\n"
    "   - [Detail 2]\n"
    "Keep each subtopic and detail short and concise.\n"
    "DO NOT provide the response as JSON or code."
)

_MAIN_TOPIC_PATTERNS = (
    re.compile(r"main topic:?[ \t]*(?:\n[ \t]*)?([^\n]+)", re.I),
    re.compile(r"^[ \t]*topic[ \t]*:?[ \t]*(?:\n[ \t]*)?([^\n]+)", re.I | re.M),
    re.compile(r"^#[ \t]*([^\n]+)", re.M),
)
_DESCRIPTION_HEADER = re.compile(r"^\s*(?:description|overview)\s*:?[ \t]*([^\n]*)", re.I)
_SECTION_START = re.compile(r"^\s*(?:main|topic|subtopic|overview|\d+\.|\*|-)", re.I)

_NUMBERED_ITEM = re.compile(r"^[ \t]*(?:\d+\.|\(\d+\))[ \t]*([^\n:]+)(?::[ \t]*([^\n]*))?", re.M)
_BULLETED_ITEM = re.compile(r"^[*-][ \t]*([^\n:]+)(?::[ \t]*([^\n]*))?", re.M)
_INDENTED_BULLET = re.compile(r"^[ \t]+[*-][ \t]*([^\n:]+)(?::[ \t]*([^\n]*))?", re.M)
_ANY_BULLET = re.compile(r"^[ \t]*[*-][ \t]*([^\n:]+)(?::[ \t]*([^\n]*))?", re.M)
_NEXT_NUMBERED = re.compile(r"^[ \t]*\d+\.", re.M)
_SENTENCE_END = re.compile(r"[.!?]+")

MAX_DETAILS = 3
MAX_BARE_LINES = 6
MAX_KEY_PHRASES = 5
MAX_PROMPT_WORDS = 5
MAX_DETAIL_TITLE = 40


def generic_details(subtopic: str) -> List[Subtopic]:
    return [
        Subtopic(
            name=f"Key aspect of {subtopic}",
            relation="includes",
            details=(
                f"This represents an important characteristic or feature related to {subtopic}. "
                f"Understanding this aspect provides deeper insight into how {subtopic} functions "
                f"and its significance in the broader context."
            ),
        ),
        Subtopic(
            name=f"Application of {subtopic}",
            relation="used for",
            details=(
                f"This shows how {subtopic} is applied or used in practical scenarios. "
                f"Real-world applications demonstrate the value and utility of {subtopic} "
                f"in solving problems or addressing needs."
            ),
        ),
    ]


def _title(raw: str) -> str:
    return _EMPHASIS.sub("", raw).strip(" *#\t")


def _bullet_details(pattern: re.Pattern, text: str, subtopic: str) -> List[Subtopic]:
    details = []
    for match in pattern.finditer(text):
        title = _title(match.group(1))
        if len(title) < 2:
            continue
        description = (match.group(2) or "").strip() or f"Detail of {subtopic}"
        details.append(Subtopic(name=title, relation="includes", details=description))
        if len(details) >= MAX_DETAILS:
            break
    return details


def extract_details(content: str, subtopic: str) -> List[Subtopic]:
    """
    Details listed under a subtopic: its indented bullets, else any bullets
    after it, else its first sentences, else generic placeholders.
    """
    index = content.find(subtopic)
    if index == -1:
        return generic_details(subtopic)
    after = content[index + len(subtopic):]

    own_section = _NEXT_NUMBERED.split(after, maxsplit=1)[0]
    details = _bullet_details(_INDENTED_BULLET, own_section, subtopic)
    if details:
        return details

    details = _bullet_details(_ANY_BULLET, after, subtopic)
    if details:
        return details

    sentences = [s.strip() for s in _SENTENCE_END.split(after) if s.strip()]
    for sentence in sentences[:2]:
        if len(sentence) < 10 or "subtopic" in sentence.lower():
            continue
        title = sentence if len(sentence) <= MAX_DETAIL_TITLE else sentence[:MAX_DETAIL_TITLE] + "..."
        details.append(Subtopic(name=title, relation="includes", details=sentence))
    return details or generic_details(subtopic)


def _main_topic(content: str, original_prompt: str) -> str:
    for pattern in _MAIN_TOPIC_PATTERNS:
        match = pattern.search(content)
        if match and _title(match.group(1)):
            return _title(match.group(1))
    return original_prompt


def _description(content: str, original_prompt: str) -> str:
    lines = content.splitlines()
    for i, line in enumerate(lines):
        match = _DESCRIPTION_HEADER.match(line)
        if not match:
            continue
        parts = [match.group(1).strip()] if match.group(1).strip() else []
        for following in lines[i + 1:]:
            if not following.strip():
                if parts:
                    break
                continue
            if _SECTION_START.match(following):
                break
            parts.append(following.strip())
        if parts:
            return " ".join(parts)
    return f"Mind map for: {original_prompt}"


def _listed_subtopics(pattern: re.Pattern, content: str, main_topic: str) -> List[Topic]:
    topics = []
    for match in pattern.finditer(content):
        title = _title(match.group(1))
        if "subtopic" in title.lower() or len(title) < 3:
            continue
        description = (match.group(2) or "").strip() or f"Related to {main_topic}"
        topics.append(Topic(
            name=title,
            relation="related to",
            details=description,
            subtopics=extract_details(content, title),
        ))
    return topics


_HEADER_WORDS = ("topic:", "description:", "subtopic", "detail")


def _bare_line_subtopics(content: str, main_topic: str) -> List[Topic]:
    topics = []
    for raw in content.splitlines():
        line = raw.strip()
        if len(line) < 5 or line.startswith("#") or any(word in line.lower() for word in _HEADER_WORDS):
            continue
        if len(line) < 50:
            topics.append(Topic(name=line, relation="related to", details=f"Aspect of {main_topic}"))
        if len(topics) >= MAX_BARE_LINES:
            break
    return topics


def extract_key_phrases(content: str) -> List[Topic]:
    """The middle 3-5 words of each substantial sentence."""
    topics = []
    for sentence in _SENTENCE_END.split(content):
        if len(sentence.strip()) <= 10 or len(sentence) < 15:
            continue
        lowered = sentence.lower()
        if "topic" in lowered or "detail" in lowered:
            continue
        words = sentence.split()
        if len(words) < 3:
            continue

        length = min(5, max(3, len(words) // 2))
        start = (len(words) - length) // 2
        phrase = " ".join(words[start:start + length])

        details = [Subtopic(
            name=f"Key aspect of {phrase}",
            relation="includes",
            details=f"Important characteristic related to {phrase}",
        )]
        # Every other phrase also gets an application detail.
        if len(topics) % 2 == 1:
            details.append(Subtopic(
                name=f"Application of {phrase}",
                relation="used for",
                details=f"How {phrase} is applied or used",
            ))

        topics.append(Topic(name=phrase, relation="related to", details=sentence.strip(), subtopics=details))
        if len(topics) >= MAX_KEY_PHRASES:
            break
    return topics


def _prompt_word_subtopics(original_prompt: str, main_topic: str) -> List[Topic]:
    words = list(dict.fromkeys(word for word in original_prompt.split() if len(word) > 4))
    return [
        Topic(name=word, relation="related to", details=f"Aspect of {main_topic}")
        for word in words[:MAX_PROMPT_WORDS]
    ]


def build_structured_analysis(content: Optional[str], original_prompt: str,
                              prompt_type: PromptType = PromptType.CONCEPT) -> Analysis:
    """
    Parse a MAIN TOPIC / DESCRIPTION / SUBTOPICS reply into an Analysis.

    Subtopics come from the first strategy that finds any: numbered list,
    bulleted list, bare lines, key phrases, then long words of the prompt.
    """
    if not content or not content.strip():
        raise MalformedCollaboratorReply("Structured reply is empty")

    main_topic = _main_topic(content, original_prompt)
    description = _description(content, original_prompt)

    strategies = (
        ("numbered", lambda: _listed_subtopics(_NUMBERED_ITEM, content, main_topic)),
        ("bulleted", lambda: _listed_subtopics(_BULLETED_ITEM, content, main_topic)),
        ("bare-lines", lambda: _bare_line_subtopics(content, main_topic)),
        ("key-phrases", lambda: extract_key_phrases(content)),
        ("prompt-words", lambda: _prompt_word_subtopics(original_prompt, main_topic)),
    )
    topics: List[Topic] = []
    for name, strategy in strategies:
        topics = strategy()
        if topics:
            logger.info(f"[PARSER] {len(topics)} subtopics via {name} strategy")
            break

    if not topics:
        raise MalformedCollaboratorReply("No subtopics could be recovered from structured reply")

    return Analysis(
        main_concept=main_topic,
        prompt_type=prompt_type,
        topics=topics,
        description=description,
    )
