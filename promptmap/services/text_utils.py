"""
Tokenizer, sentence splitter and small phrase helpers shared by every
extraction stage. Everything here is pure and deterministic.
"""

import re
from collections import Counter
from typing import List

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "for", "with", "about", "against",
    "between", "into", "through", "during", "before", "after", "above",
    "below", "from", "down", "in", "out", "on", "off", "over", "under",
    "again", "further", "then", "once", "here", "there", "when", "where",
    "why", "how", "all", "any", "both", "each", "few", "more", "most",
    "other", "some", "such", "no", "nor", "not", "only", "own", "same", "so",
    "than", "too", "very", "can", "will", "just", "should", "now", "also",
    "often", "however", "almost", "although", "always", "among", "anyone",
    "anything", "anywhere", "are", "around", "because", "been", "being",
    "did", "does", "doing", "done", "else", "ever", "every", "get", "gets",
    "getting", "got", "had", "has", "have", "having", "he", "her", "hers",
    "herself", "him", "himself", "his", "i", "if", "its", "itself", "me",
    "my", "myself", "of", "ought", "our", "ours", "ourselves", "she", "that",
    "their", "theirs", "them", "themselves", "these", "they", "this",
    "those", "to", "until", "up", "was", "we", "were", "what", "which",
    "while", "who", "whom", "would", "you", "your", "yours", "yourself",
    "yourselves",
})

# Abbreviations whose periods would otherwise end a sentence.
_ABBREVIATIONS = (
    ("Mr.", "Mr"),
    ("Mrs.", "Mrs"),
    ("Dr.", "Dr"),
    ("Ph.D.", "PhD"),
    ("i.e.", "ie"),
    ("e.g.", "eg"),
    ("vs.", "vs"),
    ("etc.", "etc"),
)

_LOWERCASE_CONTINUATION = re.compile(r"(\w)\.(\s+[a-z])")
_SENTENCE_BREAK = re.compile(r"[.!?]+\s+(?=[A-Z])")
_NON_WORD = re.compile(r"[^\w\s]")
_TITLE_PHRASE = re.compile(r"\b[A-Z][a-z]+ [a-z]+ [a-z]+\b|\b[A-Z][a-z]+ [a-z]+\b")
_LINKED_PHRASE = re.compile(r"\b[a-z]+ (?:of|in|for|with|by) [a-z]+\b")
_CLAUSE_BREAK = re.compile(r"[,.;:]")

MAX_ITEM_LENGTH = 60
MIN_CLAUSE_LENGTH = 10


def tokenize(text: str) -> List[str]:
    """Lowercase words with punctuation and stop-words removed."""
    cleaned = _NON_WORD.sub(" ", text.lower())
    return [word for word in cleaned.split() if word not in STOP_WORDS]


def split_sentences(text: str) -> List[str]:
    """
    Split prose into sentences.

    Common abbreviations lose their periods first, and a period followed by
    a lowercase word is treated as part of the same sentence.
    """
    prepared = text
    for abbreviation, replacement in _ABBREVIATIONS:
        prepared = prepared.replace(abbreviation, replacement)
    prepared = _LOWERCASE_CONTINUATION.sub(r"\1\2", prepared)

    sentences = (part.strip() for part in _SENTENCE_BREAK.split(prepared))
    return [s for s in sentences if s]


def extract_keywords(text: str, max_count: int = 10) -> List[str]:
    """Frequency-ranked tokens. Ties keep first-seen order."""
    counts = Counter(tokenize(text))
    ranked = sorted(counts.items(), key=lambda entry: entry[1], reverse=True)
    return [word for word, _ in ranked[:max_count]]


def extract_noun_phrases(text: str) -> List[str]:
    """Capitalized 2-3 word runs plus `x of/in/for/with/by y` phrases, lowercased and deduplicated."""
    matches = _TITLE_PHRASE.findall(text) + _LINKED_PHRASE.findall(text)
    return list(dict.fromkeys(match.lower() for match in matches))


def capitalize_phrase(phrase: str) -> str:
    """Uppercase the first letter of each word, leaving the rest untouched."""
    return " ".join(word[:1].upper() + word[1:] for word in phrase.split())


def truncate_item(item: str) -> str:
    """Shorten a long item to its first clause when that fits, else hard-cut it at 60 characters."""
    if len(item) <= MAX_ITEM_LENGTH:
        return item
    first_clause = _CLAUSE_BREAK.split(item, maxsplit=1)[0]
    if MIN_CLAUSE_LENGTH < len(first_clause) <= MAX_ITEM_LENGTH:
        return first_clause
    return item[:MAX_ITEM_LENGTH] + "..."
