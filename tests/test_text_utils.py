"""Tests for tokenizing, sentence splitting and phrase helpers."""

from promptmap.services.text_utils import (
    capitalize_phrase,
    extract_keywords,
    extract_noun_phrases,
    split_sentences,
    tokenize,
    truncate_item,
)


class TestTokenize:
    """Tests for the stop-word tokenizer."""

    def test_drops_stop_words_and_punctuation(self):
        """Test that stop-words and punctuation never become tokens."""
        assert tokenize("How can the Neural Networks learn?") == ["neural", "networks", "learn"]

    def test_empty_text(self):
        """Test that empty text has no tokens."""
        assert tokenize("") == []


class TestSplitSentences:
    """Tests for the sentence splitter."""

    def test_splits_on_terminal_punctuation(self):
        """Test splitting before a capitalized word."""
        text = "Plants need light. Water helps too! Do roots matter? Yes."
        assert split_sentences(text) == ["Plants need light", "Water helps too", "Do roots matter", "Yes."]

    def test_abbreviations_do_not_split(self):
        """Test that common abbreviations keep a sentence whole."""
        sentences = split_sentences("Dr. Smith studies plants, e.g. ferns. Mosses are next.")
        assert len(sentences) == 2
        assert sentences[0].startswith("Dr Smith")

    def test_lowercase_continuation_stays_together(self):
        """Test that a period followed by a lowercase word does not end the sentence."""
        assert len(split_sentences("Version 2. then more text here")) == 1

    def test_blank_text(self):
        """Test that whitespace yields no sentences."""
        assert split_sentences("   ") == []


class TestKeywordsAndPhrases:
    """Tests for keyword ranking and noun phrase extraction."""

    def test_keywords_ranked_by_frequency(self):
        """Test that the most frequent token comes first."""
        keywords = extract_keywords("solar panels, solar power and solar farms use panels")
        assert keywords[:2] == ["solar", "panels"]

    def test_keyword_ties_keep_first_seen_order(self):
        """Test that equally frequent tokens keep text order."""
        assert extract_keywords("alpha beta gamma") == ["alpha", "beta", "gamma"]

    def test_keyword_limit(self):
        """Test the max_count cap."""
        assert len(extract_keywords("one two three four five six", max_count=3)) == 3

    def test_noun_phrases_are_lowercased_and_unique(self):
        """Test title-case runs and linked phrases."""
        phrases = extract_noun_phrases("Machine learning is great. The rate of change matters.")
        assert "machine learning is" in phrases or "machine learning" in phrases
        assert "rate of change" in phrases
        assert len(phrases) == len(set(phrases))


class TestItemHelpers:
    """Tests for capitalization and truncation."""

    def test_capitalize_phrase_keeps_inner_case(self):
        """Test that only first letters change."""
        assert capitalize_phrase("learn javaScript fast") == "Learn JavaScript Fast"

    def test_short_item_unchanged(self):
        """Test that items within the limit are untouched."""
        assert truncate_item("Short item") == "Short item"

    def test_long_item_cut_at_first_clause(self):
        """Test that a long sentence is cut at its first clause break."""
        item = "Regular maintenance keeps machines running, which saves money and prevents downtime later"
        assert truncate_item(item) == "Regular maintenance keeps machines running"

    def test_long_item_with_short_clause_hard_cut(self):
        """Test the hard cut when the first clause is too short."""
        item = "Yes, " + "x" * 80
        result = truncate_item(item)
        assert result.endswith("...")
        assert len(result) == 63

    def test_long_first_clause_hard_cut(self):
        """Test that a first clause over the limit is not kept whole."""
        item = "Solar power generated by photovoltaic panels mounted on suburban rooftops, and wind"
        assert truncate_item(item) == item[:60] + "..."
