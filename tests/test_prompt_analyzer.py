"""Tests for prompt classification, domain voting and concept extraction."""

import pytest

from promptmap.schemas.mindmap import Domain, PromptType
from promptmap.services.prompt_analyzer import (
    classify,
    domain_votes,
    extract_comparison_items,
    extract_main_concept,
    identify_domain,
)


class TestClassify:
    """Tests for the ordered prompt classifier."""

    @pytest.mark.parametrize("prompt, expected", [
        ("How to bake bread", PromptType.HOW_TO),
        ("What is photosynthesis?", PromptType.DEFINITION),
        ("Explain quantum computing", PromptType.CONCEPT),
        ("Formula for kinetic energy", PromptType.FORMULA),
        ("F = m * a", PromptType.FORMULA),
        ("Python vs JavaScript", PromptType.COMPARISON),
        ("Fix a leaking faucet", PromptType.PROBLEM_SOLUTION),
        ("What are the types of renewable energy?", PromptType.LIST),
        ("Effects of climate change", PromptType.CAUSE_EFFECT),
    ])
    def test_pattern_matches(self, prompt, expected):
        """Test one representative prompt per type."""
        assert classify(prompt) == expected

    def test_earlier_type_wins(self):
        """Test that how-to is checked before formula."""
        assert classify("How to calculate interest") == PromptType.HOW_TO

    def test_math_domain_fallback(self):
        """Test that a math-heavy prompt without a pattern becomes a formula."""
        assert classify("algebra and geometry") == PromptType.FORMULA

    def test_health_domain_with_treatment(self):
        """Test that health prompts mentioning cures become problem/solution."""
        assert classify("diabetes disease cure") == PromptType.PROBLEM_SOLUTION

    def test_defaults_to_concept(self):
        """Test that anything unrecognized is a concept."""
        assert classify("x") == PromptType.CONCEPT
        assert classify("Quantum computing") == PromptType.CONCEPT


class TestDomain:
    """Tests for keyword domain voting."""

    def test_counts_keyword_hits(self):
        """Test per-domain vote counts."""
        votes = domain_votes("software data network and profit")
        assert votes[Domain.TECHNOLOGY] == 3
        assert votes[Domain.BUSINESS] == 1

    def test_strict_winner(self):
        """Test that the domain with most hits wins."""
        assert identify_domain("patient diagnosis in a hospital") == Domain.HEALTH

    def test_tie_goes_to_first_declared(self):
        """Test that technology beats business on a tie."""
        assert identify_domain("software business") == Domain.TECHNOLOGY

    def test_no_hits_is_general(self):
        """Test the GENERAL default."""
        assert identify_domain("hello there") == Domain.GENERAL


class TestExtractMainConcept:
    """Tests for main concept extraction."""

    @pytest.mark.parametrize("prompt, prompt_type, expected", [
        ("How to bake bread", PromptType.HOW_TO, "Bake Bread"),
        ("What is photosynthesis?", PromptType.DEFINITION, "Photosynthesis"),
        ("What is a neural network", PromptType.DEFINITION, "Neural Network"),
        ("Python vs JavaScript", PromptType.COMPARISON, "Python vs JavaScript"),
        ("Compare cats and dogs", PromptType.COMPARISON, "Cats vs Dogs"),
        ("Formula for kinetic energy", PromptType.FORMULA, "Kinetic Energy"),
        ("Explain quantum computing", PromptType.CONCEPT, "Quantum Computing"),
        ("Photosynthesis", PromptType.CONCEPT, "Photosynthesis"),
    ])
    def test_type_specific_captures(self, prompt, prompt_type, expected):
        """Test captures for each prompt type."""
        assert extract_main_concept(prompt, prompt_type) == expected

    def test_equation_keeps_symbol_case(self):
        """Test that an embedded equation is returned as written."""
        assert extract_main_concept("F = m * a", PromptType.FORMULA) == "F = m * a"

    def test_noun_phrase_fallback(self):
        """Test the noun phrase fallback for lowercase prompts."""
        assert extract_main_concept("the rate of change", PromptType.CONCEPT) == "Rate Of Change"

    def test_first_words_fallback(self):
        """Test the first-five-words fallback."""
        concept = extract_main_concept("just some words here now please", PromptType.CONCEPT)
        assert concept == "Just Some Words Here Now"

    def test_result_is_trimmed(self):
        """Test that surrounding whitespace never leaks into the concept."""
        concept = extract_main_concept("   How to learn guitar   ", PromptType.HOW_TO)
        assert concept == concept.strip() == "Learn Guitar"


class TestComparisonItems:
    """Tests for comparison side extraction."""

    def test_versus(self):
        """Test `X vs Y`."""
        assert extract_comparison_items("Python vs JavaScript") == ("Python", "JavaScript")

    def test_differences_between(self):
        """Test `differences between X and Y`."""
        assert extract_comparison_items("Differences between cats and dogs.") == ("Cats", "Dogs")

    def test_placeholders(self):
        """Test the generic fallback."""
        assert extract_comparison_items("tea") == ("Item 1", "Item 2")
