"""Tests for parsing collaborator replies."""

import pytest

from promptmap.core.errors import MalformedCollaboratorReply
from promptmap.schemas.mindmap import PromptType
from promptmap.services.reply_parser import (
    STRUCTURED_MINDMAP_PROMPT,
    build_structured_analysis,
    extract_details,
    extract_key_phrases,
    generic_details,
    parse_list_items,
    parse_named_items,
    parse_pros_cons,
)


class TestNamedItems:
    """Tests for `Name: Description` replies."""

    def test_numbered_lines(self):
        """Test markers and emphasis are stripped and the colon splits name from description."""
        reply = (
            "Here are three components:\n"
            "1. **Qubits**: basic units of information\n"
            "2. Quantum gates: operations on qubits\n"
            "3. Measurement\n"
            "4. Extra: ignored past the limit\n"
        )
        sections = parse_named_items(reply, "A key element")

        assert [s.name for s in sections] == ["Qubits", "Quantum gates", "Measurement"]
        assert sections[0].description == "basic units of information"
        assert sections[2].description == "A key element"

    def test_long_names_are_shortened(self):
        """Test that an overlong item name is cut like locally extracted items."""
        name = "Superconducting transmon qubits cooled in dilution refrigerators near absolute zero"
        sections = parse_named_items(f"1. {name}: the hardware most labs use", "unused")

        assert sections[0].name == name[:60] + "..."
        assert sections[0].description == "the hardware most labs use"

    def test_blank_reply(self):
        """Test that a blank reply is malformed."""
        with pytest.raises(MalformedCollaboratorReply):
            parse_named_items("   \n", "unused")


class TestListItems:
    """Tests for plain list replies."""

    def test_bullets(self):
        """Test bullets become items, capped at three."""
        parsed = parse_list_items("- Shor's algorithm\n* Grover's search\n• Annealing\n- Fourth")
        assert parsed.items == ["Shor's algorithm", "Grover's search", "Annealing"]

    def test_long_items_are_shortened(self):
        """Test that overlong list lines are cut to displayable length."""
        long_item = "Simulating protein folding pathways for new antibiotic candidates in pharmaceutical labs"
        parsed = parse_list_items(f"- {long_item}\n- Grover's search")
        assert parsed.items == [long_item[:60] + "...", "Grover's search"]

    def test_only_intro_line(self):
        """Test that an intro line alone is malformed."""
        with pytest.raises(MalformedCollaboratorReply):
            parse_list_items("Here are some examples:")


class TestProsCons:
    """Tests for advantage/limitation replies."""

    def test_sections(self):
        """Test headers switch buckets."""
        reply = "Advantages:\n- Speed\n- Parallelism\n\nLimitations:\n- Decoherence\n- Cost"
        pros, cons = parse_pros_cons(reply)
        assert pros.items == ["Speed", "Parallelism"]
        assert cons.items == ["Decoherence", "Cost"]

    def test_markdown_headers(self):
        """Test heading markers and alternate header words."""
        reply = "## Pros\n1. Cheap to run\n## Cons\n1. Hard to debug"
        pros, cons = parse_pros_cons(reply)
        assert pros.items == ["Cheap to run"]
        assert cons.items == ["Hard to debug"]

    def test_disadvantages_is_not_advantages(self):
        """Test that 'Disadvantages' opens the limitations bucket."""
        pros, cons = parse_pros_cons("Disadvantages:\n- Slow startup")
        assert pros.items == []
        assert cons.items == ["Slow startup"]

    def test_no_headers(self):
        """Test that a reply without sections is malformed."""
        with pytest.raises(MalformedCollaboratorReply):
            parse_pros_cons("It is fast but it is also expensive to operate at scale.")


class TestStructuredAnalysis:
    """Tests for MAIN TOPIC / DESCRIPTION / SUBTOPICS replies."""

    def test_prompt_template(self):
        """Test the request prompt embeds the user prompt."""
        assert '"Explain photosynthesis"' in STRUCTURED_MINDMAP_PROMPT.format(prompt="Explain photosynthesis")

    def test_numbered_subtopics_with_indented_details(self, structured_reply):
        """Test the common well-formed reply."""
        analysis = build_structured_analysis(structured_reply, "Explain photosynthesis", PromptType.CONCEPT)

        assert analysis.main_concept == "Photosynthesis"
        assert analysis.description == "How plants turn light into chemical energy."
        assert [t.name for t in analysis.topics] == ["Light Reactions", "Calvin Cycle"]
        light = analysis.topics[0]
        assert [s.name for s in light.subtopics] == ["Chlorophyll", "Water splitting"]
        assert light.subtopics[0].details == "absorbs sunlight"
        assert [s.name for s in analysis.topics[1].subtopics] == ["Carbon fixation"]

    def test_defaults_without_headers(self):
        """Test the prompt stands in for a missing main topic and description."""
        reply = "- Solar power\n- Wind power\n"
        analysis = build_structured_analysis(reply, "renewable energy")

        assert analysis.main_concept == "renewable energy"
        assert analysis.description == "Mind map for: renewable energy"
        assert [t.name for t in analysis.topics] == ["Solar power", "Wind power"]

    def test_headers_with_value_on_next_line(self):
        """Test that MAIN TOPIC and DESCRIPTION values may sit on the line after the header."""
        reply = (
            "MAIN TOPIC:\nPhotosynthesis\n"
            "DESCRIPTION:\nLight to sugar.\n"
            "1. Light Reactions\n"
            "2. Calvin Cycle\n"
        )
        analysis = build_structured_analysis(reply, "explain photosynthesis")

        assert analysis.main_concept == "Photosynthesis"
        assert analysis.description == "Light to sugar."
        assert [t.name for t in analysis.topics] == ["Light Reactions", "Calvin Cycle"]

    def test_heading_main_topic(self):
        """Test a markdown heading as the main topic."""
        reply = "# Volcanoes\n1. Magma chambers\n2. Eruption types\n"
        analysis = build_structured_analysis(reply, "volcanoes")
        assert analysis.main_concept == "Volcanoes"

    def test_subtopic_placeholders_are_skipped(self):
        """Test that template echoes such as 'Subtopic 1' are not topics."""
        reply = "MAIN TOPIC: Tides\nSUBTOPICS:\n1. Subtopic 1\n2. Gravity of the moon\n"
        analysis = build_structured_analysis(reply, "tides")
        assert [t.name for t in analysis.topics] == ["Gravity of the moon"]

    def test_bare_lines(self):
        """Test lines without list markers."""
        reply = "Ocean currents\nTrade winds\nJet stream\n"
        analysis = build_structured_analysis(reply, "weather")
        assert [t.name for t in analysis.topics] == ["Ocean currents", "Trade winds", "Jet stream"]

    def test_prompt_words_last_resort(self):
        """Test that prompt words are used when the reply has nothing usable."""
        analysis = build_structured_analysis("???", "Explain photosynthesis")
        assert [t.name for t in analysis.topics] == ["Explain", "photosynthesis"]

    def test_blank_reply(self):
        """Test that an empty reply is malformed."""
        with pytest.raises(MalformedCollaboratorReply):
            build_structured_analysis("  ", "anything")

    def test_nothing_recoverable(self):
        """Test that a reply and prompt with no usable text is malformed."""
        with pytest.raises(MalformedCollaboratorReply):
            build_structured_analysis("?!", "why")


class TestDetails:
    """Tests for per-subtopic detail extraction."""

    def test_sentences_after_subtopic(self):
        """Test the sentence fallback with a truncated title."""
        content = "Erosion. Wind slowly wears down exposed rock over many centuries of exposure. Water too."
        details = extract_details(content, "Erosion")
        assert details[0].name.endswith("...")
        assert details[0].details.startswith("Wind slowly wears down")

    def test_missing_subtopic_gets_generic_details(self):
        """Test the generic pair when the subtopic is not in the text."""
        details = extract_details("unrelated text", "Gravity")
        assert [d.name for d in details] == ["Key aspect of Gravity", "Application of Gravity"]
        assert details == generic_details("Gravity")

    def test_key_phrases(self):
        """Test middle-word windows and the deterministic second detail."""
        content = "Plate tectonics shapes the surface of the planet. Earthquakes release stored elastic energy."
        topics = extract_key_phrases(content)

        assert len(topics) == 2
        assert len(topics[0].subtopics) == 1
        assert len(topics[1].subtopics) == 2
        assert topics[0].name == "shapes the surface of"
