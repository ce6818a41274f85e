"""Tests for the structure generator in local and assisted modes."""

import pytest

from conftest import FailingCollaborator, ScriptedCollaborator
from promptmap.core.errors import EmptyInputError
from promptmap.schemas.mindmap import GenerationMode, PromptType
from promptmap.services.structure_generator import StructureGenerator

QUANTUM_REPLIES = {
    "concise definition": "A model of computation that uses qubits.",
    "fundamental essence": "Superposition and entanglement do the work.",
    "key components": (
        "1. Qubits: basic units of quantum information\n"
        "2. Quantum gates: operations on qubits\n"
        "3. Measurement: reads out results"
    ),
    "concrete examples": "- Shor's algorithm\n- Grover's search\n- Quantum annealing",
    "practical applications": "Cryptography: breaking RSA\nDrug discovery: molecular simulation",
    "advantages and 3 limitations": "Advantages:\n- Speed\n- Parallelism\nLimitations:\n- Decoherence\n- Cost",
}


def _topic(analysis, name):
    return next(topic for topic in analysis.topics if topic.name == name)


class TestLocalMode:
    """Tests for purely rule-based analysis."""

    @pytest.mark.asyncio
    async def test_how_to(self):
        """Test classification, concept and slots for a how-to prompt."""
        analysis = await StructureGenerator().analyze_prompt("How to bake bread")

        assert analysis.prompt_type == PromptType.HOW_TO
        assert analysis.main_concept == "Bake Bread"
        names = [topic.name for topic in analysis.topics]
        assert "Process" in names and "Requirements" in names and "Challenges" in names

    @pytest.mark.parametrize("prompt", ["", "   \n\t", None])
    @pytest.mark.asyncio
    async def test_blank_prompt(self, prompt):
        """Test that blank input is rejected."""
        with pytest.raises(EmptyInputError):
            await StructureGenerator().analyze_prompt(prompt)

    @pytest.mark.asyncio
    async def test_single_word(self):
        """Test that a one-word prompt still yields topics."""
        analysis = await StructureGenerator().analyze_prompt("Photosynthesis")
        assert analysis.main_concept == "Photosynthesis"
        assert analysis.topics

    @pytest.mark.asyncio
    async def test_collaborator_unused_in_local_mode(self):
        """Test that local mode never calls the collaborator."""
        collaborator = ScriptedCollaborator(QUANTUM_REPLIES)
        await StructureGenerator(GenerationMode.LOCAL, collaborator).analyze_prompt("Explain quantum computing")
        assert collaborator.prompts == []


class TestAssistedMode:
    """Tests for per-slot collaborator requests."""

    @pytest.mark.asyncio
    async def test_all_slots_from_collaborator(self):
        """Test that parsed replies fill every slot, one request per slot."""
        collaborator = ScriptedCollaborator(QUANTUM_REPLIES)
        generator = StructureGenerator(GenerationMode.ASSISTED, collaborator)
        analysis = await generator.analyze_prompt("Explain quantum computing")

        assert len(collaborator.prompts) == 6
        assert collaborator.prompts[0] == 'Provide a concise definition of "Quantum Computing" in 1-2 sentences.'
        assert [t.name for t in analysis.topics] == [
            "Definition", "Components", "Examples", "Applications", "Pros & Cons",
        ]

        definition = _topic(analysis, "Definition")
        assert definition.details == "Quantum Computing refers to A model of computation that uses qubits."
        assert definition.subtopics[0].details == "Superposition and entanglement do the work."

        components = _topic(analysis, "Components").subtopics
        assert [c.name for c in components] == ["Qubits", "Quantum gates", "Measurement"]
        assert components[1].details == "operations on qubits"

        examples = _topic(analysis, "Examples").subtopics
        assert [e.name for e in examples] == ["Shor's algorithm", "Grover's search", "Quantum annealing"]

        applications = _topic(analysis, "Applications").subtopics
        assert [a.name for a in applications] == ["Cryptography", "Drug discovery"]

        advantages, limitations = _topic(analysis, "Pros & Cons").subtopics
        assert [d.name for d in advantages.children] == ["Speed", "Parallelism"]
        assert [d.name for d in limitations.children] == ["Decoherence", "Cost"]

    @pytest.mark.asyncio
    async def test_failing_collaborator_uses_canned_content(self):
        """Test that an unavailable collaborator degrades every slot to canned content."""
        collaborator = FailingCollaborator()
        generator = StructureGenerator(GenerationMode.ASSISTED, collaborator)
        analysis = await generator.analyze_prompt("Explain quantum computing")

        assert collaborator.calls == 6
        definition = _topic(analysis, "Definition")
        assert definition.details == "Quantum Computing refers to a concept or system related to Quantum Computing"
        assert [c.name for c in _topic(analysis, "Components").subtopics] == [
            "Primary Element", "Supporting Structure", "Operational Mechanisms",
        ]
        advantages, _ = _topic(analysis, "Pros & Cons").subtopics
        assert [d.name for d in advantages.children] == [
            "Increased Efficiency", "Improved Quality", "Enhanced Flexibility",
        ]

    @pytest.mark.asyncio
    async def test_blank_replies_use_canned_content(self):
        """Test that empty replies are treated as malformed."""
        generator = StructureGenerator(GenerationMode.ASSISTED, ScriptedCollaborator())
        analysis = await generator.analyze_prompt("Explain quantum computing")
        examples = _topic(analysis, "Examples").subtopics
        assert [e.name for e in examples] == ["Practical Application", "Real-world Example", "Common Instance"]

    @pytest.mark.asyncio
    async def test_domain_flavored_fallback(self):
        """Test that the canned slot follows the prompt's domain."""
        generator = StructureGenerator(GenerationMode.ASSISTED, FailingCollaborator())
        analysis = await generator.analyze_prompt("Explain software networks")
        examples = _topic(analysis, "Examples").subtopics
        assert examples[0].name == "Artificial Intelligence"

    @pytest.mark.asyncio
    async def test_missing_section_falls_back_alone(self):
        """Test that a reply with only advantages keeps them and fills limitations from canned content."""
        replies = dict(QUANTUM_REPLIES)
        replies["advantages and 3 limitations"] = "Pros:\n- Speed"
        generator = StructureGenerator(GenerationMode.ASSISTED, ScriptedCollaborator(replies))
        analysis = await generator.analyze_prompt("Explain quantum computing")

        advantages, limitations = _topic(analysis, "Pros & Cons").subtopics
        assert [d.name for d in advantages.children] == ["Speed"]
        assert [d.name for d in limitations.children] == [
            "Resource Requirements", "Implementation Complexity", "Potential Drawbacks",
        ]

    @pytest.mark.asyncio
    async def test_non_concept_prompt_stays_local(self):
        """Test that only concept prompts request slots from the collaborator."""
        collaborator = ScriptedCollaborator(QUANTUM_REPLIES)
        generator = StructureGenerator(GenerationMode.ASSISTED, collaborator)
        analysis = await generator.analyze_prompt("How to bake bread")

        assert collaborator.prompts == []
        assert analysis.topics[0].name == "Process"
