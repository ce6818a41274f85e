"""Tests for the end-to-end mind map pipeline."""

import math

import pytest

from conftest import FailingCollaborator, ScriptedCollaborator
from promptmap.core.errors import EmptyInputError
from promptmap.schemas.mindmap import GenerationMode
from promptmap.services import mindmap_service
from promptmap.services.graph_builder import MAIN_ID


def _labels(data, prefix):
    return [node.label for node in data.nodes if node.id.startswith(prefix)]


class TestLocalPipeline:
    """Tests for the rule-based pipeline."""

    @pytest.mark.asyncio
    async def test_how_to_graph(self):
        """Test the main node and topic labels of a how-to map."""
        data = await mindmap_service.generate_mind_map("How to bake bread", GenerationMode.LOCAL)

        main = data.nodes[0]
        assert main.id == MAIN_ID and main.is_main and main.label == "Bake Bread"
        assert _labels(data, "topic-")[:2] == ["Process", "Requirements"]

    @pytest.mark.asyncio
    async def test_comparison_graph(self):
        """Test that comparison sides become topics."""
        data = await mindmap_service.generate_mind_map("Python vs JavaScript", GenerationMode.LOCAL)
        assert _labels(data, "topic-")[:4] == ["Python", "JavaScript", "Similarities", "Differences"]

    @pytest.mark.asyncio
    async def test_blank_prompt(self):
        """Test that no data is produced for blank input."""
        with pytest.raises(EmptyInputError):
            await mindmap_service.generate_mind_map("   ", GenerationMode.LOCAL)

    @pytest.mark.asyncio
    async def test_single_word(self):
        """Test a one-word prompt yields a graph."""
        data = await mindmap_service.generate_mind_map("Photosynthesis", GenerationMode.LOCAL)
        assert len(data.nodes) > 1
        assert data.edges

    @pytest.mark.asyncio
    async def test_idempotent(self):
        """Test that two runs give identical ids, labels, relations and coordinates."""
        first = await mindmap_service.generate_mind_map("How to bake bread", GenerationMode.LOCAL)
        second = await mindmap_service.generate_mind_map("How to bake bread", GenerationMode.LOCAL)
        assert first.model_dump() == second.model_dump()

    @pytest.mark.asyncio
    async def test_positions_within_outer_radius(self):
        """Test that relaxation keeps every node inside the clamp radius."""
        data = await mindmap_service.generate_mind_map("Effects of climate change", GenerationMode.LOCAL)
        assert all(math.hypot(n.position.x, n.position.y) <= 800 + 1e-6 for n in data.nodes)

    @pytest.mark.asyncio
    async def test_concept_failure_gives_simple_map(self, monkeypatch):
        """Test the word-ring fallback when no concept can be extracted."""
        monkeypatch.setattr(
            "promptmap.services.structure_generator.extract_main_concept", lambda prompt, prompt_type: "  "
        )
        data = await mindmap_service.generate_mind_map("tell me about rivers and lakes", GenerationMode.LOCAL)

        assert data.nodes[0].label == "tell me about..."
        assert [edge.id for edge in data.edges][:2] == ["edge-0", "edge-1"]

    @pytest.mark.asyncio
    async def test_configured_mode_is_default(self, local_mode):
        """Test that GENERATION_MODE applies when no mode is given."""
        data = await mindmap_service.generate_mind_map("How to bake bread")
        assert data.nodes[0].label == "Bake Bread"


class TestAssistedPipeline:
    """Tests for the structured collaborator path and its fallbacks."""

    @pytest.mark.asyncio
    async def test_structured_reply(self, structured_reply):
        """Test that a well-formed reply drives the map."""
        collaborator = ScriptedCollaborator(default=structured_reply)
        data = await mindmap_service.generate_mind_map("Explain photosynthesis", GenerationMode.ASSISTED, collaborator)

        assert len(collaborator.prompts) == 1
        assert data.nodes[0].label == "Photosynthesis"
        assert data.nodes[0].details == "How plants turn light into chemical energy."
        assert _labels(data, "topic-") == ["Light Reactions", "Calvin Cycle"]
        assert _labels(data, "subtopic-0-") == ["Chlorophyll", "Water splitting"]

    @pytest.mark.asyncio
    async def test_unavailable_collaborator_falls_back_to_local(self):
        """Test that provider failure still produces a full local map."""
        collaborator = FailingCollaborator()
        data = await mindmap_service.generate_mind_map("Explain quantum computing", GenerationMode.ASSISTED, collaborator)

        # one structured request plus six per-slot requests
        assert collaborator.calls == 7
        assert data.nodes[0].label == "Quantum Computing"
        assert "Pros & Cons" in _labels(data, "topic-")

    @pytest.mark.asyncio
    async def test_blank_structured_reply_falls_back(self):
        """Test that an empty structured reply uses the local analysis."""
        collaborator = ScriptedCollaborator()
        data = await mindmap_service.generate_mind_map("How to bake bread", GenerationMode.ASSISTED, collaborator)
        assert data.nodes[0].label == "Bake Bread"
        assert _labels(data, "topic-")[0] == "Process"

    @pytest.mark.asyncio
    async def test_assisted_without_keys_runs_locally(self, no_provider_keys):
        """Test that assisted mode without credentials never reaches a provider."""
        data = await mindmap_service.generate_mind_map("How to bake bread", GenerationMode.ASSISTED)
        assert data.nodes[0].label == "Bake Bread"


class TestAnalyze:
    """Tests for the analysis-only entry point."""

    @pytest.mark.asyncio
    async def test_returns_tree(self):
        """Test that the tree is returned without graph conversion."""
        analysis = await mindmap_service.analyze("What is photosynthesis?", GenerationMode.LOCAL)
        assert analysis.main_concept == "Photosynthesis"
        assert analysis.topics[0].name == "Definition"
