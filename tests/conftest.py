"""Pytest configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from promptmap.core.config import settings
from promptmap.core.errors import CollaboratorUnavailable
from promptmap.main import app


class ScriptedCollaborator:
    """Answers each prompt with the first reply whose key appears in it."""

    def __init__(self, replies=None, default=""):
        self.replies = replies or {}
        self.default = default
        self.prompts = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        for key, reply in self.replies.items():
            if key in prompt:
                return reply
        return self.default


class FailingCollaborator:
    """Every call fails the way an unreachable provider does."""

    def __init__(self):
        self.calls = 0

    async def generate(self, prompt: str) -> str:
        self.calls += 1
        raise CollaboratorUnavailable("All AI providers failed. Last error: connection refused")


@pytest.fixture
def client() -> TestClient:
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def no_provider_keys(monkeypatch):
    """Run without any Groq / Gemini credentials."""
    monkeypatch.setattr(settings, "GROQ_API_KEY", None)
    monkeypatch.setattr(settings, "GOOGLE_API_KEY", None)


@pytest.fixture
def local_mode(monkeypatch):
    monkeypatch.setattr(settings, "GENERATION_MODE", "local")


@pytest.fixture
def structured_reply() -> str:
    return (
        "MAIN TOPIC: Photosynthesis\n"
        "DESCRIPTION: How plants turn light into chemical energy.\n"
        "SUBTOPICS:\n"
        "1. Light Reactions\n"
        "   - Chlorophyll: absorbs sunlight\n"
        "   - Water splitting: releases oxygen\n"
        "2. Calvin Cycle\n"
        "   - Carbon fixation: builds sugars\n"
    )
