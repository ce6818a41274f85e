import logging
import asyncio
from typing import List, Optional, Protocol

import google.generativeai as genai
from groq import AsyncGroq

from promptmap.core.config import settings
from promptmap.core.errors import CollaboratorUnavailable, ProviderNotConfigured

logger = logging.getLogger(__name__)

# ── Clients Initialization ────────────────────────────────────────────────────
logger.info(f"[INIT] AI_PROVIDER set to: {settings.AI_PROVIDER}")

groq_client: Optional[AsyncGroq] = None
if settings.GROQ_API_KEY:
    groq_client = AsyncGroq(api_key=settings.GROQ_API_KEY)
    logger.info("[INIT] ✓ Groq client initialized")
else:
    logger.warning("[INIT] ✗ Groq API key missing")

if settings.GOOGLE_API_KEY:
    genai.configure(api_key=settings.GOOGLE_API_KEY, transport="rest")
    logger.info("[INIT] ✓ Gemini client initialized")
else:
    logger.warning("[INIT] ✗ Google API key missing")


# ── Prompts ───────────────────────────────────────────────────────────────────

SYSTEM_PROMPT = (
    "You write short, plain-text study notes that are turned into mind maps.\n"
    "Answer only what is asked. Use one item per line when listing.\n"
    "DO NOT answer with JSON, markdown tables or code."
)

CONTENT_TEMPLATE = (
    'Generate detailed information about "{topic}" in relation to "{main_concept}".\n\n'
    "Format your response as follows:\n\n"
    "MAIN TOPIC: [Short title for the main topic]\n\n"
    "DESCRIPTION: [Provide a thorough description of the main topic - "
    "2-3 sentences with important details]\n\n"
    "SUBTOPICS:\n"
    "1. [Subtopic 1]\n"
    "   - [Detail 1 with explanation]\n"
    "   - [Detail 2 with explanation]\n\n"
    "2. [Subtopic 2]\n"
    "   - [Detail 1 with explanation]\n"
    "   - [Detail 2 with explanation]\n\n"
    "For each subtopic and detail, include enough explanation to provide context and understanding.\n"
    "Keep subtopic titles concise, but provide detailed descriptions.\n"
    "DO NOT provide the response as JSON or code."
)


# ── Core: Call Groq ───────────────────────────────────────────────────────────

async def _call_groq(system_prompt: str, user_prompt: str) -> str:
    """Call Groq (Llama 3) for plain-text generation."""
    if not groq_client:
        raise ProviderNotConfigured("Groq API Key missing")

    logger.info(f"Calling Groq ({settings.GROQ_MODEL})...")
    completion = await groq_client.chat.completions.create(
        model=settings.GROQ_MODEL,
        messages=[
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
        temperature=settings.AI_TEMPERATURE,
        max_tokens=settings.AI_MAX_TOKENS,
    )
    result = completion.choices[0].message.content
    logger.info("✓ Groq call succeeded")
    return result


# ── Core: Call Gemini ─────────────────────────────────────────────────────────

async def _call_gemini(system_prompt: str, user_prompt: str) -> str:
    """Call Gemini for plain-text generation."""
    if not settings.GOOGLE_API_KEY:
        raise ProviderNotConfigured("Google API Key missing")

    logger.info(f"Calling Gemini ({settings.GEMINI_MODEL})...")
    model = genai.GenerativeModel(
        model_name=settings.GEMINI_MODEL,
        generation_config={
            "temperature": settings.AI_TEMPERATURE,
            "max_output_tokens": settings.AI_MAX_TOKENS,
        },
    )
    full_prompt = f"{system_prompt}\n\nUser Task:\n{user_prompt}"
    response = await asyncio.to_thread(model.generate_content, full_prompt)
    logger.info("✓ Gemini call succeeded")
    return response.text


# ── Hybrid Call with Failover ─────────────────────────────────────────────────

def provider_configured() -> bool:
    """True when at least one provider enabled by AI_PROVIDER has an API key."""
    provider = settings.AI_PROVIDER
    if provider == "groq":
        return bool(settings.GROQ_API_KEY)
    if provider == "gemini":
        return bool(settings.GOOGLE_API_KEY)
    return bool(settings.GROQ_API_KEY or settings.GOOGLE_API_KEY)


async def _hybrid_call(system_prompt: str, user_prompt: str, primary: str = "gemini") -> str:
    """
    Execute with failover. If primary fails in hybrid mode, try the other.
    primary can be 'groq' or 'gemini'.
    """
    if not provider_configured():
        raise ProviderNotConfigured(
            f"No API key configured for AI_PROVIDER='{settings.AI_PROVIDER}'"
        )

    provider = settings.AI_PROVIDER

    # Determine call order
    if provider == "groq":
        callers = [("Groq", _call_groq)]
    elif provider == "gemini":
        callers = [("Gemini", _call_gemini)]
    else:  # hybrid
        if primary == "groq":
            callers = [("Groq", _call_groq), ("Gemini", _call_gemini)]
        else:
            callers = [("Gemini", _call_gemini), ("Groq", _call_groq)]

    last_error = None
    for name, caller in callers:
        try:
            text = await caller(system_prompt, user_prompt)
            if text and text.strip():
                return text
            last_error = CollaboratorUnavailable(f"{name} returned an empty reply")
            logger.warning(f"{name} returned an empty reply. Trying next provider...")
        except Exception as e:
            last_error = e
            logger.warning(f"{name} failed: {str(e)[:200]}. Trying next provider...")

    raise CollaboratorUnavailable(f"All AI providers failed. Last error: {str(last_error)}")


# ── Collaborator ──────────────────────────────────────────────────────────────

class TextGenerator(Protocol):
    """Anything that turns a prompt into prose. Raises CollaboratorUnavailable on failure."""

    async def generate(self, prompt: str) -> str:
        ...


class HybridTextGenerator:
    """TextGenerator backed by Gemini and Groq with provider failover."""

    def __init__(self, primary: str = "gemini", system_prompt: str = SYSTEM_PROMPT):
        self.primary = primary
        self.system_prompt = system_prompt

    async def generate(self, prompt: str) -> str:
        return await _hybrid_call(self.system_prompt, prompt, primary=self.primary)


# ── Content Generation ────────────────────────────────────────────────────────

def missing_fields(topic: Optional[str], main_concept: Optional[str]) -> List[str]:
    missing = []
    if not topic or not topic.strip():
        missing.append("topic")
    if not main_concept or not main_concept.strip():
        missing.append("mainConcept")
    return missing


async def generate_content(
    topic: Optional[str],
    main_concept: Optional[str],
    prompt: Optional[str] = None,
    generator: Optional[TextGenerator] = None,
) -> str:
    """Generate prose about `topic` in relation to `main_concept`."""
    missing = missing_fields(topic, main_concept)
    if missing:
        raise ValueError(f"Missing required fields: {', '.join(missing)}")

    generator = generator or HybridTextGenerator()
    logger.info(f"[CONTENT] Generating for topic='{topic}', mainConcept='{main_concept}'")
    user_prompt = prompt or CONTENT_TEMPLATE.format(topic=topic, main_concept=main_concept)
    return await generator.generate(user_prompt)
