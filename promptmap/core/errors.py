"""
Pipeline exceptions.

Only EmptyInputError is meant to reach API callers. The others are raised
inside the pipeline and recovered by the stage that owns the fallback.
"""


class EmptyInputError(ValueError):
    """The prompt was empty or whitespace only."""


class ConceptExtractionFailure(ValueError):
    """No main concept could be derived from the prompt."""


class CollaboratorUnavailable(RuntimeError):
    """The text-generation collaborator failed, is unconfigured, or replied with nothing."""


class MalformedCollaboratorReply(ValueError):
    """The collaborator replied, but nothing usable could be parsed from it."""


class ProviderNotConfigured(CollaboratorUnavailable):
    """No API key is configured for any enabled text-generation provider."""
