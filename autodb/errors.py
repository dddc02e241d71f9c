# User-facing messages shown at the request boundary
PROMPT_REQUIRED_MESSAGE = "Please write the system description first."
GENERATION_FAILED_MESSAGE = "Failed to generate the diagram."
NO_SCHEMA_MESSAGE = "There is no diagram to download"
GENERATION_IN_PROGRESS_MESSAGE = "A schema is already being generated, please wait."


class ArchitectError(Exception):
    """Base class for every error raised by autodb"""


class PromptRequiredError(ArchitectError):
    """The prompt was empty; nothing was sent upstream"""

    def __init__(self, message: str = PROMPT_REQUIRED_MESSAGE):
        super().__init__(message)


class GenerationError(ArchitectError):
    """The schema service was unreachable or answered with something unusable"""


class MalformedSchemaError(GenerationError):
    """A decoded reply does not have the shape of a schema document"""


class NoSchemaError(ArchitectError):
    """An export was requested before any schema was generated"""

    def __init__(self, message: str = NO_SCHEMA_MESSAGE):
        super().__init__(message)
