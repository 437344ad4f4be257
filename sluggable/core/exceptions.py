from typing import Optional


class SlugOperationError(Exception):
    """Raised when a slug cannot be generated or assigned.

    Every failure of the slug subsystem is an instance of this class, so
    callers only need to catch one type. ``cause`` holds the underlying
    exception when there is one.
    """

    default_message = "An error occurred during slug operation."

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


class BlankCandidateError(SlugOperationError):
    default_message = "Base slug cannot be blank"


class ExhaustedAttemptsError(SlugOperationError):
    def __init__(self, base: str, attempts: int):
        super().__init__(
            f"Unable to generate unique slug for: {base}, after {attempts} attempts"
        )
        self.base = base
        self.attempts = attempts


class MisconfiguredGeneratorError(SlugOperationError):
    default_message = "SlugGenerator not set"


class MisconfiguredProviderError(SlugOperationError):
    default_message = "SlugProvider not set"


class SlugBindingError(SlugOperationError):
    default_message = "Invalid slug declaration on entity"
