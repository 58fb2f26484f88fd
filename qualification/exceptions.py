"""Errors raised by the lead qualification engine."""


class QualificationError(Exception):
    """Base class for qualification engine errors."""


class NotFoundError(QualificationError):
    """A required record does not exist."""


class ConfigNotFoundError(NotFoundError):
    """The qualification config singleton is missing (setup/migration problem)."""

    def __init__(self, message: str = "Qualification config not found"):
        super().__init__(message)


class StaleConfigError(QualificationError):
    """The config row changed since the caller last read it."""

    def __init__(self, expected_version: int, current_version: int):
        self.expected_version = expected_version
        self.current_version = current_version
        super().__init__(
            f"Qualification config is at version {current_version}, "
            f"expected {expected_version}"
        )
