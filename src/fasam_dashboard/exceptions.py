"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class FatalIOError(Exception):
    """Raised when the renderer or input source can no longer talk to the terminal."""


class InvariantViolation(RuntimeError):
    """Raised when an in-memory data structure breaks a guaranteed invariant.

    This signals a programming defect. Nothing in the runtime catches it.
    """
