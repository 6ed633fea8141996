# Exception hierarchy for skill-porter


class PorterError(Exception):
    """Base class for all skill-porter errors.

    ABOUTME: Structural failures raise a subclass of this
    ABOUTME: Advisory problems are reported as warnings instead
    """


class DirectoryNotFoundError(PorterError):
    """Target directory does not exist or is not a directory."""


class MissingRequiredFileError(PorterError):
    """Entry document or manifest required by an operation is absent."""


class MalformedDocumentError(PorterError):
    """Document could not be parsed or lacks required metadata."""


class UnsupportedPlatformError(PorterError):
    """Platform name is not one of the recognized values."""


class DetectionAmbiguousError(PorterError):
    """Directory holds no recognizable files of either platform."""


class CommandError(PorterError):
    """External command failed.

    ABOUTME: Carries the command line and captured stderr
    ABOUTME: Message is surfaced verbatim by callers
    """

    def __init__(self, message: str, cmd: list[str] | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.cmd = list(cmd) if cmd else []
        self.stderr = stderr
