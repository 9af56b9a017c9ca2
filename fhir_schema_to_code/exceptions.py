"""
Exceptions raised inside the type graph builder.

None of these escape ``resolve``: the driver turns them into error strings
attributed to the document being processed.
"""


class ResolutionError(Exception):
    """Aborts the build of the type node for the current document."""


class DocumentLoadError(Exception):
    """A specification file could not be read or registered."""

    def __init__(self, filename: str, message: str):
        super().__init__(f"{filename}: {message}")
        self.filename = filename
        self.message = message
