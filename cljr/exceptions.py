"""Custom exceptions for cljr commands."""


class CljrError(Exception):
    """Base class for errors that abort a command and are shown to the user."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NotVisitingFileError(CljrError):
    """Raised when a command needs a file but the buffer has none."""

    def __init__(self, buffer_name: str):
        self.buffer_name = buffer_name
        super().__init__(f"Buffer '{buffer_name}' is not visiting a file!")


class BufferExistsError(CljrError):
    """Raised when renaming onto a name that already has an open buffer."""

    def __init__(self, buffer_name: str):
        self.buffer_name = buffer_name
        super().__init__(f"A buffer named '{buffer_name}' already exists!")


class NamespaceNotFoundError(CljrError):
    """Raised when the buffer has no (ns ...) declaration."""

    def __init__(self) -> None:
        super().__init__("No namespace declaration found")


class UnbalancedError(CljrError):
    """Raised when brackets do not balance while moving over a list."""

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"Unbalanced parentheses at position {position}")


class TargetFileExistsError(CljrError):
    """Raised when renaming onto a path that another file already occupies."""

    def __init__(self, file_name: str):
        self.file_name = file_name
        super().__init__(f"File '{file_name}' already exists!")
