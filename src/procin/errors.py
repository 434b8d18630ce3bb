"""procin exception hierarchy.

Reading failures derive from ``ReadError``; mistakes in a kind declaration
derive from ``KindError``.  Nothing inside the library catches either.
"""

from __future__ import annotations


class ProcinError(Exception):
    """Base for all procin-specific errors."""


class ConfigurationError(ProcinError):
    """Raised when a ``ReaderConfig`` value is invalid."""


# ---------------------------------------------------------------------------
# Reading failures
# ---------------------------------------------------------------------------

class ReadError(ProcinError):
    """A value could not be read from a source.

    ``expected`` names the kind being read, ``token`` holds the offending
    bytes (``None`` when the source ran dry) and ``index`` is the 1-based
    ordinal of the token within its source.
    """

    def __init__(
        self,
        message: str,
        expected: str,
        token: bytes | None = None,
        index: int | None = None,
    ) -> None:
        self.message = message
        self.expected = expected
        self.token = token
        self.index = index
        super().__init__(self._render())

    def _render(self) -> str:
        where = f" at token #{self.index}" if self.index is not None else ""
        if self.token is None:
            return f"{self.message} (expected {self.expected}{where})"
        return f"{self.message}: {self.token!r} (expected {self.expected}{where})"


class ExhaustedError(ReadError):
    """The source had no token left when one was required."""

    def __init__(self, expected: str, index: int | None = None) -> None:
        super().__init__("input exhausted", expected, None, index)


class MalformedError(ReadError):
    """A token does not parse as the requested kind."""

    def __init__(
        self,
        expected: str,
        token: bytes,
        index: int | None = None,
        reason: str = "malformed token",
    ) -> None:
        super().__init__(reason, expected, token, index)


class UnderflowError(MalformedError):
    """A one-indexed kind was applied to its type's minimum value."""

    def __init__(self, expected: str, token: bytes, index: int | None = None) -> None:
        super().__init__(expected, token, index, reason="index underflow")


# ---------------------------------------------------------------------------
# Declaration failures
# ---------------------------------------------------------------------------

class KindError(ProcinError):
    """A kind descriptor is not well formed."""


class KindSyntaxError(KindError):
    """Textual kind grammar could not be parsed."""

    def __init__(self, message: str, text: str, column: int) -> None:
        self.text = text
        self.column = column
        super().__init__(f"[col {column}] {message}: {text!r}")


class UnknownKindError(KindError):
    """A kind name resolves to neither a built-in nor a registered typedef."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"unknown kind {name!r}")


class UnboundNameError(KindError):
    """A length expression references a name that has not been read yet."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"name {name!r} is not bound")
