"""Custom exceptions for specdeck."""


class SpecdeckError(Exception):
    """Base exception for specdeck operations."""


class ParseError(SpecdeckError):
    """Error while interpreting document content."""


class FrontMatterDecodeError(ParseError):
    """Front matter is present but is not a valid YAML mapping.

    Attributes:
        raw_value: The undecoded front matter payload.
        message: The underlying decoder message.
    """

    def __init__(self, raw_value: str, message: str) -> None:
        self.raw_value = raw_value
        self.message = message
        super().__init__(f"Failed to parse YAML front matter: {message}")


class MissingFrontMatterError(ParseError):
    """Document requires front matter but has none."""


class DocumentNotFoundError(SpecdeckError):
    """Requested document does not exist."""


class OverlayError(SpecdeckError):
    """Error while creating or updating an overlay document."""


class InvalidIdentifierError(SpecdeckError):
    """Identifier cannot be used to name a document file."""
