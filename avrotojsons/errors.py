"""
Exceptions raised by the Avro to JSON Schema converter.
"""

from typing import Optional


class AvroToJsonsError(Exception):
    """
    Base class for all errors raised by avrotojsons.

    Attributes:
        message: Human-readable error description
        context: Optional context about where the error occurred
        cause: Optional underlying exception that caused this error
    """

    def __init__(self, message: str, context: Optional[str] = None,
                 cause: Optional[Exception] = None) -> None:
        self.message = message
        self.context = context
        self.cause = cause
        full_message = message
        if context:
            full_message = f"{message} (context: {context})"
        super().__init__(full_message)


class SchemaParseError(AvroToJsonsError):
    """
    Raised when the Avro schema text is not valid JSON or a node lacks
    a discriminator needed to walk it (type, name, fields, ...).
    """


class ConversionError(AvroToJsonsError):
    """
    Raised when the converter hits an internal invariant violation.
    Well-formed input never produces this error.
    """
