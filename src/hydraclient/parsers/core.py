from abc import ABC, abstractmethod
from typing import Iterator, TextIO, Iterable

from hydraclient.dataset import Quad


class ProcessingError(Exception):
    """Base class for errors raised while turning a response into quads."""


class UnsupportedMediaTypeError(ProcessingError):
    """Raised when no parser is registered for a media type."""
    def __init__(self, media_type: str, *args):
        super().__init__(*args)

        self.media_type = media_type
        """The media type as declared by the response, including any parameters"""

    def __str__(self):
        return f'Parser not found for media type {self.media_type}'


class MalformedInputError(ProcessingError):
    """Raised when a parser rejects its input as invalid syntax for its format.
    The original parser exception is available as `__cause__`."""
    def __init__(self, media_type: str, base_uri: str, *args):
        super().__init__(*args)
        self.media_type = media_type
        self.base_uri = base_uri

    def __str__(self):
        message = f'Unable to parse {self.media_type} representation of {self.base_uri}'
        if self.__cause__ is not None:
            message += f': {self.__cause__}'
        return message


class QuadParser(ABC):
    """Capability object that converts serialized RDF text into quads."""

    media_types: Iterable[str] = ()
    """Media types this parser handles; the first one is reported in `MalformedInputError`"""

    @abstractmethod
    def quads(self, stream: TextIO, base_uri: str) -> Iterator[Quad]:
        """Read serialized RDF from `stream` and yield its quads. Relative IRIs
        are resolved against `base_uri`. Raises `MalformedInputError` when the
        text is not valid for the parser's format."""
