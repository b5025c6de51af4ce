import logging
from io import StringIO
from typing import Iterator

from hydraclient.dataset import Quad
from hydraclient.formats import FormatResolver
from hydraclient.parsers import ParserRegistry, UnsupportedMediaTypeError

logger = logging.getLogger(__name__)


class StreamParser:
    """Turns response text into a lazy stream of quads, using the parser
    registered for the response's media type."""

    def __init__(self, registry: ParserRegistry):
        self.resolver = FormatResolver(registry)

    def parse(self, text: str, base_uri: str, media_type: str) -> Iterator[Quad]:
        """Return an iterator over the quads in `text`, resolving relative
        IRIs against `base_uri`.

        Raises `UnsupportedMediaTypeError` right away if there is no parser for
        `media_type`. Syntax errors are only detected as the iterator is
        consumed, and are raised from it as `MalformedInputError`."""
        parser = self.resolver.resolve(media_type)
        if parser is None:
            raise UnsupportedMediaTypeError(media_type)
        logger.debug(f'Parsing {media_type} representation of {base_uri} with {parser!r}')
        return parser.quads(StringIO(text), base_uri)
