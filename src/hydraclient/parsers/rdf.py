import logging
from typing import Iterator, TextIO
from xml.sax import SAXParseException

from rdflib.exceptions import ParserError

from hydraclient.dataset import Quad, QuadDataset
from hydraclient.parsers.core import QuadParser, MalformedInputError

logger = logging.getLogger(__name__)

# BadSyntax from the Turtle/N3/TriG parsers is a subclass of SyntaxError,
# and JSON decoding errors are subclasses of ValueError
PARSE_ERRORS = (SyntaxError, ParserError, SAXParseException, ValueError)


class RDFLibParser(QuadParser):
    """Parser that delegates to one of rdflib's parser plugins. The whole
    document is parsed into a private `QuadDataset` before any quads are
    yielded, since rdflib's parsers write to a graph rather than returning
    their statements."""

    def __init__(self, rdflib_format: str, *media_types: str):
        self.format = rdflib_format
        """rdflib parser plugin name"""
        self.media_types = media_types or (rdflib_format,)

    def __repr__(self):
        return f'{self.__class__.__name__}({self.format!r})'

    def quads(self, stream: TextIO, base_uri: str) -> Iterator[Quad]:
        dataset = QuadDataset()
        try:
            dataset.parse(data=stream.read(), format=self.format, publicID=base_uri)
        except PARSE_ERRORS as e:
            raise MalformedInputError(self.media_types[0], base_uri) from e
        logger.debug(f'Parsed {dataset.quad_count()} quad(s) from {self.format} document at {base_uri}')
        yield from dataset.match()
