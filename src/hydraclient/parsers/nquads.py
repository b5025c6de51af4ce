"""Streaming parser for N-Quads and N-Triples.

Unlike the rdflib parser plugins, which write every statement into a graph
before returning, this parser yields each quad as soon as its line has been
read, so a consumer sees the first quads before the rest of the document has
been parsed."""
import logging
from typing import Iterator, Optional, TextIO

from rdflib.exceptions import ParserError
from rdflib.plugins.parsers.ntriples import W3CNTriplesParser, r_tail, r_wspace

from hydraclient.dataset import Quad, as_quad
from hydraclient.parsers.core import QuadParser, MalformedInputError

logger = logging.getLogger(__name__)


class QuadLineParser(W3CNTriplesParser):
    """Line parser reusing the term-level machinery of rdflib's N-Triples
    parser. The optional fourth term of each line is the graph label; lines
    without one belong to the default graph, so plain N-Triples documents
    are accepted as well."""

    def iter_quads(self, stream: TextIO) -> Iterator[Quad]:
        self.file = stream
        self.buffer = ''
        while True:
            self.line = line = self.readline()
            if self.line is None:
                break
            try:
                quad = self.consume()
            except ParserError as e:
                raise ParserError(f'Invalid line ({e}): {line!r}') from e
            if quad is not None:
                yield quad

    def consume(self) -> Optional[Quad]:
        self.eat(r_wspace)
        if (not self.line) or self.line.startswith('#'):
            return None  # The line is empty or a comment

        subject = self.subject()
        self.eat(r_wspace)

        predicate = self.predicate()
        self.eat(r_wspace)

        obj = self.object()
        self.eat(r_wspace)

        context = self.uriref() or self.nodeid()
        self.eat(r_tail)

        if self.line:
            raise ParserError('Trailing garbage')
        return as_quad(subject, predicate, obj, context or None)


class NQuadsParser(QuadParser):
    """Streaming `QuadParser` for `application/n-quads` and `application/n-triples`.

    All IRIs in these formats are absolute, so the base URI is only used in
    error reporting."""

    def __init__(self, *media_types: str):
        self.media_types = media_types or ('application/n-quads', 'application/n-triples')

    def __repr__(self):
        return f'{self.__class__.__name__}({", ".join(repr(m) for m in self.media_types)})'

    def quads(self, stream: TextIO, base_uri: str) -> Iterator[Quad]:
        # a new line parser for each document, so blank node labels
        # are never shared between documents
        try:
            yield from QuadLineParser().iter_quads(stream)
        except ParserError as e:
            raise MalformedInputError(self.media_types[0], base_uri) from e
