import asyncio
from typing import Iterator, TextIO
from unittest.mock import MagicMock

import pytest
from rdflib import Graph, URIRef, Literal
from rdflib.compare import isomorphic

from hydraclient.dataset import DEFAULT_GRAPH, Quad, as_quad
from hydraclient.namespaces import hydra, rdf, schema
from hydraclient.parsers import (
    REGISTRY,
    MalformedInputError,
    QuadParser,
    RDFLibParser,
    UnsupportedMediaTypeError,
)
from hydraclient.processors import RdfProcessor
from hydraclient.response import ResponseWrapper, TypedText

BASE_URI = 'http://example.com/api/people'
PEOPLE = URIRef('http://example.com/api/people')
PERSON_1 = URIRef('http://example.com/api/people/1')
PERSON_2 = URIRef('http://example.com/api/people/2')
TEAM = URIRef('http://example.com/api/team')
DOC = URIRef('http://example.com/api/doc')


class RecordingParser(QuadParser):
    """Parser for a made-up line format: each line is "subject predicate object",
    as absolute IRIs separated by spaces."""
    media_types = ('text/x-triples',)

    def __init__(self):
        self.calls = []

    def quads(self, stream: TextIO, base_uri: str) -> Iterator[Quad]:
        self.calls.append(base_uri)
        for line in stream.read().splitlines():
            if line.strip():
                s, p, o = (URIRef(term) for term in line.split())
                yield as_quad(s, p, o)


class KeepingParser(QuadParser):
    """Delegates to another parser, and keeps a copy of every quad it yields."""

    def __init__(self, parser: QuadParser):
        self.parser = parser
        self.parsed = []

    def quads(self, stream: TextIO, base_uri: str) -> Iterator[Quad]:
        for quad in self.parser.quads(stream, base_uri):
            self.parsed.append(quad)
            yield quad


def as_graph(quads) -> Graph:
    graph = Graph()
    for s, p, o, _ in quads:
        graph.add((s, p, o))
    return graph


class FailingResponse(ResponseWrapper):
    media_type = 'text/turtle'

    async def text(self) -> str:
        raise ConnectionError('connection reset')


def test_can_process(processor):
    assert processor.can_process('text/turtle')
    assert processor.can_process('application/ld+json; charset=utf-8')
    assert processor.can_process('application/n-quads')
    assert not processor.can_process('application/json')
    assert not processor.can_process('')


def test_default_registry():
    assert RdfProcessor().registry is REGISTRY


def test_process_turtle(process, shared_datadir):
    quads = process('text/turtle; charset=utf-8', (shared_datadir / 'people.ttl').read_text())
    assert (PEOPLE, rdf.type, hydra.Collection, DEFAULT_GRAPH) in quads
    assert (PERSON_2, schema.name, Literal('Grace'), DEFAULT_GRAPH) in quads
    # inferred
    assert (PERSON_1, rdf.type, schema.Person, DEFAULT_GRAPH) in quads
    assert (PERSON_2, rdf.type, schema.Person, DEFAULT_GRAPH) in quads
    assert (TEAM, schema.member, PERSON_1, DEFAULT_GRAPH) in quads
    assert (TEAM, schema.member, PERSON_2, DEFAULT_GRAPH) in quads
    assert (DOC, rdf.type, hydra.ApiDocumentation, DEFAULT_GRAPH) in quads


def test_process_jsonld(process, shared_datadir):
    quads = process('application/ld+json', (shared_datadir / 'people.jsonld').read_text())
    assert (PERSON_1, rdf.type, schema.Person, DEFAULT_GRAPH) in quads
    assert (PERSON_2, rdf.type, schema.Person, DEFAULT_GRAPH) in quads


def test_process_nquads(process, shared_datadir):
    quads = process('application/n-quads', (shared_datadir / 'people.nq').read_text())
    graph = URIRef('http://example.com/graphs/people')
    assert (PERSON_1, rdf.type, schema.Person, graph) in quads
    assert (PERSON_1, schema.name, Literal('Ada', lang='en'), DEFAULT_GRAPH) in quads


def test_output_is_a_superset_of_the_input(process, shared_datadir, processor):
    parser = KeepingParser(RDFLibParser('turtle', 'text/turtle'))
    processor.add_parsers({'text/turtle': parser})

    output = process('text/turtle', (shared_datadir / 'people.ttl').read_text())

    assert parser.parsed
    assert set(parser.parsed) < output


def test_processing_is_repeatable(process, shared_datadir):
    text = (shared_datadir / 'people.ttl').read_text()
    # each parse mints its own blank nodes
    assert isomorphic(as_graph(process('text/turtle', text)), as_graph(process('text/turtle', text)))


def test_empty_body(process):
    assert process('text/turtle', '') == set()


def test_unsupported_media_type(processor):
    with pytest.raises(UnsupportedMediaTypeError) as exc_info:
        asyncio.run(processor.process(BASE_URI, TypedText('application/json', '{}')))
    assert exc_info.value.media_type == 'application/json'


def test_malformed_input(processor):
    with pytest.raises(MalformedInputError) as exc_info:
        asyncio.run(processor.process(BASE_URI, TypedText('text/turtle', '<> a <Collection')))
    assert exc_info.value.base_uri == BASE_URI


def test_read_errors_propagate(processor):
    with pytest.raises(ConnectionError):
        asyncio.run(processor.process(BASE_URI, FailingResponse()))


def test_output_stream_is_single_use(processor):
    stream = asyncio.run(processor.process(BASE_URI, TypedText('text/turtle', '<> a <http://schema.org/Thing> .')))
    assert list(stream) == [(PEOPLE, rdf.type, schema.Thing, DEFAULT_GRAPH)]
    assert list(stream) == []


def test_add_parsers(processor):
    parser = RecordingParser()
    assert not processor.can_process('text/x-triples')

    processor.add_parsers({'text/x-triples': parser})

    assert processor.can_process('text/x-triples; charset=utf-8')
    body = f'{PEOPLE} {hydra.apiDocumentation} {DOC}\n'
    quads = set(asyncio.run(processor.process(BASE_URI, TypedText('text/x-triples', body))))
    assert parser.calls == [BASE_URI]
    assert quads == {
        (PEOPLE, hydra.apiDocumentation, DOC, DEFAULT_GRAPH),
        (DOC, rdf.type, hydra.ApiDocumentation, DEFAULT_GRAPH),
    }


def test_add_parsers_replaces_builtin(processor):
    parser = RecordingParser()
    processor.add_parsers({'text/turtle': parser})
    body = f'{PEOPLE} {rdf.type} {hydra.Collection}\n'
    quads = set(asyncio.run(processor.process(BASE_URI, TypedText('text/turtle', body))))
    assert parser.calls == [BASE_URI]
    assert quads == {(PEOPLE, rdf.type, hydra.Collection, DEFAULT_GRAPH)}


def test_processors_sharing_a_registry(registry):
    first = RdfProcessor(registry=registry)
    second = RdfProcessor(registry=registry)
    first.add_parsers({'text/x-triples': RecordingParser()})
    assert second.can_process('text/x-triples')


def test_concurrent_processing(processor, shared_datadir):
    turtle = (shared_datadir / 'people.ttl').read_text()
    nquads = (shared_datadir / 'people.nq').read_text()

    async def process_all():
        streams = await asyncio.gather(
            processor.process(BASE_URI, TypedText('text/turtle', turtle)),
            processor.process(BASE_URI, TypedText('application/n-quads', nquads)),
            processor.process('http://example.com/api/other', TypedText('text/turtle', turtle)),
        )
        return [set(stream) for stream in streams]

    from_turtle, from_nquads, from_other = asyncio.run(process_all())
    assert (TEAM, schema.member, PERSON_1, DEFAULT_GRAPH) in from_turtle
    assert (TEAM, schema.member, PERSON_1, DEFAULT_GRAPH) not in from_nquads
    # each call resolves against its own base URI
    assert (URIRef('http://example.com/api/other'), rdf.type, hydra.Collection, DEFAULT_GRAPH) in from_other
    assert (PEOPLE, rdf.type, hydra.Collection, DEFAULT_GRAPH) not in from_other


def test_parser_receives_body_and_base_uri(processor):
    parser = MagicMock(spec=QuadParser)
    parser.quads.return_value = iter([(PEOPLE, rdf.type, hydra.Collection, DEFAULT_GRAPH)])
    processor.add_parsers({'text/x-mock': parser})

    quads = list(asyncio.run(processor.process(BASE_URI, TypedText('text/x-mock; charset=utf-8', 'body text'))))

    parser.quads.assert_called_once()
    stream, base_uri = parser.quads.call_args.args
    assert stream.read() == 'body text'
    assert base_uri == BASE_URI
    assert quads == [(PEOPLE, rdf.type, hydra.Collection, DEFAULT_GRAPH)]
