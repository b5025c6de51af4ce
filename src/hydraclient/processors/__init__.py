import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, Mapping

from hydraclient.dataset import Quad, QuadDataset
from hydraclient.formats import FormatResolver
from hydraclient.inferences import INFERENCES, Inference, run_inferences
from hydraclient.parsers import REGISTRY, ParserRegistry, QuadParser
from hydraclient.response import ResponseWrapper
from hydraclient.streams import StreamParser

logger = logging.getLogger(__name__)


class MediaTypeProcessor(ABC):
    @abstractmethod
    def can_process(self, media_type: str) -> bool:
        """Whether this processor can handle a response with the given media type."""

    @abstractmethod
    async def process(self, uri: str, response: ResponseWrapper) -> Iterator[Quad]:
        """Turn the response for `uri` into a stream of quads."""


def materialize(quads: Iterable[Quad]) -> QuadDataset:
    """Consume the quad stream into a new dataset."""
    return QuadDataset().import_quads(quads)


class RdfProcessor(MediaTypeProcessor):
    """Processes RDF responses: parses the body with the parser registered for
    its media type, buffers the quads into a dataset, runs the inference rules
    over it, and returns a new stream over the augmented dataset.

    Each call to `process()` gets its own dataset; the parser registry is the
    only state shared between calls. Unless a `registry` is given, the
    process-wide `hydraclient.parsers.REGISTRY` is used."""

    def __init__(self, registry: ParserRegistry = None, inferences: Iterable[Inference] = INFERENCES):
        self.registry = registry if registry is not None else REGISTRY
        self.inferences = tuple(inferences)
        self.resolver = FormatResolver(self.registry)
        self.stream_parser = StreamParser(self.registry)

    def can_process(self, media_type: str) -> bool:
        return self.resolver.can_handle(media_type)

    async def process(self, uri: str, response: ResponseWrapper) -> Iterator[Quad]:
        """Parse and augment the body of `response`, using `uri` as the base URI.

        Raises `UnsupportedMediaTypeError` if there is no parser for the
        response's media type, and `MalformedInputError` if the body is not
        valid for that media type. Errors reading the body are propagated
        unchanged."""
        text = await response.text()
        quads = self.stream_parser.parse(text, uri, response.media_type)
        # inference needs pattern queries, so the whole stream is buffered first
        dataset = await asyncio.to_thread(materialize, quads)
        logger.debug(f'Loaded {dataset.quad_count()} quad(s) from {uri}')
        run_inferences(dataset, self.inferences)
        return dataset.to_stream()

    def add_parsers(self, parsers: Mapping[str, QuadParser]):
        """Register additional parsers, keyed by media type. Each one replaces any
        parser already registered for the same media type."""
        self.registry.update(parsers)
