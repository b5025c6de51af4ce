import asyncio

import pytest

from hydraclient.dataset import Quad, QuadDataset
from hydraclient.parsers import ParserRegistry, build_default_registry
from hydraclient.processors import RdfProcessor
from hydraclient.response import TypedText

BASE_URI = 'http://example.com/api/people'


@pytest.fixture
def registry() -> ParserRegistry:
    """A fresh registry with only the built-in parsers, so that tests
    registering parsers do not affect each other."""
    return build_default_registry(load_plugins=False)


@pytest.fixture
def processor(registry) -> RdfProcessor:
    return RdfProcessor(registry=registry)


@pytest.fixture
def process(processor):
    """Run `processor.process()` to completion and return the output quads as a set."""
    def _process(media_type: str, body: str, uri: str = BASE_URI) -> set[Quad]:
        return set(asyncio.run(processor.process(uri, TypedText(media_type, body))))
    return _process


@pytest.fixture
def load_dataset(shared_datadir):
    def _load_dataset(filename: str, rdflib_format: str = 'turtle', base_uri: str = BASE_URI) -> QuadDataset:
        dataset = QuadDataset()
        dataset.parse(data=(shared_datadir / filename).read_text(), format=rdflib_format, publicID=base_uri)
        return dataset
    return _load_dataset

