"""Parsers that turn serialized RDF into quads, and the registry that maps
media types to them.

The process-wide `REGISTRY` is populated once, when this module is first
imported, with the built-in parsers and any parsers published by installed
distributions in the `hydraclient.parsers` entry point group. The entry point
name is the media type, and the entry point object is either a `QuadParser`
subclass (which is instantiated with no arguments) or a `QuadParser` instance:

```toml
[project.entry-points."hydraclient.parsers"]
"text/x-custom" = "mypackage.parsers:CustomParser"
```

After that, the registry only changes through its `register()` and
`update()` methods (or `RdfProcessor.add_parsers()`).
"""
import logging
import threading
from typing import Iterator, Mapping, Optional, TextIO, Union, Type

from importlib_metadata import EntryPoint, entry_points

from hydraclient.dataset import Quad
from hydraclient.formats import normalize
from hydraclient.parsers.core import (
    ProcessingError,
    UnsupportedMediaTypeError,
    MalformedInputError,
    QuadParser,
)
from hydraclient.parsers.nquads import NQuadsParser
from hydraclient.parsers.rdf import RDFLibParser

__all__ = [
    'PLUGIN_GROUP',
    'REGISTRY',
    'MalformedInputError',
    'NQuadsParser',
    'ParserRegistry',
    'ProcessingError',
    'QuadParser',
    'RDFLibParser',
    'UnsupportedMediaTypeError',
    'build_default_registry',
    'load_parser',
]

logger = logging.getLogger(__name__)

PLUGIN_GROUP = 'hydraclient.parsers'


class ParserRegistry:
    """Mapping of normalized media types to `QuadParser` objects.

    Registration replaces any existing entry for the same media type. Writes
    are serialized by a lock, and each write is a single dictionary item
    assignment, so concurrent lookups see either the old or the new parser.
    """

    def __init__(self, parsers: Mapping[str, QuadParser] = None):
        self._parsers: dict[str, QuadParser] = {}
        self._lock = threading.Lock()
        if parsers is not None:
            self.update(parsers)

    def __contains__(self, media_type: str) -> bool:
        return self.find(media_type) is not None

    def __len__(self) -> int:
        return len(self._parsers)

    def __repr__(self):
        return f'{self.__class__.__name__}({sorted(self.keys())})'

    def register(self, media_type: str, parser: QuadParser):
        """Register `parser` for `media_type`, replacing any existing parser
        for that media type. Parameters on the media type are discarded."""
        key = normalize(media_type)
        if not key:
            raise ValueError('Cannot register a parser for an empty media type')
        with self._lock:
            previous = self._parsers.get(key)
            self._parsers[key] = parser
        if previous is not None and previous is not parser:
            logger.debug(f'Replaced parser {previous!r} for {key} with {parser!r}')
        else:
            logger.debug(f'Registered parser {parser!r} for {key}')

    def update(self, parsers: Mapping[str, QuadParser]):
        """Register each media type and parser pair in `parsers`."""
        for media_type, parser in parsers.items():
            self.register(media_type, parser)

    def unregister(self, media_type: str):
        with self._lock:
            self._parsers.pop(normalize(media_type), None)

    def find(self, media_type: str) -> Optional[QuadParser]:
        """Return the parser registered for the exact normalized `media_type`,
        or `None` if there isn't one."""
        return self._parsers.get(normalize(media_type))

    def keys(self) -> set[str]:
        """Snapshot of the registered media types."""
        with self._lock:
            return set(self._parsers.keys())

    def import_quads(self, media_type: str, stream: TextIO, base_uri: str) -> Optional[Iterator[Quad]]:
        """Return a quad iterator for `stream` using the parser for `media_type`,
        or `None` if no parser is registered for it."""
        parser = self.find(media_type)
        if parser is None:
            return None
        return parser.quads(stream, base_uri)


def builtin_parsers() -> dict[str, QuadParser]:
    return {
        'application/n-quads': NQuadsParser('application/n-quads'),
        'application/n-triples': NQuadsParser('application/n-triples'),
        'text/turtle': RDFLibParser('turtle', 'text/turtle'),
        'application/ld+json': RDFLibParser('json-ld', 'application/ld+json'),
        'application/trig': RDFLibParser('trig', 'application/trig'),
        'application/rdf+xml': RDFLibParser('xml', 'application/rdf+xml'),
        'text/n3': RDFLibParser('n3', 'text/n3'),
        'application/trix': RDFLibParser('trix', 'application/trix'),
    }


def as_parser(obj: Union[QuadParser, Type[QuadParser]], name: str) -> QuadParser:
    if isinstance(obj, type) and issubclass(obj, QuadParser):
        return obj()
    if isinstance(obj, QuadParser):
        return obj
    raise TypeError(f'{name} does not refer to a QuadParser class or instance')


def load_parser(reference: str) -> QuadParser:
    """Load a parser from a `"module:attribute"` reference string, using the
    same syntax as an entry point object reference."""
    entry_point = EntryPoint(name=reference, value=reference, group=PLUGIN_GROUP)
    return as_parser(entry_point.load(), reference)


def load_plugin_parsers(registry: ParserRegistry):
    """Register every parser advertised in the `hydraclient.parsers` entry
    point group. Plugins that fail to load are logged and skipped."""
    for plugin in entry_points(group=PLUGIN_GROUP):
        try:
            parser = as_parser(plugin.load(), plugin.value)
        except (ImportError, AttributeError, TypeError) as e:
            logger.error(f'Unable to load parser plugin {plugin.name} ({plugin.value}): {e}')
            continue
        registry.register(plugin.name, parser)
        logger.debug(f'Loaded parser plugin {plugin.value} for {plugin.name}')


def build_default_registry(load_plugins: bool = True) -> ParserRegistry:
    """Create a registry containing the built-in parsers, followed by any
    entry point plugins (so that a plugin can replace a built-in parser)."""
    registry = ParserRegistry(builtin_parsers())
    if load_plugins:
        load_plugin_parsers(registry)
    return registry


REGISTRY = build_default_registry()
"""Process-wide parser registry"""
