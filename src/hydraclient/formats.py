import mimetypes
from pathlib import PurePath
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from hydraclient.parsers import ParserRegistry, QuadParser

# common RDF file extensions that are missing from many mimetypes databases
RDF_EXTENSIONS = {
    '.ttl': 'text/turtle',
    '.jsonld': 'application/ld+json',
    '.nt': 'application/n-triples',
    '.nq': 'application/n-quads',
    '.trig': 'application/trig',
    '.rdf': 'application/rdf+xml',
    '.owl': 'application/rdf+xml',
    '.n3': 'text/n3',
    '.trix': 'application/trix',
}


def normalize(media_type: Optional[str]) -> str:
    """Strip any parameters from a media type, and normalize its case.

    ```pycon
    >>> normalize('text/turtle; charset=utf-8')
    'text/turtle'

    >>> normalize('application/ld+json')
    'application/ld+json'

    >>> normalize('')
    ''
    ```
    """
    if not media_type:
        return ''
    return media_type.split(';', 1)[0].strip().lower()


def guess_media_type(path: str | PurePath) -> Optional[str]:
    """Guess a media type from a file name's extension."""
    suffix = PurePath(path).suffix.lower()
    if suffix in RDF_EXTENSIONS:
        return RDF_EXTENSIONS[suffix]
    return mimetypes.guess_type(str(path))[0]


class FormatResolver:
    """Answers whether a declared media type (possibly with parameters) has
    a parser, and which one."""

    def __init__(self, registry: 'ParserRegistry'):
        self.registry = registry

    def can_handle(self, media_type: Optional[str]) -> bool:
        key = normalize(media_type)
        return bool(key) and key in self.registry.keys()

    def resolve(self, media_type: Optional[str]) -> Optional['QuadParser']:
        key = normalize(media_type)
        if not key:
            return None
        return self.registry.find(key)
