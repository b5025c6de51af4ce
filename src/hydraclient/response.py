import asyncio
import logging
from abc import ABC, abstractmethod
from typing import NamedTuple

from requests import Response

logger = logging.getLogger(__name__)


class ResponseWrapper(ABC):
    """A received response, as seen by a media type processor: its declared
    media type and a way to get its whole body as text."""

    @property
    @abstractmethod
    def media_type(self) -> str:
        """Value of the `Content-Type` header, including any parameters"""

    @abstractmethod
    async def text(self) -> str:
        """The full response body, decoded to a string"""


class TypedText(NamedTuple):
    """Data object combining a string value and its media type,
    expressed as a MIME type string. Usable wherever a `ResponseWrapper`
    is expected.

    ```pycon
    >>> turtle_data = TypedText('text/turtle', '<> a <http://www.w3.org/ns/hydra/core#Collection> .')
    >>> turtle_data.media_type
    'text/turtle'
    ```

    Supports `str()`, `len()`, and `bool()`. Returns the string value, the
    length of the string value, and the boolean cast of the string value,
    respectively.

    Two `TypedText` objects are only equal if both the string value
    and the media type match.
    """

    media_type: str
    """MIME type, e.g. "text/turtle" or "application/ld+json" """

    value: str
    """string value"""

    def __str__(self):
        return self.value

    def __bool__(self):
        return bool(self.value)

    def __len__(self):
        return len(self.value)

    async def text(self) -> str:
        return self.value


ResponseWrapper.register(TypedText)


class RequestsResponse(ResponseWrapper):
    """Adapts a Requests `Response` object. The body is read in a worker
    thread, since reading a streamed response blocks on the network."""

    def __init__(self, response: Response):
        self.response: Response = response
        """The wrapped Requests `Response` object"""

    def __repr__(self):
        return f'<{self.__class__.__name__} {self.response.url} {self.media_type}>'

    @property
    def media_type(self) -> str:
        return self.response.headers.get('Content-Type', '')

    async def text(self) -> str:
        logger.debug(f'Reading response body from {self.response.url}')
        return await asyncio.to_thread(lambda: self.response.text)
