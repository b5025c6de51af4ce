"""Media-type-driven RDF processing for clients of Hydra hypermedia APIs.

```python
from hydraclient.processors import RdfProcessor
from hydraclient.response import TypedText

processor = RdfProcessor()
if processor.can_process('text/turtle; charset=utf-8'):
    quads = await processor.process('http://example.com/api/people', TypedText('text/turtle', body))
```
"""
import importlib.metadata

__version__ = importlib.metadata.version('hydraclient')
