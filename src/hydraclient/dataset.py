from typing import Iterable, Iterator, Optional

from rdflib import Dataset
from rdflib.graph import DATASET_DEFAULT_GRAPH_ID
from rdflib.term import Node

DEFAULT_GRAPH = DATASET_DEFAULT_GRAPH_ID
"""Graph name used for quads in the default graph"""

Quad = tuple[Node, Node, Node, Node]
"""Subject, predicate, object, and graph name"""


def as_quad(s: Node, p: Node, o: Node, g: Optional[Node] = None) -> Quad:
    """Build a quad, using `DEFAULT_GRAPH` when `g` is `None`."""
    return s, p, o, g if g is not None else DEFAULT_GRAPH


class QuadDataset(Dataset):
    """An RDF dataset that is read and written in terms of quads whose graph
    component is always a graph name. The default graph is named by
    `DEFAULT_GRAPH`, never by `None`.

    Storage is a regular in-memory rdflib store, so the set semantics (no
    duplicate quads) come from the store."""

    def add_quad(self, quad: Quad) -> 'QuadDataset':
        s, p, o, g = quad
        self.add(as_quad(s, p, o, g))
        return self

    def import_quads(self, quads: Iterable[Quad]) -> 'QuadDataset':
        """Consume the `quads` iterable, adding each quad to this dataset."""
        for quad in quads:
            self.add_quad(quad)
        return self

    def match(
        self,
        subject: Optional[Node] = None,
        predicate: Optional[Node] = None,
        obj: Optional[Node] = None,
        graph: Optional[Node] = None,
    ) -> Iterator[Quad]:
        """Iterate over the quads matching the pattern. `None` in any position
        is a wildcard; a `None` graph matches every graph, including the
        default graph."""
        for s, p, o, g in self.quads((subject, predicate, obj, graph)):
            quad = as_quad(s, p, o, g)
            # the store reports every graph holding a matched triple
            if graph is not None and quad[3] != graph:
                continue
            yield quad

    def values(self, subject: Node, predicate: Node) -> set[Node]:
        """Set of objects of `subject predicate ?o` in any graph."""
        return {o for _, _, o, _ in self.match(subject, predicate)}

    def to_stream(self) -> Iterator[Quad]:
        """A fresh, single-use iterator over a snapshot of every quad in this dataset."""
        yield from list(self.match())

    def quad_count(self) -> int:
        return sum(1 for _ in self.match())
