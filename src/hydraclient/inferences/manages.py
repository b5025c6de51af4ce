"""Expansion of Hydra manages blocks into explicit statements.

A manages block describes a statement that holds for every member of a
collection. In the member-relation form, the block names a subject and a
property:

```turtle
</people> hydra:member </people/1>, </people/2> ;
    hydra:manages [ hydra:subject </team> ; hydra:property schema:member ] .
```

which yields `</team> schema:member </people/1>` and `</team> schema:member
</people/2>`. In the type-declaration form, the block names a property and
an object:

```turtle
</people> hydra:member </people/1>, </people/2> ;
    hydra:manages [ hydra:property rdf:type ; hydra:object schema:Person ] .
```

which yields `</people/1> rdf:type schema:Person` and `</people/2> rdf:type
schema:Person`.
"""
import logging
from typing import Iterator, Optional

from rdflib import Literal
from rdflib.term import Node

from hydraclient.dataset import Quad, QuadDataset
from hydraclient.namespaces import hydra

logger = logging.getLogger(__name__)


def single_value(dataset: QuadDataset, block: Node, predicate: Node) -> Optional[Node]:
    """Return the only resource value of `block predicate ?o`. Returns
    `None` if there is no value, more than one value, or a literal value."""
    values = dataset.values(block, predicate)
    if len(values) != 1:
        return None
    value = values.pop()
    if isinstance(value, Literal):
        return None
    return value


def statements_for_block(dataset: QuadDataset, collection: Node, block: Node, graph: Node) -> Iterator[Quad]:
    """Yield the statements a single manages block asserts about the members
    of `collection`. Yields nothing for a block that is malformed or partial."""
    if len(dataset.values(block, hydra.subject)) + len(dataset.values(block, hydra.object)) != 1:
        logger.debug(f'Skipping manages block {block} of {collection}: needs exactly one subject or object')
        return
    subject = single_value(dataset, block, hydra.subject)
    prop = single_value(dataset, block, hydra.property)
    obj = single_value(dataset, block, hydra.object)
    if prop is None or (subject is None and obj is None):
        logger.debug(f'Skipping manages block {block} of {collection}: incomplete or invalid values')
        return

    for member in dataset.values(collection, hydra.member):
        if subject is not None:
            yield subject, prop, member, graph
        elif not isinstance(member, Literal):
            yield member, prop, obj, graph


def add_explicit_statements_from_manages_blocks(dataset: QuadDataset):
    """For each `hydra:manages` block, add the statement it describes for every
    member of the managing collection, in the graph where the block is attached."""
    for collection, _, block, graph in list(dataset.match(predicate=hydra.manages)):
        if isinstance(block, Literal):
            continue
        for quad in list(statements_for_block(dataset, collection, block, graph)):
            dataset.add_quad(quad)
