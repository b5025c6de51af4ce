"""Namespaces of the vocabularies that Hydra API responses use."""

from typing import Optional

from rdflib import Namespace, Graph
from rdflib.namespace import NamespaceManager

hydra = Namespace('http://www.w3.org/ns/hydra/core#')
"""[Hydra Core Vocabulary](https://www.hydra-cg.com/spec/latest/core/)"""

rdf = Namespace('http://www.w3.org/1999/02/22-rdf-syntax-ns#')
"""[RDF](https://www.w3.org/TR/rdf11-schema/)"""

schema = Namespace('http://schema.org/')
"""[Schema.org](https://schema.org/)

**Note:** Hydra's JSON-LD context and most Hydra APIs use the `http:` form
of this namespace, so that is what is bound here."""

PREFIXES = {
    'hydra': hydra,
    'rdf': rdf,
    'schema': schema,
}


def get_manager(graph: Optional[Graph] = None) -> NamespaceManager:
    """Namespace manager for `graph` (or a new graph) with the `PREFIXES`
    bound, replacing any default binding of the same prefix."""
    nsm = NamespaceManager(graph if graph is not None else Graph())
    for prefix, ns in PREFIXES.items():
        nsm.bind(prefix, ns, override=True, replace=True)
    return nsm
