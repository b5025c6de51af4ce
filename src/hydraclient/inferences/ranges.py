import logging

from rdflib import Literal

from hydraclient.dataset import QuadDataset
from hydraclient.namespaces import hydra, rdf

logger = logging.getLogger(__name__)

# rdfs:range declarations from the Hydra core vocabulary
PROPERTY_RANGES = {
    hydra.apiDocumentation: hydra.ApiDocumentation,
    hydra.collection: hydra.Collection,
}


def add_types_from_property_ranges(dataset: QuadDataset):
    """Type the objects of Hydra properties with the classes in their declared
    ranges, e.g. `?s hydra:apiDocumentation ?doc` yields `?doc rdf:type
    hydra:ApiDocumentation`."""
    for prop, range_class in PROPERTY_RANGES.items():
        for _, _, obj, graph in list(dataset.match(predicate=prop)):
            if isinstance(obj, Literal):
                logger.debug(f'Skipping literal value of {prop} for type inference')
                continue
            dataset.add_quad((obj, rdf.type, range_class, graph))
