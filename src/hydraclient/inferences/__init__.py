"""Inference rules that add statements implied by Hydra vocabulary usage.

Each rule is a function that takes a `QuadDataset` and adds quads to it in
place. Rules never remove quads, and only use knowledge of the Hydra
vocabulary itself (no network access).

`INFERENCES` lists the rules that `run_inferences()` applies, repeating them
until none of them adds anything. To add a rule, write the function and
append it to that tuple.
"""
import logging
from typing import Callable, Iterable

from hydraclient.dataset import QuadDataset
from hydraclient.inferences.manages import add_explicit_statements_from_manages_blocks
from hydraclient.inferences.ranges import add_types_from_property_ranges

logger = logging.getLogger(__name__)

Inference = Callable[[QuadDataset], None]

INFERENCES: tuple[Inference, ...] = (
    add_explicit_statements_from_manages_blocks,
    add_types_from_property_ranges,
)


def run_inferences(dataset: QuadDataset, inferences: Iterable[Inference] = INFERENCES):
    """Apply the rules repeatedly until a full pass adds no quads. Statements
    added by one rule can match another rule (or an earlier block of the same
    rule), so the result does not depend on rule order, and running this
    again on the result adds nothing."""
    inferences = tuple(inferences)
    passes = 0
    while True:
        passes += 1
        total = dataset.quad_count()
        for inference in inferences:
            before = dataset.quad_count()
            inference(dataset)
            added = dataset.quad_count() - before
            logger.debug(f'Inference {inference.__name__} added {added} quad(s) in pass {passes}')
        if dataset.quad_count() == total:
            break
