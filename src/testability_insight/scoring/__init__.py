"""Percentile scoring against a reference dataset."""

from .engine import ScoringEngine, calc_scores
from .ranks import calc_rank, exact_index, normalized_rank
from .reference import ReferenceDataset, load_reference_dataset

__all__ = [
    "ScoringEngine",
    "calc_scores",
    "calc_rank",
    "exact_index",
    "normalized_rank",
    "ReferenceDataset",
    "load_reference_dataset",
]
