"""Reference dataset: the percentile universe scores are computed against.

JSON layout::

    {
      "metrics": ["cyclomatic", "fn_cyclomatic_avg", ...],
      "values": {
        "cyclomatic": [1, 1, 2, ...],              # scalar metric
        "fn_cyclomatic": {"avg": [...], ...}       # per-function metric
      },
      "moduleRanks": [0.4, 1.9, ...]
    }

``metrics`` lists the eligible keys; an aggregate key is ``<metric>_<suffix>``.
Every distribution is ascending. The dataset is immutable once loaded.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from ..exceptions import ReferenceDatasetError
from ..logging_config import get_logger

logger = get_logger(__name__)

Distribution = tuple[float, ...]

BUNDLED_DATASET = "reference.json"


@dataclass(frozen=True)
class ReferenceDataset:
    metrics: frozenset[str]
    values: Mapping[str, Union[Distribution, Mapping[str, Distribution]]]
    module_ranks: Distribution
    source: Optional[str] = None

    @property
    def max_module_rank(self) -> float:
        return self.module_ranks[-1]

    def is_eligible(self, key: str) -> bool:
        return key in self.metrics

    def distribution(self, metric: str, suffix: Optional[str] = None) -> Distribution:
        """Sorted reference values of a scalar metric, or of one aggregate suffix.

        Raises:
            ReferenceDatasetError: If the dataset has no such distribution or
                its shape does not match the lookup
        """
        entry = self.values.get(metric)
        if suffix is None:
            if not isinstance(entry, tuple):
                raise ReferenceDatasetError(f"'{metric}' has no flat distribution", self._path)
            return entry
        if not isinstance(entry, Mapping) or suffix not in entry:
            raise ReferenceDatasetError(f"'{metric}_{suffix}' has no distribution", self._path)
        return entry[suffix]

    @property
    def _path(self) -> Optional[Path]:
        return Path(self.source) if self.source else None

    @classmethod
    def from_dict(cls, data: Any, source: Optional[str] = None) -> "ReferenceDataset":
        """Validate raw JSON data and freeze it.

        Raises:
            ReferenceDatasetError: On any structural problem
        """
        path = Path(source) if source else None
        if not isinstance(data, dict):
            raise ReferenceDatasetError("top level must be an object", path)
        for key in ("metrics", "values", "moduleRanks"):
            if key not in data:
                raise ReferenceDatasetError(f"missing '{key}'", path)

        raw_metrics = data["metrics"]
        if not isinstance(raw_metrics, list) or not all(isinstance(m, str) for m in raw_metrics):
            raise ReferenceDatasetError("'metrics' must be a list of names", path)
        raw_values = data["values"]
        if not isinstance(raw_values, dict):
            raise ReferenceDatasetError("'values' must be an object", path)

        values: dict[str, Union[Distribution, Mapping[str, Distribution]]] = {}
        for metric, entry in raw_values.items():
            if isinstance(entry, dict):
                values[metric] = MappingProxyType(
                    {
                        suffix: _distribution(f"{metric}_{suffix}", seq, path)
                        for suffix, seq in entry.items()
                    }
                )
            else:
                values[metric] = _distribution(metric, entry, path)

        dataset = cls(
            metrics=frozenset(raw_metrics),
            values=MappingProxyType(values),
            module_ranks=_distribution("moduleRanks", data["moduleRanks"], path),
            source=source,
        )
        for key in sorted(dataset.metrics):
            _resolve(dataset, key)
        if dataset.max_module_rank <= 0:
            raise ReferenceDatasetError("'moduleRanks' maximum must be positive", path)
        return dataset


def _distribution(name: str, seq: Any, path: Optional[Path]) -> Distribution:
    if not isinstance(seq, list) or not seq:
        raise ReferenceDatasetError(f"'{name}' must be a non-empty list", path)
    if not all(isinstance(v, (int, float)) and not isinstance(v, bool) for v in seq):
        raise ReferenceDatasetError(f"'{name}' must contain numbers only", path)
    if any(a > b for a, b in zip(seq, seq[1:])):
        raise ReferenceDatasetError(f"'{name}' is not sorted ascending", path)
    return tuple(seq)


def _resolve(dataset: ReferenceDataset, key: str) -> Distribution:
    """Distribution for an eligible key, flat or ``<metric>_<suffix>``."""
    entry = dataset.values.get(key)
    if isinstance(entry, tuple):
        return entry
    metric, _, suffix = key.rpartition("_")
    if metric:
        return dataset.distribution(metric, suffix)
    raise ReferenceDatasetError(f"'{key}' has no distribution", dataset._path)


def load_reference_dataset(path: Optional[Union[str, Path]] = None) -> ReferenceDataset:
    """Load a dataset from ``path``, or the bundled one when ``path`` is None.

    Raises:
        ReferenceDatasetError: If the file is unreadable, not JSON, or malformed
    """
    if path is None:
        resource = resources.files("testability_insight").joinpath("data").joinpath(BUNDLED_DATASET)
        source = str(resource)
        try:
            raw = resource.read_text(encoding="utf-8")
        except OSError as e:
            raise ReferenceDatasetError(f"bundled dataset unavailable: {e}") from e
    else:
        source = str(path)
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ReferenceDatasetError(f"cannot read file: {e}", Path(path)) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ReferenceDatasetError(f"invalid JSON: {e}", Path(source)) from e

    dataset = ReferenceDataset.from_dict(data, source=source)
    logger.debug(
        f"Loaded reference dataset from {source}: {len(dataset.metrics)} metrics, "
        f"{len(dataset.module_ranks)} module ranks"
    )
    return dataset
