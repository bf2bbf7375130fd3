"""Contains the MetricRegistry class, which fixes the layout of the cost
vector carried by each edge."""

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from bikegraph.containers import ExtractionConfig
from bikegraph.errors import ConfigurationError, UnsupportedMetricName
from bikegraph.metrics.base import Metric, TagMetric
from bikegraph.metrics.catalogue import CATALOGUE, MetricContext
from bikegraph.metrics.grid import Grid

logger = logging.getLogger(__name__)


class MetricRegistry:
    """Maps each metric name to its position in the cost vector. Metrics are
    laid out so that every metric comes after all metrics it depends on,
    which means a cost vector can be filled in a single pass.
    """

    def __init__(self, metrics: Sequence[Metric], internal: Iterable[str] = ()):
        """Create a registry for an already ordered set of metrics

        Args:
            metrics (Sequence[Metric]): The metrics, in cost vector order
            internal (Iterable[str]): Names of the metrics which should be
              computed, but not written out
        """
        self.metrics: Tuple[Metric, ...] = tuple(metrics)
        self.indices: Dict[str, int] = {}
        for index, metric in enumerate(self.metrics):
            if metric.name in self.indices:
                raise ConfigurationError(
                    f"Metric '{metric.name}' registered twice"
                )
            for dependency in metric.depends_on:
                if dependency not in self.indices:
                    raise ConfigurationError(
                        f"Metric '{metric.name}' must come after "
                        f"'{dependency}'"
                    )
            self.indices[metric.name] = index

        self.internal = frozenset(internal)
        unknown = self.internal - set(self.indices)
        if unknown:
            raise UnsupportedMetricName(sorted(unknown))

    @classmethod
    def from_names(
        cls,
        names: Iterable[str],
        internal_names: Iterable[str] = (),
        context: Optional[MetricContext] = None,
    ) -> "MetricRegistry":
        """Build a registry from metric names, adding any prerequisites
        which were not requested as internal metrics.

        Args:
            names (Iterable[str]): The metrics which should be written out
            internal_names (Iterable[str]): Metrics which should be computed
              but not written out. A name which appears in both lists is
              treated as internal.
            context (MetricContext): Shared state for the grid and random
              metrics

        Returns:
            MetricRegistry: The populated registry

        Raises:
            UnsupportedMetricName: If any of the names is not a known metric
        """
        names = list(dict.fromkeys(names))
        internal_names = list(dict.fromkeys(internal_names))

        unsupported = [
            name for name in names + internal_names if name not in CATALOGUE
        ]
        if unsupported:
            raise UnsupportedMetricName(unsupported)

        if context is None:
            context = MetricContext()
        ordered: List[Metric] = []
        seen = set()

        def visit(name: str):
            if name in seen:
                return
            seen.add(name)
            metric = CATALOGUE[name](context)
            for dependency in metric.depends_on:
                visit(dependency)
            ordered.append(metric)

        for name in names + internal_names:
            visit(name)

        requested = set(names) - set(internal_names)
        internal = [m.name for m in ordered if m.name not in requested]
        for name in internal:
            if name not in internal_names:
                logger.info("Adding '%s' as an internal metric", name)

        return cls(ordered, internal)

    @classmethod
    def from_config(cls, config: ExtractionConfig) -> "MetricRegistry":
        """Build the registry, and the grid/random state shared by its
        metrics, from the user configuration"""
        origin_lat, origin_lon = config.grid_origin
        context = MetricContext(
            grid=Grid(origin_lat, origin_lon, config.grid_cell_size),
            rng=np.random.default_rng(config.random_seed),
        )
        return cls.from_names(config.metrics, config.internal_metrics, context)

    def __len__(self) -> int:
        return len(self.metrics)

    def __contains__(self, name: str) -> bool:
        return name in self.indices

    def __iter__(self) -> Iterator[Metric]:
        return iter(self.metrics)

    def index(self, name: str) -> int:
        return self.indices[name]

    def metric_count(self) -> int:
        """The number of metrics which are written out for each edge"""
        return len(self.output_names())

    def output_names(self) -> List[str]:
        """Names of the non-internal metrics, in cost vector order"""
        return [m.name for m in self.metrics if m.name not in self.internal]

    def output_costs(self, costs: Sequence[float]) -> List[float]:
        """Drop the values of internal metrics from a full cost vector"""
        return [
            cost
            for metric, cost in zip(self.metrics, costs)
            if metric.name not in self.internal
        ]

    @property
    def tag_metrics(self) -> List[TagMetric]:
        return [m for m in self.metrics if isinstance(m, TagMetric)]
