"""Exceptions raised while extracting a graph. Everything other than a
missing elevation tile aborts the extraction."""

from typing import Iterable


class ExtractionError(Exception):
    """Base class for all errors raised by bikegraph"""


class ConfigurationError(ExtractionError, ValueError):
    """Raised when an extraction option has a value which can not be
    used, e.g. a non-positive grid cell size or an unknown edge filter."""


class UnknownMetricError(ExtractionError):
    """Raised when a cost metric looks up a prerequisite which is not part
    of the metric registry."""

    def __init__(self, metric: str, missing: str):
        self.metric = metric
        self.missing = missing
        super().__init__(
            f"Metric '{metric}' depends on '{missing}', which is not "
            "registered"
        )


class NonFiniteMetricError(ExtractionError):
    """Raised when a metric evaluates to NaN or infinity. The operands which
    produced the value are attached for diagnosis."""

    def __init__(self, metric: str, value: float, *operands: float):
        self.metric = metric
        self.value = value
        self.operands = operands
        super().__init__(
            f"Metric '{metric}' produced non-finite value {value} "
            f"from operands {operands}"
        )


class NonFiniteTimeError(NonFiniteMetricError):
    """Travel time could not be computed, usually because of a zero speed"""

    def __init__(self, metric: str, value: float, distance: float, speed: float):
        self.distance = distance
        self.speed = speed
        super().__init__(metric, value, distance, speed)


class DanglingEdgeReference(ExtractionError):
    """Raised when an edge refers to a node which never appeared in the
    input."""

    def __init__(self, osm_id: int):
        self.osm_id = osm_id
        super().__init__(f"Edge refers to unknown node {osm_id}")


class UnsupportedMetricName(ExtractionError, ValueError):
    """Raised while building the metric registry for a name which is not in
    the metric catalogue."""

    def __init__(self, names: Iterable[str]):
        self.names = tuple(names)
        super().__init__(
            "Unsupported metric name(s): " + ", ".join(self.names)
        )


class ElevationTileError(ExtractionError):
    """An elevation tile exists but could not be read at the requested
    position."""


class MissingElevationTile(ExtractionError):
    """No tile covers the requested position. Handled by the elevation
    sampler, which falls back to a height of 0."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Could not find elevation tile {path}")
