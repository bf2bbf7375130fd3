"""The three kinds of metric which can be used to cost an edge. A metric is
identified by its name alone; metrics which build on others list the names
they need in `depends_on` and look their values up in the partially filled
cost vector."""

from abc import ABC, abstractmethod
from typing import Dict, Mapping, Sequence, Tuple

from bikegraph.containers import NodeRecord
from bikegraph.errors import UnknownMetricError


class Metric(ABC):
    """Common base for all metrics"""

    name: str = ""
    depends_on: Tuple[str, ...] = ()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class TagMetric(Metric):
    """A metric computed from the tags of the way an edge belongs to"""

    @abstractmethod
    def calc(self, tags: Mapping[str, str], bicycle_relation: bool = False) -> float:
        """Compute the metric for a way with the provided tags.

        Args:
            tags (Mapping[str, str]): The tags of the way
            bicycle_relation (bool): Whether the way is being processed as
              a member of a bicycle route relation

        Returns:
            float: The metric value shared by every edge of the way
        """


class NodeMetric(Metric):
    """A metric computed from the two endpoints of an edge"""

    @abstractmethod
    def calc(self, source: NodeRecord, dest: NodeRecord) -> float:
        """Compute the metric for the edge from `source` to `dest`"""


class CostMetric(Metric):
    """A metric derived from other, already computed metrics"""

    @abstractmethod
    def calc(self, costs: Sequence[float], indices: Dict[str, int]) -> float:
        """Compute the metric from a partial cost vector.

        Args:
            costs (Sequence[float]): The cost vector computed so far
            indices (Dict[str, int]): Maps each metric name to its position
              in `costs`

        Returns:
            float: The metric value for the edge
        """

    def lookup(
        self, costs: Sequence[float], indices: Dict[str, int], name: str
    ) -> float:
        """Fetch the value of metric `name` from `costs`, raising an
        UnknownMetricError if it is not registered."""
        try:
            return costs[indices[name]]
        except KeyError:
            raise UnknownMetricError(self.name, name) from None
