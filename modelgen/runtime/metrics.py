"""Prometheus metrics for wire operations."""

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from ..config.logging import get_logger
from ..synth.models import MetricSpec, SynthesisResult

logger = get_logger(__name__)


class MetricsRegistry:
    """Latency histograms and error counters, held in an explicit registry.

    Metrics are never registered in the process-wide default registry, so
    several models (or test cases) can live side by side.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        self.registry = registry or CollectorRegistry()
        self._metrics: dict[str, Histogram | Counter] = {}

    def register(self, spec: MetricSpec) -> Histogram | Counter:
        """Register a metric, returning the existing one on duplicate names."""
        existing = self._metrics.get(spec.name)
        if existing is not None:
            logger.debug("Metric '%s' already registered", spec.name)
            return existing

        if spec.metric_type == "histogram":
            metric = Histogram(
                spec.name,
                spec.help,
                buckets=spec.buckets,
                registry=self.registry,
            )
        else:
            metric = Counter(spec.name, spec.help, registry=self.registry)

        self._metrics[spec.name] = metric
        return metric

    def register_all(self, synthesis: SynthesisResult) -> None:
        for spec in synthesis.metrics():
            self.register(spec)

    def __contains__(self, name: str) -> bool:
        return name in self._metrics

    def observe(self, name: str, value: float) -> None:
        self._metrics[name].observe(value)

    def inc(self, name: str) -> None:
        self._metrics[name].inc()

    def counter_value(self, name: str) -> float:
        """Current value of a counter, 0 when never incremented."""
        return self.registry.get_sample_value(f"{name}_total") or 0.0

    def observation_count(self, name: str) -> float:
        """Number of observations of a histogram."""
        return self.registry.get_sample_value(f"{name}_count") or 0.0

    def exposition(self) -> str:
        """Render every registered metric in the text exposition format."""
        return generate_latest(self.registry).decode("utf-8")
