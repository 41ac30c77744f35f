"""Run the inventory demo: ``python -m tabular_engine``."""

from __future__ import annotations

from tabular_engine.adapters import LoggingTableSink, sample_products
from tabular_engine.application import TableEngine, run_inventory_demo
from tabular_engine.infrastructure import (
    get_config,
    get_logger,
    setup_logging_from_config,
    setup_metrics,
    setup_tracing,
)


def main() -> None:
    config = get_config()
    setup_logging_from_config(config.observability)
    if config.observability.otel_endpoint:
        setup_tracing(
            service_name=config.observability.otel_service_name,
            otlp_endpoint=config.observability.otel_endpoint,
        )
    if config.observability.metrics_enabled:
        setup_metrics(port=config.observability.metrics_port)

    logger = get_logger(__name__, service=config.observability.otel_service_name)
    with TableEngine(config) as engine:
        products = run_inventory_demo(engine, sample_products(), LoggingTableSink())
    logger.info("inventory_demo_finished", products=len(products))


if __name__ == "__main__":
    main()
