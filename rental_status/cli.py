"""Run an agreement expiration sweep over a generated lease portfolio."""

import argparse
import logging
from datetime import date, datetime, timedelta

from rental_status.config import RentalStatusConfig
from rental_status.exceptions import SinkError
from rental_status.events import StatusEventPublisher
from rental_status.logging import setup_logging
from rental_status.rules.expiration import ExpirationSweeper
from rental_status.scenarios import LeasePortfolioScenario
from rental_status.sinks import ConsoleSink, KafkaSink

logger = logging.getLogger(__name__)


def build_sink(kind: str, config: RentalStatusConfig):
    """Create the event sink named on the command line."""
    if kind == "console":
        return ConsoleSink(pretty=False, max_records=5)
    if kind == "kafka":
        return KafkaSink(config.kafka)
    return None


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    config = RentalStatusConfig.from_env()

    parser = argparse.ArgumentParser(
        description="Expire lapsed rental agreements and free their properties"
    )
    parser.add_argument(
        "--properties",
        type=int,
        default=100,
        help="Number of properties to generate (default: 100)",
    )
    parser.add_argument(
        "--expired-rate",
        type=float,
        default=0.25,
        help="Share of agreements already past their end date (default: 0.25)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=config.seed if config.seed is not None else 42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--now",
        type=date.fromisoformat,
        default=None,
        help="Reference date for the sweep, YYYY-MM-DD (default: today)",
    )
    parser.add_argument(
        "--sink",
        choices=["none", "console", "kafka"],
        default="none",
        help="Where to publish status-change events (default: none)",
    )
    parser.add_argument(
        "--kafka-bootstrap",
        type=str,
        default=config.kafka.bootstrap_servers,
        help="Kafka bootstrap servers",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=config.log_level,
        help="Log level (default: INFO)",
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level, config.log_format)
    config.kafka.bootstrap_servers = args.kafka_bootstrap

    reference = args.now or date.today()
    scenario = LeasePortfolioScenario(
        num_properties=args.properties,
        expired_rate=args.expired_rate,
        reference_date=reference,
        seed=args.seed,
    )
    store = scenario.generate()

    sink = build_sink(args.sink, config)
    publisher = (
        StatusEventPublisher(sink, config.events.source, config.events.topic_prefix)
        if sink is not None
        else None
    )
    sweeper = ExpirationSweeper(
        store,
        publisher=publisher,
        min_interval=timedelta(hours=config.sweep.interval_hours),
    )

    logger.info("Sweeping %d agreements as of %s", len(store.agreements), reference)
    report = sweeper.run(datetime.combine(reference, datetime.min.time()))
    if sink is not None:
        try:
            sink.close()
        except SinkError as e:
            logger.error("Event sink did not drain: %s", e)
            return 1

    print(f"Store: {store.summary()}")
    print(report.message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
