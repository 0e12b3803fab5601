"""Example batch job reporting counters, timings and memory to StatsD.

Run with:
    python -m examples.worker_example

Without a collector listening the datagrams are simply lost. Set
STATSD_HOST / STATSD_PORT / STATSD_NAMESPACE to point it elsewhere.
"""

import logging
import random
import time

from statsdpy import StatsdAwareMixin, StatsdLoggingHandler, create_client

logger = logging.getLogger("examples.worker")


class Importer(StatsdAwareMixin):
    """Imports records, reporting through an injected client."""

    def import_batch(self, size: int) -> list[int]:
        assert self.statsd is not None
        self.statsd.start_memory_profile("import.memory")
        records = self.statsd.time("import.parse", lambda: list(range(size)))
        self.statsd.end_memory_profile("import.memory")
        self.statsd.count("import.records", len(records), sample_rate=0.5)
        self.statsd.gauge("import.last_batch_size", size)
        return records


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    statsd = create_client()
    logging.getLogger().addHandler(StatsdLoggingHandler(statsd))

    importer = Importer()
    importer.set_statsd_client(statsd)

    statsd.memory("worker.memory_at_start")
    for _ in range(5):
        statsd.start_timing("worker.iteration")
        with statsd.batch():
            importer.import_batch(random.randint(1_000, 100_000))
            statsd.set("worker.hosts", "worker-1")
        elapsed = statsd.end_timing("worker.iteration")
        logger.info("iteration took %.2f ms", elapsed)
        time.sleep(0.1)


if __name__ == "__main__":
    main()
