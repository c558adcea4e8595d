"""Запуск фаз: Write -> журнал -> Read -> журнал -> очистка"""

import itertools
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

from .base import PhaseResult
from .config import BenchmarkConfig
from .filesystem import (
    CleanupResult,
    ReadBenchmark,
    WriteBenchmark,
    cleanup_worker_files,
)
from .result_log import ResultLogger


@dataclass
class RunResult:
    """Результаты одного прогона для одной конфигурации"""
    config: BenchmarkConfig
    write: PhaseResult
    read: PhaseResult
    cleanup: CleanupResult


def run_benchmark(config: BenchmarkConfig, logger: ResultLogger) -> RunResult:
    """Полный прогон одной конфигурации"""
    write = WriteBenchmark(config).run()
    logger.log_result(write)

    read = ReadBenchmark(config).run()
    logger.log_result(read)

    cleanup = cleanup_worker_files(config)
    return RunResult(config=config, write=write, read=read, cleanup=cleanup)


def iter_configs(block_sizes: Iterable[int], worker_counts: Iterable[int],
                 data_size: int, sync_frequency: int,
                 directory: str = ".", base_name: Optional[str] = None
                 ) -> Iterator[BenchmarkConfig]:
    """Декартово произведение размеров блока и числа воркеров"""
    extra = {} if base_name is None else {'base_name': base_name}
    for block_size, workers in itertools.product(block_sizes, worker_counts):
        yield BenchmarkConfig(
            block_size=block_size,
            data_size=data_size,
            sync_frequency=sync_frequency,
            workers=workers,
            directory=directory,
            **extra,
        )


def run_sweep(configs: List[BenchmarkConfig], logger: ResultLogger,
              collector=None) -> List[RunResult]:
    """Последовательный прогон нескольких конфигураций в один журнал"""
    runs = []
    total = len(configs)
    for current, config in enumerate(configs, 1):
        print(f"\n[{current}/{total}] {config.describe()}")
        print("-" * 80)

        run = run_benchmark(config, logger)
        runs.append(run)

        if collector is not None:
            collector.add_result(run.write)
            collector.add_result(run.read)

        print(f"✅ Completed: write {run.write.throughput_mbps:.2f} MB/s, "
              f"read {run.read.throughput_mbps:.2f} MB/s")
    return runs
