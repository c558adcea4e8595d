"""Базовые классы для фаз бенчмарка"""

import threading
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, asdict, field
from typing import List, Optional

from .config import BenchmarkConfig
from .result_log import format_duration


@dataclass
class WorkerResult:
    """Итог работы одного воркера в одной фазе"""
    index: int
    path: str
    ok: bool = True
    error: Optional[str] = None
    bytes: int = 0
    operations: int = 0
    syncs: int = 0


@dataclass
class PhaseResult:
    """Результаты одной фазы (Write или Read)"""
    phase: str
    block_size: int
    data_size: int
    sync_frequency: int
    workers: int
    duration_ns: int
    worker_results: List[WorkerResult] = field(default_factory=list)

    @property
    def duration_sec(self) -> float:
        return self.duration_ns / 1e9

    @property
    def failures(self) -> int:
        return sum(1 for r in self.worker_results if not r.ok)

    @property
    def succeeded(self) -> int:
        return len(self.worker_results) - self.failures

    @property
    def throughput_mbps(self) -> float:
        """Номинальный объем всех воркеров, деленный на общее время фазы"""
        if self.duration_ns <= 0:
            return 0.0
        nominal = self.workers * (self.data_size // self.block_size) * self.block_size
        return (nominal / (1024 * 1024)) / self.duration_sec

    def to_dict(self):
        data = asdict(self)
        data['duration_sec'] = self.duration_sec
        data['throughput_mbps'] = self.throughput_mbps
        data['failures'] = self.failures
        return data


class PhaseBenchmark(ABC):
    """
    Базовый класс фазы: по одному потоку на воркера, общий join,
    время измеряется от запуска первого потока до завершения последнего.
    """

    phase = ""

    def __init__(self, config: BenchmarkConfig):
        self.config = config

    @abstractmethod
    def run_worker(self, index: int) -> WorkerResult:
        """
        Работа одного воркера над своим файлом.
        Ошибки ввода-вывода возвращаются в WorkerResult, а не пробрасываются.
        """
        pass

    def _worker_entry(self, index: int, results: List[Optional[WorkerResult]]):
        try:
            results[index] = self.run_worker(index)
        except Exception as e:
            results[index] = self.fail(index, "handling", e)

    def fail(self, index: int, action: str, error: Exception,
             result: Optional[WorkerResult] = None) -> WorkerResult:
        """Пометить воркера как упавшего и сообщить оператору"""
        path = str(self.config.worker_file(index))
        message = f"Error {action} file {path}: {error}"
        print(f"  ❌ {message}")
        if result is None:
            result = WorkerResult(index=index, path=path)
        result.ok = False
        result.error = message
        return result

    def run(self) -> PhaseResult:
        """Запуск всех воркеров и ожидание их завершения"""
        config = self.config
        print(f"\nStarting Concurrent {self.phase} Performance Test with "
              f"Block Size: {config.block_size} bytes, Workers: {config.workers}")

        results: List[Optional[WorkerResult]] = [None] * config.workers
        threads = [
            threading.Thread(target=self._worker_entry, args=(i, results),
                             name=f"{self.phase.lower()}-{i}")
            for i in range(config.workers)
        ]

        start = time.perf_counter_ns()
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        duration_ns = time.perf_counter_ns() - start

        result = PhaseResult(
            phase=self.phase,
            block_size=config.block_size,
            data_size=config.data_size,
            sync_frequency=config.sync_frequency,
            workers=config.workers,
            duration_ns=duration_ns,
            worker_results=[r for r in results if r is not None],
        )
        print(f"Concurrent {self.phase} Performance Test completed in: "
              f"{format_duration(duration_ns)}")
        if result.failures:
            print(f"  ⚠️  {result.failures}/{config.workers} workers failed")
        return result
