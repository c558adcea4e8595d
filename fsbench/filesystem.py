"""Фазы записи и чтения на локальной ФС и очистка файлов воркеров"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .base import PhaseBenchmark, WorkerResult
from .config import BenchmarkConfig


class WriteBenchmark(PhaseBenchmark):
    """Запись блоками с периодическим fsync"""

    phase = "Write"

    def should_sync(self, block_index: int) -> bool:
        # sync_frequency == 0: только финальный fsync
        freq = self.config.sync_frequency
        return freq > 0 and block_index % freq == 0

    def run_worker(self, index: int) -> WorkerResult:
        config = self.config
        path = config.worker_file(index)
        result = WorkerResult(index=index, path=str(path))

        try:
            f = open(path, 'wb', buffering=0)
        except OSError as e:
            return self.fail(index, "creating", e, result)

        with f:
            data = bytes(config.block_size)

            for j in range(config.blocks_per_worker):
                try:
                    f.write(data)
                except OSError as e:
                    return self.fail(index, "writing to", e, result)
                result.operations += 1
                result.bytes += config.block_size

                if self.should_sync(j):
                    try:
                        os.fsync(f.fileno())
                    except OSError as e:
                        return self.fail(index, "syncing", e, result)
                    result.syncs += 1

            try:
                os.fsync(f.fileno())
            except OSError as e:
                return self.fail(index, "syncing final data of", e, result)
            result.syncs += 1

        return result


class ReadBenchmark(PhaseBenchmark):
    """Последовательное чтение файлов, созданных фазой записи"""

    phase = "Read"

    def run_worker(self, index: int) -> WorkerResult:
        config = self.config
        path = config.worker_file(index)
        result = WorkerResult(index=index, path=str(path))

        try:
            f = open(path, 'rb', buffering=0)
        except OSError as e:
            return self.fail(index, "opening", e, result)

        with f:
            buf = bytearray(config.block_size)
            while True:
                try:
                    n = f.readinto(buf)
                except OSError as e:
                    return self.fail(index, "reading", e, result)
                if not n:
                    break
                result.operations += 1
                result.bytes += n

        return result


@dataclass
class CleanupResult:
    """Итог удаления файлов воркеров"""
    removed: List[str] = field(default_factory=list)
    failed_path: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failed_path is None


def cleanup_worker_files(config: BenchmarkConfig) -> CleanupResult:
    """
    Удаление файлов воркеров по порядку индексов.
    Останавливается на первой ошибке, оставшиеся файлы не трогает.
    """
    result = CleanupResult()
    for path in config.worker_files():
        try:
            Path(path).unlink()
        except OSError as e:
            result.failed_path = str(path)
            result.error = f"Error cleaning up test file {path}: {e}"
            print(f"❌ {result.error}")
            return result
        result.removed.append(str(path))

    print("✅ Test files removed successfully.")
    return result
