"""Конфигурация бенчмарка"""

import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List


DEFAULT_TEST_FILE_NAME = "testfile.bin"
DEFAULT_BLOCK_SIZE = 4096  # 4 KiB
DEFAULT_DATA_SIZE = 128 * 1024 * 1024  # 128 MiB на каждого воркера
DEFAULT_SYNC_FREQUENCY = 10000  # блоков между fsync
DEFAULT_WORKERS = 4
DEFAULT_LOG_FILE = "benchmark.log"

_SIZE_RE = re.compile(r"^\s*(\d+)\s*([kmgt]?)(i?b)?\s*$", re.IGNORECASE)
_SIZE_UNITS = {"": 1, "k": 1024, "m": 1024 ** 2, "g": 1024 ** 3, "t": 1024 ** 4}


class ConfigError(ValueError):
    """Некорректные параметры бенчмарка"""


def parse_size(text) -> int:
    """
    Разбор размера в байтах: 4096, 4k, 4KiB, 128MiB, 1g.
    Суффиксы двоичные (k = 1024).
    """
    if isinstance(text, int):
        return text
    match = _SIZE_RE.match(str(text))
    if not match:
        raise ConfigError(f"invalid size: {text!r}")
    number, unit, _ = match.groups()
    return int(number) * _SIZE_UNITS[unit.lower()]


def parse_count(text) -> int:
    """Целое число без суффиксов: число воркеров, частота fsync"""
    try:
        return int(str(text).strip())
    except ValueError:
        raise ConfigError(f"invalid count: {text!r}")


def env_default(name: str, default, parse=None):
    """
    Значение по умолчанию из переменной окружения FSBENCH_<name>.
    parse разбирает строку (parse_size, parse_count); без него строка как есть.
    """
    value = os.getenv(f"FSBENCH_{name}")
    if value is None:
        return default
    if parse is not None:
        return parse(value)
    return value


@dataclass(frozen=True)
class BenchmarkConfig:
    """Неизменяемые параметры одного прогона, общие для всех воркеров"""
    block_size: int = DEFAULT_BLOCK_SIZE
    data_size: int = DEFAULT_DATA_SIZE
    sync_frequency: int = DEFAULT_SYNC_FREQUENCY
    workers: int = DEFAULT_WORKERS
    directory: str = "."
    base_name: str = DEFAULT_TEST_FILE_NAME

    def __post_init__(self):
        if self.block_size <= 0:
            raise ConfigError(f"block size must be positive, got {self.block_size}")
        if self.data_size < 0:
            raise ConfigError(f"data size must not be negative, got {self.data_size}")
        if self.sync_frequency < 0:
            raise ConfigError(
                f"sync frequency must not be negative, got {self.sync_frequency}"
            )
        if self.workers < 0:
            raise ConfigError(f"worker count must not be negative, got {self.workers}")

    @property
    def blocks_per_worker(self) -> int:
        # остаток от деления молча отбрасывается
        return self.data_size // self.block_size

    @property
    def bytes_per_worker(self) -> int:
        return self.blocks_per_worker * self.block_size

    def worker_file(self, index: int) -> Path:
        """Детерминированное имя файла воркера: <base>_<index>"""
        return Path(self.directory) / f"{self.base_name}_{index}"

    def worker_files(self) -> List[Path]:
        return [self.worker_file(i) for i in range(self.workers)]

    def describe(self) -> str:
        return (f"bs={self.block_size} data={self.data_size} "
                f"sync={self.sync_frequency} workers={self.workers}")
