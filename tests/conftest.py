import matplotlib

matplotlib.use("Agg")

import pytest

from fsbench import BenchmarkConfig


@pytest.fixture
def make_config(tmp_path):
    """Конфигурация с файлами воркеров во временном каталоге."""
    def _make(**kwargs):
        kwargs.setdefault("block_size", 4096)
        kwargs.setdefault("data_size", 4096 * 10)
        kwargs.setdefault("sync_frequency", 5)
        kwargs.setdefault("workers", 1)
        kwargs.setdefault("directory", str(tmp_path))
        return BenchmarkConfig(**kwargs)
    return _make


@pytest.fixture
def fsync_calls(monkeypatch):
    """Подменяет os.fsync и считает вызовы."""
    calls = []
    monkeypatch.setattr("fsbench.filesystem.os.fsync", lambda fd: calls.append(fd))
    return calls
