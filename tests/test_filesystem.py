import os

import pytest

from fsbench.filesystem import ReadBenchmark, WriteBenchmark, cleanup_worker_files


def test_write_then_read_example_scenario(make_config):
    """4096 x 10 блоков, fsync каждые 5 блоков, один воркер."""
    config = make_config(block_size=4096, data_size=4096 * 10, sync_frequency=5, workers=1)

    write = WriteBenchmark(config).run()
    assert write.phase == "Write"
    assert write.failures == 0
    [worker] = write.worker_results
    assert worker.ok and worker.error is None
    assert worker.operations == 10
    assert worker.bytes == 40960
    # после блоков 0 и 5 плюс финальный
    assert worker.syncs == 3
    assert config.worker_file(0).stat().st_size == 40960

    read = ReadBenchmark(config).run()
    assert read.phase == "Read"
    [worker] = read.worker_results
    assert worker.ok
    assert worker.operations == 10
    assert worker.bytes == 40960


@pytest.mark.parametrize("blocks, sync_frequency, expected", [
    (10, 5, 3),
    (10, 3, 5),
    (10, 1, 11),
    (10, 10000, 2),
    (10, 0, 1),
    (0, 5, 1),
])
def test_fsync_count(make_config, fsync_calls, blocks, sync_frequency, expected):
    config = make_config(block_size=512, data_size=512 * blocks,
                         sync_frequency=sync_frequency, workers=1)
    result = WriteBenchmark(config).run()
    assert result.worker_results[0].syncs == expected
    assert len(fsync_calls) == expected


def test_fsync_count_per_worker(make_config, fsync_calls):
    config = make_config(block_size=512, data_size=512 * 10, sync_frequency=5, workers=4)
    result = WriteBenchmark(config).run()
    assert [r.syncs for r in result.worker_results] == [3, 3, 3, 3]
    assert len(fsync_calls) == 12


def test_write_creates_one_file_per_worker(make_config, tmp_path):
    config = make_config(block_size=4096, data_size=10000, workers=3)
    result = WriteBenchmark(config).run()

    assert result.failures == 0
    assert [r.index for r in result.worker_results] == [0, 1, 2]
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        "testfile.bin_0", "testfile.bin_1", "testfile.bin_2",
    ]
    for path in config.worker_files():
        assert path.stat().st_size == 8192


def test_write_truncates_leftover_file(make_config):
    config = make_config(block_size=1024, data_size=4096, workers=1)
    config.worker_file(0).write_bytes(b"x" * 100000)

    WriteBenchmark(config).run()
    assert config.worker_file(0).stat().st_size == 4096


def test_write_failure_is_isolated(make_config, capsys):
    config = make_config(block_size=1024, data_size=8192, workers=3)
    config.worker_file(1).mkdir()

    result = WriteBenchmark(config).run()

    assert result.failures == 1
    assert result.succeeded == 2
    failed = result.worker_results[1]
    assert not failed.ok
    assert str(config.worker_file(1)) in failed.error
    assert failed.error.startswith("Error creating file")
    assert result.duration_ns > 0
    for index in (0, 2):
        assert result.worker_results[index].ok
        assert config.worker_file(index).stat().st_size == 8192
    assert "Error creating file" in capsys.readouterr().out


def test_sync_failure_abandons_worker(make_config, monkeypatch):
    def broken_fsync(fd):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr("fsbench.filesystem.os.fsync", broken_fsync)
    config = make_config(block_size=1024, data_size=8192, sync_frequency=4, workers=2)

    result = WriteBenchmark(config).run()

    assert result.failures == 2
    for worker in result.worker_results:
        assert worker.error.startswith("Error syncing file")
        # fsync после блока 0 падает, дальше воркер не пишет
        assert worker.operations == 1
        assert worker.syncs == 0


def test_final_sync_failure(make_config, monkeypatch):
    config = make_config(block_size=1024, data_size=4096, sync_frequency=0, workers=1)

    def broken_fsync(fd):
        raise OSError(5, "Input/output error")

    monkeypatch.setattr("fsbench.filesystem.os.fsync", broken_fsync)
    result = WriteBenchmark(config).run()

    [worker] = result.worker_results
    assert not worker.ok
    assert worker.operations == 4
    assert "syncing final data" in worker.error


def test_read_missing_file_is_isolated(make_config):
    config = make_config(block_size=1024, data_size=4096, workers=3)
    WriteBenchmark(config).run()
    os.remove(config.worker_file(2))

    result = ReadBenchmark(config).run()

    assert result.failures == 1
    assert result.worker_results[2].error.startswith("Error opening file")
    assert [r.bytes for r in result.worker_results[:2]] == [4096, 4096]


def test_read_does_not_require_block_multiple(make_config):
    config = make_config(block_size=4096, workers=1)
    config.worker_file(0).write_bytes(b"\1" * 5000)

    [worker] = ReadBenchmark(config).run().worker_results
    assert worker.ok
    assert worker.operations == 2
    assert worker.bytes == 5000


def test_read_empty_file(make_config):
    config = make_config(workers=1)
    config.worker_file(0).write_bytes(b"")

    [worker] = ReadBenchmark(config).run().worker_results
    assert worker.ok
    assert worker.operations == 0


def test_zero_workers_is_a_noop(make_config, tmp_path):
    config = make_config(workers=0)

    write = WriteBenchmark(config).run()
    read = ReadBenchmark(config).run()

    assert write.worker_results == [] and read.worker_results == []
    assert write.workers == read.workers == 0
    assert write.duration_ns >= 0
    assert list(tmp_path.iterdir()) == []


def test_cleanup_removes_all_worker_files(make_config, tmp_path):
    config = make_config(block_size=1024, data_size=2048, workers=3)
    WriteBenchmark(config).run()

    result = cleanup_worker_files(config)

    assert result.ok
    assert result.removed == [str(p) for p in config.worker_files()]
    assert list(tmp_path.iterdir()) == []


def test_cleanup_twice_reports_failure(make_config, capsys):
    config = make_config(block_size=1024, data_size=2048, workers=2)
    WriteBenchmark(config).run()
    assert cleanup_worker_files(config).ok

    second = cleanup_worker_files(config)

    assert not second.ok
    assert second.removed == []
    assert second.failed_path == str(config.worker_file(0))
    assert "Error cleaning up test file" in capsys.readouterr().out


def test_cleanup_stops_at_first_failure(make_config):
    config = make_config(block_size=1024, data_size=2048, workers=3)
    WriteBenchmark(config).run()
    os.remove(config.worker_file(1))

    result = cleanup_worker_files(config)

    assert result.removed == [str(config.worker_file(0))]
    assert result.failed_path == str(config.worker_file(1))
    assert config.worker_file(2).exists()


def test_cleanup_follows_runtime_worker_count(make_config):
    config = make_config(block_size=1024, data_size=1024, workers=6)
    WriteBenchmark(config).run()

    result = cleanup_worker_files(config)

    assert result.ok
    assert len(result.removed) == 6


def test_cleanup_with_zero_workers(make_config):
    result = cleanup_worker_files(make_config(workers=0))
    assert result.ok
    assert result.removed == []


def test_unexpected_worker_error_counts_as_failure(make_config, monkeypatch):
    original = WriteBenchmark.run_worker

    def run_worker(self, index):
        if index == 1:
            raise MemoryError("cannot allocate block buffer")
        return original(self, index)

    monkeypatch.setattr(WriteBenchmark, "run_worker", run_worker)
    config = make_config(block_size=1024, data_size=2048, workers=2)

    result = WriteBenchmark(config).run()

    assert len(result.worker_results) == 2
    assert result.failures == 1
    assert result.succeeded == 1
    failed = result.worker_results[1]
    assert failed.index == 1
    assert "cannot allocate block buffer" in failed.error
    assert result.worker_results[0].ok
