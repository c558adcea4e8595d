"""Filesystem Benchmark Framework"""

from .base import PhaseBenchmark, PhaseResult, WorkerResult
from .config import BenchmarkConfig, ConfigError
from .filesystem import CleanupResult, ReadBenchmark, WriteBenchmark, cleanup_worker_files
from .metrics import MetricsCollector
from .result_log import ResultLogger, format_duration
from .runner import RunResult, run_benchmark, run_sweep
from .visualize import generate_all_plots

__all__ = [
    'PhaseBenchmark',
    'PhaseResult',
    'WorkerResult',
    'BenchmarkConfig',
    'ConfigError',
    'CleanupResult',
    'ReadBenchmark',
    'WriteBenchmark',
    'cleanup_worker_files',
    'MetricsCollector',
    'ResultLogger',
    'format_duration',
    'RunResult',
    'run_benchmark',
    'run_sweep',
    'generate_all_plots',
]
