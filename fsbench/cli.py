"""Командная строка бенчмарка"""

import argparse
from pathlib import Path

from .config import (
    ConfigError,
    DEFAULT_BLOCK_SIZE,
    DEFAULT_DATA_SIZE,
    DEFAULT_LOG_FILE,
    DEFAULT_SYNC_FREQUENCY,
    DEFAULT_TEST_FILE_NAME,
    DEFAULT_WORKERS,
    env_default,
    parse_count,
    parse_size,
)
from .metrics import MetricsCollector
from .result_log import ResultLogger
from .runner import iter_configs, run_sweep
from .visualize import generate_all_plots


def _size_arg(text: str) -> int:
    try:
        return parse_size(text)
    except ConfigError as e:
        raise argparse.ArgumentTypeError(str(e))


def check_target_dir(directory: str):
    """Проверка каталога, в котором создаются файлы воркеров"""
    issues = []
    path = Path(directory)
    if not path.exists():
        issues.append(f"target directory does not exist: {directory}")
    elif not path.is_dir():
        issues.append(f"target path is not a directory: {directory}")
    return issues


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fsbench',
        description='Filesystem write/read benchmark with concurrency',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Defaults: 4 KiB blocks, 128 MiB per worker, fsync every 10000 blocks, 4 workers
  python3 main.py

  # Small-block penalty with frequent syncs
  python3 main.py --blocksize 512 --datasize 16MiB --syncfreq 100

  # Sweep block sizes and worker counts, save report and plots
  python3 main.py --blocksize 4k 64k 1m --workers 1 4 8 --output-dir benchmark_results
        """
    )

    try:
        block_size = env_default('BLOCK_SIZE', DEFAULT_BLOCK_SIZE, parse_size)
        data_size = env_default('DATA_SIZE', DEFAULT_DATA_SIZE, parse_size)
        sync_frequency = env_default('SYNC_FREQUENCY', DEFAULT_SYNC_FREQUENCY, parse_count)
        workers = env_default('WORKERS', DEFAULT_WORKERS, parse_count)
    except ConfigError as e:
        parser.error(f"environment: {e}")

    parser.add_argument('--blocksize', nargs='+', type=_size_arg,
                        default=[block_size],
                        help='Size of blocks in bytes (several values run a sweep)')
    parser.add_argument('--datasize', type=_size_arg,
                        default=data_size,
                        help='Total size of data to write per worker (in bytes)')
    parser.add_argument('--syncfreq', type=int,
                        default=sync_frequency,
                        help='Number of blocks before flushing (sync); 0 syncs only at the end')
    parser.add_argument('--workers', '--goroutines', nargs='+', type=int,
                        default=[workers],
                        help='Number of concurrent workers (several values run a sweep)')
    parser.add_argument('--dir', default='.',
                        help='Directory for the per-worker test files')
    parser.add_argument('--base-name', default=DEFAULT_TEST_FILE_NAME,
                        help='Base name of the per-worker test files')
    parser.add_argument('--log-file', default=env_default('LOG_FILE', DEFAULT_LOG_FILE),
                        help='Append-only results log')
    parser.add_argument('--output-dir', default=None,
                        help='Save raw JSON, report and plots to this directory')
    parser.add_argument('--no-plots', action='store_true',
                        help='Do not generate plots in --output-dir')
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        configs = list(iter_configs(
            block_sizes=args.blocksize,
            worker_counts=args.workers,
            data_size=args.datasize,
            sync_frequency=args.syncfreq,
            directory=args.dir,
            base_name=args.base_name,
        ))
    except ConfigError as e:
        parser.error(str(e))

    issues = check_target_dir(args.dir)
    if issues:
        print("⚠️  Target directory issues detected:")
        for issue in issues:
            print(f"   - {issue}")
        return 1

    print("=" * 80)
    print("ZFS Benchmark Inefficiency Test with concurrency")
    print("=" * 80)
    print(f"Block sizes:  {', '.join(str(b) for b in args.blocksize)}")
    print(f"Data size:    {args.datasize} bytes per worker")
    print(f"Sync freq:    {args.syncfreq} blocks")
    print(f"Workers:      {', '.join(str(w) for w in args.workers)}")
    print(f"Directory:    {args.dir}")
    print(f"Log file:     {args.log_file}")
    print("=" * 80)

    collector = MetricsCollector()

    try:
        logger = ResultLogger(args.log_file).open()
    except OSError as e:
        print(f"❌ Error opening log file: {e}")
        return 1

    with logger:
        run_sweep(configs, logger, collector)

    if args.output_dir:
        output_dir = Path(args.output_dir)

        print("\n" + "=" * 80)
        print("SAVING RESULTS")
        print("=" * 80)

        collector.save_raw_data(output_dir)
        collector.generate_report(output_dir)

        if collector.results and not args.no_plots:
            generate_all_plots(collector.results, output_dir)

    print("\n" + "=" * 80)
    print("✅ BENCHMARK COMPLETED")
    print("=" * 80)
    return 0
