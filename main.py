#!/usr/bin/env python3
"""
Filesystem Benchmark Tool
Пропускная способность записи/чтения при разных размерах блока,
частоте fsync и числе параллельных воркеров
"""
import sys

from fsbench.cli import main


if __name__ == '__main__':
    sys.exit(main())
