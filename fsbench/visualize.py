"""Визуализация результатов бенчмарков"""

import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import List
from .base import PhaseResult
from .metrics import config_label

COLORS = {'Write': '#e74c3c', 'Read': '#3498db'}


def generate_all_plots(results: List[PhaseResult], output_dir: Path):
    """Генерация всех графиков"""
    output_dir.mkdir(parents=True, exist_ok=True)

    print("\n📊 Generating plots...")

    # 1. Throughput по конфигурациям
    plot_throughput_comparison(results, output_dir / "01_throughput_comparison.png")

    # 2. Длительность фаз
    plot_duration_comparison(results, output_dir / "02_duration_comparison.png")

    # 3. Throughput в зависимости от размера блока
    plot_throughput_by_block_size(results, output_dir / "03_throughput_by_block_size.png")

    print(f"✅ All plots saved to {output_dir}/")


def _by_config(results: List[PhaseResult], metric):
    configs = {}
    for r in results:
        configs.setdefault(config_label(r), {})[r.phase] = metric(r)
    return configs


def _grouped_bars(configs, ylabel: str, title: str, output_path: Path, fmt: str):
    fig, ax = plt.subplots(figsize=(14, 8))

    labels = list(configs.keys())
    phases = [p for p in ('Write', 'Read') if any(p in v for v in configs.values())]

    x = np.arange(len(labels))
    width = 0.35

    for i, phase in enumerate(phases):
        values = [configs[c].get(phase, 0) for c in labels]
        offset = width * (i - len(phases)/2 + 0.5)
        bars = ax.bar(x + offset, values, width,
                      label=phase, color=COLORS.get(phase, '#95a5a6'))

        for bar in bars:
            height = bar.get_height()
            if height > 0:
                ax.text(bar.get_x() + bar.get_width()/2., height,
                        format(height, fmt),
                        ha='center', va='bottom', fontsize=9)

    ax.set_xlabel('Configuration', fontsize=12, fontweight='bold')
    ax.set_ylabel(ylabel, fontsize=12, fontweight='bold')
    ax.set_title(title, fontsize=14, fontweight='bold', pad=20)
    ax.set_xticks(x)
    ax.set_xticklabels([c.replace(' ', '\n') for c in labels], fontsize=10)
    if phases:
        ax.legend(fontsize=11, loc='upper right')
    ax.grid(axis='y', alpha=0.3, linestyle='--')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"  ✓ {output_path.name}")


def plot_throughput_comparison(results: List[PhaseResult], output_path: Path):
    """Сравнение throughput по конфигурациям"""
    _grouped_bars(_by_config(results, lambda r: r.throughput_mbps),
                  'Throughput (MB/s)', 'Write/Read Throughput by Configuration',
                  output_path, '.1f')


def plot_duration_comparison(results: List[PhaseResult], output_path: Path):
    """Сравнение длительности фаз"""
    _grouped_bars(_by_config(results, lambda r: r.duration_sec),
                  'Duration (s)', 'Phase Duration by Configuration',
                  output_path, '.2f')


def plot_throughput_by_block_size(results: List[PhaseResult], output_path: Path):
    """Throughput от размера блока, по линии на фазу и число воркеров"""
    fig, ax = plt.subplots(figsize=(12, 7))

    series = {}
    for r in results:
        series.setdefault((r.phase, r.workers), []).append((r.block_size, r.throughput_mbps))

    for (phase, workers), points in sorted(series.items()):
        points.sort()
        sizes = np.array([p[0] for p in points])
        values = np.array([p[1] for p in points])
        linestyle = '-' if phase == 'Write' else '--'
        ax.plot(sizes, values, marker='o', linestyle=linestyle, linewidth=2,
                label=f"{phase}, {workers} workers",
                color=COLORS.get(phase, '#95a5a6'), alpha=0.5 + 0.5 / max(1, workers))

    ax.set_xscale('log', base=2)
    ax.set_xlabel('Block Size (bytes)', fontsize=12, fontweight='bold')
    ax.set_ylabel('Throughput (MB/s)', fontsize=12, fontweight='bold')
    ax.set_title('Throughput vs Block Size', fontsize=14, fontweight='bold', pad=20)
    if series:
        ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3, linestyle='--')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"  ✓ {output_path.name}")
