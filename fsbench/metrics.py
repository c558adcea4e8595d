"""Сбор и обработка метрик"""

import json
from pathlib import Path
from typing import List, Dict
from datetime import datetime
from .base import PhaseResult
from .result_log import format_duration


def config_label(result: PhaseResult) -> str:
    """Короткая подпись конфигурации для отчета и графиков"""
    return f"bs={result.block_size} w={result.workers}"


class MetricsCollector:
    """Сборщик результатов фаз со всех конфигураций"""

    def __init__(self):
        self.results: List[PhaseResult] = []
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def add_result(self, result: PhaseResult):
        """Добавить результат фазы"""
        self.results.append(result)

    def save_raw_data(self, output_dir: Path):
        """Сохранить сырые данные в JSON"""
        output_dir.mkdir(parents=True, exist_ok=True)

        data = {
            'timestamp': self.timestamp,
            'results': [r.to_dict() for r in self.results]
        }

        output_file = output_dir / f"benchmark_raw_{self.timestamp}.json"
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        print(f"\n✅ Raw data saved: {output_file}")
        return output_file

    def generate_report(self, output_dir: Path) -> str:
        """Генерация текстового отчета"""
        output_dir.mkdir(parents=True, exist_ok=True)

        report_lines = []
        report_lines.append("=" * 80)
        report_lines.append("FILESYSTEM BENCHMARK REPORT")
        report_lines.append("=" * 80)
        report_lines.append(f"Timestamp: {self.timestamp}")
        report_lines.append("")

        phases = self._group_by_phase()

        for phase, results in phases.items():
            report_lines.append(f"\n{'=' * 80}")
            report_lines.append(f"PHASE: {phase.upper()}")
            report_lines.append('=' * 80)

            for result in results:
                report_lines.append(f"\n  Config: {config_label(result)}")
                report_lines.append(f"  {'─' * 70}")
                report_lines.append(f"    Data size:       {result.data_size:>10} bytes/worker")
                report_lines.append(f"    Sync frequency:  {result.sync_frequency:>10} blocks")
                report_lines.append(f"    Duration:        {format_duration(result.duration_ns):>10}")
                report_lines.append(f"    Throughput:      {result.throughput_mbps:>10.2f} MB/s")
                report_lines.append(f"    Failed workers:  {result.failures:>10}")

            # Сравнение
            if len(results) > 1:
                report_lines.append(f"\n  Comparison (Throughput):")
                report_lines.append(f"  {'─' * 70}")

                sorted_results = sorted(results, key=lambda x: x.throughput_mbps, reverse=True)
                best = sorted_results[0]

                for r in sorted_results:
                    if r.throughput_mbps > 0:
                        ratio = (r.throughput_mbps / best.throughput_mbps) * 100
                        report_lines.append(f"    {config_label(r):20} {r.throughput_mbps:8.2f} MB/s ({ratio:5.1f}%)")

        report_lines.append(f"\n{'=' * 80}")
        report_lines.append("BEST CONFIGURATIONS")
        report_lines.append('=' * 80)
        report_lines.append("")
        report_lines.extend(self._best_configurations(phases))

        report_lines.append("\n" + "=" * 80)

        report_text = "\n".join(report_lines)

        report_file = output_dir / f"benchmark_report_{self.timestamp}.txt"
        with open(report_file, 'w', encoding='utf-8') as f:
            f.write(report_text)

        print(f"✅ Report saved: {report_file}")
        print("\n" + report_text)

        return report_text

    def _group_by_phase(self) -> Dict[str, List[PhaseResult]]:
        phases = {}
        for result in self.results:
            phases.setdefault(result.phase, []).append(result)
        return phases

    def _best_configurations(self, phases: Dict) -> List[str]:
        """Лучшая конфигурация для каждой фазы"""
        lines = []
        for phase, results in phases.items():
            if not results:
                continue
            best = max(results, key=lambda x: x.throughput_mbps)
            lines.append(f"• {phase}:")
            lines.append(f"    Best: {config_label(best)} ({best.throughput_mbps:.2f} MB/s)")
            if any(r.failures for r in results):
                lines.append(f"    ⚠️  Some runs had failed workers, throughput is nominal")
            lines.append("")
        return lines

    def get_results_by_phase(self, phase: str) -> List[PhaseResult]:
        """Получить результаты для конкретной фазы"""
        return [r for r in self.results if r.phase == phase]
