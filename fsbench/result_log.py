"""Журнал результатов (append-only benchmark.log)"""

from pathlib import Path

NANOSECOND = 1
MICROSECOND = 1000 * NANOSECOND
MILLISECOND = 1000 * MICROSECOND
SECOND = 1000 * MILLISECOND
MINUTE = 60 * SECOND
HOUR = 60 * MINUTE


def _with_fraction(value: int, unit: int) -> str:
    whole, part = divmod(value, unit)
    if not part:
        return str(whole)
    digits = len(str(unit)) - 1
    return f"{whole}.{part:0{digits}d}".rstrip("0")


def format_duration(ns: int) -> str:
    """
    Человекочитаемая длительность: 0s, 850ns, 12.5µs, 3.25ms, 1.5s, 2m3.5s, 1h0m0s.
    Тот же формат, что и в исторических записях журнала.
    """
    ns = int(ns)
    if ns == 0:
        return "0s"
    sign = "-" if ns < 0 else ""
    ns = abs(ns)

    if ns < MICROSECOND:
        return f"{sign}{ns}ns"
    if ns < MILLISECOND:
        return f"{sign}{_with_fraction(ns, MICROSECOND)}µs"
    if ns < SECOND:
        return f"{sign}{_with_fraction(ns, MILLISECOND)}ms"

    hours, rest = divmod(ns, HOUR)
    minutes, rest = divmod(rest, MINUTE)
    seconds = f"{_with_fraction(rest, SECOND)}s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return f"{sign}{seconds}"


def format_record(phase: str, block_size: int, data_size: int,
                  workers: int, duration_ns: int) -> str:
    return (f"{phase} Test - Block Size: {block_size}, Data Size: {data_size}, "
            f"Goroutines: {workers}, Duration: {format_duration(duration_ns)}\n")


class ResultLogger:
    """
    Журнал открывается один раз на весь прогон и закрывается при выходе
    из контекста, даже если фазы завершились ошибкой.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._file = None

    def open(self):
        self._file = open(self.path, 'a', encoding='utf-8')
        return self

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

    @property
    def closed(self) -> bool:
        return self._file is None

    def __enter__(self):
        if self._file is None:
            self.open()
        return self

    def __exit__(self, *_):
        self.close()

    def log_result(self, result) -> bool:
        """Дописать одну строку для фазы. Ошибка записи только выводится."""
        line = format_record(result.phase, result.block_size, result.data_size,
                             result.workers, result.duration_ns)
        if self._file is None:
            print(f"❌ Error writing to log file: {self.path} is not open")
            return False
        try:
            self._file.write(line)
            self._file.flush()
        except (OSError, ValueError) as e:
            print(f"❌ Error writing to log file: {e}")
            return False
        return True
