from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(slots=True)
class RecordingReporter:
    lines: list[str] = field(default_factory=list[str])
    warnings: list[str] = field(default_factory=list[str])

    def report(self, line: str) -> None:
        self.lines.append(line)

    def warn(self, line: str) -> None:
        self.warnings.append(line)
