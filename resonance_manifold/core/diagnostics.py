from __future__ import annotations

import csv
import json
import os
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional, Union


@dataclass(frozen=True)
class StepRecord:
    """Observable output of one completed engine step."""

    step: int
    x: float
    y: float
    fused_mean: float
    amplitude: float
    frequency: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class StepDiagnosticsLogger:
    """Write StepRecord rows to CSV and/or JSONL."""

    def __init__(
        self,
        *,
        csv_path: Optional[Union[str, Path]] = None,
        jsonl_path: Optional[Union[str, Path]] = None,
    ):
        self.csv_path = str(csv_path) if csv_path is not None else None
        self.jsonl_path = str(jsonl_path) if jsonl_path is not None else None

    def __call__(self, record: StepRecord) -> None:
        self.log(record)

    def log(self, record: StepRecord) -> None:
        row = record.to_dict()

        if self.jsonl_path:
            os.makedirs(os.path.dirname(self.jsonl_path) or ".", exist_ok=True)
            with open(self.jsonl_path, "a", encoding="utf-8") as f:
                f.write(json.dumps(row) + "\n")

        if self.csv_path:
            os.makedirs(os.path.dirname(self.csv_path) or ".", exist_ok=True)
            file_exists = os.path.exists(self.csv_path)
            with open(self.csv_path, "a", encoding="utf-8", newline="") as f:
                writer = csv.DictWriter(f, fieldnames=list(row.keys()))
                if not file_exists:
                    writer.writeheader()
                writer.writerow(row)


def load_jsonl(path: Path) -> list[dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        return []
    rows: list[dict[str, Any]] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        rows.append(json.loads(line))
    return rows
