"""
Structured logging for fixture-generation runs.

Produces:
  - manifest.json:     One-time run metadata (git hash, config, versions)
  - conversions.jsonl: One record per backend-buffer conversion
  - problems.jsonl:    One record per LatticeProblem built
"""

import json
import hashlib
import subprocess
import sys
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Dict, Any

import numpy as np


@dataclass
class ConversionManifest:
    """Run-level metadata, saved once per run."""
    run_id: str
    timestamp: str
    git_commit: str
    config_hash: str
    python_version: str
    numpy_version: str
    config: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def save(self, path: Path):
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2, default=str)


def _get_git_commit() -> str:
    """Get current git commit hash, or 'unknown'."""
    try:
        result = subprocess.run(
            ["git", "rev-parse", "HEAD"],
            capture_output=True, text=True, timeout=5,
        )
        return result.stdout.strip() if result.returncode == 0 else "unknown"
    except (OSError, subprocess.SubprocessError):
        return "unknown"


def _config_hash(config: Dict[str, Any]) -> str:
    s = json.dumps(config, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()[:16]


def create_manifest(run_id: str, config: Dict[str, Any]) -> ConversionManifest:
    """Create a ConversionManifest with auto-detected metadata."""
    return ConversionManifest(
        run_id=run_id,
        timestamp=time.strftime("%Y-%m-%dT%H:%M:%S%z"),
        git_commit=_get_git_commit(),
        config_hash=_config_hash(config),
        python_version=sys.version,
        numpy_version=np.__version__,
        config=config,
    )


class ConversionLogger:
    """Append-only JSONL logger for conversions and built problems."""

    def __init__(self, output_dir: Path):
        self.output_dir = Path(output_dir)
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self._conversions_path = self.output_dir / "conversions.jsonl"
        self._problems_path = self.output_dir / "problems.jsonl"

        # Append mode so reruns accumulate
        self._conversions_f = open(self._conversions_path, 'a')
        self._problems_f = open(self._problems_path, 'a')

        self._conversions_count = 0
        self._problems_count = 0

    def log_conversion(self, record: Dict[str, Any]):
        record["timestamp"] = time.time()
        self._conversions_f.write(json.dumps(record, default=str) + "\n")
        self._conversions_count += 1

        # Flush periodically
        if self._conversions_count % 100 == 0:
            self._conversions_f.flush()

    def log_problem(self, record: Dict[str, Any]):
        record["timestamp"] = time.time()
        self._problems_f.write(json.dumps(record, default=str) + "\n")
        self._problems_f.flush()
        self._problems_count += 1

    def close(self):
        """Flush and close all log files."""
        for f in [self._conversions_f, self._problems_f]:
            if not f.closed:
                f.flush()
                f.close()

    @property
    def summary(self) -> Dict[str, int]:
        return {
            "conversions_logged": self._conversions_count,
            "problems_logged": self._problems_count,
        }

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
