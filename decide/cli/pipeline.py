"""
File Pipeline for the DECIDE Engine.

Runs the engine once per input file. A directory is processed file by
file: one bad file is reported and skipped, it never stops the others
and it never produces an output record.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..codec import (
    RecordFormatError,
    read_input_file,
    read_output_file,
    write_output_file,
)
from ..domain import DecideOutput, InvalidConfigurationError
from ..engine import decide

logger = logging.getLogger(__name__)


# =============================================================================
# FILE RESULT
# =============================================================================

@dataclass
class FileDecision:
    """
    Result of evaluating one input file.

    Exactly one of `output` and `error` is set.
    """
    path: Path
    output: Optional[DecideOutput] = None
    error: Optional[str] = None

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def succeeded(self) -> bool:
        return self.output is not None


# =============================================================================
# INPUT DISCOVERY
# =============================================================================

def collect_input_files(path: Path) -> list[Path]:
    """A single file, or every *.json file of a directory sorted by name."""
    if path.is_dir():
        return sorted(
            p for p in path.iterdir()
            if p.is_file() and p.suffix == ".json"
        )
    return [path]


def record_number(name: str) -> int:
    """Number embedded in a record name ("input12.json" -> 12), -1 if none."""
    match = re.search(r"\d+", name)
    return int(match.group()) if match else -1


# =============================================================================
# EXECUTION
# =============================================================================

def evaluate_file(
    path: Path,
    output_dir: Optional[Path] = None,
    workers: Optional[int] = None,
) -> FileDecision:
    """
    Evaluate one input file and optionally write its output record.

    Parse and validation failures are captured in FileDecision.error.
    """
    try:
        snapshot = read_input_file(path)
        output = decide(snapshot, workers=workers)
    except (RecordFormatError, InvalidConfigurationError, OSError) as e:
        logger.warning("Rejected %s: %s", path, e)
        return FileDecision(path=path, error=str(e))

    result = FileDecision(path=path, output=output)
    if output_dir is not None:
        write_output_file(output, output_dir / path.name)
    return result


def evaluate_path(
    path: Path,
    output_dir: Optional[Path] = None,
    workers: Optional[int] = None,
) -> list[FileDecision]:
    """Evaluate a file or every input file of a directory."""
    return [
        evaluate_file(file_path, output_dir, workers)
        for file_path in collect_input_files(path)
    ]


def load_output_records(output_dir: Path) -> list[tuple[str, DecideOutput]]:
    """
    Read every output record of a directory, ordered by record number.

    Unreadable records are logged and skipped.
    """
    records = []
    for file_path in collect_input_files(output_dir):
        try:
            records.append((file_path.stem, read_output_file(file_path)))
        except (RecordFormatError, OSError) as e:
            logger.warning("Skipping %s: %s", file_path, e)
    records.sort(key=lambda item: (record_number(item[0]), item[0]))
    return records
