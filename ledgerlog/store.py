"""Directory-backed input discovery and per-user ledger files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .accounts import Clock, UserLedger
from .processor import process_sources

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT_DIRNAME = "transactions_by_users"
DEFAULT_PATTERN = "*.log"


class IoFailure(RuntimeError):
    """Raised when an input source or output file cannot be read or written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class LedgerStore:
    """Read transaction logs from a directory and write one ledger file per user."""

    def __init__(
        self,
        base_dir: str | Path,
        output_dirname: str = DEFAULT_OUTPUT_DIRNAME,
        pattern: str = DEFAULT_PATTERN,
    ) -> None:
        self.base_dir = Path(base_dir).expanduser().resolve()
        self.output_dir = self.base_dir / output_dirname
        self.pattern = pattern

    def discover_sources(self) -> List[Path]:
        if not self.base_dir.is_dir():
            raise IoFailure(self.base_dir, "log directory does not exist")
        return sorted(path for path in self.base_dir.glob(self.pattern) if path.is_file())

    def read_source(self, path: Path) -> List[str]:
        try:
            with path.open("r", encoding="utf-8") as handle:
                lines = handle.read().split("\n")
        except (OSError, UnicodeDecodeError) as exc:
            raise IoFailure(path, str(exc)) from exc
        if lines and lines[-1] == "":
            lines.pop()
        return lines

    def ledger_path(self, user: str) -> Path:
        path = self.output_dir / f"{user}.log"
        if path.parent != self.output_dir:
            raise IoFailure(path, "user identifier escapes output directory")
        return path

    def write_ledgers(self, ledgers: Mapping[str, UserLedger]) -> List[Path]:
        paths = {user: self.ledger_path(user) for user in ledgers}
        written: List[Path] = []
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            for user, ledger in ledgers.items():
                path = paths[user]
                with path.open("w", encoding="utf-8", newline="\n") as handle:
                    handle.write(ledger.render())
                written.append(path)
        except OSError as exc:
            raise IoFailure(Path(exc.filename or self.output_dir), str(exc)) from exc
        return written

    def read_ledger(self, user: str) -> List[str]:
        return self.read_source(self.ledger_path(user))

    def run(self, clock: Optional[Clock] = None, parse_workers: int = 1) -> Dict[str, UserLedger]:
        paths = self.discover_sources()
        sources = [self.read_source(path) for path in paths]
        ledgers = process_sources(sources, clock=clock, parse_workers=parse_workers)
        written = self.write_ledgers(ledgers)
        logger.info(
            "ledger files written",
            extra={"log_dir": self.base_dir, "inputs": len(paths), "outputs": len(written)},
        )
        return ledgers
