from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from models.bundle import ExportBundle
from models.stats import DashboardStats
from sources.base import ParseResult
from utils.logging_setup import init_logging


@dataclass
class RunContext:
    export_root: Optional[Path] = None
    export_id: Optional[str] = None
    present_kinds: List[str] = field(default_factory=list)
    missing_kinds: List[str] = field(default_factory=list)
    results: Dict[str, ParseResult] = field(default_factory=dict)
    bundle: Optional[ExportBundle] = None
    stats: Optional[DashboardStats] = None
    meta: dict = field(default_factory=dict)

    def diagnostics(self) -> Dict[str, List[str]]:
        return {kind: list(res.diagnostics) for kind, res in self.results.items() if res.diagnostics}


class Step(Protocol):
    def run(self, ctx: RunContext) -> RunContext:
        ...


class Pipeline:
    def __init__(self, steps: List[Step]):
        self.steps = steps

    def run(self, ctx: RunContext) -> RunContext:
        # Make logging idempotent for any direct runner use
        init_logging()
        for step in self.steps:
            ctx = step.run(ctx)
        return ctx
