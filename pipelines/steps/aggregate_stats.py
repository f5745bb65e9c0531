from __future__ import annotations

from pipelines.runner import RunContext
from services.aggregation import DEFAULT_TOP_N, aggregate_bundle


class AggregateStats:
    def __init__(self, top_n: int = DEFAULT_TOP_N) -> None:
        self.top_n = top_n

    def run(self, ctx: RunContext) -> RunContext:
        if ctx.bundle is None:
            raise RuntimeError("AggregateStats needs a bundle; run ParseSources or LoadSnapshot first")
        ctx.stats = aggregate_bundle(ctx.bundle, self.top_n)
        return ctx
