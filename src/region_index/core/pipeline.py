from __future__ import annotations

from typing import Optional

from region_index.core.context import LoadContext
from region_index.core.exceptions import PipelineError
from region_index.index.builder import BuildReport, build_index
from region_index.loader.csv_reader import DEFAULT_MAX_RECORDS, read_regions
from region_index.query.engine import QueryEngine


class Pipeline:
    """
    Orchestrates record loading, index building and engine setup.
    No business logic lives here.
    """

    def __init__(self, context: LoadContext):
        self.ctx = context
        self.log = context.logger
        self.report: Optional[BuildReport] = None

    def run(self) -> QueryEngine:
        self.log.info("Pipeline starting: %s", self.ctx.input_path)

        cfg = self.ctx.config
        paths = getattr(cfg, "paths", {}) or {}
        index_cfg = getattr(cfg, "index", {}) or {}
        query_cfg = getattr(cfg, "query", {}) or {}

        try:
            load = read_regions(
                self.ctx.input_path,
                strict=self.ctx.strict,
                max_records=int(paths.get("max_records", DEFAULT_MAX_RECORDS)),
            )
            self.ctx.errors.extend(load.rejected)

            result = build_index(
                load.records,
                retain_code_index=bool(index_cfg.get("retain_code_index", True)),
                root_name=index_cfg.get("root_name"),
            )
        except Exception as exc:
            self.log.exception("Pipeline execution failed")
            raise PipelineError(str(exc)) from exc

        self.report = result.report
        self.ctx.stats.update(
            records=len(load.records),
            rejected=len(load.rejected),
            orphans=result.report.orphan_count,
            unreachable=len(result.report.unreachable),
            duplicates=len(result.report.duplicate_codes),
            reachable=result.tree.reachable_count - 1,
        )

        self.log.info("Pipeline completed successfully: %s", self.ctx.stats)
        return QueryEngine(result.tree, code_length=query_cfg.get("code_length"))
