"""MetricsCollector: one ``FileRecord`` per analyzable file under a directory.

Pipeline per file:
    read -> parse (with dialect fallback) -> complexity report
         -> tree metrics (depth, calls, per-function depth, comments)
         -> per-function arrays folded into AggregateStats
Then one coupling sweep over all discovered files; skipped files still
count towards the afferent coupling of the files they import.

A file that cannot be read, parsed or measured is logged and skipped; it
never aborts the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Union

from ..config import AnalysisConfig
from ..discovery import FileDiscoverer
from ..exceptions import AnalysisError, ComplexityError
from ..logging_config import get_logger
from ..models import FileRecord
from ..parsing.parser import SourceParser, TreeSitterParser, read_source
from . import tree as tree_metrics
from .aggregate import aggregate
from .complexity import ComplexityAnalyzer, TreeComplexityAnalyzer
from .coupling import CouplingEstimator

logger = get_logger(__name__)


@dataclass
class CollectionResult:
    """Records keyed by path, in discovery order, plus what was skipped."""

    records: dict[str, FileRecord] = field(default_factory=dict)
    skipped: dict[str, str] = field(default_factory=dict)
    discovered: int = 0


class MetricsCollector:
    """Runs discovery, parsing and all metric extractors over a directory."""

    def __init__(
        self,
        config: Optional[AnalysisConfig] = None,
        parser: Optional[SourceParser] = None,
        analyzer: Optional[ComplexityAnalyzer] = None,
        discoverer: Optional[FileDiscoverer] = None,
        coupling: Optional[CouplingEstimator] = None,
    ) -> None:
        self.config = config or AnalysisConfig()
        self.parser = parser or TreeSitterParser(self.config.parser)
        self.analyzer = analyzer or TreeComplexityAnalyzer()
        self.discoverer = discoverer or FileDiscoverer(self.config.discovery)
        self.coupling = coupling or CouplingEstimator(parser=self.parser)

    def calc_for_dir(self, root: Union[str, Path]) -> CollectionResult:
        """Collect metrics for every discovered file below ``root``.

        Raises:
            OSError: If the root directory cannot be listed
        """
        paths = self.discoverer.discover(root)
        result = CollectionResult(discovered=len(paths))

        for path in paths:
            try:
                result.records[path] = self.analyze_file(path)
            except AnalysisError as e:
                logger.warning(f"Error in generating complexity report for file {path}: {e}")
                result.skipped[path] = str(e)

        for path in self.coupling.estimate(result.records, paths):
            del result.records[path]
            result.skipped[path] = "coupling metrics unavailable"

        logger.info(
            f"Collected metrics for {len(result.records)} of {result.discovered} files"
        )
        return result

    def analyze_file(self, path: str) -> FileRecord:
        """Build the record of one file, coupling counters left at 0.

        Raises:
            FileAccessError: If the file cannot be read
            ParsingError: If no grammar variant accepts the file
            ComplexityError: If a metric extractor fails on the tree
        """
        code = read_source(path)
        syntax_tree = self.parser.parse(code, path)
        try:
            report = self.analyzer.analyze(syntax_tree)
            root = syntax_tree.root
            depth = tree_metrics.depth(root)
            calls = tree_metrics.calls(root)
            function_depths = tree_metrics.each_function(root, tree_metrics.depth)
        except (ArithmeticError, AttributeError, TypeError, ValueError) as e:
            raise ComplexityError(path, f"{type(e).__name__}: {e}") from e

        functions = report.functions
        file_level = report.aggregate
        halstead = file_level.halstead
        return FileRecord(
            path=path,
            sloc_physical=file_level.sloc_physical,
            sloc_logical=file_level.sloc_logical,
            comment_lines=tree_metrics.comments(code),
            cyclomatic=file_level.cyclomatic,
            halstead_bugs=halstead.bugs,
            halstead_difficulty=halstead.difficulty,
            halstead_effort=halstead.effort,
            halstead_length=halstead.length,
            halstead_time=halstead.time,
            halstead_vocabulary=halstead.vocabulary,
            halstead_volume=halstead.volume,
            param_count=file_level.param_count,
            maintainability=report.maintainability,
            depth=depth,
            calls=calls,
            function_count=len(functions),
            fn_sloc_physical=aggregate([f.sloc_physical for f in functions]),
            fn_sloc_logical=aggregate([f.sloc_logical for f in functions]),
            fn_cyclomatic=aggregate([f.cyclomatic for f in functions]),
            fn_halstead_bugs=aggregate([f.halstead.bugs for f in functions]),
            fn_halstead_difficulty=aggregate([f.halstead.difficulty for f in functions]),
            fn_halstead_effort=aggregate([f.halstead.effort for f in functions]),
            fn_halstead_length=aggregate([f.halstead.length for f in functions]),
            fn_halstead_time=aggregate([f.halstead.time for f in functions]),
            fn_halstead_vocabulary=aggregate([f.halstead.vocabulary for f in functions]),
            fn_halstead_volume=aggregate([f.halstead.volume for f in functions]),
            fn_param_count=aggregate([f.param_count for f in functions]),
            fn_depth=aggregate(function_depths),
        )
