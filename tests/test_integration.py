"""End-to-end tests: directory in, scored report out."""

import pytest

from testability_insight import analyze
from testability_insight.exceptions import InvalidPathError
from testability_insight.metrics.collector import MetricsCollector
from testability_insight.metrics.complexity import TreeComplexityAnalyzer

SIMPLE = "export const one = 1;\n"

COMPLEX = """\
import { db } from './db';
import { log } from './log';

export function handle(req, res, next, options) {
  if (!req.user) {
    return next(new Error('unauthorized'));
  }
  for (const item of req.body.items) {
    if (item.kind === 'a' && item.size > 10) {
      db.save(item, options);
    } else if (item.kind === 'b' || item.legacy) {
      log(item);
    } else {
      try {
        db.remove(item.id);
      } catch (e) {
        log(e);
      }
    }
  }
  return res.send(req.body.items.map((i) => i.id));
}
"""

TRIVIAL = "export function one() {\n  return 1;\n}\n"

NESTED = """\
export function settle(a, b, c, d, e) {
  let total = (a * b + c / d - e) % (a + b * c);
  if (a > b && c < d || e === total) {
    if ((a + b) * (c - d) > e / (total + 1)) {
      if (a % 3 === 0 || b % 5 === 0 && c !== d) {
        if (total * total - a * b > c + d + e) {
          if ((a ^ b) > (c | d) && (e & total) < a + b) {
            total = (a * a + b * b - c * c) / (d * d + e * e + 1);
          }
        }
      }
    }
  }
  return total * (a + b) - (c * d) / (e + 1);
}
"""


class TestMetricsCollector:
    """Test per-file records collected from a directory."""

    def test_records_in_discovery_order(self, make_tree):
        root = make_tree({"b.js": SIMPLE, "a.ts": "export const x: number = 1;\n"})
        result = MetricsCollector().calc_for_dir(root)

        assert [p.rsplit("/", 1)[-1] for p in result.records] == ["a.ts", "b.js"]
        assert result.discovered == 2
        assert result.skipped == {}

    def test_record_fields(self, make_tree):
        root = make_tree({"handler.js": COMPLEX, "db.js": SIMPLE})
        result = MetricsCollector().calc_for_dir(root)
        record = result.records[str((root / "handler.js").resolve())]

        assert record.function_count == 2
        assert record.param_count == 5
        assert record.efferent_coupling == 2
        assert record.cyclomatic == 8
        assert record.depth == 4
        assert record.fn_param_count.max == 4
        assert record.fn_cyclomatic.values == (8, 1)
        assert record.fn_depth.values == (0,)
        db = result.records[str((root / "db.js").resolve())]
        assert db.afferent_coupling == 1
        assert db.fn_cyclomatic.median is None

    def test_unparseable_file_skipped(self, make_tree):
        root = make_tree({"good.js": SIMPLE, "bad.js": "function ( { = = ;\n"})
        result = MetricsCollector().calc_for_dir(root)

        assert [p.rsplit("/", 1)[-1] for p in result.records] == ["good.js"]
        assert list(result.skipped) == [str((root / "bad.js").resolve())]

    def test_skipped_file_still_feeds_afferent_coupling(self, make_tree):
        class LegacyRejectingAnalyzer(TreeComplexityAnalyzer):
            def analyze(self, tree):
                if tree.path.endswith("legacy.js"):
                    raise ValueError("unsupported construct")
                return super().analyze(tree)

        root = make_tree(
            {
                "legacy.js": "import { helper } from './helper';\nhelper();\n",
                "helper.js": "export function helper() {\n  return 1;\n}\n",
            }
        )
        result = MetricsCollector(analyzer=LegacyRejectingAnalyzer()).calc_for_dir(root)

        assert list(result.skipped) == [str((root / "legacy.js").resolve())]
        helper = result.records[str((root / "helper.js").resolve())]
        assert helper.afferent_coupling == 1
        assert helper.efferent_coupling == 0


class TestAnalyze:
    """Test the public ``analyze`` entry point."""

    def test_simple_file_scores_higher(self, make_tree, integer_reference):
        root = make_tree({"simple.js": SIMPLE, "complex.js": COMPLEX})
        result = analyze(root, reference=integer_reference)
        by_name = {s.file.rsplit("/", 1)[-1]: s for s in result.report.scores}

        assert by_name["simple.js"].score > by_name["complex.js"].score
        assert [s.file.rsplit("/", 1)[-1] for s in result.report.scores] == [
            "complex.js",
            "simple.js",
        ]
        for score in result.report.scores:
            assert 0 <= score.score <= 100
            assert 0 <= score.rank <= 10

    def test_simple_file_scores_higher_with_bundled_reference(self, make_tree, isolated_config):
        """Default exact policy against the shipped dataset."""
        root = make_tree({"trivial.js": TRIVIAL, "nested.js": NESTED})
        result = analyze(root)
        by_name = {s.file.rsplit("/", 1)[-1]: s for s in result.report.scores}

        assert result.report.unscored == []
        assert by_name["trivial.js"].score > by_name["nested.js"].score
        assert result.report.scores[0].file.endswith("nested.js")

    def test_repeated_runs_are_identical(self, make_tree, integer_reference):
        root = make_tree({"a.js": SIMPLE, "b.js": COMPLEX, "lib/c.ts": "export type T = string;\n"})
        first = analyze(root, reference=integer_reference)
        second = analyze(root, reference=integer_reference)
        assert first.report == second.report

    def test_bundled_reference(self, make_tree, isolated_config):
        root = make_tree({"a.js": COMPLEX})
        result = analyze(root)
        assert len(result.report.scores) == 1
        assert result.average == result.report.scores[0].score

    def test_empty_directory(self, tmp_path, integer_reference, isolated_config):
        result = analyze(tmp_path, reference=integer_reference)
        assert result.is_empty
        assert result.average is None
        assert result.discovered == 0

    def test_only_excluded_files(self, make_tree, integer_reference):
        root = make_tree({"node_modules/x/index.js": SIMPLE, "app.min.js": SIMPLE})
        assert analyze(root, reference=integer_reference).is_empty

    def test_missing_path(self, tmp_path, isolated_config):
        with pytest.raises(InvalidPathError, match="does not exist"):
            analyze(tmp_path / "missing")

    def test_file_path(self, tmp_path, isolated_config):
        path = tmp_path / "a.js"
        path.write_text(SIMPLE, encoding="utf-8")
        with pytest.raises(InvalidPathError, match="not a directory"):
            analyze(path)
