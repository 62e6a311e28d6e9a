"""
User-facing one-way ANOVA calculator.

OneWayAnova wraps an immutable OneWayAnovaDesign plus a ResultCache. Every
table is computed on first access and the same object is returned
afterwards; output() assembles the wire-form result once.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from comparemeans.anova._common import (
    DUNCAN,
    TUKEY,
    AnovaEffectSize,
    AnovaTable,
    HomogeneousSubsetTable,
    LeveneParams,
    PostHocComparison,
)
from comparemeans.anova._levene import levene_variants
from comparemeans.anova._posthoc import tukey_hsd
from comparemeans.anova._subsets import homogeneous_subsets
from comparemeans.anova._table import effect_sizes, oneway_table
from comparemeans.anova.design import OneWayAnovaDesign
from comparemeans.core.groups import Group, group_key, group_sort_key
from comparemeans.core.log import get_logger
from comparemeans.core.result import ResultCache
from comparemeans.core.variables import as_number, format_value
from comparemeans.descriptive import Descriptives, describe, descriptives_row, mean

logger = get_logger(__name__)

# Absolute deviations closer than this count as identical
CONSTANT_DEVIATION_TOL = 1e-10


@dataclass
class OneWayAnova:
    """
    One-way ANOVA with optional descriptives, Levene variants, Tukey HSD
    and homogeneous subsets (Tukey, Duncan).

    Produced by one_way_anova().
    """
    design: OneWayAnovaDesign
    _cache: ResultCache = field(default_factory=ResultCache, repr=False)

    # -----------------------------------------------------------------
    # Grouping
    # -----------------------------------------------------------------

    @property
    def groups(self) -> tuple[Group, ...]:
        """Groups ordered by factor value (numeric levels first)."""
        return self._cache.get_or_compute('groups', self._build_groups)

    def _build_groups(self) -> tuple[Group, ...]:
        d = self.design
        members: dict[float | str, list[int]] = {}
        for row in d.rows:
            members.setdefault(group_key(d.factor_data[row]), []).append(row)

        keys = sorted(members, key=group_sort_key)
        has_table = bool(d.factor.values)
        used: set[str] = set()
        groups = []
        for i, key in enumerate(keys):
            if has_table:
                label = d.factor.value_label(key) or f"Group {format_value(key)}"
            else:
                label = f"Group {i + 1}"
            if label in used:
                label = f"{label} ({format_value(key)})"
            used.add(label)

            rows = tuple(members[key])
            groups.append(Group(
                key=key,
                label=label,
                values=np.array([as_number(d.data[r]) for r in rows], dtype=np.float64),
                rows=rows,
            ))
        return tuple(groups)

    # -----------------------------------------------------------------
    # Tables
    # -----------------------------------------------------------------

    @property
    def table(self) -> AnovaTable | None:
        """ANOVA table; None with fewer than two groups."""
        return self._cache.get_or_compute('anova', lambda: oneway_table(self.groups))

    @property
    def descriptives(self) -> tuple[tuple[str, Descriptives], ...]:
        """(label, Descriptives) per group, then a pooled 'Total' row."""
        def compute():
            if not self.groups:
                return ()
            rows = [(g.label, describe(g.values)) for g in self.groups]
            pooled = np.concatenate([g.values for g in self.groups])
            rows.append(('Total', describe(pooled)))
            return tuple(rows)
        return self._cache.get_or_compute('descriptives', compute)

    @property
    def levene(self) -> tuple[LeveneParams, ...]:
        """Levene variants (mean, median, adjusted median, trimmed)."""
        def compute():
            if len(self.groups) < 2:
                return ()
            return levene_variants([g.values for g in self.groups])
        return self._cache.get_or_compute('levene', compute)

    @property
    def tukey(self) -> tuple[PostHocComparison, ...]:
        """Tukey HSD comparisons for every ordered pair of groups."""
        def compute():
            table = self.table
            if table is None:
                return ()
            return tukey_hsd(self.groups, table.within.mean_sq, table.within.df)
        return self._cache.get_or_compute('tukey', compute)

    def subsets(self, method: str = TUKEY) -> HomogeneousSubsetTable | None:
        """Homogeneous subsets under 'Tukey HSD' or 'Duncan'."""
        def compute():
            table = self.table
            if table is None:
                return None
            return homogeneous_subsets(
                self.groups, table.within.mean_sq, table.within.df, method=method,
            )
        return self._cache.get_or_compute(f'subsets:{method}', compute)

    @property
    def effect_size(self) -> AnovaEffectSize | None:
        def compute():
            table = self.table
            return None if table is None else effect_sizes(table)
        return self._cache.get_or_compute('effect_size', compute)

    # -----------------------------------------------------------------
    # Insufficient data
    # -----------------------------------------------------------------

    @property
    def insufficient_types(self) -> tuple[str, ...]:
        """Reason tags for degenerate data, in a fixed order."""
        def compute():
            groups = self.groups
            tags = []
            if len(groups) < 2:
                tags.append('fewerThanTwoGroups')
            elif len(groups) < 3:
                tags.append('fewerThanThreeGroups')
            if any(g.n < 2 for g in groups):
                tags.append('groupWithFewerThanTwoCases')
            if groups and all(_deviations_constant(g.values) for g in groups if g.n > 1):
                tags.append('allDeviationsConstant')
            if self.design.n == 0:
                tags.append('noValidData')
            return tuple(tags)
        return self._cache.get_or_compute('insufficient', compute)

    # -----------------------------------------------------------------
    # Wire output
    # -----------------------------------------------------------------

    def output(self) -> dict[str, Any]:
        """Assemble the result fields; memoised."""
        return self._cache.get_or_compute('output', self._build_output)

    def _build_output(self) -> dict[str, Any]:
        d = self.design
        opts = d.options
        table = self.table

        subsets = []
        if opts.tukey:
            subsets.append(self.subsets(TUKEY))
        if opts.duncan:
            subsets.append(self.subsets(DUNCAN))

        result: dict[str, Any] = {
            'variable1': d.variable.to_dict(),
            'oneWayAnova': table.to_dict() if table is not None else None,
            'descriptives': (
                [descriptives_row(label, desc) for label, desc in self.descriptives]
                if opts.descriptive else []
            ),
            'homogeneityOfVariances': (
                [lev.to_dict() for lev in self.levene]
                if opts.homogeneity_of_variance else []
            ),
            'multipleComparisons': (
                [c.to_dict() for c in self.tukey] if opts.tukey else []
            ),
            'homogeneousSubsets': [s.to_dict() for s in subsets if s is not None],
        }
        if opts.estimate_effect_size:
            es = self.effect_size
            result['effectSize'] = es.to_dict() if es is not None else None

        tags = self.insufficient_types
        if tags:
            logger.info(
                "insufficient data",
                analysis_type='oneWayAnova',
                variable_name=d.variable.name,
                tags=list(tags),
            )
        result['metadata'] = {
            'hasInsufficientData': bool(tags),
            'insufficientType': list(tags),
            'variable1Label': d.variable.label,
            'variable2Label': d.factor.label,
            'variable1Name': d.variable.name,
            'variable2Name': d.factor.name,
        }
        return result

    def summary(self) -> str:
        """Plain-text ANOVA table."""
        lines = [
            f"One-way ANOVA: {self.design.variable.display_name} "
            f"by {self.design.factor.display_name}",
            "=" * 72,
            f"Groups: {len(self.groups)}    Observations: {self.design.n}",
            "",
        ]
        table = self.table
        if table is None:
            lines.append("Fewer than two groups; no ANOVA table.")
            return "\n".join(lines)

        lines.append(
            f"{'Source':<16} {'Sum Sq':>14} {'Df':>6} {'Mean Sq':>14} {'F':>10} {'Sig':>12}"
        )
        lines.append("-" * 72)
        for row in table.rows:
            ms = f"{row.mean_sq:>14.4f}" if row.mean_sq is not None else " " * 14
            ss = f"{row.sum_sq:>14.4f}" if row.sum_sq is not None else " " * 14
            line = f"{row.term:<16} {ss} {row.df:>6} {ms}"
            if row.f_value is not None:
                line += f" {row.f_value:>10.4f} {row.p_value:>12.4e} {_significance_stars(row.p_value)}"
            lines.append(line)
        lines.append("-" * 72)
        lines.append("Signif. codes:  0 '***' 0.001 '**' 0.01 '*' 0.05 '.' 0.1 ' ' 1")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"OneWayAnova(variable={self.design.variable.name!r}, "
            f"factor={self.design.factor.name!r}, groups={len(self.groups)}, "
            f"n={self.design.n})"
        )


def _deviations_constant(values: np.ndarray) -> bool:
    deviations = np.abs(values - mean(values))
    return bool(np.all(np.abs(deviations - deviations[0]) < CONSTANT_DEVIATION_TOL))


def _significance_stars(p: float | None) -> str:
    if p is None:
        return ''
    if p < 0.001:
        return '***'
    if p < 0.01:
        return '**'
    if p < 0.05:
        return '*'
    if p < 0.1:
        return '.'
    return ''
