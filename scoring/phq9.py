# scoring/phq9.py
"""
PHQ-9 scoring.

Each scored item is answered on one of four tiers worth 0-3 points. Tiers 2 and 3
are "shaded" answers; tier 1 is shaded only on the ninth item (self-harm). The
shaded count is folded into the total at the end and, at 4 or more, adds the
"consider depressive disorder" advisory to the result.

Severity bands come from the survey definition (`severity_thresholds`), so the
band table can be changed without touching this module.
"""
import logging
from typing import Dict, Any

from survey.models import AnswerTier, SurveyResult

logger = logging.getLogger(__name__)

SHADED_ITEM_INDEX = 8  # ninth item, zero-based
ADVISORY_THRESHOLD = 4


class PHQ9Scorer:
    def points(self, tier: AnswerTier) -> int:
        return int(tier)

    def shades(self, tier: AnswerTier, index: int) -> bool:
        if tier >= AnswerTier.MORE_THAN_HALF:
            return True
        return tier == AnswerTier.SEVERAL_DAYS and index == SHADED_ITEM_INDEX

    def determine_severity(self, total: int, meta: Dict[str, Any]) -> str:
        if total == 0:
            return meta.get("no_severity_label", "None")

        for band in meta.get("severity_thresholds", []):
            lo, hi = (list(band.get("range", [])) + [None, None])[:2]
            if lo is None:
                continue
            if lo <= total and (hi is None or total <= hi):
                return band.get("label", "")

        # nonzero and outside every band
        return meta.get("fallback_label", "Severe Depression")

    def finalize(self, total: int, shaded: int, meta: Dict[str, Any]) -> SurveyResult:
        final_total = total + shaded
        threshold = int(meta.get("advisory_threshold", ADVISORY_THRESHOLD))
        result = SurveyResult(
            total_score=final_total,
            severity=self.determine_severity(final_total, meta),
            advisory=shaded >= threshold,
        )
        logger.info(
            "PHQ-9 finalized: raw=%s shaded=%s total=%s severity=%r advisory=%s",
            total, shaded, result.total_score, result.severity, result.advisory,
        )
        return result

