"""Fingerprint matching.

``SimulatedMatcher`` is a randomized placeholder, not a biometric algorithm:
it scores a scan from the template's enrolment quality and a random scan
quality. A real engine plugs in by implementing ``FingerprintMatcher.score``.
"""
from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.constants import MIN_SCAN_QUALITY, NO_MATCH_SCORE, SCAN_QUALITY_RANGE, SCORE_JITTER_RANGE
from ..core.enums import MatchResult
from .model import FingerprintTemplate


@dataclass(frozen=True)
class MatchAttempt:
    template: FingerprintTemplate
    match_score: int
    scan_quality: int
    result: MatchResult
    error_message: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.result == MatchResult.SUCCESS


def classify(match_score: int, scan_quality: int, threshold: int) -> tuple[MatchResult, Optional[str]]:
    if scan_quality < MIN_SCAN_QUALITY:
        return MatchResult.POOR_QUALITY, "Scan quality too low"
    if match_score >= threshold:
        return MatchResult.SUCCESS, None
    if match_score < NO_MATCH_SCORE:
        return MatchResult.NO_MATCH, "No matching fingerprint found"
    return MatchResult.NO_MATCH, "Match score below threshold"


class FingerprintMatcher(ABC):
    @abstractmethod
    def score(self, template: FingerprintTemplate, scan_data: str, *, threshold: int) -> MatchAttempt:
        raise NotImplementedError

    def score_all(
        self,
        templates: Sequence[FingerprintTemplate],
        scan_data: str,
        *,
        threshold: int,
    ) -> List[MatchAttempt]:
        """One attempt per template, in the order given."""
        return [self.score(template, scan_data, threshold=threshold) for template in templates]


class SimulatedMatcher(FingerprintMatcher):
    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def score(self, template: FingerprintTemplate, scan_data: str, *, threshold: int) -> MatchAttempt:
        scan_quality = self._rng.randint(*SCAN_QUALITY_RANGE)
        base = min(template.quality_score, scan_quality)
        match_score = math.floor(base * self._rng.uniform(*SCORE_JITTER_RANGE))
        result, error = classify(match_score, scan_quality, threshold)
        return MatchAttempt(
            template=template,
            match_score=match_score,
            scan_quality=scan_quality,
            result=result,
            error_message=error,
        )
