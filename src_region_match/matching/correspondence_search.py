"""
Epipolar block matching between rectified images.

For rectified pairs, a region in the left image is matched by scanning
candidate origins along the same row of the right image and keeping the
candidate with the lowest SSD score.
"""

from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional

import numpy as np

from utils.logger_config import get_logger

from ..base.errors import RegionOutOfBoundsError, RegionSizeMismatchError
from .region import Region, RegionExtractor, RegionOfInterest
from .ssd_scorer import SSDScorer


@dataclass(frozen=True)
class MatchResult:
    """Best candidate found by a single correspondence search."""

    query: Region
    region: Region
    score: float
    offset: int
    candidates_evaluated: int
    name: Optional[str] = None
    score_profile: Optional[np.ndarray] = field(default=None, repr=False, compare=False)

    @property
    def disparity(self) -> int:
        """Horizontal offset from the query origin to the match origin."""
        return self.query.x - self.region.x

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'query': list(self.query.as_rect()),
            'match': list(self.region.as_rect()),
            'score': self.score,
            'offset': self.offset,
            'disparity': self.disparity,
            'candidates_evaluated': self.candidates_evaluated
        }


class CorrespondenceSearch:
    """Exhaustive 1-D SSD search along a single image row."""

    def __init__(self, scorer: Optional[SSDScorer] = None):
        self.scorer = scorer or SSDScorer()
        self.logger = get_logger(__name__)

    def best_match(
        self,
        query: Region,
        target_image: np.ndarray,
        row_y: int,
        search_width: int,
        record_profile: bool = False
    ) -> Optional[MatchResult]:
        """
        Find the lowest-scoring candidate for ``query`` on one row.

        Candidates are taken at origins ``s`` in ``[0, search_width)`` with the
        query's width and height. Candidates clipped by the image edge or
        lying outside it are skipped, as are candidates whose score is not
        finite. The first candidate with the lowest score wins ties, and a zero
        score is a valid match.

        Args:
            query: Region to look for
            target_image: Image to search in
            row_y: Top row of every candidate
            search_width: Number of candidate origins to scan
            record_profile: Keep the score of every offset (NaN when skipped)

        Returns:
            MatchResult or None: Best match, or None if no candidate was comparable

        Raises:
            ValueError: If search_width is negative
        """
        if search_width < 0:
            raise ValueError(f"search_width must be non-negative, got {search_width}")

        best_region = None
        best_score = None
        best_offset = None
        evaluated = 0
        profile = np.full(search_width, np.nan, dtype=np.float64) if record_profile else None

        for s in range(search_width):
            try:
                candidate = RegionExtractor.extract(
                    target_image, s, row_y, query.width, query.height
                )
                score = self.scorer.score(query, candidate)
            except (RegionSizeMismatchError, RegionOutOfBoundsError):
                continue

            # NaN pixels make a candidate incomparable
            if not np.isfinite(score):
                continue

            evaluated += 1
            if profile is not None:
                profile[s] = score

            if best_score is None or score < best_score:
                best_score = score
                best_region = candidate
                best_offset = s

        if best_region is None:
            self.logger.debug(f"No comparable candidate for region {query.as_rect()} "
                              f"on row {row_y} (search width {search_width})")
            return None

        return MatchResult(
            query=query,
            region=best_region,
            score=best_score,
            offset=best_offset,
            candidates_evaluated=evaluated,
            score_profile=profile
        )

    def match_regions(
        self,
        left_image: np.ndarray,
        right_image: np.ndarray,
        rois: Iterable[RegionOfInterest],
        record_profile: bool = False
    ) -> List[MatchResult]:
        """
        Match every selected region of the left image in the right image.

        Each region is searched across the entire width of the right image on
        the region's own row. Regions that cannot be extracted or matched are
        logged and skipped without affecting the others.

        Args:
            left_image: Image the regions were selected on
            right_image: Rectified image to search
            rois: User selections on the left image
            record_profile: Keep per-offset score profiles

        Returns:
            List[MatchResult]: Matches in selection order
        """
        matches = []
        search_width = right_image.shape[1]
        rois = list(rois)

        if not rois:
            self.logger.info("No regions selected, nothing to match")
            return matches

        for index, roi in enumerate(rois):
            label = roi.name or f"roi_{index + 1}"
            try:
                query = RegionExtractor.extract_roi(left_image, roi)
            except (RegionOutOfBoundsError, ValueError) as e:
                self.logger.warning(f"Skipping {label}: {e}")
                continue

            if query.as_rect() != roi.as_rect():
                self.logger.warning(f"{label} clipped from {roi.as_rect()} to {query.as_rect()}")

            result = self.best_match(query, right_image, query.y, search_width, record_profile)
            if result is None:
                self.logger.warning(f"No match found for {label}")
                continue

            result = replace(result, name=label)
            self.logger.info(f"{label}: match at x={result.offset}, y={result.region.y}, "
                             f"score={result.score:.3f}")
            matches.append(result)

        self.logger.info(f"Matched {len(matches)}/{len(rois)} regions")
        return matches
