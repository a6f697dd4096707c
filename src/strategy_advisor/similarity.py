"""Similarity Engine - case-based reasoning for the Strategy Advisor.

Computes a weighted, normalized similarity between a target project and
each knowledge-base project and ranks the knowledge base by it.
"""

from dataclasses import dataclass
from typing import Optional

from .config import get_config
from .scales import NUMERIC_FEATURES, has_scale, numeric_value, scale_bounds
from .schema import KnowledgeProject, Project


@dataclass(frozen=True)
class NumericRange:
    """Observed bounds of a numeric feature across a comparison batch."""
    minimum: float
    maximum: float

    def normalize(self, value: float) -> float:
        """Position of a value within the range (0.5 for a zero-width range)."""
        if self.maximum == self.minimum:
            return 0.5
        return (value - self.minimum) / (self.maximum - self.minimum)


# Used for weighted numeric features that have no batch range
DEFAULT_RANGE = NumericRange(0.0, 1.0)


class SimilarityEngine:
    """Ranks knowledge-base projects by similarity to a target project.

    Categorical features are normalized over their full scale; numeric
    features over the range observed in the knowledge set plus the target.
    """

    def __init__(self, feature_weights: Optional[dict[str, float]] = None):
        """Initialize engine with optional custom feature weights."""
        if feature_weights is None:
            feature_weights = get_config().similarity.feature_weights
        self.feature_weights = feature_weights

    def compute_numeric_ranges(
        self,
        target: Project,
        knowledge: list[KnowledgeProject],
    ) -> dict[str, NumericRange]:
        """Compute shared numeric ranges across the knowledge set and target."""
        ranges = {}
        for feature in NUMERIC_FEATURES:
            values = [numeric_value(feature, kp.field_value(feature)) for kp in knowledge]
            values.append(numeric_value(feature, target.field_value(feature)))
            ranges[feature] = NumericRange(min(values), max(values))
        return ranges

    def similarity(
        self,
        target: Project,
        candidate: Project,
        ranges: dict[str, NumericRange],
    ) -> float:
        """Compute similarity between two projects (0.0 - 1.0).

        Every weighted feature is evaluated; a missing value counts as 0.
        """
        total_weight = 0.0
        weighted_similarity = 0.0

        for feature, weight in self.feature_weights.items():
            target_value = numeric_value(feature, target.field_value(feature))
            candidate_value = numeric_value(feature, candidate.field_value(feature))

            if has_scale(feature):
                low, high = scale_bounds(feature)
                bounds = NumericRange(float(low), float(high))
            else:
                bounds = ranges.get(feature, DEFAULT_RANGE)

            distance = abs(bounds.normalize(target_value) - bounds.normalize(candidate_value))
            weighted_similarity += weight * (1 - distance)
            total_weight += weight

        if total_weight <= 0:
            return 0.0
        return min(1.0, max(0.0, weighted_similarity / total_weight))

    def find_similar_projects(
        self,
        target: Project,
        knowledge: list[KnowledgeProject],
    ) -> list[tuple[KnowledgeProject, float]]:
        """Score every knowledge-base project and sort by similarity.

        Args:
            target: Project being analyzed
            knowledge: Historical projects

        Returns:
            (project, similarity) pairs, most similar first; ties keep input order
        """
        ranges = self.compute_numeric_ranges(target, knowledge)
        scored = [(kp, self.similarity(target, kp, ranges)) for kp in knowledge]
        return sorted(scored, key=lambda pair: pair[1], reverse=True)
