from typing import Optional

from skirank.routes.descent_evaluator import DescentAnalysis
from skirank.routes.rating_system import RatingSystem
from skirank.routes.route_helpers import round_to

def drop_term(analysis: DescentAnalysis, system: RatingSystem) -> float:
    """0-100: more vertical is better, capped"""
    return min(analysis.vertical_drop, system.drop_cap_m) / (system.drop_cap_m / 100)

def gradient_term(analysis: DescentAnalysis, system: RatingSystem) -> float:
    """0-50: peaks at the target gradient, gone at the tolerance"""
    diff = abs(analysis.avg_gradient_deg - system.target_gradient_deg)
    return max(0.0, 50 - diff * (50 / system.gradient_tolerance_deg))

def steep_term(analysis: DescentAnalysis, system: RatingSystem) -> float:
    """0-50: bonus for a long continuous steep section"""
    if analysis.steep_segment is None:
        return 0.0
    return min(analysis.steep_segment.vertical_drop, system.steep_drop_cap_m) / (system.steep_drop_cap_m / 50)

def descent_score(analysis: Optional[DescentAnalysis], system: RatingSystem) -> float:
    if analysis is None:
        return 0.0
    score = drop_term(analysis, system) + gradient_term(analysis, system) + steep_term(analysis, system)
    return round_to(score, 1)
