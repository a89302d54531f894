from dataclasses import dataclass, fields
from typing import Any, Dict, List, Optional

@dataclass
class RatingSystem:
    """Central configuration for all descent detection and scoring parameters"""
    # Smoothing
    smooth_window: int = 10            # half-window, in samples

    # Descent segmentation
    min_drop_m: float = 200            # minimum descent to consider
    min_climb_to_reset_m: float = 100  # climb this much = new descent segment

    # Steep section analysis
    steep_min_deg: float = 25
    steep_max_deg: float = 35
    chunk_dist_m: float = 50           # resolution for steep segment analysis

    # Distance accounting
    glitch_hop_m: float = 2000         # larger point-to-point hops are GPS glitches
    min_horiz_dist_m: float = 10

    # Route admission
    min_track_points: int = 50
    min_catalog_points: int = 5

    # Scoring
    target_gradient_deg: float = 30
    drop_cap_m: float = 1200
    gradient_tolerance_deg: float = 10
    steep_drop_cap_m: float = 500

    # Route summaries
    summary_max_climb_step_m: float = 200

    def validate_config(self) -> List[str]:
        """Check configuration consistency"""
        errors = []

        if self.smooth_window < 0:
            errors.append(f"Smoothing window must not be negative: {self.smooth_window}")
        if self.steep_min_deg > self.steep_max_deg:
            errors.append(f"Invalid steep band: {self.steep_min_deg}° > {self.steep_max_deg}°")
        if self.chunk_dist_m <= 0:
            errors.append(f"Chunk distance must be positive: {self.chunk_dist_m}")
        if self.glitch_hop_m <= 0:
            errors.append(f"Glitch hop cutoff must be positive: {self.glitch_hop_m}")
        if self.min_drop_m < 0:
            errors.append(f"Minimum drop must not be negative: {self.min_drop_m}")
        if self.min_climb_to_reset_m < 0:
            errors.append(f"Reset climb must not be negative: {self.min_climb_to_reset_m}")
        if self.drop_cap_m <= 0 or self.steep_drop_cap_m <= 0 or self.gradient_tolerance_deg <= 0:
            errors.append("Scoring caps must be positive")

        return errors

    @classmethod
    def create(cls, custom_config: Optional[Dict[str, Any]] = None) -> 'RatingSystem':
        """Factory method: defaults overridden by any known keys of custom_config"""
        system = cls()

        if custom_config:
            known = {f.name for f in fields(cls)}
            for key, value in custom_config.items():
                if key in known:
                    setattr(system, key, value)

        return system
