from typing import List

from skirank.routes.route_processor import ScoredResult

NAME_WIDTH = 38

def _steep_columns(result: ScoredResult):
    ss = result.descent.steep_segment
    if ss is None:
        return "—", ""
    return f"{ss.vertical_drop}m @ {ss.avg_gradient_deg}°", f"{ss.start_ele}m → {ss.end_ele}m"

def format_row(rank: int, result: ScoredResult) -> str:
    d = result.descent
    steep_str, range_str = _steep_columns(result)
    return "  ".join([
        f"{rank}.".rjust(4),
        result.route_name[:NAME_WIDTH].ljust(NAME_WIDTH),
        result.source.value.ljust(8),
        f"{d.vertical_drop}m".rjust(6),
        f"{d.horiz_dist_m / 1000:.1f}km".rjust(8),
        f"{d.avg_gradient_deg}°".rjust(6),
        steep_str.ljust(18),
        range_str.ljust(16),
        f"{result.score}".rjust(6),
    ])

def format_table(results: List[ScoredResult], top_n: int, min_drop_m: float) -> str:
    header = "  ".join([
        "Rank".rjust(4),
        "Name".ljust(NAME_WIDTH),
        "Source".ljust(8),
        "Drop".rjust(6),
        "Run".rjust(8),
        "Grad".rjust(6),
        "Steep Section".ljust(18),
        "From-To".ljust(16),
        "Score".rjust(6),
    ])

    lines = [
        "",
        "=" * 110,
        "  BEST SKI RUNS — ranked by descent quality (targeting ~30° gradient)",
        "=" * 110,
        "",
        header,
        "-" * 120,
    ]
    lines.extend(format_row(i + 1, r) for i, r in enumerate(results[:top_n]))
    lines.append("")
    lines.append(f"Showing top {min(top_n, len(results))} of {len(results)} tracks with ≥{min_drop_m:g}m descent")
    return "\n".join(lines)

def print_table(results: List[ScoredResult], top_n: int, min_drop_m: float) -> None:
    print(format_table(results, top_n, min_drop_m))
