import json
from pathlib import Path
from typing import List

from skirank.routes.route_processor import ScoredResult
from skirank.ui.log_helpers import print_step

package_root = Path(__file__).parent.parent.parent
OUTPUT_FILE  = package_root / "descent-analysis.json"

class ResultsWriteError(RuntimeError):
    """The ranked results could not be serialized or written"""

def results_to_json(results: List[ScoredResult]) -> str:
    return json.dumps([r.to_dict() for r in results], indent=2, ensure_ascii=False) + "\n"

def write_results(results: List[ScoredResult], out_path: Path = OUTPUT_FILE) -> Path:
    out_path = Path(out_path)
    try:
        text = results_to_json(results)
        out_path.write_text(text, encoding="utf-8")
    except (TypeError, ValueError, OSError) as e:
        raise ResultsWriteError(f"Could not write {out_path}: {e}") from e

    print_step("Results", f"Written: {out_path.name} ({len(results)} entries)")
    return out_path
