# region Imports
from __future__ import annotations
import json
from typing import Optional, Sequence, Tuple

from safe_path.models import RadiationGrid, SafePath
# endregion

# region Result Export
def result_payload(grid: RadiationGrid, result: Optional[SafePath]) -> dict:
    """JSON-ready dict for a solve; unreachable results carry a null bottleneck."""
    payload = {"N": grid.N, "M": grid.M, "grid": grid.tolist()}
    if result is None:
        payload.update({"reachable": False, "bottleneck": None, "path": []})
    else:
        payload.update(result.to_dict(grid))
    return payload


def write_result_json(
    grid: RadiationGrid,
    result: Optional[SafePath],
    out_path: str = "safe_path.json",
) -> None:
    payload = result_payload(grid, result)
    with open(out_path, "w") as f:
        json.dump(payload, f, indent=2)
    print(f"Wrote {len(payload['path'])} path cells to {out_path}")
# endregion

# region Path Export
def write_path_json(
    path_rc: Sequence[Tuple[int, int]],
    out_path: str = "safe_path.json",
) -> None:
    """Export only the (row, col) cells of a path."""
    positions = [{"row": int(r), "col": int(c)} for r, c in path_rc]
    with open(out_path, "w") as f:
        json.dump({"positions": positions}, f, indent=2)
    print(f"Wrote {len(positions)} points to {out_path}")
# endregion
