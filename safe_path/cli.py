# region Header
"""
cli.py — solve a radiation grid from the command line.

  safe-path --sample 1
  safe-path --random 8x8 --seed 3 --plot out.png
  safe-path --grid-json grid.json --out result.json --path-out path.json
"""
# endregion

# region Imports
import argparse
import json
import sys
from typing import List, Optional

from safe_path.models import GridError, InvalidDimensions
from safe_path.grid import as_grid, random_grid, sample_grid, path_values
from safe_path.minimax_core import solve_safest_path
from safe_path.export import write_path_json, write_result_json
# endregion

# region Argument Parsing
def _parse_dims(text: str):
    try:
        rows, cols = (int(x) for x in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected RxC, got {text!r}")
    return rows, cols


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="safe-path",
        description="Find the path from (0,0) to (N-1,M-1) minimizing the maximum radiation.",
    )
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--sample", type=int, help="bundled sample number")
    src.add_argument("--random", type=_parse_dims, metavar="RxC", help="random grid of the given size")
    src.add_argument("--grid-json", metavar="FILE",
                     help='JSON file with a matrix or {"grid": [[...]], "blocked": [[...]]}')
    p.add_argument("--seed", type=int, default=None, help="seed for --random")
    p.add_argument("--out", metavar="FILE", help="write the result as JSON")
    p.add_argument("--path-out", metavar="FILE", help="write only the path cells as JSON")
    p.add_argument("--plot", metavar="FILE", help="save a rendering of the grid and path")
    return p
# endregion

# region Grid Loading
def _load_grid(args):
    if args.sample is not None:
        return sample_grid(args.sample)
    if args.random is not None:
        rows, cols = args.random
        return random_grid(rows, cols, seed=args.seed)
    with open(args.grid_json) as f:
        data = json.load(f)
    if isinstance(data, dict):
        if "grid" not in data:
            raise InvalidDimensions(f"{args.grid_json} has no 'grid' matrix")
        return as_grid(data["grid"], data.get("N"), data.get("M"), blocked=data.get("blocked"))
    return as_grid(data)
# endregion

# region Main
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        grid = _load_grid(args)
    except (GridError, KeyError, OSError, json.JSONDecodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    result = solve_safest_path(grid)
    for row in grid.tolist():
        print(" ".join(str(v) for v in row))

    if result is None:
        print("No path: target is unreachable")
    else:
        print(f"Minimum possible maximum radiation: {result.bottleneck}")
        print("Path: " + " -> ".join(f"({r}, {c})" for r, c in result.path))
        print("Radiation along path: " + " -> ".join(str(v) for v in path_values(grid, result.path)))
        print(f"Path length: {result.path_length} cells, {result.expansions} expansions")

    if args.out:
        write_result_json(grid, result, args.out)
    if args.path_out:
        write_path_json(result.path if result is not None else [], args.path_out)
    if args.plot:
        from safe_path.viz import render_path_figure
        fig = render_path_figure(grid, result)
        fig.savefig(args.plot, dpi=120)
        print(f"Saved figure to {args.plot}")

    return 0 if result is not None else 1


if __name__ == "__main__":
    sys.exit(main())
# endregion
