# region Imports and Typing
from typing import Tuple, Optional, Callable, Any, List, Dict
import heapq, logging

from safe_path.models import Cell, RadiationGrid, SafePath
from safe_path.grid import as_grid

logger = logging.getLogger(__name__)
# endregion

# region Neighbor Generation
def neighbors_4(u, H, W):
    r, c = u
    for dr, dc in ((0, 1), (1, 0), (0, -1), (-1, 0)):
        rr, cc = r + dr, c + dc
        if 0 <= rr < H and 0 <= cc < W:
            yield (rr, cc)
# endregion

# region Path Reconstruction
def reconstruct(parent, goal):
    path = []
    v = goal
    while v is not None:
        path.append(v)
        v = parent.get(v)
    path.reverse()
    return path
# endregion

# region Minimax Dijkstra
def minimax_path(
    start: Tuple[int, int],
    goal: Tuple[int, int],
    neighbors_fn: Callable[[Tuple[int, int]], Any],
    cell_cost_fn: Callable[[Tuple[int, int]], Optional[int]],
):
    """
    Bottleneck shortest path: minimize the largest cell cost seen from start to goal.

    cell_cost_fn returns None for impassable cells. Returns
      path, bottleneck, expansions, expanded_order
    with path None and bottleneck None when goal cannot be reached.
    """
    expanded_order: List[Tuple[int, int]] = []
    c0 = cell_cost_fn(start)
    if c0 is None:
        return None, None, 0, expanded_order

    counter = 0  # FIFO among equal bottlenecks
    openh: List[Tuple[int, int, Tuple[int, int]]] = []
    heapq.heappush(openh, (c0, counter, start))
    best: Dict[Tuple[int, int], int] = {start: c0}
    parent: Dict[Tuple[int, int], Optional[Tuple[int, int]]] = {start: None}
    closed = set()
    expansions = 0

    while openh:
        b, _, u = heapq.heappop(openh)

        # stale entry, a cheaper route already finalized u
        if u in closed:
            continue
        closed.add(u)
        expanded_order.append(u)
        expansions += 1

        if u == goal:
            return reconstruct(parent, u), b, expansions, expanded_order

        # region Neighbor Loop
        for v in neighbors_fn(u):
            if v in closed:
                continue
            cv = cell_cost_fn(v)
            if cv is None:
                continue
            alt = max(b, cv)
            old = best.get(v)
            if old is None or alt < old:
                best[v] = alt
                parent[v] = u
                counter += 1
                heapq.heappush(openh, (alt, counter, v))
        # endregion

    return None, None, expansions, expanded_order
# endregion

# region Grid Solver
def solve_safest_path(grid: Any, rows: Optional[int] = None, cols: Optional[int] = None) -> Optional[SafePath]:
    """
    Path from (0,0) to (N-1,M-1) with the smallest possible maximum radiation.

    Raises InvalidDimensions / InvalidCellValue for bad input; returns None
    when the target is unreachable.
    """
    g: RadiationGrid = as_grid(grid, rows, cols)
    H, W = g.N, g.M

    def neigh(u):
        return neighbors_4(u, H, W)

    def cost(c: Cell) -> Optional[int]:
        if g.is_blocked(c):
            return None
        return g.value(c)

    path, bottleneck, expansions, expanded_order = minimax_path(
        start=g.origin, goal=g.target, neighbors_fn=neigh, cell_cost_fn=cost
    )
    if path is None:
        logger.debug("no path on %dx%d grid after %d expansions", H, W, expansions)
        return None

    logger.debug(
        "solved %dx%d grid: bottleneck=%d path_len=%d expansions=%d",
        H, W, bottleneck, len(path), expansions,
    )
    return SafePath(
        bottleneck=int(bottleneck),
        path=path,
        expansions=expansions,
        expanded_order=expanded_order,
    )
# endregion
