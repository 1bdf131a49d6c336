# region Imports
import io
from typing import Optional
import numpy as np
from matplotlib.figure import Figure
from matplotlib.patches import Patch
from matplotlib.lines import Line2D

from safe_path.models import RadiationGrid, SafePath

_FLOAT_MAX = float(np.finfo(np.float64).max)
# endregion

# region Visualization Function
def render_path_figure(
    grid: RadiationGrid,
    result: Optional[SafePath],
    title: str = "Safest path",
    show_expansion: bool = True,
    annotate: bool = True,
) -> Figure:
    """
    Render radiation levels with optional search-order overlay and the path.
    Path cells holding the bottleneck value are marked in yellow.
    Built on a bare Figure so it is safe to call from server threads.
    """
    H, W = grid.N, grid.M
    if grid.values.dtype == object:
        # values beyond float range saturate for colouring only
        base = np.vectorize(lambda v: float(min(v, _FLOAT_MAX)), otypes=[np.float64])(grid.values)
    else:
        base = grid.values.astype(np.float64)

    fig = Figure(figsize=(max(4, 0.6 * W + 2), max(4, 0.6 * H + 1)))
    ax = fig.add_subplot(1, 1, 1)
    ax.imshow(base, origin="upper", cmap="magma", alpha=0.9)

    # region Blocked Cells
    if grid.blocked is not None and grid.blocked.any():
        mask = np.ma.masked_where(~grid.blocked, np.ones((H, W)))
        ax.imshow(mask, origin="upper", cmap="gray_r", vmin=0, vmax=1, alpha=1.0)
    # endregion

    # region Expansion Heat Overlay
    if show_expansion and result is not None and result.expanded_order:
        order_map = np.full((H, W), np.nan, dtype=np.float32)
        for i, (r, c) in enumerate(result.expanded_order):
            order_map[r, c] = i + 1
        order_map /= max(1.0, float(np.nanmax(order_map)))
        heat = ax.imshow(order_map, origin="upper", cmap="viridis", alpha=0.35)
        cbar = fig.colorbar(heat, ax=ax, fraction=0.046, pad=0.04)
        cbar.set_label("finalized (early → late)")
    # endregion

    # region Cell Labels
    if annotate:
        for (r, c), v in np.ndenumerate(grid.values):
            ax.text(c, r, str(int(v)), ha="center", va="center", fontsize=9, color="white")
    # endregion

    # region Path Overlay
    if result is not None and result.path:
        ys, xs = zip(*result.path)
        ax.plot(xs, ys, color="cyan", linewidth=2.5)
        peak = [(r, c) for r, c in result.path if grid.value((r, c)) == result.bottleneck]
        if peak:
            py, px = zip(*peak)
            ax.scatter(px, py, s=220, facecolors="none", edgecolors="yellow", linewidths=2.0, zorder=3)
        title = f"{title} (max radiation {result.bottleneck})"
    elif result is None:
        title = f"{title} (unreachable)"

    ax.scatter(0, 0, s=100, edgecolors="black", facecolors="lime", zorder=4)
    ax.scatter(W - 1, H - 1, s=100, edgecolors="black", facecolors="red", zorder=4)
    # endregion

    # region Legend / Layout
    legend_elements = [
        Line2D([0], [0], color="cyan", lw=2, label="Path"),
        Line2D([0], [0], marker="o", color="w", label="Start (0,0)",
               markerfacecolor="lime", markeredgecolor="black", markersize=9),
        Line2D([0], [0], marker="o", color="w", label="End (N-1,M-1)",
               markerfacecolor="red", markeredgecolor="black", markersize=9),
        Line2D([0], [0], marker="o", color="w", label="Max radiation on path",
               markerfacecolor="none", markeredgecolor="yellow", markersize=11),
        Patch(facecolor="black", label="Blocked"),
    ]
    ax.legend(handles=legend_elements, loc="upper left", bbox_to_anchor=(1.02, 1.0),
              fontsize=8, framealpha=0.85)
    ax.set_title(title)
    ax.set_xticks(range(W))
    ax.set_yticks(range(H))
    fig.tight_layout()
    # endregion
    return fig
# endregion

# region PNG Encoding
def render_png(grid: RadiationGrid, result: Optional[SafePath], **kwargs) -> bytes:
    fig = render_path_figure(grid, result, **kwargs)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=100)
    return buf.getvalue()
# endregion
