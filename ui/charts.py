from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Patch
from models.report import CategoryBreakdown
from utils.currency import format_percent


def _no_data(ax: Axes) -> list[str]:
    ax.text(0.5, 0.5, "No Data", ha="center", va="center",
            transform=ax.transAxes, color="gray")
    ax.set_axis_off()
    return []


def draw_category_donut(ax: Axes, breakdown: CategoryBreakdown) -> list[str]:
    """Draw the breakdown as a donut on ax.

    Only positive totals get a wedge, and only wedges above the label
    threshold get an in-chart label; every slice appears in the legend.
    Returns the in-chart label texts.
    """
    ax.clear()
    drawn = [s for s in breakdown.slices if s.total > 0]
    if not drawn:
        return _no_data(ax)

    labels = [
        f"{s.category_name}\n{format_percent(s.share)}" if s.show_label else ""
        for s in drawn
    ]
    ax.pie(
        [float(s.total) for s in drawn],
        labels=labels,
        labeldistance=0.75,
        colors=[s.color_hex for s in drawn],
        startangle=90,
        counterclock=False,
        wedgeprops={"width": 0.5, "edgecolor": "white", "linewidth": 1},
        textprops={"fontsize": 8, "ha": "center", "va": "center"},
    )
    ax.legend(
        handles=[Patch(facecolor=s.color_hex, label=s.category_name) for s in breakdown.slices],
        loc="upper center",
        bbox_to_anchor=(0.5, -0.02),
        ncol=min(len(breakdown.slices), 4),
        frameon=False,
        fontsize=8,
    )
    ax.set_aspect("equal")
    return [label for label in labels if label]


def render_category_chart(breakdown: CategoryBreakdown, path: str, title: str = "") -> Figure:
    """Render the breakdown to an image file without a GUI backend."""
    fig = Figure(figsize=(4, 4.5), dpi=100, tight_layout=True)
    ax = fig.add_subplot(111)
    draw_category_donut(ax, breakdown)
    if title:
        ax.set_title(title)
    fig.savefig(path)
    return fig
