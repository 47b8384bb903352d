import matplotlib.pyplot as plt
import numpy as np


def plot_bounded_voronoi(cells, bound=None, ax=None):
    if ax is None:
        fig, ax = plt.subplots()

    if bound is not None:
        b = np.asarray(bound.exterior.coords if hasattr(bound, "exterior") else bound, dtype=np.float64)
        ax.plot(*b.T, "--", color="grey")

    for cell in cells:
        p = np.vstack([cell.polygon, cell.polygon[:1]])
        ax.plot(*p.T, "-k")
        ax.plot(cell.site.x, cell.site.y, ".r")

    ax.set_aspect("equal")
    ax.set_title("Bounded Voronoi")
    return ax
