import os

import numpy as np
import matplotlib.pyplot as plt
from rich.console import Console
from rich.table import Table
from rich.theme import Theme

from ..core.optimizer.bee import ROLES


def setup_rich_console():
    """Set up the themed rich console."""
    custom_theme = Theme({
        "primary": "bold green",
        "secondary": "dim white",
        "info": "bold blue",
        "warning": "bold yellow",
        "error": "bold red",
    })
    return Console(theme=custom_theme)


def print_settings(console, config):
    """Print the colony settings before a run."""
    table = Table(title="ABC-TSP Settings", show_header=True, header_style="bold magenta")
    table.add_column("Setting")
    table.add_column("Value", justify="right")

    table.add_row("Cities", str(config['num_cities']))
    table.add_row("Foragers", str(config['num_foragers']))
    table.add_row("Onlookers", str(config['num_onlookers']))
    table.add_row("Scouts", str(config['num_scouts']))
    table.add_row("Speed", f"{config['speed']}x")

    console.print(table)


def print_status(console, snapshot):
    """Print the queryable engine outputs as a table."""
    table = Table(title="Colony Status", show_header=True, header_style="bold magenta")
    table.add_column("Metric")
    table.add_column("Value", justify="right")

    best = snapshot['best_length']
    table.add_row("Generation", str(snapshot['generation']))
    table.add_row("State", snapshot['state'])
    table.add_row("Best Distance", "-" if np.isinf(best) else f"{best:.1f}")
    table.add_row("Avg Distance", f"{snapshot['mean_length']:.1f}")
    table.add_row("Improvements", str(snapshot['improvements']))

    console.print(table)


def _closed(cities, tour):
    points = cities[np.asarray(tour)]
    return np.vstack([points, points[:1]])


def visualize_colony(optimizer, save_path='res/colony.png'):
    """
    Draw every bee tour dimmed, the global best highlighted, and the cities labelled.

    Args:
        optimizer (ABCOptimizer): Engine to draw
        save_path (str): Output image path
    """
    directory = os.path.dirname(save_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    colors = optimizer.config['colors']
    cities = optimizer.cities

    fig, ax = plt.subplots(figsize=(10, 7.5))

    for bee in optimizer.bees:
        path = _closed(cities, bee.tour)
        ax.plot(path[:, 0], path[:, 1], color=colors['path'], linewidth=1, alpha=0.3)

    if optimizer.best_tour is not None:
        best = _closed(cities, optimizer.best_tour)
        ax.plot(best[:, 0], best[:, 1], color=colors['best_path'], linewidth=3,
                label=f"Best ({optimizer.best_length:.1f})")

    # Bees sit on the first city of their current tour
    for role in ROLES:
        starts = [cities[bee.tour[0]] for bee in optimizer.bees if bee.role == role]
        if starts:
            starts = np.array(starts)
            ax.scatter(starts[:, 0], starts[:, 1], color=colors[role], s=30,
                       zorder=4, label=role.capitalize())

    ax.scatter(cities[:, 0], cities[:, 1], color=colors['node'], s=300, zorder=3)
    for city_id, (x, y) in enumerate(cities):
        ax.text(x, y, str(city_id), color='white', ha='center', va='center', zorder=5)

    ax.set_xlim(0, optimizer.config['field_width'])
    ax.set_ylim(optimizer.config['field_height'], 0)
    ax.set_title(f"Generation {optimizer.generation}")
    ax.legend(loc='upper right')

    fig.savefig(save_path)
    plt.close(fig)
