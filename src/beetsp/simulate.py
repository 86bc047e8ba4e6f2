import os
import time

import click
from rich.progress import Progress, TextColumn, BarColumn, TaskProgressColumn, TimeRemainingColumn

from .config.CONFIG import CONFIG, ConfigurationError
from .core.optimizer.abc_optimizer import ABCOptimizer
from .utils.helper import setup_rich_console, print_settings, print_status, visualize_colony

console = setup_rich_console()


def run_simulation(optimizer, generations, realtime=True, console=console, sleep=time.sleep):
    """Drive the engine one generation per tick until done, paused or interrupted.

    Args:
        optimizer (ABCOptimizer): Engine to drive
        generations (int): Number of generations to advance
        realtime (bool): Wait optimizer.interval seconds between generations
        console (Console): Output console
        sleep (callable): Timer used between ticks

    Returns:
        dict: Engine snapshot after the run
    """
    optimizer.start()
    done = 0
    try:
        with Progress(
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            TaskProgressColumn(),
            TimeRemainingColumn(),
            console=console
        ) as progress:
            task = progress.add_task("[cyan]Foraging", total=generations)

            while optimizer.is_running and done < generations:
                improved = optimizer.advance_generation()
                done += 1
                if improved:
                    progress.console.print(
                        f"[green]Generation {optimizer.generation}: improved "
                        f"(best={optimizer.best_length:.1f}, avg={optimizer.mean_length:.1f})"
                    )
                progress.update(
                    task,
                    advance=1,
                    description=f"[cyan]Foraging - best {optimizer.best_length:.1f}"
                )

                if realtime and done < generations:
                    sleep(optimizer.interval)
    except KeyboardInterrupt:
        console.print(f"[yellow]Interrupted after {done} generations, colony paused")
    finally:
        optimizer.pause()

    return optimizer.snapshot()


@click.command()
@click.option('--cities', '-n', default=CONFIG['num_cities'], type=int, help='Number of cities.')
@click.option('--foragers', '-f', default=CONFIG['num_foragers'], type=int, help='Number of forager bees.')
@click.option('--onlookers', '-o', default=CONFIG['num_onlookers'], type=int, help='Number of onlooker bees.')
@click.option('--scouts', '-s', default=CONFIG['num_scouts'], type=int, help='Number of scout bees.')
@click.option('--speed', '-x', default=CONFIG['speed'], type=float, help='Speed multiplier for the generation cadence.')
@click.option('--generations', '-g', default=100, type=click.IntRange(min=0), help='Number of generations to run.')
@click.option('--seed', default=None, type=int, help='Random seed for a reproducible colony.')
@click.option('--realtime/--fast', default=False, help='Pace generations at the configured speed.')
@click.option('--plot/--no-plot', default=True, help='Save fitness history and colony plots.')
@click.option('--res-dir', default=CONFIG['res_dir'], help='Directory for saved plots.')
@click.pass_context
def main(ctx, cities, foragers, onlookers, scouts, speed, generations, seed, realtime, plot, res_dir):
    try:
        optimizer = ABCOptimizer({
            'num_cities': cities,
            'num_foragers': foragers,
            'num_onlookers': onlookers,
            'num_scouts': scouts,
            'speed': speed,
            'res_dir': res_dir,
        }, seed=seed)
    except ConfigurationError as e:
        console.print(f"[error]Configuration error: {e}", style="error")
        ctx.exit(2)

    print_settings(console, optimizer.config)
    snapshot = run_simulation(optimizer, generations, realtime=realtime)
    print_status(console, snapshot)

    if optimizer.best_tour is not None:
        tour = " -> ".join(str(city) for city in optimizer.best_tour)
        console.print(f"[info]Best tour: {tour}", style="primary")

    if plot:
        history_path = os.path.join(res_dir, 'fitness_history.png')
        colony_path = os.path.join(res_dir, 'colony.png')
        optimizer.plot_fitness_history(history_path)
        visualize_colony(optimizer, colony_path)
        console.print(f"[info]Plots saved to {res_dir}", style="primary")


if __name__ == "__main__":
    main()
