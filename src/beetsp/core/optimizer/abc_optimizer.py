import os

import numpy as np
import matplotlib.pyplot as plt

from ...config.CONFIG import build_config, validate_config
from ...utils.data_processor import generate_cities
from ..metrics.tour_metrics import fitness_values, is_better_tour, mean_tour_length, tour_length
from .bee import Bee, FORAGER, ONLOOKER, SCOUT


def random_tour(num_cities, rng):
    """Uniformly random permutation of all city ids."""
    return rng.permutation(num_cities).astype(np.int64)


def mutate_tour(tour, rng):
    """Swap the cities at two distinct random positions of a copy of the tour."""
    new_tour = np.array(tour, dtype=np.int64, copy=True)
    n = new_tour.shape[0]
    if n < 2:
        return new_tour

    i = rng.integers(0, n)
    j = rng.integers(0, n)
    while j == i:
        j = rng.integers(0, n)

    new_tour[i], new_tour[j] = new_tour[j], new_tour[i]
    return new_tour


def roulette_select(distances, rng):
    """Fitness-proportional choice of a bee index.

    Args:
        distances (list): Tour length of every bee in the population
        rng (np.random.Generator): Random source

    Returns:
        int: Index of the selected bee
    """
    fitness = fitness_values(distances)

    # Zero-length tours make the weights NaN, which also ends in the fallback
    with np.errstate(invalid='ignore'):
        normalized = fitness / fitness.sum()
    rand = rng.random()
    cumulative = 0.0
    for i, probability in enumerate(normalized):
        cumulative += probability
        if rand < cumulative:
            return i

    # Rounding left the cumulative sum short of the draw
    return len(normalized) - 1


def forager_proposal(bee, population, rng):
    """Exploit: mutate the bee's own tour."""
    return mutate_tour(bee.tour, rng)


def onlooker_proposal(bee, population, rng):
    """Follow: mutate the current tour of a roulette-selected donor."""
    donor = population[roulette_select([b.distance for b in population], rng)]
    return mutate_tour(donor.tour, rng)


def scout_proposal(bee, population, rng):
    """Explore: sample a fresh random tour."""
    return random_tour(bee.tour.shape[0], rng)


ROLE_PROPOSALS = {
    FORAGER: forager_proposal,
    ONLOOKER: onlooker_proposal,
    SCOUT: scout_proposal,
}


class ABCOptimizer:
    IDLE = 'idle'
    RUNNING = 'running'

    def __init__(self, config=None, seed=None):
        """Initialize the ABC optimizer and its first colony.

        Args:
            config (dict, optional): Overrides for the default configuration
            seed (int, optional): Seed for the random source, for reproducible runs
        """
        self.seed = seed
        self.rng = np.random.default_rng(seed)
        self.config = None
        self.reset(config)

    def reset(self, config=None):
        """Regenerate cities and bees, clear the global best, return to idle.

        Args:
            config (dict, optional): Overrides applied on top of the current configuration
        """
        config = validate_config(build_config(config, base=self.config))

        self.config = config
        self.state = self.IDLE
        self.generation = 0
        self.improvements = 0
        self._best_tour = None
        self.best_length = float('inf')
        self.fitness_history = []

        cities = generate_cities(
            config['num_cities'],
            config['field_width'],
            config['field_height'],
            config['padding'],
            self.rng,
        )
        cities.flags.writeable = False
        self._cities = cities
        self._bees = self.initialize_population()

    def initialize_population(self):
        """Seed foragers, onlookers and scouts, in that order, with random tours."""
        population = []
        counts = (
            (FORAGER, self.config['num_foragers']),
            (ONLOOKER, self.config['num_onlookers']),
            (SCOUT, self.config['num_scouts']),
        )
        for role, count in counts:
            for _ in range(count):
                tour = random_tour(self.num_cities, self.rng)
                population.append(Bee(role, tour, tour_length(self._cities, tour)))
        return population

    @property
    def cities(self):
        return self._cities

    @property
    def bees(self):
        """The live population, in role order."""
        return list(self._bees)

    @property
    def best_tour(self):
        """Copy of the shortest tour found since reset, or None."""
        if self._best_tour is None:
            return None
        return self._best_tour.copy()

    @property
    def num_cities(self):
        return self._cities.shape[0]

    @property
    def is_running(self):
        return self.state == self.RUNNING

    @property
    def interval(self):
        """Seconds between generations at the configured speed."""
        return self.config['base_interval'] / self.config['speed']

    @property
    def mean_length(self):
        return mean_tour_length(self._bees)

    def start(self):
        self.state = self.RUNNING

    def pause(self):
        self.state = self.IDLE

    def advance_generation(self):
        """Update every bee once, then refresh the global best.

        Returns:
            int: Number of global-best improvements seen in this generation
        """
        self.generation += 1

        for bee in self._bees:
            propose = ROLE_PROPOSALS[bee.role]
            new_tour = propose(bee, self._bees, self.rng)
            new_distance = tour_length(self._cities, new_tour)

            if is_better_tour(new_distance, bee.distance):
                bee.accept(new_tour, new_distance)

        improved = self._update_global_best()
        self.fitness_history.append(self.best_length)
        return improved

    def _update_global_best(self):
        improved = 0
        for bee in self._bees:
            if is_better_tour(bee.distance, self.best_length):
                self.best_length = bee.distance
                self._best_tour = bee.tour.copy()
                self.improvements += 1
                improved += 1
        return improved

    def snapshot(self):
        """Scalar view of the engine state for tables and UIs."""
        return {
            'generation': self.generation,
            'state': self.state,
            'best_length': self.best_length,
            'mean_length': self.mean_length,
            'improvements': self.improvements,
            'num_cities': self.num_cities,
            'num_bees': len(self._bees),
        }

    def plot_fitness_history(self, save_path='res/fitness_history.png'):
        """Plot and save the best tour length per generation."""
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        plt.figure(figsize=(10, 6))
        plt.plot(range(1, len(self.fitness_history) + 1), self.fitness_history, 'b-', label='Best Length')
        plt.xlabel('Generation')
        plt.ylabel('Tour Length')
        plt.title(f'ABC-TSP Best Tour Length (cities={self.num_cities})')
        plt.legend()
        plt.grid(True)
        plt.savefig(save_path)
        plt.close()
