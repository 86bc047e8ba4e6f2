import numpy as np
from numba import jit


@jit(nopython=True)
def calculate_tour_length(cities, tour):
    """Closed-loop Euclidean length of a tour over city coordinates."""
    n = tour.shape[0]
    total = 0.0
    for i in range(n):
        a = tour[i]
        b = tour[(i + 1) % n]
        dx = cities[b, 0] - cities[a, 0]
        dy = cities[b, 1] - cities[a, 1]
        total += np.sqrt(dx * dx + dy * dy)
    return total


def tour_length(cities, tour):
    """Calculate the total length of a tour, including the edge back to the start.

    Args:
        cities (np.ndarray): (n, 2) city coordinates, row index is the city id
        tour (array-like): Permutation of city ids

    Returns:
        float: Tour length
    """
    cities = np.ascontiguousarray(cities, dtype=np.float64)
    tour = np.ascontiguousarray(tour, dtype=np.int64)
    return float(calculate_tour_length(cities, tour))


def fitness_values(lengths):
    """Fitness of each tour: the reciprocal of its length."""
    lengths = np.asarray(lengths, dtype=np.float64)
    with np.errstate(divide='ignore'):
        return 1.0 / lengths


def mean_tour_length(bees):
    """Mean cached tour length across a population."""
    if not bees:
        return float('inf')
    return float(np.mean([bee.distance for bee in bees]))


def is_better_tour(new_length, old_length):
    """Greedy acceptance: only a strictly shorter tour replaces the current one."""
    return new_length < old_length

