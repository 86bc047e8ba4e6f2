import numpy as np


def is_permutation(tour, num_cities):
    """Check that a tour visits every city id exactly once."""
    tour = np.asarray(tour)
    return tour.shape == (num_cities,) and np.array_equal(np.sort(tour), np.arange(num_cities))
