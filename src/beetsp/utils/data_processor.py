import numpy as np


def generate_cities(num_cities, width, height, padding, rng):
    """Place cities uniformly at random inside the padded field.

    Args:
        num_cities (int): Number of cities
        width (float): Field width
        height (float): Field height
        padding (float): Margin kept free on every side
        rng (np.random.Generator): Random source

    Returns:
        np.ndarray: (num_cities, 2) coordinates; row i is city i
    """
    low = np.array([padding, padding], dtype=np.float64)
    span = np.array([width - 2 * padding, height - 2 * padding], dtype=np.float64)
    return low + rng.random((num_cities, 2)) * span
