FORAGER = 'forager'
ONLOOKER = 'onlooker'
SCOUT = 'scout'

ROLES = (FORAGER, ONLOOKER, SCOUT)


class Bee:
    def __init__(self, role, tour, distance):
        """Initialize a bee with its role and current tour.

        Args:
            role (str): One of 'forager', 'onlooker', 'scout'
            tour (np.ndarray): Permutation of city ids
            distance (float): Length of the tour
        """
        if role not in ROLES:
            raise ValueError(f"Unknown bee role: {role!r}")
        self.role = role
        self.tour = tour
        self.distance = distance

    def accept(self, tour, distance):
        """Replace the current tour with a proposal."""
        self.tour = tour
        self.distance = distance

    def __repr__(self):
        return f"Bee(role={self.role!r}, distance={self.distance:.1f})"
