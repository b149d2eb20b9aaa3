from talentflow.services.exceptions import NotFoundError, SlugConflictError, InvalidSortError
from talentflow.services.network import NetworkSimulator, SimulatedNetworkError, get_network
from talentflow.services.seed import generate_seed_data, seed_database
from talentflow.services.jobs import slugify

__all__ = [
    "NotFoundError",
    "SlugConflictError",
    "InvalidSortError",
    "NetworkSimulator",
    "SimulatedNetworkError",
    "get_network",
    "generate_seed_data",
    "seed_database",
    "slugify",
]
