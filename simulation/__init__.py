"""Monte Carlo equity simulation for Hold'em hands."""

from simulation.runner import SimulationConfig, SimulationError, SimulationRunner, run_simulation
from simulation.statistics import Counters, SimulationResult

__all__ = [
    "Counters",
    "SimulationConfig",
    "SimulationError",
    "SimulationResult",
    "SimulationRunner",
    "run_simulation",
]
