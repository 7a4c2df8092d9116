from enum import Enum
from importlib.metadata import PackageNotFoundError, version

PROGRAM_NAME = "aro-hcp-frontend"
DISTRIBUTION_NAME = "hcp-frontend"


class LifecycleState(str, Enum):
    """Frontend lifecycle states, in the only order they may occur."""

    CREATED = "created"
    LISTENING = "listening"
    RUNNING = "running"
    DRAINING = "draining"
    STOPPED = "stopped"

    def next_state(self) -> "LifecycleState":
        states = list(LifecycleState)
        index = states.index(self)
        if index + 1 == len(states):
            raise RuntimeError(f"no state follows {self.value}")
        return states[index + 1]


def get_version() -> str:
    try:
        return version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return "unknown"
