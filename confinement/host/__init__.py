"""Host collaborators consulted by confines.

- ``HostEnvironment``: protocol for fact lookup, path checks, binary lookup
  and global feature checks.
- ``LocalHost``/``StaticHost``: local-machine and in-memory implementations.
- ``HostFacts``: fact source for the local machine.
- ``GlobalFeatureSet``/``GLOBAL_FEATURES``: process-wide feature oracle.
"""

from .environment import (
    HostEnvironment,
    LocalHost,
    StaticHost,
    get_environment,
    set_environment,
    use_environment,
)
from .facts import FactSource, HostFacts
from .features import GLOBAL_FEATURES, GlobalFeatureSet

__all__ = [
    "FactSource",
    "GLOBAL_FEATURES",
    "GlobalFeatureSet",
    "HostEnvironment",
    "HostFacts",
    "LocalHost",
    "StaticHost",
    "get_environment",
    "set_environment",
    "use_environment",
]
