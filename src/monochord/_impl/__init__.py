from .units import *  # noqa: F401, F403
from .tuning import *  # noqa: F401, F403
