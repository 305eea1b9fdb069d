"""
# `monochord`: Pitches of Arbitrary Tuning Systems

This is the top-level module of the `monochord` library. The units `Hz` and `Cents`, the
`Tuning` base class and its implementations `Edo`, `EqualSteps`, `CyclicTuning` and
`MidiTuning` can be accessed from here.
"""

from ._impl import *  # noqa: F401, F403
