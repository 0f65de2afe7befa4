"""
Load-once caching for page data.

Streamlit reruns the script on every interaction. Page loads go through
`load_once`, so a rerun reuses the previous result, failures included.
Data is only fetched again after `invalidate` (a Retry button or a
successful change) or when the session generation moves on.
"""
from typing import Callable, MutableMapping, TypeVar


T = TypeVar("T")

_PREFIX = "loaded_"


def load_once(
    state: MutableMapping,
    key: str,
    loader: Callable[[], T],
    generation: int = 0,
) -> T:
    """Return the cached result for `key`, calling `loader` only on a miss."""
    slot = _PREFIX + key
    entry = state.get(slot)
    if entry is None or entry[0] != generation:
        entry = (generation, loader())
        state[slot] = entry
    return entry[1]


def invalidate(state: MutableMapping, *keys: str) -> None:
    """Forget cached results so the next `load_once` fetches again."""
    for key in keys:
        state.pop(_PREFIX + key, None)
