from cssprune.engine.matcher import is_used
from cssprune.engine.normalize import normalize
from cssprune.engine.pruner import iter_selectors, prune

__all__ = ["normalize", "is_used", "prune", "iter_selectors"]
