from .lazy import LazyTree, from_nested, to_nested
from .generate import generate_tree
from .prune import prune
from .mapping import map_values

__all__ = ["LazyTree", "from_nested", "to_nested", "generate_tree", "prune", "map_values"]
