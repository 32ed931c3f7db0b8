"""
Material states for the voxel world.

A BlockState is a block name plus a frozen set of (property, value) pairs,
so two states compare equal only when the block and every property match.
Predicates over states are how callers classify frame and interior cells.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, FrozenSet, Tuple

# Block names
AIR_BLOCK = "air"
STONE = "stone"
OBSIDIAN = "obsidian"
CRYING_OBSIDIAN = "crying_obsidian"
END_PORTAL_FRAME = "end_portal_frame"
END_PORTAL = "end_portal"
NETHER_PORTAL = "nether_portal"
FIRE = "fire"
SOUL_FIRE = "soul_fire"
WATER = "water"

# Block tags
FIRE_TAG = frozenset({FIRE, SOUL_FIRE})

# Property names
EYE = "eye"
AXIS = "axis"


@dataclass(frozen=True)
class BlockState:
    """Immutable material state."""
    block: str
    properties: FrozenSet[Tuple[str, Any]] = field(default_factory=frozenset)

    @classmethod
    def of(cls, block: str, **properties) -> "BlockState":
        return cls(block, frozenset(properties.items()))

    def is_of(self, block: str) -> bool:
        return self.block == block

    def is_in(self, tag: FrozenSet[str]) -> bool:
        return self.block in tag

    @property
    def is_air(self) -> bool:
        return self.block == AIR_BLOCK

    def get(self, prop: str, default: Any = None) -> Any:
        for name, value in self.properties:
            if name == prop:
                return value
        return default

    def with_property(self, prop: str, value: Any) -> "BlockState":
        kept = {(name, v) for name, v in self.properties if name != prop}
        kept.add((prop, value))
        return BlockState(self.block, frozenset(kept))

    def __repr__(self) -> str:
        if not self.properties:
            return f"BlockState({self.block})"
        props = ",".join(f"{k}={v}" for k, v in sorted(self.properties, key=lambda kv: kv[0]))
        return f"BlockState({self.block}[{props}])"


AIR = BlockState(AIR_BLOCK)

StatePredicate = Callable[[BlockState], bool]


def block_is(*blocks: str) -> StatePredicate:
    """Predicate matching any of the given block names, ignoring properties."""
    names = frozenset(blocks)
    return lambda state: state.block in names
