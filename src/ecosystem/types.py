"""Categorical terrain attributes and their properties."""

from enum import Enum


class WaterFlow(str, Enum):
    """How water moves through a cell."""

    NONE = "none"
    STREAM = "stream"
    RIVER = "river"
    LAKE = "lake"


class ClimateZone(str, Enum):
    """Broad climate classification from temperature and rainfall."""

    ARCTIC = "arctic"
    TEMPERATE = "temperate"
    TROPICAL = "tropical"
    DESERT = "desert"


class BiomeType(str, Enum):
    """Biome classification."""

    OCEAN = "ocean"
    GRASSLAND = "grassland"
    FOREST = "forest"
    DESERT = "desert"
    MOUNTAIN = "mountain"
    TUNDRA = "tundra"


class VegetationType(str, Enum):
    """Dominant vegetation."""

    NONE = "none"
    GRASS = "grass"
    SHRUBS = "shrubs"
    DECIDUOUS = "deciduous"
    CONIFEROUS = "coniferous"
    TROPICAL = "tropical"


class Mineral(str, Enum):
    """Mineral deposit kinds."""

    IRON = "iron"
    GOLD = "gold"
    GEMS = "gems"
    COAL = "coal"


class SettlementType(str, Enum):
    """Settlement tiers, smallest to largest."""

    NONE = "none"
    FARMLAND = "farmland"
    HAMLET = "hamlet"
    VILLAGE = "village"
    TOWN = "town"
    CITY = "city"

    @property
    def is_settlement(self) -> bool:
        """Whether this tier is an inhabited settlement (not farmland)."""
        return self in _SETTLEMENT_TIERS

    @property
    def is_settled(self) -> bool:
        """Whether anything at all occupies the cell."""
        return self is not SettlementType.NONE


class Infrastructure(str, Enum):
    """Built structures on a cell."""

    ROAD = "road"
    BRIDGE = "bridge"
    DOCK = "dock"
    WALL = "wall"


class SpecialFeature(str, Enum):
    """Points of interest."""

    DUNGEON = "dungeon"
    RUINS = "ruins"
    SHRINE = "shrine"
    TOWER = "tower"
    CAVE = "cave"


class ExplorationStatus(str, Enum):
    """How well a cell is known."""

    UNEXPLORED = "unexplored"
    KNOWN = "known"
    MAPPED = "mapped"
    SETTLED = "settled"


class PrimaryTerrain(str, Enum):
    """Display-level terrain classification of a cell."""

    WATER = "water"
    MOUNTAIN = "mountain"
    HILL = "hill"
    DENSE_FOREST = "dense_forest"
    LIGHT_FOREST = "light_forest"
    DESERT = "desert"
    GRASSLAND = "grassland"
    PLAINS = "plains"
    TUNDRA = "tundra"
    UNKNOWN = "unknown"


# Define sets for O(1) lookup
_SETTLEMENT_TIERS = frozenset({
    SettlementType.HAMLET,
    SettlementType.VILLAGE,
    SettlementType.TOWN,
    SettlementType.CITY,
})
