"""Terrain cell: the attribute record every generation pass reads and writes."""

from dataclasses import dataclass, field, fields
from typing import Any

from .types import (
    BiomeType,
    ClimateZone,
    ExplorationStatus,
    Infrastructure,
    Mineral,
    PrimaryTerrain,
    SettlementType,
    SpecialFeature,
    VegetationType,
    WaterFlow,
)

# Attributes stored as 0-255 integers
NUMERIC_ATTRIBUTES = (
    "elevation",
    "water_level",
    "temperature",
    "rainfall",
    "vegetation_density",
    "soil_fertility",
    "magical_energy",
    "population_density",
    "danger_level",
)

_ENUM_ATTRIBUTES = {
    "water_flow": WaterFlow,
    "climate_zone": ClimateZone,
    "biome_type": BiomeType,
    "vegetation_type": VegetationType,
    "settlement_type": SettlementType,
    "exploration_status": ExplorationStatus,
}

_SET_ATTRIBUTES = {
    "mineral_deposits": Mineral,
    "infrastructure": Infrastructure,
    "special_features": SpecialFeature,
}

_FLOW_PHRASES = {
    WaterFlow.RIVER: "riverside",
    WaterFlow.LAKE: "lakeside",
    WaterFlow.STREAM: "by a stream",
}


@dataclass
class TerrainCell:
    """Mutable per-cell attribute record.

    Defaults describe neutral, temperate, unexplored grassland at sea level.
    Cells carry no generation logic; the passes in ``ecosystem.passes``
    populate them in order.
    """

    # Foundation
    elevation: int = 128
    water_level: int = 0
    water_flow: WaterFlow = WaterFlow.NONE

    # Climate
    temperature: int = 128
    rainfall: int = 128
    climate_zone: ClimateZone = ClimateZone.TEMPERATE

    # Biome and vegetation
    biome_type: BiomeType = BiomeType.GRASSLAND
    vegetation_density: int = 64
    vegetation_type: VegetationType = VegetationType.GRASS

    # Resources
    soil_fertility: int = 128
    mineral_deposits: set[Mineral] = field(default_factory=set)
    magical_energy: int = 32

    # Civilization
    settlement_type: SettlementType = SettlementType.NONE
    population_density: int = 0
    infrastructure: set[Infrastructure] = field(default_factory=set)

    # Special features
    special_features: set[SpecialFeature] = field(default_factory=set)
    danger_level: int = 32
    exploration_status: ExplorationStatus = ExplorationStatus.UNEXPLORED

    @property
    def is_water(self) -> bool:
        """Whether the cell holds standing or flowing water."""
        return self.water_level > 0 or self.water_flow != WaterFlow.NONE

    @property
    def is_land(self) -> bool:
        return not self.is_water

    @property
    def settlement_suitable(self) -> bool:
        """Whether a settlement could be founded here."""
        return (
            self.is_land
            and 64 < self.elevation < 200
            and self.soil_fertility > 64
            and self.danger_level < 128
        )

    @property
    def farmland_suitable(self) -> bool:
        """Whether the cell could be farmed."""
        return (
            self.is_land
            and 32 < self.elevation < 180
            and self.soil_fertility > 96
            and self.water_level == 0
            and self.temperature > 64
            and self.rainfall > 32
        )

    @property
    def primary_terrain(self) -> PrimaryTerrain:
        """Display-level terrain classification."""
        if self.is_water:
            return PrimaryTerrain.WATER
        if self.elevation > 200:
            return PrimaryTerrain.MOUNTAIN
        if self.elevation > 160:
            return PrimaryTerrain.HILL

        if self.biome_type == BiomeType.FOREST:
            if self.vegetation_density > 128:
                return PrimaryTerrain.DENSE_FOREST
            return PrimaryTerrain.LIGHT_FOREST
        if self.biome_type == BiomeType.DESERT:
            return PrimaryTerrain.DESERT
        if self.biome_type == BiomeType.GRASSLAND:
            if self.vegetation_density > 64:
                return PrimaryTerrain.GRASSLAND
            return PrimaryTerrain.PLAINS
        if self.biome_type == BiomeType.TUNDRA:
            return PrimaryTerrain.TUNDRA
        return PrimaryTerrain.UNKNOWN

    def describe(self) -> str:
        """Human-readable one-line description of the cell.

        Example: ``"Hilly, forest, well vegetated, containing shrine"``.
        """
        parts: list[str] = []

        if self.elevation > 200:
            parts.append("mountainous")
        elif self.elevation > 160:
            parts.append("hilly")
        elif self.elevation < 64:
            parts.append("low-lying")

        if self.is_water:
            parts.append(_FLOW_PHRASES.get(self.water_flow, "waterlogged"))

        parts.append(self.biome_type.value.replace("_", " "))

        if self.vegetation_density > 192:
            parts.append("densely vegetated")
        elif self.vegetation_density > 128:
            parts.append("well vegetated")
        elif self.vegetation_density > 64:
            parts.append("lightly vegetated")
        else:
            parts.append("sparse vegetation")

        if self.settlement_type != SettlementType.NONE:
            parts.append(f"with {self.settlement_type.value}")

        for feature in sorted(self.special_features, key=lambda f: f.value):
            parts.append(f"containing {feature.value.replace('_', ' ')}")

        return ", ".join(parts).capitalize()

    def copy(self) -> "TerrainCell":
        """Return an independent deep copy of this cell."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for name in _SET_ATTRIBUTES:
            values[name] = set(values[name])
        return TerrainCell(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-friendly mapping.

        Enum attributes become their string values and sets become sorted
        lists, so two equal cells always produce identical mappings.
        """
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if f.name in _SET_ATTRIBUTES:
                data[f.name] = sorted(member.value for member in value)
            elif f.name in _ENUM_ATTRIBUTES:
                data[f.name] = value.value
            else:
                data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TerrainCell":
        """Create a cell from a mapping produced by ``to_dict``.

        Missing keys keep their defaults; unknown keys are ignored.

        Raises:
            ValueError: If an enum value is not recognised.
        """
        cell = cls()
        for name in NUMERIC_ATTRIBUTES:
            if name in data:
                setattr(cell, name, int(data[name]))
        for name, enum_type in _ENUM_ATTRIBUTES.items():
            if name in data:
                setattr(cell, name, enum_type(data[name]))
        for name, enum_type in _SET_ATTRIBUTES.items():
            if name in data:
                setattr(cell, name, {enum_type(v) for v in data[name]})
        return cell
