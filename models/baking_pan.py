"""
Baking Pan Models
Pan geometry, pan materials and the set of pans used for one bake
"""
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from utils.numeric import evaluate_polynomial


class MaterialProperties(BaseModel):
    """
    Thermal and physical constants of a pan material

    specific_heat: [J / (kg · K)]
    density: [kg / m³]
    conductivity_polynomial: coefficients in temperature [°C], lowest degree first
    conductivity_steps: (upper temperature bound [°C], conductivity [W / (m · K)]) pairs
    """
    model_config = ConfigDict(frozen=True)

    specific_heat: float
    density: float
    emissivity: float
    conductivity_polynomial: Tuple[float, ...] = ()
    conductivity_steps: Tuple[Tuple[float, float], ...] = ()


class BakingPanMaterial(str, Enum):
    """Pan material, constants are looked up in the material table"""
    CAST_IRON = "cast_iron"
    ALUMINIUM = "aluminium"
    STAINLESS_STEEL_304 = "stainless_steel_304"
    STAINLESS_STEEL_316 = "stainless_steel_316"
    CERAMIC = "ceramic"
    CLAY = "clay"
    CORDIERITE_STONE = "cordierite_stone"

    @property
    def properties(self) -> MaterialProperties:
        return MATERIAL_TABLE[self]

    @property
    def specific_heat(self) -> float:
        return self.properties.specific_heat

    @property
    def density(self) -> float:
        return self.properties.density

    @property
    def emissivity(self) -> float:
        return self.properties.emissivity

    def thermal_conductivity(self, temperature: float) -> float:
        """
        Thermal conductivity at the given temperature

        Args:
            temperature: Material temperature [°C]

        Returns:
            Conductivity [W / (m · K)]
        """
        properties = self.properties
        if properties.conductivity_polynomial:
            return evaluate_polynomial(properties.conductivity_polynomial, temperature)

        for upper_bound, conductivity in properties.conductivity_steps:
            if temperature < upper_bound:
                return conductivity
        return properties.conductivity_steps[-1][1]


MATERIAL_TABLE: Dict[BakingPanMaterial, MaterialProperties] = {
    BakingPanMaterial.CAST_IRON: MaterialProperties(
        specific_heat=460., density=7200., emissivity=0.8,
        conductivity_steps=((100., 52.), (300., 48.), (math.inf, 44.)),
    ),
    # fitted on 237 W/(m·K) at 27 °C, 240 at 127 °C, 231 at 327 °C and 218 at 527 °C
    BakingPanMaterial.ALUMINIUM: MaterialProperties(
        specific_heat=896.9, density=2700., emissivity=0.09,
        conductivity_polynomial=(234.8842368, 0.0900148, -0.0004424, 0.0000004),
    ),
    BakingPanMaterial.STAINLESS_STEEL_304: MaterialProperties(
        specific_heat=500., density=7900., emissivity=0.35,
        conductivity_steps=((100., 16.2), (500., 18.6), (math.inf, 21.5)),
    ),
    BakingPanMaterial.STAINLESS_STEEL_316: MaterialProperties(
        specific_heat=500., density=8000., emissivity=0.28,
        conductivity_steps=((100., 16.3), (500., 18.8), (math.inf, 21.5)),
    ),
    BakingPanMaterial.CERAMIC: MaterialProperties(
        specific_heat=850., density=2400., emissivity=0.9,
        conductivity_steps=((math.inf, 1.4),),
    ),
    BakingPanMaterial.CLAY: MaterialProperties(
        specific_heat=920., density=1800., emissivity=0.91,
        conductivity_steps=((math.inf, 0.8),),
    ),
    BakingPanMaterial.CORDIERITE_STONE: MaterialProperties(
        specific_heat=825., density=2500., emissivity=0.85,
        conductivity_steps=((math.inf, 3.),),
    ),
}


class BakingPan(BaseModel, ABC):
    """
    Common pan attributes

    thickness: wall thickness [cm]
    """
    model_config = ConfigDict(frozen=True)

    material: BakingPanMaterial
    thickness: float = Field(gt=0.)

    @abstractmethod
    def area(self) -> float:
        """Surface covered by the dough [cm²]"""


class CircularBakingPan(BakingPan):
    """Round pan, diameter in cm"""
    diameter: float = Field(gt=0.)

    def area(self) -> float:
        return math.pi * self.diameter * self.diameter / 4.


class RectangularBakingPan(BakingPan):
    """Rectangular pan, edges in cm"""
    edge1: float = Field(gt=0.)
    edge2: float = Field(gt=0.)

    def area(self) -> float:
        return self.edge1 * self.edge2


class BakingInstruments(BaseModel):
    """Pans used for one bake"""
    model_config = ConfigDict(frozen=True)

    baking_pans: List[Union[CircularBakingPan, RectangularBakingPan]] = Field(min_length=1)

    def areas(self) -> List[float]:
        return [pan.area() for pan in self.baking_pans]

    def total_area(self) -> float:
        """
        Combined area of every pan

        Returns:
            Area [cm²]
        """
        return sum(self.areas())
