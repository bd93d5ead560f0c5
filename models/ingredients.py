"""
Ingredient Models
Value objects describing the composition of every dough ingredient
"""
import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from utils.numeric import evaluate_polynomial


# Specific heats [kJ / (kg · K)]
WATER_SPECIFIC_HEAT = 4.186
SUGAR_SPECIFIC_HEAT = 1.244
SALT_SPECIFIC_HEAT = 0.88
MILK_SPECIFIC_HEAT = 3.93
EGG_SPECIFIC_HEAT = 3.18
YEAST_SPECIFIC_HEAT = 3.0

STANDARD_AMBIENT_PRESSURE = 1013.25
WATER_CHLORINE_DIOXIDE_MAX = 1. / 0.0931
WATER_FIXED_RESIDUE_MAX = 1500.

WATER_BOILING_POINT_K = 373.15
# [J / mol]
WATER_VAPORIZATION_HEAT = 40660.
GAS_CONSTANT = 8.314462618

BTU_PER_POUND_FAHRENHEIT = 4.1868


class SugarType(Enum):
    """
    Sweetener category

    factor: glucose-equivalent quantity giving the same fermentation
    """
    GLUCOSE = 0.41 / 0.41
    # glucose + glucose
    MALTOSE = 0.40 / 0.41
    # glucose + fructose
    SUCROSE = 0.38 / 0.41
    # glucose + galactose
    LACTOSE = 0.28 / 0.41

    def __init__(self, factor: float):
        self.factor = factor


class FatType(Enum):
    """
    Fat category, with the coefficients of its specific heat polynomial
    in temperature [°C] (lowest degree first), result in kJ / (kg · K)
    """
    ALMOND_OIL = (2.28581, 1.4566e-03, 1.3889e-05, -3.0282e-08)
    CANOLA_OIL = (2.15364, 8.88e-04, 2.2062e-05, -6.658e-08)
    CORN_OIL = (1.6653, -1.119e-03, 4.446e-05, -1.4734e-07)
    GRAPESEED_OIL = (1.56561, -8.551e-04, 3.0181e-05, -7.568e-08)
    HAZELNUT_OIL = (1.710717, -4.1854e-04, 2.4914e-05, -6.8208e-08)
    OLIVE_OIL = (2.36357, -4.379756e-02, 0.001162965, -1.5038497e-05, 1.0330492e-07, -3.619801e-10,
                 5.08154e-13)
    PEANUT_OIL = (2.13996, -8.0979e-03, 2.21472e-04, -2.26777e-06, 1.156938e-08, -2.35476e-11)
    SAFFLOWER_OIL = (2.0508, -2.936e-04, 3.50983e-05, -1.13766e-07)
    SESAME_OIL = (2.08728, 1.0255e-04, 2.5556e-05, -6.8968e-08)
    SOYBEAN_OIL = (1.60554, 1.5652e-03, 1.430277e-05, -4.58771e-08)
    SUNFLOWER_OIL = (2.217634, -1.629e-04, 3.0853e-05, -8.797e-08)
    WALNUT_OIL = (2.001465, -5.26e-05, 3.336e-05, -1.18765e-07)
    BUTTER = (2.72,)

    def __init__(self, *coefficients: float):
        self.coefficients = coefficients

    def specific_heat(self, temperature: float) -> float:
        """Specific heat [kJ / (kg · K)] at the given temperature [°C]"""
        return evaluate_polynomial(self.coefficients, temperature)


class _Ingredient(BaseModel):
    model_config = ConfigDict(frozen=True)


class Flour(_Ingredient):
    """
    Flour composition, all contents as fractions of flour mass

    strength: W index
    """
    strength: float = Field(gt=0.)
    protein: float = Field(default=0.12, ge=0., le=1.)
    fat: float = Field(default=0.015, ge=0., le=1.)
    carbohydrate: float = Field(default=0.70, ge=0., le=1.)
    fiber: float = Field(default=0.03, ge=0., le=1.)
    ash: float = Field(default=0.005, ge=0., le=1.)
    salt: float = Field(default=0., ge=0., le=1.)
    humidity: float = Field(default=0.13, ge=0., le=1.)

    def specific_heat(self, temperature: float) -> float:
        """
        Estimate the specific heat from the composition (Choi-Okos correlation)

        Args:
            temperature: Flour temperature [°C], valid between -40 °C and about 149 °C

        Returns:
            Specific heat [kJ / (kg · K)]
        """
        t = temperature * 1.8 + 32.
        if t < -40. or t > 300.:
            raise ValueError(f"Temperature {temperature} °C out of range [-40, 148.9]")

        cp = evaluate_polynomial((0.47442, 0.00016661, -0.000000096784), t) * self.protein
        cp += evaluate_polynomial((0.46730, 0.00021815, -0.00000035391), t) * self.fat
        cp += evaluate_polynomial((0.36114, 0.00028843, -0.00000043788), t) * self.carbohydrate
        cp += evaluate_polynomial((0.43276, 0.00026485, -0.00000034285), t) * self.fiber
        cp += evaluate_polynomial((0.25266, 0.00026810, -0.00000027141), t) * self.ash
        if t < 32.:
            cp += evaluate_polynomial((1.0725, -0.0053992, 0.000073361), t) * self.humidity
        else:
            cp += evaluate_polynomial((0.99827, -0.000037879, 0.00000040347), t) * self.humidity
        return cp * BTU_PER_POUND_FAHRENHEIT


class Water(_Ingredient):
    """
    Water composition and chemistry

    chlorine_dioxide: [mg / l]
    calcium_carbonate: hardness [mg / l]
    fixed_residue: [mg / l]
    """
    water: float = Field(default=1., ge=0., le=1.)
    chlorine_dioxide: float = Field(default=0., ge=0., lt=WATER_CHLORINE_DIOXIDE_MAX)
    calcium_carbonate: float = Field(default=0., ge=0.)
    fixed_residue: float = Field(default=0., ge=0., lt=WATER_FIXED_RESIDUE_MAX)
    ph: float = Field(default=5.4, ge=0., le=14.)


class Sugar(_Ingredient):
    """Sweetener: carbohydrate and water contents as fractions of its mass"""
    type: SugarType = SugarType.SUCROSE
    carbohydrate: float = Field(default=0.998, gt=0., le=1.)
    water: float = Field(default=0.0005, ge=0., le=1.)


class Fat(_Ingredient):
    """
    Fat or oil: fat, salt and water contents as fractions of its mass

    density: [g / ml]
    """
    type: FatType = FatType.OLIVE_OIL
    fat: float = Field(default=0.913, ge=0., le=1.)
    salt: float = Field(default=0., ge=0., le=1.)
    water: float = Field(default=0., ge=0., le=1.)
    density: float = Field(default=0.913, gt=0.)

    def specific_heat(self, temperature: float) -> float:
        return self.type.specific_heat(temperature)


class Milk(_Ingredient):
    """Whole milk by default"""
    fat: float = Field(default=0.037, ge=0., le=1.)
    water: float = Field(default=0.87, ge=0., le=1.)


class Egg(_Ingredient):
    """Whole egg without shell by default"""
    fat: float = Field(default=0.095, ge=0., le=1.)
    water: float = Field(default=0.76, ge=0., le=1.)


class Atmosphere(_Ingredient):
    """
    Ambient conditions

    pressure: [hPa]
    relative_humidity: fraction, optional
    """
    pressure: float = Field(default=STANDARD_AMBIENT_PRESSURE, gt=0.)
    relative_humidity: Optional[float] = Field(default=None, gt=0., le=1.)


def boiling_temperature(pressure: float) -> float:
    """
    Boiling point of water (Clausius-Clapeyron around the normal boiling point)

    Args:
        pressure: Ambient pressure [hPa]

    Returns:
        Temperature [°C]
    """
    inverse = 1. / WATER_BOILING_POINT_K - GAS_CONSTANT * math.log(pressure / STANDARD_AMBIENT_PRESSURE) / WATER_VAPORIZATION_HEAT
    return 1. / inverse - 273.15
