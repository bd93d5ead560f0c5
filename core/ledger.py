"""
Ingredient Ledger
Baker's percentage bookkeeping and mixing water temperature solve
"""
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from core.errors import DoughValidationError, InfeasibleTemperatureError
from core.kinetics import SUGAR_MAX
from models.ingredients import (
    EGG_SPECIFIC_HEAT,
    MILK_SPECIFIC_HEAT,
    SALT_SPECIFIC_HEAT,
    STANDARD_AMBIENT_PRESSURE,
    SUGAR_SPECIFIC_HEAT,
    WATER_SPECIFIC_HEAT,
    YEAST_SPECIFIC_HEAT,
    Egg,
    Fat,
    FatType,
    Flour,
    Milk,
    Sugar,
    Water,
    boiling_temperature,
)


class IngredientKind(str, Enum):
    WATER = "water"
    MILK = "milk"
    EGG = "egg"
    SUGAR = "sugar"
    SALT = "salt"
    FAT = "fat"


class Contribution(BaseModel):
    """
    One ingredient addition, every fraction relative to flour mass unless noted

    water, fat, salt, sugar: constituent contents as fractions of the ingredient mass
    (sugar is glucose-equivalent)
    temperature: [°C], unset means room temperature (or unknown, for direct water)
    specific_heat: [kJ / (kg · K)], ignored when fat_type is set
    """
    model_config = ConfigDict(frozen=True)

    kind: IngredientKind
    fraction: float = Field(gt=0.)
    water: float = Field(default=0., ge=0., le=1.)
    fat: float = Field(default=0., ge=0., le=1.)
    salt: float = Field(default=0., ge=0., le=1.)
    sugar: float = Field(default=0., ge=0., le=1.)
    chlorine_dioxide: float = Field(default=0., ge=0.)
    temperature: Optional[float] = None
    specific_heat: float = Field(gt=0.)
    fat_type: Optional[FatType] = None

    def specific_heat_at(self, temperature: float) -> float:
        if self.fat_type is not None:
            return self.fat_type.specific_heat(temperature)
        return self.specific_heat


def _check_fraction(fraction: float, name: str) -> None:
    if fraction is None or fraction <= 0.:
        raise DoughValidationError(f"{name} quantity must be positive")


class IngredientLedger:
    """
    Records every ingredient as a fraction of flour mass (baker's percentage)

    Every add_* call validates its own input and returns the ledger so that
    calls can be chained.
    A snapshot refuses any further addition.
    """

    def __init__(self):
        self.contributions: Sequence[Contribution] = []
        self._free_water: Optional[Contribution] = None
        self._frozen = False

    def add_water(
        self,
        fraction: float,
        water: Optional[Water] = None,
        temperature: Optional[float] = None
    ) -> "IngredientLedger":
        """
        Add water

        Args:
            fraction: Water as a fraction of flour mass
            water: Water chemistry, pure water when omitted
            temperature: Water temperature [°C], omit to have it solved

        Returns:
            The ledger
        """
        self._check_open()
        _check_fraction(fraction, "Water")
        water = water or Water()
        if temperature is None and self._free_water is not None:
            raise DoughValidationError(
                "Only one water addition can have its temperature solved, "
                "give an explicit temperature to the others"
            )

        contribution = Contribution(
            kind=IngredientKind.WATER,
            fraction=fraction,
            water=water.water,
            chlorine_dioxide=water.chlorine_dioxide,
            temperature=temperature,
            specific_heat=WATER_SPECIFIC_HEAT,
        )
        self.contributions.append(contribution)
        if temperature is None:
            self._free_water = contribution
        return self

    def add_milk(self, fraction: float, milk: Optional[Milk] = None,
                 temperature: Optional[float] = None) -> "IngredientLedger":
        self._check_open()
        _check_fraction(fraction, "Milk")
        milk = milk or Milk()
        self.contributions.append(Contribution(
            kind=IngredientKind.MILK,
            fraction=fraction,
            water=milk.water,
            fat=milk.fat,
            temperature=temperature,
            specific_heat=MILK_SPECIFIC_HEAT,
        ))
        return self

    def add_egg(self, fraction: float, egg: Optional[Egg] = None,
                temperature: Optional[float] = None) -> "IngredientLedger":
        self._check_open()
        _check_fraction(fraction, "Egg")
        egg = egg or Egg()
        self.contributions.append(Contribution(
            kind=IngredientKind.EGG,
            fraction=fraction,
            water=egg.water,
            fat=egg.fat,
            temperature=temperature,
            specific_heat=EGG_SPECIFIC_HEAT,
        ))
        return self

    def add_sugar(self, fraction: float, sugar: Optional[Sugar] = None) -> "IngredientLedger":
        """
        Add sugar, at most once

        Args:
            fraction: Sugar product as a fraction of flour mass
            sugar: Sugar type and composition, sucrose when omitted

        Returns:
            The ledger
        """
        self._check_open()
        _check_fraction(fraction, "Sugar")
        if self._find(IngredientKind.SUGAR):
            raise DoughValidationError("Sugar was already set")
        sugar = sugar or Sugar()
        glucose_equivalent = sugar.carbohydrate * sugar.type.factor
        if fraction * glucose_equivalent >= SUGAR_MAX:
            raise DoughValidationError(
                f"Sugar ({fraction * glucose_equivalent:.1%} glucose equivalent) "
                f"must be less than {SUGAR_MAX:.1%}"
            )

        self.contributions.append(Contribution(
            kind=IngredientKind.SUGAR,
            fraction=fraction,
            water=sugar.water,
            sugar=glucose_equivalent,
            specific_heat=SUGAR_SPECIFIC_HEAT,
        ))
        return self

    def add_fat(self, fraction: float, fat: Optional[Fat] = None) -> "IngredientLedger":
        self._check_open()
        _check_fraction(fraction, "Fat")
        if self._find(IngredientKind.FAT):
            raise DoughValidationError("Fat was already set")
        fat = fat or Fat()
        self.contributions.append(Contribution(
            kind=IngredientKind.FAT,
            fraction=fraction,
            water=fat.water,
            fat=fat.fat,
            salt=fat.salt,
            specific_heat=fat.specific_heat(20.),
            fat_type=fat.type,
        ))
        return self

    def add_salt(self, fraction: float) -> "IngredientLedger":
        self._check_open()
        _check_fraction(fraction, "Salt")
        self.contributions.append(Contribution(
            kind=IngredientKind.SALT,
            fraction=fraction,
            salt=1.,
            specific_heat=SALT_SPECIFIC_HEAT,
        ))
        return self

    def snapshot(self) -> "IngredientLedger":
        """Read-only copy detached from further additions"""
        ledger = IngredientLedger()
        ledger.contributions = tuple(self.contributions)
        ledger._free_water = self._free_water
        ledger._frozen = True
        return ledger

    def _check_open(self) -> None:
        if self._frozen:
            raise DoughValidationError("Ingredients of a built dough cannot change")

    def _find(self, kind: IngredientKind) -> List[Contribution]:
        return [c for c in self.contributions if c.kind == kind]

    def fraction_of(self, kind: IngredientKind) -> float:
        """As-added quantity of one kind of ingredient, as a fraction of flour mass"""
        return sum(c.fraction for c in self._find(kind))

    @property
    def total_fraction(self) -> float:
        """Sum of every as-added fraction, flour and yeast excluded"""
        return sum(c.fraction for c in self.contributions)

    @property
    def hydration(self) -> float:
        """Total water brought by any ingredient, as a fraction of flour mass"""
        return sum(c.fraction * c.water for c in self.contributions)

    @property
    def sugar(self) -> float:
        """Glucose-equivalent sugar, as a fraction of flour mass"""
        return sum(c.fraction * c.sugar for c in self.contributions)

    @property
    def fat(self) -> float:
        return sum(c.fraction * c.fat for c in self.contributions)

    @property
    def salt(self) -> float:
        return sum(c.fraction * c.salt for c in self.contributions)

    @property
    def chlorine_dioxide(self) -> float:
        """Chlorine dioxide of the direct water additions, weighted by their water [mg / l]"""
        waters = self._find(IngredientKind.WATER)
        total = sum(c.fraction * c.water for c in waters)
        if total == 0.:
            return 0.
        return sum(c.fraction * c.water * c.chlorine_dioxide for c in waters) / total

    @property
    def free_water(self) -> Optional[Contribution]:
        """Water addition whose temperature is the unknown of the energy balance"""
        return self._free_water

    def heat_capacity(self, flour: Flour, ingredients_temperature: float,
                      yeast_fraction: float = 0.) -> float:
        """
        Thermal mass of the dough per unit of flour mass

        Args:
            flour: Flour
            ingredients_temperature: Room temperature [°C]
            yeast_fraction: Yeast as a fraction of flour mass

        Returns:
            Sum of fraction · specific heat [kJ / K per kg of flour]
        """
        total = flour.specific_heat(ingredients_temperature) + yeast_fraction * YEAST_SPECIFIC_HEAT
        for c in self.contributions:
            temperature = ingredients_temperature if c.temperature is None else c.temperature
            total += c.fraction * c.specific_heat_at(temperature)
        return total

    def solve_water_temperature(
        self,
        flour: Flour,
        ingredients_temperature: float,
        dough_temperature: float,
        friction_rise: float = 0.,
        yeast_fraction: float = 0.,
        pressure: float = STANDARD_AMBIENT_PRESSURE
    ) -> Optional[float]:
        """
        Solve the energy balance for the temperature of the free water addition

            Σ m·c·T + friction = (Σ m·c) · T_dough

        where the friction heat is friction_rise · Σ m·c.

        Args:
            flour: Flour, at room temperature
            ingredients_temperature: Temperature of every ingredient without its own [°C]
            dough_temperature: Desired dough temperature after kneading [°C]
            friction_rise: Temperature rise due to kneading [°C]
            yeast_fraction: Yeast as a fraction of flour mass, at room temperature
            pressure: Atmospheric pressure [hPa], sets the boiling point

        Returns:
            Water temperature [°C], or None when every water addition has its own

        Raises:
            InfeasibleTemperatureError: The solution is frozen or boiling water
        """
        free = self._free_water
        if free is None:
            return None

        known_capacity = flour.specific_heat(ingredients_temperature) + yeast_fraction * YEAST_SPECIFIC_HEAT
        known_heat = known_capacity * ingredients_temperature
        for c in self.contributions:
            if c is free:
                continue
            temperature = ingredients_temperature if c.temperature is None else c.temperature
            capacity = c.fraction * c.specific_heat_at(temperature)
            known_capacity += capacity
            known_heat += capacity * temperature

        free_capacity = free.fraction * free.specific_heat
        total_capacity = known_capacity + free_capacity
        temperature = (total_capacity * (dough_temperature - friction_rise) - known_heat) / free_capacity

        boiling = boiling_temperature(pressure)
        if temperature < 0. or temperature >= boiling:
            raise InfeasibleTemperatureError(
                f"Water temperature would be {temperature:.1f} °C, outside [0, {boiling:.1f}) °C: "
                f"cannot reach a dough temperature of {dough_temperature} °C",
                temperature=temperature,
            )
        return temperature
