"""
Dough
Builder collecting the formulation, and the recipe computation driving
the ledger, the yeast kinetics, the scaler and the schedule composer
"""
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from core.config import EngineSettings, get_settings
from core.errors import DoughValidationError
from core.kinetics import YeastKinetics, ingredients_factor
from core.ledger import IngredientLedger
from core.recipe import RecipeScaler
from core.schedule import ScheduleComposer
from models.baking_pan import BakingInstruments
from models.ingredients import Atmosphere, Egg, Fat, Flour, Milk, Sugar, Water
from models.procedure import Procedure
from models.recipe import PanPortion, Recipe, Topping, ToppingPortion
from models.yeast import YeastStrain, YeastType
from utils.log_utils import get_logger
from utils.numeric import round_half_up

logger = get_logger(__name__)


class DoughFormula(BaseModel):
    """Validated, immutable formulation produced by Dough.build()"""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    strain: YeastStrain
    yeast_type: YeastType
    raw_yeast: float
    flour: Flour
    ledger: IngredientLedger
    atmosphere: Atmosphere
    ingredients_temperature: Optional[float] = None
    dough_temperature: Optional[float] = None

    def ingredients_factor(self) -> float:
        return ingredients_factor(
            sugar=self.ledger.sugar,
            fat=self.ledger.fat,
            salt=self.ledger.salt,
            hydration=self.ledger.hydration,
            chlorine_dioxide=self.ledger.chlorine_dioxide,
            pressure=self.atmosphere.pressure,
        )

    def kinetics(self, settings: Optional[EngineSettings] = None) -> YeastKinetics:
        return YeastKinetics(
            self.strain,
            self.yeast_type,
            raw_fraction=self.raw_yeast,
            factor=self.ingredients_factor(),
            settings=settings,
        )


class Dough:
    """
    Mutable formulation, every quantity as a fraction of flour mass

    Usage:
        dough = (Dough()
                 .add_water(0.65)
                 .add_salt(0.015)
                 .with_yeast(YeastType.INSTANT_DRY)
                 .with_flour(Flour(strength=260.))
                 .with_ingredients_temperature(18.)
                 .with_dough_temperature(27.))
        recipe = dough.create_recipe(procedure, dough_weight=740.)
    """

    def __init__(self, strain: YeastStrain = YeastStrain.SACCHAROMYCES_CEREVISIAE_CECT10131,
                 settings: Optional[EngineSettings] = None):
        """
        Args:
            strain: Microorganism of the yeast
            settings: Engine settings, read from the environment when omitted
        """
        self.strain = strain
        self.settings = settings or get_settings()
        self.ledger = IngredientLedger()
        self.yeast_type: Optional[YeastType] = None
        self.raw_yeast = 1.
        self.flour: Optional[Flour] = None
        self.ingredients_temperature: Optional[float] = None
        self.dough_temperature: Optional[float] = None
        self.atmosphere = Atmosphere()

    def add_water(self, fraction: float, water: Optional[Water] = None,
                  temperature: Optional[float] = None) -> "Dough":
        self.ledger.add_water(fraction, water, temperature)
        return self

    def add_milk(self, fraction: float, milk: Optional[Milk] = None,
                 temperature: Optional[float] = None) -> "Dough":
        self.ledger.add_milk(fraction, milk, temperature)
        return self

    def add_egg(self, fraction: float, egg: Optional[Egg] = None,
                temperature: Optional[float] = None) -> "Dough":
        self.ledger.add_egg(fraction, egg, temperature)
        return self

    def add_sugar(self, fraction: float, sugar: Optional[Sugar] = None) -> "Dough":
        self.ledger.add_sugar(fraction, sugar)
        return self

    def add_fat(self, fraction: float, fat: Optional[Fat] = None) -> "Dough":
        self.ledger.add_fat(fraction, fat)
        return self

    def add_salt(self, fraction: float) -> "Dough":
        self.ledger.add_salt(fraction)
        return self

    def with_yeast(self, yeast_type: YeastType, raw_fraction: float = 1.) -> "Dough":
        """
        Args:
            yeast_type: Commercial form of the yeast
            raw_fraction: Alive fraction of the yeast, in (0, 1]
        """
        if yeast_type is None:
            raise DoughValidationError("Yeast type must be given")
        if not 0. < raw_fraction <= 1.:
            raise DoughValidationError("Raw yeast fraction must be in (0, 1]")
        self.yeast_type = yeast_type
        self.raw_yeast = raw_fraction
        return self

    def with_flour(self, flour: Flour) -> "Dough":
        if flour is None:
            raise DoughValidationError("Flour must be given")
        if self.flour is not None:
            raise DoughValidationError("Flour was already set")
        self.flour = flour
        return self

    def with_ingredients_temperature(self, temperature: float) -> "Dough":
        if temperature is None or temperature <= -273.15:
            raise DoughValidationError("Ingredients temperature must be above absolute zero")
        self.ingredients_temperature = temperature
        return self

    def with_dough_temperature(self, temperature: float) -> "Dough":
        if temperature is None or not self.strain.is_viable_at(temperature):
            raise DoughValidationError(
                f"Dough temperature must be between {self.strain.temperature_min} "
                f"and {self.strain.temperature_max} °C"
            )
        self.dough_temperature = temperature
        return self

    def with_atmosphere(self, atmosphere: Atmosphere) -> "Dough":
        if atmosphere is None:
            raise DoughValidationError("Atmosphere must be given")
        self.atmosphere = atmosphere
        return self

    def build(self) -> DoughFormula:
        """
        Validate every required input at once

        Returns:
            DoughFormula

        Raises:
            DoughValidationError: Listing every missing or inconsistent input
        """
        errors: List[str] = []
        if self.flour is None:
            errors.append("flour is missing")
        if self.yeast_type is None:
            errors.append("yeast is missing")
        if self.ledger.hydration <= 0.:
            errors.append("water is missing")
        if self.dough_temperature is not None and self.ingredients_temperature is None:
            errors.append("ingredients temperature is needed to reach a dough temperature")
        if errors:
            raise DoughValidationError("Invalid dough: " + ", ".join(errors))

        return DoughFormula(
            strain=self.strain,
            yeast_type=self.yeast_type,
            raw_yeast=self.raw_yeast,
            flour=self.flour,
            ledger=self.ledger.snapshot(),
            atmosphere=self.atmosphere,
            ingredients_temperature=self.ingredients_temperature,
            dough_temperature=self.dough_temperature,
        )

    def create_recipe(self, procedure: Procedure, dough_weight: float) -> Recipe:
        """
        Compute masses and timeline for a given dough weight

        Args:
            procedure: Scheduling request
            dough_weight: Desired dough weight [g]

        Returns:
            Recipe
        """
        return self._create_recipe(self.build(), procedure, dough_weight)

    def create_recipe_for_pans(
        self,
        procedure: Procedure,
        instruments: BakingInstruments,
        areal_density: float,
        toppings: Sequence[Topping] = (),
        toppings_per_pan: bool = True
    ) -> Recipe:
        """
        Compute masses and timeline for the dough needed to cover the pans

        Args:
            procedure: Scheduling request
            instruments: Baking pans
            areal_density: Dough per unit of pan surface [g / cm²]
            toppings: Toppings to spread over the pans
            toppings_per_pan: Split the toppings by pan, otherwise only pooled totals

        Returns:
            Recipe with per-pan portions and toppings
        """
        formula = self.build()
        scaler = RecipeScaler()
        dough_weight = scaler.dough_weight_for_area(instruments, areal_density)
        return self._create_recipe(
            formula,
            procedure,
            dough_weight,
            pan_portions=scaler.split_by_area(dough_weight, instruments),
            toppings=scaler.toppings(toppings, instruments, per_pan=toppings_per_pan),
        )

    def _create_recipe(
        self,
        formula: DoughFormula,
        procedure: Procedure,
        dough_weight: float,
        pan_portions: Sequence[PanPortion] = (),
        toppings: Sequence[ToppingPortion] = ()
    ) -> Recipe:
        if procedure is None:
            raise DoughValidationError("Procedure must be given")

        yeast_fraction = formula.kinetics(self.settings).required_yeast_quantity(procedure)
        schedule = ScheduleComposer().compose(procedure)
        masses = RecipeScaler().scale(formula.ledger, yeast_fraction, dough_weight)

        water_temperature = None
        if formula.dough_temperature is not None:
            water_temperature = formula.ledger.solve_water_temperature(
                formula.flour,
                formula.ingredients_temperature,
                formula.dough_temperature,
                friction_rise=self.settings.friction_rise,
                yeast_fraction=yeast_fraction,
                pressure=formula.atmosphere.pressure,
            )
            if water_temperature is not None and water_temperature >= formula.strain.temperature_max:
                logger.warning(
                    "Water temperature (%s °C) is above the maximum sustainable by the yeast "
                    "(%s °C): be aware of thermal shock",
                    round_half_up(water_temperature, 1), formula.strain.temperature_max
                )

        return Recipe(
            **masses.model_dump(),
            yeast_fraction=yeast_fraction,
            water_temperature=water_temperature,
            dough_weight=dough_weight,
            schedule=schedule,
            pan_portions=list(pan_portions),
            toppings=list(toppings),
        )
