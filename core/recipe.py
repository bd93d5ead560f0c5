"""
Recipe Scaler
Absolute ingredient masses from baker's percentages, split across baking pans
"""
from typing import List, Sequence

import numpy as np

from core.errors import DoughValidationError
from core.ledger import IngredientKind, IngredientLedger
from models.baking_pan import BakingInstruments
from models.recipe import IngredientMasses, PanPortion, Topping, ToppingPortion


class RecipeScaler:
    """
    Converts fractions of flour mass into grams

    With a total fraction Σ (flour excluded), the flour mass is
    weight / (1 + Σ) and every other mass is flour · fraction, so that
    all masses add up to the requested weight.
    """

    def scale(self, ledger: IngredientLedger, yeast_fraction: float, dough_weight: float) -> IngredientMasses:
        """
        Absolute masses for a given dough weight

        Args:
            ledger: Ingredient fractions
            yeast_fraction: Yeast as a fraction of flour mass
            dough_weight: Desired dough weight [g]

        Returns:
            IngredientMasses
        """
        if dough_weight is None or dough_weight <= 0.:
            raise DoughValidationError("Dough weight must be positive")
        if yeast_fraction < 0.:
            raise DoughValidationError("Yeast quantity must be non-negative")

        flour = dough_weight / (1. + ledger.total_fraction + yeast_fraction)
        return IngredientMasses(
            flour=flour,
            water=flour * ledger.fraction_of(IngredientKind.WATER),
            milk=flour * ledger.fraction_of(IngredientKind.MILK),
            egg=flour * ledger.fraction_of(IngredientKind.EGG),
            sugar=flour * ledger.fraction_of(IngredientKind.SUGAR),
            salt=flour * ledger.fraction_of(IngredientKind.SALT),
            fat=flour * ledger.fraction_of(IngredientKind.FAT),
            yeast=flour * yeast_fraction,
        )

    def dough_weight_for_area(self, instruments: BakingInstruments, areal_density: float) -> float:
        """
        Dough needed to cover the pans

        Args:
            instruments: Baking pans
            areal_density: Dough per unit of pan surface [g / cm²]

        Returns:
            Dough weight [g]
        """
        if areal_density is None or areal_density <= 0.:
            raise DoughValidationError("Dough areal density must be positive")
        return areal_density * instruments.total_area()

    def split_by_area(self, dough_weight: float, instruments: BakingInstruments) -> List[PanPortion]:
        """
        Split the dough proportionally to each pan's area

        Args:
            dough_weight: Total dough weight [g]
            instruments: Baking pans

        Returns:
            PanPortion list, in the same order as the pans
        """
        areas = np.asarray(instruments.areas(), dtype=float)
        weights = dough_weight * areas / areas.sum()
        return [
            PanPortion(pan_index=i, area=float(area), dough_weight=float(weight))
            for i, (area, weight) in enumerate(zip(areas, weights))
        ]

    def toppings(
        self,
        toppings: Sequence[Topping],
        instruments: BakingInstruments,
        per_pan: bool = True
    ) -> List[ToppingPortion]:
        """
        Topping quantities for the given pans

        Args:
            toppings: Toppings with their areal density
            instruments: Baking pans
            per_pan: Split each topping by pan, otherwise report only the pooled total

        Returns:
            ToppingPortion list
        """
        areas = np.asarray(instruments.areas(), dtype=float)
        portions = []
        for topping in toppings:
            quantities = topping.areal_density * areas
            portions.append(ToppingPortion(
                name=topping.name,
                total=float(quantities.sum()),
                per_pan=[float(q) for q in quantities] if per_pan else [],
            ))
        return portions
