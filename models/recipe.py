"""
Recipe Models
Immutable results: ingredient masses, timeline and per-pan portions
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Topping(BaseModel):
    """
    Topping spread proportionally to the pan surface

    areal_density: [g / cm²]
    """
    model_config = ConfigDict(frozen=True)

    name: str
    areal_density: float = Field(gt=0.)


class ToppingPortion(BaseModel):
    """Topping quantity for the whole bake, with the split per pan"""
    model_config = ConfigDict(frozen=True)

    name: str
    total: float
    per_pan: List[float] = Field(default_factory=list)


class PanPortion(BaseModel):
    """Dough assigned to one pan"""
    model_config = ConfigDict(frozen=True)

    pan_index: int
    area: float
    dough_weight: float


class StageWindow(BaseModel):
    """Start and end instant of one leavening stage"""
    model_config = ConfigDict(frozen=True)

    start: datetime
    end: datetime


class Schedule(BaseModel):
    """Dated timeline of a procedure"""
    model_config = ConfigDict(frozen=True)

    dough_making_instant: datetime
    stage_windows: List[StageWindow]
    stretch_and_fold_instants: List[datetime] = Field(default_factory=list)
    seasoning_instant: datetime


class IngredientMasses(BaseModel):
    """Absolute ingredient masses [g]"""
    model_config = ConfigDict(frozen=True)

    flour: float = Field(ge=0.)
    water: float = Field(default=0., ge=0.)
    milk: float = Field(default=0., ge=0.)
    egg: float = Field(default=0., ge=0.)
    sugar: float = Field(default=0., ge=0.)
    salt: float = Field(default=0., ge=0.)
    fat: float = Field(default=0., ge=0.)
    yeast: float = Field(default=0., ge=0.)

    def total_weight(self) -> float:
        return (self.flour + self.water + self.milk + self.egg + self.sugar + self.salt
                + self.fat + self.yeast)


class Recipe(IngredientMasses):
    """
    Computed recipe

    yeast_fraction: yeast as a fraction of flour mass, in the chosen yeast form
    water_temperature: temperature of the free water addition [°C], if one was solved
    """
    yeast_fraction: float
    water_temperature: Optional[float] = None
    dough_weight: float = Field(gt=0.)
    schedule: Schedule
    pan_portions: List[PanPortion] = Field(default_factory=list)
    toppings: List[ToppingPortion] = Field(default_factory=list)

    @property
    def dough_making_instant(self) -> datetime:
        return self.schedule.dough_making_instant

    @property
    def stage_windows(self) -> List[StageWindow]:
        return self.schedule.stage_windows

    @property
    def stretch_and_fold_instants(self) -> List[datetime]:
        return self.schedule.stretch_and_fold_instants

    @property
    def seasoning_instant(self) -> datetime:
        return self.schedule.seasoning_instant
