"""
Procedure Models
Leavening stages, stretch and fold stages and the scheduling request
"""
from datetime import datetime, timedelta
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class LeaveningStage(BaseModel):
    """
    One proofing phase at constant temperature

    after_stage_work: handling time between the end of this stage and the
    start of the next one (reshaping, balling)
    volume_decrease: fraction of volume lost at the end of the stage
    """
    model_config = ConfigDict(frozen=True)

    temperature: float
    duration: timedelta
    after_stage_work: timedelta = timedelta(0)
    volume_decrease: float = Field(default=0., ge=0., lt=1.)

    @field_validator("duration")
    @classmethod
    def _positive_duration(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("Duration must be positive")
        return value

    @field_validator("after_stage_work")
    @classmethod
    def _non_negative_work(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("After stage work must be non-negative")
        return value


class StretchAndFoldStage(BaseModel):
    """
    One stretch and fold, lapse measured from the previous fold
    (or from the start of the stage for the first one)
    """
    model_config = ConfigDict(frozen=True)

    lapse: timedelta
    volume_decrease: float = Field(default=0., ge=0., lt=1.)

    @field_validator("lapse")
    @classmethod
    def _positive_lapse(cls, value: timedelta) -> timedelta:
        if value <= timedelta(0):
            raise ValueError("Lapse must be positive")
        return value


class Procedure(BaseModel):
    """
    Full scheduling request

    target_volume_ratio: final over initial dough volume at the end of the target stage
    target_stage_index: stage at whose end the ratio must be reached, defaults to the last
    stretch_and_fold_stage_index: stage hosting the stretch and fold stages
    lead_time: preparation before the first stage starts
    lag_time: time between the end of the last stage and the target instant
    """
    model_config = ConfigDict(frozen=True)

    leavening_stages: List[LeaveningStage] = Field(min_length=1)
    target_volume_ratio: float = Field(gt=1.)
    target_instant: datetime
    target_stage_index: Optional[int] = None
    stretch_and_fold_stages: List[StretchAndFoldStage] = Field(default_factory=list)
    stretch_and_fold_stage_index: int = 0
    lead_time: timedelta = timedelta(0)
    lag_time: timedelta = timedelta(0)

    @model_validator(mode="after")
    def _check_consistency(self) -> "Procedure":
        count = len(self.leavening_stages)
        if self.target_stage_index is not None and not 0 <= self.target_stage_index < count:
            raise ValueError(f"Target stage index must be between 0 and {count - 1}")
        if not 0 <= self.stretch_and_fold_stage_index < count:
            raise ValueError(f"Stretch and fold stage index must be between 0 and {count - 1}")
        if self.lead_time < timedelta(0):
            raise ValueError("Lead time must be non-negative")
        if self.lag_time < timedelta(0):
            raise ValueError("Lag time must be non-negative")
        return self

    @property
    def target_index(self) -> int:
        if self.target_stage_index is None:
            return len(self.leavening_stages) - 1
        return self.target_stage_index

    def fermenting_stages(self) -> List[LeaveningStage]:
        """Stages that contribute to reaching the target volume ratio"""
        return self.leavening_stages[:self.target_index + 1]

    def total_stretch_and_fold_duration(self) -> timedelta:
        return sum((stage.lapse for stage in self.stretch_and_fold_stages), timedelta(0))
