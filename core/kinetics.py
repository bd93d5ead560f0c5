"""
Yeast Kinetics
Leavening capacity of a dough and inverse solve of the yeast dose

The dough volume follows a modified Gompertz curve in time:

    y(t) = A · exp(-exp(ρ·e·(λ - t) / A + 1))

where y is the relative volume expansion (ΔV / V), A the maximum relative
expansion, λ the lag phase and ρ the volume expansion rate. The rate grows
with a power of the fresh-equivalent yeast dose, and in proportion to the
strain's growth rate at the stage temperature and to the ingredients factor.

The curve is not zero at t = 0, so the expansion of a stage is measured
from y(0): the capacity is the time at which y(t) - y(0) reaches the
requested expansion, which is always positive.
"""
import math
from datetime import timedelta
from typing import Optional, Sequence

from core.config import EngineSettings, get_settings
from core.errors import DoughValidationError, LeaveningDurationExceededError, YeastDoseError
from models.ingredients import STANDARD_AMBIENT_PRESSURE, WATER_CHLORINE_DIOXIDE_MAX
from models.procedure import LeaveningStage, Procedure
from models.yeast import YeastStrain, YeastType
from utils.log_utils import get_logger
from utils.numeric import NoBracketError, NoConvergenceError, bisect

logger = get_logger(__name__)


# Fresh-equivalent yeast dose bounds [fraction of flour mass]
DOSE_MIN = 0.003
DOSE_MAX = 0.1

# Maximum relative volume expansion (ΔV / V)
MAXIMUM_RELATIVE_EXPANSION = 2.97
# Volume expansion rate ρ = VOLUME_RATE_CONSTANT · μ · factor · dose^VOLUME_RATE_DOSE_EXPONENT [1/h]
VOLUME_RATE_CONSTANT = 740.
VOLUME_RATE_DOSE_EXPONENT = 1.4
# Lag phase λ = LAG_COEFFICIENT · dose^LAG_EXPONENT [h]
LAG_COEFFICIENT = 0.0068
LAG_EXPONENT = -0.937

SUGAR_LOG_INTERCEPT = -0.3154
SUGAR_LOG_SLOPE = -0.403
SUGAR_MAX = math.exp(SUGAR_LOG_INTERCEPT / -SUGAR_LOG_SLOPE)

HYDRATION_COEFFICIENTS = (-1.292, 7.65, -6.25)
_HYDRATION_DISCRIMINANT = math.sqrt(
    HYDRATION_COEFFICIENTS[1] ** 2 - 4. * HYDRATION_COEFFICIENTS[0] * HYDRATION_COEFFICIENTS[2]
)
HYDRATION_MIN = (-HYDRATION_COEFFICIENTS[1] + _HYDRATION_DISCRIMINANT) / (2. * HYDRATION_COEFFICIENTS[2])
HYDRATION_MAX = (-HYDRATION_COEFFICIENTS[1] - _HYDRATION_DISCRIMINANT) / (2. * HYDRATION_COEFFICIENTS[2])

SALT_INHIBITION = 6.
FAT_INHIBITION = 1.
CHLORINE_DIOXIDE_INHIBITION = 0.375

PRESSURE_FACTOR_K = 1.46
PRESSURE_FACTOR_M = 2.031
PRESSURE_SCALE = 10_000. ** 2
ATMOSPHERIC_PRESSURE_MAX = PRESSURE_SCALE * (1. / PRESSURE_FACTOR_K) ** (1. / PRESSURE_FACTOR_M)


def sugar_factor(sugar: float) -> float:
    """
    Effect of glucose-equivalent sugar on fermentation

    Args:
        sugar: Sugar as a fraction of flour mass

    Returns:
        Correction factor in [0, 1]
    """
    if sugar >= SUGAR_MAX:
        return 0.
    if sugar < 0.03:
        return min(1. + (4.9 - 50. * sugar) * sugar, 1.)
    return min(SUGAR_LOG_INTERCEPT + SUGAR_LOG_SLOPE * math.log(sugar), 1.)


def hydration_factor(hydration: float) -> float:
    """Effect of water content, zero outside the workable hydration window"""
    if hydration <= HYDRATION_MIN or hydration >= HYDRATION_MAX:
        return 0.
    c0, c1, c2 = HYDRATION_COEFFICIENTS
    return c0 + (c1 + c2 * hydration) * hydration


def salt_factor(salt: float) -> float:
    return max(1. - SALT_INHIBITION * salt, 0.)


def fat_factor(fat: float) -> float:
    return max(1. - FAT_INHIBITION * fat, 0.)


def chlorine_dioxide_factor(chlorine_dioxide: float) -> float:
    """
    Args:
        chlorine_dioxide: Chlorine dioxide in the water [mg / l]
    """
    return max(1. - CHLORINE_DIOXIDE_INHIBITION * chlorine_dioxide / WATER_CHLORINE_DIOXIDE_MAX, 0.)


def atmospheric_pressure_factor(pressure: float) -> float:
    """
    Args:
        pressure: Atmospheric pressure [hPa]
    """
    if pressure >= ATMOSPHERIC_PRESSURE_MAX:
        return 0.
    return 1. - PRESSURE_FACTOR_K * (pressure / PRESSURE_SCALE) ** PRESSURE_FACTOR_M


def ingredients_factor(
    sugar: float = 0.,
    fat: float = 0.,
    salt: float = 0.,
    hydration: float = 0.6,
    chlorine_dioxide: float = 0.,
    pressure: float = STANDARD_AMBIENT_PRESSURE
) -> float:
    """
    Combined multiplicative effect of the dough composition on the growth rate

    Returns:
        Product of the sugar, fat, salt, hydration, chlorine dioxide and pressure factors
    """
    return (
        sugar_factor(sugar)
        * fat_factor(fat)
        * salt_factor(salt)
        * hydration_factor(hydration)
        * chlorine_dioxide_factor(chlorine_dioxide)
        * atmospheric_pressure_factor(pressure)
    )


def required_expansion(procedure: Procedure) -> float:
    """
    Relative expansion the yeast must produce, accounting for the volume
    lost at the end of the stages and at each fold before the target

    Args:
        procedure: Scheduling request

    Returns:
        Relative expansion (ΔV / V)
    """
    retained = 1.
    for stage in procedure.leavening_stages[:procedure.target_index]:
        retained *= 1. - stage.volume_decrease
    if procedure.stretch_and_fold_stage_index <= procedure.target_index:
        for fold in procedure.stretch_and_fold_stages:
            retained *= 1. - fold.volume_decrease
    return procedure.target_volume_ratio / retained - 1.


def _hours(duration: timedelta) -> float:
    return duration.total_seconds() / 3600.


class YeastKinetics:
    """
    Leavening model of a given yeast in a given dough

    The dose handled internally is fresh-equivalent: the yeast fraction
    times the performance factor of its form times its raw (alive) fraction.
    """

    def __init__(
        self,
        strain: YeastStrain,
        yeast_type: YeastType,
        raw_fraction: float = 1.,
        factor: float = 1.,
        settings: Optional[EngineSettings] = None
    ):
        """
        Args:
            strain: Microorganism
            yeast_type: Commercial form
            raw_fraction: Alive fraction of the yeast, in (0, 1]
            factor: Ingredients factor, see ingredients_factor()
            settings: Solver settings, read from the environment when omitted
        """
        if not 0. < raw_fraction <= 1.:
            raise DoughValidationError("Raw yeast fraction must be in (0, 1]")
        if factor < 0.:
            raise DoughValidationError("Ingredients factor must be non-negative")
        self.strain = strain
        self.yeast_type = yeast_type
        self.raw_fraction = raw_fraction
        self.factor = factor
        self.settings = settings or get_settings()

    @property
    def performance(self) -> float:
        return self.yeast_type.factor * self.raw_fraction

    def maximum_specific_growth(self, temperature: float) -> float:
        return self.strain.maximum_specific_growth_rate(temperature)

    def lag(self, dose: float) -> float:
        """Lag phase [h] for the given fresh-equivalent dose"""
        return LAG_COEFFICIENT * dose ** LAG_EXPONENT

    def volume_rate(self, dose: float, temperature: float) -> float:
        """Volume expansion rate ρ [1/h]"""
        return (VOLUME_RATE_CONSTANT * self.maximum_specific_growth(temperature) * self.factor
                * dose ** VOLUME_RATE_DOSE_EXPONENT)

    def capacity(self, dose: float, temperature: float, expansion: float) -> float:
        """
        Time needed to reach the given relative expansion at constant temperature

        Args:
            dose: Fresh-equivalent yeast dose [fraction of flour mass]
            temperature: Dough temperature [°C]
            expansion: Relative expansion to reach (ΔV / V), in (0, A)

        Returns:
            Duration [h], infinite if the yeast is not active at this temperature
            or if the curve never grows by the expansion
        """
        rate = self.volume_rate(dose, temperature)
        if rate <= 0.:
            return math.inf
        a = MAXIMUM_RELATIVE_EXPANSION
        lag = self.lag(dose)
        initial = a * math.exp(-math.exp(rate * math.e * lag / a + 1.))
        if expansion + initial >= a:
            return math.inf
        return lag + a * (1. - math.log(-math.log((expansion + initial) / a))) / (rate * math.e)

    def consumption(self, dose: float, stages: Sequence[LeaveningStage], expansion: float) -> float:
        """
        Fraction of the leavening capacity consumed by the stages

        Returns:
            Sum of duration / capacity over the stages, 1 when the expansion is reached exactly
        """
        return sum(
            _hours(stage.duration) / self.capacity(dose, stage.temperature, expansion)
            for stage in stages
        )

    def max_leavening_duration(self, stages: Sequence[LeaveningStage], expansion: float) -> timedelta:
        """
        Longest total leavening the least practical dose of yeast can sustain,
        keeping the relative durations of the stages

        Args:
            stages: Stages contributing to the expansion
            expansion: Relative expansion to reach (ΔV / V)

        Returns:
            Maximum total duration, timedelta.max when the least dose never reaches the expansion
        """
        self._validate(stages, expansion)
        total = sum((stage.duration for stage in stages), timedelta(0))
        consumption = self.consumption(DOSE_MIN, stages, expansion)
        if consumption <= 0.:
            return timedelta.max
        return total / consumption

    def required_yeast_quantity(self, procedure: Procedure) -> float:
        """
        Yeast needed so that the stages up to the target one consume exactly
        the leavening capacity of the dough

        Args:
            procedure: Scheduling request

        Returns:
            Yeast as a fraction of flour mass, in the chosen yeast form

        Raises:
            DoughValidationError: A stage temperature is outside the strain's viable range
            LeaveningDurationExceededError: Even the least dose over-ferments the dough
            YeastDoseError: No dose in the practical range satisfies the procedure
        """
        stages = procedure.fermenting_stages()
        expansion = required_expansion(procedure)
        self._validate(stages, expansion)

        total = sum((stage.duration for stage in stages), timedelta(0))
        if self.consumption(DOSE_MIN, stages, expansion) > 1.:
            maximum = self.max_leavening_duration(stages, expansion)
            raise LeaveningDurationExceededError(
                f"Total leavening duration {total} exceeds the maximum sustainable {maximum}",
                requested=total,
                maximum=maximum,
            )
        if self.consumption(DOSE_MAX, stages, expansion) < 1.:
            raise YeastDoseError(
                f"Leavening duration {total} is too short to reach a volume ratio of "
                f"{procedure.target_volume_ratio} with at most {DOSE_MAX:.1%} of fresh yeast"
            )

        try:
            dose = bisect(
                lambda d: self.consumption(d, stages, expansion) - 1.,
                DOSE_MIN,
                DOSE_MAX,
                tolerance=self.settings.solver_tolerance,
                max_iterations=self.settings.solver_max_iterations,
            )
        except NoBracketError as e:
            raise YeastDoseError("No amount of yeast can produce the given expansion ratio") from e
        except NoConvergenceError as e:
            raise YeastDoseError(
                "Cannot calculate yeast quantity, try increasing DOUGH_SOLVER_MAX_ITERATIONS"
            ) from e

        logger.debug("Fresh-equivalent yeast dose %.6f for expansion %.4f", dose, expansion)
        return dose / self.performance

    def _validate(self, stages: Sequence[LeaveningStage], expansion: float) -> None:
        for index, stage in enumerate(stages):
            if not self.strain.is_viable_at(stage.temperature):
                raise DoughValidationError(
                    f"Temperature of stage {index + 1} ({stage.temperature} °C) is outside "
                    f"the viable range of {self.strain.name} "
                    f"({self.strain.temperature_min} - {self.strain.temperature_max} °C)"
                )
        if self.factor <= 0.:
            raise YeastDoseError(
                "No amount of yeast can leaven this dough: the ingredients inhibit it completely"
            )
        if not 0. < expansion < MAXIMUM_RELATIVE_EXPANSION:
            raise YeastDoseError(
                f"Relative expansion {expansion:.3f} is beyond the maximum "
                f"{MAXIMUM_RELATIVE_EXPANSION} a dough can reach"
            )
