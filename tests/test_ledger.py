"""
Ingredient ledger tests
Percentage bookkeeping and the water temperature energy balance
"""
import pytest

from core.errors import DoughValidationError, InfeasibleTemperatureError
from core.ledger import IngredientKind, IngredientLedger
from models.ingredients import (
    EGG_SPECIFIC_HEAT,
    WATER_SPECIFIC_HEAT,
    Egg,
    Fat,
    FatType,
    Flour,
    Milk,
    Sugar,
    SugarType,
    Water,
)


@pytest.fixture
def flour():
    return Flour(strength=260.)


@pytest.fixture
def pizza_ledger():
    return (IngredientLedger()
            .add_water(0.65)
            .add_sugar(0.003)
            .add_salt(0.015)
            .add_fat(0.014, Fat(type=FatType.OLIVE_OIL, fat=0.913, density=0.913)))


class TestBookkeeping:
    """Fractions and constituent totals"""

    def test_chaining(self, pizza_ledger):
        """add_* calls return the ledger"""
        assert len(pizza_ledger.contributions) == 4

    def test_total_fraction(self, pizza_ledger):
        assert pizza_ledger.total_fraction == pytest.approx(0.65 + 0.003 + 0.015 + 0.014)

    def test_fraction_of(self, pizza_ledger):
        assert pizza_ledger.fraction_of(IngredientKind.WATER) == pytest.approx(0.65)
        assert pizza_ledger.fraction_of(IngredientKind.MILK) == 0.

    def test_hydration_counts_water_of_every_ingredient(self):
        """Milk and egg carry water into the dough"""
        ledger = (IngredientLedger()
                  .add_water(0.3)
                  .add_milk(0.2, Milk(fat=0.037, water=0.87))
                  .add_egg(0.1, Egg(fat=0.095, water=0.76)))
        assert ledger.hydration == pytest.approx(0.3 + 0.2 * 0.87 + 0.1 * 0.76)
        assert ledger.fat == pytest.approx(0.2 * 0.037 + 0.1 * 0.095)

    def test_split_water(self):
        """Several water additions add up"""
        ledger = IngredientLedger().add_water(0.4, temperature=20.).add_water(0.2)
        assert ledger.fraction_of(IngredientKind.WATER) == pytest.approx(0.6)
        assert ledger.free_water.fraction == pytest.approx(0.2)

    def test_sugar_glucose_equivalent(self):
        ledger = IngredientLedger().add_sugar(0.02, Sugar(type=SugarType.SUCROSE, carbohydrate=1., water=0.))
        assert ledger.sugar == pytest.approx(0.02 * 0.38 / 0.41)

    def test_fat_brings_salt_and_water(self):
        butter = Fat(type=FatType.BUTTER, fat=0.815, salt=0.015, water=0.16, density=0.911)
        ledger = IngredientLedger().add_water(0.6).add_salt(0.02).add_fat(0.1, butter)
        assert ledger.salt == pytest.approx(0.02 + 0.1 * 0.015)
        assert ledger.hydration == pytest.approx(0.6 + 0.1 * 0.16)
        assert ledger.fat == pytest.approx(0.1 * 0.815)

    def test_chlorine_dioxide_weighted(self):
        ledger = (IngredientLedger()
                  .add_water(0.3, Water(chlorine_dioxide=0.2), temperature=20.)
                  .add_water(0.3, Water(chlorine_dioxide=0.)))
        assert ledger.chlorine_dioxide == pytest.approx(0.1)

    def test_snapshot_detached(self, pizza_ledger):
        snapshot = pizza_ledger.snapshot()
        pizza_ledger.add_salt(0.01)
        assert snapshot.salt == pytest.approx(0.015)
        assert snapshot.free_water is pizza_ledger.free_water

    def test_snapshot_read_only(self, pizza_ledger):
        snapshot = pizza_ledger.snapshot()
        with pytest.raises(DoughValidationError):
            snapshot.add_salt(0.01)
        with pytest.raises(DoughValidationError):
            snapshot.add_water(0.1, temperature=20.)
        assert snapshot.salt == pytest.approx(0.015)
        assert snapshot.hydration == pytest.approx(pizza_ledger.hydration)


class TestValidation:
    """Each call validates its own input"""

    @pytest.mark.parametrize("fraction", [0., -0.1])
    def test_non_positive_fraction(self, fraction):
        with pytest.raises(DoughValidationError):
            IngredientLedger().add_water(fraction)
        with pytest.raises(DoughValidationError):
            IngredientLedger().add_salt(fraction)

    def test_sugar_set_once(self):
        ledger = IngredientLedger().add_sugar(0.01)
        with pytest.raises(DoughValidationError):
            ledger.add_sugar(0.01)

    def test_fat_set_once(self):
        ledger = IngredientLedger().add_fat(0.01)
        with pytest.raises(DoughValidationError):
            ledger.add_fat(0.01)

    def test_sugar_above_fermentation_limit(self):
        with pytest.raises(DoughValidationError):
            IngredientLedger().add_sugar(0.5, Sugar(type=SugarType.GLUCOSE, carbohydrate=1.))

    def test_only_one_free_water(self):
        """A second water addition without temperature is rejected"""
        ledger = IngredientLedger().add_water(0.3)
        with pytest.raises(DoughValidationError):
            ledger.add_water(0.3)

    def test_validation_error_is_value_error(self):
        with pytest.raises(ValueError):
            IngredientLedger().add_egg(0.)


class TestWaterTemperature:
    """Energy balance solve"""

    def test_no_free_water(self, flour):
        ledger = IngredientLedger().add_water(0.6, temperature=20.)
        assert ledger.solve_water_temperature(flour, 20., 25.) is None

    def test_everything_at_dough_temperature(self, flour, pizza_ledger):
        """Without friction, ingredients already at the target need water at the target"""
        temperature = pizza_ledger.solve_water_temperature(flour, 24., 24., friction_rise=0.)
        assert temperature == pytest.approx(24.)

    def test_energy_balance_holds(self, flour, pizza_ledger):
        """Σ m·c·T + friction equals the thermal mass at the dough temperature"""
        yeast = 0.0013
        friction = 1.
        water_temperature = pizza_ledger.solve_water_temperature(
            flour, 18., 27., friction_rise=friction, yeast_fraction=yeast
        )
        capacity = pizza_ledger.heat_capacity(flour, 18., yeast)
        water_capacity = 0.65 * WATER_SPECIFIC_HEAT
        heat = (capacity - water_capacity) * 18. + water_capacity * water_temperature
        assert heat + friction * capacity == pytest.approx(capacity * 27.)
        assert 25. < water_temperature < 40.

    def test_friction_lowers_water_temperature(self, flour, pizza_ledger):
        without = pizza_ledger.solve_water_temperature(flour, 18., 27., friction_rise=0.)
        with_friction = pizza_ledger.solve_water_temperature(flour, 18., 27., friction_rise=2.)
        assert with_friction < without

    def test_explicit_temperatures_used(self, flour):
        """Egg at fridge temperature needs warmer water"""
        warm = IngredientLedger().add_egg(0.2, temperature=20.).add_water(0.4)
        cold = IngredientLedger().add_egg(0.2, temperature=4.).add_water(0.4)
        t_warm = warm.solve_water_temperature(flour, 20., 26.)
        t_cold = cold.solve_water_temperature(flour, 20., 26.)
        assert t_cold - t_warm == pytest.approx(0.2 * EGG_SPECIFIC_HEAT * 16. / (0.4 * WATER_SPECIFIC_HEAT))

    def test_only_last_free_water_solved(self, flour):
        ledger = IngredientLedger().add_water(0.3, temperature=10.).add_water(0.3)
        temperature = ledger.solve_water_temperature(flour, 20., 20.)
        # the fixed addition at 10 °C is compensated by the free one
        assert temperature == pytest.approx(30.)

    def test_too_cold(self, flour):
        """Very cold dough from warm ingredients needs ice"""
        ledger = IngredientLedger().add_water(0.6)
        with pytest.raises(InfeasibleTemperatureError) as excinfo:
            ledger.solve_water_temperature(flour, 30., 5.)
        assert excinfo.value.temperature < 0.

    def test_boiling(self, flour):
        ledger = IngredientLedger().add_water(0.2)
        with pytest.raises(InfeasibleTemperatureError):
            ledger.solve_water_temperature(flour, 5., 40.)
