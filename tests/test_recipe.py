"""
Recipe scaler tests
Absolute masses, area-proportional split and toppings
"""
import pytest

from core.errors import DoughValidationError
from core.ledger import IngredientLedger
from core.recipe import RecipeScaler
from models.baking_pan import (
    BakingInstruments,
    BakingPanMaterial,
    CircularBakingPan,
    RectangularBakingPan,
)
from models.recipe import Topping


@pytest.fixture
def scaler():
    return RecipeScaler()


@pytest.fixture
def pizza_ledger():
    return (IngredientLedger()
            .add_water(0.65)
            .add_sugar(0.003)
            .add_salt(0.015)
            .add_fat(0.014))


@pytest.fixture
def instruments():
    """23 x 25 cm rectangular and 22.5 cm round aluminium pans"""
    return BakingInstruments(baking_pans=[
        RectangularBakingPan(edge1=23., edge2=25., material=BakingPanMaterial.ALUMINIUM, thickness=0.1),
        CircularBakingPan(diameter=22.5, material=BakingPanMaterial.ALUMINIUM, thickness=0.1),
    ])


class TestScale:
    """Masses from baker's percentages"""

    def test_reference_masses(self, scaler, pizza_ledger):
        masses = scaler.scale(pizza_ledger, 0.0013, 741.34)
        assert masses.flour == pytest.approx(440.4, abs=0.1)
        assert masses.water == pytest.approx(286.3, abs=0.1)
        assert masses.sugar == pytest.approx(1.32, abs=0.01)
        assert masses.salt == pytest.approx(6.61, abs=0.01)
        assert masses.fat == pytest.approx(6.17, abs=0.01)
        assert masses.yeast == pytest.approx(0.57, abs=0.01)

    @pytest.mark.parametrize("weight", [1., 250., 741.34, 12_500.])
    def test_masses_add_up(self, scaler, pizza_ledger, weight):
        masses = scaler.scale(pizza_ledger, 0.004, weight)
        assert masses.total_weight() == pytest.approx(weight, abs=1e-2)

    def test_milk_and_egg(self, scaler):
        ledger = IngredientLedger().add_water(0.2).add_milk(0.3).add_egg(0.1)
        masses = scaler.scale(ledger, 0.01, 1000.)
        assert masses.flour == pytest.approx(1000. / 1.61)
        assert masses.milk == pytest.approx(masses.flour * 0.3)
        assert masses.egg == pytest.approx(masses.flour * 0.1)

    @pytest.mark.parametrize("weight", [0., -10.])
    def test_non_positive_weight(self, scaler, pizza_ledger, weight):
        with pytest.raises(DoughValidationError):
            scaler.scale(pizza_ledger, 0.001, weight)


class TestPans:
    """Area-proportional split"""

    def test_dough_weight_for_area(self, scaler, instruments):
        assert scaler.dough_weight_for_area(instruments, 0.76222) == pytest.approx(741.34, abs=0.01)

    def test_reference_split(self, scaler, instruments):
        weight = scaler.dough_weight_for_area(instruments, 0.76222)
        portions = scaler.split_by_area(weight, instruments)
        assert [p.dough_weight for p in portions] == pytest.approx([438.3, 303.1], abs=0.5)

    def test_split_proportional(self, scaler, instruments):
        portions = scaler.split_by_area(1000., instruments)
        total_area = instruments.total_area()
        assert sum(p.dough_weight for p in portions) == pytest.approx(1000.)
        for portion in portions:
            assert portion.dough_weight / 1000. == pytest.approx(portion.area / total_area)
        assert [p.pan_index for p in portions] == [0, 1]

    def test_single_pan_takes_all(self, scaler):
        instruments = BakingInstruments(baking_pans=[
            CircularBakingPan(diameter=30., material=BakingPanMaterial.CAST_IRON, thickness=0.4),
        ])
        assert scaler.split_by_area(500., instruments)[0].dough_weight == pytest.approx(500.)

    @pytest.mark.parametrize("density", [0., -0.5])
    def test_non_positive_density(self, scaler, instruments, density):
        with pytest.raises(DoughValidationError):
            scaler.dough_weight_for_area(instruments, density)


class TestToppings:
    """Per-area toppings"""

    def test_per_pan(self, scaler, instruments):
        tomato = Topping(name="tomato", areal_density=1. / 4.47)
        [portion] = scaler.toppings([tomato], instruments)
        assert portion.name == "tomato"
        assert portion.total == pytest.approx(972.608 / 4.47, abs=0.01)
        assert portion.per_pan == pytest.approx([575. / 4.47, 397.608 / 4.47], abs=0.01)
        assert sum(portion.per_pan) == pytest.approx(portion.total)

    def test_pooled(self, scaler, instruments):
        toppings = [
            Topping(name="mozzarella", areal_density=1. / 2.85),
            Topping(name="oregano", areal_density=1. / 1400.),
        ]
        portions = scaler.toppings(toppings, instruments, per_pan=False)
        assert [p.name for p in portions] == ["mozzarella", "oregano"]
        assert portions[0].total == pytest.approx(972.608 / 2.85, abs=0.01)
        assert portions[1].total == pytest.approx(0.695, abs=0.001)
        assert portions[0].per_pan == []

    def test_no_toppings(self, scaler, instruments):
        assert scaler.toppings([], instruments) == []
