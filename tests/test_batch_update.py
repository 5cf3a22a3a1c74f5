import pytest

from batch_update import batch_cost_updates
from models import GlobalCostRates, Recipe, RecipeIngredient


def test_weight_based_updates_keep_other_fields(truffle, catalog):
    updates = batch_cost_updates([truffle], catalog)
    assert updates == {
        "r1": {
            "laborCost": 3855,
            "electricityCost": 1928,
            "equipmentCost": 771,
            "rejectPercentage": 10,
            "taxPercentage": None,
            "marginPercentage": None,
            "costingMode": "weightBased",
        }
    }


def test_overrides_apply_to_every_recipe(truffle, catalog):
    bar = Recipe(id="r2", name="Bar", yield_=1, ingredients=[RecipeIngredient("choc", 100)])
    rates = GlobalCostRates(labor_cost_per_gram=1, electricity_cost_per_gram=1, equipment_cost_per_gram=1)
    updates = batch_cost_updates(
        [truffle, bar], catalog, rates, overrides={"marginPercentage": 45, "laborCost": 1}
    )
    assert {u["marginPercentage"] for u in updates.values()} == {45}
    assert updates["r2"]["laborCost"] == 100
    assert updates["r2"]["equipmentCost"] == 100


def test_manual_overrides_mark_recipe_manual(truffle, catalog):
    updates = batch_cost_updates([truffle], catalog, overrides={"laborCost": 750}, weight_based=False)
    assert updates["r1"]["laborCost"] == 750
    assert updates["r1"]["electricityCost"] == 2000
    assert updates["r1"]["costingMode"] == "manual"


def test_percentage_only_overrides_leave_mode_alone(truffle, catalog):
    updates = batch_cost_updates([truffle], catalog, overrides={"taxPercentage": 11}, weight_based=False)
    assert "costingMode" not in updates["r1"]
    assert updates["r1"]["taxPercentage"] == 11


def test_unknown_override_rejected(truffle, catalog):
    with pytest.raises(ValueError):
        batch_cost_updates([truffle], catalog, overrides={"sellingPrice": 1})
