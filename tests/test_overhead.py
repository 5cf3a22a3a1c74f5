import dataclasses

from models import GlobalCostRates, Recipe, RecipeIngredient
from overhead import (
    OverheadCosts,
    apply_weight_based_costs,
    calculate_overhead_costs,
    calculate_recipe_weight,
    unresolved_ingredient_ids,
)


def test_recipe_weight_sums_both_buckets(truffle, catalog):
    assert calculate_recipe_weight(truffle, catalog) == 385.5


def test_recipe_weight_ignores_bucket(truffle, catalog):
    pooled = dataclasses.replace(
        truffle, ingredients=[], shell_ingredients=truffle.ingredients + truffle.shell_ingredients
    )
    assert calculate_recipe_weight(pooled, catalog) == calculate_recipe_weight(truffle, catalog)


def test_recipe_weight_skips_unknown(catalog):
    recipe = Recipe(
        id="r",
        name="R",
        yield_=1,
        ingredients=[RecipeIngredient("ghost", 100), RecipeIngredient("choc", 40)],
    )
    assert calculate_recipe_weight(recipe, catalog) == 40
    assert calculate_recipe_weight(recipe, []) == 0


def test_unresolved_ids_are_unique_and_ordered(catalog):
    recipe = Recipe(
        id="r",
        name="R",
        yield_=1,
        ingredients=[RecipeIngredient("b", 1), RecipeIngredient("choc", 1), RecipeIngredient("a", 1)],
        shell_ingredients=[RecipeIngredient("b", 2)],
    )
    assert unresolved_ingredient_ids(recipe, catalog) == ["b", "a"]


def test_overhead_costs_example():
    rates = GlobalCostRates(labor_cost_per_gram=10, electricity_cost_per_gram=5, equipment_cost_per_gram=2)
    costs = calculate_overhead_costs(1000, rates)
    assert costs == OverheadCosts(labor_cost=10000, electricity_cost=5000, equipment_cost=2000)
    assert costs.total == 17000


def test_overhead_costs_defaults_and_clamp():
    assert calculate_overhead_costs(1000) == calculate_overhead_costs(1000, GlobalCostRates())
    assert calculate_overhead_costs(-50).total == 0


def test_overhead_costs_round_up():
    rates = GlobalCostRates(labor_cost_per_gram=0.3, electricity_cost_per_gram=0, equipment_cost_per_gram=1.5)
    costs = calculate_overhead_costs(7, rates)
    assert costs.labor_cost == 3
    assert costs.electricity_cost == 0
    assert costs.equipment_cost == 11


def test_apply_weight_based_costs_returns_patch(truffle, catalog):
    patch = apply_weight_based_costs(truffle, catalog)
    assert patch == {
        "laborCost": 3855,
        "electricityCost": 1928,
        "equipmentCost": 771,
        "costingMode": "weightBased",
    }
    assert truffle.labor_cost == 5000
