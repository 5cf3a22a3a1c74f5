from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from models import CostingMode, GlobalCostRates, Ingredient, Recipe, RecipeIngredient
from overhead import (
    calculate_overhead_costs,
    calculate_recipe_weight,
    index_catalog,
    unresolved_ingredient_ids,
)

logger = logging.getLogger(__name__)

DEFAULT_MARGIN_PERCENTAGE = 30.0
DEFAULT_TAX_PERCENTAGE = 10.0
PRICE_ROUNDING_STEP = 1000


class CostingError(ValueError):
    """Invalid input handed to a costing function."""


class InvalidYield(CostingError):
    pass


class InvalidQuantity(CostingError):
    pass


class InvalidPackageSize(CostingError):
    pass


@dataclass(frozen=True)
class ProductionCost:
    quantity: float
    scaled_base_cost: float
    labor_cost: float
    electricity_cost: float
    equipment_cost: float
    production_cost: float
    reject_cost: float
    total_production_cost: float
    cost_per_unit: float
    unresolved_ingredient_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SellPrice:
    base_selling_price: float
    selling_price_with_tax: float
    rounded_price: int


# ---------------------------------------------------------------------------
# Material cost
# ---------------------------------------------------------------------------
def unit_price(ingredient: Ingredient) -> int:
    """Price of one unit of an ingredient, rounded up to a whole currency unit."""
    if ingredient.package_size <= 0:
        raise InvalidPackageSize(f"Package size of {ingredient.name!r} must be > 0")
    return math.ceil(ingredient.price / ingredient.package_size)


def _lines_cost(recipe: Recipe, items: Iterable[RecipeIngredient], catalog: Dict[str, Ingredient]) -> int:
    total = 0
    for item in items:
        ing = catalog.get(item.ingredient_id)
        if ing is None:
            logger.warning(
                "Recipe %s references unknown ingredient %s, skipped from cost",
                recipe.id, item.ingredient_id,
            )
            continue
        total += unit_price(ing) * math.ceil(item.amount)
    return total


def calculate_recipe_cost(
    recipe: Recipe, ingredients: Iterable[Ingredient], include_shell: bool = False
) -> int:
    """Material cost of one recipe batch.

    Both the unit price and the amount are rounded up before multiplying, so the
    figure never undercounts. Shell ingredients are costed separately unless
    ``include_shell`` is set.
    """
    catalog = index_catalog(ingredients)
    total = _lines_cost(recipe, recipe.ingredients, catalog)
    if include_shell:
        total += _lines_cost(recipe, recipe.shell_ingredients, catalog)
    return total


def calculate_shell_cost(recipe: Recipe, ingredients: Iterable[Ingredient]) -> int:
    return _lines_cost(recipe, recipe.shell_ingredients, index_catalog(ingredients))


def calculate_ingredient_usage(recipes: Iterable[Recipe], quantity: float) -> Dict[str, int]:
    """Ingredient consumption for producing ``quantity`` units of each recipe."""
    if quantity <= 0:
        raise InvalidQuantity(f"Production quantity must be > 0, got {quantity}")
    usage: Dict[str, int] = {}
    for r in recipes:
        if r.yield_ <= 0:
            raise InvalidYield(f"Recipe {r.id} has a yield of {r.yield_}")
        for it in r.all_ingredients:
            # multiply before dividing so ceil does not see float noise
            needed = math.ceil(it.amount * quantity / r.yield_)
            usage[it.ingredient_id] = usage.get(it.ingredient_id, 0) + needed
    return usage


# ---------------------------------------------------------------------------
# Production roll-up
# ---------------------------------------------------------------------------
def calculate_total_production_cost(
    base_cost: float,
    labor_cost: float = 0.0,
    electricity_cost: float = 0.0,
    equipment_cost: float = 0.0,
    reject_percentage: float = 0.0,
) -> float:
    production_cost = base_cost + labor_cost + electricity_cost + equipment_cost
    return production_cost + production_cost * (reject_percentage / 100)


def calculate_production_cost(
    recipe: Recipe,
    ingredients: Iterable[Ingredient],
    quantity: float,
    rates: Optional[GlobalCostRates] = None,
    include_shell: bool = False,
) -> ProductionCost:
    """Cost of producing ``quantity`` units of a recipe.

    Everything is scaled linearly from the recipe's yield. Weight-based
    overheads are recomputed from the scaled weight when ``rates`` are given;
    otherwise the stored overhead values are scaled like the material cost.
    """
    if recipe.yield_ <= 0:
        raise InvalidYield(f"Recipe {recipe.id} has a yield of {recipe.yield_}")
    if quantity <= 0:
        raise InvalidQuantity(f"Production quantity must be > 0, got {quantity}")

    ingredients = list(ingredients)
    scale = quantity / recipe.yield_
    base_cost = calculate_recipe_cost(recipe, ingredients, include_shell=include_shell)
    scaled_base_cost = base_cost * scale

    if recipe.costing_mode is CostingMode.WEIGHT_BASED and rates is not None:
        weight = calculate_recipe_weight(recipe, ingredients) * quantity / recipe.yield_
        overhead = calculate_overhead_costs(weight, rates)
        labor, electricity, equipment = (
            overhead.labor_cost, overhead.electricity_cost, overhead.equipment_cost
        )
    else:
        labor = (recipe.labor_cost or 0.0) * scale
        electricity = (recipe.electricity_cost or 0.0) * scale
        equipment = (recipe.equipment_cost or 0.0) * scale

    production_cost = scaled_base_cost + labor + electricity + equipment
    reject_cost = production_cost * ((recipe.reject_percentage or 0.0) / 100)
    total = production_cost + reject_cost

    return ProductionCost(
        quantity=quantity,
        scaled_base_cost=scaled_base_cost,
        labor_cost=labor,
        electricity_cost=electricity,
        equipment_cost=equipment,
        production_cost=production_cost,
        reject_cost=reject_cost,
        total_production_cost=total,
        cost_per_unit=total / quantity,
        unresolved_ingredient_ids=unresolved_ingredient_ids(recipe, ingredients),
    )


# ---------------------------------------------------------------------------
# Selling price
# ---------------------------------------------------------------------------
def calculate_sell_price(
    cost_per_unit: float,
    margin_percentage: Optional[float] = None,
    include_tax: bool = False,
    tax_percentage: Optional[float] = None,
) -> float:
    if margin_percentage is None:
        margin_percentage = DEFAULT_MARGIN_PERCENTAGE
    price = cost_per_unit * (1 + margin_percentage / 100)
    if include_tax:
        if tax_percentage is None:
            tax_percentage = DEFAULT_TAX_PERCENTAGE
        price *= 1 + tax_percentage / 100
    return price


def round_price(value: float) -> int:
    """Round up to the next thousand for price tags."""
    return math.ceil(value / PRICE_ROUNDING_STEP) * PRICE_ROUNDING_STEP


def price_breakdown(
    cost_per_unit: float,
    margin_percentage: Optional[float] = None,
    tax_percentage: Optional[float] = None,
) -> SellPrice:
    base = calculate_sell_price(cost_per_unit, margin_percentage)
    with_tax = calculate_sell_price(cost_per_unit, margin_percentage, True, tax_percentage)
    return SellPrice(
        base_selling_price=base,
        selling_price_with_tax=with_tax,
        rounded_price=round_price(with_tax),
    )
