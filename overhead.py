"""Recipe weight and weight-based overhead costs (labour, electricity, equipment)."""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from models import DEFAULT_COST_RATES, CostingMode, GlobalCostRates, Ingredient, Recipe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OverheadCosts:
    labor_cost: int
    electricity_cost: int
    equipment_cost: int

    @property
    def total(self) -> int:
        return self.labor_cost + self.electricity_cost + self.equipment_cost


def index_catalog(ingredients: Iterable[Ingredient]) -> Dict[str, Ingredient]:
    return {ing.id: ing for ing in ingredients}


def unresolved_ingredient_ids(recipe: Recipe, ingredients: Iterable[Ingredient]) -> List[str]:
    """Ids referenced by the recipe (core or shell) that are not in the catalog.

    Order of first appearance is kept, duplicates are dropped.
    """
    catalog = index_catalog(ingredients)
    missing: List[str] = []
    for item in recipe.all_ingredients:
        if item.ingredient_id not in catalog and item.ingredient_id not in missing:
            missing.append(item.ingredient_id)
    return missing


def calculate_recipe_weight(recipe: Recipe, ingredients: Iterable[Ingredient]) -> float:
    """Total grams of a recipe batch, core and shell ingredients together.

    Amounts are grams by convention. Lines whose ingredient has been removed
    from the catalog are skipped.
    """
    catalog = index_catalog(ingredients)
    total = 0.0
    for item in recipe.all_ingredients:
        if item.ingredient_id not in catalog:
            logger.warning(
                "Recipe %s references unknown ingredient %s, skipped from weight",
                recipe.id, item.ingredient_id,
            )
            continue
        total += item.amount
    return total


def calculate_overhead_costs(weight: float, rates: Optional[GlobalCostRates] = None) -> OverheadCosts:
    rates = rates or DEFAULT_COST_RATES
    weight = max(0.0, weight)
    return OverheadCosts(
        labor_cost=math.ceil(rates.labor_cost_per_gram * weight),
        electricity_cost=math.ceil(rates.electricity_cost_per_gram * weight),
        equipment_cost=math.ceil(rates.equipment_cost_per_gram * weight),
    )


def apply_weight_based_costs(
    recipe: Recipe,
    ingredients: Iterable[Ingredient],
    rates: Optional[GlobalCostRates] = None,
) -> Dict[str, object]:
    """Build the store patch that switches a recipe to weight-based overheads.

    The recipe itself is not modified; persisting the patch is up to the caller.
    """
    costs = calculate_overhead_costs(calculate_recipe_weight(recipe, ingredients), rates)
    return {
        "laborCost": costs.labor_cost,
        "electricityCost": costs.electricity_cost,
        "equipmentCost": costs.equipment_cost,
        "costingMode": CostingMode.WEIGHT_BASED.value,
    }
