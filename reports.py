# reports.py
"""Tabular costing data for the calculator sheet and the batch summary.

The frames are handed to whatever writes the Excel/PDF file; no file format
is produced here.
"""
from __future__ import annotations

import math
from typing import Iterable, List, Optional

import pandas as pd

from logic import calculate_production_cost, price_breakdown, unit_price
from models import GlobalCostRates, Ingredient, Recipe
from overhead import calculate_recipe_weight, index_catalog

SHEET_COLUMNS = ["Name", "Amount", "Unit", "Unit Price", "Cost"]
SUMMARY_COLUMNS = [
    "Recipe", "Yield", "Weight (g)", "Base Cost", "Labor Cost", "Electricity Cost",
    "Equipment Cost", "Reject Cost", "Total Cost", "Cost per Unit",
    "Selling Price", "Selling Price (tax)", "Rounded Price", "Missing Ingredients",
]


def format_idr(value: float) -> str:
    """Whole rupiah with dot thousands separators, e.g. ``Rp 49.950``."""
    return "Rp " + f"{math.ceil(value):,d}".replace(",", ".")


def recipe_cost_sheet(
    recipe: Recipe,
    ingredients: Iterable[Ingredient],
    quantity: float,
    rates: Optional[GlobalCostRates] = None,
) -> pd.DataFrame:
    """Per-ingredient usage for ``quantity`` units, followed by the cost lines."""
    ingredients = list(ingredients)
    catalog = index_catalog(ingredients)
    cost = calculate_production_cost(recipe, ingredients, quantity, rates)
    scale = quantity / recipe.yield_

    rows: List[list] = []
    for it in recipe.ingredients:
        ing = catalog.get(it.ingredient_id)
        if ing is None:
            continue
        amount = it.amount * quantity / recipe.yield_
        price = unit_price(ing)
        # same rounding as the base cost, scaled afterwards
        line_cost = price * math.ceil(it.amount) * scale
        rows.append([ing.name, round(amount, 2), ing.unit, price, line_cost])

    rows += [
        ["Base Cost", None, None, None, cost.scaled_base_cost],
        ["Labor Cost", None, None, None, cost.labor_cost],
        ["Electricity Cost", None, None, None, cost.electricity_cost],
        ["Equipment Cost", None, None, None, cost.equipment_cost],
        ["Reject Cost", None, None, None, cost.reject_cost],
        ["Total Cost", None, None, None, cost.total_production_cost],
        [f"Cost per {recipe.yield_unit}", None, None, None, cost.cost_per_unit],
    ]
    return pd.DataFrame(rows, columns=SHEET_COLUMNS)


def batch_cost_summary(
    recipes: Iterable[Recipe],
    ingredients: Iterable[Ingredient],
    rates: Optional[GlobalCostRates] = None,
) -> pd.DataFrame:
    """One row per recipe, costed at its own yield."""
    ingredients = list(ingredients)
    rows = []
    for r in recipes:
        cost = calculate_production_cost(r, ingredients, r.yield_, rates)
        price = price_breakdown(cost.cost_per_unit, r.margin_percentage, r.tax_percentage)
        rows.append([
            r.name,
            r.yield_,
            calculate_recipe_weight(r, ingredients),
            cost.scaled_base_cost,
            cost.labor_cost,
            cost.electricity_cost,
            cost.equipment_cost,
            cost.reject_cost,
            cost.total_production_cost,
            cost.cost_per_unit,
            price.base_selling_price,
            price.selling_price_with_tax,
            price.rounded_price,
            ", ".join(cost.unresolved_ingredient_ids),
        ])
    return pd.DataFrame(rows, columns=SUMMARY_COLUMNS)
