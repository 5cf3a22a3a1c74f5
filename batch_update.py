"""Cost field updates for several recipes at once."""
from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Optional

from models import RECIPE_FIELDS, CostingMode, GlobalCostRates, Ingredient, Recipe
from overhead import apply_weight_based_costs

logger = logging.getLogger(__name__)

OVERHEAD_FIELDS = {"laborCost", "electricityCost", "equipmentCost"}


def current_cost_fields(recipe: Recipe) -> Dict[str, Any]:
    return {key: getattr(recipe, attr) for key, attr in RECIPE_FIELDS.items()}


def batch_cost_updates(
    recipes: Iterable[Recipe],
    ingredients: Iterable[Ingredient],
    rates: Optional[GlobalCostRates] = None,
    overrides: Optional[Dict[str, Any]] = None,
    weight_based: bool = True,
) -> Dict[str, Dict[str, Any]]:
    """Build one store patch per recipe id.

    Each patch starts from the recipe's stored cost fields. ``overrides``
    (camelCase keys) are applied to every recipe, then weight-based overheads
    replace the labour, electricity and equipment costs when ``weight_based``
    is set. Unset values stay in the patch as ``None`` so the store clears them.
    """
    ingredients = list(ingredients)
    overrides = overrides or {}
    unknown = set(overrides) - set(RECIPE_FIELDS)
    if unknown:
        raise ValueError(f"Unknown cost fields: {', '.join(sorted(unknown))}")
    manual_overhead = bool(OVERHEAD_FIELDS & set(overrides))

    updates: Dict[str, Dict[str, Any]] = {}
    for r in recipes:
        patch = current_cost_fields(r)
        patch.update(overrides)
        if weight_based:
            patch.update(apply_weight_based_costs(r, ingredients, rates))
        elif manual_overhead:
            patch["costingMode"] = CostingMode.MANUAL.value
        updates[r.id] = patch
    logger.info("Prepared cost updates for %d recipes (weight based: %s)", len(updates), weight_based)
    return updates
