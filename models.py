"""Plain data types read from the document store by the costing functions."""
from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


class CostingMode(enum.Enum):
    MANUAL = "manual"
    WEIGHT_BASED = "weightBased"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _opt_float(value: Any) -> Optional[float]:
    if value is None or value == "":
        return None
    return float(value)


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Ingredient:
    id: str
    name: str
    package_size: float
    price: float
    unit: str = "grams"
    package_unit: str = "grams"

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "Ingredient":
        return cls(
            id=str(rec["id"]),
            name=rec.get("name", ""),
            package_size=float(rec.get("packageSize") or 0.0),
            price=float(rec.get("price") or 0.0),
            unit=rec.get("unit") or "grams",
            package_unit=rec.get("packageUnit") or rec.get("unit") or "grams",
        )


@dataclass(frozen=True)
class RecipeIngredient:
    ingredient_id: str
    amount: float

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "RecipeIngredient":
        return cls(ingredient_id=str(rec["ingredientId"]), amount=float(rec.get("amount") or 0.0))


# Store field name -> Recipe attribute. "packagingCost" is the legacy name of
# the electricity cost and is only ever read.
RECIPE_FIELDS = {
    "laborCost": "labor_cost",
    "electricityCost": "electricity_cost",
    "equipmentCost": "equipment_cost",
    "rejectPercentage": "reject_percentage",
    "taxPercentage": "tax_percentage",
    "marginPercentage": "margin_percentage",
}
LEGACY_FIELDS = {"packagingCost": "electricityCost"}


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    yield_: float
    yield_unit: str = "pcs"
    ingredients: List[RecipeIngredient] = field(default_factory=list)
    shell_ingredients: List[RecipeIngredient] = field(default_factory=list)
    labor_cost: Optional[float] = None
    electricity_cost: Optional[float] = None
    equipment_cost: Optional[float] = None
    reject_percentage: Optional[float] = None
    tax_percentage: Optional[float] = None
    margin_percentage: Optional[float] = None
    costing_mode: CostingMode = CostingMode.MANUAL

    @property
    def all_ingredients(self) -> List[RecipeIngredient]:
        return list(self.ingredients) + list(self.shell_ingredients)

    @classmethod
    def from_record(cls, rec: Dict[str, Any]) -> "Recipe":
        rec = _upgrade_legacy(rec)
        values = {attr: _opt_float(rec.get(key)) for key, attr in RECIPE_FIELDS.items()}
        return cls(
            id=str(rec["id"]),
            name=rec.get("name", ""),
            yield_=float(rec.get("yield") or 0.0),
            yield_unit=rec.get("yieldUnit") or "pcs",
            ingredients=[RecipeIngredient.from_record(r) for r in rec.get("ingredients") or []],
            shell_ingredients=[
                RecipeIngredient.from_record(r) for r in rec.get("shellIngredients") or []
            ],
            costing_mode=CostingMode(rec.get("costingMode") or CostingMode.MANUAL.value),
            **values,
        )

    def with_patch(self, patch: Dict[str, Any]) -> "Recipe":
        """Return a copy with a store patch (camelCase keys) applied."""
        patch = _upgrade_legacy(patch)
        changes: Dict[str, Any] = {}
        for key, value in patch.items():
            if key == "costingMode":
                changes["costing_mode"] = CostingMode(value)
            elif key in RECIPE_FIELDS:
                changes[RECIPE_FIELDS[key]] = _opt_float(value)
        return dataclasses.replace(self, **changes)


def _upgrade_legacy(rec: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(rec)
    for old, new in LEGACY_FIELDS.items():
        if old in out:
            legacy = out.pop(old)
            out.setdefault(new, legacy)
    return out


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class GlobalCostRates:
    """Per-gram overhead rates, in currency units per gram."""

    labor_cost_per_gram: float = 10.0
    electricity_cost_per_gram: float = 5.0
    equipment_cost_per_gram: float = 2.0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GlobalCostRates":
        default = cls()
        return cls(
            labor_cost_per_gram=float(data.get("laborCostPerGram", default.labor_cost_per_gram)),
            electricity_cost_per_gram=float(
                data.get("electricityCostPerGram", default.electricity_cost_per_gram)
            ),
            equipment_cost_per_gram=float(
                data.get("equipmentCostPerGram", default.equipment_cost_per_gram)
            ),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "laborCostPerGram": self.labor_cost_per_gram,
            "electricityCostPerGram": self.electricity_cost_per_gram,
            "equipmentCostPerGram": self.equipment_cost_per_gram,
        }


DEFAULT_COST_RATES = GlobalCostRates()
