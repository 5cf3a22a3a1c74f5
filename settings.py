"""Loading and saving of the global per-gram cost rates."""
from __future__ import annotations

import json
import logging

from sqlalchemy.orm import Session

from db import AppSetting
from models import DEFAULT_COST_RATES, GlobalCostRates

logger = logging.getLogger(__name__)

COST_RATES_KEY = "globalCostRates"


def load_cost_rates(db: Session) -> GlobalCostRates:
    """Stored rates merged over the defaults; defaults if nothing usable is stored."""
    row = db.get(AppSetting, COST_RATES_KEY)
    if row is None:
        return DEFAULT_COST_RATES
    try:
        data = json.loads(row.value)
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        return GlobalCostRates.from_dict(data)
    except (TypeError, ValueError) as exc:
        logger.error("Error loading global cost rates: %s", exc)
        return DEFAULT_COST_RATES


def save_cost_rates(db: Session, rates: GlobalCostRates) -> GlobalCostRates:
    for name, value in rates.to_dict().items():
        if value < 0:
            raise ValueError(f"{name} must be >= 0, got {value}")

    payload = json.dumps(rates.to_dict())
    row = db.get(AppSetting, COST_RATES_KEY)
    if row is None:
        db.add(AppSetting(key=COST_RATES_KEY, value=payload))
    else:
        row.value = payload
    db.commit()
    logger.info("Saved global cost rates: %s", payload)
    return rates
