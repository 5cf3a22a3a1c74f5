import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))
from models import Ingredient, Recipe, RecipeIngredient


@pytest.fixture
def catalog():
    return [
        Ingredient(id="choc", name="Dark chocolate 70%", package_size=1000, price=150000),
        Ingredient(id="sugar", name="Sugar", package_size=1000, price=20000),
        Ingredient(id="butter", name="Cocoa butter", package_size=500, price=100000),
        Ingredient(id="box", name="Gift box", package_size=10, price=5000, unit="pcs", package_unit="pcs"),
    ]


@pytest.fixture
def truffle():
    return Recipe(
        id="r1",
        name="Dark truffle",
        yield_=10,
        ingredients=[
            RecipeIngredient("choc", 333),
            RecipeIngredient("sugar", 50.5),
        ],
        shell_ingredients=[RecipeIngredient("box", 2)],
        labor_cost=5000,
        electricity_cost=2000,
        equipment_cost=1000,
        reject_percentage=10,
    )
