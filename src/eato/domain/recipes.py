"""Recipe nutrition calculation.

Ingredients are given either as absolute quantities or as baker's percentages
of a base ingredient ("2% salt" is 2% of the flour weight). Totals are
normalized to a per-100g profile using the cooked yield weight.
"""

from dataclasses import dataclass
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from eato.domain.dates import require_finite, round_half_up
from eato.domain.errors import InvalidInputError

_GRAMS_PER_UNIT: dict[str, float] = {
    "kg": 1000.0,
    # 1 ml of a water-based liquid is treated as 1 g.
    "l": 1000.0,
    "g": 1.0,
    "ml": 1.0,
}


class IngredientInput(BaseModel):
    """Recipe ingredient with macros per 100 g."""

    model_config = ConfigDict(frozen=True)

    id: str | None = None
    name: str
    quantity: float = Field(gt=0, allow_inf_nan=False)
    unit: str = "g"
    is_percentage: bool = False
    base_ingredient_id: str | None = None
    calories_per_100g: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    protein_per_100g: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    carbs_per_100g: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    fat_per_100g: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    fiber_per_100g: float = Field(default=0.0, ge=0, allow_inf_nan=False)


class ResolvedIngredient(IngredientInput):
    """Ingredient with its quantity resolved to grams."""

    resolved_grams: float = Field(ge=0, allow_inf_nan=False)


@dataclass(frozen=True)
class NutritionTotals:
    """Absolute nutrition of a recipe or portion."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float = 0.0


@dataclass(frozen=True)
class NutritionPer100g:
    """Nutrition normalized to 100 g of the finished recipe."""

    calories_per_100g: float
    protein_per_100g: float
    carbs_per_100g: float
    fat_per_100g: float
    fiber_per_100g: float = 0.0


@dataclass(frozen=True)
class RecipeRecord:
    """A saved recipe with its per-100g profile."""

    id: UUID
    user_id: UUID
    name: str
    yield_weight: float
    nutrition: NutritionPer100g


ZERO_PER_100G = NutritionPer100g(
    calories_per_100g=0.0,
    protein_per_100g=0.0,
    carbs_per_100g=0.0,
    fat_per_100g=0.0,
    fiber_per_100g=0.0,
)


def convert_to_grams(quantity: float, unit: str) -> float:
    """Convert a quantity to grams; unknown units pass through unchanged."""
    return quantity * _GRAMS_PER_UNIT.get(unit.lower(), 1.0)


def resolve_percentages(ingredients: list[IngredientInput]) -> list[ResolvedIngredient]:
    """Resolve every ingredient to grams, percentages against their base."""
    first_pass = [
        _resolved(
            ingredient,
            0.0
            if ingredient.is_percentage
            else convert_to_grams(ingredient.quantity, ingredient.unit),
        )
        for ingredient in ingredients
    ]
    bases = {
        ingredient.id: ingredient
        for ingredient in reversed(first_pass)
        if ingredient.id is not None and not ingredient.is_percentage
    }

    resolved: list[ResolvedIngredient] = []
    for ingredient in first_pass:
        if not ingredient.is_percentage:
            resolved.append(ingredient)
            continue
        base = bases.get(ingredient.base_ingredient_id)
        if base is None:
            # No usable base: the percentage number is taken as grams.
            resolved.append(_resolved(ingredient, ingredient.quantity))
            continue
        resolved.append(
            _resolved(ingredient, ingredient.quantity / 100 * base.resolved_grams)
        )
    return resolved


def calculate_total_nutrition(ingredients: list[ResolvedIngredient]) -> NutritionTotals:
    """Sum the nutrition contributed by each resolved ingredient."""
    calories = protein = carbs = fat = fiber = 0.0
    for ingredient in ingredients:
        ratio = ingredient.resolved_grams / 100
        calories += ingredient.calories_per_100g * ratio
        protein += ingredient.protein_per_100g * ratio
        carbs += ingredient.carbs_per_100g * ratio
        fat += ingredient.fat_per_100g * ratio
        fiber += ingredient.fiber_per_100g * ratio
    return NutritionTotals(
        calories=calories, protein=protein, carbs=carbs, fat=fat, fiber=fiber
    )


def calculate_per_100g_nutrition(
    totals: NutritionTotals, yield_weight: float
) -> NutritionPer100g:
    """Normalize totals to 100 g of the finished recipe."""
    require_finite(yield_weight, "yield_weight")
    if yield_weight <= 0:
        return ZERO_PER_100G

    factor = 100 / yield_weight
    return NutritionPer100g(
        calories_per_100g=round_half_up(totals.calories * factor, 1),
        protein_per_100g=round_half_up(totals.protein * factor, 1),
        carbs_per_100g=round_half_up(totals.carbs * factor, 1),
        fat_per_100g=round_half_up(totals.fat * factor, 1),
        fiber_per_100g=round_half_up(totals.fiber * factor, 1),
    )


def calculate_recipe_nutrition(
    ingredients: list[IngredientInput], yield_weight: float
) -> NutritionPer100g:
    """Resolve, total and normalize a recipe in one step."""
    resolved = resolve_percentages(ingredients)
    totals = calculate_total_nutrition(resolved)
    return calculate_per_100g_nutrition(totals, yield_weight)


def calculate_portion_nutrition(
    recipe_per_100g: NutritionPer100g, consumed_weight: float
) -> NutritionTotals:
    """Return the nutrition of a consumed portion of a recipe."""
    require_finite(consumed_weight, "consumed_weight")
    if consumed_weight < 0:
        raise InvalidInputError("consumed_weight must not be negative")
    ratio = consumed_weight / 100
    return NutritionTotals(
        calories=round_half_up(recipe_per_100g.calories_per_100g * ratio),
        protein=round_half_up(recipe_per_100g.protein_per_100g * ratio, 1),
        carbs=round_half_up(recipe_per_100g.carbs_per_100g * ratio, 1),
        fat=round_half_up(recipe_per_100g.fat_per_100g * ratio, 1),
        fiber=round_half_up(recipe_per_100g.fiber_per_100g * ratio, 1),
    )


def calculate_total_ingredient_weight(ingredients: list[IngredientInput]) -> int:
    """Return the rounded total resolved weight, a default for yield weight."""
    resolved = resolve_percentages(ingredients)
    return int(round_half_up(sum(ingredient.resolved_grams for ingredient in resolved)))


def _resolved(ingredient: IngredientInput, grams: float) -> ResolvedIngredient:
    data = ingredient.model_dump()
    data.pop("resolved_grams", None)
    return ResolvedIngredient(**data, resolved_grams=grams)
