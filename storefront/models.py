"""
Data models for the storefront client.

This module defines the canonical shapes exchanged with the remote services
and held in client-side state:

- Recipe: a meal record from the third-party catalog, kept verbatim
  (catalog field names are exposed through aliases, extra fields are allowed)
- Ingredient: (name, measure) pair extracted from a recipe record
- CartLine: one merged entry of (recipe, quantity, unit price)
- Session / SubscriptionStatus / SubscriptionPlan: auth and premium state
- User / UserProfile / UserSettings: account records from the backends
- WeeklyPlan: seven (day, recipe) assignments
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# The catalog numbers ingredient/measure fields strIngredient1..strIngredient20
MAX_INGREDIENT_FIELDS = 20


class Ingredient(BaseModel):
    """A single ingredient line of a recipe."""
    name: str = Field(..., description="Ingredient name")
    measure: str = Field("", description="Free-text quantity, e.g. '2 tbsp'")

    def __str__(self) -> str:
        if not self.measure:
            return self.name
        return f"{self.name}: {self.measure}"


def parse_ingredients(record: Dict[str, Any]) -> List[Ingredient]:
    """
    Extract (name, measure) pairs from a raw catalog record.

    Walks the numbered strIngredientN / strMeasureN fields in order, up to
    MAX_INGREDIENT_FIELDS. Blank or missing ingredient names are skipped;
    a missing measure becomes an empty string.

    Args:
        record: Recipe dictionary using catalog field names

    Returns:
        Ingredients in catalog order.
    """
    ingredients: List[Ingredient] = []
    for i in range(1, MAX_INGREDIENT_FIELDS + 1):
        name = record.get(f"strIngredient{i}")
        if not name or not str(name).strip():
            continue
        measure = record.get(f"strMeasure{i}") or ""
        ingredients.append(Ingredient(name=str(name).strip(), measure=str(measure).strip()))
    return ingredients


class Recipe(BaseModel):
    """
    Recipe (meal) record sourced verbatim from the external catalog.

    Only the identifier and display fields are modeled; every other catalog
    field (instructions, ingredients, tags...) is kept as an extra field.
    """
    id: str = Field(..., alias="idMeal", description="Catalog identifier")
    name: str = Field(..., alias="strMeal", description="Display name")
    category: Optional[str] = Field(None, alias="strCategory")
    area: Optional[str] = Field(None, alias="strArea")
    thumbnail: Optional[str] = Field(None, alias="strMealThumb")
    instructions: Optional[str] = Field(None, alias="strInstructions")

    model_config = ConfigDict(populate_by_name=True, extra="allow", coerce_numbers_to_str=True)

    def raw(self) -> Dict[str, Any]:
        """Return the record with catalog field names."""
        return self.model_dump(by_alias=True)

    def ingredients(self) -> List[Ingredient]:
        return parse_ingredients(self.raw())


class CartLine(BaseModel):
    """One cart entry. Unique per recipe id within a cart."""
    item: Recipe = Field(..., description="Recipe being purchased")
    quantity: int = Field(1, ge=1, description="Number of units")
    unit_price: Decimal = Field(..., ge=0, description="Price per unit in euros")

    @property
    def item_id(self) -> str:
        return self.item.id

    @property
    def line_total(self) -> Decimal:
        """Calculate total price for this line (unit_price * quantity)."""
        return self.unit_price * self.quantity


class CartReceipt(BaseModel):
    """Snapshot of the cart taken at checkout."""
    lines: List[CartLine] = Field(default_factory=list)
    total: Decimal = Field(Decimal("0"))


class Session(BaseModel):
    """Client-side session. Authenticated iff a token is present."""
    token: Optional[str] = Field(None, description="Opaque bearer token")

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)


class SubscriptionStatus(BaseModel):
    """Premium status as reported by GET /api/user/status."""
    premium: bool = False
    plan: Optional[str] = None


class SubscriptionPlan(BaseModel):
    """A purchasable subscription plan."""
    id: str
    name: str
    price: Decimal = Field(..., ge=0)
    benefits: List[str] = Field(default_factory=list)

    model_config = ConfigDict(coerce_numbers_to_str=True)


class User(BaseModel):
    """User record from the auth backend's user lookups."""
    user_id: int
    email: str
    username: str
    full_name: Optional[str] = None
    roles: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class UserProfile(BaseModel):
    """Profile of the authenticated user (GET/PUT /api/user/profile)."""
    user_id: int
    username: str
    email: str
    full_name: Optional[str] = None
    rol: Optional[str] = None

    model_config = ConfigDict(extra="allow")


class UserSettings(BaseModel):
    """Preferences of the authenticated user (GET/PUT /api/user/settings)."""
    theme: str = Field("system", pattern="^(light|dark|system)$")
    language: str = "es"
    model: Optional[str] = None
    notifications: bool = True


class PlanDay(BaseModel):
    """A single day of a weekly plan."""
    day: str
    recipe: Recipe


class WeeklyPlan(BaseModel):
    """Seven recipes assigned to the days of the week."""
    category: str
    days: List[PlanDay] = Field(default_factory=list)
