from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class NutritionModel(BaseModel):
    """Nutrition plans keep snake_case keys on the wire"""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class FoodItem(NutritionModel):
    food_name: str = Field(min_length=1)
    quantity: str = Field(min_length=1)
    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)


class Meal(NutritionModel):
    meal_type: str = Field(min_length=1)
    time: str = Field(min_length=1)
    calories: float = Field(ge=0)
    items: List[FoodItem] = []


class NutritionPlanInput(NutritionModel):
    member_id: str = Field(alias="user_id", min_length=1)
    plan_name: str = Field(min_length=1)
    total_calories: int = Field(ge=0)
    protein_target: int = Field(ge=0)
    carbs_target: int = Field(ge=0)
    fat_target: int = Field(ge=0)
    meals: List[Meal] = []


class NutritionPlanUpdate(NutritionModel):
    member_id: Optional[str] = Field(default=None, alias="user_id")
    plan_name: Optional[str] = Field(default=None, min_length=1)
    total_calories: Optional[int] = Field(default=None, ge=0)
    protein_target: Optional[int] = Field(default=None, ge=0)
    carbs_target: Optional[int] = Field(default=None, ge=0)
    fat_target: Optional[int] = Field(default=None, ge=0)
    meals: Optional[List[Meal]] = None


class NutritionPlanOut(NutritionModel):
    id: int
    member_id: str = Field(serialization_alias="user_id")
    plan_name: str
    total_calories: int
    protein_target: int
    carbs_target: int
    fat_target: int
    meals: list
    created_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def dump(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
