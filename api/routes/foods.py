"""Food item CRUD endpoints"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional

from api.deps import get_runner
from lib.errors import DataAccessError, MissingFieldsError, NotFoundError
from lib.partial_update import PartialUpdateBuilder
from lib.query import QueryRunner

router = APIRouter(prefix="/foods", tags=["foods"])

UPDATABLE_FIELDS = ("ITEM_NAME", "ITEM_UNIT", "COMPANY_ID")

food_patch_builder = PartialUpdateBuilder("foods", "ITEM_ID", UPDATABLE_FIELDS)


class FoodFields(BaseModel):
    """Mutable food columns; every field optional so the handler reports what's missing"""
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    ITEM_NAME: Optional[str] = Field(None, examples=["Food1"])
    ITEM_UNIT: Optional[str] = Field(None, examples=["Abd"])
    COMPANY_ID: Optional[str] = Field(None, examples=["21"])

    @field_validator("*", mode="before")
    @classmethod
    def falsy_is_absent(cls, value):
        # 0, "" and false count as not supplied, before numbers become strings
        return value if value else None


class NewFood(FoodFields):
    ITEM_ID: Optional[str] = Field(None, examples=["8"])


def _fields(body: Optional[FoodFields]) -> dict:
    """A missing request body behaves like an empty object"""
    return body.model_dump() if body is not None else {}


def _require_all(values: dict, names) -> list:
    if not all(values.get(name) for name in names):
        raise MissingFieldsError()
    return [values[name] for name in names]


@router.get(
    "",
    summary="Fetches all food items",
    responses={500: {"description": "Failed to fetch foods"}}
)
async def list_foods(runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run('SELECT * FROM foods')
    except Exception as e:
        raise DataAccessError("Failed to fetch foods") from e
    return result.rows


@router.get(
    "/{item_id}",
    summary="Fetches specific food item by ITEM_ID",
    responses={
        404: {"description": "Food was not found"},
        500: {"description": "Failed to fetch the food item"}
    }
)
async def get_food(item_id: str, runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run('SELECT * FROM foods WHERE "ITEM_ID" = $1', [item_id])
    except Exception as e:
        raise DataAccessError("Failed to fetch the food item") from e
    if not result.rows:
        raise NotFoundError("Food was not found")
    return result.first


@router.post(
    "/addFood",
    status_code=201,
    summary="Creates a new food item",
    responses={
        201: {"description": "Food item created successfully"},
        400: {"description": "All fields must be provided"},
        500: {"description": "Server error"}
    }
)
async def add_food(food: Optional[NewFood] = None, runner: QueryRunner = Depends(get_runner)):
    params = _require_all(_fields(food), ("ITEM_ID",) + UPDATABLE_FIELDS)
    try:
        await runner.run(
            'INSERT INTO foods ("ITEM_ID", "ITEM_NAME", "ITEM_UNIT", "COMPANY_ID") '
            'VALUES ($1, $2, $3, $4)',
            params
        )
    except Exception as e:
        raise DataAccessError("Failed to create the food item") from e
    return {"message": "Food item created successfully"}


@router.patch(
    "/patchFood/{item_id}",
    summary="Patches a specific food item",
    responses={
        200: {"description": "Food item updated successfully"},
        400: {"description": "No updates provided"},
        404: {"description": "Food item not found"},
        500: {"description": "Server error"}
    }
)
async def patch_food(item_id: str, changes: Optional[FoodFields] = None, runner: QueryRunner = Depends(get_runner)):
    # NoUpdatableFieldsError (400) is raised before any query is issued
    statement = food_patch_builder.build(item_id, _fields(changes))
    try:
        result = await runner.run(statement.sql, statement.params)
    except Exception as e:
        raise DataAccessError("Failed to update the food item") from e
    if not result.affected_rows:
        raise NotFoundError("Food item not found")
    return {"message": "Food item updated successfully"}


@router.put(
    "/putFood/{item_id}",
    summary="Updates a specific food item",
    responses={
        200: {"description": "Food item updated successfully"},
        400: {"description": "Invalid input data"},
        404: {"description": "Food item not found"},
        500: {"description": "Server error"}
    }
)
async def put_food(item_id: str, food: Optional[FoodFields] = None, runner: QueryRunner = Depends(get_runner)):
    params = _require_all(_fields(food), UPDATABLE_FIELDS)
    try:
        result = await runner.run(
            'UPDATE foods SET "ITEM_NAME" = $1, "ITEM_UNIT" = $2, "COMPANY_ID" = $3 '
            'WHERE "ITEM_ID" = $4',
            params + [item_id]
        )
    except Exception as e:
        raise DataAccessError("Failed to update the food item") from e
    if not result.affected_rows:
        raise NotFoundError("Food item not found")
    return {"message": "Food item updated successfully"}


@router.delete(
    "/deleteFood/{item_id}",
    summary="Deletes a specific food item",
    responses={
        200: {"description": "Food item deleted successfully"},
        404: {"description": "Food item not found"},
        500: {"description": "Server error"}
    }
)
async def delete_food(item_id: str, runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run('DELETE FROM foods WHERE "ITEM_ID" = $1', [item_id])
    except Exception as e:
        raise DataAccessError("Failed to delete the food item") from e
    if not result.affected_rows:
        raise NotFoundError("Food item not found")
    return {"message": "Food item deleted successfully"}
