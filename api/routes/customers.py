"""Customer endpoints"""
from fastapi import APIRouter, Depends

from api.deps import get_runner
from lib.errors import DataAccessError, NotFoundError
from lib.query import QueryRunner

router = APIRouter(prefix="/customers", tags=["customers"])


@router.get(
    "",
    summary="Fetches all customers",
    responses={500: {"description": "Error with fetching customers"}}
)
async def list_customers(runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run('SELECT * FROM customer')
    except Exception as e:
        raise DataAccessError("Error with fetching customers") from e
    return result.rows


@router.get(
    "/{code}",
    summary="Fetches specific customer by code",
    responses={
        404: {"description": "Customer not found"},
        500: {"description": "Error with fetching customer by code"}
    }
)
async def get_customer(code: str, runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run('SELECT * FROM customer WHERE "CUST_CODE" = $1', [code])
    except Exception as e:
        raise DataAccessError("Error with fetching customer by code") from e
    if not result.rows:
        raise NotFoundError("Customer not found")
    return result.first
