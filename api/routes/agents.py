"""Agents joined with the customers they serve"""
from fastapi import APIRouter, Depends

from api.deps import get_runner
from lib.errors import DataAccessError
from lib.query import QueryRunner

router = APIRouter(prefix="/agents", tags=["agents"])

# An agent with no customers keeps its row and gets an empty CUSTOMERS list
AGENTS_WITH_CUSTOMERS = """
    SELECT
        a."AGENT_CODE", a."AGENT_NAME", a."WORKING_AREA", a."PHONE_NO" AS "AGENT_PHONE",
        a."COMMISSION", a."COUNTRY",
        COALESCE(
            json_agg(
                json_build_object(
                    'CUST_CODE', c."CUST_CODE",
                    'CUST_NAME', c."CUST_NAME"
                )
            ) FILTER (WHERE c."CUST_CODE" IS NOT NULL),
            '[]'::json
        ) AS "CUSTOMERS"
    FROM agents a
    LEFT JOIN customer c ON a."AGENT_CODE" = c."AGENT_CODE"
    GROUP BY a."AGENT_CODE", a."AGENT_NAME", a."WORKING_AREA", a."PHONE_NO",
             a."COMMISSION", a."COUNTRY"
    ORDER BY a."AGENT_CODE"
"""


@router.get(
    "",
    summary="Fetches all agents and their customers",
    responses={500: {"description": "Error with fetching agents with their customers"}}
)
async def list_agents(runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run(AGENTS_WITH_CUSTOMERS)
    except Exception as e:
        raise DataAccessError("Error with fetching agents with their customers") from e
    return result.rows
