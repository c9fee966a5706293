"""Students joined with their report cards"""
from fastapi import APIRouter, Depends

from api.deps import get_runner
from lib.errors import DataAccessError
from lib.query import QueryRunner

router = APIRouter(prefix="/students", tags=["students"])

STUDENTS_WITH_REPORTS = """
    SELECT
        s."NAME", s."TITLE", s."CLASS", s."SECTION", s."ROLLID",
        COALESCE(
            json_agg(
                json_build_object(
                    'GRADE', sr."GRADE",
                    'SEMISTER', sr."SEMISTER",
                    'CLASS_ATTENDED', sr."CLASS_ATTENDED"
                )
            ) FILTER (WHERE sr."ROLLID" IS NOT NULL),
            '[]'::json
        ) AS "REPORTS"
    FROM student s
    LEFT JOIN studentreport sr
        ON s."CLASS" = sr."CLASS" AND s."SECTION" = sr."SECTION" AND s."ROLLID" = sr."ROLLID"
    GROUP BY s."CLASS", s."SECTION", s."ROLLID", s."NAME", s."TITLE"
    ORDER BY s."CLASS", s."SECTION", s."ROLLID"
"""


@router.get(
    "",
    summary="Fetches all students and their reports",
    responses={500: {"description": "Error with fetching students with their reports"}}
)
async def list_students(runner: QueryRunner = Depends(get_runner)):
    try:
        result = await runner.run(STUDENTS_WITH_REPORTS)
    except Exception as e:
        raise DataAccessError("Error with fetching students with their reports") from e
    return result.rows
