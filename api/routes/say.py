"""Proxy to the external say function"""
from fastapi import APIRouter, Depends, Query

from api.deps import get_say_client
from lib.say_client import SayClient

router = APIRouter(tags=["say"])


@router.get(
    "/say",
    summary="Calls the say function with a keyword",
    responses={500: {"description": "Failed to fetch response from say function"}}
)
async def say(keyword: str = Query(""), client: SayClient = Depends(get_say_client)):
    # UpstreamError propagates to the gateway error handler as a 500
    return await client.say(keyword)
