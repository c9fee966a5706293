"""Request-scoped access to resources created in the app lifespan"""
from fastapi import Request

from lib.query import QueryRunner
from lib.say_client import SayClient


def get_runner(request: Request) -> QueryRunner:
    return request.app.state.runner


def get_say_client(request: Request) -> SayClient:
    return request.app.state.say_client
