"""
FastAPI dependency providers.

Services are looked up in the container stored on ``app.state`` by
the application lifespan, so every request shares the same
singletons.
"""

from fastapi import Depends, Request

from memo_api.app.core.container import DIContainer
from memo_api.app.services.read_service import MemoReadService
from memo_api.app.services.validation_service import MemoValidationService
from memo_api.app.services.write_service import MemoWriteService


def get_container(request: Request) -> DIContainer:
    return request.app.state.container


def get_read_service(container: DIContainer = Depends(get_container)) -> MemoReadService:
    return container.resolve("memo_read_service")


def get_write_service(container: DIContainer = Depends(get_container)) -> MemoWriteService:
    return container.resolve("memo_write_service")


def get_validation_service(container: DIContainer = Depends(get_container)) -> MemoValidationService:
    return container.resolve("memo_validation_service")
