import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from deck_api.errors import (
    InsufficientCardsError,
    NotFoundError,
    ShuffleError,
    StoreError,
    StoreUnavailableError,
    ValidationError,
)
from deck_api.models.dc_models import ProblemModel

PROBLEM_MEDIA_TYPE = "application/problem+json"


def problem_response(problem: ProblemModel) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(mode="json", exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return problem_response(
        ProblemModel(
            title="Bad Request",
            status=status.HTTP_400_BAD_REQUEST,
            invalid_params=exc.invalid_params,
        )
    )


async def insufficient_cards_handler(request: Request, exc: InsufficientCardsError) -> JSONResponse:
    return problem_response(
        ProblemModel(
            title="Bad Request",
            status=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
            invalid_params=[exc.invalid_param],
        )
    )


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return problem_response(
        ProblemModel(title="Not Found", status=status.HTTP_404_NOT_FOUND, detail=exc.detail)
    )


async def store_unavailable_handler(request: Request, exc: StoreUnavailableError) -> JSONResponse:
    logging.error(f"Store unavailable for {request.method} {request.url.path}: {exc}")
    return problem_response(
        ProblemModel(title="Service Unavailable", status=status.HTTP_503_SERVICE_UNAVAILABLE)
    )


async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logging.error(f"Internal error for {request.method} {request.url.path}: {exc}")
    return problem_response(
        ProblemModel(title="Internal Server Error", status=status.HTTP_500_INTERNAL_SERVER_ERROR)
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(InsufficientCardsError, insufficient_cards_handler)
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(StoreUnavailableError, store_unavailable_handler)
    app.add_exception_handler(StoreError, internal_error_handler)
    app.add_exception_handler(ShuffleError, internal_error_handler)
