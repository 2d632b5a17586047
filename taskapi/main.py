"""FastAPI application for the Task API."""

import time

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskapi import __version__
from taskapi.errors import TaskAPIError, ValidationError, describe_validation_errors
from taskapi.models import ErrorResponse, HealthResponse, Task, TaskWrite
from taskapi.observability.correlation import CORRELATION_ID_HEADER, correlation_scope
from taskapi.observability.logging import get_logger
from taskapi.store import TaskStore

logger = get_logger(__name__)

router = APIRouter()

NOT_FOUND = {status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}}
BAD_REQUEST = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
TASK_WRITE_BODY = {
    "requestBody": {
        "required": True,
        "content": {"application/json": {"schema": TaskWrite.model_json_schema()}},
    }
}


def get_store(request: Request) -> TaskStore:
    """Return the store the application was built with."""
    return request.app.state.store


async def read_body(request: Request) -> bytes:
    """Return the raw request body, whatever its content type."""
    return await request.body()


def parse_task_write(body: bytes) -> TaskWrite:
    """Decode and validate a raw task payload, raising ValidationError."""
    try:
        return TaskWrite.model_validate_json(body)
    except PydanticValidationError as exc:
        raise ValidationError(describe_validation_errors(exc.errors())) from None


@router.get("/health", response_model=HealthResponse, tags=["System"])
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse()


@router.get("/tasks", response_model=list[Task], tags=["Tasks"])
def list_tasks(store: TaskStore = Depends(get_store)) -> list[Task]:
    """List all tasks."""
    return store.list_all()


@router.post(
    "/tasks",
    response_model=Task,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
    openapi_extra=TASK_WRITE_BODY,
    tags=["Tasks"],
)
def create_task(
    body: bytes = Depends(read_body),
    store: TaskStore = Depends(get_store),
) -> Task:
    """Create a new task from a JSON body, sent with any content type."""
    return store.create(parse_task_write(body))


@router.get("/tasks/{task_id}", response_model=Task, responses=NOT_FOUND, tags=["Tasks"])
def get_task(task_id: str, store: TaskStore = Depends(get_store)) -> Task:
    """Get a specific task by ID."""
    return store.get(task_id)


@router.put(
    "/tasks/{task_id}",
    response_model=Task,
    responses={**NOT_FOUND, **BAD_REQUEST},
    openapi_extra=TASK_WRITE_BODY,
    tags=["Tasks"],
)
def update_task(
    task_id: str,
    body: bytes = Depends(read_body),
    store: TaskStore = Depends(get_store),
) -> Task:
    """Replace an existing task.

    An unknown ID is reported before the body is looked at.
    """
    store.get(task_id)
    data = parse_task_write(body)
    return store.update(task_id, data)


@router.delete(
    "/tasks/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=NOT_FOUND,
    tags=["Tasks"],
)
def delete_task(task_id: str, store: TaskStore = Depends(get_store)) -> None:
    """Delete a task."""
    store.delete(task_id)


def create_app(store: TaskStore | None = None) -> FastAPI:
    """Create the FastAPI app around a task store.

    Args:
        store: Store to serve. A new empty store is created when omitted.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Task API",
        description="Create, list, update and delete tasks held in memory.",
        version=__version__,
    )
    app.state.store = store if store is not None else TaskStore()

    @app.middleware("http")
    async def correlation_id_middleware(request: Request, call_next) -> Response:
        with correlation_scope(request.headers.get(CORRELATION_ID_HEADER)) as cid:
            started = time.perf_counter()
            response = await call_next(request)
            response.headers[CORRELATION_ID_HEADER] = cid
            logger.info(
                "request completed",
                extra={
                    "extra_fields": {
                        "method": request.method,
                        "path": request.url.path,
                        "status": response.status_code,
                        "duration_ms": round((time.perf_counter() - started) * 1000, 2),
                    }
                },
            )
            return response

    @app.exception_handler(TaskAPIError)
    async def task_api_error_handler(request: Request, exc: TaskAPIError) -> JSONResponse:
        logger.warning(
            "request rejected",
            extra={"extra_fields": {"status": exc.status_code, "error": exc.message}},
        )
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return await task_api_error_handler(
            request, ValidationError(describe_validation_errors(exc.errors()))
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=exc.headers,
        )

    app.include_router(router)
    return app


app = create_app()
