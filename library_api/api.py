import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import List, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from library_api import handlers
from library_api.config import Settings, settings as default_settings, setup_logging
from library_api.database import initialize_database
from library_api.auth import get_principal
from library_api.exceptions import StorageError
from library_api.library import Library
from library_api.results import BadRequest, Created, NoContent, NotFound, Ok, Result
from library_api.schemas import BookModel, HealthModel, ValidationErrorModel, dump_books
from library_api.store import BookStore

logger = logging.getLogger(__name__)

TAG = "Books"


def render(result: Result) -> Response:
    """Turn a handler ``Result`` into an HTTP response."""
    if isinstance(result, Created):
        return JSONResponse(
            status_code=result.status_code,
            content=BookModel.from_book(result.body).model_dump(mode="json", by_alias=True),
            headers={"Location": result.location},
        )
    if isinstance(result, Ok):
        if isinstance(result.body, list):
            content = dump_books(result.body)
        else:
            content = BookModel.from_book(result.body).model_dump(mode="json", by_alias=True)
        return JSONResponse(status_code=result.status_code, content=content)
    if isinstance(result, BadRequest):
        return JSONResponse(
            status_code=result.status_code,
            content=[v.to_dict() for v in result.violations],
        )
    if isinstance(result, (NotFound, NoContent)):
        return Response(status_code=result.status_code)
    raise TypeError(f"Unknown result type: {type(result).__name__}")


def register_book_routes(app: FastAPI, library: Library) -> None:
    """Mount the /books endpoints, bound to ``library``."""
    router = APIRouter(
        prefix=handlers.BASE_ROUTE,
        tags=[TAG],
        dependencies=[Depends(get_principal)],
    )
    bad_request = {400: {"model": List[ValidationErrorModel]}}

    @router.post("", name="CreateBook", status_code=201, response_model=BookModel,
                 responses=bad_request)
    def create_book(payload: BookModel):
        """Add a new book to the catalog."""
        return render(handlers.create_book(payload.to_book(), library))

    @router.get("", name="GetBooks", response_model=List[BookModel])
    def get_books(search_term: Optional[str] = Query(None, alias="searchTerm")):
        """List every book, or those whose title contains ``searchTerm``."""
        return render(handlers.get_books(library, search_term))

    @router.get("/{isbn}", name="GetBook", response_model=BookModel, responses={404: {}})
    def get_book(isbn: str):
        """Get a single book by ISBN."""
        return render(handlers.get_book(isbn, library))

    @router.put("/{isbn}", name="UpdateBook", response_model=BookModel,
                responses={**bad_request, 404: {}})
    def update_book(isbn: str, payload: BookModel):
        """Replace a book's fields. The ISBN in the path wins over the body."""
        return render(handlers.update_book(isbn, payload.to_book(), library))

    @router.delete("/{isbn}", name="DeleteBook", status_code=204, responses={404: {}})
    def delete_book(isbn: str):
        """Remove a book from the catalog."""
        return render(handlers.delete_book(isbn, library))

    app.include_router(router)


def register_health_routes(app: FastAPI, library: Library) -> None:
    @app.get("/health", response_model=HealthModel, include_in_schema=False)
    def health():
        """Liveness probe with a quick database round trip."""
        db_ok = True
        total_books = 0
        try:
            total_books = library.store.count()
        except StorageError:
            logger.warning("Health check could not reach the database")
            db_ok = False
        return HealthModel(
            status="healthy" if db_ok else "degraded",
            timestamp=datetime.now(timezone.utc).isoformat(),
            total_books=total_books,
            db=db_ok,
        )


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    logger.error("Storage fault on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"detail": "Storage unavailable"})


def create_app(app_settings: Optional[Settings] = None, library: Optional[Library] = None) -> FastAPI:
    """Build the FastAPI application.

    Everything the routes need is passed in here; tests hand in their own
    ``Settings`` (and optionally a ``Library``) instead of touching globals.
    """
    app_settings = app_settings or default_settings
    setup_logging(app_settings.log_level, app_settings.log_file)

    if library is None:
        library = Library(BookStore(app_settings.database_file, app_settings.database_timeout))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        initialize_database(library.store.db_file, library.store.timeout)
        yield

    app = FastAPI(
        title=app_settings.app_name,
        version=app_settings.app_version,
        debug=app_settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.library = library

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorageError, storage_error_handler)

    # Every route group is listed here explicitly
    register_health_routes(app, library)
    register_book_routes(app, library)

    return app
