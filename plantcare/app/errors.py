from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

# Store adapters use PyMySQL, so its base error types are the ones that can escape.
from pymysql import MySQLError
from pymysql.err import Error as PyMySQLError


GENERIC_DB_ERROR_MESSAGE = "Database error. Please try again later."
STORE_UNAVAILABLE_MESSAGE = "Plant data is temporarily unavailable. Please retry."


class PlantCareError(Exception):
    """Base class for plant-care failures."""


class PersistenceFailure(PlantCareError):
    """Raised when a store could not complete a read or a write."""


class NotFound(PlantCareError):
    """Raised when a requested plant or collection entry does not exist."""


def register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    - NotFound -> 404 with the error message.
    - PersistenceFailure -> 503 so clients can tell "retry" apart from "no data".
    - Raw DB driver exceptions -> 500 with a generic message.
    - HTTPException handling provided by FastAPI is left untouched.
    """

    @app.exception_handler(NotFound)
    async def not_found_handler(request: Request, exc: NotFound) -> JSONResponse:
        return JSONResponse(status_code=404, content={"detail": str(exc) or "Not found"})

    @app.exception_handler(PersistenceFailure)
    async def persistence_failure_handler(request: Request, exc: PersistenceFailure) -> JSONResponse:
        return JSONResponse(status_code=503, content={"detail": STORE_UNAVAILABLE_MESSAGE})

    @app.exception_handler(MySQLError)
    async def mysql_error_handler(request: Request, exc: Exception) -> JSONResponse:  # noqa: ANN001
        return JSONResponse(status_code=500, content={"detail": GENERIC_DB_ERROR_MESSAGE})

    @app.exception_handler(PyMySQLError)
    async def pymysql_error_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:  # noqa: ANN001
        return JSONResponse(status_code=500, content={"detail": GENERIC_DB_ERROR_MESSAGE})
