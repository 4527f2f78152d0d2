import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.core import config
from backend.database import create_engine, create_sessionmaker, init_db
from backend.routes import appointment_routes, health_routes, setting_routes, user_routes

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info('Rejected %s %s: %s', request.method, request.url.path, exc.errors())
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={'error': 'Invalid request'})


def create_app(database_url: str | None = None) -> FastAPI:
    """Build the API application.

    The store handle lives for the duration of the lifespan: the engine is
    created and the schema initialized before the first request, and disposed
    on shutdown. Initialization errors propagate so the server never starts
    against a broken store.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_engine(database_url or config.DATABASE_URL)
        try:
            await init_db(engine)
        except Exception:
            logger.exception('Database initialization failed. Check DATABASE_URL.')
            await engine.dispose()
            raise

        app.state.engine = engine
        app.state.session_factory = create_sessionmaker(engine)
        logger.info('Clinic API ready (%s)', config.APP_ENV)

        try:
            yield
        finally:
            logger.info('Shutting down Clinic API')
            await engine.dispose()

    app = FastAPI(title='Clinic API', lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=['*'],
        allow_methods=['*'],
        allow_headers=['*'],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)

    app.include_router(user_routes.router, prefix='/api/users')
    app.include_router(appointment_routes.router, prefix='/api/appointments')
    app.include_router(setting_routes.router, prefix='/api/settings')
    app.include_router(health_routes.router, prefix='/api')

    return app


app = create_app()


def run() -> None:
    config.validate_runtime_config()
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    port = config.get_port()
    logger.info('Starting %s server on %s:%d', config.APP_ENV, config.HOST, port)
    uvicorn.run(app, host=config.HOST, port=port, log_level=config.LOG_LEVEL.lower())


if __name__ == '__main__':
    run()
