import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from backend.auth.tokens import TokenStore
from backend.core import config
from backend.core.exceptions import AdoptionError
from backend.core.responses import envelope, fallback_response
from backend.database import Base, engine
from backend.models import adopter, shelter, token, user  # noqa: F401  registers tables
from backend.routes import adopter_routes, auth_routes, shelter_routes

logging.basicConfig(
    level=config.LOG_LEVEL,
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)

API_PREFIX = '/api/v1'
ENDPOINT_NOT_FOUND_MESSAGE = 'Endpoint not found, check if the URL is correct'

config.validate_runtime_config()

app = FastAPI(title='Pet Adoption API')
app.state.token_store = TokenStore(config.load_token_settings())

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)


@app.on_event('startup')
def initialize_database() -> None:
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


def _format_validation_error(error: dict) -> str:
    location = [str(part) for part in error.get('loc', ()) if part not in ('body', 'path', 'query')]
    field = location[-1] if location else 'body'
    return f'"{field}" {error.get("msg", "is invalid")}'


@app.exception_handler(AdoptionError)
async def handle_adoption_error(request: Request, exc: AdoptionError):
    if exc.status_code >= 500:
        logger.error('%s %s failed: %s', request.method, request.url.path, exc.message)
    return envelope(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    messages = [_format_validation_error(error) for error in exc.errors()]
    return envelope(400, messages)


@app.exception_handler(StarletteHTTPException)
async def handle_http_exception(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 404:
        return envelope(404, ENDPOINT_NOT_FOUND_MESSAGE)
    return envelope(exc.status_code, exc.detail)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception('Unhandled error at %s %s', request.method, request.url.path)
    return fallback_response()


@app.get('/')
def root():
    return {'status': 'Pet Adoption API Running'}


app.include_router(auth_routes.router, prefix=f'{API_PREFIX}/auth')
app.include_router(adopter_routes.router, prefix=f'{API_PREFIX}/adopter')
app.include_router(shelter_routes.router, prefix=f'{API_PREFIX}/shelter')


def run() -> None:
    uvicorn.run(
        'backend.main:app',
        host=config.HOST,
        port=config.PORT,
        reload=config.RELOAD,
        log_level=config.LOG_LEVEL.lower(),
    )


if __name__ == '__main__':
    run()
