from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from sqladmin import Admin

from app.admin.auth import AdminAuth
from app.admin.router import router as admin_router
from app.admin.views import CONSOLE_VIEWS
from app.auth.router import router as auth_router
from app.catalog.router import router as catalog_router
from app.core.constants import CONSOLE_BASE_URL
from app.core.cors import add_cors_middleware
from app.core.email import init_resend
from app.core.exception_handlers import register_exception_handlers
from app.core.firebase import init_firebase
from app.core.logging import configure_logging
from app.core.request_logging import add_request_logging_middleware
from app.db.engine import engine
from app.health.router import router as health_router
from app.uploads.router import router as uploads_router
from app.user.router import router as user_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_firebase()
    init_resend()
    yield


app = FastAPI(title="Labsy", version="0.1.0", lifespan=lifespan)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(admin_router)
api_router.include_router(catalog_router)
api_router.include_router(uploads_router)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Back-office console; /admin is taken by the admin REST API
console = Admin(
    app=app,
    engine=engine,
    base_url=CONSOLE_BASE_URL,
    title="Labsy Console",
    authentication_backend=AdminAuth(),
)
for view in CONSOLE_VIEWS:
    console.add_view(view)
