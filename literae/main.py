# literae/main.py
import logging
from typing import List

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from .catalog import catalog_router
from .models import LoginRequest, LoginResponse, Profile
from .settings import settings
from .shop import shop_router
from .storage import BookshopStore, get_store

logger = logging.getLogger(__name__)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """Reject browser requests whose Origin is not explicitly allowed.

    Requests without an Origin header (curl, server-to-server) pass.
    """

    def __init__(self, app, allowed_origins: List[str]):
        super().__init__(app)
        self.allowed_origins = set(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin and origin not in self.allowed_origins:
            logger.warning("Rejected request from origin %s", origin)
            return JSONResponse(status_code=403, content={"error": "Not allowed by CORS"})
        return await call_next(request)


app = FastAPI(
    title="Literae Bookstore API",
    description=(
        "Backend for the Literae bookstore: demo login and profiles, "
        "a Google Books proxy, and per-user bookmarks and carts held in memory."
    ),
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
# Added last so it runs before CORSMiddleware, preflights included
app.add_middleware(OriginAllowListMiddleware, allowed_origins=settings.CORS_ORIGINS)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


app.include_router(catalog_router)
app.include_router(shop_router)


@app.get("/", response_class=PlainTextResponse)
def health_check():
    return "API is running"


@app.post("/login", response_model=LoginResponse)
def login(req: LoginRequest, store: BookshopStore = Depends(get_store)):
    user = store.get_user_by_username(req.username)
    if user is None:
        raise HTTPException(status_code=401, detail="Username not found")
    if user.password != req.password:
        raise HTTPException(status_code=401, detail="Incorrect password")
    return LoginResponse(id=user.id, username=user.username)


@app.get("/profile/{user_id}", response_model=Profile)
def get_profile(user_id: int, store: BookshopStore = Depends(get_store)):
    profile = store.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile


def run() -> None:
    """Serve the API with uvicorn on ``HOST``:``PORT``."""
    import uvicorn

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Server running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
