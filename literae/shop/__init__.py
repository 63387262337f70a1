from .router import router as shop_router  # noqa: F401
