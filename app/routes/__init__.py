from app.routes.categories import router as categories_router
from app.routes.comments import router as comments_router
from app.routes.posts import router as posts_router

ROUTERS = (posts_router, comments_router, categories_router)

__all__ = ["ROUTERS", "categories_router", "comments_router", "posts_router"]
