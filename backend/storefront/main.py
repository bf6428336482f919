from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.health import router as health_router
from storefront.api.routes_admin import router as admin_router
from storefront.api.routes_catalogue import router as catalogue_router
from storefront.api.routes_categories import router as categories_router
from storefront.api.routes_sitemap import router as sitemap_router
from storefront.config import settings
from storefront.db import init_db
from storefront.logging_config import configure_logging

configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; set RESET_DB=1 to drop & recreate tables
    init_db(reset=settings.RESET_DB)
    yield


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(categories_router, tags=["categories"])

app.include_router(admin_router, tags=["admin"])

app.include_router(sitemap_router, tags=["sitemap"])


def run():
    import uvicorn

    uvicorn.run("storefront.main:app", host=settings.APP_HOST, port=settings.APP_PORT)


if __name__ == "__main__":
    run()
