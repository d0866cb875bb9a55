"""API and page routes."""

from fastapi import APIRouter

from feuerwehr.routes import admin, api, site

api_router = APIRouter()

# Public JSON endpoints (widgets, forms)
api_router.include_router(api.router, prefix="/api", tags=["api"])

# Admin endpoints (content management, token protected)
api_router.include_router(admin.router, prefix="/api/admin", tags=["admin"])

# HTML pages (catch-all category routes, keep last)
site_router = site.router
