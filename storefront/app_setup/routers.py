"""
Registre central des routers (API v1, admin, health).
"""
from fastapi import FastAPI
from storefront.checkout import views as checkout_views
from storefront.projects import views as projects_views
from storefront.leads import views as leads_views
from storefront.favorites import views as favorites_views
from storefront.styles import views as styles_views
from storefront.admin.views import router as admin_router
from storefront.health.router import router as health_router

def register_routers(app: FastAPI) -> None:
    # API v1
    app.include_router(checkout_views.router)
    app.include_router(projects_views.router)
    app.include_router(leads_views.router)
    app.include_router(favorites_views.router)
    app.include_router(styles_views.router)
    # Admin
    app.include_router(admin_router)
    # Health & monitoring
    app.include_router(health_router)
