from .auth import router as auth_router
from .persons import router as persons_router
from .users import router as users_router
from .roles import router as roles_router
from .user_roles import router as user_roles_router
from .rol_form_permissions import router as rol_form_permissions_router
from .change_logs import router as change_logs_router
from .catalogs import catalog_routers

__all__ = [
    "auth_router",
    "persons_router",
    "users_router",
    "roles_router",
    "user_roles_router",
    "rol_form_permissions_router",
    "change_logs_router",
    "catalog_routers",
]
