import fastapi
from . import auth, health, users

def include_routers(app: fastapi.FastAPI) -> fastapi.FastAPI:
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    return app
