import yaml
from fastapi import FastAPI
from shareit.infrastructure.database import Base, engine
from shareit.infrastructure.logging_config import configure_logging
from shareit.presentation.routers import router

app = FastAPI(title="shareit")


# Use the contractual schema
def custom_openapi():
    from shareit.infrastructure.config import settings
    if app.openapi_schema is None:
        with open(settings.openapi_path, encoding="utf-8") as f:
            app.openapi_schema = yaml.safe_load(f)
    return app.openapi_schema


configure_logging()
app.openapi = custom_openapi
Base.metadata.create_all(bind=engine)
app.include_router(router)
