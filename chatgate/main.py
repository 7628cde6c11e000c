# Run from project root: uvicorn chatgate.main:app --reload

import logging

from fastapi import FastAPI

from chatgate.api.routes import router

logging.basicConfig(level=logging.INFO)


# No docs/openapi routes: every path sits behind the shared secret.
app = FastAPI(
    title="Search-augmented Chat Gateway",
    docs_url=None,
    redoc_url=None,
    openapi_url=None,
)
app.include_router(router)
