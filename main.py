import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from routers.banks import router as banks_router
from routers.health import router as health_router
from routers.parse import router as parse_router
from routers.samples import router as samples_router

logger = logging.getLogger("qbank-api")
logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title="Question Bank Parser API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*", "x-api-key", "x-admin-token"],
)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(parse_router)  # /parse, /parse/quiz
app.include_router(banks_router)  # /banks/...
app.include_router(samples_router)  # /samples/...
app.include_router(health_router)  # /health/...
