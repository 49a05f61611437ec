"""
PC Recommender API - FastAPI Main Entry

✅ LOCAL:
    cd backend
    pip install -e ..
    python -m uvicorn pc_recommender.main:app --reload --host 0.0.0.0 --port 8000

✅ TEST:
    curl -i http://127.0.0.1:8000/health
    curl -i http://127.0.0.1:8000/v1/options
    curl -i "http://127.0.0.1:8000/v1/recommend?budget=700-999&storage=1tb"
    curl -i -X POST http://127.0.0.1:8000/v1/recommend \
        -H "Content-Type: application/json" \
        -d '{"budget_range": "1500plus", "storage_tier": "2tb"}'

✅ ENV (backend/.env):
    CANOPY_API_KEY=...
    CANOPY_BASE_URL=https://...
    Without them the API serves the built-in fallback candidates (used_mock_data=true).

✅ PRODUCTION:
    python -m uvicorn pc_recommender.main:app --host 0.0.0.0 --port $PORT
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pc_recommender.api.routes_meta import router as meta_router
from pc_recommender.api.routes_recommend import router as recommend_router
from pc_recommender.core.config import settings


def create_app() -> FastAPI:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title="PC Recommender API",
        version=settings.APP_VERSION,
        description="Recommends prebuilt desktop PCs from Amazon listings (budget + storage preferences)",
    )

    # ✅ CORS
    # NOTE: the web form runs on a different origin than the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ✅ Root (GET /)
    @app.get("/")
    def root():
        return {
            "name": "PC Recommender API",
            "status": "ok",
            "docs": "/docs",
            "health": "/health",
            "version": "/version",
            "recommend": "/v1/recommend",
        }

    # ✅ Health Check (GET /health)
    @app.get("/health")
    def health():
        return {"ok": True}

    # ✅ Mount routers
    app.include_router(meta_router)
    app.include_router(recommend_router)

    return app


app = create_app()
