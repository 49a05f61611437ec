import os

from fastapi import APIRouter, Depends

from pc_recommender.core.config import Settings, get_settings

router = APIRouter(tags=["meta"])


@router.get("/version")
def version(settings: Settings = Depends(get_settings)):
    return {
        "version": settings.APP_VERSION,
        "build": settings.BUILD_ID,
        "git_commit": os.environ.get("RENDER_GIT_COMMIT"),
        "service_id": os.environ.get("RENDER_SERVICE_ID"),
    }
