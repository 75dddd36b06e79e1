from fastapi import APIRouter

from summarize_ai.api.endpoints import summaries

api_router = APIRouter()

api_router.include_router(summaries.router, tags=["Summaries"])
