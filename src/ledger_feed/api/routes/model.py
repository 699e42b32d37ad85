import asyncio
from typing import Annotated

from fastapi import APIRouter, Depends

from ledger_feed.api.dependencies import get_model_store, get_model_store_optional
from ledger_feed.api.schemas import HealthResponse
from ledger_feed.classifiers.store import ModelStore

router = APIRouter()


@router.get("/categories")
async def get_categories(
    store: Annotated[ModelStore, Depends(get_model_store)],
) -> list[str]:
    classifier = await asyncio.to_thread(store.get)
    return sorted(classifier.labels)


@router.get("/health", response_model=HealthResponse)
async def health(
    store: Annotated[ModelStore | None, Depends(get_model_store_optional)],
) -> HealthResponse:
    return HealthResponse(status="ok", model_loaded=bool(store and store.is_loaded))
