from fastapi import HTTPException, Request

from ledger_feed.classifiers.store import ModelStore


def get_model_store(request: Request) -> ModelStore:
    store = getattr(request.app.state, "model_store", None)
    if not store:
        raise HTTPException(status_code=500, detail="Service not initialized")
    return store


def get_model_store_optional(request: Request) -> ModelStore | None:
    return getattr(request.app.state, "model_store", None)
