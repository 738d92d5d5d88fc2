"""Key resolution routes."""

from fastapi import APIRouter

from web.models import Translation, ResolveRequest, ResolveResponse
from web.service import resolve_key, resolve_keys

router = APIRouter(prefix="/translations", tags=["translations"])


@router.post("/resolve", response_model=ResolveResponse)
def post_resolve(req: ResolveRequest):
    return resolve_keys(req.keys)


@router.get("/{key:path}", response_model=Translation)
def get_translation(key: str):
    return resolve_key(key)
