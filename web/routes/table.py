"""Table inspection and reload routes."""

from fastapi import APIRouter, HTTPException

from csv_localize.errors import SourceUnavailable, MalformedSource, SourceNotAllowed
from web.models import TableInfo, MissingTranslation, ReloadRequest
from web.service import table_info, missing_translations, reload

router = APIRouter(tags=["table"])


@router.get("/table", response_model=TableInfo)
def get_table():
    return table_info()


@router.get("/table/missing", response_model=list[MissingTranslation])
def get_missing():
    return missing_translations()


@router.post("/reload", response_model=TableInfo)
def post_reload(req: ReloadRequest | None = None):
    req = req or ReloadRequest()
    try:
        return reload(req.source, req.fallback_enabled, req.language)
    except SourceNotAllowed as e:
        raise HTTPException(403, str(e))
    except SourceUnavailable as e:
        raise HTTPException(404, str(e))
    except MalformedSource as e:
        raise HTTPException(422, str(e))
