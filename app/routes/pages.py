import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.exceptions import PageNotFoundError
from app.schemas.page import (
    LanguageContextResponse,
    LanguageModeFieldDefinition,
    LanguageModeUpdate,
    PageTranslationResponse,
    PageViewResponse,
)
from app.services import page_service
from app.services.mode_cache import ModeCache

logger = logging.getLogger(__name__)

router = APIRouter()
api_router = APIRouter()


def get_mode_cache(request: Request) -> ModeCache:
    return request.app.state.mode_cache


@router.get("/page/{page_id}", response_model=PageViewResponse)
@router.get("/{language_base}/page/{page_id}", response_model=PageViewResponse)
async def view_page(page_id: int, request: Request, db: AsyncSession = Depends(get_db)):
    """Show a page with the language configuration it is rendered in."""
    language = request.state.language

    page = await page_service.get_page(page_id, db)
    if page is None or page.is_translation:
        raise PageNotFoundError(page_id)

    title = page.title
    if language.language_id > 0:
        translation = await page_service.get_translation(page_id, language.language_id, db)
        if translation is not None:
            title = translation.title

    return PageViewResponse(
        page_id=page_id,
        title=title,
        language=LanguageContextResponse(
            language_id=language.language_id,
            locale=language.locale,
            base=language.base,
            title=language.title,
            fallback_type=language.fallback_type,
        ),
    )


@api_router.get("/pages/l10n-mode/options", response_model=LanguageModeFieldDefinition)
async def language_mode_options(request: Request):
    """Editor field definition for the per-translation language mode."""
    return page_service.language_mode_field(request.app.state.mode_resolver.automatic_mode)


@api_router.put(
    "/pages/{page_id}/translations/{language_id}/l10n-mode",
    response_model=PageTranslationResponse,
)
async def update_language_mode(
    page_id: int,
    language_id: int,
    payload: LanguageModeUpdate,
    db: AsyncSession = Depends(get_db),
    cache: ModeCache = Depends(get_mode_cache),
):
    return await page_service.update_language_mode(page_id, language_id, payload.l10n_mode, db, cache)
