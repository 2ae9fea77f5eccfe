"""
Address search endpoints.

``GET /search?searchWord=...`` returns the places matching a keyword
(road-name address, lot-number address, place name) and stores them in
the caller's history.  Clicking a result marks it as the final choice;
the latest clicked result is served by ``/search/recent``.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path, Query

from restroom_finder_api.app.core.db import MAX_ID
from restroom_finder_api.app.core.responses import success
from restroom_finder_api.app.core.security import get_current_user
from restroom_finder_api.app.schemas.common import ApiResponse, ErrorResponse
from restroom_finder_api.app.schemas.search import SearchRead
from restroom_finder_api.app.services.search_service import SearchService

router = APIRouter()


@router.get(
    "/search",
    response_model=ApiResponse[List[SearchRead]],
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
    summary="Search addresses by keyword",
)
async def search_address(
    search_word: str = Query(..., alias="searchWord", description="Keyword to search"),
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    return success(await SearchService.search_address(current_user["user_id"], search_word))


@router.get(
    "/search/recent",
    response_model=ApiResponse[SearchRead],
    responses={404: {"model": ErrorResponse}},
    summary="Most recently clicked search result",
)
async def recent_search(current_user: dict = Depends(get_current_user)) -> Dict[str, Any]:
    return success(await SearchService.get_recent_search(current_user["user_id"]))


@router.post(
    "/search/click/{search_id}",
    response_model=ApiResponse[str],
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Mark a search result as clicked",
)
async def click_search(
    search_id: int = Path(..., ge=1, le=MAX_ID, description="Search ID (integer >= 1)"),
    current_user: dict = Depends(get_current_user),
) -> Dict[str, Any]:
    await SearchService.click_search(current_user["user_id"], search_id)
    return success("Search result marked as clicked")
