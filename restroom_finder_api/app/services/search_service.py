"""
Address search and search history.

Each search stores the returned places for the user.  When the user
picks one of them the row is marked clicked; the latest clicked row is
the user's recent search.
"""

import logging
from typing import List, Optional

from ..clients.address_client import AddressSearchClient
from ..core.config import settings
from ..core.db import transaction
from ..core.exceptions import AuthError, MissingParameterError, SearchNotFoundError
from ..models.search import Search
from ..repositories.search_repository import SearchRepository
from ..schemas.search import SearchRead

logger = logging.getLogger(__name__)


def to_search_read(search: Search) -> SearchRead:
    return SearchRead(
        search_id=search.id,
        search_word=search.search_word,
        name=search.name,
        road_address=search.road_address,
        lot_address=search.lot_address,
        latitude=search.latitude,
        longitude=search.longitude,
        clicked=search.clicked,
    )


class SearchService:
    @classmethod
    async def search_address(
        cls,
        user_id: int,
        search_word: str,
        client: Optional[AddressSearchClient] = None,
    ) -> List[SearchRead]:
        """Query the address API and remember the results for the user.

        A ``client`` passed in is used as is and left open; otherwise a
        client is created for this search and closed afterwards.
        """
        search_word = (search_word or "").strip()
        if not search_word:
            raise MissingParameterError("searchWord must not be blank")
        if client is not None:
            results = client.search(search_word, settings.address_search_count)
        else:
            with AddressSearchClient() as client:
                results = client.search(search_word, settings.address_search_count)

        with transaction() as conn:
            searches = SearchRepository(conn)
            stored = [
                searches.save(
                    user_id=user_id,
                    search_word=search_word,
                    name=result.name,
                    road_address=result.road_address,
                    lot_address=result.lot_address,
                    latitude=result.latitude,
                    longitude=result.longitude,
                )
                for result in results
            ]
        logger.info("User %s searched %r (%s results)", user_id, search_word, len(stored))
        return [to_search_read(search) for search in stored]

    @classmethod
    async def get_recent_search(cls, user_id: int) -> SearchRead:
        with transaction() as conn:
            search = SearchRepository(conn).find_latest_clicked_by_user(user_id)
        if search is None:
            raise SearchNotFoundError(f"No recent search for user {user_id}")
        return to_search_read(search)

    @classmethod
    async def click_search(cls, user_id: int, search_id: int) -> None:
        """Mark one of the user's search results as picked."""
        with transaction() as conn:
            searches = SearchRepository(conn)
            search = searches.find_by_id(search_id)
            if search is None:
                raise SearchNotFoundError(f"Search {search_id} not found")
            if search.user_id != user_id:
                raise AuthError("This search belongs to another user")
            searches.mark_clicked(search_id)
        logger.info("User %s clicked search %s", user_id, search_id)
