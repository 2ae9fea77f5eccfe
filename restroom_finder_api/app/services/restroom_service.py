"""Business logic for restrooms."""

import logging

from ..core.db import transaction
from ..core.exceptions import RestroomNotFoundError
from ..models.restroom import Restroom
from ..repositories.restroom_repository import RestroomRepository
from ..schemas.restroom import RestroomCreate, RestroomRead

logger = logging.getLogger(__name__)


def to_restroom_read(restroom: Restroom) -> RestroomRead:
    return RestroomRead(
        restroom_id=restroom.id,
        name=restroom.name,
        address=restroom.address,
        latitude=restroom.latitude,
        longitude=restroom.longitude,
        average_rating=restroom.average_rating,
    )


class RestroomService:
    @classmethod
    async def get_restroom(cls, restroom_id: int) -> RestroomRead:
        with transaction() as conn:
            restroom = RestroomRepository(conn).find_by_id(restroom_id)
        if restroom is None:
            raise RestroomNotFoundError(f"Restroom {restroom_id} not found")
        return to_restroom_read(restroom)

    @classmethod
    async def create_restroom(cls, data: RestroomCreate) -> RestroomRead:
        """Register a restroom.  New restrooms start with an average of 0."""
        with transaction() as conn:
            restroom = RestroomRepository(conn).save(
                name=data.name.strip(),
                address=data.address,
                latitude=data.latitude,
                longitude=data.longitude,
            )
        logger.info("Registered restroom %s (%s)", restroom.id, restroom.name)
        return to_restroom_read(restroom)
