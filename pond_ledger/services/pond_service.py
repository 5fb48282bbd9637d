"""
Pond service: ponds and the fish types they are stocked with.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session, joinedload

from pond_ledger.exceptions import NotFoundError, ValidationError
from pond_ledger.models.pond import Pond, FishType, DEFAULT_FISH_TYPE_ID
from pond_ledger.models.stock import FeedUsage, SeedStocking, GrowthMonitoring
from pond_ledger.models.transaction import Transaction
from pond_ledger.schemas.pond import PondCreate

logger = logging.getLogger(__name__)


# Records that point at a pond and keep it from being deleted.
POND_REFERENCES = (Transaction, FeedUsage, SeedStocking, GrowthMonitoring)


class PondService:

    def __init__(self, db: Session):
        self.db = db

    def _validate_fish_type(self, fish_type_id: int | None) -> None:
        if fish_type_id is not None and not self.db.get(FishType, fish_type_id):
            raise ValidationError(f"Fish type {fish_type_id} not found")

    def list_ponds(self) -> list[Pond]:
        ponds = self.db.execute(
            select(Pond)
            .options(joinedload(Pond.fish_type))
            .order_by(Pond.name, Pond.id)
        ).scalars().all()
        return list(ponds)

    def get_pond(self, pond_id: int) -> Pond:
        pond = self.db.get(Pond, pond_id)
        if not pond:
            raise NotFoundError("Pond not found")
        return pond

    def create_pond(self, request: PondCreate) -> Pond:
        """Create a pond. Without a fish type it gets the default one."""
        fish_type_id = request.fish_type_id or DEFAULT_FISH_TYPE_ID
        self._validate_fish_type(fish_type_id)

        pond = Pond(
            name=request.name,
            type=request.type,
            fish_type_id=fish_type_id,
            seed_date=request.seed_date,
            seed_count=request.seed_count,
            estimated_harvest_date=request.estimated_harvest_date,
        )
        self.db.add(pond)
        self.db.flush()
        logger.info("Created pond %s (%s)", pond.id, pond.name)
        return pond

    def update_pond(self, pond_id: int, request: PondCreate) -> Pond:
        pond = self.get_pond(pond_id)
        self._validate_fish_type(request.fish_type_id)

        pond.name = request.name
        pond.type = request.type
        pond.fish_type_id = request.fish_type_id
        pond.seed_date = request.seed_date
        pond.seed_count = request.seed_count
        pond.estimated_harvest_date = request.estimated_harvest_date
        self.db.flush()
        self.db.refresh(pond)
        return pond

    def delete_pond(self, pond_id: int) -> None:
        pond = self.get_pond(pond_id)

        for model in POND_REFERENCES:
            count = self.db.execute(
                select(func.count())
                .select_from(model)
                .where(model.pond_id == pond_id)
            ).scalar()
            if count:
                raise ValidationError(
                    f"Pond {pond_id} has {model.__tablename__} records "
                    f"and cannot be deleted"
                )

        self.db.delete(pond)
        self.db.flush()
        logger.info("Deleted pond %s", pond_id)
