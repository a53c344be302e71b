from dataclasses import dataclass
from typing import Optional, Union

from outfit_draw.database import Database
from outfit_draw.models import OutfitRecord
from outfit_draw.schemas import RecordResponse

# SQLite INTEGER is a signed 64-bit value
MAX_RECORD_ID = 2**63 - 1


def parse_record_id(value: Union[int, str]) -> Optional[int]:
    """Record id as an int, or None when it cannot name a stored row."""
    try:
        record_id = int(value)
    except (TypeError, ValueError):
        return None
    if not 0 < record_id <= MAX_RECORD_ID:
        return None
    return record_id


@dataclass
class RecordStore:
    """
    Per-user outfit records.

    Every query is scoped by user_id, so a record is never visible to or
    deletable by anyone but its owner.
    """

    database: Database

    def list(self, user_id: int) -> list[RecordResponse]:
        """Records owned by user_id, newest first."""
        with self.database.session() as db:
            rows = (
                db.query(OutfitRecord)
                .filter(OutfitRecord.user_id == user_id)
                .order_by(OutfitRecord.id.desc())
                .all()
            )
            return [RecordResponse.model_validate(row) for row in rows]

    def create(
        self,
        user_id: int,
        date: Optional[str],
        style: Optional[str],
        image: Optional[str],
        note: Optional[str],
    ) -> int:
        """Insert one record and return its id."""
        record = OutfitRecord(
            user_id=user_id,
            date=date or "",
            style=style or "",
            image=image or None,
            note=note or "",
        )
        with self.database.session() as db:
            db.add(record)
            db.commit()
            return record.id

    def delete(self, user_id: int, record_id: Union[int, str]) -> int:
        """
        Delete a record if user_id owns it.

        Returns the number of rows removed; 0 for unknown, foreign or
        malformed ids.
        """
        parsed = parse_record_id(record_id)
        if parsed is None:
            return 0
        with self.database.session() as db:
            deleted = db.query(OutfitRecord).filter(
                OutfitRecord.id == parsed,
                OutfitRecord.user_id == user_id,
            ).delete()
            db.commit()
            return deleted
