from __future__ import annotations

import logging
from typing import Any

from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from .models.truck import TruckTypeDefinition
from .truck_catalog import TruckTypeCatalog

logger = logging.getLogger(__name__)


class FirestoreTruckTypeRepository:
    """Firestore-backed truck type source, read once when the service starts."""

    COLLECTION_NAME = "truck_types"

    def __init__(self, project_id: str | None = None, *, client: Any | None = None) -> None:
        self._db = client if client is not None else firestore.Client(project=project_id)
        self._collection = self._db.collection(self.COLLECTION_NAME)

    def load(self) -> TruckTypeCatalog:
        query = self._collection.where(filter=FieldFilter("is_active", "==", True)).order_by(
            "sort_order"
        )
        truck_types = [self._from_firestore_dict(doc.id, doc.to_dict()) for doc in query.stream()]

        logger.info(
            "Loaded truck type catalog",
            extra={"source": f"firestore:{self.COLLECTION_NAME}", "count": len(truck_types)},
        )
        return TruckTypeCatalog(truck_types)

    def _from_firestore_dict(self, doc_id: str, data: dict) -> TruckTypeDefinition:
        """Convert a Firestore document dict to a TruckTypeDefinition."""
        return TruckTypeDefinition(
            name=data.get("name") or doc_id,
            display_name=data.get("display_name"),
            base_price=data["base_price"],
            capacity_kg=data["capacity_kg"],
            max_points=data["max_points"],
            sort_order=data.get("sort_order", 0),
        )


__all__ = ["FirestoreTruckTypeRepository"]
