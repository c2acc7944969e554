from __future__ import annotations

import logging
import os
from pathlib import Path

from moving_estimator.api import create_app
from moving_estimator.calculator import EstimateCalculator
from moving_estimator.config import load_pricing_config
from moving_estimator.logging_config import setup_logging
from moving_estimator.truck_catalog import (
    LocalTruckTypeRepository,
    StaticTruckTypeRepository,
    TruckTypeRepository,
)

# Environment configuration
ENVIRONMENT = os.getenv("ENVIRONMENT", "dev")
PROJECT_ID = os.getenv("PROJECT_ID")
TRUCK_TYPES_SOURCE = os.getenv("TRUCK_TYPES_SOURCE", "defaults")
TRUCK_TYPES_PATH = os.getenv("TRUCK_TYPES_PATH", "data/truck_types.json")

setup_logging(environment=ENVIRONMENT, project_id=PROJECT_ID)
logger = logging.getLogger(__name__)


def _truck_type_repository() -> TruckTypeRepository:
    if TRUCK_TYPES_SOURCE == "firestore":
        from moving_estimator.firestore_truck_catalog import FirestoreTruckTypeRepository

        return FirestoreTruckTypeRepository(project_id=PROJECT_ID)
    if TRUCK_TYPES_SOURCE == "file":
        return LocalTruckTypeRepository(file_path=Path(TRUCK_TYPES_PATH).resolve())
    return StaticTruckTypeRepository()


# Catalog and pricing config are read once and stay fixed for the process lifetime
catalog = _truck_type_repository().load()
pricing_config = load_pricing_config()
logger.info(
    "Starting estimate service",
    extra={"environment": ENVIRONMENT, "truck_types": catalog.names()},
)

app = create_app(EstimateCalculator(catalog=catalog, config=pricing_config))
