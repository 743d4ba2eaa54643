"""Health probes."""
from fastapi import APIRouter
from pydantic import BaseModel

from cardstack.config import runtime_config

router = APIRouter(tags=["system"])


class HealthStatus(BaseModel):
    status: str
    version: str = "0.1.0"
    env: str = "dev"


@router.get("/health", response_model=HealthStatus)
def health_check():
    return HealthStatus(status="ok", env=runtime_config.get_env())


@router.get("/ready", response_model=HealthStatus)
def readiness_check():
    # process is up; the store is not probed
    return HealthStatus(status="ok", env=runtime_config.get_env())
