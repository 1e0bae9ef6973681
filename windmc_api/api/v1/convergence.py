"""Monte Carlo convergence study endpoints."""

import logging

from fastapi import APIRouter, HTTPException, status

from windmc.errors import ConfigurationError
from windmc.simulation import run_experiment
from windmc_api.config import settings
from windmc_api.schemas.convergence import ConvergenceRequest, ConvergenceResponse

router = APIRouter()

logger = logging.getLogger(__name__)


@router.get(
    "/defaults",
    response_model=ConvergenceRequest,
    summary="Default study configuration",
    description="The configured two-farm study, usable as a request body for POST /convergence.",
)
def get_defaults() -> ConvergenceRequest:
    return ConvergenceRequest.from_settings(settings)


@router.post(
    "",
    response_model=ConvergenceResponse,
    summary="Run convergence study",
    description="Estimate expected portfolio power at each checkpoint and compare with the reference expectation.",
)
def run_convergence(body: ConvergenceRequest) -> ConvergenceResponse:
    # CPU-bound; FastAPI runs sync handlers in its threadpool.
    budget = body.total_scenarios()
    if budget > settings.max_total_scenarios:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
            detail=(
                f"Study needs {budget} scenarios, above the limit of "
                f"{settings.max_total_scenarios}"
            ),
        )

    try:
        config = body.to_experiment_config()
        result = run_experiment(config)
    except ConfigurationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_CONTENT, detail=str(e))

    logger.info("Convergence study finished: %d checkpoints", len(result.points))
    return ConvergenceResponse.from_result(result)
