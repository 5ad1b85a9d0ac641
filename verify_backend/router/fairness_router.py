from fastapi import APIRouter, Depends, HTTPException
from typing import List

from verify_backend.config import get_logger, mask_seed, settings
from verify_backend.models.schemas import (
    CommitmentRequest,
    CommitmentResponse,
    GridConfigurationSchema,
    OutcomeRequest,
    OutcomeResponse,
    OutcomesRequest,
    OutcomesResponse,
)
from verify_backend.service import fairness_service, grid_service
from verify_backend.service.fairness_service import HashScheme

# Initialize router
router = APIRouter(
    prefix="/fairness",
    tags=["fairness"],
)

# Initialize logger
logger = get_logger(__name__)


def get_hash_scheme() -> HashScheme:
    """Hash convention configured for this deployment."""
    try:
        return HashScheme(algorithm=settings.hash_algorithm, prefix_chars=settings.hash_prefix_chars)
    except ValueError as e:
        logger.error(f"Invalid hash configuration: {e}")
        raise HTTPException(status_code=500, detail=f"Invalid hash configuration: {str(e)}")


@router.post("/commitment", response_model=CommitmentResponse)
async def verify_commitment(
    request: CommitmentRequest,
    scheme: HashScheme = Depends(get_hash_scheme),
):
    """
    Check that a revealed server seed hashes to the commitment shown before the round.
    A mismatch is reported in the body, not as an error status.
    """
    logger.info(f"Verifying commitment for server seed {mask_seed(request.server_seed)}")
    try:
        return fairness_service.check_commitment(request.server_seed, request.committed_hash, scheme)
    except Exception as e:
        logger.error(f"Error verifying commitment: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying commitment: {str(e)}")


@router.post("/outcome", response_model=OutcomeResponse)
async def derive_outcome(
    request: OutcomeRequest,
    scheme: HashScheme = Depends(get_hash_scheme),
):
    """
    Derive the outcome of one step of a round from its revealed seeds.
    """
    try:
        outcome = fairness_service.derive_outcome(
            request.server_seed,
            request.client_seed,
            request.round_index,
            request.range_width,
            scheme
        )
        return OutcomeResponse(outcome=outcome, available=fairness_service.seeds_revealed(request))
    except ValueError as e:
        logger.warning(f"Rejected outcome request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error deriving outcome: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deriving outcome: {str(e)}")


@router.post("/outcomes", response_model=OutcomesResponse)
async def derive_outcomes(
    request: OutcomesRequest,
    scheme: HashScheme = Depends(get_hash_scheme),
):
    """
    Derive one outcome per row for a multi-step round.
    """
    if request.rows > settings.max_rows:
        raise HTTPException(status_code=400, detail=f"rows must not exceed {settings.max_rows}")

    logger.info(f"Deriving {request.rows} outcomes of width {request.range_width}")
    try:
        outcomes = fairness_service.derive_outcomes(
            request.server_seed,
            request.client_seed,
            request.rows,
            request.range_width,
            scheme
        )
        return OutcomesResponse(outcomes=outcomes, available=fairness_service.seeds_revealed(request))
    except ValueError as e:
        logger.warning(f"Rejected outcomes request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error deriving outcomes: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error deriving outcomes: {str(e)}")


@router.get("/grids", response_model=List[GridConfigurationSchema])
async def list_grids():
    """
    Goal grid tiers, smallest first.
    """
    return grid_service.list_grids()
