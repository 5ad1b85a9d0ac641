from fastapi import APIRouter, Depends, HTTPException
from typing import Optional

from verify_backend.config import get_logger, mask_seed, settings
from verify_backend.models.schemas import (
    BaccaratVerifyRequest,
    BaccaratVerifyResponse,
    BlackjackVerifyRequest,
    CardsVerifyResponse,
    CommitmentResponse,
    CrashVerifyRequest,
    CrashVerifyResponse,
    FlowerPokerVerifyRequest,
    FlowerPokerVerifyResponse,
    GoalVerifyRequest,
    GoalVerifyResponse,
    HiloMVerifyRequest,
    HiloVerifyRequest,
    RouletteVerifyRequest,
    RouletteVerifyResponse,
    VideoPokerVerifyRequest,
    VideoPokerVerifyResponse,
)
from verify_backend.router.fairness_router import get_hash_scheme
from verify_backend.service import fairness_service, games_service, grid_service
from verify_backend.service.fairness_service import DEFAULT_SCHEME, HashScheme

# Initialize router
router = APIRouter(
    tags=["games"],
    responses={400: {"description": "Invalid verification input"}},
)

# Initialize logger
logger = get_logger(__name__)


def _commitment(
    server_seed: str,
    committed_hash: Optional[str],
    scheme: HashScheme = DEFAULT_SCHEME
) -> Optional[CommitmentResponse]:
    # Only the goal game follows the configured scheme; every other game server commits with sha256
    if committed_hash is None:
        return None
    return fairness_service.check_commitment(server_seed, committed_hash, scheme)


@router.post("/goal/verify", response_model=GoalVerifyResponse)
async def verify_goal(
    request: GoalVerifyRequest,
    scheme: HashScheme = Depends(get_hash_scheme),
):
    """
    Rebuild the bomb layout of a goal round and optionally replay the player's picks.

    Nothing is derived until both seeds are present; the response then only carries
    the grid and the commitment check.
    """
    logger.info(f"Verifying goal round (size {request.size}) for server seed {mask_seed(request.server_seed)}")
    try:
        grid = grid_service.get_grid(request.size)
        response = GoalVerifyResponse(
            available=fairness_service.seeds_revealed(request),
            grid=grid,
            commitment=_commitment(request.server_seed, request.committed_hash, scheme),
        )
        if not response.available:
            return response

        bomb_columns = grid_service.derive_bomb_columns(request, grid, scheme)
        response.bomb_columns = bomb_columns

        if request.picks is not None:
            replay = grid_service.replay_goal_round(request, grid, request.picks, scheme, bomb_columns)
            response.rounds = replay.rounds
            response.status = replay.status
            response.final_multiplier = replay.final_multiplier

        return response
    except ValueError as e:
        logger.warning(f"Rejected goal verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying goal round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying goal round: {str(e)}")


@router.post("/hilo/verify", response_model=CardsVerifyResponse)
async def verify_hilo(request: HiloVerifyRequest):
    """
    Cards of a single-player Hi-Lo game, one per round starting at start_round.
    """
    try:
        commitment = _commitment(request.private_seed, request.committed_hash)
        if not (request.private_seed and request.public_seed):
            return CardsVerifyResponse(available=False, commitment=commitment)

        cards = games_service.hilo_cards(request.public_seed, request.private_seed, request.count, request.start_round)
        return CardsVerifyResponse(available=True, cards=cards, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected hilo verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying hilo game: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying hilo game: {str(e)}")


@router.post("/hilo-m/verify", response_model=CardsVerifyResponse)
async def verify_hilo_m(request: HiloMVerifyRequest):
    """
    Card of a multiplayer Hi-Lo round.
    """
    try:
        commitment = _commitment(request.private_seed, request.committed_hash)
        if not (request.private_seed and request.public_seed):
            return CardsVerifyResponse(available=False, commitment=commitment)

        card = games_service.hilo_m_card(request.private_seed, request.public_seed)
        return CardsVerifyResponse(available=True, cards=[card], commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected hilo-m verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying hilo-m round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying hilo-m round: {str(e)}")


@router.post("/roulette/verify", response_model=RouletteVerifyResponse)
async def verify_roulette(request: RouletteVerifyRequest):
    """
    Winning pocket of a roulette spin.
    """
    try:
        commitment = _commitment(request.server_seed, request.committed_hash)
        if not fairness_service.seeds_revealed(request):
            return RouletteVerifyResponse(available=False, commitment=commitment)

        number, color = games_service.roulette_outcome(request.server_seed, request.client_seed)
        return RouletteVerifyResponse(available=True, number=number, color=color, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected roulette verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying roulette spin: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying roulette spin: {str(e)}")


@router.post("/crash/verify", response_model=CrashVerifyResponse)
async def verify_crash(request: CrashVerifyRequest):
    """
    Crash point of a round, using the configured house edge.
    """
    try:
        commitment = _commitment(request.private_seed, request.committed_hash)
        if not (request.private_seed and request.public_seed):
            return CrashVerifyResponse(available=False, commitment=commitment)

        point = games_service.crash_point(request.private_seed, request.public_seed, settings.crash_house_edge)
        return CrashVerifyResponse(available=True, crash_point=point, multiplier=point / 100, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected crash verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying crash round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying crash round: {str(e)}")


@router.post("/blackjack/verify", response_model=CardsVerifyResponse)
async def verify_blackjack(request: BlackjackVerifyRequest):
    """
    Cards of a blackjack shoe in the order they were dealt.
    """
    try:
        commitment = _commitment(request.server_seed, request.committed_hash)
        if not fairness_service.seeds_revealed(request):
            return CardsVerifyResponse(available=False, commitment=commitment)

        cards = games_service.blackjack_deck(request.client_seed, request.server_seed, request.count)
        return CardsVerifyResponse(available=True, cards=cards, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected blackjack verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying blackjack deck: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying blackjack deck: {str(e)}")


@router.post("/baccarat/verify", response_model=BaccaratVerifyResponse)
async def verify_baccarat(request: BaccaratVerifyRequest):
    """
    Player and banker hands of a baccarat deal, single-player or from the shared table.
    """
    try:
        commitment = _commitment(request.server_seed, request.committed_hash)
        if not fairness_service.seeds_revealed(request):
            return BaccaratVerifyResponse(available=False, commitment=commitment)

        deal = games_service.baccarat_deal(request.server_seed, request.client_seed, request.multiplayer)
        return BaccaratVerifyResponse(available=True, deal=deal, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected baccarat verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying baccarat deal: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying baccarat deal: {str(e)}")


@router.post("/videopoker/verify", response_model=VideoPokerVerifyResponse)
async def verify_videopoker(request: VideoPokerVerifyRequest):
    """
    Dealt hand of a video poker game and, given the held positions, the hand after the draw.
    """
    try:
        commitment = _commitment(request.private_seed, request.committed_hash)
        if not (request.private_seed and request.public_seed):
            return VideoPokerVerifyResponse(available=False, commitment=commitment)

        result = games_service.videopoker_hand(request.private_seed, request.public_seed, request.hold_indexes)
        return VideoPokerVerifyResponse(available=True, result=result, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected video poker verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying video poker hand: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying video poker hand: {str(e)}")


@router.post("/flowerpoker/verify", response_model=FlowerPokerVerifyResponse)
async def verify_flowerpoker(request: FlowerPokerVerifyRequest):
    """
    Player and host flowers of a flower poker round.
    """
    try:
        commitment = _commitment(request.private_key, request.committed_hash)
        if not (request.private_key and request.public_key):
            return FlowerPokerVerifyResponse(available=False, commitment=commitment)

        result = games_service.flowerpoker_hands(request.private_key, request.public_key)
        return FlowerPokerVerifyResponse(available=True, result=result, commitment=commitment)
    except ValueError as e:
        logger.warning(f"Rejected flower poker verification: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Error verifying flower poker round: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"Error verifying flower poker round: {str(e)}")
