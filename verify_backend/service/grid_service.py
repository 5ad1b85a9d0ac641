from typing import Dict, List, Optional, Union

from verify_backend.config import get_logger, mask_seed
from verify_backend.models.schemas import GoalReplay, GoalRow, GridConfigurationSchema, SeedPair
from verify_backend.service.fairness_service import DEFAULT_SCHEME, HashScheme, derive_outcomes

# Initialize logger
logger = get_logger(__name__)


GRIDS: Dict[int, GridConfigurationSchema] = {
    0: GridConfigurationSchema(size=0, name="small", width=3, height=4, multipliers=[1.45, 2.18, 3.27, 4.91]),
    1: GridConfigurationSchema(
        size=1, name="middle", width=4, height=7,
        multipliers=[1.29, 1.72, 2.3, 3.3, 4.09, 5.45, 7.27]
    ),
    2: GridConfigurationSchema(
        size=2, name="big", width=5, height=10,
        multipliers=[1.21, 1.52, 1.89, 2.37, 2.96, 3.79, 4.64, 5.78, 7.23, 9.03]
    ),
}


def get_grid(size: Union[int, str]) -> GridConfigurationSchema:
    """
    Look up a grid tier by number (0, 1, 2) or name (small, middle, big).
    """
    if isinstance(size, str):
        key = size.strip().lower()
        if key.isdigit():
            size = int(key)
        else:
            for grid in GRIDS.values():
                if grid.name == key:
                    return grid
            raise ValueError(f"Invalid grid size: {size}")

    grid = GRIDS.get(size)
    if grid is None:
        raise ValueError(f"Invalid grid size: {size}")
    return grid


def list_grids() -> List[GridConfigurationSchema]:
    return [GRIDS[size] for size in sorted(GRIDS)]


def derive_bomb_columns(
    seed_pair: SeedPair,
    grid: GridConfigurationSchema,
    scheme: HashScheme = DEFAULT_SCHEME
) -> List[int]:
    """
    Losing column for every row of the grid, row 0 first.
    """
    return derive_outcomes(seed_pair.server_seed, seed_pair.client_seed, grid.height, grid.width, scheme)


def replay_goal_round(
    seed_pair: SeedPair,
    grid: GridConfigurationSchema,
    picks: List[int],
    scheme: HashScheme = DEFAULT_SCHEME,
    bomb_columns: Optional[List[int]] = None
) -> GoalReplay:
    """
    Replay the columns a player picked against the derived bomb layout.

    The replay stops at the first row whose pick hits the losing column. Clearing
    every row is a win; stopping earlier without a hit is a cashout.

    Args:
        seed_pair: Revealed seeds of the round
        grid: Grid tier the round was played on
        picks: Picked column per row, row 0 first
        scheme: Hash convention agreed with the server
        bomb_columns: Precomputed layout, derived from the seeds if omitted

    Returns:
        GoalReplay with the per-row results, final status and multiplier
    """
    if len(picks) > grid.height:
        raise ValueError(f"{len(picks)} picks exceed the {grid.height} rows of the {grid.name} grid")
    for pick in picks:
        if pick < 0 or pick >= grid.width:
            raise ValueError(f"Pick {pick} is outside the {grid.width} columns of the {grid.name} grid")

    if bomb_columns is None:
        bomb_columns = derive_bomb_columns(seed_pair, grid, scheme)

    rounds: List[GoalRow] = []
    status = "CASHOUT"
    final_multiplier = 0.0

    for row, pick in enumerate(picks):
        loss_position = bomb_columns[row]
        multiplier = grid.multipliers[row]
        rounds.append(GoalRow(row=row, position=pick, loss_position=loss_position, multiplier=multiplier))

        if pick == loss_position:
            status = "LOST"
            final_multiplier = 0.0
            break

        final_multiplier = multiplier
        if row == grid.height - 1:
            status = "WIN"

    logger.info(
        f"Replayed goal round on {grid.name} grid for server seed {mask_seed(seed_pair.server_seed)}: "
        f"{status} after {len(rounds)} rows"
    )
    return GoalReplay(rounds=rounds, status=status, final_multiplier=final_multiplier)
