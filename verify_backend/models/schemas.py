from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Union


class SeedPair(BaseModel):
    """Revealed seed material for one round"""
    model_config = ConfigDict(populate_by_name=True)

    server_seed: str = Field("", alias="serverSeed", description="Server (private) seed, revealed after the round")
    client_seed: str = Field("", alias="clientSeed", description="Client (public) seed")


class CommitmentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    server_seed: str = Field(..., alias="serverSeed")
    committed_hash: str = Field(..., alias="privateSeedHash", description="Hash shown before the round")


class CommitmentResponse(BaseModel):
    verified: bool
    computed_hash: str
    message: str


class OutcomeRequest(SeedPair):
    round_index: int = Field(0, ge=0, alias="roundIndex")
    range_width: int = Field(..., gt=0, alias="rangeWidth")


class OutcomeResponse(BaseModel):
    outcome: int
    available: bool


class OutcomesRequest(SeedPair):
    rows: int = Field(..., ge=0)
    range_width: int = Field(..., gt=0, alias="rangeWidth")


class OutcomesResponse(BaseModel):
    outcomes: List[int]
    available: bool


class GridConfigurationSchema(BaseModel):
    """Static goal grid tier. multipliers[i] pays out after clearing row i."""
    size: int
    name: str
    width: int
    height: int
    multipliers: List[float]


class GoalVerifyRequest(SeedPair):
    size: Union[int, str] = Field(0, description="Grid tier: 0/1/2 or small/middle/big")
    picks: Optional[List[int]] = Field(None, description="Columns the player picked, row 0 first")
    committed_hash: Optional[str] = Field(None, alias="privateSeedHash")


class GoalRow(BaseModel):
    row: int
    position: int
    loss_position: int
    multiplier: float


class GoalReplay(BaseModel):
    rounds: List[GoalRow]
    status: str  # WIN | LOST | CASHOUT
    final_multiplier: float


class GoalVerifyResponse(BaseModel):
    available: bool
    grid: GridConfigurationSchema
    bomb_columns: List[int] = []
    rounds: List[GoalRow] = []
    status: Optional[str] = None  # WIN | LOST | CASHOUT
    final_multiplier: Optional[float] = None
    commitment: Optional[CommitmentResponse] = None


class CardSchema(BaseModel):
    model_config = ConfigDict(frozen=True)

    rank: str
    suit: str


class HiloVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    public_seed: str = Field("", alias="publicSeed")
    private_seed: str = Field("", alias="privateSeed")
    count: int = Field(1, ge=1, le=1000)
    start_round: int = Field(1, ge=0, alias="startRound")
    committed_hash: Optional[str] = Field(None, alias="privateSeedHash")


class HiloMVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    private_seed: str = Field("", alias="privateSeed")
    public_seed: str = Field("", alias="publicSeed")
    committed_hash: Optional[str] = Field(None, alias="privateSeedHash")


class CardsVerifyResponse(BaseModel):
    available: bool
    cards: List[CardSchema] = []
    commitment: Optional[CommitmentResponse] = None


class RouletteVerifyRequest(SeedPair):
    committed_hash: Optional[str] = Field(None, alias="serverHash")


class RouletteVerifyResponse(BaseModel):
    available: bool
    number: Optional[int] = None
    color: Optional[str] = None
    commitment: Optional[CommitmentResponse] = None


class CrashVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    private_seed: str = Field("", alias="privateSeed")
    public_seed: str = Field("", alias="publicSeed")
    committed_hash: Optional[str] = Field(None, alias="privateHash")


class CrashVerifyResponse(BaseModel):
    available: bool
    crash_point: Optional[int] = None  # hundredths, 100 = 1.00x
    multiplier: Optional[float] = None
    commitment: Optional[CommitmentResponse] = None


class BlackjackVerifyRequest(SeedPair):
    count: int = Field(52, ge=1, le=52)
    committed_hash: Optional[str] = Field(None, alias="serverSeedHash")


class BaccaratVerifyRequest(SeedPair):
    committed_hash: Optional[str] = Field(None, alias="serverHash")
    multiplayer: bool = Field(False, description="Round of the shared multiplayer table")


class BaccaratDeal(BaseModel):
    """Both baccarat hands after the third-card rules were applied"""
    player_hand: List[CardSchema]
    banker_hand: List[CardSchema]
    player_score: int
    banker_score: int
    winner: str  # Player | Banker | Tie


class BaccaratVerifyResponse(BaseModel):
    available: bool
    deal: Optional[BaccaratDeal] = None
    commitment: Optional[CommitmentResponse] = None


class VideoPokerVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    private_seed: str = Field("", alias="privateSeed")
    public_seed: str = Field("", alias="publicSeed")
    hold_indexes: Optional[List[int]] = Field(
        None,
        alias="holdIndexes",
        description="Positions of the dealt hand the player kept; omit to verify the deal only"
    )
    committed_hash: Optional[str] = Field(None, alias="privateSeedHash")


class VideoPokerHand(BaseModel):
    hand: List[CardSchema]
    final_hand: Optional[List[CardSchema]] = None
    hand_rank: str


class VideoPokerVerifyResponse(BaseModel):
    available: bool
    result: Optional[VideoPokerHand] = None
    commitment: Optional[CommitmentResponse] = None


class FlowerPokerVerifyRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    private_key: str = Field("", alias="privateKey")
    public_key: str = Field("", alias="publicKey")
    committed_hash: Optional[str] = Field(None, alias="privateHash")


class FlowerCombination(BaseModel):
    rank: int
    description: str


class FlowerPokerHands(BaseModel):
    player_flowers: List[str]
    host_flowers: List[str]
    player_combination: FlowerCombination
    host_combination: FlowerCombination
    outcome: str  # WIN | LOST | DRAW


class FlowerPokerVerifyResponse(BaseModel):
    available: bool
    result: Optional[FlowerPokerHands] = None
    commitment: Optional[CommitmentResponse] = None
