"""
Outcome derivations for the card, wheel, crash and flower games.

Each game fixed its own concatenation order and digest slicing when it was
built, so these do not share the goal formula. They only have to agree with
the game server, which is the source of truth for every convention here.
"""
import hashlib
import hmac
import math
from collections import Counter
from typing import List, Optional, Tuple

from verify_backend.config import get_logger, mask_seed
from verify_backend.models.schemas import (
    BaccaratDeal,
    CardSchema,
    FlowerCombination,
    FlowerPokerHands,
    VideoPokerHand,
)
from verify_backend.service.fairness_service import hash_hex

# Initialize logger
logger = get_logger(__name__)

HILO_RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]
HILO_SUITS = ["Hearts", "Diamonds", "Clubs", "Spades"]
HILO_M_SUITS = ["Clubs", "Spades", "Hearts", "Diamonds"]

BLACKJACK_SUITS = ["Hearts", "Diamonds", "Clubs", "Spades"]
BLACKJACK_RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]

# Baccarat builds its deck ace-low, video poker ace-high
BACCARAT_RANKS = HILO_RANKS
VIDEOPOKER_RANKS = BLACKJACK_RANKS

ROULETTE_POCKETS = 37
RED_NUMBERS = {1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36}

# Crash points are in hundredths: 100 means 1.00x
CRASH_INSTANT = 100
CRASH_HASH_BITS = 52

FLOWERS = ["RED", "BLUE", "PURPLE", "ORANGE", "RAINBOW"]
FLOWER_HAND_SIZE = 5
HOST_FLOWERS_OFFSET = 10


def create_deck(suits: List[str], ranks: List[str]) -> List[CardSchema]:
    return [CardSchema(rank=rank, suit=suit) for suit in suits for rank in ranks]


def hmac_sha256_hex(key: str, message: str) -> str:
    return hmac.new(key.encode("utf-8"), message.encode("utf-8"), hashlib.sha256).hexdigest()


def hilo_card(public_seed: str, private_seed: str, round_number: int) -> CardSchema:
    """
    Card drawn in a single-player Hi-Lo round.

    Hashes public_seed + private_seed + round; rank from the first 8 hex chars,
    suit from the next 4.
    """
    card_hash = hash_hex(f"{public_seed}{private_seed}{round_number}")
    rank = HILO_RANKS[int(card_hash[0:8], 16) % 13]
    suit = HILO_SUITS[int(card_hash[8:12], 16) % 4]
    return CardSchema(rank=rank, suit=suit)


def hilo_cards(public_seed: str, private_seed: str, count: int, start_round: int = 1) -> List[CardSchema]:
    """Successive Hi-Lo cards; rounds are numbered from 1."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if start_round < 0:
        raise ValueError(f"start_round must be non-negative, got {start_round}")
    return [hilo_card(public_seed, private_seed, r) for r in range(start_round, start_round + count)]


def hilo_m_card(private_seed: str, public_seed: str) -> CardSchema:
    """
    Card of a multiplayer Hi-Lo round: one card per seed pair, suit from hex chars 8-10.
    """
    card_hash = hash_hex(f"{private_seed}{public_seed}")
    rank = HILO_RANKS[int(card_hash[0:8], 16) % 13]
    suit = HILO_M_SUITS[int(card_hash[8:10], 16) % 4]
    return CardSchema(rank=rank, suit=suit)


def roulette_color(number: int) -> str:
    if number == 0:
        return "Green"
    return "Red" if number in RED_NUMBERS else "Black"


def roulette_outcome(server_seed: str, client_seed: str) -> Tuple[int, str]:
    """
    Winning pocket of a European wheel.

    Returns:
        (number, color) with number in [0, 36]
    """
    combined = hmac_sha256_hex(server_seed, client_seed)
    number = int(combined[:8], 16) % ROULETTE_POCKETS
    return number, roulette_color(number)


def _crash_hash_divisible(crash_hash: str, mod: int) -> bool:
    # Reads the hash in 16-bit chunks, aligned to the end of the string
    val = 0
    offset = len(crash_hash) % 4
    i = offset - 4 if offset > 0 else 0
    while i < len(crash_hash):
        chunk = crash_hash[max(i, 0):i + 4]
        val = ((val << 16) + int(chunk, 16)) % mod
        i += 4
    return val == 0


def crash_point(private_seed: str, public_seed: str, house_edge: float = 0.04) -> int:
    """
    Crash point of a round, in hundredths.

    The house edge decides how often a round busts instantly: a hash divisible by
    int(100 / (house_edge * 100)) crashes at 1.00x. Everything else maps the first
    52 bits of the HMAC onto the multiplier curve using double precision, as the
    game server does.

    Args:
        private_seed: The revealed server seed (HMAC key)
        public_seed: The public seed (HMAC message)
        house_edge: Fraction of rounds that crash instantly

    Returns:
        Crash point in hundredths (100 = 1.00x)
    """
    if house_edge <= 0 or house_edge >= 1:
        raise ValueError(f"house_edge must be in (0, 1), got {house_edge}")

    crash_hash = hmac_sha256_hex(private_seed, public_seed)

    instant_mod = int(100 / (house_edge * 100))
    if _crash_hash_divisible(crash_hash, instant_mod):
        return CRASH_INSTANT

    h = int(crash_hash[:CRASH_HASH_BITS // 4], 16)
    e = float(2 ** CRASH_HASH_BITS)
    return math.floor((100 * e - h) / (e - h))


def create_blackjack_deck() -> List[CardSchema]:
    return create_deck(BLACKJACK_SUITS, BLACKJACK_RANKS)


def blackjack_deck(client_seed: str, server_seed: str, count: int = 52) -> List[CardSchema]:
    """
    Cards in the order they were dealt from a fresh deck.

    Card i is drawn at index hash(client_seed + server_seed + i) mod the number of
    cards left, then removed, so no card repeats.
    """
    if count < 0 or count > 52:
        raise ValueError(f"count must be between 0 and 52, got {count}")

    deck = create_blackjack_deck()
    seed = f"{client_seed}{server_seed}"
    dealt: List[CardSchema] = []
    for position in range(count):
        card_hash = hash_hex(f"{seed}{position}")
        index = int(card_hash[:8], 16) % len(deck)
        dealt.append(deck.pop(index))

    logger.debug(f"Dealt {count} blackjack cards for server seed {mask_seed(server_seed)}")
    return dealt


def create_baccarat_deck() -> List[CardSchema]:
    return create_deck(BLACKJACK_SUITS, BACCARAT_RANKS)


def _baccarat_draw(deck: List[CardSchema], count: int, combined_hash: str) -> List[CardSchema]:
    # Every draw reads the hash from its start again
    hand = []
    for i in range(count):
        index = int(combined_hash[i * 8:(i + 1) * 8], 16) % len(deck)
        hand.append(deck.pop(index))
    return hand


def baccarat_score(hand: List[CardSchema]) -> int:
    total = 0
    for card in hand:
        if card.rank == "A":
            total += 1
        elif card.rank not in ("10", "J", "Q", "K"):
            total += int(card.rank)
    return total % 10


def _banker_draws(banker_score: int, player_third: Optional[CardSchema]) -> bool:
    if banker_score <= 2:
        return True
    if player_third is None:
        return False

    rank = player_third.rank
    if banker_score == 3:
        return rank != "8"
    if banker_score == 4:
        return rank in ("2", "3", "4", "5", "6", "7")
    if banker_score == 5:
        return rank in ("4", "5", "6", "7")
    if banker_score == 6:
        return rank in ("6", "7")
    return False


def baccarat_deal(server_seed: str, client_seed: str, multiplayer: bool = False) -> BaccaratDeal:
    """
    Replay a baccarat deal.

    Single-player tables draw from HMAC-SHA256(key=server_seed, msg=client_seed),
    the multiplayer table from sha256(server_seed + client_seed). Each draw reads
    8-hex-char slices from the start of that hash and removes the card from the
    deck, so later draws land on different cards. The player draws a third card
    on 0-5; the banker follows the usual tableau, judged on its first two cards.
    There is no natural rule.
    """
    if multiplayer:
        combined_hash = hash_hex(f"{server_seed}{client_seed}")
    else:
        combined_hash = hmac_sha256_hex(server_seed, client_seed)

    deck = create_baccarat_deck()

    player_hand = _baccarat_draw(deck, 2, combined_hash)
    banker_hand = _baccarat_draw(deck, 2, combined_hash)

    player_third = None
    if baccarat_score(player_hand) <= 5:
        player_third = _baccarat_draw(deck, 1, combined_hash)[0]
        player_hand.append(player_third)

    if _banker_draws(baccarat_score(banker_hand), player_third):
        banker_hand.extend(_baccarat_draw(deck, 1, combined_hash))

    player_score = baccarat_score(player_hand)
    banker_score = baccarat_score(banker_hand)
    if player_score > banker_score:
        winner = "Player"
    elif banker_score > player_score:
        winner = "Banker"
    else:
        winner = "Tie"

    logger.debug(f"Baccarat deal for server seed {mask_seed(server_seed)}: {winner}")
    return BaccaratDeal(
        player_hand=player_hand,
        banker_hand=banker_hand,
        player_score=player_score,
        banker_score=banker_score,
        winner=winner,
    )


def _videopoker_take(deck: List[CardSchema], combined_hash: str, count: int) -> List[CardSchema]:
    start = int(combined_hash[:8], 16) % len(deck)
    return [deck.pop((start + i) % len(deck)) for i in range(count)]


def _is_straight(rank_counts: Counter) -> bool:
    present = [rank in rank_counts for rank in VIDEOPOKER_RANKS]
    for i in range(len(present) - 4):
        if all(present[i:i + 5]):
            return True
    return all(rank in rank_counts for rank in ("A", "2", "3", "4", "5"))


def videopoker_hand_rank(hand: List[CardSchema]) -> str:
    """
    Paytable id of a five-card hand (royal_flush ... high_card).

    Only a pair of jacks or better counts as "pair"; lower pairs are high_card.
    """
    rank_counts = Counter(card.rank for card in hand)
    counts = list(rank_counts.values())
    is_flush = len({card.suit for card in hand}) == 1
    is_straight = _is_straight(rank_counts)

    if is_flush and is_straight and all(rank in rank_counts for rank in ("A", "K", "Q", "J", "10")):
        return "royal_flush"
    if is_flush and is_straight:
        return "straight_flush"
    if 4 in counts:
        return "4_of_a_kind"
    if 3 in counts and 2 in counts:
        return "full_house"
    if is_flush:
        return "flush"
    if is_straight:
        return "straight"
    if 3 in counts:
        return "3_of_a_kind"
    if counts.count(2) == 2:
        return "2_pair"
    if 2 in counts:
        high_pair = any(rank_counts[rank] == 2 for rank in ("J", "Q", "K", "A"))
        return "pair" if high_pair else "high_card"
    return "high_card"


def videopoker_hand(
    server_seed: str,
    client_seed: str,
    hold_indexes: Optional[List[int]] = None
) -> VideoPokerHand:
    """
    Replay a video poker hand.

    The deal takes five consecutive cards from index sha256(server_seed +
    client_seed)[:8] mod 52. On the draw every position not held is replaced by
    the card at that same hash index in the remaining deck.

    Args:
        server_seed: The revealed private seed
        client_seed: The public seed
        hold_indexes: Positions (0-4) the player kept; None verifies the deal only

    Returns:
        VideoPokerHand with the dealt hand, the hand after the draw and its rank
    """
    if hold_indexes is not None:
        for index in hold_indexes:
            if index < 0 or index >= 5:
                raise ValueError(f"Hold index {index} is outside the 5 cards of the hand")

    combined_hash = hash_hex(f"{server_seed}{client_seed}")
    deck = create_deck(BLACKJACK_SUITS, VIDEOPOKER_RANKS)
    hand = _videopoker_take(deck, combined_hash, 5)

    if hold_indexes is None:
        return VideoPokerHand(hand=hand, hand_rank=videopoker_hand_rank(hand))

    final_hand = list(hand)
    for i in range(len(final_hand)):
        if i not in hold_indexes and deck:
            final_hand[i] = _videopoker_take(deck, combined_hash, 1)[0]

    return VideoPokerHand(hand=hand, final_hand=final_hand, hand_rank=videopoker_hand_rank(final_hand))


def _flowers_at(combined_hash: str, start: int) -> List[str]:
    return [
        FLOWERS[int(combined_hash[start + i * 2:start + i * 2 + 2], 16) % len(FLOWERS)]
        for i in range(FLOWER_HAND_SIZE)
    ]


def flower_combination(flowers: List[str]) -> FlowerCombination:
    counts = sorted(Counter(flowers).values(), reverse=True) + [0]
    if counts[0] == 5:
        return FlowerCombination(rank=6, description="5 Oak")
    if counts[0] == 4:
        return FlowerCombination(rank=5, description="4 Oak")
    if counts[0] == 3 and counts[1] == 2:
        return FlowerCombination(rank=4, description="Full House")
    if counts[0] == 3:
        return FlowerCombination(rank=3, description="3 Oak")
    if counts[0] == 2 and counts[1] == 2:
        return FlowerCombination(rank=2, description="2 Pair")
    if counts[0] == 2:
        return FlowerCombination(rank=1, description="1 Pair")
    return FlowerCombination(rank=0, description="Bust")


def flowerpoker_hands(private_key: str, public_key: str) -> FlowerPokerHands:
    """
    Player and host flowers of a flower poker round.

    Both come from HMAC-SHA256(key=private_key, msg=public_key): one flower per
    byte, the player's from hex offset 0 and the host's from offset 10.
    """
    combined_hash = hmac_sha256_hex(private_key, public_key)
    player_flowers = _flowers_at(combined_hash, 0)
    host_flowers = _flowers_at(combined_hash, HOST_FLOWERS_OFFSET)

    player_combination = flower_combination(player_flowers)
    host_combination = flower_combination(host_flowers)
    if player_combination.rank > host_combination.rank:
        outcome = "WIN"
    elif player_combination.rank < host_combination.rank:
        outcome = "LOST"
    else:
        outcome = "DRAW"

    return FlowerPokerHands(
        player_flowers=player_flowers,
        host_flowers=host_flowers,
        player_combination=player_combination,
        host_combination=host_combination,
        outcome=outcome,
    )
