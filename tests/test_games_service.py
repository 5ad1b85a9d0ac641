import pytest

from conftest import CLIENT_SEED, SERVER_SEED
from verify_backend.models.schemas import CardSchema
from verify_backend.service import games_service

# Reference values were computed once with sha256sum / openssl dgst.


def test_hmac_matches_recorded_draw_proof():
    # Proof recorded for a card draw: HMAC keyed by the server seed over client seed + nonce
    assert games_service.hmac_sha256_hex(SERVER_SEED, f"{CLIENT_SEED}6") == (
        "ddb1510947b80f351a19607853aa6918d404d7d1737a009d78508d81097abdcd"
    )


def test_hilo_card_reference():
    # sha256("def456abc1231") = cd93cb28 ca04...
    assert games_service.hilo_card("def456", "abc123", 1) == CardSchema(rank="5", suit="Hearts")


def test_hilo_cards_start_at_round_one():
    cards = games_service.hilo_cards("def456", "abc123", 5)
    assert len(cards) == 5
    assert cards[0] == games_service.hilo_card("def456", "abc123", 1)
    assert cards[4] == games_service.hilo_card("def456", "abc123", 5)
    assert games_service.hilo_cards("def456", "abc123", 0) == []


def test_hilo_cards_reject_negative_count():
    with pytest.raises(ValueError):
        games_service.hilo_cards("def456", "abc123", -1)


def test_hilo_m_card_reference():
    # sha256("abc123def456") = e861b2ea b6...
    assert games_service.hilo_m_card("abc123", "def456") == CardSchema(rank="7", suit="Hearts")


def test_roulette_outcome_reference():
    # HMAC-SHA256(key="abc123", msg="def456") starts with f8cd7c7f
    assert games_service.roulette_outcome("abc123", "def456") == (10, "Black")


@pytest.mark.parametrize("number,color", [(0, "Green"), (1, "Red"), (2, "Black"), (32, "Red"), (35, "Black")])
def test_roulette_colors(number, color):
    assert games_service.roulette_color(number) == color


def test_roulette_outcome_in_range():
    for i in range(100):
        number, _ = games_service.roulette_outcome(SERVER_SEED, f"{CLIENT_SEED}{i}")
        assert 0 <= number <= 36


def test_crash_point_reference():
    assert games_service.crash_point("abc123", "def456") == 3522


def test_crash_point_instant_bust():
    # HMAC of this pair is divisible by 25 in 16-bit chunks
    assert games_service.crash_point("seed19", "salt") == 100
    assert games_service.crash_point("seed50", "salt") == 100


def test_crash_point_never_below_one():
    for i in range(200):
        assert games_service.crash_point(SERVER_SEED, f"{CLIENT_SEED}{i}") >= 100


@pytest.mark.parametrize("house_edge", [0, -0.1, 1, 2])
def test_crash_point_rejects_bad_house_edge(house_edge):
    with pytest.raises(ValueError):
        games_service.crash_point("abc123", "def456", house_edge)


def test_blackjack_deck_reference():
    dealt = games_service.blackjack_deck("def456", "abc123", 2)
    assert dealt == [CardSchema(rank="2", suit="Hearts"), CardSchema(rank="J", suit="Clubs")]


def test_blackjack_deck_is_a_permutation():
    dealt = games_service.blackjack_deck(CLIENT_SEED, SERVER_SEED)
    assert len(dealt) == 52
    assert set(dealt) == set(games_service.create_blackjack_deck())


def test_blackjack_partial_deal_is_prefix_of_full_deal():
    full = games_service.blackjack_deck(CLIENT_SEED, SERVER_SEED)
    assert games_service.blackjack_deck(CLIENT_SEED, SERVER_SEED, 6) == full[:6]


def test_blackjack_deck_rejects_bad_count():
    with pytest.raises(ValueError):
        games_service.blackjack_deck("def456", "abc123", 53)


def _cards(*names):
    return [CardSchema(rank=name.split(":")[0], suit=name.split(":")[1]) for name in names]


def test_baccarat_natural_tie():
    # HMAC-SHA256(key="abc123", msg="def456") starts with f8cd7c7f 42274280
    deal = games_service.baccarat_deal("abc123", "def456")
    assert deal.player_hand == _cards("A:Spades", "7:Spades")
    assert deal.banker_hand == _cards("7:Diamonds", "A:Clubs")
    assert (deal.player_score, deal.banker_score, deal.winner) == (8, 8, "Tie")


def test_baccarat_both_sides_draw():
    deal = games_service.baccarat_deal("abc123", "def458")
    assert deal.player_hand == _cards("5:Clubs", "7:Clubs", "3:Diamonds")
    assert deal.banker_hand == _cards("K:Clubs", "A:Diamonds", "5:Hearts")
    assert (deal.player_score, deal.banker_score, deal.winner) == (5, 6, "Banker")


def test_baccarat_banker_draws_on_player_third_card():
    # Banker on 4 draws against a player's third card of 6
    deal = games_service.baccarat_deal("abc123", "def460")
    assert deal.player_hand == _cards("A:Hearts", "10:Diamonds", "6:Spades")
    assert deal.banker_hand == _cards("7:Clubs", "7:Diamonds", "6:Diamonds")
    assert deal.winner == "Player"


def test_baccarat_banker_stands_on_seven():
    deal = games_service.baccarat_deal("abc123", "def457")
    assert len(deal.player_hand) == 3
    assert len(deal.banker_hand) == 2
    assert deal.winner == "Banker"


def test_baccarat_multiplayer_table_uses_sha256():
    # sha256("abc123def456") starts with e861b2ea b679927c
    deal = games_service.baccarat_deal("abc123", "def456", multiplayer=True)
    assert deal.player_hand == _cards("7:Hearts", "A:Diamonds")
    assert deal.banker_hand == _cards("8:Hearts", "5:Spades")
    assert (deal.player_score, deal.banker_score, deal.winner) == (8, 3, "Player")


def test_baccarat_never_repeats_a_card():
    for i in range(50):
        deal = games_service.baccarat_deal(SERVER_SEED, f"{CLIENT_SEED}{i}")
        cards = deal.player_hand + deal.banker_hand
        assert len(set(cards)) == len(cards)


@pytest.mark.parametrize("names,score", [
    (("A:Hearts", "9:Clubs"), 0),
    (("K:Hearts", "Q:Clubs", "7:Spades"), 7),
    (("10:Hearts", "5:Clubs", "4:Spades"), 9),
])
def test_baccarat_score(names, score):
    assert games_service.baccarat_score(_cards(*names)) == score


def test_videopoker_deal_reference():
    # sha256("abc123def456") starts with e861b2ea: deal starts at index 6
    result = games_service.videopoker_hand("abc123", "def456")
    assert result.hand == _cards("8:Hearts", "10:Hearts", "Q:Hearts", "A:Hearts", "3:Diamonds")
    assert result.final_hand is None
    assert result.hand_rank == "high_card"


def test_videopoker_draw_replaces_unheld_cards():
    result = games_service.videopoker_hand("abc123", "def456", [0, 1])
    assert result.final_hand == _cards("8:Hearts", "10:Hearts", "6:Clubs", "10:Diamonds", "3:Clubs")
    # A pair of tens is below jacks or better
    assert result.hand_rank == "high_card"


def test_videopoker_draw_everything():
    result = games_service.videopoker_hand("abc123", "def456", [])
    assert result.final_hand == _cards("6:Clubs", "10:Diamonds", "3:Clubs", "K:Diamonds", "3:Hearts")


def test_videopoker_hold_all_keeps_the_deal():
    result = games_service.videopoker_hand("abc123", "def456", [0, 1, 2, 3, 4])
    assert result.final_hand == result.hand


def test_videopoker_rejects_bad_hold_index():
    with pytest.raises(ValueError):
        games_service.videopoker_hand("abc123", "def456", [5])


@pytest.mark.parametrize("names,rank", [
    (("A:Spades", "K:Spades", "Q:Spades", "J:Spades", "10:Spades"), "royal_flush"),
    (("9:Hearts", "K:Hearts", "Q:Hearts", "J:Hearts", "10:Hearts"), "straight_flush"),
    (("7:Hearts", "7:Clubs", "7:Spades", "7:Diamonds", "2:Hearts"), "4_of_a_kind"),
    (("7:Hearts", "7:Clubs", "7:Spades", "2:Diamonds", "2:Hearts"), "full_house"),
    (("2:Clubs", "9:Clubs", "J:Clubs", "4:Clubs", "6:Clubs"), "flush"),
    (("A:Clubs", "2:Hearts", "3:Clubs", "4:Diamonds", "5:Clubs"), "straight"),
    (("10:Clubs", "J:Hearts", "Q:Clubs", "K:Diamonds", "A:Clubs"), "straight"),
    (("9:Clubs", "9:Hearts", "9:Spades", "K:Diamonds", "A:Clubs"), "3_of_a_kind"),
    (("9:Clubs", "9:Hearts", "4:Spades", "4:Diamonds", "A:Clubs"), "2_pair"),
    (("J:Clubs", "J:Hearts", "4:Spades", "8:Diamonds", "A:Clubs"), "pair"),
    (("10:Clubs", "10:Hearts", "4:Spades", "8:Diamonds", "A:Clubs"), "high_card"),
    (("2:Clubs", "5:Hearts", "7:Spades", "9:Diamonds", "J:Clubs"), "high_card"),
])
def test_videopoker_hand_rank(names, rank):
    assert games_service.videopoker_hand_rank(_cards(*names)) == rank


def test_flowerpoker_reference():
    # Player bytes f8 cd 7c 7f 42, host bytes 27 42 80 6d 62
    hands = games_service.flowerpoker_hands("abc123", "def456")
    assert hands.player_flowers == ["ORANGE", "RED", "RAINBOW", "PURPLE", "BLUE"]
    assert hands.host_flowers == ["RAINBOW", "BLUE", "ORANGE", "RAINBOW", "ORANGE"]
    assert hands.player_combination.description == "Bust"
    assert hands.host_combination.description == "2 Pair"
    assert hands.outcome == "LOST"


def test_flowerpoker_player_wins():
    hands = games_service.flowerpoker_hands("abc123", "def458")
    assert hands.player_combination.description == "3 Oak"
    assert hands.host_combination.description == "1 Pair"
    assert hands.outcome == "WIN"


@pytest.mark.parametrize("flowers,rank,description", [
    (["RED"] * 5, 6, "5 Oak"),
    (["RED"] * 4 + ["BLUE"], 5, "4 Oak"),
    (["RED"] * 3 + ["BLUE"] * 2, 4, "Full House"),
    (["RED"] * 3 + ["BLUE", "ORANGE"], 3, "3 Oak"),
    (["RED", "RED", "BLUE", "BLUE", "ORANGE"], 2, "2 Pair"),
    (["RED", "RED", "BLUE", "PURPLE", "ORANGE"], 1, "1 Pair"),
    (["RED", "BLUE", "PURPLE", "ORANGE", "RAINBOW"], 0, "Bust"),
])
def test_flower_combinations(flowers, rank, description):
    combination = games_service.flower_combination(flowers)
    assert (combination.rank, combination.description) == (rank, description)
