import hashlib
import hmac
from dataclasses import dataclass
from typing import List

from verify_backend.config import get_logger, mask_seed
from verify_backend.models.schemas import CommitmentResponse, SeedPair

# Initialize logger
logger = get_logger(__name__)


@dataclass(frozen=True)
class HashScheme:
    """
    Hash convention shared with the game server.

    The server and this verifier must use the same algorithm and the same
    truncation rule (first `prefix_chars` hex chars of the digest read as an
    unsigned base-16 integer). Neither value travels with the seeds, so a
    mismatch only shows up as replayed outcomes that differ from the live round.
    """
    algorithm: str = "sha256"
    prefix_chars: int = 8

    def __post_init__(self):
        if self.algorithm not in hashlib.algorithms_available:
            raise ValueError(f"Unsupported hash algorithm: {self.algorithm}")
        if self.prefix_chars <= 0:
            raise ValueError("prefix_chars must be positive")
        if self.prefix_chars > hashlib.new(self.algorithm).digest_size * 2:
            raise ValueError(f"prefix_chars exceeds the {self.algorithm} digest length")


DEFAULT_SCHEME = HashScheme()


def hash_hex(message: str, scheme: HashScheme = DEFAULT_SCHEME) -> str:
    """Hex digest of the UTF-8 encoded message."""
    return hashlib.new(scheme.algorithm, message.encode("utf-8")).hexdigest()


def hash_server_seed(server_seed: str, scheme: HashScheme = DEFAULT_SCHEME) -> str:
    """
    Commitment hash of a server seed, as shown to the player before the round.
    """
    return hash_hex(server_seed, scheme)


def verify_commitment(server_seed: str, committed_hash: str, scheme: HashScheme = DEFAULT_SCHEME) -> bool:
    """
    Check that a revealed server seed hashes to the commitment shown before the round.

    Args:
        server_seed: The server seed revealed after the round
        committed_hash: The hash published before the round
        scheme: Hash convention agreed with the server

    Returns:
        True if the seed matches the commitment, False otherwise
    """
    if not server_seed or not committed_hash:
        return False

    computed = hash_server_seed(server_seed, scheme)
    matches = hmac.compare_digest(computed.encode("utf-8"), committed_hash.strip().lower().encode("utf-8"))
    if not matches:
        logger.warning(f"Commitment mismatch for server seed {mask_seed(server_seed)}")
    return matches


def hash_to_range(digest: str, range_width: int, prefix_chars: int = 8) -> int:
    """
    Reduce a hex digest into [0, range_width).

    Only the first `prefix_chars` hex characters are used, parsed as an unsigned integer.
    """
    if range_width <= 0:
        raise ValueError(f"range_width must be positive, got {range_width}")
    return int(digest[:prefix_chars], 16) % range_width


def derive_outcome(
    server_seed: str,
    client_seed: str,
    round_index: int,
    range_width: int,
    scheme: HashScheme = DEFAULT_SCHEME
) -> int:
    """
    Reproduce the outcome the server derived for one step of a round.

    The message is server_seed + client_seed + the decimal round index, with no
    separators or padding. Empty seeds are accepted and produce a well-typed but
    meaningless value; callers check seeds_revealed() before showing it.

    Args:
        server_seed: The revealed server (private) seed
        client_seed: The client (public) seed
        round_index: 0-based step within the round
        range_width: Exclusive upper bound of the result
        scheme: Hash convention agreed with the server

    Returns:
        An integer in [0, range_width)
    """
    if round_index < 0:
        raise ValueError(f"round_index must be non-negative, got {round_index}")
    if range_width <= 0:
        raise ValueError(f"range_width must be positive, got {range_width}")

    digest = hash_hex(f"{server_seed}{client_seed}{round_index}", scheme)
    return hash_to_range(digest, range_width, scheme.prefix_chars)


def derive_outcomes(
    server_seed: str,
    client_seed: str,
    rows: int,
    range_width: int,
    scheme: HashScheme = DEFAULT_SCHEME
) -> List[int]:
    """
    Derive one outcome per step for a round of `rows` steps.

    Each row is hashed independently, so any subset of rows can be checked on its own.
    """
    if rows < 0:
        raise ValueError(f"rows must be non-negative, got {rows}")

    outcomes = [
        derive_outcome(server_seed, client_seed, i, range_width, scheme)
        for i in range(rows)
    ]
    logger.debug(f"Derived {rows} outcomes for server seed {mask_seed(server_seed)}")
    return outcomes


def seeds_revealed(seed_pair: SeedPair) -> bool:
    """Whether a seed pair is complete enough for its outcomes to be shown."""
    return bool(seed_pair.server_seed) and bool(seed_pair.client_seed)


FAIRNESS_CONFIRMED = "Server seed matches the committed hash"
FAIRNESS_UNCONFIRMED = "This round's fairness could not be confirmed"


def check_commitment(server_seed: str, committed_hash: str, scheme: HashScheme = DEFAULT_SCHEME) -> CommitmentResponse:
    """
    Commitment check packaged for display: the computed hash, the verdict and a
    message the player can read. A mismatch is a trust signal, not an error.
    """
    verified = verify_commitment(server_seed, committed_hash, scheme)
    computed_hash = hash_server_seed(server_seed, scheme) if server_seed else ""
    return CommitmentResponse(
        verified=verified,
        computed_hash=computed_hash,
        message=FAIRNESS_CONFIRMED if verified else FAIRNESS_UNCONFIRMED,
    )
