"""In-memory price aggregator for development networks.

Implements PriceFeedPort with a round-based aggregator whose answer is
set by hand. Mirrors the mock aggregator deployed on local chains, so
tests and the CLI can move the price between contributions.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

from fundme.core.models import PriceQuote
from fundme.core.ports import PriceFeedPort

logger = logging.getLogger(__name__)

DEFAULT_DECIMALS = 8
DEFAULT_INITIAL_ANSWER = 2000 * 10**DEFAULT_DECIMALS


@dataclass(frozen=True)
class RoundData:
    """One aggregator round."""

    round_id: int
    answer: int
    started_at: datetime
    updated_at: datetime
    answered_in_round: int


class MockV3Aggregator(PriceFeedPort):
    """Hand-driven aggregator. Version is always 0."""

    version = 0

    def __init__(
        self,
        decimals: int = DEFAULT_DECIMALS,
        initial_answer: int = DEFAULT_INITIAL_ANSWER,
    ):
        """Initialize with a first round holding `initial_answer`.

        Args:
            decimals: Decimal precision of every answer.
            initial_answer: Scaled USD price for round 1.
        """
        if decimals < 0:
            raise ValueError(f"decimals must be non-negative, got {decimals}")
        self.decimals = decimals
        self.latest_round = 0
        self._rounds: dict[int, RoundData] = {}
        self.update_answer(initial_answer)

    @property
    def latest_answer(self) -> int:
        return self._rounds[self.latest_round].answer

    @property
    def latest_timestamp(self) -> datetime:
        return self._rounds[self.latest_round].updated_at

    def update_answer(self, answer: int) -> RoundData:
        """Start a new round with `answer`."""
        now = datetime.now(timezone.utc)
        return self.update_round_data(
            round_id=self.latest_round + 1,
            answer=answer,
            started_at=now,
            updated_at=now,
        )

    def update_round_data(
        self,
        round_id: int,
        answer: int,
        started_at: datetime,
        updated_at: datetime,
    ) -> RoundData:
        """Record an explicit round and make it the latest one."""
        round_data = RoundData(
            round_id=round_id,
            answer=answer,
            started_at=started_at,
            updated_at=updated_at,
            answered_in_round=round_id,
        )
        self._rounds[round_id] = round_data
        self.latest_round = round_id

        logger.debug(
            f"Aggregator round {round_id} answer set to {answer}",
            extra={"round_id": round_id, "answer": answer},
        )
        return round_data

    def get_round_data(self, round_id: int) -> RoundData:
        """Return a recorded round.

        Raises:
            LookupError: If no such round was recorded.
        """
        round_data = self._rounds.get(round_id)
        if round_data is None:
            raise LookupError(f"No data present for round {round_id}")
        return round_data

    def latest_round_data(self) -> RoundData:
        return self._rounds[self.latest_round]

    async def get_price(self) -> PriceQuote:
        return PriceQuote(answer=self.latest_answer, decimals=self.decimals)

    async def get_version(self) -> int:
        return self.version
