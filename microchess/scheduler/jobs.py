"""
Generation job: one load -> generate -> append -> trim -> persist cycle.
"""

import logging
from typing import Optional

from ..config import Settings
from ..core.records import GameRecord
from ..generator import generate_game
from ..log import GameLogStore
from ..rules.provider import RulesProvider

logger = logging.getLogger(__name__)


class GenerationJob:
    """
    Callable invoked by the scheduler.

    The store is reloaded from disk on every invocation; a persist failure
    propagates (PersistError) and leaves the previous file untouched.
    """

    def __init__(self, settings: Settings, rules: RulesProvider, clock=None) -> None:
        self.settings = settings
        self.rules = rules
        self.clock = clock

    def make_store(self) -> GameLogStore:
        return GameLogStore(
            self.settings.output_file,
            max_bytes=self.settings.max_size_bytes,
            max_write_retries=self.settings.max_write_retries,
        )

    def __call__(self) -> Optional[GameRecord]:
        store = self.make_store()
        store.load()

        run = generate_game(
            self.rules,
            seed=self.settings.seed,
            max_plies=self.settings.max_moves,
            prefer_external=self.settings.prefer_external_rng,
            clock=self.clock,
        )
        record = run.to_record()

        store.append(record)
        store.trim()
        store.persist()

        logger.info(
            "Random chess game generated and saved to %s (seed=%s, rng=%s, plies=%d, result=%s)",
            store.path,
            record.seed,
            record.rng,
            record.move_count,
            record.result,
        )
        return record
