"""Stages repository."""
from __future__ import annotations

from typing import Dict, List

from gridwar.data.errors import DataReferenceError, DataValidationError
from gridwar.data.repositories.base import RepositoryBase
from gridwar.data.repositories.jobs_repo import JobsRepository
from gridwar.domain.defs import AppearanceDef, PlayerCreatureDef, StageDef

VALID_SKILL_CATEGORIES = {"attack", "defense", "support"}

_REQUIRED_STAGE_FIELDS = {"name", "headquarters_life_points", "player_creatures", "appearances"}
_STAGE_FIELDS = _REQUIRED_STAGE_FIELDS | {"rows", "cols"}
_PLAYER_CREATURE_FIELDS = {"job_id", "skill_category_id"}
_APPEARANCE_FIELDS = {"turn_number", "job_ids"}


class StagesRepository(RepositoryBase[StageDef]):
    """Loads stage setups and checks their job references."""

    def __init__(self, base_path=None, jobs_repo: JobsRepository | None = None) -> None:
        super().__init__("stages.json", base_path)
        self._jobs_repo = jobs_repo or JobsRepository(base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, StageDef]:
        stages: Dict[str, StageDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Stage IDs must be strings.")
            context = f"stage '{raw_id}'"
            stage_data = self._require_mapping(payload, context)
            self._assert_required(stage_data, _REQUIRED_STAGE_FIELDS, context)
            self._assert_no_unknown(stage_data, _STAGE_FIELDS, context)

            player_creatures = self._build_player_creatures(stage_data["player_creatures"], context)
            appearances = self._build_appearances(stage_data["appearances"], context)
            for job_id in [c.job_id for c in player_creatures] + [j for a in appearances for j in a.job_ids]:
                self._assert_job_exists(job_id, context)

            stages[raw_id] = StageDef(
                id=raw_id,
                name=self._require_str(stage_data["name"], f"{context} name"),
                headquarters_life_points=self._require_int(
                    stage_data["headquarters_life_points"], f"{context} headquarters_life_points", minimum=1
                ),
                player_creatures=tuple(player_creatures),
                appearances=tuple(appearances),
                rows=self._optional_size(stage_data, "rows", context),
                cols=self._optional_size(stage_data, "cols", context),
            )
        return stages

    def _build_player_creatures(self, payload: object, context: str) -> List[PlayerCreatureDef]:
        creatures: List[PlayerCreatureDef] = []
        for index, entry in enumerate(self._require_list(payload, f"{context} player_creatures")):
            entry_context = f"{context} player_creatures[{index}]"
            entry_data = self._require_mapping(entry, entry_context)
            self._assert_required(entry_data, _PLAYER_CREATURE_FIELDS, entry_context)
            self._assert_no_unknown(entry_data, _PLAYER_CREATURE_FIELDS, entry_context)
            creatures.append(
                PlayerCreatureDef(
                    job_id=self._require_str(entry_data["job_id"], f"{entry_context} job_id"),
                    skill_category_id=self._require_literal(
                        entry_data["skill_category_id"],
                        VALID_SKILL_CATEGORIES,
                        f"{entry_context} skill_category_id",
                    ),
                )
            )
        return creatures

    def _build_appearances(self, payload: object, context: str) -> List[AppearanceDef]:
        appearances: List[AppearanceDef] = []
        seen_turns: set[int] = set()
        for index, entry in enumerate(self._require_list(payload, f"{context} appearances")):
            entry_context = f"{context} appearances[{index}]"
            entry_data = self._require_mapping(entry, entry_context)
            self._assert_required(entry_data, _APPEARANCE_FIELDS, entry_context)
            self._assert_no_unknown(entry_data, _APPEARANCE_FIELDS, entry_context)
            turn_number = self._require_int(entry_data["turn_number"], f"{entry_context} turn_number", minimum=1)
            if turn_number in seen_turns:
                raise DataValidationError(f"{context} schedules turn {turn_number} more than once.")
            seen_turns.add(turn_number)
            appearances.append(
                AppearanceDef(
                    turn_number=turn_number,
                    job_ids=tuple(self._require_str_list(entry_data["job_ids"], f"{entry_context} job_ids")),
                )
            )
        return appearances

    def _optional_size(self, stage_data: dict[str, object], key: str, context: str) -> int | None:
        if key not in stage_data:
            return None
        return self._require_int(stage_data[key], f"{context} {key}", minimum=1)

    def _assert_job_exists(self, job_id: str, context: str) -> None:
        try:
            self._jobs_repo.get(job_id)
        except KeyError as exc:
            raise DataReferenceError(f"{context} references unknown job '{job_id}'.") from exc
