"""Jobs repository."""
from __future__ import annotations

from typing import Dict

from gridwar.data.errors import DataValidationError
from gridwar.data.repositories.base import RepositoryBase
from gridwar.domain.defs import AutoAttackRange, JobDef

VALID_RANGE_SHAPES = {"circle"}

_JOB_FIELDS = {
    "attack_power",
    "max_life_points",
    "raid_interval",
    "raid_power",
    "auto_attack_range",
    "auto_attack_targets",
}
_RANGE_FIELDS = {"range_shape_key", "min_reach", "max_reach"}


class JobsRepository(RepositoryBase[JobDef]):
    """Loads and validates job definitions."""

    def __init__(self, base_path=None) -> None:
        super().__init__("jobs.json", base_path)

    def _build(self, raw: dict[str, object]) -> Dict[str, JobDef]:
        jobs: Dict[str, JobDef] = {}
        for raw_id, payload in raw.items():
            if not isinstance(raw_id, str):
                raise DataValidationError("Job IDs must be strings.")
            context = f"job '{raw_id}'"
            job_data = self._require_mapping(payload, context)
            self._assert_required(job_data, _JOB_FIELDS, context)
            self._assert_no_unknown(job_data, _JOB_FIELDS, context)

            jobs[raw_id] = JobDef(
                id=raw_id,
                attack_power=self._require_int(job_data["attack_power"], f"{context} attack_power", minimum=0),
                max_life_points=self._require_int(
                    job_data["max_life_points"], f"{context} max_life_points", minimum=1
                ),
                raid_interval=self._require_int(job_data["raid_interval"], f"{context} raid_interval", minimum=0),
                raid_power=self._require_int(job_data["raid_power"], f"{context} raid_power", minimum=0),
                auto_attack_range=self._build_range(job_data["auto_attack_range"], context),
                auto_attack_targets=self._require_int(
                    job_data["auto_attack_targets"], f"{context} auto_attack_targets", minimum=0
                ),
            )
        return jobs

    def _build_range(self, payload: object, context: str) -> AutoAttackRange:
        range_context = f"{context} auto_attack_range"
        range_data = self._require_mapping(payload, range_context)
        self._assert_required(range_data, _RANGE_FIELDS, range_context)
        self._assert_no_unknown(range_data, _RANGE_FIELDS, range_context)
        min_reach = self._require_int(range_data["min_reach"], f"{range_context} min_reach", minimum=0)
        max_reach = self._require_int(range_data["max_reach"], f"{range_context} max_reach", minimum=0)
        if min_reach > max_reach:
            raise DataValidationError(f"{range_context} min_reach must not exceed max_reach.")
        return AutoAttackRange(
            range_shape_key=self._require_literal(
                range_data["range_shape_key"], VALID_RANGE_SHAPES, f"{range_context} range_shape_key"
            ),
            min_reach=min_reach,
            max_reach=max_reach,
        )
