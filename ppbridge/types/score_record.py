"""Score record model shared by the calculator, runner and CLI."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator, validator

from ppbridge.difficulty.constants import MAX_DIFFICULTY_VALUE

DERIVED_FIELDS = ("stars_total", "stars_aim", "stars_speed", "pp")


class ScoreRecord(BaseModel):
    """
    One gameplay attempt as stored by the score service.

    Identity fields, judgement counts and difficulty inputs are passed through
    untouched; only the derived fields in ``DERIVED_FIELDS`` are recomputed.
    Unknown keys are kept so they can be echoed back.
    """

    model_config = ConfigDict(extra="allow")

    # Identity
    id: int
    uuid: str
    map_md5: str

    score: int = Field(default=0, ge=0)

    # Derived
    pp: float = 0.0
    stars_total: float = 0.0
    stars_aim: float = 0.0
    stars_speed: float = 0.0

    flags: int = 0
    grade: str = ""
    accuracy: float = Field(default=100.0, ge=0.0, le=100.0)
    ur: float = 0.0
    combo: int = Field(default=0, ge=0)
    mods: int = 0
    exp_mods: int = 0

    # Judgements
    count_300: int = Field(default=0, ge=0)
    count_100: int = Field(default=0, ge=0)
    count_50: int = Field(default=0, ge=0)
    count_sb: int = Field(default=0, ge=0)
    count_miss: int = Field(default=0, ge=0)
    count_geki: int = Field(default=0, ge=0)
    count_katu: int = Field(default=0, ge=0)

    # Difficulty inputs
    speed_multiplier: float = Field(default=1.0, gt=0.0)
    cs: float = Field(default=5.0, ge=0.0, le=MAX_DIFFICULTY_VALUE)
    ar: float = Field(default=5.0, ge=0.0, le=MAX_DIFFICULTY_VALUE)
    od: float = Field(default=5.0, ge=0.0, le=MAX_DIFFICULTY_VALUE)
    hp: float = Field(default=5.0, ge=0.0, le=MAX_DIFFICULTY_VALUE)

    max_combo: int = Field(default=0, ge=0)
    status: int = 0

    online_checksum: Optional[str] = None
    perfect: bool = False
    updated_at: str = ""

    @validator("speed_multiplier", "cs", "ar", "od", "hp", "accuracy")
    def validate_finite(cls, value: float) -> float:  # noqa: D417
        if not np.isfinite(value):
            raise ValueError("must be a finite number")
        return value

    @model_validator(mode="after")
    def validate_combo(self) -> "ScoreRecord":
        if self.combo > self.max_combo:
            raise ValueError(
                f"combo {self.combo} exceeds max_combo {self.max_combo}"
            )
        return self

    @property
    def total_hits(self) -> int:
        return self.count_300 + self.count_100 + self.count_50 + self.count_miss

    def derived(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in DERIVED_FIELDS}

    def to_json(self, **kwargs: Any) -> str:
        return self.model_dump_json(**kwargs)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScoreRecord":
        return cls.model_validate(data)

    @classmethod
    def from_json(cls, json_str: str) -> "ScoreRecord":
        return cls.from_dict(json.loads(json_str))
