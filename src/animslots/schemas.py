from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class DTOBase(BaseModel):
    model_config = ConfigDict(extra="forbid")


class AnimSlot(StrEnum):
    IDLE = "idle"
    WALK = "walk"
    SPRINT = "sprint"
    SNEAK = "sneak"
    AIR = "air"
    ON_CLIMBABLE = "on_climbable"
    ON_CLIMBABLE_UP = "on_climbable_up"
    ON_CLIMBABLE_DOWN = "on_climbable_down"
    SWIM = "swim"
    CRAWL = "crawl"
    RIDE = "ride"
    SLEEP = "sleep"
    ELYTRA_FLY = "elytra_fly"
    LIE_DOWN = "lie_down"
    DIE = "die"


DEFAULT_SLOTS: tuple[str, ...] = tuple(slot.value for slot in AnimSlot)


class SlotEntry(DTOBase):
    name: str
    display_name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError("slot name must not be empty")
        return normalized


class EditorStats(DTOBase):
    mapped: int = Field(ge=0)
    slots: int = Field(ge=0)
    available_files: int = Field(ge=0)

    def render(self) -> str:
        return f"{self.mapped} / {self.slots} · files: {self.available_files}"
