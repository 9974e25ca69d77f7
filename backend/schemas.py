from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from lasergrid.settings import DEFAULT_SETTINGS, BoardSettings


class SettingsModel(BaseModel):
    size: int = Field(default=DEFAULT_SETTINGS.size, ge=1, le=32)
    minimum_combine_length: int = Field(
        default=DEFAULT_SETTINGS.minimum_combine_length,
        ge=1,
        alias="minimumCombineLength",
        description="Run length needed before pieces can be merged.",
    )
    allow_diagonal_placement: bool = Field(
        default=DEFAULT_SETTINGS.allow_diagonal_placement,
        alias="allowDiagonalPlacement",
    )
    fixed_start: bool = Field(default=DEFAULT_SETTINGS.fixed_start, alias="fixedStart")
    auto_upgrade: bool = Field(default=DEFAULT_SETTINGS.auto_upgrade, alias="autoUpgrade")
    ruins: bool = DEFAULT_SETTINGS.ruins

    class Config:
        populate_by_name = True

    def to_settings(self) -> BoardSettings:
        return BoardSettings(**self.model_dump())


class StartGameRequest(BaseModel):
    participant_id: str = Field(..., min_length=1, alias="participantId")
    settings: SettingsModel = Field(default_factory=SettingsModel)

    class Config:
        populate_by_name = True


class ParticipantRequest(BaseModel):
    participant_id: str = Field(..., min_length=1, alias="participantId")

    class Config:
        populate_by_name = True


class UpdateBoardRequest(BaseModel):
    participant_id: str = Field(..., min_length=1, alias="participantId")
    board: Dict[str, Any] = Field(
        ...,
        description="Whole-board snapshot in the lasergrid codec format.",
    )

    class Config:
        populate_by_name = True


class SnapshotRequest(BaseModel):
    uuid: Optional[str] = None
    game: Optional[str] = None
