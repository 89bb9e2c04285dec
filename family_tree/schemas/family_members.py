from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FamilyMemberBase(BaseModel):
    # Records carry whatever extra keys the editor sends; keep them.
    model_config = ConfigDict(extra="allow")

    externalId: str = Field(min_length=1)
    name: str = Field(min_length=1)
    birth: str | None = None
    death: str | None = None
    biologicalSex: str | None = None
    notes: str | None = None
    father: str | None = None
    monarch: str | None = None
    isSuccessionSon: bool | None = None


class FamilyMemberCreate(FamilyMemberBase):
    pass


class FamilyMemberUpdate(FamilyMemberBase):
    id: int | None = None


class FamilyMember(FamilyMemberBase):
    id: int


class FamilyMemberMutationResponse(BaseModel):
    success: bool = True
    member: dict[str, Any]


class FamilyMemberDeleteResponse(BaseModel):
    success: bool = True
    deletedMember: dict[str, Any]


class BulkUpdateResponse(BaseModel):
    success: bool = True
    message: str
    backupPath: str


class BackupResponse(BaseModel):
    filename: str
    size: int
    createdAt: datetime


class BackupListResponse(BaseModel):
    items: list[BackupResponse]
