from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

GuidancePriority = Literal["critical", "important", "suggested"]
GuidanceTarget = Literal["findings", "jobmatch", "ai-settings"]


class GuidanceItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    priority: GuidancePriority
    title: str
    description: str
    action_label: str
    action_target: GuidanceTarget
