"""
Profile repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from weekplan.models.profile import Profile, ProfileUpdate


class IProfileRepository(ABC):
    @abstractmethod
    async def get(self, user_id: str) -> Optional[Profile]:
        pass

    @abstractmethod
    async def upsert(self, user_id: str, update: ProfileUpdate) -> Profile:
        pass
