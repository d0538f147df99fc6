from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select

from beacon.db.models.snapshot import AppSnapshot


class SnapshotRepository:
    """Репозиторий для снимков состояния приложения"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_payload(self, key: str) -> Optional[str]:
        """Получение сохраненного снимка по ключу"""
        result = await self.session.execute(
            select(AppSnapshot).where(AppSnapshot.key == key)
        )
        snapshot = result.scalar_one_or_none()
        return snapshot.payload if snapshot else None

    async def save_payload(self, key: str, payload: str) -> None:
        """Создание или перезапись снимка по первичному ключу"""
        await self.session.merge(AppSnapshot(key=key, payload=payload))

        try:
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
