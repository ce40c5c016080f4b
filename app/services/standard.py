import uuid

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.standard import Standard, Certification
from app.schemas.standard import (
    StandardCreate,
    StandardUpdate,
    CertificationCreate,
    CertificationUpdate,
)
from app.core.exceptions import NotFoundError, ConflictError


class StandardService:
    """Reference list of accounting standards and their certifications."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: StandardCreate) -> Standard:
        if await self._get_by_code(data.code):
            raise ConflictError("Standard code already exists")

        standard = Standard(**data.model_dump())
        self.db.add(standard)
        await self.db.commit()
        await self.db.refresh(standard)
        logger.bind(standard_id=str(standard.id)).info("Standard created: {}", standard.code)
        return standard

    async def get_by_id(self, standard_id: uuid.UUID) -> Standard:
        result = await self.db.execute(
            select(Standard).where(Standard.id == standard_id)
        )
        standard = result.scalar_one_or_none()
        if not standard:
            raise NotFoundError("Standard not found")
        return standard

    async def get_all(self) -> list[Standard]:
        result = await self.db.execute(select(Standard).order_by(Standard.name))
        return list(result.scalars().all())

    async def update(self, standard_id: uuid.UUID, data: StandardUpdate) -> Standard:
        standard = await self.get_by_id(standard_id)
        update_data = data.model_dump(exclude_unset=True)

        new_code = update_data.get("code")
        if new_code and new_code != standard.code and await self._get_by_code(new_code):
            raise ConflictError("Standard code already exists")

        for field, value in update_data.items():
            setattr(standard, field, value)

        await self.db.commit()
        await self.db.refresh(standard)
        return standard

    async def delete(self, standard_id: uuid.UUID) -> None:
        """Delete a standard; its certifications go with it."""
        standard = await self.get_by_id(standard_id)
        await self.db.delete(standard)
        await self.db.commit()
        logger.bind(standard_id=str(standard_id)).info("Standard deleted")

    async def _get_by_code(self, code: str) -> Standard | None:
        result = await self.db.execute(select(Standard).where(Standard.code == code))
        return result.scalar_one_or_none()


class CertificationService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, data: CertificationCreate) -> Certification:
        await StandardService(self.db).get_by_id(data.standard_id)

        certification = Certification(**data.model_dump())
        self.db.add(certification)
        await self.db.commit()
        await self.db.refresh(certification)
        return certification

    async def get_by_id(self, certification_id: uuid.UUID) -> Certification:
        result = await self.db.execute(
            select(Certification).where(Certification.id == certification_id)
        )
        certification = result.scalar_one_or_none()
        if not certification:
            raise NotFoundError("Certification not found")
        return certification

    async def get_all(self, standard_id: uuid.UUID | None = None) -> list[Certification]:
        query = select(Certification).order_by(Certification.name)
        if standard_id:
            query = query.where(Certification.standard_id == standard_id)
        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def update(
        self, certification_id: uuid.UUID, data: CertificationUpdate
    ) -> Certification:
        certification = await self.get_by_id(certification_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("standard_id"):
            await StandardService(self.db).get_by_id(update_data["standard_id"])

        for field, value in update_data.items():
            setattr(certification, field, value)

        await self.db.commit()
        await self.db.refresh(certification)
        return certification

    async def delete(self, certification_id: uuid.UUID) -> None:
        certification = await self.get_by_id(certification_id)
        await self.db.delete(certification)
        await self.db.commit()
