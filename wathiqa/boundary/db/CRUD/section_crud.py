"""
Section CRUD operations.

Dependencies: sqlalchemy, wathiqa.boundary.db.models, wathiqa.core.addressing
System role: Address to section resolution
"""

from sqlalchemy import distinct, select
from sqlalchemy.ext.asyncio import AsyncSession

from wathiqa.boundary.db.CRUD.base_crud import BaseCRUD
from wathiqa.boundary.db.models.section_model import SectionModel
from wathiqa.core.addressing import Address
from wathiqa.core.exceptions import ArchiveStoreError


class SectionCRUD(BaseCRUD[SectionModel]):
    """
    CRUD operations for SectionModel.

    Sections are only ever created through get_or_create.
    """

    def __init__(self) -> None:
        """Initialize SectionCRUD with SectionModel."""
        super().__init__(SectionModel)

    async def get_by_reference(
        self,
        session: AsyncSession,
        reference: str,
    ) -> SectionModel | None:
        """
        Retrieve the section bound to a canonical reference.

        Args:
            session: Async database session
            reference: Canonical ``block.row.column`` string

        Returns:
            SectionModel if bound, None otherwise
        """
        stmt = select(SectionModel).where(SectionModel.reference == reference)
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_or_create(
        self,
        session: AsyncSession,
        address: Address,
    ) -> tuple[SectionModel, bool]:
        """
        Return the section for ``address``, creating it on first use.

        Reads first; on a miss inserts with ON CONFLICT DO NOTHING and
        re-reads, so concurrent callers converge on one row.

        Args:
            session: Async database session
            address: Validated address

        Returns:
            (section, created) where created is True only for the inserting call

        Raises:
            ArchiveStoreError: Row vanished between insert and re-read
        """
        section = await self.get_by_reference(session, address.reference)
        if section is not None:
            return section, False

        created = await self.insert_if_absent(
            session,
            conflict_on=["reference"],
            reference=address.reference,
            block_label=address.block,
            row_label=address.row,
            column_label=address.column,
        )
        section = await self.get_by_reference(session, address.reference)
        if section is None:
            raise ArchiveStoreError(
                f"Section {address.reference} missing after insert",
                operation="resolve_section",
                details={"reference": address.reference},
            )
        return section, created

    async def get_row_labels(self, session: AsyncSession, block_label: str) -> list[str]:
        """
        Distinct row labels that have at least one section in ``block_label``.

        Returns:
            Row labels in numeric order ("2" before "10")
        """
        stmt = select(distinct(SectionModel.row_label)).where(
            SectionModel.block_label == block_label
        )
        result = await session.execute(stmt)
        return sorted(result.scalars().all(), key=lambda label: (int(label), label))

    async def get_by_row(
        self,
        session: AsyncSession,
        block_label: str,
        row_label: str,
    ) -> list[SectionModel]:
        """
        Sections allocated under ``block_label.row_label``.

        Returns:
            SectionModels in numeric column order
        """
        stmt = select(SectionModel).where(
            SectionModel.block_label == block_label,
            SectionModel.row_label == row_label,
        )
        result = await session.execute(stmt)
        return sorted(
            result.scalars().all(),
            key=lambda section: (int(section.column_label), section.column_label),
        )


section_crud = SectionCRUD()
