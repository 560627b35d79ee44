"""
Test suite for BlockService and AllocationService with mocked CRUD.

System role: Verification of block catalog and allocation rules
"""

import uuid
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.exc import OperationalError

from wathiqa.application.services.allocation_service import AllocationService
from wathiqa.application.services.block_service import BlockService
from wathiqa.core.exceptions import (
    ArchiveStoreError,
    BlockAlreadyFixedError,
    BlockAlreadyRegisteredError,
    InvalidFormatError,
    UnknownBlockError,
)

BLOCK_CRUD = "wathiqa.application.services.block_service.block_crud"
SECTION_CRUD = "wathiqa.application.services.allocation_service.section_crud"


class TestRegisterCustomBlock:
    @pytest.mark.asyncio
    async def test_register_returns_label(self, mock_db_session) -> None:
        with patch(BLOCK_CRUD) as mock_crud:
            mock_crud.register = AsyncMock(return_value=True)

            label = await BlockService(mock_db_session).register_custom_block("XY")

        assert label == "XY"
        mock_crud.register.assert_awaited_once_with(mock_db_session, "XY", created_by=None)

    @pytest.mark.asyncio
    async def test_conflict_raises_already_registered(self, mock_db_session) -> None:
        with patch(BLOCK_CRUD) as mock_crud:
            mock_crud.register = AsyncMock(return_value=False)

            with pytest.raises(BlockAlreadyRegisteredError):
                await BlockService(mock_db_session).register_custom_block("XY")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", ["A", "M", "Z"])
    async def test_fixed_letters_never_reach_store(self, mock_db_session, label: str) -> None:
        with patch(BLOCK_CRUD) as mock_crud:
            with pytest.raises(BlockAlreadyFixedError):
                await BlockService(mock_db_session).register_custom_block(label)

        mock_crud.register.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", ["ab", "ABCD", "", "A-B"])
    async def test_malformed_labels(self, mock_db_session, label: str) -> None:
        with pytest.raises(InvalidFormatError):
            await BlockService(mock_db_session).register_custom_block(label)

    @pytest.mark.asyncio
    async def test_store_failure_is_transient_error(self, mock_db_session) -> None:
        with patch(BLOCK_CRUD) as mock_crud:
            mock_crud.register = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("x")))

            with pytest.raises(ArchiveStoreError):
                await BlockService(mock_db_session).register_custom_block("XY")


class TestBlockExists:
    @pytest.mark.asyncio
    async def test_fixed_block_needs_no_lookup(self, mock_db_session) -> None:
        with patch(BLOCK_CRUD) as mock_crud:
            assert await BlockService(mock_db_session).block_exists("K")

        mock_crud.get_by_label.assert_not_called()

    def test_list_fixed_blocks(self) -> None:
        blocks = BlockService.list_fixed_blocks()

        assert blocks[0] == "A"
        assert blocks[-1] == "Z"
        assert len(blocks) == 26


class TestAllocationService:
    @pytest.mark.asyncio
    async def test_allocate_unknown_block(self, mock_db_session) -> None:
        block_service = MagicMock()
        block_service.block_exists = AsyncMock(return_value=False)

        with pytest.raises(UnknownBlockError):
            await AllocationService(mock_db_session, block_service).allocate("QQ", "1", "1")

    @pytest.mark.asyncio
    async def test_allocate_validates_before_lookup(self, mock_db_session) -> None:
        block_service = MagicMock()
        block_service.block_exists = AsyncMock(return_value=True)

        with pytest.raises(InvalidFormatError):
            await AllocationService(mock_db_session, block_service).allocate("A", "x", "1")

        block_service.block_exists.assert_not_called()

    @pytest.mark.asyncio
    async def test_resolve_section_returns_section_id(self, mock_db_session) -> None:
        section = MagicMock()
        section.id = uuid.uuid4()

        with patch(SECTION_CRUD) as mock_crud:
            mock_crud.get_or_create = AsyncMock(return_value=(section, True))

            section_id = await AllocationService(mock_db_session).resolve_section("A.1.1")

        assert section_id == section.id
        address = mock_crud.get_or_create.call_args.args[1]
        assert address.reference == "A.1.1"

    @pytest.mark.asyncio
    async def test_resolve_section_store_failure(self, mock_db_session) -> None:
        with patch(SECTION_CRUD) as mock_crud:
            mock_crud.get_or_create = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("x")))

            with pytest.raises(ArchiveStoreError) as exc_info:
                await AllocationService(mock_db_session).resolve_section("A.1.1")

        assert exc_info.value.details["operation"] == "resolve_section"
