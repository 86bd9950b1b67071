"""
Idea Box API: Box Service Unit Tests
====================================

What:  Tests for BoxService (list, get, create, update, delete).
How:   Uses the mock DB session; no real database.

What we test:
    ✅ Nested ideas mapped without a box back-reference
    ✅ Missing box raises NotFoundError("box")
    ✅ Create/update responses carry an empty ideas list
    ✅ Update overwrites both title and description
    ✅ Delete removes ideas before the box
    ✅ SQLAlchemy failures become StorageError
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from ideabox.exceptions import NotFoundError, StorageError
from ideabox.models import Box
from ideabox.schemas.box import BoxRequest
from ideabox.services.box_service import BoxService


def result_with(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def result_with_all(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = values
    return result


def make_idea(idea_id, title="Idea", description=""):
    idea = MagicMock()
    idea.id = idea_id
    idea.title = title
    idea.description = description
    return idea


def make_box(box_id, title="Box", description="", ideas=None):
    box = MagicMock()
    box.id = box_id
    box.title = title
    box.description = description
    box.ideas = ideas or []
    return box


class TestBoxServiceRead:
    """Tests for list_boxes and get_box."""

    def setup_method(self):
        self.service = BoxService()

    @pytest.mark.asyncio
    async def test_list_boxes_empty(self, mock_db_session):
        mock_db_session.execute.return_value = result_with_all([])

        result = await self.service.list_boxes(mock_db_session)

        assert result == []

    @pytest.mark.asyncio
    async def test_list_boxes_with_nested_ideas(self, mock_db_session):
        boxes = [
            make_box(1, "Travel", ideas=[make_idea(1, "Visit Kyoto"), make_idea(2, "Hike")]),
            make_box(2, "Books"),
        ]
        mock_db_session.execute.return_value = result_with_all(boxes)

        result = await self.service.list_boxes(mock_db_session)

        assert [b.id for b in result] == [1, 2]
        assert [i.title for i in result[0].ideas] == ["Visit Kyoto", "Hike"]
        assert result[1].ideas == []
        assert "box_id" not in result[0].ideas[0].model_dump()

    @pytest.mark.asyncio
    async def test_get_box_found(self, mock_db_session):
        box = make_box(5, "Travel", "places", ideas=[make_idea(9, "Visit Kyoto")])
        mock_db_session.execute.return_value = result_with(box)

        result = await self.service.get_box(mock_db_session, 5)

        assert result.id == 5
        assert result.description == "places"
        assert result.ideas[0].id == 9

    @pytest.mark.asyncio
    async def test_get_box_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError, match="box not found"):
            await self.service.get_box(mock_db_session, 404)

    @pytest.mark.asyncio
    async def test_list_boxes_storage_failure(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("database is locked"))
        )

        with pytest.raises(StorageError) as exc_info:
            await self.service.list_boxes(mock_db_session)

        assert exc_info.value.message == "could not list boxes"
        assert exc_info.value.context["error_type"] == "OperationalError"


class TestBoxServiceWrite:
    """Tests for create_box, update_box and delete_box."""

    def setup_method(self):
        self.service = BoxService()

    @pytest.mark.asyncio
    async def test_create_box_returns_empty_ideas(self, mock_db_session):
        mock_db_session.add.side_effect = lambda obj: setattr(obj, "id", 7)

        result = await self.service.create_box(
            mock_db_session, BoxRequest(title="Travel")
        )

        assert result.id == 7
        assert result.title == "Travel"
        assert result.description == ""
        assert result.ideas == []
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_box_flush_failure(self, mock_db_session):
        mock_db_session.flush = AsyncMock(side_effect=SQLAlchemyError("boom"))

        with pytest.raises(StorageError, match="could not create box"):
            await self.service.create_box(mock_db_session, BoxRequest(title="Travel"))

    @pytest.mark.asyncio
    async def test_update_box_overwrites_both_fields(self, mock_db_session):
        box = Box(id=3, title="Old", description="keep me?")
        mock_db_session.execute.return_value = result_with(box)

        result = await self.service.update_box(
            mock_db_session, 3, BoxRequest(title="New")
        )

        assert box.title == "New"
        assert box.description == ""
        assert result.title == "New"
        assert result.description == ""
        assert result.ideas == []

    @pytest.mark.asyncio
    async def test_update_box_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError):
            await self.service.update_box(mock_db_session, 3, BoxRequest(title="New"))

        mock_db_session.flush.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_box_deletes_ideas_then_box(self, mock_db_session):
        ideas_deleted = MagicMock(rowcount=2)
        mock_db_session.execute = AsyncMock(
            side_effect=[result_with(Box(id=1, title="Travel")), ideas_deleted, MagicMock()]
        )

        await self.service.delete_box(mock_db_session, 1)

        assert mock_db_session.execute.await_count == 3
        ideas_stmt = mock_db_session.execute.await_args_list[1].args[0]
        box_stmt = mock_db_session.execute.await_args_list[2].args[0]
        assert str(ideas_stmt).startswith("DELETE FROM ideas")
        assert str(box_stmt).startswith("DELETE FROM boxes")

    @pytest.mark.asyncio
    async def test_delete_box_not_found(self, mock_db_session):
        mock_db_session.execute.return_value = result_with(None)

        with pytest.raises(NotFoundError, match="box not found"):
            await self.service.delete_box(mock_db_session, 1)

        assert mock_db_session.execute.await_count == 1
