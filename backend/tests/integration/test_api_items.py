"""Integration tests for the single-table Items API (/folders).

Test cases for:
- Item create / list / patch / move
- Trash: soft delete, restore, permanent delete
- Ownership checks
"""

import pytest

from app.components.sync import ItemDraft
from app.repositories import item_repository

OWNER_HEADERS = {"x-user-id": "user_owner"}


def _create_item(client, workspace_id, **body):
    response = client.post(f"/api/v1/folders/{workspace_id}/items", headers=OWNER_HEADERS, json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestItemCRUD:
    def test_create_appends_after_siblings(self, client, workspace):
        first = _create_item(client, workspace.id, type="note", title="One")
        second = _create_item(client, workspace.id, type="task")

        assert first["order_index"] == 0
        assert second["order_index"] == 1
        assert second["title"] == "New item"
        assert second["id"].startswith("item_")

    def test_create_with_explicit_order_index(self, client, workspace):
        item = _create_item(client, workspace.id, type="section", order_index=10)
        assert item["order_index"] == 10

    def test_create_video_derives_youtube_id(self, client, workspace):
        item = _create_item(client, workspace.id, type="video", youtube_url="https://youtu.be/xyz")
        assert item["youtube_id"] == "xyz"

    def test_create_rejects_unknown_type(self, client, workspace):
        response = client.post(
            f"/api/v1/folders/{workspace.id}/items", headers=OWNER_HEADERS, json={"type": "spreadsheet"}
        )
        assert response.status_code == 422

    def test_create_in_foreign_workspace(self, client, other_workspace):
        response = client.post(
            f"/api/v1/folders/{other_workspace.id}/items", headers=OWNER_HEADERS, json={"type": "note"}
        )
        assert response.status_code == 403

    def test_list_is_ordered(self, client, workspace):
        _create_item(client, workspace.id, type="note", title="B", order_index=2)
        _create_item(client, workspace.id, type="note", title="A", order_index=1)

        items = client.get(f"/api/v1/folders/{workspace.id}/items", headers=OWNER_HEADERS).json()
        assert [item["title"] for item in items] == ["A", "B"]

    def test_list_requires_caller(self, client, workspace):
        assert client.get(f"/api/v1/folders/{workspace.id}/items").status_code == 401

    def test_patch_fields(self, client, workspace):
        task = _create_item(client, workspace.id, type="task")

        response = client.patch(
            f"/api/v1/folders/items/{task['id']}",
            headers=OWNER_HEADERS,
            json={"title": "Do it", "completed": True},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "Do it"
        assert data["completed"] is True
        assert data["completed_at"] is not None

    def test_patch_empty_body(self, client, workspace):
        note = _create_item(client, workspace.id, type="note")
        response = client.patch(f"/api/v1/folders/items/{note['id']}", headers=OWNER_HEADERS, json={})
        assert response.status_code == 400

    @pytest.mark.parametrize("field", ["title", "completed", "active"])
    def test_patch_null_for_required_field(self, client, workspace, field):
        task = _create_item(client, workspace.id, type="task", title="Keep")

        response = client.patch(f"/api/v1/folders/items/{task['id']}", headers=OWNER_HEADERS, json={field: None})

        assert response.status_code == 422
        items = client.get(f"/api/v1/folders/{workspace.id}/items", headers=OWNER_HEADERS).json()
        assert items[0]["title"] == "Keep"

    def test_patch_missing_item(self, client):
        response = client.patch("/api/v1/folders/items/item_missing", headers=OWNER_HEADERS, json={"title": "x"})
        assert response.status_code == 404

    def test_patch_foreign_item(self, client, db_session, other_workspace):
        foreign = item_repository.insert(db_session, other_workspace.id, ItemDraft(type="note", order_index=0))
        response = client.patch(f"/api/v1/folders/items/{foreign['id']}", headers=OWNER_HEADERS, json={"title": "x"})
        assert response.status_code == 403

    def test_move(self, client, workspace):
        folder = _create_item(client, workspace.id, type="folder")
        note = _create_item(client, workspace.id, type="note")

        response = client.patch(
            f"/api/v1/folders/items/{note['id']}/order",
            headers=OWNER_HEADERS,
            json={"order_index": 3, "parent_id": folder["id"]},
        )

        assert response.status_code == 200
        assert (response.json()["order_index"], response.json()["parent_id"]) == (3, folder["id"])


class TestTrash:
    def test_delete_restore_purge(self, client, workspace):
        note = _create_item(client, workspace.id, type="note")
        url = f"/api/v1/folders/items/{note['id']}"

        response = client.delete(url, headers=OWNER_HEADERS)
        assert response.json() == {"success": True, "id": note["id"]}
        assert client.get(f"/api/v1/folders/{workspace.id}/items", headers=OWNER_HEADERS).json() == []

        trash = client.get(f"/api/v1/folders/{workspace.id}/trash", headers=OWNER_HEADERS).json()
        assert [item["id"] for item in trash] == [note["id"]]

        restored = client.post(f"{url}/restore", headers=OWNER_HEADERS).json()
        assert restored["deleted_at"] is None

        assert client.delete(f"{url}/permanent", headers=OWNER_HEADERS).json()["success"] is True
        assert client.delete(url, headers=OWNER_HEADERS).status_code == 404

    def test_trash_newest_first(self, client, db_session, workspace):
        older = item_repository.insert(db_session, workspace.id, ItemDraft(type="note", order_index=0))
        newer = item_repository.insert(db_session, workspace.id, ItemDraft(type="note", order_index=1))
        item_repository.update(db_session, item_repository.get_by_id(db_session, older["id"]), {"deleted_at": 1000})
        item_repository.update(db_session, item_repository.get_by_id(db_session, newer["id"]), {"deleted_at": 2000})

        trash = client.get(f"/api/v1/folders/{workspace.id}/trash", headers=OWNER_HEADERS).json()
        assert [item["id"] for item in trash] == [newer["id"], older["id"]]
