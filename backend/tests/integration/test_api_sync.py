"""Integration tests for the batch sync endpoints.

Test cases for:
- /folders/{id}/sync (items family)
- /workspaces/{id}/sync and /workspaces/sync (files family)
- Batch-level authorization errors
"""

from app.components.sync import ItemDraft
from app.repositories import file_repository, item_repository

OWNER_HEADERS = {"x-user-id": "user_owner"}


class TestItemsSync:
    def test_temp_rename_scenario(self, client, workspace):
        response = client.post(
            f"/api/v1/folders/{workspace.id}/sync",
            headers=OWNER_HEADERS,
            json={
                "operations": [
                    {"id": "temp-1", "type": "CREATE", "timestamp": 1, "data": {"type": "folder", "title": "Folder"}},
                    {"id": "temp-2", "type": "CREATE", "timestamp": 2, "data": {"type": "note", "parent_id": "temp-1"}},
                    {"id": "temp-1", "type": "UPDATE", "timestamp": 3, "field": "title", "value": "Renamed"},
                ]
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["synced"] == 3
        assert data["failed"] == 0
        assert data["errors"] == []
        assert set(data["tempIdMap"]) == {"temp-1", "temp-2"}

        items = client.get(f"/api/v1/folders/{workspace.id}/items", headers=OWNER_HEADERS).json()
        by_id = {item["id"]: item for item in items}
        folder_id = data["tempIdMap"]["temp-1"]
        assert by_id[folder_id]["title"] == "Renamed"
        assert by_id[data["tempIdMap"]["temp-2"]]["parent_id"] == folder_id

    def test_reorder_round_trips(self, client, db_session, workspace):
        note = item_repository.insert(db_session, workspace.id, ItemDraft(type="note", order_index=0))

        response = client.post(
            f"/api/v1/folders/{workspace.id}/sync",
            headers=OWNER_HEADERS,
            json={"operations": [{"id": note["id"], "type": "UPDATE_ORDER", "data": {"order_index": 5, "parent_id": None}}]},
        )

        assert response.json()["results"][0]["item"]["order_index"] == 5
        items = client.get(f"/api/v1/folders/{workspace.id}/items", headers=OWNER_HEADERS).json()
        assert (items[0]["order_index"], items[0]["parent_id"]) == (5, None)

    def test_empty_operations(self, client, workspace):
        for body in ({}, {"operations": []}, {"operations": None}):
            response = client.post(f"/api/v1/folders/{workspace.id}/sync", headers=OWNER_HEADERS, json=body)
            assert response.json() == {
                "success": True,
                "synced": 0,
                "failed": 0,
                "results": [],
                "errors": [],
                "tempIdMap": {},
            }

    def test_per_operation_failure_is_reported(self, client, workspace):
        response = client.post(
            f"/api/v1/folders/{workspace.id}/sync",
            headers=OWNER_HEADERS,
            json={"operations": [{"id": "temp-1", "type": "CREATE", "data": {"type": "spreadsheet"}}]},
        )

        data = response.json()
        assert response.status_code == 200
        assert data["success"] is False
        assert data["failed"] == 1
        assert data["errors"][0].startswith("Failed to process CREATE temp-1:")


class TestSyncAuthorization:
    def test_missing_caller_is_401(self, client, workspace):
        response = client.post(f"/api/v1/folders/{workspace.id}/sync", json={"operations": []})
        assert response.status_code == 401

    def test_foreign_workspace_is_403(self, client, other_workspace):
        response = client.post(
            f"/api/v1/folders/{other_workspace.id}/sync",
            headers=OWNER_HEADERS,
            json={"operations": [{"id": "temp-1", "type": "CREATE", "data": {"type": "note"}}]},
        )
        assert response.status_code == 403
        assert response.json()["detail"] == "Workspace does not belong to user"

    def test_missing_workspace_is_404(self, client):
        response = client.post("/api/v1/workspaces/ws_missing/sync", headers=OWNER_HEADERS, json={"operations": []})
        assert response.status_code == 404

    def test_caller_wide_sync_requires_caller(self, client):
        response = client.post("/api/v1/workspaces/sync", json={"operations": []})
        assert response.status_code == 401

    def test_operation_without_id_is_rejected(self, client, workspace):
        response = client.post(
            f"/api/v1/folders/{workspace.id}/sync",
            headers=OWNER_HEADERS,
            json={"operations": [{"type": "CREATE", "data": {"type": "note"}}]},
        )
        assert response.status_code == 422


class TestFilesSync:
    def test_workspace_sync_creates_companion_rows(self, client, workspace):
        response = client.post(
            f"/api/v1/workspaces/{workspace.id}/sync",
            headers=OWNER_HEADERS,
            json={
                "operations": [
                    {
                        "id": "temp-v",
                        "type": "CREATE",
                        "data": {"type": "video", "title": "Talk", "youtube_url": "https://youtu.be/abc"},
                    }
                ]
            },
        )

        item = response.json()["results"][0]["item"]
        assert item["id"].startswith("file_")
        assert item["title"] == "Talk"
        assert item["youtube_id"] == "abc"
        assert item["content"] is None

    def test_caller_wide_sync(self, client, db_session, workspace, other_workspace):
        existing = file_repository.insert(db_session, workspace.id, ItemDraft(type="note", order_index=0))

        response = client.post(
            "/api/v1/workspaces/sync",
            headers=OWNER_HEADERS,
            json={
                "operations": [
                    {"id": "temp-1", "type": "CREATE", "workspaceId": workspace.id, "data": {"type": "folder"}},
                    {"id": "temp-2", "type": "CREATE", "workspaceId": other_workspace.id, "data": {"type": "note"}},
                    {"id": existing["id"], "type": "DELETE"},
                    {"id": "temp-gone", "type": "DELETE"},
                ]
            },
        )

        data = response.json()
        assert data["synced"] == 2
        assert data["failed"] == 0
        assert list(data["tempIdMap"]) == ["temp-1"]

        files = client.get(f"/api/v1/workspaces/{workspace.id}/files", headers=OWNER_HEADERS).json()
        assert [f["id"] for f in files] == [data["tempIdMap"]["temp-1"]]
