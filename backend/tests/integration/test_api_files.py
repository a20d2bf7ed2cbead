"""Integration tests for the Files API (base + companion tables).

Test cases for:
- Workspace file create / list
- Single file read / patch / soft delete / restore
"""

OWNER_HEADERS = {"x-user-id": "user_owner"}


def _create_file(client, workspace_id, **body):
    response = client.post(f"/api/v1/workspaces/{workspace_id}/files", headers=OWNER_HEADERS, json=body)
    assert response.status_code == 201, response.text
    return response.json()


class TestFileCRUD:
    def test_create_and_get(self, client, workspace):
        created = _create_file(client, workspace.id, type="folder", description="Stuff")

        response = client.get(f"/api/v1/files/{created['id']}", headers=OWNER_HEADERS)

        assert response.status_code == 200
        data = response.json()
        assert data["title"] == "New folder"
        assert data["description"] == "Stuff"
        assert data["youtube_url"] is None
        assert data["active"] is True

    def test_create_task_is_rejected(self, client, workspace):
        response = client.post(f"/api/v1/workspaces/{workspace.id}/files", headers=OWNER_HEADERS, json={"type": "task"})
        assert response.status_code == 422

    def test_create_appends(self, client, workspace):
        _create_file(client, workspace.id, type="note")
        second = _create_file(client, workspace.id, type="note")
        assert second["order_index"] == 1

    def test_patch_companion_field(self, client, workspace):
        note = _create_file(client, workspace.id, type="note")

        response = client.patch(
            f"/api/v1/files/{note['id']}", headers=OWNER_HEADERS, json={"title": "Lecture", "content": "# Notes"}
        )

        assert response.status_code == 200
        assert response.json()["content"] == "# Notes"

    def test_patch_field_of_other_type(self, client, workspace):
        video = _create_file(client, workspace.id, type="video")
        response = client.patch(f"/api/v1/files/{video['id']}", headers=OWNER_HEADERS, json={"content": "nope"})
        assert response.status_code == 400

    def test_patch_null_title(self, client, workspace):
        note = _create_file(client, workspace.id, type="note", title="Keep")

        response = client.patch(f"/api/v1/files/{note['id']}", headers=OWNER_HEADERS, json={"title": None})

        assert response.status_code == 422
        assert client.get(f"/api/v1/files/{note['id']}", headers=OWNER_HEADERS).json()["title"] == "Keep"

    def test_get_missing(self, client):
        assert client.get("/api/v1/files/file_missing", headers=OWNER_HEADERS).status_code == 404

    def test_soft_delete_and_restore(self, client, workspace):
        note = _create_file(client, workspace.id, type="note")

        assert client.delete(f"/api/v1/files/{note['id']}", headers=OWNER_HEADERS).json()["success"] is True
        assert client.get(f"/api/v1/workspaces/{workspace.id}/files", headers=OWNER_HEADERS).json() == []
        assert client.get(f"/api/v1/files/{note['id']}", headers=OWNER_HEADERS).json()["active"] is False

        restored = client.post(f"/api/v1/files/{note['id']}/restore", headers=OWNER_HEADERS).json()
        assert restored["active"] is True
        assert restored["deleted_at"] is None
