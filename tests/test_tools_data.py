"""Tests for association, custom field, media, object and social media tools."""

import base64

import pytest
from mcp.server.fastmcp.exceptions import ToolError

from ghl_mcp.models import SocialMedia
from ghl_mcp.tools import associations, custom_fields, media, objects, social_media


class TestAssociations:
    def test_create_association(self, fake_client):
        fake_client.post.return_value = {"id": "a1", "key": "student_tutor"}

        result = associations.create_association(
            "student_tutor", "student", "custom_objects.student", "tutor", "contact",
        )

        body = fake_client.post.call_args.kwargs["json"]
        assert body == {
            "locationId": "loc123",
            "key": "student_tutor",
            "firstObjectLabel": "student",
            "firstObjectKey": "custom_objects.student",
            "secondObjectLabel": "tutor",
            "secondObjectKey": "contact",
        }
        assert result["success"] is True


class TestCustomFields:
    def test_create_folder(self, fake_client):
        custom_fields.create_custom_field_folder("custom_objects.pet", "Medical")

        fake_client.post.assert_called_once_with("/custom-fields/folder", json={
            "objectKey": "custom_objects.pet",
            "name": "Medical",
            "locationId": "loc123",
        })

    def test_delete_folder_passes_location(self, fake_client):
        custom_fields.delete_custom_field_folder("f1")

        fake_client.delete.assert_called_once_with("/custom-fields/folder/f1", params={"locationId": "loc123"})


class TestMedia:
    """Tests for media library browsing and uploads."""

    def test_query_searches_files_only(self, fake_client):
        fake_client.get.return_value = {"files": [{"_id": "f1"}], "total": 1}

        result = media.get_media_files(query="logo")

        fake_client.get.assert_called_once()
        params = fake_client.get.call_args.kwargs["params"]
        assert fake_client.get.call_args.args[0] == "/medias/files"
        assert params["type"] == "file"
        assert params["query"] == "logo"
        assert params["altId"] == "loc123"
        assert result == {
            "success": True,
            "files": [{"_id": "f1"}],
            "total": 1,
            "message": "Found 1 files matching \"logo\"",
        }

    def test_type_lists_one_kind(self, fake_client):
        fake_client.get.return_value = {"files": [{"_id": "d1"}, {"_id": "d2"}]}

        result = media.get_media_files(type="folder")

        fake_client.get.assert_called_once()
        assert fake_client.get.call_args.kwargs["params"]["type"] == "folder"
        assert result["folders"] == [{"_id": "d1"}, {"_id": "d2"}]
        assert "files" not in result
        assert result["total"] == 2

    def test_no_filter_lists_files_and_folders(self, fake_client):
        fake_client.get.side_effect = [
            {"files": [{"_id": "f1"}]},
            {"files": [{"_id": "d1"}, {"_id": "d2"}]},
        ]

        result = media.get_media_files(limit=5)

        types = [c.kwargs["params"]["type"] for c in fake_client.get.call_args_list]
        assert types == ["file", "folder"]
        assert result["files"] == [{"_id": "f1"}]
        assert result["folders"] == [{"_id": "d1"}, {"_id": "d2"}]
        assert result["message"] == "Retrieved 1 files and 2 folders"

    def test_hosted_upload_needs_url(self, fake_client):
        with pytest.raises(ToolError, match="file_url is required"):
            media.upload_media_file(hosted=True)
        fake_client.upload.assert_not_called()

    def test_direct_upload_needs_file(self, fake_client):
        with pytest.raises(ToolError, match="file is required"):
            media.upload_media_file()

    def test_hosted_upload(self, fake_client):
        fake_client.upload.return_value = {"fileId": "f1", "url": "https://cdn.example/f1.png"}

        result = media.upload_media_file(file_url="https://x.example/logo.png", hosted=True, name="logo.png")

        kwargs = fake_client.upload.call_args.kwargs
        assert fake_client.upload.call_args.args[0] == "/medias/upload-file"
        assert kwargs["fields"]["hosted"] is True
        assert kwargs["fields"]["fileUrl"] == "https://x.example/logo.png"
        assert kwargs["fields"]["altId"] == "loc123"
        assert "files" not in kwargs
        assert result["file_id"] == "f1"

    def test_direct_upload_decodes_base64(self, fake_client):
        fake_client.upload.return_value = {"fileId": "f2"}
        encoded = base64.b64encode(b"PNGDATA").decode()

        media.upload_media_file(file=encoded, name="a.png", content_type="image/png")

        files = fake_client.upload.call_args.kwargs["files"]
        assert files == {"file": ("a.png", b"PNGDATA", "image/png")}


class TestObjects:
    def test_owner_limit(self, fake_client):
        with pytest.raises(ToolError, match="owner accepts at most 1"):
            objects.create_object_record("custom_objects.pet", {"name": "Rex"}, owner=["u1", "u2"])
        fake_client.post.assert_not_called()

    def test_create_record(self, fake_client):
        fake_client.post.return_value = {"record": {"id": "r1"}}

        result = objects.create_object_record("custom_objects.pet", {"name": "Rex"})

        assert fake_client.post.call_args.args[0] == "/objects/custom_objects.pet/records"
        assert result["record_id"] == "r1"


class TestSocialMedia:
    """Tests for social planner tools."""

    def test_search_defaults_to_last_30_days(self, fake_client):
        fake_client.post.return_value = {"results": {"posts": [{"_id": "p1"}], "count": 1}}

        result = social_media.search_social_posts()

        body = fake_client.post.call_args.kwargs["json"]
        assert fake_client.post.call_args.args[0] == "/social-media-posting/loc123/posts/list"
        assert body["skip"] == "0"
        assert body["limit"] == "10"
        assert body["includeUsers"] == "true"
        assert body["fromDate"] < body["toDate"]
        assert result["posts"] == [{"_id": "p1"}]
        assert result["count"] == 1

    def test_search_keeps_explicit_dates(self, fake_client):
        social_media.search_social_posts(type="scheduled", from_date="2025-01-01T00:00:00Z", to_date="2025-02-01T00:00:00Z")

        body = fake_client.post.call_args.kwargs["json"]
        assert body["fromDate"] == "2025-01-01T00:00:00Z"
        assert body["toDate"] == "2025-02-01T00:00:00Z"

    def test_create_post_fills_user(self, fake_client):
        fake_client.post.return_value = {"results": {"post": {"_id": "p1"}}}

        result = social_media.create_social_post(
            ["acc1"], "Hello", media=[SocialMedia(url="https://x.example/a.png", type="image/png")],
            status="scheduled", schedule_date="2025-10-20T09:00:00Z",
        )

        body = fake_client.post.call_args.kwargs["json"]
        assert body["userId"] == "mcp-server"
        assert body["createdBy"] == "mcp-server"
        assert body["media"] == [{"url": "https://x.example/a.png", "type": "image/png"}]
        assert result["post_id"] == "p1"
        assert result["message"] == "Social media post created successfully and scheduled"

    def test_update_post_keeps_existing_fields(self, fake_client):
        """Fields left out of an update keep the current post's values."""
        fake_client.get.return_value = {"results": {"post": {
            "type": "reel",
            "media": [{"url": "https://x.example/v.mp4"}],
            "status": "scheduled",
            "scheduleDate": "2025-10-20T09:00:00Z",
        }}}
        fake_client.put.return_value = {"results": {"post": {"_id": "p1"}}}

        social_media.update_social_post("p1", ["acc1"], "New caption")

        body = fake_client.put.call_args.kwargs["json"]
        assert body["type"] == "reel"
        assert body["media"] == [{"url": "https://x.example/v.mp4"}]
        assert body["status"] == "scheduled"
        assert body["scheduleDate"] == "2025-10-20T09:00:00Z"
        assert body["summary"] == "New caption"

    def test_bulk_delete_limit(self, fake_client):
        with pytest.raises(ToolError, match="at most 50"):
            social_media.bulk_delete_social_posts([f"p{i}" for i in range(51)])
        fake_client.post.assert_not_called()

    def test_bulk_delete(self, fake_client):
        fake_client.post.return_value = {"results": {"deletedCount": 2}}

        result = social_media.bulk_delete_social_posts(["p1", "p2"])

        assert result["deleted_count"] == 2

    def test_csv_upload_rejects_non_base64(self, fake_client):
        with pytest.raises(ToolError, match="base64"):
            social_media.upload_social_csv("not base64!")

    def test_platform_accounts_path(self, fake_client):
        social_media.get_platform_accounts("google", "oauth1")

        assert fake_client.get.call_args.args[0] == "/social-media-posting/oauth/loc123/google/locations/oauth1"
