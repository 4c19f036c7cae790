import io

from blueprints.upload import build_object_key


class FailingStorage:
    def put_object(self, key, body, content_type):
        raise ConnectionError("endpoint unreachable")

    def public_url(self, key):
        raise AssertionError("should not be called")


def post_image(client, headers, filename="cat.png", data=b"\x89PNG fake"):
    return client.post(
        "/api/upload-image",
        data={"image": (io.BytesIO(data), filename, "image/png")},
        content_type="multipart/form-data",
        headers=headers,
    )


def test_build_object_key_uses_millis_and_safe_name():
    assert build_object_key("cat.png", now=1700000000.1234) == "uploads/1700000000123-cat.png"
    assert build_object_key("../../etc/passwd", now=1).endswith("-etc_passwd")
    assert build_object_key("???", now=1) == "uploads/1000-image"


def test_upload_requires_login(client):
    res = post_image(client, {})
    assert res.status_code == 401


def test_upload_stores_image_and_returns_url(client, auth_headers, storage):
    res = post_image(client, auth_headers)
    assert res.status_code == 200

    url = res.get_json()["url"]
    assert url.startswith("https://pub.example.test/uploads/")
    assert url.endswith("-cat.png")

    key = url.removeprefix("https://pub.example.test/")
    body, content_type = storage.objects[key]
    assert body == b"\x89PNG fake"
    assert content_type == "image/png"


def test_upload_missing_file_field(client, auth_headers):
    res = client.post(
        "/api/upload-image",
        data={},
        content_type="multipart/form-data",
        headers=auth_headers,
    )
    assert res.status_code == 400
    assert res.get_json()["message"] == "No image file provided"


def test_upload_without_bucket_is_config_error(flask_app, client, auth_headers, storage):
    flask_app.config["R2_BUCKET_NAME"] = ""
    res = post_image(client, auth_headers)
    assert res.status_code == 500
    assert res.get_json()["message"] == "R2 bucket name not configured"
    assert storage.objects == {}


def test_upload_storage_failure(flask_app, client, auth_headers):
    flask_app.extensions["demoshelf.storage"] = FailingStorage()
    res = post_image(client, auth_headers)
    assert res.status_code == 500
    body = res.get_json()
    assert body["message"] == "Upload to R2 failed"
    assert "endpoint unreachable" in body["error"]
