"""Image attachment endpoints: batch validation, storage and rename/remove."""

from pathlib import Path

from tests.conftest import auth_headers, create_post, png_bytes


def _upload(client, headers, post_id, files, names=None):
    data = {"image_names": names} if names is not None else None
    return client.post(f"/api/posts/{post_id}/images", headers=headers, files=files, data=data)


def test_upload_batch_stores_images_in_order(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    files = [
        ("images", ("a.png", png_bytes(4, 3), "image/png")),
        ("images", ("b.jpg", png_bytes(8, 6, "JPEG"), "image/jpeg")),
    ]
    resp = _upload(client, headers, post["post_id"], files, names=["first", "second"])
    assert resp.status_code == 201, resp.text
    images = resp.json()
    assert [img["name"] for img in images] == ["first", "second"]
    assert (images[0]["width"], images[0]["height"]) == (4, 3)
    assert (images[1]["width"], images[1]["height"]) == (8, 6)
    for img in images:
        assert img["url"].startswith(f"/uploads/posts/{post['post_id']}/")
        assert (Path(upload_dir) / img["public_id"]).exists()

    more = _upload(client, headers, post["post_id"], [("images", ("c.png", png_bytes(), "image/png"))])
    assert more.status_code == 201
    assert more.json()[0]["name"] == "c"

    detail = client.get(f"/api/posts/{post['post_id']}", headers=headers).json()
    assert [img["name"] for img in detail["images"]] == ["first", "second", "c"]


def test_upload_rejects_whole_batch_on_one_bad_file(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    files = [
        ("images", ("ok.png", png_bytes(), "image/png")),
        ("images", ("notes.pdf", b"%PDF-1.4", "application/pdf")),
    ]
    resp = _upload(client, headers, post["post_id"], files)
    assert resp.status_code == 400

    detail = client.get(f"/api/posts/{post['post_id']}", headers=headers).json()
    assert detail["images"] == []
    assert not list(Path(upload_dir).rglob("*.png"))


def test_upload_rejects_oversize_file(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    big = b"\x89PNG\r\n\x1a\n" + b"\x00" * (6 * 1024 * 1024)
    resp = _upload(client, headers, post["post_id"], [("images", ("big.png", big, "image/png"))])
    assert resp.status_code == 400
    assert "big.png" in resp.json()["detail"]


def test_upload_rejects_empty_and_undecodable(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    empty = _upload(client, headers, post["post_id"], [("images", ("e.png", b"", "image/png"))])
    assert empty.status_code == 400
    junk = _upload(client, headers, post["post_id"], [("images", ("j.png", b"not an image", "image/png"))])
    assert junk.status_code == 400


def test_upload_name_count_mismatch(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    files = [("images", ("a.png", png_bytes(), "image/png"))]
    resp = _upload(client, headers, post["post_id"], files, names=["one", "two"])
    assert resp.status_code == 400


def test_upload_to_unknown_post(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    resp = _upload(client, headers, 9999, [("images", ("a.png", png_bytes(), "image/png"))])
    assert resp.status_code == 404


def test_rename_image_is_idempotent(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    image = _upload(client, headers, post["post_id"], [("images", ("a.png", png_bytes(), "image/png"))]).json()[0]
    url = f"/api/posts/{post['post_id']}/images/{image['image_id']}"

    first = client.put(url, headers=headers, json={"name": "cover"})
    second = client.put(url, headers=headers, json={"name": "cover"})
    assert first.status_code == second.status_code == 200
    assert first.json() == second.json()
    assert second.json()["name"] == "cover"

    assert client.put(url, headers=headers, json={"name": "  "}).status_code == 422
    missing = f"/api/posts/{post['post_id']}/images/9999"
    assert client.put(missing, headers=headers, json={"name": "x"}).status_code == 404


def test_remove_image_deletes_file(client, seed_users, upload_dir):
    headers = auth_headers(client, "writer@example.com")
    post = create_post(client, headers)
    image = _upload(client, headers, post["post_id"], [("images", ("a.png", png_bytes(), "image/png"))]).json()[0]
    url = f"/api/posts/{post['post_id']}/images/{image['image_id']}"

    assert client.delete(url, headers=headers).status_code == 204
    assert not (Path(upload_dir) / image["public_id"]).exists()
    assert client.delete(url, headers=headers).status_code == 404

    detail = client.get(f"/api/posts/{post['post_id']}", headers=headers).json()
    assert detail["images"] == []


def test_delete_post_removes_stored_files(client, seed_users, upload_dir):
    writer = auth_headers(client, "writer@example.com")
    admin = auth_headers(client, "admin@example.com")
    post = create_post(client, writer)
    image = _upload(client, writer, post["post_id"], [("images", ("a.png", png_bytes(), "image/png"))]).json()[0]

    assert client.delete(f"/api/posts/{post['post_id']}", headers=admin).status_code == 204
    assert not (Path(upload_dir) / image["public_id"]).exists()
