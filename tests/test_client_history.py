from blogcms.client import HistoryRecorder, ImageFile, PostAggregate, PostPatch
from tests.conftest import api_for, png_bytes


def test_n_updates_give_n_plus_one_entries(client, seed_users):
    api = api_for(client, "writer@example.com")
    aggregate = PostAggregate(api)
    post = aggregate.create("A")
    for i in range(3):
        aggregate.update(post.post_id, PostPatch(content=f"v{i}"))

    entries = HistoryRecorder(api).list(post.post_id)
    assert [e.version_no for e in entries] == [1, 2, 3, 4]
    assert entries[-1].content == "v2"

    newest = HistoryRecorder(api).list(post.post_id, newest_first=True)
    assert [e.version_no for e in newest] == [4, 3, 2, 1]


def test_present_sections(client, seed_users, upload_dir):
    api = api_for(client, "writer@example.com")
    aggregate = PostAggregate(api)
    post = aggregate.create("A")
    aggregate.images.stage([ImageFile(filename="a.png", content=png_bytes(), content_type="image/png")])
    aggregate.images.commit(post.post_id)
    aggregate.update(post.post_id, PostPatch(content="<p>Body</p>"))

    created, updated = HistoryRecorder(api).list(post.post_id)
    assert HistoryRecorder.present_sections(created) == ["title"]
    assert HistoryRecorder.present_sections(updated) == ["title", "content", "images"]


def test_history_of_deleted_post_still_listed(client, seed_users):
    writer = PostAggregate(api_for(client, "writer@example.com"))
    post = writer.create("Temporary")
    admin_api = api_for(client, "admin@example.com")
    PostAggregate(admin_api).delete(post.post_id)

    entries = HistoryRecorder(admin_api).list(post.post_id)
    assert [e.title for e in entries] == ["Temporary"]
