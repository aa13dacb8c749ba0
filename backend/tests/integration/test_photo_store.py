"""Integration tests: photo store adapter (blob write + location tagging)."""
from unittest.mock import MagicMock, patch

import pytest

from repositories.location_repository import get_location
from site_core.errors import NotFoundError, StoreError, TransportError
from site_core.photo_store import LocalBlobStore, PhotoType, photo_path, upload_photo
from site_core.status import LocationStatus, classify

pytestmark = pytest.mark.integration


def test_before_then_after_transitions_status(db_session, make_location, blob_store):
    """pending -> partial after 'before', -> complete after 'after'."""
    loc = make_location("NGMSC00083")
    assert classify(loc) is LocationStatus.pending

    upload_photo(db_session, blob_store, loc.id, "before", b"jpeg-before", "before.jpg")
    assert classify(get_location(db_session, loc.id)) is LocationStatus.partial

    upload_photo(db_session, blob_store, loc.id, PhotoType.after, b"jpeg-after", "after.jpg")
    assert classify(get_location(db_session, loc.id)) is LocationStatus.complete


def test_upload_writes_blob_and_sets_reference(db_session, make_location, blob_store):
    """The blob lands under photos/{id}/ and the location stores its URL and upload time."""
    loc = make_location("NGMSC00083")
    url = upload_photo(db_session, blob_store, loc.id, PhotoType.before, b"data", "site photo.jpg")
    assert url.startswith(f"http://testserver/media/photos/{loc.id}/before_")
    assert url.endswith("_site_photo.jpg")
    relative = url.removeprefix("http://testserver/media/")
    assert (blob_store.root / relative).read_bytes() == b"data"
    photo = get_location(db_session, loc.id).before_photo
    assert photo.url == url
    assert photo.uploaded_at.tzinfo is not None


def test_reupload_overwrites_reference_keeps_old_blob(db_session, make_location, blob_store):
    """Last write wins for the slot; the earlier blob is not deleted."""
    loc = make_location("NGMSC00083")
    with patch("site_core.photo_store._timestamp_ms", side_effect=[1000, 2000]):
        first = upload_photo(db_session, blob_store, loc.id, PhotoType.after, b"one", "a.jpg")
        second = upload_photo(db_session, blob_store, loc.id, PhotoType.after, b"two", "a.jpg")
    assert first != second
    assert get_location(db_session, loc.id).after_photo.url == second
    assert (blob_store.root / first.removeprefix("http://testserver/media/")).exists()


def test_upload_to_missing_location_writes_nothing(db_session, blob_store):
    """Unknown location: NotFoundError and no blob written."""
    store = MagicMock(wraps=blob_store)
    with pytest.raises(NotFoundError):
        upload_photo(db_session, store, "no-such-id", PhotoType.before, b"data", "a.jpg")
    store.write.assert_not_called()


def test_metadata_failure_leaves_orphan_blob(db_session, make_location, blob_store):
    """If the location update fails after the blob write, the blob stays and no reference is set."""
    loc = make_location("NGMSC00083")
    with patch("site_core.photo_store.update_location", side_effect=StoreError("update failed")):
        with pytest.raises(StoreError):
            upload_photo(db_session, blob_store, loc.id, PhotoType.before, b"data", "a.jpg")
    assert list((blob_store.root / "photos" / loc.id).iterdir())
    assert get_location(db_session, loc.id).before_photo is None


def test_blob_write_failure_is_transport_error(db_session, make_location, blob_store):
    """Blob store failures raise TransportError and leave the location untouched."""
    loc = make_location("NGMSC00083")
    store = MagicMock()
    store.write.side_effect = TransportError("unreachable")
    with pytest.raises(TransportError):
        upload_photo(db_session, store, loc.id, PhotoType.before, b"data", "a.jpg")
    assert get_location(db_session, loc.id).before_photo is None


def test_invalid_photo_type(db_session, make_location, blob_store):
    """Only before/after are accepted."""
    loc = make_location("NGMSC00083")
    with pytest.raises(ValueError):
        upload_photo(db_session, blob_store, loc.id, "during", b"data", "a.jpg")


def test_photo_path_sanitizes_filename():
    """Directory parts and unsafe characters are stripped from the filename."""
    assert photo_path("loc-1", PhotoType.before, "../../etc/passwd", 5) == "photos/loc-1/before_5_passwd"
    assert photo_path("loc-1", PhotoType.after, None, 5) == "photos/loc-1/after_5_photo"
    assert photo_path("loc-1", PhotoType.after, "my pic (1).png", 5) == "photos/loc-1/after_5_my_pic_1_.png"


def test_local_blob_store_rejects_escaping_paths(tmp_path):
    """Paths resolving outside the root are refused."""
    store = LocalBlobStore(tmp_path, "http://testserver/media")
    with pytest.raises(TransportError):
        store.write("../outside.jpg", b"x")


def test_long_filename_is_shortened_keeping_extension(db_session, make_location, blob_store):
    """A very long client filename is cut down before it reaches the filesystem."""
    loc = make_location("NGMSC00083")
    url = upload_photo(db_session, blob_store, loc.id, PhotoType.before, b"data", "a" * 245 + ".jpg")
    name = url.rsplit("/", 1)[-1]
    assert name.endswith(".jpg")
    assert len(name) <= 130
    assert (blob_store.root / url.removeprefix("http://testserver/media/")).read_bytes() == b"data"
    assert get_location(db_session, loc.id).before_photo.url == url


def test_photo_path_caps_name_length():
    """The sanitized name part never exceeds 100 characters."""
    path = photo_path("loc-1", PhotoType.after, "b" * 300 + ".png", 1000)
    name = path.removeprefix("photos/loc-1/after_1000_")
    assert len(name) == 100
    assert name.endswith(".png")
    assert photo_path("loc-1", PhotoType.after, "short.png", 1000) == "photos/loc-1/after_1000_short.png"
