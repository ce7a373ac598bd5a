import asyncio
import aiohttp
import pytest
from unittest import mock
from tweet_gyazo.core.errors import DownloadError, FetchError, UploadError
from tweet_gyazo.core.relay import relay_status, status_id_from_link, strip_hashtags
from tweet_gyazo.models.relay_models import GyazoUpload
from tweet_gyazo.platforms.gyazo import GyazoClient
from factories import GYAZO_URL, STATUS_URL_PATTERN, make_photo, make_status, make_upload, requests_for

LINK = "https://twitter.com/user/status/1234567890"
JPEG = b"\xff\xd8\xff\xe0fake-jpeg"

@pytest.mark.parametrize("link, expected", [
    ("https://twitter.com/user/status/1234567890", "1234567890"),
    ("https://x.com/user/status/1234567890\n", "1234567890"),
    ("https://twitter.com/user/status/1234567890/", "1234567890"),
    ("https://twitter.com/user/status/1234567890?s=20", "1234567890"),
    ("1234567890", "1234567890"),
    ("", ""),
])
def test_status_id_from_link(link, expected):
    assert status_id_from_link(link) == expected

def test_strip_hashtags_only_removes_hash():
    assert strip_hashtags("Great day! #sunset #beach") == "Great day! sunset beach"
    assert strip_hashtags("C# ## 100% &amp; ok") == "C  100% &amp; ok"
    assert strip_hashtags("no tags") == "no tags"

@pytest.mark.asyncio
async def test_relay_without_media_uploads_nothing(mock_http, test_settings):
    mock_http.get(STATUS_URL_PATTERN, payload=make_status())

    result = await relay_status(LINK, test_settings)

    assert result.status_id == "1234567890"
    assert result.uploads == []
    assert requests_for(mock_http, "POST") == []

@pytest.mark.asyncio
async def test_relay_uploads_only_photos(mock_http, test_settings):
    media = [make_photo(1), make_photo(2), make_photo(3, media_type="video")]
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=media))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.get("https://pbs.twimg.com/media/photo2.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.post(GYAZO_URL, payload=make_upload(1), repeat=True)

    result = await relay_status(LINK, test_settings)

    assert len(result.uploads) == 2
    assert len(requests_for(mock_http, "POST")) == 2
    downloaded = {str(url) for (method, url) in mock_http.requests if method == "GET"}
    assert "https://pbs.twimg.com/media/photo3.jpg" not in downloaded

@pytest.mark.asyncio
async def test_relay_sends_stripped_caption_and_referer(mock_http, test_settings):
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=[make_photo(1)]))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", body=JPEG, content_type="image/png")
    upload = mock.AsyncMock(return_value=GyazoUpload(**make_upload(1)))

    with mock.patch.object(GyazoClient, "upload", upload):
        await relay_status(LINK, test_settings)

    upload.assert_awaited_once()
    upload_request = upload.call_args.args[1]
    assert upload_request.desc == "Great day! sunset beach"
    assert upload_request.title == ""
    assert upload_request.referer_url == "https://twitter.com/user/status/1234567890/photo/1"
    assert upload.call_args.kwargs["content_type"] == "image/png"
    assert upload.call_args.kwargs["filename"] == "photo1.jpg"

@pytest.mark.asyncio
async def test_download_404_skips_upload_for_that_item(mock_http, test_settings):
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=[make_photo(1), make_photo(2)]))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", status=404)
    mock_http.get("https://pbs.twimg.com/media/photo2.jpg", body=JPEG, content_type="image/jpeg")
    upload = mock.AsyncMock(return_value=GyazoUpload(**make_upload(2)))

    with mock.patch.object(GyazoClient, "upload", upload):
        with pytest.raises(DownloadError) as exc_info:
            await relay_status(LINK, test_settings)

    assert exc_info.value.upstream_status == 404
    upload.assert_awaited_once()
    assert upload.call_args.args[1].referer_url.endswith("/photo/2")

@pytest.mark.asyncio
async def test_every_item_attempted_when_one_fails(mock_http, test_settings):
    media = [make_photo(1), make_photo(2), make_photo(3)]
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=media))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.get("https://pbs.twimg.com/media/photo2.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.get("https://pbs.twimg.com/media/photo3.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.post(GYAZO_URL, status=500, body="boom")
    mock_http.post(GYAZO_URL, payload=make_upload(2))
    mock_http.post(GYAZO_URL, payload=make_upload(3))

    with pytest.raises(UploadError):
        await relay_status(LINK, test_settings)

    assert len(requests_for(mock_http, "POST")) == 3

@pytest.mark.asyncio
async def test_uploads_run_concurrently(mock_http, test_settings):
    """The first upload only finishes once the second one has started."""
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=[make_photo(1), make_photo(2)]))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.get("https://pbs.twimg.com/media/photo2.jpg", body=JPEG, content_type="image/jpeg")
    second_started = asyncio.Event()

    async def fake_upload(image, upload_request, **kwargs):
        if upload_request.referer_url.endswith("/photo/1"):
            await asyncio.wait_for(second_started.wait(), timeout=2)
        else:
            second_started.set()
        return GyazoUpload(permalink_url=f"https://gyazo.com/{upload_request.referer_url[-1]}")

    with mock.patch.object(GyazoClient, "upload", side_effect=fake_upload):
        result = await relay_status(LINK, test_settings)

    assert sorted(u.permalink_url for u in result.uploads) == ["https://gyazo.com/1", "https://gyazo.com/2"]

@pytest.mark.asyncio
async def test_status_failure_stops_before_downloads(mock_http, test_settings):
    mock_http.get(STATUS_URL_PATTERN, status=401, payload={"errors": [{"code": 89}]})

    with pytest.raises(FetchError):
        await relay_status(LINK, test_settings)

    assert len(requests_for(mock_http, "GET")) == 1
    assert requests_for(mock_http, "POST") == []

@pytest.mark.asyncio
async def test_broken_download_stream_reported_as_download_error(mock_http, test_settings):
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=[make_photo(1)]))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", body=JPEG, content_type="image/jpeg")

    async def upload_with_truncated_image(image, upload_request, **kwargs):
        image.set_exception(aiohttp.ClientPayloadError("Response payload is not completed"))
        raise UploadError("Uploading gyazo failed msg: Response payload is not completed")

    with mock.patch.object(GyazoClient, "upload", side_effect=upload_with_truncated_image):
        with pytest.raises(DownloadError) as exc_info:
            await relay_status(LINK, test_settings)

    assert isinstance(exc_info.value.__cause__, UploadError)

@pytest.mark.asyncio
async def test_gyazo_rejection_stays_upload_error(mock_http, test_settings):
    mock_http.get(STATUS_URL_PATTERN, payload=make_status(media=[make_photo(1)]))
    mock_http.get("https://pbs.twimg.com/media/photo1.jpg", body=JPEG, content_type="image/jpeg")
    mock_http.post(GYAZO_URL, status=401, payload={"message": "You are not authorized."})

    with pytest.raises(UploadError) as exc_info:
        await relay_status(LINK, test_settings)

    assert exc_info.value.upstream_status == 401
