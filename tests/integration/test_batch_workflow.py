"""BatchQueue driven through AsyncDevToolsClient against the in-process app."""

import io
import zipfile

import httpx
import pytest
from PIL import Image

from devtools.main import app
from devtools_sdk import AsyncDevToolsClient, BatchQueue, EntryStatus, UploadedFile
from devtools_sdk.exceptions import ValidationError

pytestmark = pytest.mark.integration


@pytest.fixture
async def client():
    transport = httpx.ASGITransport(app=app)
    async with AsyncDevToolsClient(
        base_url="http://testserver/api", transport=transport
    ) as client:
        yield client


@pytest.mark.asyncio
async def test_convert_all_with_one_bad_file(client, png_bytes, jpeg_bytes):
    notifications = []
    async with BatchQueue(
        client.convert_image, target_format="png", on_notify=notifications.append
    ) as queue:
        queue.enqueue(
            [
                UploadedFile(filename="one.png", data=png_bytes),
                UploadedFile(filename="broken.png", data=b"not an image"),
                UploadedFile(filename="three.jpg", data=jpeg_bytes),
            ]
        )

        summary = await queue.convert_all()

        assert [e.status for e in queue.entries] == [
            EntryStatus.CONVERTED,
            EntryStatus.FAILED,
            EntryStatus.CONVERTED,
        ]
        assert summary.converted == 2
        assert summary.failed == 1
        assert "Invalid image data" in queue.entries[1].error

        items = queue.download_all()
        assert [i.filename for i in items] == ["one.png", "three.png"]
        for item in items:
            assert Image.open(io.BytesIO(item.data)).format == "PNG"

        with zipfile.ZipFile(io.BytesIO(queue.build_archive())) as zf:
            assert zf.namelist() == ["one.png", "three.png"]

    assert [n.title for n in notifications] == [
        "Conversion complete",
        "Conversion failed",
        "Conversion complete",
    ]


@pytest.mark.asyncio
async def test_client_tools_round_trip(client, square_png_bytes):
    ico = await client.generate_ico(square_png_bytes, "logo.png", [16, 32])
    assert Image.open(io.BytesIO(ico)).info["sizes"] == {(16, 16), (32, 32)}

    card = await client.og_image(square_png_bytes, "logo.png", "webp")
    assert Image.open(io.BytesIO(card)).size == (1200, 630)

    css = await client.theme_css(dark={"primary": "#ffffff"})
    assert ".dark {" in css

    with pytest.raises(ValidationError) as exc_info:
        await client.theme_css(light={"primary": "nope"})
    assert exc_info.value.error_code == "VAL400"

    palettes = await client.get_theme()
    assert "background" in palettes.keys

    tools = await client.list_tools()
    assert tools[0].title == "Image Converter"

    health = await client.health_check()
    assert health.status == "healthy"
