import asyncio
import json
import httpx
import pytest

from services import transcription as transcription_module
from services.transcription import TranscriptionService


def assemblyai_transport(poll_statuses, upload_status=200):
    statuses = iter(poll_statuses)
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append((request.method, request.url.path, request.headers.get("authorization")))
        if request.url.path == "/v2/upload":
            return httpx.Response(upload_status, json={"upload_url": "https://cdn.example.com/up/1"})
        if request.method == "POST" and request.url.path == "/v2/transcript":
            assert json.loads(request.content) == {"audio_url": "https://cdn.example.com/up/1"}
            return httpx.Response(200, json={"id": "tr_1", "status": "queued"})
        status = next(statuses)
        body = {"id": "tr_1", "status": status}
        if status == "completed":
            body.update({"text": "Hello world", "confidence": 0.9,
                         "audio_url": "https://cdn.example.com/up/1",
                         "words": [{"text": "Hello", "start": 0, "end": 300, "confidence": 0.9},
                                   {"text": "world", "start": 350, "end": 700, "confidence": 0.9}]})
        if status == "error":
            body["error"] = "audio too short"
        return httpx.Response(200, json=body)

    return httpx.MockTransport(handler), seen


def test_upload_returns_url(tmp_path):
    audio = tmp_path / "speech.mp3"
    audio.write_bytes(b"ID3fake")
    transport, seen = assemblyai_transport([])
    service = TranscriptionService(api_key="key", transport=transport)

    url = asyncio.run(service.upload_file(str(audio), "audio/mpeg"))

    assert url == "https://cdn.example.com/up/1"
    assert seen == [("POST", "/v2/upload", "key")]


def test_upload_maps_invalid_key(tmp_path):
    audio = tmp_path / "speech.mp3"
    audio.write_bytes(b"ID3fake")
    transport, _ = assemblyai_transport([], upload_status=401)
    service = TranscriptionService(api_key="bad", transport=transport)

    with pytest.raises(Exception, match="Invalid AssemblyAI API key"):
        asyncio.run(service.upload_file(str(audio), "audio/mpeg"))


def test_requires_api_key(monkeypatch):
    monkeypatch.setattr(transcription_module.Config, "ASSEMBLYAI_API_KEY", None)
    service = TranscriptionService()

    with pytest.raises(Exception, match="not configured"):
        asyncio.run(service.transcribe_audio("https://cdn.example.com/up/1"))


def test_transcribe_polls_until_completed():
    transport, seen = assemblyai_transport(["queued", "processing", "completed"])
    service = TranscriptionService(api_key="key", transport=transport)
    service.poll_interval = 0

    result = asyncio.run(service.transcribe_audio("https://cdn.example.com/up/1"))
    parsed = service.parse_transcription_result(result)

    assert [path for _, path, _ in seen].count("/v2/transcript/tr_1") == 3
    assert parsed.id == "tr_1"
    assert parsed.text == "Hello world"
    assert [w.text for w in parsed.words] == ["Hello", "world"]


def test_transcribe_surfaces_job_error():
    transport, _ = assemblyai_transport(["processing", "error"])
    service = TranscriptionService(api_key="key", transport=transport)
    service.poll_interval = 0

    with pytest.raises(Exception, match="audio too short"):
        asyncio.run(service.transcribe_audio("https://cdn.example.com/up/1"))
