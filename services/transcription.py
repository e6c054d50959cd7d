import asyncio
import httpx
import logging
from typing import Dict, Any, Optional
from config import Config
from models import TranscriptionResult
import os

class TranscriptionService:
    def __init__(self, api_key: Optional[str] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key or Config.ASSEMBLYAI_API_KEY
        self.base_url = Config.ASSEMBLYAI_BASE_URL
        self.poll_interval = Config.POLL_INTERVAL
        self.max_poll_attempts = Config.MAX_POLL_ATTEMPTS
        self.transport = transport
        self.audio_mime_types = {
            ".mp3": "audio/mpeg",
            ".wav": "audio/wav",
        }

    async def upload_file(self, file_path: str, mime_type: str) -> str:
        """Upload audio file to AssemblyAI and return its upload URL"""
        if not self.api_key:
            raise Exception("AssemblyAI API key not configured")

        headers = {"authorization": self.api_key}

        try:
            if not os.path.exists(file_path):
                raise Exception(f"File not found: {file_path}")

            file_size = os.path.getsize(file_path)
            logging.info(f"Uploading file: {file_path} ({file_size} bytes)")

            file_extension = os.path.splitext(file_path)[1].lower()
            effective_mime_type = self.audio_mime_types.get(file_extension, mime_type)
            if effective_mime_type != mime_type:
                logging.info(f"Overriding guessed MIME type {mime_type} with {effective_mime_type} for extension {file_extension}")

            timeout = httpx.Timeout(
                connect=30.0,
                read=Config.UPLOAD_TIMEOUT,
                write=Config.UPLOAD_TIMEOUT,
                pool=30.0
            )

            async with httpx.AsyncClient(
                timeout=timeout,
                follow_redirects=True,
                transport=self.transport
            ) as client:
                with open(file_path, "rb") as f:
                    files_payload = {"file": (os.path.basename(file_path), f, effective_mime_type)}

                    response = await client.post(
                        f"{self.base_url}/upload",
                        files=files_payload,
                        headers=headers
                    )

                if response.status_code == 401:
                    raise Exception("Invalid AssemblyAI API key")
                elif response.status_code == 413:
                    raise Exception("File too large for AssemblyAI")
                elif response.status_code == 429:
                    raise Exception("Rate limit exceeded - please try again later")
                elif response.status_code not in [200, 201]:
                    error_text = response.text if response.content else "Unknown error"
                    raise Exception(f"Upload failed: {response.status_code} - {error_text}")

                upload_url = response.json().get("upload_url")
                if not upload_url:
                    raise Exception("No upload URL returned from AssemblyAI")

                logging.info(f"File uploaded successfully: {upload_url}")
                return upload_url

        except httpx.TimeoutException as e:
            logging.error(f"Upload timeout: {e}")
            raise Exception("Upload timeout - try with a smaller file or check your connection")
        except Exception as e:
            logging.error(f"Error during file upload: {e}")
            raise Exception(f"File upload error: {str(e)}")

    async def transcribe_audio(self, audio_url: str) -> Dict[str, Any]:
        """Submit audio for transcription and poll for the result."""
        if not self.api_key:
            raise Exception("AssemblyAI API key not configured")

        headers = {
            "authorization": self.api_key,
            "content-type": "application/json"
        }

        try:
            async with httpx.AsyncClient(timeout=30.0, transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/transcript",
                    headers=headers,
                    json={"audio_url": audio_url}
                )

                if response.status_code != 200:
                    error_text = response.text if response.content else "Unknown error"
                    raise Exception(f"Failed to submit transcription job: {response.status_code} - {error_text}")

                transcript_id = response.json().get("id")
                if not transcript_id:
                    raise Exception("Failed to get transcript ID from submission response.")

                logging.info(f"Transcription job submitted successfully. Transcript ID: {transcript_id}")

                return await self._poll_transcript(client, transcript_id, headers)

        except httpx.TimeoutException:
            raise Exception("Timeout when submitting transcription job.")
        except Exception as e:
            logging.error(f"Error during transcription submission or polling: {e}")
            raise Exception(f"Transcription process failed: {str(e)}")

    async def _poll_transcript(self, client: httpx.AsyncClient, transcript_id: str, headers: Dict[str, str]) -> Dict[str, Any]:
        """Poll transcript status until it completes or errors"""
        for _ in range(self.max_poll_attempts):
            response = await client.get(
                f"{self.base_url}/transcript/{transcript_id}",
                headers=headers
            )

            if response.status_code != 200:
                raise Exception(f"Polling failed: {response.status_code} - {response.text}")

            result = response.json()
            status = result.get("status")

            if status == "completed":
                return result
            elif status == "error":
                error_msg = result.get("error", "Unknown transcription error")
                raise Exception(f"Transcription failed: {error_msg}")
            elif status in ["queued", "processing"]:
                await asyncio.sleep(self.poll_interval)
            else:
                raise Exception(f"Unknown status: {status}")

        raise Exception("Transcription timeout - process took too long")

    def parse_transcription_result(self, result: Dict[str, Any]) -> TranscriptionResult:
        """Parse AssemblyAI result into our format"""
        return TranscriptionResult.model_validate(result)
