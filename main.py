import os
import uuid
import mimetypes
import logging
import httpx
from pathlib import Path
from fastapi import FastAPI, File, Form, UploadFile, HTTPException

from config import Config
from models import Report, ReportRequest
from services.transcription import TranscriptionService
from services.report_builder import ReportBuilder

# Configure logging
logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

app = FastAPI(title="Transcript Report Service", version="1.0.0")

# Initialize services
transcription_service = TranscriptionService()
report_builder = ReportBuilder()

# Create upload directory
os.makedirs(Config.UPLOAD_DIR, exist_ok=True)

VALID_MIME_TYPES = ["audio/wav", "audio/mpeg", "audio/x-wav"]

@app.post("/report", response_model=Report)
async def create_report(request: ReportRequest):
    """
    Builds a report from an already completed transcription.
    """
    request_id = str(uuid.uuid4())[:8]
    logging.info(f"[{request_id}] Building report for transcript {request.transcription.id}")
    return await report_builder.generate_transcription_report(request.transcription, request.question)

@app.post("/transcribe", response_model=Report)
async def transcribe_and_report(file: UploadFile = File(...), question: str = Form(...)):
    """
    Receives an audio file, transcribes it with AssemblyAI and returns its report.
    """
    request_id = str(uuid.uuid4())[:8]
    logging.info(f"[{request_id}] Received request for file: {file.filename}")

    if not file.filename:
        raise HTTPException(status_code=400, detail="No file provided")

    file_extension = Path(file.filename).suffix.lower()
    if file_extension not in Config.ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file format. Allowed: {sorted(Config.ALLOWED_EXTENSIONS)}"
        )

    mime_type, _ = mimetypes.guess_type(file.filename)
    if not mime_type or mime_type not in VALID_MIME_TYPES:
        raise HTTPException(status_code=400, detail="Invalid or unsupported audio format")

    content = await file.read()
    if len(content) == 0:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(content) > Config.MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large")

    file_path = f"{Config.UPLOAD_DIR}/{uuid.uuid4()}{file_extension}"
    try:
        with open(file_path, "wb") as buffer:
            buffer.write(content)

        upload_url = await transcription_service.upload_file(file_path, mime_type)
        result = await transcription_service.transcribe_audio(upload_url)
        transcription = transcription_service.parse_transcription_result(result)

        report = await report_builder.generate_transcription_report(transcription, question)
        logging.info(f"[{request_id}] Finished report for file: {file.filename}")
        return report

    except Exception as e:
        logging.error(f"[{request_id}] Processing error for {file.filename}: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Failed to build report: {str(e)}")
    finally:
        # Clean up uploaded file
        if os.path.exists(file_path):
            os.remove(file_path)

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "message": "Transcript Report Service is running"}

@app.get("/health/assemblyai")
async def assemblyai_health_check():
    """Check AssemblyAI service connectivity"""
    if not Config.ASSEMBLYAI_API_KEY:
        return {"status": "error", "message": "AssemblyAI API key not configured"}

    try:
        headers = {"authorization": Config.ASSEMBLYAI_API_KEY}

        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.get(
                f"{Config.ASSEMBLYAI_BASE_URL}/transcript",
                headers=headers
            )

            if response.status_code == 401:
                return {"status": "error", "message": "Invalid API key"}
            elif response.status_code == 429:
                return {"status": "warning", "message": "Rate limited"}
            elif response.status_code in [200, 404]:
                return {"status": "healthy", "message": "AssemblyAI is reachable"}
            else:
                return {"status": "error", "message": f"Unexpected status: {response.status_code}"}

    except httpx.TimeoutException:
        return {"status": "error", "message": "Connection timeout"}
    except httpx.HTTPError as e:
        return {"status": "error", "message": f"Health check failed: {str(e)}"}

@app.get("/health/languagetool")
async def languagetool_health_check():
    """Check LanguageTool service connectivity"""
    try:
        async with httpx.AsyncClient(timeout=10.0) as client:
            response = await client.post(
                Config.LANGUAGETOOL_URL,
                data={"text": "Hello.", "language": Config.LANGUAGETOOL_LANGUAGE}
            )

            if response.status_code == 200:
                return {"status": "healthy", "message": "LanguageTool is reachable"}
            elif response.status_code == 429:
                return {"status": "warning", "message": "Rate limited"}
            else:
                return {"status": "error", "message": f"Unexpected status: {response.status_code}"}

    except httpx.TimeoutException:
        return {"status": "error", "message": "Connection timeout"}
    except httpx.HTTPError as e:
        return {"status": "error", "message": f"Health check failed: {str(e)}"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=True)
