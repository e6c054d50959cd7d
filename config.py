from dotenv import load_dotenv
import os

load_dotenv()

# Configuration class for the application
class Config:
    # Transcription is optional; /report works without an AssemblyAI key
    ASSEMBLYAI_API_KEY = os.getenv("ASSEMBLYAI_API_KEY")
    ASSEMBLYAI_BASE_URL = os.getenv("ASSEMBLYAI_BASE_URL", "https://api.assemblyai.com/v2")

    # Network configuration
    UPLOAD_TIMEOUT = 150
    POLL_INTERVAL = 1  # seconds between transcript status checks
    MAX_POLL_ATTEMPTS = 60

    # File size limits
    MAX_FILE_SIZE = 25 * 1024 * 1024  # 25MB (AssemblyAI limit)

    # Configuration settings
    UPLOAD_DIR = "uploads"
    ALLOWED_EXTENSIONS = {".wav", ".mp3"}

    # LanguageTool grammar service
    LANGUAGETOOL_URL = os.getenv("LANGUAGETOOL_URL", "https://api.languagetoolplus.com/v2/check")
    LANGUAGETOOL_LANGUAGE = "en"
    GRAMMAR_CHECK_TIMEOUT = float(os.getenv("GRAMMAR_CHECK_TIMEOUT", "30"))
    SPELLING_CATEGORY_ID = "TYPOS"

    # Report settings
    FILLER_WORDS = frozenset({
        "um",
        "uh",
        "like",
        "basically",
        "actually",
        "literally",
        "so",
        "well",
        "yeah",
        "right",
        "ok",
        "hmm",
    })
    NO_ISSUES_MESSAGE = "No Grammar/Syntax Issues Found."
