from pathlib import Path
import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

class Config:
    # Base paths
    BASE_DIR = Path(__file__).resolve().parent

    # API Settings
    API_V1_PREFIX = "/api/v1"
    PROJECT_NAME = "Table to XML Converter"
    VERSION = "1.0.0"
    DEBUG = os.getenv("DEBUG", "False").lower() == "true"
    SHOW_ERROR_DETAILS = os.getenv("SHOW_ERROR_DETAILS", "False").lower() == "true"

    # CORS
    ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "http://localhost:3000").split(",")

    # File Upload
    MAX_UPLOAD_SIZE_MB = int(os.getenv("MAX_UPLOAD_SIZE_MB", "10"))
    ALLOWED_EXTENSIONS = {".xls", ".xlsx", ".csv"}

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", str(BASE_DIR / "logs" / "audit.log"))

    # XML Settings
    RECORD_TAG = "Item"

    # Destination of the XML to table conversion, 0-based (row 1, column 1 is B2)
    TABLE_ORIGIN_ROW = int(os.getenv("TABLE_ORIGIN_ROW", "1"))
    TABLE_ORIGIN_COL = int(os.getenv("TABLE_ORIGIN_COL", "1"))

    @classmethod
    def validate_file_extension(cls, filename: str) -> bool:
        """Validate if the file extension is allowed."""
        return Path(filename).suffix.lower() in cls.ALLOWED_EXTENSIONS

    @classmethod
    def max_upload_bytes(cls) -> int:
        return cls.MAX_UPLOAD_SIZE_MB * 1024 * 1024

# Create singleton instance
config = Config()
