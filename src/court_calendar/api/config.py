import os
from dotenv import load_dotenv

load_dotenv()

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "..", ".."))
SRC_DIR = os.path.join(PROJECT_ROOT, "src")

MAX_CONTENT_LENGTH = int(os.getenv('MAX_CONTENT_LENGTH', '1048576'))  # 1 MB default
RATE_LIMIT_STORAGE_URI = os.getenv("RATE_LIMIT_STORAGE_URI", "memory://")
EXTRACT_RATE_LIMIT = os.getenv("EXTRACT_RATE_LIMIT", "10/minute")
SENTRY_DSN = os.getenv("SENTRY_DSN", "")
SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.0"))
SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.0"))
APP_ENV = os.getenv("APP_ENV", "production")
APP_VERSION = os.getenv("APP_VERSION", "0.1.0")

# Registry, document store, audit sink
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
DOCUMENT_BUCKET = os.getenv("DOCUMENT_BUCKET", "term-pdfs")
AUDIT_TABLE = os.getenv("AUDIT_TABLE", "pdf_extraction_logs")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "30"))

# AI extraction boundary
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY", "")
OPENAI_API_URL = os.getenv("OPENAI_API_URL", "https://api.openai.com/v1/chat/completions")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o")
OPENAI_MAX_TOKENS = int(os.getenv("OPENAI_MAX_TOKENS", "16000"))
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.1"))
OPENAI_TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "180"))

# Enrichment
DEFAULT_BUILDING = os.getenv("DEFAULT_BUILDING", "111")
ENRICH_BY_DEFAULT = os.getenv("ENRICH_BY_DEFAULT", "0") == "1"
REGISTRY_FETCH_WORKERS = int(os.getenv("REGISTRY_FETCH_WORKERS", "3"))
