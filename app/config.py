import os
from dotenv import load_dotenv

# .env values are loaded once, real environment variables win
load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./portal.db")

STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "eng-docs")
ALLOWED_EXTENSIONS = {"pdf", "zip", "doc", "docx"}

PASSWORD_RESET_REDIRECT = os.getenv("PASSWORD_RESET_REDIRECT")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

SESSION_COOKIE = "access_token"
COOKIE_SECURE = os.getenv("COOKIE_SECURE", "false").lower() in ("1", "true", "yes")

SEMESTERS = [1, 2, 3, 4, 5, 6, 7, 8]
RESOURCE_TYPES = ["Notes", "Papers", "Labs", "Books"]
NOTIFICATION_TYPES = ["info", "warning", "success"]
DEFAULT_BRANCHES = ["Computer Science", "Mechanical", "Civil", "Electrical", "Electronics"]

FOLDER_COLORS = [
    "#135bec",  # blue
    "#10b981",  # emerald
    "#f59e0b",  # amber
    "#ef4444",  # red
    "#8b5cf6",  # purple
    "#ec4899",  # pink
    "#06b6d4",  # cyan
    "#6b7280",  # gray
]
DEFAULT_FOLDER_COLOR = FOLDER_COLORS[0]

ADMIN_PAGE_SIZE = 10
NOTIFICATION_FEED_LIMIT = 50
RECENT_UPLOADS_LIMIT = 5
