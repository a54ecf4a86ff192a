import os
from dotenv import load_dotenv

load_dotenv()

# Backend API configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
REQUEST_TIMEOUT = float(os.getenv("REQUEST_TIMEOUT", "30"))

# Streamlit configuration
PAGE_TITLE = "Zeo Tourism Admin"
PAGE_ICON = "🏔️"
LAYOUT = "wide"

# List pages
TOURS_PER_PAGE = int(os.getenv("TOURS_PER_PAGE", "20"))
ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "10"))
PAGE_WINDOW_SIZE = 5

# Optimistic updates (listing toggles, drag reorder) are saved after this quiet period
SYNC_DEBOUNCE_SECONDS = float(os.getenv("SYNC_DEBOUNCE_SECONDS", "1.0"))

# Pause between files of a multi-file gallery upload
UPLOAD_DELAY_SECONDS = float(os.getenv("UPLOAD_DELAY_SECONDS", "0.5"))

# Upload folders under /uploads
UPLOAD_FOLDERS = {
    "tours": "tours",
    "destinations": "destinations",
    "sliders": "sliders",
    "team": "team",
    "posts": "blog",
    "gallery": "kailash-gallery",
}
