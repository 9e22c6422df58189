import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    ITEMS_PER_PAGE = int(os.getenv("ITEMS_PER_PAGE", "50"))
    MIN_QUERY_DIGITS = int(os.getenv("MIN_QUERY_DIGITS", "10"))  # shorter tokens are not searched

    # Upload name check only; pandas reads the content with openpyxl or xlrd
    ALLOWED_EXTENSIONS = (".xlsx", ".xls")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FILE = os.getenv("MOBILE_LOOKUP_LOG_FILE")
