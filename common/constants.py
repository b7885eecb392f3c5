"""
Centralized configuration for the recommendation aggregation engine.
Defines source table paths, sampling windows, and the external ML endpoint.
"""

import os
from datetime import datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent.absolute()
DATA_DIR = Path(os.getenv("RECOMMENDER_DATA_DIR", PROJECT_ROOT / "data"))
LOGS_DIR = Path(os.getenv("RECOMMENDER_LOGS_DIR", PROJECT_ROOT / "logs"))
APP_LOGS_DIR = LOGS_DIR / "app_logs"

date_str = datetime.now().strftime("%m%d%Y")
APP_LOG_FILE = str(APP_LOGS_DIR / f"{date_str}_1.log")

SOURCE_TABLE = {
    "delimiter": ",",
    "min_fields": 6,  # key + 5 items
    "n_items": 5,
}

RECOMMEND = {
    "k": 5,
    "single_row_window": 10,  # SINGLE_RANDOM_ROW samples from the first 10 rows
    "first_field_window": 20,  # MULTIPLE_RANDOM_FIRST_FIELDS samples from the first 20 rows
    "random_seed": int(os.environ["RECOMMENDER_RANDOM_SEED"]) if os.getenv("RECOMMENDER_RANDOM_SEED") else None,
}

EXTERNAL = {
    "name": "Azure ML",
    "endpoint_url": os.getenv("AZURE_ML_ENDPOINT"),  # None -> placeholder provider
    "timeout_seconds": float(os.getenv("AZURE_ML_TIMEOUT", "5.0")),
    "query_param": "id",
}

SERVER = {
    "cors_origins": ["http://localhost:5173", "http://localhost:3000"],
}

PATHS = {
    "collaborative_table": os.getenv("COLLABORATIVE_TABLE_PATH", str(DATA_DIR / "collaborative.csv")),
    "content_table": os.getenv("CONTENT_TABLE_PATH", str(DATA_DIR / "content.csv")),
    "app_log_file": APP_LOG_FILE,
}
