"""NCS sizer: run locally with python main.py or uvicorn main:app --reload."""
from pathlib import Path

from dotenv import load_dotenv

# Load .env before the app reads NCS_* settings
load_dotenv(Path(__file__).resolve().parent / ".env")

from ncsizer.api import app, mount_static  # noqa: E402

# Serve an optional front end from project_root/static
STATIC_DIR = Path(__file__).resolve().parent / "static"
mount_static(app, STATIC_DIR)

if __name__ == "__main__":
    import logging
    import os

    import uvicorn

    logging.basicConfig(level=os.environ.get("NCS_LOG_LEVEL", "INFO"))
    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("main:app", host="0.0.0.0", port=port, reload=True)
